"""
=============================================================================
HTTP HEADER MULTI-MAP
=============================================================================

HTTP allows the same header to appear more than once in a message:

    Set-Cookie: session=abc123
    Set-Cookie: theme=dark
    Vary: Accept-Encoding
    Vary: Origin

A plain ``Dict[str, str]`` cannot represent that without either
overwriting one value or gluing them together with commas (which breaks
headers like Set-Cookie). Headers stores a LIST of values per name.

=============================================================================
CANONICAL HEADER NAMES
=============================================================================

Header names are case-insensitive (RFC 7230 section 3.2). Rather than
lowercasing everything, we store the conventional "canonical" spelling:

    ┌──────────────────────────┬──────────────────────────┐
    │  Name as given           │  Stored as               │
    ├──────────────────────────┼──────────────────────────┤
    │  content-type            │  Content-Type            │
    │  CONTENT-LENGTH          │  Content-Length          │
    │  multiple-values         │  Multiple-Values         │
    │  x-request-id            │  X-Request-Id            │
    │  bad header              │  bad header  (untouched) │
    └──────────────────────────┴──────────────────────────┘

Names containing characters outside the HTTP token set are left exactly
as given, so nothing is silently rewritten into a different header.

=============================================================================
"""

from collections.abc import MutableMapping
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union
import string


# RFC 7230 "tchar": characters allowed in a header field name
_TOKEN_CHARS = frozenset(string.ascii_letters + string.digits + "!#$%&'*+-.^_`|~")

HeaderValues = Union[str, Sequence[str]]
HeaderSource = Union[Mapping[str, HeaderValues], Iterable[Tuple[str, str]]]


def canonical_header_key(name: str) -> str:
    """
    Return the canonical form of a header name.

    The first letter and every letter following a hyphen are upper-cased;
    the rest are lower-cased. Invalid names are returned unchanged.
    """
    if not name or any(char not in _TOKEN_CHARS for char in name):
        return name
    return "-".join(part[:1].upper() + part[1:].lower() for part in name.split("-"))


def _as_value_list(values: HeaderValues) -> List[str]:
    # A lone string is one value, not a sequence of characters
    if isinstance(values, str):
        return [values]
    return [str(value) for value in values]


class Headers(MutableMapping):
    """
    Ordered, case-insensitive multi-map of header name to values.

    Mapping access works on whole value lists:

        headers = Headers()
        headers.add("x-multi", "a")
        headers.add("X-MULTI", "b")

        headers["X-Multi"]            # ["a", "b"]
        headers.first("x-multi")      # "a"
        list(headers.items())         # [("X-Multi", ["a", "b"])]

    Lists handed out by ``headers[name]`` and ``get_all`` are copies;
    use ``add``/``set``/``del`` to change the headers.
    """

    def __init__(self, initial: Optional[HeaderSource] = None):
        self._values: Dict[str, List[str]] = {}
        if initial is not None:
            self.extend(initial)

    # =========================================================================
    # MAPPING PROTOCOL
    # =========================================================================

    def __getitem__(self, name: str) -> List[str]:
        return list(self._values[canonical_header_key(name)])

    def __setitem__(self, name: str, values: HeaderValues) -> None:
        self._values[canonical_header_key(name)] = _as_value_list(values)

    def __delitem__(self, name: str) -> None:
        del self._values[canonical_header_key(name)]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and canonical_header_key(name) in self._values

    def __repr__(self) -> str:
        return f"Headers({self._values!r})"

    # =========================================================================
    # MULTI-VALUE OPERATIONS
    # =========================================================================

    def add(self, name: str, value: str) -> "Headers":
        """Append a value, keeping any values already present."""
        self._values.setdefault(canonical_header_key(name), []).append(value)
        return self

    def set(self, name: str, value: str) -> "Headers":
        """Replace all values of a header with a single value."""
        self._values[canonical_header_key(name)] = [value]
        return self

    def first(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Return the first value of a header, or ``default``."""
        values = self._values.get(canonical_header_key(name))
        return values[0] if values else default

    def get_all(self, name: str) -> List[str]:
        """Return every value of a header (empty list if absent)."""
        return list(self._values.get(canonical_header_key(name), []))

    def extend(self, other: HeaderSource) -> "Headers":
        """
        Append all values from a mapping or an iterable of (name, value) pairs.

        Mapping values may be a single string or a sequence of strings.
        """
        if isinstance(other, Mapping):
            for name, values in other.items():
                for value in _as_value_list(values):
                    self.add(name, value)
        else:
            for name, value in other:
                self.add(name, value)
        return self

    def copy(self) -> "Headers":
        return Headers(self._values)

    def to_dict(self) -> Dict[str, List[str]]:
        return {name: list(values) for name, values in self._values.items()}
