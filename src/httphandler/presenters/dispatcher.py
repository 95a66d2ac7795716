"""
=============================================================================
METHOD DISPATCHER
=============================================================================

Picks a presenter by HTTP method. There is deliberately no path matching
here; routing by URL is the job of whatever mounts the handler.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                          Dispatcher                                 │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   request.method ──► {"GET": list_notes, "POST": create_note}       │
    │                           │                                          │
    │               found ◄─────┴─────► not found                          │
    │                 │                     │                              │
    │        presenter.present()   method_not_supported.present()         │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Lookup is an exact, case-sensitive string match: "get" does not match
"GET". An unknown method is a normal outcome, not an error; the
Dispatcher never builds the 405 itself. Whatever is plugged into
``method_not_supported`` decides (a FixedPresenter, a function, even
another ErrHandler).

=============================================================================
"""

from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from ..errors import ConfigurationError
from ..http.request import HTTPRequest
from ..http.response import Response
from .base import Presenter, PresenterLike, as_presenter


class Dispatcher(Presenter):
    """
    A Presenter that delegates to another Presenter based on request.method.

    Usage:
        Dispatcher(
            {"GET": list_notes, "POST": create_note},
            method_not_supported=FixedPresenter(
                method_not_allowed(["GET", "POST"])
            ),
        )

    The method mapping is copied at construction and exposed read-only,
    so the dispatcher can be shared freely between threads.
    """

    def __init__(
        self,
        method_to_presenter: Mapping[str, PresenterLike],
        method_not_supported: Optional[PresenterLike] = None,
    ):
        self._method_to_presenter: Mapping[str, Presenter] = MappingProxyType({
            method: as_presenter(method_presenter)
            for method, method_presenter in method_to_presenter.items()
        })
        self._method_not_supported = as_presenter(method_not_supported)

    @property
    def method_to_presenter(self) -> Mapping[str, Presenter]:
        return self._method_to_presenter

    @property
    def method_not_supported(self) -> Optional[Presenter]:
        return self._method_not_supported

    @property
    def allowed_methods(self) -> Tuple[str, ...]:
        """Configured methods in insertion order (e.g. for an Allow header)."""
        return tuple(self._method_to_presenter)

    def present(self, request: HTTPRequest) -> Response:
        method_presenter = self._method_to_presenter.get(request.method)
        if method_presenter is not None:
            return method_presenter.present(request)

        if self._method_not_supported is None:
            raise ConfigurationError(
                f"Dispatcher has no presenter for {request.method!r} "
                f"and no method_not_supported presenter"
            )
        return self._method_not_supported.present(request)

    def __repr__(self) -> str:
        return f"Dispatcher({list(self._method_to_presenter)})"
