"""
=============================================================================
PRESENTER INTERFACES
=============================================================================

A Presenter is the functional counterpart of an HTTP handler. Instead of
WRITING a response, it RETURNS one:

    Handler (does I/O):     serve_http(request, response_writer) -> None
    Presenter (pure):       present(request)                  -> Response

Returning data instead of writing it makes handlers simple to test and
lets small, generic presenters wrap the business-logic ones:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                      A TYPICAL HANDLER TREE                         │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   Writer                         ◄── the only place with I/O        │
    │     └── DefaultResp              ◄── generic 500 if status unset    │
    │           └── Dispatcher         ◄── pick by request.method         │
    │                 ├── GET  ─► ErrHandler ─► list_notes   (ErrPresenter)│
    │                 ├── POST ─► ErrHandler ─► create_note  (ErrPresenter)│
    │                 └── other ─► 405 presenter                          │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
TWO CAPABILITIES
=============================================================================

Presenter
    present(request) -> Response
    Cannot fail. Anything worth reporting must be encoded in the Response.

ErrPresenter
    err_present(request) -> (Response, Optional[Exception])
    For work that can genuinely fail (databases, downstream calls). The
    error is RETURNED, not raised, and an ErrHandler turns an ErrPresenter
    into a Presenter. The Response next to an error still counts: a leaf
    may return a specific 4xx together with the error that explains it.

=============================================================================
FUNCTIONS AS PRESENTERS
=============================================================================

Defining a class for every trivial presenter is noise, so plain functions
can be used directly:

    @presenter
    def hello(request):
        return Response(body=b"hello")

    @err_presenter
    def load_note(request):
        try:
            return ok(store.get(request.get_query("id"))), None
        except KeyError as exc:
            return not_found("no such note"), exc

Every composite (Dispatcher, DefaultResp, ErrHandler, Writer) also
accepts a bare callable wherever it expects a presenter.

=============================================================================
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional, Tuple, Union

from ..http.request import HTTPRequest
from ..http.response import Response


# =============================================================================
# TYPE ALIASES
# =============================================================================

# What an ErrPresenter returns: the response plus an optional error
PresentResult = Tuple[Response, Optional[Exception]]

# Callbacks that observe failures (logging, metrics, ...)
ErrorCallback = Callable[[HTTPRequest, Exception], None]


class Presenter(ABC):
    """
    Produces the Response for a request without performing I/O.

    =========================================================================
    THE PRESENTER CONTRACT
    =========================================================================

    - Pure with respect to the request: same request, same Response
    - Never raises: failures are expressed as a Response (e.g. a 500)
    - Holds no per-request state, so one instance can serve many
      requests concurrently

    Presenters are also callable, so ``p(request)`` is ``p.present(request)``.

    =========================================================================
    """

    @abstractmethod
    def present(self, request: HTTPRequest) -> Response:
        """Return the response for ``request``."""

    def __call__(self, request: HTTPRequest) -> Response:
        return self.present(request)

    @property
    def name(self) -> str:
        """Name used in log messages and reprs."""
        return self.__class__.__name__


class ErrPresenter(ABC):
    """
    Produces a Response together with an optional error.

    Most "real world" leaf handlers implement this. Wrap one in an
    ErrHandler to use it wherever a Presenter is expected.
    """

    @abstractmethod
    def err_present(self, request: HTTPRequest) -> PresentResult:
        """Return ``(response, error)``; ``error`` is None on success."""

    @property
    def name(self) -> str:
        return self.__class__.__name__


# =============================================================================
# FUNCTION ADAPTERS
# =============================================================================

class PresenterFunc(Presenter):
    """
    Wraps an ordinary function as a Presenter.

        PresenterFunc(lambda request: Response(status_code=204))
    """

    def __init__(self, func: Callable[[HTTPRequest], Response], name: Optional[str] = None):
        self._func = func
        self._name = name or getattr(func, "__name__", type(func).__name__)

    def present(self, request: HTTPRequest) -> Response:
        return self._func(request)

    @property
    def name(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"PresenterFunc({self._name})"


class ErrPresenterFunc(ErrPresenter):
    """Wraps an ordinary function returning ``(response, error)`` as an ErrPresenter."""

    def __init__(self, func: Callable[[HTTPRequest], PresentResult], name: Optional[str] = None):
        self._func = func
        self._name = name or getattr(func, "__name__", type(func).__name__)

    def err_present(self, request: HTTPRequest) -> PresentResult:
        return self._func(request)

    @property
    def name(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"ErrPresenterFunc({self._name})"


class FixedPresenter(Presenter):
    """
    Always presents the same response.

    Handy for the "method not supported" slot of a Dispatcher or the
    default of a DefaultResp:

        FixedPresenter(Response(status_code=405, body=b"method not allowed"))
    """

    def __init__(self, response: Response):
        self._response = response

    @property
    def response(self) -> Response:
        return self._response

    def present(self, request: HTTPRequest) -> Response:
        return self._response

    def __repr__(self) -> str:
        return f"FixedPresenter({self._response!r})"


def presenter(func: Callable[[HTTPRequest], Response]) -> PresenterFunc:
    """Decorator turning a function into a Presenter."""
    return PresenterFunc(func)


def err_presenter(func: Callable[[HTTPRequest], PresentResult]) -> ErrPresenterFunc:
    """Decorator turning a function into an ErrPresenter."""
    return ErrPresenterFunc(func)


# =============================================================================
# COERCION
# =============================================================================
#
# Composites call these once, at construction time, so the request path
# only ever deals with real Presenter / ErrPresenter objects.
#
# =============================================================================

PresenterLike = Union[Presenter, Callable[[HTTPRequest], Response]]
ErrPresenterLike = Union[ErrPresenter, Callable[[HTTPRequest], PresentResult]]


def as_presenter(obj: Optional[PresenterLike]) -> Optional[Presenter]:
    """
    Return ``obj`` as a Presenter, wrapping plain callables.

    ``None`` passes through so optional slots can stay empty.

    Raises:
        TypeError: If ``obj`` is an ErrPresenter (wrap it in an ErrHandler)
                   or is not callable at all.
    """
    if obj is None or isinstance(obj, Presenter):
        return obj
    if isinstance(obj, ErrPresenter):
        raise TypeError(
            f"{obj.name} is an ErrPresenter; wrap it in an ErrHandler to use it as a Presenter"
        )
    if callable(obj):
        return PresenterFunc(obj)
    raise TypeError(f"expected a Presenter or a callable, got {type(obj).__name__}")


def as_err_presenter(obj: ErrPresenterLike) -> ErrPresenter:
    """
    Return ``obj`` as an ErrPresenter, wrapping plain callables.

    Raises:
        TypeError: If ``obj`` is a Presenter (it returns a bare Response,
                   not a pair) or is not callable at all.
    """
    if isinstance(obj, ErrPresenter):
        return obj
    if isinstance(obj, Presenter):
        raise TypeError(f"{obj.name} is a Presenter, not an ErrPresenter")
    if callable(obj):
        return ErrPresenterFunc(obj)
    raise TypeError(f"expected an ErrPresenter or a callable, got {type(obj).__name__}")
