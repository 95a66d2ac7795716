"""
=============================================================================
PRESENTERS
=============================================================================

Presenters compute responses; they never write them. This package holds
the two capabilities and the generic presenters that compose them:

Presenter / ErrPresenter:
    The capabilities. ``present(request) -> Response`` and
    ``err_present(request) -> (Response, error)``.

PresenterFunc / ErrPresenterFunc / @presenter / @err_presenter:
    Use plain functions as presenters.

FixedPresenter:
    Always the same response.

Dispatcher:
    Chooses a presenter by request method.

ErrHandler:
    Turns an ErrPresenter into a Presenter, reporting errors to a callback.

DefaultResp:
    Falls back to a default presenter when the status is left unset.

=============================================================================
"""

from .base import (
    ErrorCallback,
    ErrPresenter,
    ErrPresenterFunc,
    FixedPresenter,
    Presenter,
    PresenterFunc,
    PresentResult,
    as_err_presenter,
    as_presenter,
    err_presenter,
    presenter,
)
from .default_resp import DefaultResp
from .dispatcher import Dispatcher
from .err_handler import ErrHandler, log_error, log_errors

__all__ = [
    # Capabilities
    "Presenter",
    "ErrPresenter",
    "PresentResult",
    "ErrorCallback",

    # Function adapters
    "PresenterFunc",
    "ErrPresenterFunc",
    "FixedPresenter",
    "presenter",
    "err_presenter",
    "as_presenter",
    "as_err_presenter",

    # Composites
    "Dispatcher",
    "ErrHandler",
    "DefaultResp",

    # Error callbacks
    "log_error",
    "log_errors",
]
