"""
=============================================================================
DEFAULT RESPONSE
=============================================================================

Lets a presenter "opt out" of answering by leaving the status unset (0),
and has a second presenter answer instead.

The main use is a generic "unexpected error" response for a whole group
of endpoints: every leaf that fails without choosing a status ends up
with the same 500 body, written in one place.

    primary.present(request)
        │
        ├── status_code != 0 ──► returned unchanged
        │
        └── status_code == 0 ──► default_presenter.present(request)

Only the status is inspected. Headers and body of the primary response
play no part in the decision.

=============================================================================
"""

from typing import Optional

from ..errors import ConfigurationError
from ..http.request import HTTPRequest
from ..http.response import Response, STATUS_UNSET
from .base import Presenter, PresenterLike, as_presenter


class DefaultResp(Presenter):
    """
    Presents the primary response, or the default one if its status is unset.

    Usage:
        DefaultResp(
            dispatcher,
            default_presenter=FixedPresenter(internal_error("unexpected error")),
        )
    """

    def __init__(
        self,
        presenter: PresenterLike,
        default_presenter: Optional[PresenterLike] = None,
    ):
        self._presenter = as_presenter(presenter)
        self._default_presenter = as_presenter(default_presenter)

    @property
    def presenter(self) -> Presenter:
        return self._presenter

    @property
    def default_presenter(self) -> Optional[Presenter]:
        return self._default_presenter

    def present(self, request: HTTPRequest) -> Response:
        response = self._presenter.present(request)
        if response.status_code != STATUS_UNSET:
            return response

        if self._default_presenter is None:
            raise ConfigurationError(
                f"{self._presenter.name} left the status unset and DefaultResp "
                f"has no default_presenter"
            )
        return self._default_presenter.present(request)

    def __repr__(self) -> str:
        return f"DefaultResp({self._presenter.name})"
