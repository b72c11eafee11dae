"""Domain error taxonomy raised by the service layer.

Services never build HTTP responses; they raise one of these and the
application-level handler in ``tunein_stage.main`` maps it to a status code.
"""

from __future__ import annotations


class TuneInError(Exception):
    """Base class for all domain errors."""

    status_code: int = 400

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class ValidationError(TuneInError):
    """Malformed input such as a bad username or a vote value outside {+1, -1}."""

    status_code = 422


class AuthorizationError(TuneInError):
    """The actor lacks the capability for the requested mutation."""

    status_code = 403


class ConflictError(TuneInError):
    """A uniqueness rule would be violated (duplicate vote, taken username)."""

    status_code = 409


class NotFoundError(TuneInError):
    """A referenced post, club, profile or user does not exist."""

    status_code = 404


__all__ = [
    "TuneInError",
    "ValidationError",
    "AuthorizationError",
    "ConflictError",
    "NotFoundError",
]
