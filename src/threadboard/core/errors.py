"""Domain error taxonomy.

Services raise these exceptions; the API layer renders each one as a
discriminated error body keyed by :attr:`ThreadboardError.kind`.
"""

from __future__ import annotations


class ThreadboardError(Exception):
    """Base class for every error a domain operation can report."""

    kind: str = "Error"
    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        """Return the error as a JSON-serialisable mapping."""
        return {"kind": self.kind, "message": self.message}


class ValidationError(ThreadboardError):
    """Missing or malformed input (title, content, password length...)."""

    kind = "ValidationError"
    status_code = 422


class NotFound(ThreadboardError):
    """A referenced user, thread, comment or parent comment does not exist."""

    kind = "NotFound"
    status_code = 404


class Conflict(ThreadboardError):
    """Duplicate email, username or follow edge."""

    kind = "Conflict"
    status_code = 409


class InvalidCredentials(ThreadboardError):
    """Login or password confirmation mismatch."""

    kind = "InvalidCredentials"
    status_code = 401


class Forbidden(ThreadboardError):
    """The acting user is not allowed to perform the operation."""

    kind = "Forbidden"
    status_code = 403


class SelfActionNotAllowed(Forbidden):
    """An admin action that targets the acting user themselves."""

    kind = "SelfActionNotAllowed"


__all__ = [
    "ThreadboardError",
    "ValidationError",
    "NotFound",
    "Conflict",
    "InvalidCredentials",
    "Forbidden",
    "SelfActionNotAllowed",
]
