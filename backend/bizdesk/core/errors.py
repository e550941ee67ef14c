"""Error kinds shared by auth, entity services and forms."""
from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError


class AppError(Exception):
    """Base error; str(error) is the user-facing message."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(AppError):
    pass


class ConflictError(AppError):
    pass


class InvalidReferenceError(AppError):
    pass


class InvalidValueError(AppError):
    """A value outside its enumeration, e.g. an unknown status or role."""


class BackendFailure(AppError):
    """Opaque passthrough of a database error."""

    @classmethod
    def from_exc(cls, exc: SQLAlchemyError) -> "BackendFailure":
        return cls(backend_message(exc))


# Auth errors are returned as values, never raised to the caller.

class InvalidCredentials(NotFoundError):
    def __init__(self, message: str = "Invalid email or password") -> None:
        super().__init__(message)


class AccountInactive(AppError):
    def __init__(self, message: str = "Account is inactive. Please contact administrator.") -> None:
        super().__init__(message)


class EmailAlreadyExists(ConflictError):
    def __init__(self, message: str = "An account with this email already exists") -> None:
        super().__init__(message)


class InvalidRole(InvalidReferenceError):
    def __init__(self, message: str = "Invalid role selected") -> None:
        super().__init__(message)


def backend_message(exc: BaseException) -> str:
    """Driver message without SQLAlchemy's statement/parameter trailer."""
    if isinstance(exc, AppError):
        return exc.message
    orig = getattr(exc, "orig", None)
    if orig is not None:
        return str(orig).strip()
    return str(exc).strip()
