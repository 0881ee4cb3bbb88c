"""Success/failure results returned by domain and service operations."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorType(str, Enum):
    """Failure categories, each mapped to one HTTP status by the API layer."""

    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    UNAUTHORIZED = "unauthorized"
    SAVE_DATA = "save_data"
    UNEXPECTED = "unexpected"

    def is_server_error(self) -> bool:
        """Check if this failure is the server's fault rather than the caller's."""
        return self in (ErrorType.SAVE_DATA, ErrorType.UNEXPECTED)


@dataclass(frozen=True)
class Error:
    """A failure with a stable code and a human-readable message."""

    code: str
    message: str
    type: ErrorType = ErrorType.VALIDATION


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of an operation: either a value or an error, never both."""

    value: T | None = None
    error: Error | None = None

    @classmethod
    def success(cls, value: T | None = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: Error) -> "Result[T]":
        return cls(error=error)

    @property
    def is_success(self) -> bool:
        return self.error is None

    @property
    def is_failure(self) -> bool:
        return self.error is not None


def not_found(message: str) -> Error:
    return Error("NotFound", message, ErrorType.NOT_FOUND)


def validation(message: str, code: str = "Validation") -> Error:
    return Error(code, message, ErrorType.VALIDATION)


def unauthorized(message: str, code: str = "Auth.InvalidCredentials") -> Error:
    return Error(code, message, ErrorType.UNAUTHORIZED)


def save_data(message: str) -> Error:
    return Error("SaveDataError", message, ErrorType.SAVE_DATA)


def unexpected(message: str) -> Error:
    return Error("UnexpectedError", message, ErrorType.UNEXPECTED)
