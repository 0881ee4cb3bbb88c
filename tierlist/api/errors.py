"""Translation of failed results into HTTP errors."""

import logging
from typing import TypeVar

from fastapi import HTTPException, status

from tierlist.config import get_settings
from tierlist.domain.result import Error, ErrorType, Result

logger = logging.getLogger(__name__)

settings = get_settings()

T = TypeVar("T")

STATUS_CODES = {
    ErrorType.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorType.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorType.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorType.SAVE_DATA: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorType.UNEXPECTED: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def to_http_exception(error: Error) -> HTTPException:
    """Build the HTTPException for a failed operation."""
    status_code = STATUS_CODES.get(error.type, status.HTTP_500_INTERNAL_SERVER_ERROR)
    detail = error.message
    if error.type.is_server_error():
        logger.error(f"{error.code}: {error.message}")
        if settings.is_production:
            detail = "An unexpected error occurred. Please try again later."

    headers = None
    if error.type == ErrorType.UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return HTTPException(status_code=status_code, detail=detail, headers=headers)


def unwrap(result: Result[T]) -> T:
    """Return the value of a successful result or raise its HTTP error."""
    if result.is_failure:
        raise to_http_exception(result.error)
    return result.value
