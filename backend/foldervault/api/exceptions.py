"""
Translation of business exceptions to HTTP exceptions.
Keeps business logic clean of HTTP concerns.
"""
from fastapi import HTTPException, status

from ..domain.exceptions import (
    ConcurrencyConflict,
    DeletionFailed,
    Forbidden,
    InvalidFolder,
    InvalidParent,
    NotFound,
    ValidationFailed,
)

_STATUS_BY_EXCEPTION = (
    (NotFound, status.HTTP_404_NOT_FOUND),
    (Forbidden, status.HTTP_403_FORBIDDEN),
    (InvalidParent, status.HTTP_400_BAD_REQUEST),
    (InvalidFolder, status.HTTP_400_BAD_REQUEST),
    (ValidationFailed, status.HTTP_400_BAD_REQUEST),
    (ConcurrencyConflict, status.HTTP_409_CONFLICT),
    (DeletionFailed, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def handle_business_exception(e: Exception) -> HTTPException:
    """
    Convert business exceptions to HTTP exceptions.
    Anything unrecognised becomes a 500.
    """
    for exception_type, status_code in _STATUS_BY_EXCEPTION:
        if isinstance(e, exception_type):
            return HTTPException(status_code=status_code, detail=str(e))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
