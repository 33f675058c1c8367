"""
Translation of application exceptions into HTTP errors.
"""
from fastapi import HTTPException, status

from hospital.core.exceptions import (
    BaseAppException,
    ValidationError,
    NotFoundError,
    ConflictError,
    InternalError,
)

STATUS_BY_EXCEPTION = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (InternalError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def to_http_exception(exc: BaseAppException) -> HTTPException:
    """
    Builds the HTTPException for an application exception.
    
    Args:
        exc: Raised exception
    
    Returns:
        HTTPException carrying the exception message as detail
    """
    for exc_type, status_code in STATUS_BY_EXCEPTION:
        if isinstance(exc, exc_type):
            return HTTPException(status_code=status_code, detail=exc.message)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message)
