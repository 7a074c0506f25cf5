from __future__ import annotations

from fastapi import HTTPException, status

from kidsteps.core.exceptions import (
    AuthorizationError,
    KidStepsError,
    NotFoundError,
    QueryConfigurationError,
    TransientIOError,
    ValidationError,
)


def to_http_exception(exc: KidStepsError) -> HTTPException:
    """Map a domain error to the HTTP error shown to the client."""
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, AuthorizationError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc))
    if isinstance(exc, QueryConfigurationError):
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"message": exc.message, "remediation": exc.remediation},
        )
    if isinstance(exc, TransientIOError):
        return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))
