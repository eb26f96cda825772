"""Translation of service-layer errors into HTTP responses."""

from __future__ import annotations

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError

from rentdesk.services.delivery_service import InvalidTransitionError
from rentdesk.services.exceptions import NotFoundError, ProductUnavailableError


def to_http_error(exc: Exception) -> HTTPException:
    """Map a service exception onto the matching status code."""
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, (InvalidTransitionError, ProductUnavailableError)):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    if isinstance(exc, IntegrityError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Record conflicts with existing data",
        )
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
