"""
Application error handling.

Maps the NeoflixError hierarchy onto HTTP status codes so that route
handlers can let typed failures propagate unchanged.
"""

import logging
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from shared.exceptions import (
    NeoflixError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    ExternalServiceError,
)

logger = logging.getLogger(__name__)

# Checked in order; the first matching base class wins
STATUS_CODES: list[tuple[type[NeoflixError], int]] = [
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (AuthorizationError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (ValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (ExternalServiceError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def status_code_for(error: NeoflixError) -> int:
    """HTTP status code for an application error."""
    for error_type, code in STATUS_CODES:
        if isinstance(error, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def neoflix_error_handler(request: Request, exc: NeoflixError) -> JSONResponse:
    status_code = status_code_for(exc)

    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.code}")
    else:
        logger.debug(f"{request.method} {request.url.path} -> {status_code} {exc.code}")

    headers = None
    if status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}

    return JSONResponse(status_code=status_code, content=exc.to_dict(), headers=headers)


def register_error_handlers(app: FastAPI) -> None:
    """Install the application error handler on ``app``."""
    app.add_exception_handler(NeoflixError, neoflix_error_handler)
