"""Error taxonomy of the Uploads API and the handlers that render it as JSON."""

import logging
from dataclasses import dataclass

import pydantic
from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class UploadsApiError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(UploadsApiError):
    """The target artifact is absent."""

    status_code = status.HTTP_404_NOT_FOUND


class StorageUnavailable(UploadsApiError):
    """The upload directory cannot be read."""


class InternalError(UploadsApiError):
    """Unexpected filesystem or upload engine failure."""


@dataclass(frozen=True)
class PartialCleanupWarning:
    """A bookkeeping artifact that could not be removed after its primary file was deleted."""

    artifact: str
    error: str


async def handle_uploads_api_errors(request: Request, exc: UploadsApiError) -> JSONResponse:
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message},
    )


async def handle_pydantic_validation_errors(request: Request, exc: pydantic.ValidationError) -> JSONResponse:
    errors = exc.errors()
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "Validation error",
            "detail": [
                {
                    "msg": error["msg"],
                    "loc": list(error.get("loc", [])),
                }
                for error in errors
            ],
        },
    )


async def handle_broad_exceptions(request: Request, call_next):
    """Handle any exception that propagates out of a route."""
    try:
        return await call_next(request)
    except Exception as err:
        logger.exception(err)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(err)},
        )
