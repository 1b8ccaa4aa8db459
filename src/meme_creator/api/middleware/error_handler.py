"""Exception handlers translating pipeline errors into JSON responses."""

from typing import Any, Dict

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from ...exceptions import MemeCreatorError, NotFoundError, ValidationError
from ...utils.logging import get_logger

logger = get_logger(__name__)

GENERIC_ERROR = "something went wrong ;("


def error_body(message: str, **extra: Any) -> Dict[str, Any]:
    """JSON body for an error response."""
    return {"error": message, **extra}


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    logger.info("not_found", path=request.url.path, error=exc.message)
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=error_body("not found"))


async def validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=error_body(exc.message))


async def pipeline_error_handler(request: Request, exc: MemeCreatorError) -> JSONResponse:
    logger.error("request_failed", path=request.url.path, **exc.to_dict())
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=error_body(GENERIC_ERROR)
    )


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unexpected_error", path=request.url.path, error=str(exc), exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=error_body(GENERIC_ERROR)
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the handlers, most specific first."""
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(ValidationError, validation_handler)
    app.add_exception_handler(MemeCreatorError, pipeline_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
