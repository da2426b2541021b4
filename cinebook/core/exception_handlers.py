import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from cinebook.core.exceptions import CineBookError, FetchFailure

logger = logging.getLogger(__name__)


async def cinebook_error_handler(request: Request, exc: CineBookError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)

    content = {"error": exc.error, "message": exc.message}
    if isinstance(exc, FetchFailure):
        content["retryable"] = exc.retryable
    return JSONResponse(status_code=exc.status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CineBookError, cinebook_error_handler)
