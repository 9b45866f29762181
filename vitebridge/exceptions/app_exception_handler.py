import logging

from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from fastapi import HTTPException

logger = logging.getLogger(__name__)


def general_exception_handler(_request: Request, exception: Exception) -> Response:
    logger.exception("Unhandled exception: %s", exception)
    return JSONResponse("Internal Server Error", status_code=500)


def http_exception_handler(_request: Request, exception: HTTPException) -> Response:
    return Response(status_code=exception.status_code, content=exception.detail)
