from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from shared.core.exceptions import AppException
from shared.core.schemas import JsonOutResult
from shared.utils.app_status_code import AppStatusCode
from shared.utils.logger import get_logger

logger = get_logger(__name__)

ENVELOPE_KEYS = {"status", "status_code", "message"}


def setup_exception_handlers(app: FastAPI):

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        # error_response() already built the envelope
        if isinstance(exc.detail, dict) and ENVELOPE_KEYS.issubset(exc.detail.keys()):
            return JSONResponse(content=exc.detail, status_code=exc.status_code)

        wrapped = JsonOutResult(
            data=None,
            status="Failure",
            status_code=str(exc.status_code or AppStatusCode.OPERATION_FAILED),
            message=str(exc.detail)
        ).model_dump()
        return JSONResponse(content=wrapped, status_code=exc.status_code or 400)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        wrapped = JsonOutResult(
            data=None,
            status="Failure",
            status_code=AppStatusCode.INVALID_INPUT,
            message=str(exc)
        ).model_dump()
        return JSONResponse(content=wrapped, status_code=422)

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException):
        logger.error("%s %s failed: %s", request.method,
                     request.url.path, exc.message)
        wrapped = JsonOutResult(
            data=exc.data,
            status="Failure",
            status_code=exc.status_code,
            message=exc.message
        ).model_dump()
        return JSONResponse(content=wrapped, status_code=exc.http_status)

    # Catch all unhandled exceptions
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s",
                         request.method, request.url.path)

        wrapped = JsonOutResult(
            data=None,
            status="Failure",
            status_code=AppStatusCode.OPERATION_FAILED,
            message="Internal server error"
        ).model_dump()
        return JSONResponse(content=wrapped, status_code=500)
