from starlette.middleware.base import BaseHTTPMiddleware
from fastapi.responses import JSONResponse
from fastapi import Request
from shared.core.schemas import JsonOutResult
from shared.utils.app_status_code import AppStatusCode
from typing import Callable
import json


class JsonResponseMiddleware(BaseHTTPMiddleware):
    """Wraps successful JSON bodies into the {data, status, status_code, message} envelope."""

    async def dispatch(self, request: Request, call_next: Callable):
        # Skip docs/openapi endpoints
        if request.url.path.startswith(("/openapi", "/docs", "/redoc")):
            return await call_next(request)

        response = await call_next(request)

        # Failures are shaped by the exception handlers
        if not (200 <= response.status_code < 400):
            return response
        if "application/json" not in response.headers.get("content-type", ""):
            return response

        body_bytes = b""
        async for chunk in response.body_iterator:
            body_bytes += chunk

        try:
            data = json.loads(body_bytes.decode("utf-8"))
        except ValueError:
            data = None

        headers = {k: v for k, v in response.headers.items()
                   if k.lower() != "content-length"}

        # Skip wrapping if already wrapped
        if isinstance(data, dict) and {"status", "status_code", "message"}.issubset(data.keys()):
            return JSONResponse(content=data, status_code=response.status_code, headers=headers)

        wrapped = JsonOutResult(
            data=data,
            status="Success",
            status_code=AppStatusCode.DATA_RETRIEVED_SUCCESSFULLY,
            message="Data retrieved successfully"
        ).model_dump()

        return JSONResponse(
            content=wrapped,
            status_code=response.status_code,
            headers=headers,
        )
