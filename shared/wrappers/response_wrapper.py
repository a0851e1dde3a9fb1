from starlette.middleware.base import BaseHTTPMiddleware
from fastapi.responses import JSONResponse
from fastapi import Request
from shared.core.schemas import JsonOutResult
from typing import Callable
import json

SKIPPED_HEADERS = {b"content-length", b"content-type"}
ENVELOPE_KEYS = {"status", "status_code", "message"}


def rewrap(response, content) -> JSONResponse:
    wrapped = JSONResponse(content=content, status_code=response.status_code)
    # keep set-cookie and friends, raw so repeated headers survive
    for key, value in response.headers.raw:
        if key.lower() not in SKIPPED_HEADERS:
            wrapped.raw_headers.append((key, value))
    return wrapped


class JsonResponseMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable):
        # Skip docs/openapi endpoints
        if request.url.path.startswith(("/openapi", "/docs", "/redoc")):
            return await call_next(request)

        response = await call_next(request)

        content_type = response.headers.get("content-type", "")
        if "application/json" not in content_type:
            return response

        # Read the full body
        body_bytes = b""
        async for chunk in response.body_iterator:
            body_bytes += chunk

        try:
            data = json.loads(body_bytes.decode("utf-8")) if body_bytes else None
        except ValueError:
            data = None

        # Skip wrapping if already wrapped
        if isinstance(data, dict) and ENVELOPE_KEYS.issubset(data.keys()):
            return rewrap(response, data)

        if not (200 <= response.status_code < 400):
            message = ""
            if isinstance(data, dict):
                message = str(data.get("detail") or data.get("message") or "")
            elif isinstance(data, str):
                message = data
            wrapped_error = JsonOutResult(
                data=None,
                status="Failure",
                status_code=str(response.status_code),
                message=message or "An unexpected error occurred",
            ).model_dump()
            return rewrap(response, wrapped_error)

        wrapped = JsonOutResult(
            data=data,
            status="Success",
            status_code=str(response.status_code),
            message="Data retrieved successfully"
        ).model_dump(mode="json")

        return rewrap(response, wrapped)
