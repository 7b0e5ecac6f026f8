"""
Request Context Middleware

Binds a request id to every log line emitted while a request is handled,
so a degraded read and the request that triggered it share one id.

    X-Request-ID: <incoming header, or a fresh uuid4 hex>
        │
        ▼
    log_context(request_id=..., method=..., path=...)
        │
        ▼
    handler ... repository logs carry request_id
        │
        ▼
    clear_log_context(); header echoed on the response
"""

from uuid import uuid4

from fastapi import FastAPI, Request

from guttakrutt.shared.core.logging import clear_log_context, log_context


REQUEST_ID_HEADER = "X-Request-ID"


def setup_request_context(app: FastAPI) -> None:
    """Register the request-id middleware on the application."""

    @app.middleware("http")
    async def bind_request_context(request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        clear_log_context()
        log_context(request_id=request_id, method=request.method, path=request.url.path)
        try:
            response = await call_next(request)
        finally:
            clear_log_context()
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
