"""
API Middleware

Components:
===========
- error_handler: Global exception handling
- request_context: Request id bound to every log line

Usage:
======
    from guttakrutt.api.middleware import setup_exception_handlers, setup_request_context

    app = FastAPI()
    setup_request_context(app)
    setup_exception_handlers(app)
"""

from guttakrutt.api.middleware.error_handler import setup_exception_handlers
from guttakrutt.api.middleware.request_context import REQUEST_ID_HEADER, setup_request_context

__all__ = [
    "REQUEST_ID_HEADER",
    "setup_exception_handlers",
    "setup_request_context",
]
