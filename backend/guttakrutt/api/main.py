"""
Guttakrutt API Application Entry Point

FastAPI application setup with routers, middleware, and lifecycle management.

Application Architecture:
=========================
┌─────────────────────────────────────────────────────────────────────────────┐
│                           GUTTAKRUTT API                                    │
├─────────────────────────────────────────────────────────────────────────────┤
│                                                                             │
│   Middleware:  CORS → Request Context → Errors                              │
│                              │                                              │
│                              ▼                                              │
│   Routers:     Health │ Guild │ Recruitment                                 │
│                              │                                              │
│                              ▼                                              │
│   Dependencies: StorageDep  (app.state.storage)                             │
│                              │                                              │
│                              ▼                                              │
│   Storage → Repositories → RowWriter → PostgreSQL | MySQL                   │
│                                                                             │
└─────────────────────────────────────────────────────────────────────────────┘

Lifecycle:
==========
1. Application starts → lifespan startup
2. Connection resolved (DB_TYPE) and probed; failure aborts startup
3. Storage and session store wired onto app.state
4. Application serves requests
5. Application stops → session store stopped, pool disposed

Usage:
======
    # Run with uvicorn
    uvicorn guttakrutt.api.main:app --host 0.0.0.0 --port 5000 --reload

    # Or programmatically
    from guttakrutt.api.main import create_application
    app = create_application()
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from guttakrutt.api.middleware import setup_exception_handlers, setup_request_context
from guttakrutt.api.routes import register_routes
from guttakrutt.config.settings import settings
from guttakrutt.shared.core.logging import logger
from guttakrutt.shared.db import close_db, get_connection, init_db
from guttakrutt.shared.sessions import make_session_store
from guttakrutt.shared.storage import create_storage


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Startup:
    - Resolve the dialect and probe the database (fatal on failure)
    - Wire the Storage and the session store

    Shutdown:
    - Stop the session store
    - Close database connections
    """
    # ═══════════════════════════════════════════════════════════════════════════
    # STARTUP
    # ═══════════════════════════════════════════════════════════════════════════
    logger.info(
        "Starting Guttakrutt API",
        app_name=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.APP_ENV,
    )

    connection = await init_db(get_connection())
    app.state.storage = create_storage(connection)
    app.state.session_store = make_session_store(connection.dialect, connection.engine)
    await app.state.session_store.start()

    logger.info("Guttakrutt API started successfully", dialect=connection.dialect.value)

    yield

    # ═══════════════════════════════════════════════════════════════════════════
    # SHUTDOWN
    # ═══════════════════════════════════════════════════════════════════════════
    logger.info("Shutting down Guttakrutt API")

    await app.state.session_store.stop()
    await close_db()

    logger.info("Guttakrutt API shutdown complete")


def create_application() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.APP_NAME,
        description="Guild website API: roster, raid progress and recruitment",
        version=settings.APP_VERSION,
        # Only show docs in development
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # MIDDLEWARE
    # ═══════════════════════════════════════════════════════════════════════════

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    setup_request_context(app)

    # ═══════════════════════════════════════════════════════════════════════════
    # EXCEPTION HANDLERS
    # ═══════════════════════════════════════════════════════════════════════════

    setup_exception_handlers(app)

    # ═══════════════════════════════════════════════════════════════════════════
    # ROUTES
    # ═══════════════════════════════════════════════════════════════════════════

    register_routes(app)

    return app


# Create the application instance
app = create_application()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "guttakrutt.api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development,
    )
