"""
Route Registration

Centralizes all route registration for the FastAPI application.

Route Hierarchy:
================
    /health                 → Health check with dialect
    /api/guild              → Default guild
    /api/roster             → Roster
    /api/raid-progress      → Raid progress
    /api/raid-bosses        → Boss progress
    /api/applications       → Recruitment

Usage:
======
    from guttakrutt.api.routes import register_routes

    app = FastAPI()
    register_routes(app)
"""

from fastapi import FastAPI

from guttakrutt.api.handlers import (
    guild_handler,
    health_handler,
    recruitment_handler,
)


def register_routes(app: FastAPI) -> None:
    """
    Register all API routes.

    Args:
        app: FastAPI application instance
    """
    # Health check endpoints (no prefix, root level)
    app.include_router(
        health_handler.router,
        tags=["Health"],
    )

    # Guild, roster and raid progress
    app.include_router(
        guild_handler.router,
        prefix="/api",
        tags=["Guild"],
    )

    # Recruitment applications
    app.include_router(
        recruitment_handler.router,
        prefix="/api/applications",
        tags=["Recruitment"],
    )
