"""
API Module

FastAPI application and route handlers. A thin consumer of the Storage
facade; no persistence logic lives here.

Package Structure:
==================
    api/
    ├── main.py           ← Application entry point
    ├── routes.py         ← Route registration
    ├── dependencies/     ← FastAPI dependencies
    ├── handlers/         ← Route handlers
    └── middleware/       ← Custom middleware

Usage:
======
    # Run the API
    uvicorn guttakrutt.api.main:app --reload

    # Import the app
    from guttakrutt.api.main import app, create_application
"""
