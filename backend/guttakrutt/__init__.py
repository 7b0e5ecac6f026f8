"""
Guttakrutt Backend

Guild website persistence and API for the Guttakrutt World of Warcraft guild.

Package Structure:
==================
    guttakrutt/
    ├── api/        ← FastAPI application (thin consumer of Storage)
    ├── shared/     ← Database layer, repositories, schemas, core
    └── config/     ← Configuration

Running the Application:
========================
    # API Server (PostgreSQL)
    uvicorn guttakrutt.api.main:app --reload

    # API Server (MySQL)
    DB_TYPE=mysql MYSQL_DATABASE=guttakrutt uvicorn guttakrutt.api.main:app
"""
