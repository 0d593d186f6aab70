"""FastAPI application factory.

API layer:
- Validates query parameters, opens a DB session per request
- Returns analytics payloads for the dashboard UI
- Forbidden: aggregation logic, migrations
"""

from __future__ import annotations

import os
from typing import Generator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from orbit.db.repo import DbSession
from orbit.db.session import get_session


def get_db_session() -> Generator[DbSession, None, None]:
    """Dependency to get database session.

    Yields:
        Database session that is automatically closed after request.
    """
    session = get_session()
    try:
        yield session
    finally:
        session.close()


def create_app() -> FastAPI:
    """Create FastAPI application.

    Returns:
        Configured FastAPI application.
    """
    app = FastAPI(
        title="Orbit Analytics API",
        description="Dashboard and report statistics for the institute",
        version="0.1.0",
    )

    # UI dev server origins; comma-separated override via ORBIT_CORS_ORIGINS
    origins = os.environ.get(
        "ORBIT_CORS_ORIGINS", "http://localhost:5000,http://127.0.0.1:5000"
    ).split(",")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[origin.strip() for origin in origins if origin.strip()],
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # Include routes
    from orbit.api.routes import analytics

    app.include_router(analytics.router, prefix="/api")

    # Health check endpoint
    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    return app


# Default app instance
app = create_app()
