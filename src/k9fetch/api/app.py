"""FastAPI application factory.

API layer:
- Validates inputs, reads/writes DB through repo and services
- Guards endpoints with the per-request auth state
- Returns plain payloads for the UI charts
"""

from __future__ import annotations

import os
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from k9fetch.api.deps import get_db_session  # noqa: F401
from k9fetch.db.session import init_db

DEFAULT_CORS_ORIGINS = [
    "http://localhost:5173",  # Vite dev server
    "http://127.0.0.1:5173",
    "http://localhost:3000",
]


def _cors_origins() -> list[str]:
    raw = os.environ.get("K9_CORS_ORIGINS")
    if not raw:
        return DEFAULT_CORS_ORIGINS
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def create_app(db_path: Path | None = None, create_schema: bool = False) -> FastAPI:
    """Create FastAPI application.

    Args:
        db_path: Optional path to database file, used with create_schema.
        create_schema: Create missing tables at startup.

    Returns:
        Configured FastAPI application.
    """
    if create_schema:
        init_db(db_path)

    app = FastAPI(
        title="K-9 Smart Fetch API",
        description="Detection dog training records and statistics",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routes
    from k9fetch.api.routes import auth, dogs, stats

    app.include_router(auth.router, prefix="/api")
    app.include_router(dogs.router, prefix="/api")
    app.include_router(stats.router, prefix="/api")

    # Health check endpoint
    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    return app


# Default app instance
app = create_app()
