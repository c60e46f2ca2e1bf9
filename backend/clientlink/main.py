"""FastAPI application for clientlink.

Wires together the link store, the matcher configuration, and API routes.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from clientlink.config import Settings, build_matcher_config
from clientlink.db.repositories import ClientRepo, TargetRepo
from clientlink.db.sqlite import SQLiteDB
from clientlink.security import secure_directory, secure_file

settings = Settings()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler.

    Configures logging, opens the link store on startup, closes it on
    shutdown.
    """
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )

    # Ensure the data directory exists with proper permissions
    data_dir = Path(settings.DATABASE_DIR)
    secure_directory(data_dir)

    db_path = str(data_dir / "clientlink.db")
    db = SQLiteDB(db_path)
    secure_file(Path(db_path))

    # Store on app.state for access in routes
    app.state.settings = settings
    app.state.db = db
    app.state.client_repo = ClientRepo(db)
    app.state.target_repo = TargetRepo(db)
    app.state.matcher_config = build_matcher_config(settings)

    logger.info(
        "clientlink started with %d corporate suffixes",
        len(app.state.matcher_config.corporate_suffixes),
    )

    yield

    db.close()


app = FastAPI(
    title="clientlink",
    description="Proposes links between client records of independent sources",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware using Settings.FRONTEND_URL
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

from clientlink.api.routes import router as api_router

app.include_router(api_router)


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}
