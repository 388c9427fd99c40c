# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from salescrm import __version__
from salescrm.config import settings
from salescrm.database import SessionLocal
from salescrm.schemas.common import HealthResponse
from salescrm.services import auth_service

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup and shutdown events."""
    db = SessionLocal()
    try:
        auth_service.cleanup_expired_sessions(db)
    except Exception as e:
        logger.error(f"Error cleaning up sessions: {e}")
    finally:
        db.close()

    yield

    logger.info("Shutting down")


app = FastAPI(
    title="Sales CRM",
    description="Leads, customers, communications and renewals with scoped access",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", response_model=HealthResponse)
def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "healthy"}


# Import and include API router after it's created
from salescrm.api.v1.router import api_router  # noqa: E402

app.include_router(api_router, prefix="/api/v1")
