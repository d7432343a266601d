"""FastAPI application for the golf auto-score engine."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import config
from database.connection import db
from database.db_manager import DatabaseManager
from llm.commentary import CommentaryService, create_commentary_generator
from scoring.service import AutoScoreService
from tracking.service import LocationTrackingService

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize DB pool and services on startup; stop sessions and close on shutdown."""
    await db.initialize()
    manager = DatabaseManager(db.pool)
    if config.DATABASE_INIT_SCHEMA:
        await manager.initialize_schema()
    commentary = CommentaryService(create_commentary_generator())

    tracking = LocationTrackingService(
        manager.courses, manager.rounds, manager.locations, commentary
    )
    app.state.db_manager = manager
    app.state.tracking = tracking
    app.state.scoring = AutoScoreService(
        manager.courses, manager.rounds, commentary, tracking
    )
    logger.info("Auto-score API started")
    yield
    tracking.sessions.close_all()
    await db.close()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Golf Auto-Score API",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from api.routers import scoring, tracking
    app.include_router(tracking.router, prefix="/api/rounds", tags=["tracking"])
    app.include_router(scoring.router, prefix="/api", tags=["scoring"])

    @app.get("/api/health")
    async def health():
        healthy = await db.health_check()
        return {"status": "ok" if healthy else "degraded", "database": healthy}

    return app


app = create_app()
