"""FastAPI application for the Golf Season Tracker API."""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from database.db_manager import DatabaseManager

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the record store on startup, flush it on shutdown."""
    data_path = os.environ.get("GOLF_DATA_PATH")
    app.state.db_manager = DatabaseManager.open(data_path)
    logger.info("Record store ready (%s)", data_path or "in-memory")
    yield
    app.state.db_manager.save()


def create_app() -> FastAPI:
    logging.basicConfig(
        level=os.environ.get("GOLF_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="Golf Season Tracker API",
        version="1.0.0",
        lifespan=lifespan,
    )

    origins = os.environ.get("GOLF_CORS_ORIGINS", "http://localhost:5173")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from api.routers import courses, export, players, rounds, seasons, stats
    app.include_router(players.router, prefix="/api/players", tags=["players"])
    app.include_router(seasons.router, prefix="/api/seasons", tags=["seasons"])
    app.include_router(courses.router, prefix="/api/courses", tags=["courses"])
    app.include_router(rounds.router, prefix="/api/rounds", tags=["rounds"])
    app.include_router(stats.router, prefix="/api/stats", tags=["stats"])
    app.include_router(export.router, prefix="/api/export", tags=["export"])

    @app.get("/api/health")
    async def health(request: Request):
        return {"status": "ok", "version": request.app.state.db_manager.version}

    return app


app = create_app()
