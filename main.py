"""
Todo API — application entry point.
"""

from __future__ import annotations

import logging
import pathlib
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from api.middleware import register_exception_handlers, register_middleware
from api.routes import router as api_router
from auth.routes import router as auth_router
from config.settings import Settings, config
from database.session import Database

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)
for _noisy in ("sqlalchemy.engine", "asyncio", "httpx"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def create_app(settings: Settings = config, database: Database | None = None) -> FastAPI:
    """
    Build the application.

    ``database`` is created from ``settings.database_url`` at startup unless
    one is passed in.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.database is None:
            app.state.database = Database(settings.database_url, echo=settings.debug)

        logger.info("Connecting to database…")
        try:
            await app.state.database.ping()
            await app.state.database.create_all()
        except Exception:
            logger.critical("Database connection failed, shutting down", exc_info=True)
            raise
        logger.info("Connected to database")
        logger.info("Environment: %s", settings.environment)
        logger.info("CORS enabled for: %s", ", ".join(settings.cors_origins))
        logger.info("Application ready to accept requests.")

        yield

        await app.state.database.dispose()
        logger.info("Shutdown complete")

    app = FastAPI(
        title="Todo API",
        version="1.0.0",
        description="User signup, login and token-protected todos.",
        lifespan=lifespan,
    )
    app.state.database = database

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middleware(app)
    register_exception_handlers(app)

    # Routes
    app.include_router(api_router)
    app.include_router(auth_router)

    frontend_dir = pathlib.Path(__file__).resolve().parent / "frontend"
    if frontend_dir.is_dir():
        app.mount("/app", StaticFiles(directory=str(frontend_dir), html=True), name="frontend")

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level="debug" if config.debug else "info",
    )
