import os
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.staticfiles import StaticFiles
from loguru import logger

from portal.api.api import api_router
from portal.core.config import Settings, settings as default_settings
from portal.core.database import Database
from portal.core.errors import register_exception_handlers
from portal.core.logging import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    settings: Settings = app.state.settings
    setup_logging(settings)
    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    app.state.db = Database(settings.DATABASE_URL, echo=settings.DEBUG)
    # Note: outside development the schema is managed by Alembic migrations
    if settings.CREATE_TABLES:
        await app.state.db.create_all()
    logger.info("Portal started (debug={})", settings.DEBUG)
    yield
    # Shutdown
    await app.state.db.dispose()
    logger.info("Portal stopped")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings

    app = FastAPI(
        title="Intranet Portal API",
        description="Mural, calendar, drive, projects and dashboard widgets for the corporate intranet",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add trusted host middleware for production
    if not settings.DEBUG:
        app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.allowed_hosts)

    register_exception_handlers(app)

    # Include API router
    app.include_router(api_router, prefix="/api")

    # The directory is created on startup
    app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False), name="uploads")

    @app.get("/")
    async def root():
        return {"message": "Intranet Portal API", "version": "1.0.0"}

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=default_settings.DEBUG,
        proxy_headers=True,
        forwarded_allow_ips="*",
    )
