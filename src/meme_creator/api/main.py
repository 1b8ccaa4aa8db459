"""FastAPI main application."""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from ..config.config import Settings, settings as default_settings
from ..pipeline import PipelineDeps
from ..system_setup import build_pipeline, shutdown_pipeline
from ..utils.logging import get_logger
from .middleware.error_handler import register_error_handlers
from .middleware.logging import LoggingMiddleware
from .routers import health, memes, templates, worker

logger = get_logger(__name__)


def create_app(
    pipeline: Optional[PipelineDeps] = None,
    settings: Settings = default_settings,
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        pipeline: Prebuilt collaborators; built from ``settings`` on startup when omitted
        settings: Application settings

    Returns:
        FastAPI: The application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("app_starting", name=settings.app_name, version=settings.app_version,
                    env=settings.app_env)
        owned = pipeline is None
        app.state.pipeline = build_pipeline(settings) if owned else pipeline
        try:
            yield
        finally:
            logger.info("app_stopping", name=settings.app_name)
            if owned:
                shutdown_pipeline(app.state.pipeline)

    app = FastAPI(
        title=settings.app_name,
        description="Caption template images and publish them as memes",
        version=settings.app_version,
        docs_url="/docs",
        lifespan=lifespan,
    )
    app.state.settings = settings
    if pipeline is not None:
        app.state.pipeline = pipeline

    app.add_middleware(LoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(templates.router, prefix="/api/v1/templates", tags=["templates"])
    app.include_router(memes.router, prefix="/api/v1/memes", tags=["memes"])
    app.include_router(worker.router, prefix="/api/v1/worker", tags=["worker"])

    # Serve published images when blobs live on local disk
    if settings.blob_backend == "local":
        app.mount("/blobs", StaticFiles(directory=settings.blob_root, check_dir=False), name="blobs")

    return app


app = create_app()
