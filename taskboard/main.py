"""Taskboard FastAPI application."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.concurrency import run_in_threadpool

from taskboard.api.v1 import api_router
from taskboard.config import Settings, get_settings
from taskboard.errors import register_exception_handlers
from taskboard.logging_config import configure_logging
from taskboard.storage import Storage, build_storage

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, storage: Optional[Storage] = None) -> FastAPI:
    """Instantiate and configure the FastAPI application.

    ``storage`` defaults to the backend selected by ``STORAGE_BACKEND``; it is
    prepared on startup and closed on shutdown.
    """
    settings = settings or get_settings()
    configure_logging(settings)
    storage = storage or build_storage(settings)

    @asynccontextmanager
    async def lifespan(application: FastAPI):
        logger.info("Starting %s with the %s storage backend", settings.APP_NAME, storage.backend_name)
        await run_in_threadpool(storage.initialize)
        try:
            yield
        finally:
            await run_in_threadpool(storage.close)

    application = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Projects, boards, ordered columns and tasks",
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    application.state.settings = settings
    application.state.storage = storage

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(api_router, prefix=settings.api_prefix)
    register_exception_handlers(application)

    @application.get("/")
    def root():
        return {
            "message": f"{settings.APP_NAME} API",
            "version": settings.APP_VERSION,
            "storage": storage.backend_name,
        }

    return application


def run() -> None:
    """Serve the application factory with uvicorn on the configured host and port."""
    settings = get_settings()
    uvicorn.run(
        "taskboard.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_config=None,
    )


if __name__ == "__main__":
    run()
