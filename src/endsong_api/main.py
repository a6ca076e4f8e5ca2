"""Main FastAPI application for the endsong explorer."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from endsong.exceptions import EmptyHistoryError, InvalidArgumentError
from endsong.logging import configure_logging
from endsong_api.constants import APP_DESCRIPTION, APP_TITLE, APP_VERSION, Routes, ServiceName
from endsong_api.dependencies import store_manager
from endsong_api.history import router as history_router
from endsong_api.middleware import RequestIDMiddleware
from endsong_api.settings import get_settings

logger = logging.getLogger(__name__)


class EndsongApp:
    """Application container that wires middleware, routers and error handlers."""

    app: FastAPI

    def __init__(self) -> None:
        configure_logging(ServiceName.API, get_settings().LOG_LEVEL)
        self.app = FastAPI(
            title=APP_TITLE,
            description=APP_DESCRIPTION,
            version=APP_VERSION,
            lifespan=self._lifespan,
        )
        self._setup_middleware()
        self._setup_exception_handlers()
        self._setup_routers()

    @staticmethod
    @asynccontextmanager
    async def _lifespan(app: FastAPI) -> AsyncGenerator[None]:
        """Application lifespan: load the configured history once before serving."""
        settings = get_settings()
        if store_manager.is_loaded:
            logger.info("History already loaded, skipping startup load")
        elif settings.history_paths:
            store_manager.load(settings)
        else:
            logger.warning("HISTORY_PATHS is empty, history endpoints will answer 503")
        try:
            yield
        finally:
            store_manager.clear()

    def _setup_middleware(self) -> None:
        settings = get_settings()

        # Request-ID (generates/propagates X-Request-ID)
        self.app.add_middleware(RequestIDMiddleware)

        # CORS
        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["GET"],
            allow_headers=["*"],
        )

    def _setup_exception_handlers(self) -> None:
        @self.app.exception_handler(InvalidArgumentError)
        async def invalid_argument(request: Request, exc: InvalidArgumentError) -> JSONResponse:
            return JSONResponse(status_code=422, content={"detail": str(exc)})

        @self.app.exception_handler(EmptyHistoryError)
        async def empty_history(request: Request, exc: EmptyHistoryError) -> JSONResponse:
            return JSONResponse(status_code=404, content={"detail": str(exc)})

    def _setup_routers(self) -> None:
        self.app.include_router(history_router, prefix=Routes.HISTORY.prefix, tags=[Routes.HISTORY.tag])

        @self.app.get(Routes.HEALTH)
        async def health_check() -> dict[str, str]:
            """Health check endpoint."""
            return {"status": "healthy", "history": "loaded" if store_manager.is_loaded else "empty"}

        @self.app.get("/")
        async def root() -> dict[str, str]:
            """Root endpoint."""
            return {"message": APP_TITLE, "version": APP_VERSION}


_application = EndsongApp()
app: FastAPI = _application.app
