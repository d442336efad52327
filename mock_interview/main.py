from contextlib import asynccontextmanager
from typing import Callable, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mock_interview.api.v1 import interview, reports, sessions
from mock_interview.core.config import Settings, settings as default_settings
from mock_interview.core.database import SessionLocal, init_db
from mock_interview.core.logging_config import get_logger, setup_logging
from mock_interview.media.capture_device import MediaCaptureDevice, create_media_device
from mock_interview.services.report_navigator import ReportNavigator, create_report_navigator
from mock_interview.services.session_service import SessionService

logger = get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    device_factory: Optional[Callable[[], MediaCaptureDevice]] = None,
    navigator: Optional[ReportNavigator] = None,
) -> FastAPI:
    settings = settings or default_settings
    setup_logging(level=settings.LOG_LEVEL, json_format=settings.LOG_JSON)

    if device_factory is None:
        def device_factory():
            return create_media_device(settings.MEDIA_DEVICE, camera_index=settings.CAMERA_INDEX)

    if navigator is None:
        navigator = create_report_navigator(
            SessionLocal,
            webhook_url=settings.REPORT_WEBHOOK_URL,
            webhook_timeout=settings.REPORT_WEBHOOK_TIMEOUT,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db()
        app.state.session_service = SessionService(
            settings=settings,
            device_factory=device_factory,
            navigator=navigator,
        )
        logger.info("Mock interview service started")
        try:
            yield
        finally:
            # Releases any camera still held by a running session
            app.state.session_service.shutdown()
            logger.info("Mock interview service stopped")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Backend for timed AI mock interview sessions",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Health check
    @app.get("/health", tags=["Health"])
    async def health_check():
        return {"status": "ok"}

    # API Routers
    app.include_router(interview.router, prefix=settings.API_V1_PREFIX, tags=["Interview"])
    app.include_router(sessions.router, prefix=settings.API_V1_PREFIX, tags=["Sessions"])
    app.include_router(reports.router, prefix=settings.API_V1_PREFIX, tags=["Reports"])

    return app


app = create_app()
