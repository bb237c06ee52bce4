"""FastAPI application entrypoint for the SMS frontend."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from fastapi.templating import Jinja2Templates

from frontend.config import Settings, get_settings
from frontend.lib.logger import configure_logging, get_logger
from frontend.metrics import MetricsRegistry, router as metrics_router
from frontend.paths import TEMPLATES_DIR
from frontend.sms.client import ModelClient
from frontend.sms.routes import router as sms_router

logger = get_logger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application together with its metrics registry and model client."""

    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="SMS Frontend", version=settings.app_version)

    app.state.settings = settings
    app.state.templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
    app.state.metrics = MetricsRegistry()
    app.state.model_client = ModelClient(settings.model_host, timeout=settings.model_timeout_seconds)

    app.include_router(metrics_router, tags=["system"])
    app.include_router(sms_router, prefix="/sms", tags=["sms"])

    @app.get("/", tags=["system"], summary="Version banner")
    async def index() -> PlainTextResponse:
        return PlainTextResponse(f"Hello World! [Version: {settings.app_version}]")

    @app.get("/health", tags=["system"], summary="Health check")
    async def health_check() -> JSONResponse:
        """Return liveness response for uptime monitoring."""
        return JSONResponse(content={"ok": True, "data": {"status": "healthy"}})

    @app.get("/favicon.ico", include_in_schema=False)
    async def favicon() -> Response:
        return Response(status_code=204)

    logger.info(
        "frontend.startup",
        extra={"app_version": settings.app_version, "model_host": settings.model_host},
    )
    return app


app = create_app()
