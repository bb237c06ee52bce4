"""Pytest fixtures for SMS frontend tests."""

from collections.abc import AsyncIterator, Callable
import os

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("MODEL_HOST", "http://model.test")
os.environ.setdefault("APP_VERSION", "test-version")

from frontend.config import Settings
from frontend.main import create_app
from frontend.metrics import MetricsRegistry
from frontend.sms.client import ModelClient

MODEL_HOST = "http://model.test"


@pytest.fixture()
def settings() -> Settings:
    return Settings(MODEL_HOST=MODEL_HOST, APP_VERSION="test-version")


@pytest.fixture()
def app(settings: Settings) -> FastAPI:
    """Return a fresh application so every test starts with empty metrics."""
    return create_app(settings)


@pytest.fixture()
def registry(app: FastAPI) -> MetricsRegistry:
    return app.state.metrics


@pytest_asyncio.fixture()
async def async_client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Provide an `httpx.AsyncClient` wired to the ASGI app."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        yield client


@pytest.fixture()
def install_model(app: FastAPI) -> Callable[[Callable[[httpx.Request], httpx.Response]], None]:
    """Route the app's model client through an in-process handler."""

    def _install(handler: Callable[[httpx.Request], httpx.Response]) -> None:
        app.state.model_client = ModelClient(MODEL_HOST, transport=httpx.MockTransport(handler))

    return _install
