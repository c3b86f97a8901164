"""Pytest fixtures for the placeholder image service tests."""

from collections.abc import AsyncIterator, Iterator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.responses import Response
from httpx import ASGITransport, AsyncClient

from placeholder.main import app as fastapi_app


class FakeImager:
    """Records calls and answers with a fixed body instead of rendering."""

    def __init__(self) -> None:
        self.calls: list[tuple[int, int, int | None, str | None]] = []
        self.error: Exception | None = None

    async def send_image(self, width: int, height: int, square: int | None, text: str | None) -> Response:
        self.calls.append((width, height, square, text))
        if self.error is not None:
            raise self.error
        return Response(content=b"fake-image", media_type="image/png")


@pytest.fixture(scope="session")
def app() -> FastAPI:
    """Return the FastAPI application instance."""
    return fastapi_app


@pytest_asyncio.fixture()
async def async_client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Provide an `httpx.AsyncClient` bound to the app through ASGI."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.fixture(autouse=True)
def fake_imager(app: FastAPI) -> Iterator[FakeImager]:
    """Swap the Pillow imager for a recording fake."""

    original = app.state.imager
    imager = FakeImager()
    app.state.imager = imager
    yield imager
    app.state.imager = original


@pytest.fixture(autouse=True)
def reset_runtime(app: FastAPI) -> Iterator[None]:
    """Clear stats and metrics around every test."""

    app.state.stats_store.reset()
    app.state.metrics.reset()
    yield
    app.state.stats_store.reset()
    app.state.metrics.reset()
