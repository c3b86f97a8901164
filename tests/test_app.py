"""Application-level tests: system routes, static files, counters and logging."""

import json
import logging

import pytest
from httpx import ASGITransport, AsyncClient

from conftest import FakeImager
from placeholder.lib.logger import JsonFormatter


@pytest.mark.asyncio
async def test_health_endpoint(async_client: AsyncClient) -> None:
    """Health route reports status and uptime."""
    response = await async_client.get("/health")

    assert response.status_code == 200
    data = response.json()["data"]
    assert response.json()["ok"] is True
    assert data["status"] == "healthy"
    assert data["uptime_seconds"] >= 0


@pytest.mark.asyncio
async def test_index_page_served_from_public_dir(async_client: AsyncClient) -> None:
    response = await async_client.get("/")

    assert response.status_code == 200
    assert "Placeholder Images" in response.text


@pytest.mark.asyncio
async def test_metrics_count_request_outcomes(async_client: AsyncClient, fake_imager: FakeImager) -> None:
    await async_client.get("/img/10/10")
    await async_client.get("/img/0/10")
    await async_client.get("/img/5000/10")
    fake_imager.error = ValueError("bad")
    await async_client.get("/img/20/20")
    await async_client.delete("/stats")

    data = (await async_client.get("/metrics")).json()["data"]

    assert data == {
        "image.served": 1,
        "image.rejected.invalid": 1,
        "image.rejected.too_large": 1,
        "image.failed": 1,
        "stats.reset": 1,
    }


@pytest.mark.asyncio
async def test_imager_failure_is_logged(
    async_client: AsyncClient, fake_imager: FakeImager, caplog: pytest.LogCaptureFixture
) -> None:
    fake_imager.error = RuntimeError("renderer crashed")

    with caplog.at_level(logging.ERROR, logger="placeholder"):
        response = await async_client.get("/img/40/30")

    assert response.status_code == 500
    record = next(r for r in caplog.records if r.name == "placeholder")
    assert "40x30" in record.getMessage()
    assert record.exc_info is not None
    assert isinstance(record.exc_info[1], RuntimeError)


@pytest.mark.asyncio
async def test_stats_read_failure_returns_bare_500(app, async_client: AsyncClient, monkeypatch) -> None:
    store = app.state.stats_store

    def broken() -> list[str]:
        raise RuntimeError("store unavailable")

    monkeypatch.setattr(store, "recent_paths", broken)

    response = await async_client.get("/stats/paths/recent")

    assert response.status_code == 500
    assert response.content == b""


def test_json_formatter_includes_extra_fields() -> None:
    record = logging.LogRecord("placeholder.request", logging.INFO, __file__, 1, "GET %s", ("/img/1/1",), None)
    record.status = 200

    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "GET /img/1/1"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "placeholder.request"
    assert payload["status"] == 200
    assert "lineno" not in payload


@pytest.mark.asyncio
async def test_unexpected_failure_is_logged_and_bodyless(
    app, monkeypatch, caplog: pytest.LogCaptureFixture
) -> None:
    store = app.state.stats_store

    def broken_reset() -> None:
        raise RuntimeError("reset exploded")

    monkeypatch.setattr(store, "reset", broken_reset)
    transport = ASGITransport(app=app, raise_app_exceptions=False)

    with caplog.at_level(logging.ERROR, logger="placeholder"):
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            response = await client.delete("/stats")

    assert response.status_code == 500
    assert response.content == b""
    record = next(r for r in caplog.records if r.name == "placeholder")
    assert "DELETE /stats" in record.getMessage()
    assert isinstance(record.exc_info[1], RuntimeError)
