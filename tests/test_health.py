"""
tests.test_health

Liveness/readiness probes and routing fallbacks.
"""

from __future__ import annotations

import httpx
import pytest
from fastapi import FastAPI
from sqlalchemy import func, select, text

from catalog_api.db.models import HealthCheck

NO_CACHE = "no-cache, no-store, must-revalidate"


def _assert_no_cache(r: httpx.Response) -> None:
    assert r.headers["cache-control"] == NO_CACHE
    assert r.headers["pragma"] == "no-cache"
    assert r.headers["x-content-type-options"] == "nosniff"


async def _health_rows(app: FastAPI) -> int:
    async with app.state.sessionmaker() as session:
        return (await session.execute(select(func.count()).select_from(HealthCheck))).scalar_one()


@pytest.mark.asyncio
async def test_healthz_records_check_and_disables_caching(
    app: FastAPI, client: httpx.AsyncClient
) -> None:
    r = await client.get("/healthz")
    assert r.status_code == 200
    assert r.content == b""
    _assert_no_cache(r)
    assert await _health_rows(app) == 1

    await client.get("/healthz")
    assert await _health_rows(app) == 2


@pytest.mark.asyncio
async def test_healthz_rejects_payload(app: FastAPI, client: httpx.AsyncClient) -> None:
    r = await client.request("GET", "/healthz", content=b'{"probe": true}')
    assert r.status_code == 400
    _assert_no_cache(r)
    assert await _health_rows(app) == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["POST", "PUT", "PATCH", "DELETE"])
async def test_healthz_other_methods_not_allowed(client: httpx.AsyncClient, method: str) -> None:
    r = await client.request(method, "/healthz")
    assert r.status_code == 405
    assert r.content == b""
    _assert_no_cache(r)


@pytest.mark.asyncio
async def test_healthz_unavailable_when_insert_fails(
    app: FastAPI, client: httpx.AsyncClient
) -> None:
    async with app.state.engine.begin() as conn:
        await conn.execute(text("DROP TABLE health_checks"))

    r = await client.get("/healthz")
    assert r.status_code == 503
    _assert_no_cache(r)


@pytest.mark.asyncio
async def test_readyz(client: httpx.AsyncClient) -> None:
    r = await client.get("/readyz")
    assert r.status_code == 200
    assert r.json()["status"] == "ready"


@pytest.mark.asyncio
async def test_unknown_route_is_empty_404(client: httpx.AsyncClient) -> None:
    r = await client.get("/v2/nothing-here")
    assert r.status_code == 404
    assert r.content == b""


@pytest.mark.asyncio
async def test_request_id_is_echoed(client: httpx.AsyncClient) -> None:
    r = await client.get("/readyz", headers={"x-request-id": "abc-123"})
    assert r.headers["x-request-id"] == "abc-123"
