"""
tests.helpers

Request payload builders and signup/creation shortcuts shared by API tests.
"""

from __future__ import annotations

from typing import Any

import httpx

DEFAULT_PASSWORD = "s3cret-pass"


def user_payload(username: str, **overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "first_name": "Jane",
        "last_name": "Doe",
        "username": username,
        "password": DEFAULT_PASSWORD,
    }
    payload.update(overrides)
    return payload


def product_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "name": "Widget",
        "description": "A very useful widget",
        "sku": "WID-001",
        "manufacturer": "Acme",
        "quantity": 10,
    }
    payload.update(overrides)
    return payload


async def create_user(
    client: httpx.AsyncClient, username: str, password: str = DEFAULT_PASSWORD
) -> dict[str, Any]:
    r = await client.post("/v1/user", json=user_payload(username, password=password))
    assert r.status_code == 201, r.text
    return r.json()


async def create_product(
    client: httpx.AsyncClient, username: str, password: str = DEFAULT_PASSWORD, **overrides: Any
) -> dict[str, Any]:
    r = await client.post(
        "/v1/product", json=product_payload(**overrides), auth=(username, password)
    )
    assert r.status_code == 201, r.text
    return r.json()
