"""
tests.test_products_api

Product endpoints: ownership enforcement, validation per write mode and the
id -> credentials -> existence -> ownership -> body check order.
"""

from __future__ import annotations

import uuid

import httpx
import pytest
import pytest_asyncio
from helpers import DEFAULT_PASSWORD, create_product, create_user, product_payload

A_AUTH = ("alice@example.com", DEFAULT_PASSWORD)
B_AUTH = ("bob@example.com", DEFAULT_PASSWORD)


@pytest_asyncio.fixture
async def owners(client: httpx.AsyncClient) -> tuple[dict, dict]:
    a = await create_user(client, A_AUTH[0])
    b = await create_user(client, B_AUTH[0])
    return a, b


@pytest.mark.asyncio
async def test_create_product_assigns_owner(client: httpx.AsyncClient, owners) -> None:
    a, _ = owners
    r = await client.post("/v1/product", json=product_payload(), auth=A_AUTH)
    assert r.status_code == 201
    body = r.json()
    assert body["owner_user_id"] == a["id"]
    assert body["quantity"] == 10
    assert body["date_added"] == body["date_last_updated"]
    uuid.UUID(body["id"])


@pytest.mark.asyncio
async def test_create_product_requires_credentials(client: httpx.AsyncClient, owners) -> None:
    r = await client.post("/v1/product", json=product_payload())
    assert r.status_code == 401
    assert r.headers["www-authenticate"] == "Basic"


@pytest.mark.asyncio
async def test_create_product_rejects_client_owner(client: httpx.AsyncClient, owners) -> None:
    _, b = owners
    r = await client.post(
        "/v1/product", json=product_payload(owner_user_id=b["id"]), auth=A_AUTH
    )
    assert r.status_code == 400
    assert r.json()["errors"] == ["Cannot set fields: owner_user_id"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides",
    [{"quantity": -1}, {"quantity": 2.5}, {"quantity": "4"}, {"name": "  "}, {"sku": None}],
)
async def test_create_product_validation(client: httpx.AsyncClient, owners, overrides) -> None:
    r = await client.post("/v1/product", json=product_payload(**overrides), auth=A_AUTH)
    assert r.status_code == 400
    assert r.json()["errors"]


@pytest.mark.asyncio
async def test_non_owner_is_forbidden_for_every_verb(client: httpx.AsyncClient, owners) -> None:
    product = await create_product(client, A_AUTH[0])
    url = f"/v1/product/{product['id']}"

    assert (await client.get(url, auth=B_AUTH)).status_code == 403
    assert (await client.put(url, json=product_payload(), auth=B_AUTH)).status_code == 403
    assert (await client.patch(url, json={"quantity": 1}, auth=B_AUTH)).status_code == 403
    assert (await client.delete(url, auth=B_AUTH)).status_code == 403
    # Forbidden regardless of body validity.
    assert (await client.patch(url, json={}, auth=B_AUTH)).status_code == 403

    r = await client.get(url, auth=A_AUTH)
    assert r.status_code == 200
    assert r.json() == product


@pytest.mark.asyncio
async def test_owner_can_use_every_verb(client: httpx.AsyncClient, owners) -> None:
    product = await create_product(client, A_AUTH[0])
    url = f"/v1/product/{product['id']}"

    assert (await client.get(url, auth=A_AUTH)).status_code == 200

    replacement = product_payload(name="Gadget", sku="GAD-9", quantity=3)
    assert (await client.put(url, json=replacement, auth=A_AUTH)).status_code == 204
    data = (await client.get(url, auth=A_AUTH)).json()
    assert (data["name"], data["sku"], data["quantity"]) == ("Gadget", "GAD-9", 3)
    assert data["owner_user_id"] == product["owner_user_id"]
    assert data["date_added"] == product["date_added"]
    assert data["date_last_updated"] >= product["date_last_updated"]

    r = await client.patch(url, json={"manufacturer": "Globex"}, auth=A_AUTH)
    assert r.status_code == 204
    data = (await client.get(url, auth=A_AUTH)).json()
    assert data["manufacturer"] == "Globex"
    assert data["name"] == "Gadget"

    assert (await client.delete(url, auth=A_AUTH)).status_code == 204
    assert (await client.get(url, auth=A_AUTH)).status_code == 404


@pytest.mark.asyncio
async def test_partial_update_scenarios(client: httpx.AsyncClient, owners) -> None:
    product = await create_product(client, A_AUTH[0])
    url = f"/v1/product/{product['id']}"

    r = await client.patch(url, json={}, auth=A_AUTH)
    assert r.status_code == 400
    assert r.json()["errors"] == ["At least one field must be provided"]

    assert (await client.patch(url, json={"quantity": -1}, auth=A_AUTH)).status_code == 400

    assert (await client.patch(url, json={"quantity": 0}, auth=A_AUTH)).status_code == 204
    assert (await client.get(url, auth=A_AUTH)).json()["quantity"] == 0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"name": "Only a name"},
        {"owner_user_id": "00000000-0000-4000-8000-000000000000"},
        {"date_added": "2020-01-01T00:00:00"},
    ],
)
async def test_full_update_validation(client: httpx.AsyncClient, owners, body: dict) -> None:
    product = await create_product(client, A_AUTH[0])
    url = f"/v1/product/{product['id']}"
    full = body if "name" in body else product_payload(**body)
    r = await client.put(url, json=full, auth=A_AUTH)
    assert r.status_code == 400
    assert (await client.get(url, auth=A_AUTH)).json() == product


@pytest.mark.asyncio
async def test_full_update_is_idempotent(client: httpx.AsyncClient, owners) -> None:
    product = await create_product(client, A_AUTH[0])
    url = f"/v1/product/{product['id']}"
    body = product_payload(description="Updated", quantity=42)

    assert (await client.put(url, json=body, auth=A_AUTH)).status_code == 204
    first = (await client.get(url, auth=A_AUTH)).json()
    assert (await client.put(url, json=body, auth=A_AUTH)).status_code == 204
    second = (await client.get(url, auth=A_AUTH)).json()

    first.pop("date_last_updated")
    second.pop("date_last_updated")
    assert first == second


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["GET", "PUT", "PATCH", "DELETE"])
async def test_malformed_id_is_bad_input_before_authentication(
    client: httpx.AsyncClient, method: str
) -> None:
    r = await client.request(method, "/v1/product/not-a-uuid")
    assert r.status_code == 400


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["GET", "PUT", "PATCH", "DELETE"])
async def test_missing_product_is_not_found_even_for_non_owner(
    client: httpx.AsyncClient, owners, method: str
) -> None:
    await create_product(client, A_AUTH[0])
    r = await client.request(
        method, f"/v1/product/{uuid.uuid4()}", json=product_payload(), auth=B_AUTH
    )
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_existing_product_requires_credentials(client: httpx.AsyncClient, owners) -> None:
    product = await create_product(client, A_AUTH[0])
    url = f"/v1/product/{product['id']}"
    assert (await client.get(url)).status_code == 401
    assert (await client.delete(url, auth=(A_AUTH[0], "wrong-pass"))).status_code == 401
    # Still there.
    assert (await client.get(url, auth=A_AUTH)).status_code == 200


@pytest.mark.asyncio
async def test_body_is_only_decoded_after_ownership(client: httpx.AsyncClient, owners) -> None:
    product = await create_product(client, A_AUTH[0])
    url = f"/v1/product/{product['id']}"
    headers = {"content-type": "application/json"}

    r = await client.request("PATCH", url, content=b"{oops", headers=headers, auth=B_AUTH)
    assert r.status_code == 403
    r = await client.request("PATCH", url, content=b"{oops", headers=headers, auth=A_AUTH)
    assert r.status_code == 400


@pytest.mark.asyncio
@pytest.mark.parametrize("quantity", [2**31, 10**20, 1e20])
async def test_quantity_beyond_column_range_is_bad_input(
    client: httpx.AsyncClient, owners, quantity: object
) -> None:
    expected = {"errors": ["quantity must be at most 2147483647"]}

    r = await client.post("/v1/product", json=product_payload(quantity=quantity), auth=A_AUTH)
    assert r.status_code == 400
    assert r.json() == expected

    product = await create_product(client, A_AUTH[0])
    url = f"/v1/product/{product['id']}"
    r = await client.put(url, json=product_payload(quantity=quantity), auth=A_AUTH)
    assert r.status_code == 400
    assert r.json() == expected
    r = await client.patch(url, json={"quantity": quantity}, auth=A_AUTH)
    assert r.status_code == 400
    assert r.json() == expected

    assert (await client.get(url, auth=A_AUTH)).json() == product


@pytest.mark.asyncio
async def test_missing_quantity_message(client: httpx.AsyncClient, owners) -> None:
    payload = product_payload()
    del payload["quantity"]
    r = await client.post("/v1/product", json=payload, auth=A_AUTH)
    assert r.status_code == 400
    assert r.json() == {"errors": ["quantity is required"]}


@pytest.mark.asyncio
async def test_lone_surrogate_in_product_body_is_bad_input(
    client: httpx.AsyncClient, owners
) -> None:
    r = await client.post(
        "/v1/product",
        content=b'{"name": "\\ud800", "description": "d", "sku": "s", '
        b'"manufacturer": "m", "quantity": 1}',
        headers={"content-type": "application/json"},
        auth=A_AUTH,
    )
    assert r.status_code == 400
    assert r.json() == {"error": "Request body must contain valid Unicode text"}
