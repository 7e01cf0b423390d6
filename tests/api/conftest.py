"""Route test fixtures — HTTP client wired to the per-test database."""

import pytest
from httpx import ASGITransport, AsyncClient

from catalog_api.main import app


@pytest.fixture
async def client(db_manager):
    """AsyncClient against the app; lifespan is bypassed, state set directly."""
    app.state.db_manager = db_manager
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    del app.state.db_manager


@pytest.fixture
async def category_id(client):
    resp = await client.post(
        "/api/v1/categories",
        json={"name": "Electronics", "description": "Devices and gadgets"},
    )
    assert resp.status_code == 201
    return resp.json()["data"]["id"]


@pytest.fixture
def create_product(client, category_id):
    """Factory: POST a product in the default category, overriding any field."""
    counter = {"n": 0}

    async def _create(**overrides):
        counter["n"] += 1
        body = {
            "name": f"Product {counter['n']}",
            "price": 10,
            "sku": f"SKU-{counter['n']:03d}",
            "categoryId": category_id,
        }
        body.update(overrides)
        resp = await client.post("/api/v1/products", json=body)
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]

    return _create
