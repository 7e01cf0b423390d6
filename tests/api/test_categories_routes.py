"""Category route tests — envelope shape, status codes, uniqueness and delete guard."""

import uuid

import pytest

BASE = "/api/v1/categories"


class TestCreateCategory:
    async def test_created_record_echoes_input(self, client):
        resp = await client.post(BASE, json={"name": "Books", "description": "Paper"})

        assert resp.status_code == 201
        body = resp.json()
        assert body["success"] is True
        assert body["message"] == "Category created successfully"
        data = body["data"]
        assert data["name"] == "Books"
        assert data["description"] == "Paper"
        assert data["productCount"] == 0
        uuid.UUID(data["id"])
        assert "createdAt" in data and "updatedAt" in data

    async def test_description_defaults_to_null(self, client):
        resp = await client.post(BASE, json={"name": "Books"})

        assert resp.status_code == 201
        assert resp.json()["data"]["description"] is None

    async def test_name_is_trimmed(self, client):
        resp = await client.post(BASE, json={"name": "  Books  "})

        assert resp.json()["data"]["name"] == "Books"

    async def test_duplicate_name_conflicts(self, client):
        await client.post(BASE, json={"name": "Books"})

        resp = await client.post(BASE, json={"name": "Books"})

        assert resp.status_code == 409
        assert resp.json() == {
            "success": False,
            "message": "Category with this name already exists",
        }

    @pytest.mark.parametrize("payload", [
        {},
        {"name": ""},
        {"name": "   "},
        {"name": "x" * 101},
        {"name": "Books", "description": "d" * 501},
        {"name": None},
    ])
    async def test_invalid_body_rejected(self, client, payload):
        resp = await client.post(BASE, json=payload)

        assert resp.status_code == 400
        body = resp.json()
        assert body["success"] is False
        assert body["message"] == "Validation failed"
        assert body["error"]


class TestGetCategory:
    async def test_returns_record(self, client, category_id):
        resp = await client.get(f"{BASE}/{category_id}")

        assert resp.status_code == 200
        assert resp.json()["message"] == "Category retrieved successfully"
        assert resp.json()["data"]["id"] == category_id

    async def test_unknown_id_is_404(self, client):
        resp = await client.get(f"{BASE}/{uuid.uuid4()}")

        assert resp.status_code == 404
        assert resp.json() == {"success": False, "message": "Category not found"}

    async def test_malformed_id_is_400(self, client):
        resp = await client.get(f"{BASE}/not-a-uuid")

        assert resp.status_code == 400
        assert resp.json()["message"] == "Invalid ID format"

    async def test_product_count_reflects_products(self, client, create_product, category_id):
        await create_product()
        await create_product()

        resp = await client.get(f"{BASE}/{category_id}")

        assert resp.json()["data"]["productCount"] == 2


class TestListCategories:
    async def test_empty_list_has_meta(self, client):
        resp = await client.get(BASE)

        assert resp.status_code == 200
        body = resp.json()
        assert body["message"] == "Categories retrieved successfully"
        assert body["data"] == []
        assert body["meta"] == {"page": 1, "limit": 10, "total": 0, "totalPages": 0}

    async def test_pagination_meta(self, client):
        for i in range(5):
            await client.post(BASE, json={"name": f"Category {i}"})

        resp = await client.get(BASE, params={"page": 2, "limit": 2})

        body = resp.json()
        assert len(body["data"]) == 2
        assert body["meta"] == {"page": 2, "limit": 2, "total": 5, "totalPages": 3}

    async def test_page_beyond_range_is_empty(self, client):
        await client.post(BASE, json={"name": "Books"})

        resp = await client.get(BASE, params={"page": 9})

        assert resp.status_code == 200
        assert resp.json()["data"] == []
        assert resp.json()["meta"]["total"] == 1

    async def test_search_matches_name_or_description(self, client):
        await client.post(BASE, json={"name": "Books", "description": "Paper"})
        await client.post(BASE, json={"name": "Garden", "description": "Outdoor BOOKshelves"})
        await client.post(BASE, json={"name": "Toys"})

        resp = await client.get(BASE, params={"search": "book"})

        names = {c["name"] for c in resp.json()["data"]}
        assert names == {"Books", "Garden"}

    @pytest.mark.parametrize("params", [
        {"limit": 101},
        {"limit": 0},
        {"page": 0},
        {"page": "abc"},
    ])
    async def test_invalid_query_rejected(self, client, params):
        resp = await client.get(BASE, params=params)

        assert resp.status_code == 400
        assert resp.json()["message"] == "Invalid query parameters"


class TestUpdateCategory:
    async def test_partial_update_changes_only_sent_fields(self, client, category_id):
        resp = await client.put(f"{BASE}/{category_id}", json={"name": "Gadgets"})

        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["name"] == "Gadgets"
        assert data["description"] == "Devices and gadgets"

    async def test_empty_body_is_noop(self, client, category_id):
        before = (await client.get(f"{BASE}/{category_id}")).json()["data"]

        resp = await client.put(f"{BASE}/{category_id}", json={})

        assert resp.status_code == 200
        assert resp.json()["data"] == before

    async def test_null_description_clears_it(self, client, category_id):
        resp = await client.put(f"{BASE}/{category_id}", json={"description": None})

        assert resp.json()["data"]["description"] is None

    async def test_null_name_rejected(self, client, category_id):
        resp = await client.put(f"{BASE}/{category_id}", json={"name": None})

        assert resp.status_code == 400

    async def test_rename_to_taken_name_conflicts(self, client, category_id):
        await client.post(BASE, json={"name": "Books"})

        resp = await client.put(f"{BASE}/{category_id}", json={"name": "Books"})

        assert resp.status_code == 409
        assert resp.json()["message"] == "Category with this name already exists"

    async def test_keeping_own_name_is_not_a_conflict(self, client, category_id):
        resp = await client.put(f"{BASE}/{category_id}", json={"name": "Electronics"})

        assert resp.status_code == 200

    async def test_unknown_id_is_404(self, client):
        resp = await client.put(f"{BASE}/{uuid.uuid4()}", json={"name": "Books"})

        assert resp.status_code == 404


class TestDeleteCategory:
    async def test_delete_empty_category(self, client, category_id):
        resp = await client.delete(f"{BASE}/{category_id}")

        assert resp.status_code == 204
        assert resp.content == b""
        assert (await client.get(f"{BASE}/{category_id}")).status_code == 404

    async def test_delete_with_products_conflicts(self, client, create_product, category_id):
        await create_product()

        resp = await client.delete(f"{BASE}/{category_id}")

        assert resp.status_code == 409
        assert resp.json()["message"] == "Cannot delete category with associated products"

    async def test_unknown_id_is_404(self, client):
        resp = await client.delete(f"{BASE}/{uuid.uuid4()}")

        assert resp.status_code == 404
