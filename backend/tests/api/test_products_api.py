"""HTTP tests for the product routes, backed by the in-memory store."""

import pytest
from fastapi.testclient import TestClient

from catalog.api.dependencies.db import get_product_service
from catalog.main import app
from catalog.services.product_service import ProductService
from tests.fakes import UnavailableProductStore

BASE = "/api/products"


@pytest.fixture
def client(service):
    app.dependency_overrides[get_product_service] = lambda: service
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def _create(client, **overrides) -> dict:
    body = {
        "name": "Widget",
        "description": "A useful widget",
        "price": 19.99,
        "category": "Tools",
        "stock": 10,
    }
    body.update(overrides)
    response = client.post(f"{BASE}/", json=body)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_and_get(client):
    created = _create(client, name="Smartphone", price=999.99)
    assert created["id"] == 1
    assert created["price"] == 999.99
    assert created["created_at"]

    response = client.get(f"{BASE}/{created['id']}")
    assert response.status_code == 200
    assert response.json() == created


def test_get_missing_returns_404(client):
    assert client.get(f"{BASE}/99").status_code == 404


def test_create_reports_all_violations(client):
    response = client.post(
        f"{BASE}/", json={"name": "", "price": 0, "stock": -2}
    )
    assert response.status_code == 400
    fields = {e["field"] for e in response.json()["errors"]}
    assert fields == {"name", "price", "stock"}


def test_list_paginates_and_sorts(client):
    for name in ("Cherry", "Apple", "Banana"):
        _create(client, name=name)
    response = client.get(f"{BASE}/", params={"page": 0, "size": 2, "sort_by": "name"})
    body = response.json()
    assert [p["name"] for p in body["items"]] == ["Apple", "Banana"]
    assert body["total"] == 3
    assert body["total_pages"] == 2

    body = client.get(f"{BASE}/", params={"page": 9, "size": 2}).json()
    assert body["items"] == []
    assert body["total"] == 3


def test_list_rejects_unknown_sort_field(client):
    response = client.get(f"{BASE}/", params={"sort_by": "secret"})
    assert response.status_code == 400
    assert "name" in response.json()["allowed"]


def test_list_rejects_bad_direction(client):
    response = client.get(f"{BASE}/", params={"sort_dir": "up"})
    assert response.status_code == 400


def test_partial_update_keeps_other_fields(client):
    created = _create(client, name="Original", price=149.99)
    response = client.put(f"{BASE}/{created['id']}", json={"price": 199.99})
    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Original"
    assert body["price"] == 199.99


def test_patch_null_clears_category(client):
    created = _create(client, category="Tools")
    body = client.patch(f"{BASE}/{created['id']}", json={"category": None}).json()
    assert body["category"] is None
    assert body["description"] == created["description"]


def test_update_missing_returns_404(client):
    assert client.put(f"{BASE}/5", json={"name": "Ghost"}).status_code == 404


def test_delete_twice(client):
    created = _create(client)
    assert client.delete(f"{BASE}/{created['id']}").status_code == 204
    assert client.delete(f"{BASE}/{created['id']}").status_code == 404


def test_search_and_category_routes(client):
    _create(client, name="Smartphone", price=999.99, category="Electronics", stock=10)
    _create(client, name="Laptop", price=1299.99, category="Electronics", stock=5)
    _create(client, name="Jacket", category="Clothing", stock=2)

    search = client.get(f"{BASE}/search", params={"q": "phone"}).json()
    assert [p["name"] for p in search["items"]] == ["Smartphone"]

    by_category = client.get(f"{BASE}/category/electronics").json()
    assert [p["name"] for p in by_category["items"]] == ["Laptop", "Smartphone"]

    count = client.get(f"{BASE}/category/ELECTRONICS/count").json()
    assert count == {"category": "ELECTRONICS", "count": 2}

    assert client.get(f"{BASE}/categories").json() == ["Clothing", "Electronics"]


def test_low_stock_uses_default_threshold(client):
    for stock in (3, 5, 6):
        _create(client, name=f"Item {stock}", stock=stock)
    body = client.get(f"{BASE}/low-stock").json()
    assert sorted(p["stock"] for p in body) == [3, 5]

    body = client.get(f"{BASE}/low-stock", params={"threshold": 3}).json()
    assert [p["stock"] for p in body] == [3]


def test_price_range(client):
    for price in (5, 15, 25):
        _create(client, price=price)
    body = client.get(
        f"{BASE}/price-range", params={"min_price": 10, "max_price": 30}
    ).json()
    assert sorted(p["price"] for p in body["items"]) == [15, 25]


def test_store_failure_maps_to_500():
    app.dependency_overrides[get_product_service] = lambda: ProductService(
        UnavailableProductStore()
    )
    try:
        with TestClient(app) as c:
            response = c.get(f"{BASE}/1")
    finally:
        app.dependency_overrides.clear()
    assert response.status_code == 500
    assert response.json() == {"detail": "A database error occurred"}


def test_liveness(client):
    assert client.get("/health/live").json()["status"] == "ok"


def test_readiness_checks_database(client):
    body = client.get("/health/ready").json()
    assert body["checks"]["database"]["status"] == "healthy"
