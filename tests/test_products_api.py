"""HTTP-level tests for the catalog API.

These tests verify:
- the create/read/update/delete scenario end to end
- status codes for InvalidInput, NotFound and StoreUnavailable
- /health independence from the database
"""

import pytest
from fastapi.testclient import TestClient

from catalog.app import create_app
from catalog.config import build_settings
from catalog.routes.products_fastapi import get_product_repository
from tests.test_product_service import RecordingRepository


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_crud_scenario(client):
    response = client.post("/products", json={"name": "Widget", "price": 9.99})
    assert response.status_code == 201
    created = response.json()
    assert isinstance(created["id"], int)
    assert (created["name"], created["price"]) == ("Widget", 9.99)

    product_url = f"/products/{created['id']}"

    response = client.get(product_url)
    assert response.status_code == 200
    assert response.json() == created

    response = client.put(product_url, json={"name": "Widget", "price": 12.50})
    assert response.status_code == 200
    assert response.json() == {"id": created["id"], "name": "Widget", "price": 12.5}

    response = client.delete(product_url)
    assert response.status_code == 204
    assert response.content == b""

    response = client.get(product_url)
    assert response.status_code == 404
    assert "detail" in response.json()


def test_list_products(client):
    assert client.get("/products").json() == []

    client.post("/products", json={"name": "Widget", "price": 9.99})
    client.post("/products", json={"name": "Gadget", "price": 0})

    response = client.get("/products")
    assert response.status_code == 200
    assert sorted(p["name"] for p in response.json()) == ["Gadget", "Widget"]


def test_deleted_product_is_not_listed(client):
    keep = client.post("/products", json={"name": "Keep", "price": 1}).json()
    gone = client.post("/products", json={"name": "Gone", "price": 2}).json()

    client.delete(f"/products/{gone['id']}")

    assert [p["id"] for p in client.get("/products").json()] == [keep["id"]]


def test_update_does_not_touch_other_rows(client):
    a = client.post("/products", json={"name": "A", "price": 1}).json()
    b = client.post("/products", json={"name": "B", "price": 2}).json()

    client.put(f"/products/{a['id']}", json={"name": "A2", "price": 3})

    assert client.get(f"/products/{b['id']}").json() == b


@pytest.mark.parametrize("body", [
    {"name": "", "price": 1},
    {"name": "   ", "price": 1},
    {"name": "Widget", "price": -1},
    {"name": "Widget"},
    {"price": 1},
    {"name": "Widget", "price": "cheap"},
    {"name": "Widget", "price": "9.99"},
    {"name": 42, "price": 1},
    {},
])
def test_invalid_create_is_400(client, body):
    response = client.post("/products", json=body)

    assert response.status_code == 400
    assert response.json()["detail"]
    assert client.get("/products").json() == []


def test_malformed_json_is_400(client):
    response = client.post(
        "/products", content=b"{not json", headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400


def test_invalid_update_is_400_and_row_unchanged(client):
    created = client.post("/products", json={"name": "Widget", "price": 9.99}).json()

    response = client.put(f"/products/{created['id']}", json={"name": "Widget", "price": -5})

    assert response.status_code == 400
    assert client.get(f"/products/{created['id']}").json() == created


@pytest.mark.parametrize("method", ["get", "put", "delete"])
def test_unknown_id_is_404(client, method):
    kwargs = {"json": {"name": "Widget", "price": 1}} if method == "put" else {}

    response = getattr(client, method)("/products/999", **kwargs)

    assert response.status_code == 404


@pytest.mark.parametrize("method", ["get", "put", "delete"])
def test_id_beyond_integer_range_is_404(client, method):
    kwargs = {"json": {"name": "Widget", "price": 1}} if method == "put" else {}

    response = getattr(client, method)("/products/99999999999999999999", **kwargs)

    assert response.status_code == 404


@pytest.mark.parametrize("method", ["get", "put", "delete"])
def test_underscore_digit_id_is_400(client, method):
    created = client.post("/products", json={"name": "Widget", "price": 9.99}).json()
    kwargs = {"json": {"name": "Widget", "price": 1}} if method == "put" else {}

    response = getattr(client, method)(f"/products/0_{created['id']}", **kwargs)

    assert response.status_code == 400
    assert client.get(f"/products/{created['id']}").json() == created


def test_long_name_is_accepted(client):
    response = client.post("/products", json={"name": "W" * 1000, "price": 1})

    assert response.status_code == 201
    assert response.json()["name"] == "W" * 1000


@pytest.mark.parametrize("method", ["get", "put", "delete"])
def test_malformed_id_is_400(client, method):
    kwargs = {"json": {"name": "Widget", "price": 1}} if method == "put" else {}

    response = getattr(client, method)("/products/abc", **kwargs)

    assert response.status_code == 400


def test_invalid_input_never_reaches_repository(app):
    repository = RecordingRepository()
    app.dependency_overrides[get_product_repository] = lambda: repository

    with TestClient(app) as client:
        response = client.post("/products", json={"name": "Widget", "price": -1})

    assert response.status_code == 400
    assert repository.calls == []


class TestUnreachableStore:

    @pytest.fixture
    def client(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'missing' / 'catalog.db'}"
        app = create_app(build_settings({"DATABASE_URL": url}))
        with TestClient(app) as c:
            yield c

    def test_health_still_healthy(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_list_is_500(self, client):
        assert client.get("/products").status_code == 500

    def test_create_is_500(self, client):
        response = client.post("/products", json={"name": "Widget", "price": 9.99})

        assert response.status_code == 500

    @pytest.mark.parametrize("method", ["get", "put", "delete"])
    def test_by_id_is_500(self, client, method):
        kwargs = {"json": {"name": "Widget", "price": 1}} if method == "put" else {}

        response = getattr(client, method)("/products/1", **kwargs)

        assert response.status_code == 500


def test_docs_disabled_in_production(tmp_path):
    settings = build_settings({
        "DATABASE_URL": f"sqlite:///{tmp_path / 'catalog.db'}",
        "ENVIRONMENT": "production",
    })

    with TestClient(create_app(settings)) as client:
        assert client.get("/docs").status_code == 404
        assert client.get("/openapi.json").status_code == 404
