"""Tests for health and pricing endpoints."""

import pytest
from httpx import ASGITransport, AsyncClient

from storefront.main import app
from storefront.services.catalog_client import CatalogError, ProductNotFound

BASIC_PRODUCT = {
    "id": "p1",
    "productType": "basic",
    "directColors": [
        {"id": "c1", "regularPrice": 1000, "discountPrice": 800, "stockQuantity": 5, "isDefault": True}
    ],
}


@pytest.fixture
async def client():
    """Create test client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    """Test health endpoint returns ok."""
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"ok": True}


@pytest.mark.asyncio
async def test_resolve_endpoint(client: AsyncClient):
    response = await client.post("/v1/pricing/resolve", json=BASIC_PRODUCT)
    assert response.status_code == 200
    data = response.json()

    assert data["regularPrice"] == 1000
    assert data["discountPrice"] == 800
    assert data["hasDiscount"] is True
    assert data["discount"] == 20
    assert data["stockQuantity"] == 5
    assert data["displayPrice"] == 800
    assert data["outOfStock"] is False
    assert data["formattedPrice"] == "৳800"
    assert data["formattedRegularPrice"] == "৳1,000"


@pytest.mark.asyncio
async def test_resolve_endpoint_degrades_malformed_product(client: AsyncClient):
    response = await client.post("/v1/pricing/resolve", json={"productType": "region", "regions": "broken"})
    assert response.status_code == 200
    data = response.json()
    assert data["regularPrice"] == 0
    assert data["outOfStock"] is True


@pytest.mark.asyncio
async def test_cart_endpoint(client: AsyncClient):
    response = await client.post(
        "/v1/pricing/cart",
        json={
            "items": [
                {"product": BASIC_PRODUCT, "quantity": 2, "selectedVariants": {"priceType": "regular"}},
                {"product": {"id": "p2", "price": 300}, "quantity": 1},
            ]
        },
    )
    assert response.status_code == 200
    data = response.json()

    assert data["itemCount"] == 3
    assert data["total"] == 2300
    assert data["formattedTotal"] == "৳2,300"
    assert data["currency"] == "BDT"
    assert data["items"][0]["productId"] == "p1"
    assert data["items"][0]["priceType"] == "regular"
    assert data["items"][0]["price"] == 1000
    assert data["items"][0]["lineTotal"] == 2000
    assert data["items"][1]["priceType"] == "offer"


@pytest.mark.asyncio
async def test_cart_endpoint_rejects_zero_quantity(client: AsyncClient):
    response = await client.post(
        "/v1/pricing/cart",
        json={"items": [{"product": BASIC_PRODUCT, "quantity": 0}]},
    )
    assert response.status_code == 400
    assert response.json()["detail"]["error"]["code"] == "INVALID_CART"


class _FakeCatalog:
    def __init__(self, product=None, error: Exception | None = None):
        self.product = product
        self.error = error

    async def get_product(self, slug: str) -> dict:
        if self.error is not None:
            raise self.error
        return self.product


@pytest.mark.asyncio
async def test_product_price_endpoint(client: AsyncClient, monkeypatch: pytest.MonkeyPatch):
    """Avoid catalog dependency: patch the client used by the pricing router."""
    from storefront.routes import pricing as pricing_routes

    monkeypatch.setattr(pricing_routes, "get_catalog_client", lambda: _FakeCatalog(product=BASIC_PRODUCT))

    response = await client.get("/v1/pricing/products/galaxy-a55")
    assert response.status_code == 200
    assert response.json()["discountPrice"] == 800


@pytest.mark.asyncio
async def test_product_price_endpoint_not_found(client: AsyncClient, monkeypatch: pytest.MonkeyPatch):
    from storefront.routes import pricing as pricing_routes

    monkeypatch.setattr(
        pricing_routes, "get_catalog_client", lambda: _FakeCatalog(error=ProductNotFound("missing"))
    )

    response = await client.get("/v1/pricing/products/missing")
    assert response.status_code == 404
    assert response.json()["detail"]["error"]["code"] == "PRODUCT_NOT_FOUND"


@pytest.mark.asyncio
async def test_product_price_endpoint_catalog_down(client: AsyncClient, monkeypatch: pytest.MonkeyPatch):
    from storefront.routes import pricing as pricing_routes

    monkeypatch.setattr(
        pricing_routes, "get_catalog_client", lambda: _FakeCatalog(error=CatalogError("timeout"))
    )

    response = await client.get("/v1/pricing/products/slow")
    assert response.status_code == 502
    assert response.json()["detail"]["error"]["code"] == "CATALOG_UNAVAILABLE"


@pytest.mark.asyncio
async def test_resolve_endpoint_huge_integer_price_degrades(client: AsyncClient):
    body = '{"directColors": [{"regularPrice": 1' + "0" * 400 + ', "stockQuantity": 0.5}]}'
    response = await client.post(
        "/v1/pricing/resolve",
        content=body,
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["regularPrice"] == 0
    assert data["currency"] == "BDT"


@pytest.mark.asyncio
async def test_resolve_endpoint_fractional_stock_is_in_stock(client: AsyncClient):
    response = await client.post("/v1/pricing/resolve", json={"price": 100, "stock": 0.5})
    assert response.status_code == 200
    data = response.json()
    assert data["stockQuantity"] == 0.5
    assert data["outOfStock"] is False
