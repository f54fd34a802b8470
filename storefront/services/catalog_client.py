"""Client for the storefront catalog REST API.

Only product lookup by slug is needed here: the product JSON is handed to
the price resolver untouched. The API wraps some responses in a
{"data": {...}} envelope and returns others bare; both are accepted.
"""

import logging
from typing import Any

import httpx

from storefront.settings import get_settings

logger = logging.getLogger("uvicorn.error")


class CatalogError(RuntimeError):
    pass


class ProductNotFound(CatalogError):
    pass


class CatalogClient:
    """Async client for catalog product endpoints."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.catalog_api_url).rstrip("/")
        self.timeout = timeout or settings.catalog_timeout_seconds
        self._transport = transport
        self._http_client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._http_client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None

    async def get_product(self, slug: str) -> dict[str, Any]:
        """Fetch a product by slug.

        Raises:
            ProductNotFound: If the catalog answers 404.
            CatalogError: On transport errors, other HTTP errors or an unexpected payload.
        """
        client = await self._get_client()
        logger.info(f"Fetching product from catalog: slug={slug}")

        try:
            resp = await client.get(f"/products/{slug}")
        except httpx.HTTPError as e:
            logger.error(f"Catalog request failed for slug={slug}: {e}")
            raise CatalogError(f"Catalog request failed: {e}") from e

        if resp.status_code == 404:
            raise ProductNotFound(f"Product {slug} not found")
        if resp.status_code != 200:
            logger.error(f"Catalog API error: {resp.status_code} - {resp.text[:200]}")
            raise CatalogError(f"Catalog API returned {resp.status_code}")

        try:
            data = resp.json()
        except ValueError as e:
            raise CatalogError("Catalog returned invalid JSON") from e

        if isinstance(data, dict) and isinstance(data.get("data"), dict):
            data = data["data"]
        if not isinstance(data, dict):
            raise CatalogError("Unexpected product payload from catalog")
        return data


_client: CatalogClient | None = None


def get_catalog_client() -> CatalogClient:
    """Shared client used by the API routes."""
    global _client
    if _client is None:
        _client = CatalogClient()
    return _client


async def close_catalog_client() -> None:
    global _client
    if _client is not None:
        await _client.close()
        _client = None
