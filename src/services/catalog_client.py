# src/services/catalog_client.py

"""Thin JSON client for the remote catalog service's product endpoints."""

import logging
from typing import Any

from curl_cffi import requests as curl_requests

from src.config.settings import Settings
from src.filters.product_validator import ProductForm
from src.models.product import Product, ProductPage
from src.utils.exceptions import CatalogAPIError


class CatalogClient:
    """Wraps the catalog service's CRUD, search and category endpoints.

    Every call is a single blocking request. Non-2xx responses and
    transport failures raise :class:`CatalogAPIError`; nothing is
    retried, callers decide how to surface the failure.
    """

    def __init__(self, base_url: str | None = None) -> None:
        self.logger = logging.getLogger("catalog_dash.client")
        self.settings = Settings()
        self.base_url = (base_url or self.settings.CATALOG_API_URL).rstrip("/")
        self.session = curl_requests.Session(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )
        self._request_timeout: int = self.settings.REQUEST_TIMEOUT

    def _request(
        self,
        operation: str,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        payload: dict[str, Any] | None = None,
    ) -> Any:
        """Send one request and return the decoded JSON body."""
        url = f"{self.base_url}{path}"
        try:
            resp = self.session.request(
                method,
                url,
                params=params,
                json=payload,
                headers=self.settings.DEFAULT_HEADERS,
                timeout=self._request_timeout,
            )
        except Exception as exc:
            self.logger.error(
                "%s %s failed: %s", method, url, exc, exc_info=True
            )
            raise CatalogAPIError(operation) from exc

        if not 200 <= resp.status_code < 300:
            self.logger.warning(
                "%s %s returned HTTP %d",
                method,
                url,
                resp.status_code,
            )
            raise CatalogAPIError(operation, resp.status_code)

        try:
            return resp.json()
        except ValueError as exc:
            self.logger.error(
                "%s %s returned a non-JSON body", method, url
            )
            raise CatalogAPIError(operation, resp.status_code) from exc

    def list_products(self, limit: int = 30, skip: int = 0) -> ProductPage:
        """Fetch one page of products."""
        data = self._request(
            "fetch products",
            "GET",
            "/products",
            params={"limit": limit, "skip": skip},
        )
        page = ProductPage.from_api(data)
        self.logger.info(
            "Fetched %d products (skip=%d, total=%d)",
            len(page.products),
            page.skip,
            page.total,
        )
        return page

    def get_product(self, product_id: int) -> Product:
        data = self._request(
            "fetch product", "GET", f"/products/{product_id}"
        )
        return Product.from_api(data)

    def create_product(self, form: ProductForm) -> Product:
        """Create a product; the service assigns the identifier."""
        data = self._request(
            "create product",
            "POST",
            "/products/add",
            payload=form.model_dump(),
        )
        created = Product.from_api({**form.model_dump(), **data})
        self.logger.info("Created product %d", created.id)
        return created

    def update_product(self, product: Product) -> Product:
        """Replace a product's fields; returns the service's record."""
        payload = product.to_api()
        data = self._request(
            "update product",
            "PUT",
            f"/products/{product.id}",
            payload=payload,
        )
        updated = Product.from_api({**payload, **data})
        self.logger.info(
            "Updated product %d (stock=%d)", updated.id, updated.stock
        )
        return updated

    def delete_product(self, product_id: int) -> dict[str, Any]:
        data: dict[str, Any] = self._request(
            "delete product", "DELETE", f"/products/{product_id}"
        )
        self.logger.info("Deleted product %d", product_id)
        return data

    def search_products(self, query: str) -> ProductPage:
        """Server-side title search."""
        data = self._request(
            "search products",
            "GET",
            "/products/search",
            params={"q": query},
        )
        page = ProductPage.from_api(data)
        self.logger.info(
            "Search '%s' matched %d products", query, len(page.products)
        )
        return page

    def list_categories(self) -> list[str]:
        """Return distinct category names in the order the service lists them.

        Newer service versions return objects instead of plain names;
        those are reduced to their ``slug`` (or ``name``).
        """
        data = self._request(
            "fetch categories", "GET", "/products/categories"
        )
        if not isinstance(data, list):
            return []

        categories: list[str] = []
        for entry in data:
            if isinstance(entry, dict):
                name = str(entry.get("slug") or entry.get("name") or "")
            else:
                name = str(entry)
            if name and name not in categories:
                categories.append(name)
        return categories
