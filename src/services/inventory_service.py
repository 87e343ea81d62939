# src/services/inventory_service.py

"""Owns the in-memory product collection and coordinates catalog calls."""

import asyncio
import logging
from dataclasses import dataclass, field, replace
from typing import Any

from src.config.settings import Settings
from src.filters.catalog_view import (
    compute_business_metrics,
    derive_visible_products,
)
from src.filters.product_validator import ProductValidator
from src.models.product import Product
from src.models.view_params import BusinessMetrics, ViewParams
from src.services.catalog_client import CatalogClient
from src.services.selection import SelectionSet
from src.utils.exceptions import (
    CatalogAPIError,
    EmptySelectionError,
    ProductValidationError,
)

logger = logging.getLogger("catalog_dash.inventory")


@dataclass
class BulkAdjustResult:
    """Per-record outcome of a bulk stock adjustment."""

    delta: int
    updated: list[Product] = field(
        default_factory=lambda: list[Product]()
    )
    failed: dict[int, str] = field(
        default_factory=lambda: dict[int, str]()
    )

    @property
    def succeeded(self) -> bool:
        return not self.failed


class InventoryService:
    """Dashboard controller: fetches, mutates and derives the catalog view.

    The raw collection lives here and is only replaced or patched after
    a request succeeds, so a failed call leaves the previous state
    untouched. Blocking HTTP calls run in worker threads.
    """

    def __init__(self, client: CatalogClient | None = None) -> None:
        self.settings = Settings()
        self.client = client or CatalogClient()
        self.products: list[Product] = []
        self.categories: list[str] = []
        self.selection = SelectionSet()
        self.bulk_mode: bool = False
        self._latest_ticket: int = 0

    # ── Request sequencing ───────────────────────────────

    def _issue_ticket(self) -> int:
        self._latest_ticket += 1
        return self._latest_ticket

    def _is_stale(self, ticket: int) -> bool:
        return ticket != self._latest_ticket

    async def _load(self, ticket: int, fetch: Any, *args: Any) -> bool:
        """Run a list/search call and install its result if still current.

        Returns ``False`` when a newer load was issued meanwhile; the
        stale response (or stale failure) is dropped.
        """
        try:
            page = await asyncio.to_thread(fetch, *args)
        except CatalogAPIError:
            if self._is_stale(ticket):
                logger.warning(
                    "Ignoring failure of superseded request #%d", ticket
                )
                return False
            raise
        if self._is_stale(ticket):
            logger.debug(
                "Discarding stale response #%d (latest #%d)",
                ticket,
                self._latest_ticket,
            )
            return False
        self.products = list(page.products)
        return True

    # ── Loading ──────────────────────────────────────────

    async def refresh(self) -> bool:
        """Replace the collection with the first page of the catalog."""
        ticket = self._issue_ticket()
        return await self._load(
            ticket, self.client.list_products, self.settings.PAGE_LIMIT
        )

    async def search(self, query: str) -> bool:
        """Server-side search; a blank query reloads the full list."""
        if not query.strip():
            return await self.refresh()
        ticket = self._issue_ticket()
        return await self._load(
            ticket, self.client.search_products, query
        )

    async def load_categories(self) -> list[str]:
        self.categories = await asyncio.to_thread(
            self.client.list_categories
        )
        return self.categories

    # ── Derivations ──────────────────────────────────────

    def view(self, params: ViewParams) -> list[Product]:
        return derive_visible_products(self.products, params)

    def metrics(self) -> BusinessMetrics:
        return compute_business_metrics(self.products)

    def find(self, product_id: int) -> Product | None:
        for product in self.products:
            if product.id == product_id:
                return product
        return None

    def _patch(self, product: Product) -> bool:
        """Replace the record with the same id, keeping its position.

        A record missing from the collection (e.g. excluded by a search
        that landed while the update was in flight) is not re-inserted.
        """
        for idx, existing in enumerate(self.products):
            if existing.id == product.id:
                self.products[idx] = product
                return True
        logger.debug(
            "Product %d no longer loaded, skipping local patch", product.id
        )
        return False

    # ── Mutations ────────────────────────────────────────

    async def save_product(
        self,
        data: dict[str, Any],
        editing: Product | None = None,
    ) -> Product:
        """Validate form data, then create or update the product.

        Raises :class:`ProductValidationError` before any request is
        sent when the data is invalid.
        """
        form, errors = ProductValidator.validate(data)
        if form is None:
            raise ProductValidationError(errors)

        if editing is None:
            created = await asyncio.to_thread(
                self.client.create_product, form
            )
            if self.find(created.id) is None:
                self.products.append(created)
            else:
                # The service handed back an id we already hold
                logger.warning(
                    "Created product reused id %d, reloading catalog",
                    created.id,
                )
                try:
                    await self.refresh()
                except CatalogAPIError:
                    # The create itself went through
                    logger.error(
                        "Reload after creating product %d failed",
                        created.id,
                        exc_info=True,
                    )
            return created

        updated = await asyncio.to_thread(
            self.client.update_product,
            replace(editing, **form.model_dump()),
        )
        self._patch(updated)
        return updated

    async def delete_product(self, product_id: int) -> None:
        await asyncio.to_thread(self.client.delete_product, product_id)
        self.products = [p for p in self.products if p.id != product_id]
        self.selection.discard(product_id)

    # ── Bulk editing ─────────────────────────────────────

    def toggle_bulk_mode(self) -> bool:
        """Enter or leave bulk mode; the selection always resets."""
        self.bulk_mode = not self.bulk_mode
        self.selection.clear()
        return self.bulk_mode

    def toggle_selection(self, product_id: int) -> bool:
        return self.selection.toggle(product_id)

    def select_all(self, params: ViewParams) -> None:
        """Select every product in the current view, or none."""
        self.selection.select_all(self.view(params))

    async def bulk_adjust_stock(self, delta: int) -> BulkAdjustResult:
        """Shift stock of every selected product by *delta*, clamped at 0.

        One update per record is sent concurrently and the whole batch
        is awaited. Successful records are patched locally and leave the
        selection; failed ones stay selected and are listed in
        :attr:`BulkAdjustResult.failed`. Nothing is rolled back.
        """
        if not self.selection:
            raise EmptySelectionError()

        result = BulkAdjustResult(delta=delta)
        targets: list[Product] = []
        for product_id in self.selection:
            product = self.find(product_id)
            if product is None:
                result.failed[product_id] = "Product is not loaded"
            else:
                targets.append(
                    replace(product, stock=max(0, product.stock + delta))
                )

        outcomes = await asyncio.gather(
            *(
                asyncio.to_thread(self.client.update_product, target)
                for target in targets
            ),
            return_exceptions=True,
        )

        for target, outcome in zip(targets, outcomes):
            if isinstance(outcome, Product):
                self._patch(outcome)
                self.selection.discard(target.id)
                result.updated.append(outcome)
            elif isinstance(outcome, Exception):
                result.failed[target.id] = str(outcome)
                logger.error(
                    "Stock update failed for product %d: %s",
                    target.id,
                    outcome,
                    exc_info=outcome,
                )
            elif isinstance(outcome, BaseException):
                raise outcome

        logger.info(
            "Bulk stock %+d: %d updated, %d failed",
            delta,
            len(result.updated),
            len(result.failed),
        )
        if result.succeeded:
            self.bulk_mode = False
        return result
