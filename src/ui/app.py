# src/ui/app.py

"""Terminal UI for the catalog_dash inventory dashboard."""

import logging
from dataclasses import replace
from typing import cast

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.widgets import (
    Button,
    Checkbox,
    DataTable,
    Footer,
    Header,
    Input,
    LoadingIndicator,
    Select,
    Static,
)

from src.config.settings import Settings
from src.filters.catalog_view import describe_active_filters
from src.models.product import Product
from src.models.view_params import (
    ALL_CATEGORIES,
    SortKey,
    StockStatus,
    ViewParams,
)
from src.services.inventory_service import InventoryService
from src.storage.file_manager import FileManager
from src.ui.product_form import ProductFormScreen
from src.utils.exceptions import CatalogAPIError, EmptySelectionError

logger = logging.getLogger("catalog_dash.ui")

_DETAILED_COLUMNS = (
    "", "Title", "Brand", "Category", "Price", "Discount", "Rating", "Stock",
)
_SIMPLE_COLUMNS = ("", "Title", "Category", "Price", "Rating")


def _step_button_id(delta: int) -> str:
    direction = "up" if delta > 0 else "down"
    return f"stock_{direction}_{abs(delta)}"


def _category_label(category: str) -> str:
    return category[:1].upper() + category[1:]


class CatalogDashApp(App[object]):
    """Terminal UI for the catalog_dash inventory dashboard."""

    CSS_PATH = "styles.css"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("a", "add_product", "Add"),
        Binding("d", "delete_product", "Delete"),
        Binding("b", "toggle_bulk", "Bulk Edit"),
        Binding("t", "toggle_select", "Select", show=False),
        Binding("v", "toggle_simple_view", "Simple View"),
        Binding("o", "toggle_sort_direction", "Sort Dir"),
        Binding("x", "clear_filters", "Clear"),
        Binding("r", "reload", "Reload"),
        Binding("e", "export", "Export CSV"),
    ]

    def __init__(self, service: InventoryService | None = None) -> None:
        super().__init__()
        self.settings = Settings()
        self.service = service or InventoryService()
        self.params = ViewParams()
        self.visible_products: list[Product] = []
        self.simple_view: bool = False
        self._step_ids = {
            _step_button_id(step): step
            for step in self.settings.STOCK_STEPS
        }

    # ── Layout ───────────────────────────────────────────

    def compose(self) -> ComposeResult:
        """Build the widget tree for the TUI."""
        step_buttons = [
            Button(f"{step:+d} Stock", id=_step_button_id(step))
            for step in self.settings.STOCK_STEPS
        ]

        yield Header()
        yield Container(
            Static("📦 Product Dashboard", id="title"),
            Static("", id="metrics"),

            Horizontal(
                Button("Select All", id="select_all_btn"),
                Static("0 products selected", id="selection_count"),
                *step_buttons,
                id="bulk_panel",
            ),

            Horizontal(
                Input(placeholder="Search products...", id="search_input"),
                Select(
                    [("All Categories", ALL_CATEGORIES)],
                    value=ALL_CATEGORIES,
                    allow_blank=False,
                    id="category_select",
                ),
                Select(
                    self.settings.SORT_CHOICES,
                    value=SortKey.TITLE.value,
                    allow_blank=False,
                    id="sort_select",
                ),
                Button("↑ Asc", id="sort_dir_btn"),
                Button("Clear", id="clear_btn"),
                id="search_bar",
            ),

            Horizontal(
                Input(placeholder="Min price", id="min_price"),
                Input(placeholder="Max price", id="max_price"),
                Select(
                    self.settings.RATING_CHOICES,
                    value="any",
                    allow_blank=False,
                    id="rating_select",
                ),
                Select(
                    self.settings.STOCK_CHOICES,
                    value=StockStatus.ALL.value,
                    allow_blank=False,
                    id="stock_select",
                ),
                Checkbox(
                    "Search in description & brand",
                    value=False,
                    id="advanced_check",
                ),
                id="advanced_filters",
            ),

            Static("", id="active_filters"),
            Static("Loading...", id="status"),
            LoadingIndicator(id="loader"),
            cast(
                DataTable[str | Text],
                DataTable(
                    id="results_table",
                    zebra_stripes=True,
                    cursor_type="row",
                ),
            ),
            id="main_container",
        )
        yield Footer()

    def on_mount(self) -> None:
        """Configure the table and kick off the initial load."""
        self._table().add_columns(*_DETAILED_COLUMNS)
        self.query_one("#bulk_panel").display = False
        self.query_one("#loader", LoadingIndicator).display = False
        self.run_worker(self.load_catalog(), group="load")

    def _table(self) -> DataTable[str | Text]:
        return cast(
            DataTable[str | Text],
            self.query_one("#results_table", DataTable),
        )

    def _set_loading(self, loading: bool) -> None:
        self.query_one("#loader", LoadingIndicator).display = loading

    # ── Loading ──────────────────────────────────────────

    async def load_catalog(self) -> None:
        """Fetch products and categories, then render."""
        self._set_loading(True)
        try:
            await self.service.refresh()
        except CatalogAPIError:
            logger.error("Initial product fetch failed", exc_info=True)
            self.notify("Failed to fetch products", severity="error")
        finally:
            self._set_loading(False)

        try:
            categories = await self.service.load_categories()
        except CatalogAPIError:
            logger.error("Category fetch failed", exc_info=True)
        else:
            self.query_one("#category_select", Select).set_options(
                [("All Categories", ALL_CATEGORIES)]
                + [(_category_label(c), c) for c in categories]
            )

        self.refresh_view()

    async def run_search(self, query: str) -> None:
        """Server-side search; stale responses are dropped by the service."""
        self._set_loading(True)
        try:
            applied = await self.service.search(query)
        except CatalogAPIError:
            logger.error("Search for '%s' failed", query, exc_info=True)
            self.notify("Failed to search products", severity="error")
            return
        finally:
            self._set_loading(False)
        if applied:
            self.refresh_view()

    # ── Rendering ────────────────────────────────────────

    def refresh_view(self) -> None:
        """Recompute the derived view and metrics, then redraw."""
        self.visible_products = self.service.view(self.params)
        self._render_metrics()
        self._render_table()
        self._render_filters()
        self._render_bulk_panel()

        status = self.query_one("#status", Static)
        if self.visible_products:
            status.update(f"Showing {len(self.visible_products)} products")
        elif self.params.query or self.params.category != ALL_CATEGORIES:
            status.update("No products found. Try adjusting your search or filters")
        else:
            status.update("No products found. Press 'a' to add your first product")

    def _render_metrics(self) -> None:
        metrics = self.service.metrics()
        low = metrics.low_stock_count
        low_text = f"[bold orange1]⚠ Low Stock: {low}[/]" if low else "Low Stock: 0"
        self.query_one("#metrics", Static).update(
            f"Total Products: [bold]{metrics.total_products}[/]   "
            f"Categories: [bold]{metrics.total_categories}[/]   "
            f"Avg. Price: [bold]${metrics.average_price:,.2f}[/]   "
            f"Total Value: [bold]${metrics.total_value:,.0f}[/]   "
            f"{low_text}"
        )

    def _render_filters(self) -> None:
        chips = describe_active_filters(self.params)
        self.query_one("#active_filters", Static).update(
            "Active filters: " + " · ".join(chips) if chips else ""
        )

    def _render_bulk_panel(self) -> None:
        self.query_one("#bulk_panel").display = self.service.bulk_mode
        selection = self.service.selection
        self.query_one("#selection_count", Static).update(
            f"{len(selection)} products selected"
        )
        label = "Deselect All" if selection.covers(self.visible_products) else "Select All"
        self.query_one("#select_all_btn", Button).label = label
        for button_id in self._step_ids:
            self.query_one(f"#{button_id}", Button).disabled = not selection

    def _render_table(self) -> None:
        table = self._table()
        cursor_row = table.cursor_row
        table.clear(columns=True)
        table.add_columns(
            *(_SIMPLE_COLUMNS if self.simple_view else _DETAILED_COLUMNS)
        )

        for p in self.visible_products:
            mark = ""
            if self.service.bulk_mode:
                mark = "☑" if p.id in self.service.selection else "☐"
            price = Text(f"${p.discounted_price:,.2f}", style="bold")
            if p.discount_percentage > 0:
                price.append(f" ${p.price:,.2f}", style="dim strike")
            rating = f"⭐ {p.rating:.1f}"

            if self.simple_view:
                table.add_row(
                    mark, p.title[:50], p.category, price, rating,
                    key=str(p.id),
                )
                continue

            if p.stock == 0:
                stock_style = "red"
            elif p.stock <= 10:
                stock_style = "yellow"
            else:
                stock_style = ""
            discount = (
                f"-{p.discount_percentage:.0f}%"
                if p.discount_percentage > 0
                else ""
            )
            table.add_row(
                mark,
                p.title[:50],
                p.brand,
                p.category,
                price,
                discount,
                rating,
                Text(p.stock_label, style=stock_style),
                key=str(p.id),
            )

        if self.visible_products:
            table.move_cursor(row=min(cursor_row, len(self.visible_products) - 1))

    def _current_product(self) -> Product | None:
        row = self._table().cursor_row
        if 0 <= row < len(self.visible_products):
            return self.visible_products[row]
        return None

    # ── Filter events ────────────────────────────────────

    def on_input_changed(self, event: Input.Changed) -> None:
        """Re-derive on every keystroke; basic search goes to the server."""
        input_id = event.input.id
        if input_id == "search_input":
            self.params = replace(self.params, query=event.value)
            if self.params.advanced_search:
                self.refresh_view()
            else:
                self.run_worker(self.run_search(event.value), group="search")
        elif input_id == "min_price":
            self.params = replace(self.params, min_price=event.value)
            self.refresh_view()
        elif input_id == "max_price":
            self.params = replace(self.params, max_price=event.value)
            self.refresh_view()

    def on_select_changed(self, event: Select.Changed) -> None:
        value = str(event.value)
        select_id = event.select.id
        if select_id == "category_select":
            self.params = replace(self.params, category=value)
        elif select_id == "sort_select":
            self.params = replace(self.params, sort_key=SortKey(value))
        elif select_id == "rating_select":
            self.params = replace(self.params, min_rating=value)
        elif select_id == "stock_select":
            self.params = replace(self.params, stock_status=StockStatus(value))
        else:
            return
        self.refresh_view()

    def on_checkbox_changed(self, event: Checkbox.Changed) -> None:
        if event.checkbox.id == "advanced_check":
            self.params = replace(self.params, advanced_search=event.value)
            if not event.value and self.params.query:
                # Basic mode relies on a server-filtered collection
                self.run_worker(
                    self.run_search(self.params.query), group="search"
                )
            else:
                self.refresh_view()

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button click events."""
        button_id = event.button.id or ""
        if button_id == "sort_dir_btn":
            self.action_toggle_sort_direction()
        elif button_id == "clear_btn":
            await self.action_clear_filters()
        elif button_id == "select_all_btn":
            self.service.select_all(self.params)
            self.refresh_view()
        elif button_id in self._step_ids:
            await self.bulk_adjust(self._step_ids[button_id])

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        """Toggle selection in bulk mode, otherwise open the editor."""
        if not 0 <= event.cursor_row < len(self.visible_products):
            return
        product = self.visible_products[event.cursor_row]
        if self.service.bulk_mode:
            self.service.toggle_selection(product.id)
            self.refresh_view()
        else:
            self._open_form(product)

    # ── Actions ──────────────────────────────────────────

    def action_toggle_sort_direction(self) -> None:
        direction = self.params.sort_direction.flipped()
        self.params = replace(self.params, sort_direction=direction)
        self.query_one("#sort_dir_btn", Button).label = (
            "↑ Asc" if direction.value == "asc" else "↓ Desc"
        )
        self.refresh_view()

    async def action_clear_filters(self) -> None:
        """Reset every filter and reload the full catalog."""
        self.params = ViewParams.cleared()
        self.query_one("#search_input", Input).value = ""
        self.query_one("#min_price", Input).value = ""
        self.query_one("#max_price", Input).value = ""
        self.query_one("#category_select", Select).value = ALL_CATEGORIES
        self.query_one("#sort_select", Select).value = SortKey.TITLE.value
        self.query_one("#rating_select", Select).value = "any"
        self.query_one("#stock_select", Select).value = StockStatus.ALL.value
        self.query_one("#advanced_check", Checkbox).value = False
        self.query_one("#sort_dir_btn", Button).label = "↑ Asc"
        await self.load_catalog()

    async def action_reload(self) -> None:
        await self.load_catalog()

    def action_toggle_simple_view(self) -> None:
        self.simple_view = not self.simple_view
        self.refresh_view()

    def action_toggle_bulk(self) -> None:
        self.service.toggle_bulk_mode()
        self.refresh_view()

    def action_toggle_select(self) -> None:
        product = self._current_product()
        if product is None or not self.service.bulk_mode:
            return
        self.service.toggle_selection(product.id)
        self.refresh_view()

    def action_add_product(self) -> None:
        self._open_form(None)

    def _open_form(self, product: Product | None) -> None:
        self.push_screen(
            ProductFormScreen(
                self.service,
                editing=product,
                categories=self.service.categories,
            ),
            self._on_form_closed,
        )

    def _on_form_closed(self, saved: Product | None) -> None:
        if saved is not None:
            self.refresh_view()

    async def action_delete_product(self) -> None:
        """Delete the product under the cursor."""
        product = self._current_product()
        if product is None:
            self.notify("No product selected", severity="warning")
            return
        try:
            await self.service.delete_product(product.id)
        except CatalogAPIError:
            logger.error("Delete of product %d failed", product.id, exc_info=True)
            self.notify("Failed to delete product", severity="error")
            return
        self.notify("Product deleted successfully")
        self.refresh_view()

    async def bulk_adjust(self, delta: int) -> None:
        """Apply a stock step to every selected product."""
        self._set_loading(True)
        try:
            result = await self.service.bulk_adjust_stock(delta)
        except EmptySelectionError as exc:
            self.notify(str(exc), severity="error")
            return
        finally:
            self._set_loading(False)

        if result.succeeded:
            self.notify(f"Updated stock for {len(result.updated)} products")
        else:
            total = len(result.updated) + len(result.failed)
            self.notify(
                f"Failed to update stock for {len(result.failed)} of "
                f"{total} products",
                severity="error",
            )
        self.refresh_view()

    def action_export(self) -> None:
        """Export the visible products to a CSV file."""
        if not self.visible_products:
            self.notify("No products to export", severity="warning")
            return
        try:
            path = FileManager().export_csv(
                self.params.query or self.params.category, self.visible_products
            )
            logger.info("Exported view to %s", path)
            self.notify(f"Exported to {path}")
        except OSError as e:
            logger.error("Failed to export view", exc_info=True)
            self.notify(f"Export failed: {e}", severity="error")
