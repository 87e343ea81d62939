# src/ui/product_form.py

"""Modal create/edit form with inline field errors."""

import logging

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.suggester import SuggestFromList
from textual.widgets import Button, Input, Label, Static

from src.models.product import Product
from src.services.inventory_service import InventoryService
from src.utils.exceptions import CatalogAPIError, ProductValidationError

logger = logging.getLogger("catalog_dash.ui")

FORM_FIELDS: list[tuple[str, str]] = [
    ("title", "Title"),
    ("description", "Description"),
    ("price", "Price"),
    ("brand", "Brand"),
    ("category", "Category"),
    ("stock", "Stock"),
]


class ProductFormScreen(ModalScreen[Product | None]):
    """Create a product, or edit *editing* when given.

    The screen stays open when validation or the request fails and
    dismisses with the saved product on success.
    """

    BINDINGS = [("escape", "cancel", "Cancel")]

    def __init__(
        self,
        service: InventoryService,
        editing: Product | None = None,
        categories: list[str] | None = None,
    ) -> None:
        super().__init__()
        self.service = service
        self.editing = editing
        self.categories = categories or []

    def _initial_values(self) -> dict[str, str]:
        if self.editing is None:
            return {
                "title": "",
                "description": "",
                "price": "0",
                "brand": "",
                "category": "",
                "stock": "0",
            }
        p = self.editing
        return {
            "title": p.title,
            "description": p.description,
            "price": str(p.price),
            "brand": p.brand,
            "category": p.category,
            "stock": str(p.stock),
        }

    def compose(self) -> ComposeResult:
        heading = "Edit Product" if self.editing else "Add New Product"
        values = self._initial_values()
        rows = []
        for name, label in FORM_FIELDS:
            suggester = (
                SuggestFromList(self.categories, case_sensitive=False)
                if name == "category" and self.categories
                else None
            )
            rows.append(Label(label))
            rows.append(
                Input(value=values[name], id=f"field_{name}", suggester=suggester)
            )
            rows.append(Static("", id=f"error_{name}", classes="field-error"))

        yield Vertical(
            Static(heading, id="form_title"),
            *rows,
            Horizontal(
                Button(
                    "Update Product" if self.editing else "Create Product",
                    variant="primary",
                    id="save_btn",
                ),
                Button("Cancel", id="cancel_btn"),
                id="form_buttons",
            ),
            id="product_form",
        )

    def form_data(self) -> dict[str, str]:
        return {
            name: self.query_one(f"#field_{name}", Input).value
            for name, _label in FORM_FIELDS
        }

    def show_errors(self, errors: dict[str, str]) -> None:
        for name, _label in FORM_FIELDS:
            self.query_one(f"#error_{name}", Static).update(
                errors.get(name, "")
            )

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "save_btn":
            await self.submit()
        elif event.button.id == "cancel_btn":
            self.dismiss(None)

    def action_cancel(self) -> None:
        self.dismiss(None)

    async def submit(self) -> None:
        """Validate and send the form; close only on success."""
        self.show_errors({})
        try:
            saved = await self.service.save_product(
                self.form_data(), self.editing
            )
        except ProductValidationError as exc:
            self.show_errors(exc.errors)
            return
        except CatalogAPIError:
            action = "update" if self.editing else "create"
            logger.error("Failed to %s product", action, exc_info=True)
            self.notify(f"Failed to {action} product", severity="error")
            return

        verb = "updated" if self.editing else "created"
        self.notify(f"Product {verb} successfully!")
        self.dismiss(saved)
