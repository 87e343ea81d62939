# src/filters/product_validator.py

"""Product form validation: block bad create/update data before sending."""

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger("catalog_dash.filters")


class ProductForm(BaseModel):
    """Editable product fields accepted by create and update."""

    model_config = ConfigDict(extra="ignore")

    title: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1, max_length=500)
    price: float = Field(..., ge=0.01, le=999999)
    brand: str = Field(..., min_length=1, max_length=50)
    category: str = Field(..., min_length=1)
    stock: int = Field(..., ge=0, le=9999)


_LABELS: dict[str, str] = {
    "title": "Title",
    "description": "Description",
    "price": "Price",
    "brand": "Brand",
    "category": "Category",
    "stock": "Stock",
}

# Field-specific wording for numeric bounds
_BOUND_MESSAGES: dict[tuple[str, str], str] = {
    ("price", "greater_than_equal"): "Price must be greater than 0",
    ("price", "less_than_equal"): "Price is too high",
    ("stock", "greater_than_equal"): "Stock cannot be negative",
    ("stock", "less_than_equal"): "Stock is too high",
}


def _message_for(error: dict[str, Any]) -> tuple[str, str]:
    """Turn one pydantic error into a (field, message) pair."""
    field = str(error["loc"][0]) if error["loc"] else "__root__"
    label = _LABELS.get(field, field.capitalize())
    kind = error["type"]
    ctx = error.get("ctx") or {}

    if (field, kind) in _BOUND_MESSAGES:
        return field, _BOUND_MESSAGES[(field, kind)]
    if kind in ("missing", "string_too_short"):
        return field, f"{label} is required"
    if kind == "string_too_long":
        limit = ctx.get("max_length")
        return field, f"{label} must be less than {limit} characters"
    if kind in ("int_parsing", "int_from_float"):
        return field, f"{label} must be a whole number"
    if kind == "float_parsing":
        return field, f"{label} must be a number"
    return field, f"{label}: {error['msg']}"


class ProductValidator:
    """Validate product form data and collect per-field messages."""

    @staticmethod
    def validate(
        data: dict[str, Any],
    ) -> tuple[ProductForm | None, dict[str, str]]:
        """Validate raw form data.

        Returns the parsed form and an empty dict on success, or
        ``None`` and a field-to-message mapping on failure. Only the
        first message per field is kept.
        """
        try:
            return ProductForm.model_validate(data), {}
        except ValidationError as exc:
            errors: dict[str, str] = {}
            for error in exc.errors():
                field, message = _message_for(dict(error))
                errors.setdefault(field, message)
            logger.info(
                "Product form rejected: %s",
                ", ".join(sorted(errors)),
            )
            return None, errors
