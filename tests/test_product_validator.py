# tests/test_product_validator.py

"""Tests for product form validation."""

import unittest
from typing import Any

from src.filters.product_validator import ProductForm, ProductValidator


def _valid_form(**overrides: Any) -> dict[str, Any]:
    """Return form data that passes validation, with overrides."""
    data: dict[str, Any] = {
        "title": "Face Cream",
        "description": "Hydrating day cream",
        "price": 19.99,
        "brand": "Glow",
        "category": "beauty",
        "stock": 12,
    }
    data.update(overrides)
    return data


class TestProductValidator(unittest.TestCase):
    """ProductValidator.validate behaviour."""

    def test_valid_data(self) -> None:
        form, errors = ProductValidator.validate(_valid_form())
        self.assertIsInstance(form, ProductForm)
        self.assertEqual(errors, {})

    def test_text_inputs_are_coerced(self) -> None:
        """Values typed into text inputs arrive as strings."""
        form, errors = ProductValidator.validate(
            _valid_form(price="12.50", stock="7")
        )
        self.assertEqual(errors, {})
        assert form is not None
        self.assertEqual(form.price, 12.5)
        self.assertEqual(form.stock, 7)

    def test_required_fields(self) -> None:
        _form, errors = ProductValidator.validate(
            _valid_form(title="", description="", brand="", category="")
        )
        self.assertEqual(errors["title"], "Title is required")
        self.assertEqual(errors["description"], "Description is required")
        self.assertEqual(errors["brand"], "Brand is required")
        self.assertEqual(errors["category"], "Category is required")

    def test_missing_field(self) -> None:
        data = _valid_form()
        del data["brand"]
        _form, errors = ProductValidator.validate(data)
        self.assertEqual(errors, {"brand": "Brand is required"})

    def test_length_limits(self) -> None:
        cases = {
            "title": (101, "Title must be less than 100 characters"),
            "description": (
                501,
                "Description must be less than 500 characters",
            ),
            "brand": (51, "Brand must be less than 50 characters"),
        }
        for field, (length, message) in cases.items():
            with self.subTest(field=field):
                _form, errors = ProductValidator.validate(
                    _valid_form(**{field: "x" * length})
                )
                self.assertEqual(errors, {field: message})

    def test_length_at_limit_is_ok(self) -> None:
        _form, errors = ProductValidator.validate(
            _valid_form(title="x" * 100, brand="y" * 50)
        )
        self.assertEqual(errors, {})

    def test_price_bounds(self) -> None:
        for price, message in (
            (0, "Price must be greater than 0"),
            (-5, "Price must be greater than 0"),
            (1000000, "Price is too high"),
        ):
            with self.subTest(price=price):
                _form, errors = ProductValidator.validate(
                    _valid_form(price=price)
                )
                self.assertEqual(errors, {"price": message})

    def test_price_edges_accepted(self) -> None:
        for price in (0.01, 999999):
            with self.subTest(price=price):
                _form, errors = ProductValidator.validate(
                    _valid_form(price=price)
                )
                self.assertEqual(errors, {})

    def test_stock_bounds(self) -> None:
        for stock, message in (
            (-1, "Stock cannot be negative"),
            (10000, "Stock is too high"),
        ):
            with self.subTest(stock=stock):
                _form, errors = ProductValidator.validate(
                    _valid_form(stock=stock)
                )
                self.assertEqual(errors, {"stock": message})

    def test_stock_must_be_whole(self) -> None:
        _form, errors = ProductValidator.validate(_valid_form(stock=2.5))
        self.assertEqual(errors, {"stock": "Stock must be a whole number"})

    def test_non_numeric_price(self) -> None:
        _form, errors = ProductValidator.validate(_valid_form(price="abc"))
        self.assertEqual(errors, {"price": "Price must be a number"})

    def test_extra_fields_ignored(self) -> None:
        form, errors = ProductValidator.validate(
            _valid_form(id=5, thumbnail="x")
        )
        self.assertEqual(errors, {})
        self.assertIsNotNone(form)


if __name__ == "__main__":
    unittest.main()
