# tests/test_product_model.py

"""Tests for the Product and ProductPage dataclasses."""

import unittest

from src.models.product import Product, ProductPage

_API_RECORD = {
    "id": 1,
    "title": "Essence Mascara Lash Princess",
    "description": "Popular mascara",
    "category": "beauty",
    "price": 9.99,
    "discountPercentage": 7.17,
    "rating": 4.94,
    "stock": 5,
    "brand": "Essence",
    "thumbnail": "https://cdn.example.com/1/thumb.png",
    "images": ["https://cdn.example.com/1/1.png"],
    "tags": ["beauty", "mascara"],
}


class TestProductModel(unittest.TestCase):
    """Product dataclass unit tests."""

    def test_from_api_maps_camel_case(self) -> None:
        product = Product.from_api(_API_RECORD)
        self.assertEqual(product.id, 1)
        self.assertEqual(product.title, "Essence Mascara Lash Princess")
        self.assertEqual(product.discount_percentage, 7.17)
        self.assertEqual(product.rating, 4.94)
        self.assertEqual(product.stock, 5)
        self.assertEqual(product.brand, "Essence")
        self.assertEqual(product.images, ["https://cdn.example.com/1/1.png"])

    def test_from_api_missing_optional_fields(self) -> None:
        """Records without brand/rating (some categories) still load."""
        product = Product.from_api({"id": 7, "title": "Apple", "price": 1.99})
        self.assertEqual(product.brand, "")
        self.assertEqual(product.rating, 0.0)
        self.assertEqual(product.stock, 0)
        self.assertEqual(product.images, [])

    def test_to_api_round_trip(self) -> None:
        product = Product.from_api(_API_RECORD)
        self.assertEqual(Product.from_api(product.to_api()), product)
        self.assertIn("discountPercentage", product.to_api())

    def test_discounted_price(self) -> None:
        product = Product(id=1, title="X", price=200.0, discount_percentage=25)
        self.assertAlmostEqual(product.discounted_price, 150.0)

    def test_stock_label(self) -> None:
        self.assertEqual(
            Product(id=1, title="X", price=1.0, stock=3).stock_label,
            "3 in stock",
        )
        self.assertEqual(
            Product(id=1, title="X", price=1.0, stock=0).stock_label,
            "Out of stock",
        )

    def test_equality(self) -> None:
        a = Product(id=1, title="A", price=10.0)
        b = Product(id=1, title="A", price=10.0)
        self.assertEqual(a, b)

    def test_images_default_not_shared(self) -> None:
        a = Product(id=1, title="A", price=1.0)
        b = Product(id=2, title="B", price=1.0)
        a.images.append("x")
        self.assertEqual(b.images, [])


class TestProductPage(unittest.TestCase):
    """ProductPage parsing."""

    def test_from_api(self) -> None:
        page = ProductPage.from_api(
            {"products": [_API_RECORD], "total": 194, "skip": 0, "limit": 1}
        )
        self.assertEqual(len(page.products), 1)
        self.assertEqual(page.total, 194)
        self.assertEqual(page.limit, 1)

    def test_empty_payload(self) -> None:
        page = ProductPage.from_api({})
        self.assertEqual(page.products, [])
        self.assertEqual(page.total, 0)


if __name__ == "__main__":
    unittest.main()
