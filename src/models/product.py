# src/models/product.py

"""Product data models for inter-module data flow."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Product:
    """A single catalog record as held by the dashboard."""

    id: int
    title: str
    price: float
    description: str = ""
    discount_percentage: float = 0.0
    rating: float = 0.0
    stock: int = 0
    brand: str = ""
    category: str = ""
    thumbnail: str = ""
    images: list[str] = field(
        default_factory=lambda: list[str]()
    )

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "Product":
        """Build a Product from the catalog service's JSON shape."""
        return cls(
            id=int(payload["id"]),
            title=str(payload.get("title") or ""),
            price=float(payload.get("price") or 0.0),
            description=str(payload.get("description") or ""),
            discount_percentage=float(
                payload.get("discountPercentage") or 0.0
            ),
            rating=float(payload.get("rating") or 0.0),
            stock=int(payload.get("stock") or 0),
            brand=str(payload.get("brand") or ""),
            category=str(payload.get("category") or ""),
            thumbnail=str(payload.get("thumbnail") or ""),
            images=[str(i) for i in payload.get("images") or []],
        )

    def to_api(self) -> dict[str, Any]:
        """Render the camelCase payload the catalog service expects."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "price": self.price,
            "discountPercentage": self.discount_percentage,
            "rating": self.rating,
            "stock": self.stock,
            "brand": self.brand,
            "category": self.category,
            "thumbnail": self.thumbnail,
            "images": list(self.images),
        }

    @property
    def discounted_price(self) -> float:
        """Price after applying the listed discount percentage."""
        return self.price * (1 - self.discount_percentage / 100)

    @property
    def stock_label(self) -> str:
        if self.stock > 0:
            return f"{self.stock} in stock"
        return "Out of stock"


@dataclass
class ProductPage:
    """One page of a list or search response, with pagination metadata."""

    products: list[Product] = field(
        default_factory=lambda: list[Product]()
    )
    total: int = 0
    skip: int = 0
    limit: int = 0

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "ProductPage":
        products = [
            Product.from_api(item)
            for item in payload.get("products") or []
        ]
        return cls(
            products=products,
            total=int(payload.get("total") or len(products)),
            skip=int(payload.get("skip") or 0),
            limit=int(payload.get("limit") or len(products)),
        )
