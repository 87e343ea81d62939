# src/models/view_params.py

"""Filter/sort parameters and aggregate metrics for the catalog view."""

from dataclasses import dataclass
from enum import Enum

ALL_CATEGORIES = "all"
ANY_RATING = "any"


class StockStatus(str, Enum):
    """Mutually exclusive stock buckets used by the status filter."""

    ALL = "all"
    IN_STOCK = "in-stock"
    LOW_STOCK = "low-stock"
    OUT_OF_STOCK = "out-of-stock"


class SortKey(str, Enum):
    TITLE = "title"
    PRICE = "price"
    RATING = "rating"
    STOCK = "stock"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> "SortDirection":
        """Return the opposite direction."""
        if self is SortDirection.ASC:
            return SortDirection.DESC
        return SortDirection.ASC


@dataclass(frozen=True)
class ViewParams:
    """Everything the catalog view engine needs besides the products.

    Numeric bounds are kept as the raw text the user typed; the engine
    decides whether they parse.
    """

    query: str = ""
    category: str = ALL_CATEGORIES
    min_price: str = ""
    max_price: str = ""
    min_rating: str = ""
    stock_status: StockStatus = StockStatus.ALL
    advanced_search: bool = False
    sort_key: SortKey = SortKey.TITLE
    sort_direction: SortDirection = SortDirection.ASC

    def has_active_filters(self) -> bool:
        """True when any filter differs from its default state."""
        return bool(
            self.category != ALL_CATEGORIES
            or self.query
            or self.min_price
            or self.max_price
            or (self.min_rating and self.min_rating != ANY_RATING)
            or self.stock_status is not StockStatus.ALL
            or self.advanced_search
        )

    @staticmethod
    def cleared() -> "ViewParams":
        """Parameters after a 'Clear filters' action."""
        return ViewParams(min_rating=ANY_RATING)


@dataclass(frozen=True)
class BusinessMetrics:
    """Aggregates over the full, unfiltered product collection."""

    total_products: int = 0
    total_categories: int = 0
    average_price: float = 0.0
    low_stock_count: int = 0
    total_value: float = 0.0
