# src/filters/catalog_view.py

"""Client-side filtering, sorting and aggregation over the product list.

Everything here is pure: functions read the collection they are given,
return new lists or values, and never touch the network. Callers are
expected to re-run :func:`derive_visible_products` on every parameter
change, so each stage is a single linear pass.
"""

import logging
import re
from collections.abc import Callable

from src.config.settings import Settings
from src.models.product import Product
from src.models.view_params import (
    ALL_CATEGORIES,
    ANY_RATING,
    BusinessMetrics,
    SortDirection,
    SortKey,
    StockStatus,
    ViewParams,
)

logger = logging.getLogger("catalog_dash.filters")

# Upper edge of the "low stock" display bucket (inclusive)
_LOW_STOCK_BUCKET_MAX = 10

_LEADING_NUMBER = re.compile(
    r"\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))"
)

_SORT_KEYS: dict[SortKey, Callable[[Product], str | float]] = {
    SortKey.TITLE: lambda p: p.title.casefold(),
    SortKey.PRICE: lambda p: p.price,
    SortKey.RATING: lambda p: p.rating,
    SortKey.STOCK: lambda p: p.stock,
}


def parse_bound(text: str | None) -> float | None:
    """Parse a numeric filter input, returning ``None`` if it is unusable.

    Like a browser's ``parseFloat``, the longest leading number wins:
    ``"10abc"`` is 10 and ``"1_000"`` is 1. Empty strings and text with
    no leading number mean "no constraint".
    """
    if text is None:
        return None
    match = _LEADING_NUMBER.match(text)
    if match is None:
        return None
    return float(match.group(1))


def _matches_stock_status(product: Product, status: StockStatus) -> bool:
    if status is StockStatus.IN_STOCK:
        return product.stock > _LOW_STOCK_BUCKET_MAX
    if status is StockStatus.LOW_STOCK:
        return 0 < product.stock <= _LOW_STOCK_BUCKET_MAX
    if status is StockStatus.OUT_OF_STOCK:
        return product.stock == 0
    return True


def _matches_text(product: Product, needle: str) -> bool:
    return (
        needle in product.title.casefold()
        or needle in product.description.casefold()
        or needle in product.brand.casefold()
    )


def derive_visible_products(
    products: list[Product],
    params: ViewParams,
) -> list[Product]:
    """Return the filtered, stably sorted products for the current view.

    Stages run in order and each one narrows the previous result:
    category, price range, minimum rating, stock bucket, advanced text
    search, then the sort. Basic (non-advanced) text search is served
    by the catalog service, so no local text predicate applies then.
    """
    visible = list(products)

    if params.category != ALL_CATEGORIES:
        visible = [p for p in visible if p.category == params.category]

    min_price = parse_bound(params.min_price)
    if min_price is not None:
        visible = [p for p in visible if p.price >= min_price]
    max_price = parse_bound(params.max_price)
    if max_price is not None:
        visible = [p for p in visible if p.price <= max_price]

    if params.min_rating and params.min_rating != ANY_RATING:
        threshold = parse_bound(params.min_rating)
        if threshold is not None:
            visible = [p for p in visible if p.rating >= threshold]

    if params.stock_status is not StockStatus.ALL:
        visible = [
            p
            for p in visible
            if _matches_stock_status(p, params.stock_status)
        ]

    if params.query and params.advanced_search:
        needle = params.query.casefold()
        visible = [p for p in visible if _matches_text(p, needle)]

    # sorted() is stable for reverse=True as well
    visible = sorted(
        visible,
        key=_SORT_KEYS[params.sort_key],
        reverse=params.sort_direction is SortDirection.DESC,
    )

    logger.debug(
        "Derived view: %d of %d products (sort=%s %s)",
        len(visible),
        len(products),
        params.sort_key.value,
        params.sort_direction.value,
    )
    return visible


def compute_business_metrics(products: list[Product]) -> BusinessMetrics:
    """Aggregate counts and values over the full, unfiltered collection."""
    categories: set[str] = set()
    price_sum = 0.0
    total_value = 0.0
    low_stock = 0

    for product in products:
        categories.add(product.category)
        price_sum += product.price
        total_value += product.price * product.stock
        if product.stock < Settings.LOW_STOCK_THRESHOLD:
            low_stock += 1

    count = len(products)
    return BusinessMetrics(
        total_products=count,
        total_categories=len(categories),
        average_price=price_sum / count if count else 0.0,
        low_stock_count=low_stock,
        total_value=total_value,
    )


def describe_active_filters(params: ViewParams) -> list[str]:
    """Short labels for every active filter, in display order."""
    chips: list[str] = []
    if params.query:
        chips.append(f"Search: {params.query}")
    if params.category != ALL_CATEGORIES:
        chips.append(f"Category: {params.category}")
    if params.min_price or params.max_price:
        chips.append(
            f"Price: {params.min_price or '0'} - {params.max_price or '∞'}"
        )
    if params.min_rating and params.min_rating != ANY_RATING:
        chips.append(f"Rating: {params.min_rating}+ stars")
    if params.stock_status is not StockStatus.ALL:
        chips.append(
            f"Stock: {params.stock_status.value.replace('-', ' ')}"
        )
    if params.advanced_search:
        chips.append("Advanced Search")
    return chips
