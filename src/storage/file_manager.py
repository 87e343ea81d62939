# src/storage/file_manager.py

"""Handles exporting the current catalog view to disk."""

import csv
import json
import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Any

from src.config.settings import Settings
from src.models.product import Product

logger = logging.getLogger("catalog_dash.storage")

# Anything but word characters and dashes could escape results/
_UNSAFE_CHARS = re.compile(r"[^\w-]")

_CSV_COLUMNS = [
    "ID",
    "Title",
    "Brand",
    "Category",
    "Price",
    "Discount %",
    "Rating",
    "Stock",
]


def products_to_dicts(products: list[Product]) -> list[dict[str, Any]]:
    """Serialise products to plain dicts for JSON output."""
    return [
        {
            "id": p.id,
            "title": p.title,
            "brand": p.brand,
            "category": p.category,
            "price": p.price,
            "discount_percentage": p.discount_percentage,
            "rating": p.rating,
            "stock": p.stock,
        }
        for p in products
    ]


class FileManager:
    """Writes snapshots of the visible product list."""

    def __init__(self) -> None:
        self.results_dir: Path = Settings.RESULTS_DIR
        self.results_dir.mkdir(parents=True, exist_ok=True)
        logger.debug("FileManager initialised, results_dir=%s", self.results_dir)

    def _target(self, prefix: str, label: str, suffix: str) -> Path:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        safe_label = _UNSAFE_CHARS.sub("_", label) or "catalog"
        return self.results_dir / f"{prefix}{safe_label}_{timestamp}{suffix}"

    def save_json(self, label: str, products: list[Product]) -> Path:
        """Save products, in view order, to a timestamped JSON file."""
        filepath = self._target("", label, ".json")
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(
                products_to_dicts(products), f, ensure_ascii=False, indent=2
            )

        logger.info(
            "Saved %d products for '%s' to %s",
            len(products),
            label,
            filepath,
        )
        return filepath

    def export_csv(self, label: str, products: list[Product]) -> Path:
        """Export products, in view order, to a CSV file."""
        filepath = self._target("export_", label, ".csv")
        with open(filepath, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(_CSV_COLUMNS)
            for p in products:
                writer.writerow(
                    [
                        p.id,
                        p.title,
                        p.brand,
                        p.category,
                        p.price,
                        p.discount_percentage,
                        p.rating,
                        p.stock,
                    ]
                )

        logger.info(
            "Exported %d products for '%s' to %s",
            len(products),
            label,
            filepath,
        )
        return filepath
