# tests/test_file_manager.py

"""Tests for the FileManager export module."""

import csv
import json
import unittest
from pathlib import Path
from typing import Any
from unittest.mock import patch

from src.models.product import Product
from src.storage.file_manager import FileManager, products_to_dicts


class TestFileManager(unittest.TestCase):
    """Tests for JSON save and CSV export."""

    def setUp(self) -> None:
        """Set up a temp directory for results."""
        import tempfile

        self.tmp_dir = tempfile.mkdtemp()

        def _fake_init(inst: Any) -> None:
            inst.results_dir = Path(self.tmp_dir)

        self._patcher = patch.object(
            FileManager, "__init__", _fake_init
        )
        self._patcher.start()
        self.addCleanup(self._patcher.stop)
        self.fm = FileManager()

    def _sample_products(self) -> list[Product]:
        """Return a small list of test products, in view order."""
        return [
            Product(
                id=2,
                title="Product B",
                price=50.0,
                rating=3.0,
                stock=0,
                brand="Acme",
                category="beauty",
            ),
            Product(
                id=1,
                title="Product A",
                price=100.0,
                discount_percentage=10.0,
                rating=4.5,
                stock=12,
                brand="Glow",
                category="groceries",
            ),
        ]

    def test_save_json_creates_file(self) -> None:
        path = self.fm.save_json("cream", self._sample_products())
        self.assertTrue(path.exists())
        self.assertEqual(path.suffix, ".json")
        self.assertTrue(path.name.startswith("cream_"))

        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        self.assertEqual([d["id"] for d in data], [2, 1])
        self.assertEqual(data[1]["discount_percentage"], 10.0)

    def test_export_csv_keeps_view_order(self) -> None:
        path = self.fm.export_csv("all", self._sample_products())
        self.assertTrue(path.name.startswith("export_all_"))

        with open(path, encoding="utf-8", newline="") as f:
            rows = list(csv.reader(f))
        self.assertEqual(rows[0][:3], ["ID", "Title", "Brand"])
        self.assertEqual([r[0] for r in rows[1:]], ["2", "1"])
        self.assertEqual(rows[1][7], "0")

    def test_label_spaces_replaced(self) -> None:
        path = self.fm.save_json("red lip", [])
        self.assertIn("red_lip_", path.name)

    def test_path_characters_stay_inside_results(self) -> None:
        for label in ("../../etc/passwd", "a/b", "..", "sun.cream"):
            with self.subTest(label=label):
                path = self.fm.export_csv(label, self._sample_products())
                self.assertEqual(path.parent, Path(self.tmp_dir))
                self.assertNotIn("/", path.name)
                self.assertTrue(path.exists())

    def test_empty_label_falls_back(self) -> None:
        path = self.fm.save_json("", [])
        self.assertTrue(path.name.startswith("catalog_"))

    def test_products_to_dicts(self) -> None:
        dicts = products_to_dicts(self._sample_products())
        self.assertEqual(dicts[0]["title"], "Product B")
        self.assertEqual(
            set(dicts[0]),
            {"id", "title", "brand", "category", "price",
             "discount_percentage", "rating", "stock"},
        )


class TestFileManagerInit(unittest.TestCase):
    """Construction creates the results directory."""

    def test_creates_results_dir(self) -> None:
        fm = FileManager()
        self.assertTrue(fm.results_dir.is_dir())


if __name__ == "__main__":
    unittest.main()
