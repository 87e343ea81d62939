# src/config/settings.py

"""Central configuration for the catalog_dash inventory dashboard."""

import os
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the catalog_dash inventory dashboard."""

    # --- Remote catalog ---
    CATALOG_API_URL: str = os.getenv(
        "CATALOG_API_URL", "https://dummyjson.com"
    ).rstrip("/")
    REQUEST_TIMEOUT: int = 15           # Seconds before a request times out
    PAGE_LIMIT: int = 100               # Records fetched per list call
    HEALTH_SLOW_MS: float = 5000.0      # Probe latency considered "slow"

    # --- Inventory rules ---
    LOW_STOCK_THRESHOLD: int = 10       # Metrics: stock < threshold
    STOCK_STEPS: list[int] = [10, 1, -1, -10]
    RATING_CHOICES: list[tuple[str, str]] = [
        ("Any Rating", "any"),
        ("4.5+ Stars", "4.5"),
        ("4.0+ Stars", "4.0"),
        ("3.5+ Stars", "3.5"),
        ("3.0+ Stars", "3.0"),
    ]
    STOCK_CHOICES: list[tuple[str, str]] = [
        ("All Stock", "all"),
        ("In Stock (10+)", "in-stock"),
        ("Low Stock (1-10)", "low-stock"),
        ("Out of Stock", "out-of-stock"),
    ]
    SORT_CHOICES: list[tuple[str, str]] = [
        ("Title", "title"),
        ("Price", "price"),
        ("Rating", "rating"),
        ("Stock", "stock"),
    ]

    # --- HTTP ---
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": "application/json",
        "Accept-Language": "en-US,en;q=0.9",
        "Content-Type": "application/json",
    }

    # --- Logging ---
    CONSOLE_LOG_LEVEL: str = os.getenv("CATALOG_LOG_LEVEL", "WARNING")
    LOG_KEEP_RUNS: int = 20             # Run logs kept in logs/

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    RESULTS_DIR: Path = BASE_DIR / "results"
    LOGS_DIR: Path = BASE_DIR / "logs"
