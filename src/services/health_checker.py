# src/services/health_checker.py

"""Catalog service connectivity health checker."""

import asyncio
import logging
import time
from dataclasses import dataclass

from src.config.settings import Settings
from src.services.catalog_client import CatalogClient

logger = logging.getLogger("catalog_dash.health")

_HEALTH_TIMEOUT = 10  # seconds per probe


@dataclass
class HealthResult:
    """Result of a single endpoint health check."""

    endpoint: str
    status: str  # "ok", "slow", "down"
    latency_ms: float
    message: str


def probe_endpoint(client: CatalogClient, path: str) -> HealthResult:
    """Time a single GET against the catalog service."""
    url = f"{client.base_url}{path}"
    start = time.monotonic()
    try:
        resp = client.session.get(
            url,
            headers=client.settings.DEFAULT_HEADERS,
            timeout=_HEALTH_TIMEOUT,
        )
        elapsed_ms = (time.monotonic() - start) * 1000

        if resp.status_code != 200:
            return HealthResult(
                endpoint=path,
                status="down",
                latency_ms=elapsed_ms,
                message=f"HTTP {resp.status_code}",
            )

        if elapsed_ms > Settings.HEALTH_SLOW_MS:
            return HealthResult(
                endpoint=path,
                status="slow",
                latency_ms=elapsed_ms,
                message="High latency",
            )

        return HealthResult(
            endpoint=path,
            status="ok",
            latency_ms=elapsed_ms,
            message="",
        )

    except Exception as exc:
        elapsed_ms = (time.monotonic() - start) * 1000
        return HealthResult(
            endpoint=path,
            status="down",
            latency_ms=elapsed_ms,
            message=str(exc)[:80],
        )


class HealthChecker:
    """Runs concurrent probes against the catalog endpoints we rely on."""

    ENDPOINTS: list[str] = [
        "/products?limit=1",
        "/products/search?q=a",
        "/products/categories",
    ]

    def __init__(self, client: CatalogClient | None = None) -> None:
        self.client = client or CatalogClient()

    async def check_all(self) -> list[HealthResult]:
        """Probe every endpoint concurrently."""
        tasks = [
            asyncio.to_thread(probe_endpoint, self.client, path)
            for path in self.ENDPOINTS
        ]
        results: list[HealthResult] = list(
            await asyncio.gather(*tasks)
        )
        for r in results:
            logger.info(
                "Health check %s: %s (%.0fms) %s",
                r.endpoint,
                r.status,
                r.latency_ms,
                r.message,
            )
        return results
