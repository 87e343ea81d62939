# tests/test_health_checker.py

"""Tests for the catalog health checker service."""

import unittest
from unittest.mock import MagicMock, patch

from src.services.health_checker import (
    HealthChecker,
    HealthResult,
    probe_endpoint,
)


def _make_client(status: int = 200) -> MagicMock:
    """Build a client stub whose session returns *status*."""
    client = MagicMock()
    client.base_url = "https://catalog.test"
    client.settings.DEFAULT_HEADERS = {}
    resp = MagicMock()
    resp.status_code = status
    client.session.get.return_value = resp
    return client


class TestProbeEndpoint(unittest.TestCase):
    """Tests for the single-endpoint probe."""

    def test_ok_status(self) -> None:
        client = _make_client(200)
        result = probe_endpoint(client, "/products?limit=1")
        self.assertEqual(result.status, "ok")
        self.assertEqual(result.endpoint, "/products?limit=1")
        client.session.get.assert_called_once()
        self.assertEqual(
            client.session.get.call_args[0][0],
            "https://catalog.test/products?limit=1",
        )

    def test_down_on_http_error(self) -> None:
        result = probe_endpoint(_make_client(503), "/products")
        self.assertEqual(result.status, "down")
        self.assertIn("503", result.message)

    def test_down_on_exception(self) -> None:
        client = _make_client()
        client.session.get.side_effect = ConnectionError(
            "Connection refused"
        )
        result = probe_endpoint(client, "/products")
        self.assertEqual(result.status, "down")
        self.assertIn("Connection refused", result.message)

    @patch("src.services.health_checker.time.monotonic")
    def test_slow_status(self, mock_monotonic: MagicMock) -> None:
        mock_monotonic.side_effect = [0.0, 6.0]
        result = probe_endpoint(_make_client(200), "/products")
        self.assertEqual(result.status, "slow")
        self.assertAlmostEqual(result.latency_ms, 6000.0)


class TestHealthChecker(unittest.IsolatedAsyncioTestCase):
    """Tests for the concurrent health checker."""

    async def test_check_all_probes_every_endpoint(self) -> None:
        checker = HealthChecker(client=_make_client(200))
        results = await checker.check_all()
        self.assertEqual(len(results), len(HealthChecker.ENDPOINTS))
        for r in results:
            self.assertIsInstance(r, HealthResult)
            self.assertEqual(r.status, "ok")

    async def test_check_all_reports_down(self) -> None:
        checker = HealthChecker(client=_make_client(500))
        results = await checker.check_all()
        self.assertTrue(all(r.status == "down" for r in results))


if __name__ == "__main__":
    unittest.main()
