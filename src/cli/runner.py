# src/cli/runner.py

"""Headless CLI listing: fetch, derive the view, print it."""

import json
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

from src.config.settings import Settings
from src.models.product import Product
from src.models.view_params import BusinessMetrics, ViewParams
from src.services.inventory_service import InventoryService
from src.storage.file_manager import FileManager, products_to_dicts
from src.utils.exceptions import CatalogAPIError

logger = logging.getLogger("catalog_dash.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def _print_table(products: list[Product]) -> None:
    """Render a Rich table of products to stdout, in view order."""
    table = Table(
        title="Products",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Title", max_width=50)
    table.add_column("Brand", style="magenta")
    table.add_column("Category")
    table.add_column("Price", justify="right", style="green")
    table.add_column("Rating", justify="center")
    table.add_column("Stock", justify="right")

    for idx, p in enumerate(products, 1):
        stock_style = "red" if p.stock == 0 else ""
        table.add_row(
            str(idx),
            str(p.id),
            p.title[:50],
            p.brand or "—",
            p.category,
            f"${p.discounted_price:,.2f}",
            f"{p.rating:.1f}",
            f"[{stock_style}]{p.stock}[/{stock_style}]"
            if stock_style
            else str(p.stock),
        )

    Console().print(table)


def _print_metrics(metrics: BusinessMetrics) -> None:
    """Business overview line on stderr."""
    low_style = "yellow" if metrics.low_stock_count else "dim"
    _err.print(
        f"[bold]Products:[/bold] {metrics.total_products}  "
        f"[bold]Categories:[/bold] {metrics.total_categories}  "
        f"[bold]Avg. price:[/bold] ${metrics.average_price:,.2f}  "
        f"[bold]Total value:[/bold] ${metrics.total_value:,.2f}  "
        f"[{low_style}]Low stock: {metrics.low_stock_count}[/{low_style}]"
    )


def _export(
    products: list[Product],
    label: str,
    export_format: str,
) -> None:
    file_manager = FileManager()
    try:
        if export_format == "csv":
            path = file_manager.export_csv(label, products)
        else:
            path = file_manager.save_json(label, products)
        _err.print(f"[dim]Saved → {path}[/dim]")
    except OSError as exc:
        logger.error("Export failed: %s", exc, exc_info=True)
        _err.print(f"[red]Export failed: {exc}[/red]")


async def cli_list(
    params: ViewParams,
    output_format: str,
    export_format: str | None = None,
    output_dir: str | None = None,
) -> int:
    """Run a headless listing and return an exit code (0=ok, 1=fail)."""
    if output_dir is not None:
        Settings.RESULTS_DIR = Path(output_dir)

    service = InventoryService()
    _err.print(f"[bold]Catalog:[/bold] {service.client.base_url}")

    try:
        if params.query and not params.advanced_search:
            await service.search(params.query)
        else:
            await service.refresh()
    except CatalogAPIError as exc:
        logger.error("Listing failed: %s", exc)
        _err.print(f"[red]Error: {exc}[/red]")
        return 1

    _print_metrics(service.metrics())
    visible = service.view(params)

    if not visible:
        _err.print("[yellow]No products found.[/yellow]")
        return 1

    _err.print(
        f"[green]✓ Showing {len(visible)} of {len(service.products)}"
        " products[/green]"
    )

    if export_format is not None:
        _export(visible, params.query or params.category, export_format)

    if output_format == "table":
        _print_table(visible)
    else:
        json.dump(
            products_to_dicts(visible),
            sys.stdout,
            ensure_ascii=False,
            indent=2,
        )
        sys.stdout.write("\n")

    return 0


async def run_health_check() -> int:
    """Run connectivity health check on the catalog endpoints."""
    from src.services.health_checker import HealthChecker

    _err.print("[bold]Running catalog health check...[/bold]")
    checker = HealthChecker()
    results = await checker.check_all()

    table = Table(
        title="Catalog Health Check",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("Endpoint", style="bold")
    table.add_column("Status", justify="center")
    table.add_column("Latency", justify="right")
    table.add_column("Notes", style="dim")

    any_down = False
    for r in results:
        if r.status == "ok":
            status = "[green]✅ OK[/green]"
        elif r.status == "slow":
            status = "[yellow]⚠️  SLOW[/yellow]"
        else:
            status = "[red]❌ DOWN[/red]"
            any_down = True

        latency = (
            f"{r.latency_ms:.0f}ms"
            if r.latency_ms > 0
            else "—"
        )
        table.add_row(
            r.endpoint, status, latency, r.message,
        )

    Console().print(table)
    return 1 if any_down else 0
