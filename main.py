# main.py

"""Entry point for the catalog_dash inventory dashboard (TUI or headless CLI)."""

import argparse
import asyncio
import logging
import sys

from src.config.logging_config import setup_logging
from src.config.settings import Settings
from src.models.view_params import (
    ALL_CATEGORIES,
    ANY_RATING,
    SortDirection,
    SortKey,
    StockStatus,
    ViewParams,
)

logger = logging.getLogger("catalog_dash.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="catalog_dash",
        description="Inventory dashboard for a remote product catalog.",
        epilog=f"Catalog service: {Settings.CATALOG_API_URL}",
    )
    parser.add_argument(
        "query",
        nargs="?",
        default=None,
        help="Search text. Omit (without --list) to launch the TUI.",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        default=False,
        dest="headless",
        help="List products headlessly even without a search query.",
    )
    parser.add_argument(
        "-c",
        "--category",
        default=ALL_CATEGORIES,
        help="Only show this category (default: all).",
    )
    parser.add_argument("--min-price", default="", help="Lower price bound.")
    parser.add_argument("--max-price", default="", help="Upper price bound.")
    parser.add_argument(
        "--min-rating",
        default=ANY_RATING,
        help="Minimum rating, e.g. 4.0 (default: any).",
    )
    parser.add_argument(
        "--stock",
        choices=[s.value for s in StockStatus],
        default=StockStatus.ALL.value,
        help="Stock status bucket (default: all).",
    )
    parser.add_argument(
        "-a",
        "--advanced",
        action="store_true",
        default=False,
        help="Match the query against title, description and brand locally.",
    )
    parser.add_argument(
        "--sort",
        choices=[k.value for k in SortKey],
        default=SortKey.TITLE.value,
        help="Sort key (default: title).",
    )
    parser.add_argument(
        "--desc",
        action="store_true",
        default=False,
        help="Sort descending.",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="json",
        dest="output_format",
        help="Output format (default: json).",
    )
    parser.add_argument(
        "-e",
        "--export",
        choices=["json", "csv"],
        default=None,
        dest="export_format",
        help="Also write the listed products to results/.",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        dest="output_dir",
        help="Custom export directory (default: results/).",
    )
    parser.add_argument(
        "--health",
        action="store_true",
        default=False,
        help="Run a connectivity health check on the catalog service.",
    )
    return parser


def params_from_args(args: argparse.Namespace) -> ViewParams:
    """Translate parsed CLI flags into view parameters."""
    return ViewParams(
        query=args.query or "",
        category=args.category,
        min_price=args.min_price,
        max_price=args.max_price,
        min_rating=args.min_rating,
        stock_status=StockStatus(args.stock),
        advanced_search=args.advanced,
        sort_key=SortKey(args.sort),
        sort_direction=SortDirection.DESC if args.desc else SortDirection.ASC,
    )


def _run_tui() -> None:
    """Launch the interactive Textual TUI."""
    from src.ui.app import CatalogDashApp

    try:
        app = CatalogDashApp()
        app.run()
    except Exception:
        logger.critical("Fatal error during TUI run", exc_info=True)
        raise
    finally:
        logger.info("catalog_dash TUI shutting down")


def _run_cli(args: argparse.Namespace) -> None:
    """Run a headless listing and exit."""
    from src.cli.runner import cli_list

    exit_code = asyncio.run(
        cli_list(
            params=params_from_args(args),
            output_format=args.output_format,
            export_format=args.export_format,
            output_dir=args.output_dir,
        )
    )
    sys.exit(exit_code)


def _run_health_check() -> None:
    """Run catalog connectivity health check."""
    from src.cli.runner import run_health_check

    exit_code = asyncio.run(run_health_check())
    sys.exit(exit_code)


def main() -> None:
    """Route to TUI (no args) or headless CLI (query or --list)."""
    parser = _build_parser()
    args = parser.parse_args()
    interactive = not args.health and args.query is None and not args.headless

    log_file = setup_logging(interactive=interactive)
    logger.info("catalog_dash starting, log file: %s", log_file)

    if args.health:
        _run_health_check()
    elif interactive:
        _run_tui()
    else:
        _run_cli(args)


if __name__ == "__main__":
    main()
