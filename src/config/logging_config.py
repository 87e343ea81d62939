# src/config/logging_config.py

"""Per-run logging for catalog_dash.

Every launch writes a full DEBUG trace to ``logs/run_<timestamp>.log``.
What reaches the terminal depends on the front end: the headless CLI
prints warnings to stderr next to its Rich output, while the TUI owns
the screen, so its console records are handed to Textual's own log
(visible through ``textual console``) instead of being painted over
the dashboard.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from textual.logging import TextualHandler

from src.config.settings import Settings

PROJECT_LOGGER = "catalog_dash"

_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | "
    "%(funcName)s:%(lineno)d | %(message)s"
)
_CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _prune_old_runs(logs_dir: Path, keep: int) -> None:
    """Delete all but the newest *keep* run logs."""
    runs = sorted(logs_dir.glob("run_*.log"))
    for stale in runs[: max(0, len(runs) - keep)]:
        stale.unlink(missing_ok=True)


def _console_level() -> int:
    level = logging.getLevelName(Settings.CONSOLE_LOG_LEVEL.upper())
    return level if isinstance(level, int) else logging.WARNING


def setup_logging(interactive: bool = False) -> Path:
    """Attach the run-log file and a console handler to ``catalog_dash``.

    Args:
        interactive: True when the Textual UI is about to take over the
            terminal. Console records then go through
            :class:`textual.logging.TextualHandler` instead of stderr.

    Returns:
        Path of this run's log file. Calling again is a no-op that
        returns a fresh path without adding handlers.
    """
    logs_dir: Path = Settings.LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file = logs_dir / f"run_{datetime.now():%Y%m%d_%H%M%S}.log"

    project_logger = logging.getLogger(PROJECT_LOGGER)
    project_logger.setLevel(logging.DEBUG)
    if project_logger.handlers:
        return log_file

    _prune_old_runs(logs_dir, Settings.LOG_KEEP_RUNS - 1)

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, _DATE_FORMAT))
    project_logger.addHandler(file_handler)

    console: logging.Handler
    if interactive:
        console = TextualHandler()
    else:
        console = logging.StreamHandler(sys.stderr)
    console.setLevel(_console_level())
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    project_logger.addHandler(console)

    project_logger.info(
        "Logging to %s (%s console)",
        log_file,
        "textual" if interactive else "stderr",
    )
    return log_file
