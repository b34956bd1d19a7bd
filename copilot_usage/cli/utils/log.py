"""Logging setup for the CLI."""

import logging
from pathlib import Path

from copilot_usage.core.constants import APP_DIR, LOG_FILE_NAME

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(threadName)s] %(message)s"


def setup_logging(verbose: bool = False, log_path: Path | None = None) -> Path:
    """Send log records to a file; the terminal belongs to the dashboard.

    Args:
        verbose: Log at DEBUG instead of WARNING
        log_path: Log file (defaults to ~/.copilot-usage/copilot-usage.log)

    Returns:
        The log file path
    """
    log_path = log_path or APP_DIR / LOG_FILE_NAME
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        filename=log_path,
        encoding="utf-8",
        format=LOG_FORMAT,
        level=logging.DEBUG if verbose else logging.WARNING,
        force=True,
    )
    # Keep HTTP library chatter out of debug logs
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("backoff").setLevel(logging.WARNING if not verbose else logging.INFO)
    return log_path
