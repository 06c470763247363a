"""File logging for scrapeforge runs."""

import logging
from datetime import datetime
from pathlib import Path

from scrapeforge.utils.files import get_logs_path

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Name given to the run log handler so that a later setup replaces it
HANDLER_NAME = 'scrapeforge-run-log'


def resolve_level(level: str) -> int:
    """Map a level name ('DEBUG', 'info', 'ALL', ...) to a logging level, DEBUG if unknown."""
    if level.upper() == 'ALL':
        return logging.NOTSET
    return getattr(logging, level.upper(), logging.DEBUG)


def setup_local_logging(level: str = 'DEBUG') -> Path:
    """Send log records of this run to a timestamped file.

    The file lives in .scrapeforge/logs/ under the project root. Calling this
    again swaps the previous run log handler for a new one; console output
    stays with the CLI's rich console.

    Args:
        level: Logging level name (e.g., 'DEBUG', 'INFO', 'ALL'). Defaults to 'DEBUG'.

    Returns:
        Path of the log file.

    """
    logs_dir = get_logs_path()
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file = logs_dir / f'run_{datetime.now():%Y%m%d_%H%M%S}.log'

    numeric_level = resolve_level(level)
    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    for handler in list(root_logger.handlers):
        if handler.get_name() == HANDLER_NAME:
            root_logger.removeHandler(handler)
            handler.close()

    file_handler = logging.FileHandler(log_file, encoding='utf-8')
    file_handler.set_name(HANDLER_NAME)
    file_handler.setLevel(numeric_level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(file_handler)

    return log_file
