"""Utility helpers for scrapeforge."""

from scrapeforge.utils.files import get_logs_path, get_project_root, get_state_path
from scrapeforge.utils.logging import setup_local_logging
from scrapeforge.utils.retry import get_retryer, log_retry

__all__ = [
    'get_logs_path',
    'get_project_root',
    'get_retryer',
    'get_state_path',
    'log_retry',
    'setup_local_logging',
]
