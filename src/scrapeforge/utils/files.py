"""Utility functions for locating scrapeforge's working directories."""

from pathlib import Path

PROJECT_MARKERS = {'.git', 'pyproject.toml', '.scrapeforge', 'requirements.txt'}


def get_project_root() -> Path:
    """Find the project root by searching upwards from the Current Working Directory.

    Stops at the first directory containing a marker file.
    """
    current_path = Path.cwd()

    for parent in [current_path, *current_path.parents]:
        if any((parent / marker).exists() for marker in PROJECT_MARKERS):
            return parent

    # No marker anywhere (e.g. running in /tmp)
    return current_path


def get_state_path() -> Path:
    """Return the path to the .scrapeforge directory in the project root."""
    return get_project_root() / '.scrapeforge'


def get_logs_path() -> Path:
    """Return the path to the logs directory in .scrapeforge."""
    return get_state_path() / 'logs'
