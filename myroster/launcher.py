"""
Open a file with the operating system's default application.
"""

from __future__ import annotations

import logging
import subprocess
import sys
from pathlib import Path


logger = logging.getLogger(__name__)


def _launcher() -> str:
    if sys.platform.startswith("win"):
        return "explorer.exe"
    return "open" if sys.platform == "darwin" else "xdg-open"


def open_path(path: str | Path) -> None:
    """
    Launch path with the platform default viewer and wait for the launcher to return.

    Raises OSError if the launcher cannot be started.
    """
    target = str(Path(path).resolve())
    logger.info("opening %s", target)
    subprocess.run([_launcher(), target], check=False)
