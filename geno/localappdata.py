"""Locating, and creating, the per-user data directory of the application."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional


def _base_directory() -> Optional[tuple[str, str]]:
    if sys.platform == "win32":
        base = os.environ.get("LOCALAPPDATA")
        return (base, "Geno") if base else None

    if sys.platform.startswith("linux"):
        data_home = os.environ.get("XDG_DATA_HOME")
        if data_home:
            return data_home, "geno"
        data_dirs = os.environ.get("XDG_DATA_DIRS")
        if data_dirs:
            return data_dirs.split(":", 1)[0], "geno"

    return None


def local_app_data_dir() -> Optional[Path]:
    """The application's data directory, created if needed; None if there is none."""
    base = _base_directory()
    if base is None:
        return None

    path = Path(os.path.normpath(os.path.join(*base)))
    try:
        path.mkdir(mode=0o777, exist_ok=True)
    except OSError:
        return None
    return path