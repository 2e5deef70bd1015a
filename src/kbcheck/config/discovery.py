"""Locate kbcheck.toml.

Lookup order: the ``KBCHECK_CONFIG`` env var, then a walk up from the
starting directory to the filesystem root.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "kbcheck.toml"
CONFIG_ENV_VAR = "KBCHECK_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest kbcheck.toml at or above *start*, or None.

    A ``KBCHECK_CONFIG`` pointing at a missing file disables discovery
    rather than falling back to the walk-up.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    origin = (start or Path.cwd()).resolve()
    for directory in (origin, *origin.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
