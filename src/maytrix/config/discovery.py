"""Locate the ``maytrix.toml`` that applies to an invocation.

Lookup order: an explicit ``--config`` path, then ``MAYTRIX_CONFIG``,
then a walk up from the working directory the way git finds ``.git/``.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "maytrix.toml"
CONFIG_ENV_VAR = "MAYTRIX_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return ``MAYTRIX_CONFIG`` if set, else the nearest maytrix.toml at or above *start*.

    A ``MAYTRIX_CONFIG`` naming a missing file disables discovery.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def resolve_config(explicit: str | Path | None = None, start: Path | None = None) -> Path | None:
    """Pick the config file for one invocation.

    An *explicit* path is returned as given, existing or not, so the
    caller can report it; without one this falls back to :func:`find_config`.
    """
    if explicit:
        return Path(explicit)
    return find_config(start)
