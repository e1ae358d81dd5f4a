"""Locate the nsidctl.toml to load.

Lookup order: an explicit ``--config`` path, then the NSIDCTL_CONFIG env
var, then each directory from the start directory up to the filesystem
root. An explicit or env path that does not exist means "no config"; it
never falls through to the walk.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "nsidctl.toml"
CONFIG_ENV_VAR = "NSIDCTL_CONFIG"


def _existing_file(path: str | Path) -> Path | None:
    candidate = Path(path)
    return candidate if candidate.is_file() else None


def find_config(start: Path | None = None, *, explicit: str | None = None) -> Path | None:
    """Return the config file to load, or None."""
    if explicit:
        return _existing_file(explicit)
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return _existing_file(env_path)

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
