# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Filesystem paths for local game data."""

from __future__ import annotations

import os
from pathlib import Path

from platformdirs import user_data_dir

ENV_DATA_DIR = "WILDTRAILS_DATA_DIR"


def default_data_dir() -> Path:
    """Get the default data directory."""
    env_root = os.getenv(ENV_DATA_DIR)
    if env_root:
        return Path(env_root)
    return Path(user_data_dir("wildtrails", "wildtrails"))


def default_store_file(data_dir: Path | None = None) -> Path:
    """Location of the JSON game store inside *data_dir*."""
    return (data_dir or default_data_dir()) / "games.json"
