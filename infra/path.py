# infra/path.py
from __future__ import annotations
import os
import sys
from pathlib import Path

APP_NAME = "EvmTrackers"


def user_data_dir() -> Path:
    """
    Per-user data directory holding the EVM database and logs.

    Windows:  %APPDATA%\\EvmTrackers
    macOS:    ~/Library/Application Support/EvmTrackers
    Linux:    $XDG_DATA_HOME/EvmTrackers (~/.local/share by default)

    ``PM_EVM_DATA_DIR`` overrides the platform location.
    """
    override = (os.getenv("PM_EVM_DATA_DIR") or "").strip()
    try:
        if override:
            path = Path(override)
        else:
            if sys.platform.startswith("win"):
                base = Path(os.getenv("APPDATA", Path.home() / "AppData" / "Roaming"))
            elif sys.platform == "darwin":
                base = Path.home() / "Library" / "Application Support"
            else:
                base = Path(os.getenv("XDG_DATA_HOME", Path.home() / ".local" / "share"))
            path = base / APP_NAME
        path.mkdir(parents=True, exist_ok=True)
        return path
    except OSError:
        fallback = Path.home() / f".{APP_NAME}"
        fallback.mkdir(parents=True, exist_ok=True)
        return fallback


def default_db_path() -> Path:
    return user_data_dir() / "evm_trackers.db"
