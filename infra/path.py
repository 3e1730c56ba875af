# infra/path.py
from __future__ import annotations
import os
import sys
from pathlib import Path

APP_NAME = "AllocationValidator"
COMPANY_NAME = "TECHASH"


def user_data_dir() -> Path:
    """
    Per-user data directory for logs and support events.

    Honors ALLOCATION_VALIDATOR_HOME first, then the platform convention:
    %APPDATA% on Windows, ~/Library/Application Support on macOS,
    $XDG_DATA_HOME (or ~/.local/share) elsewhere.
    """
    override = (os.getenv("ALLOCATION_VALIDATOR_HOME") or "").strip()
    if override:
        path = Path(override)
        path.mkdir(parents=True, exist_ok=True)
        return path

    if sys.platform.startswith("win"):
        base = Path(os.getenv("APPDATA", Path.home() / "AppData" / "Roaming"))
    elif sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        base = Path(os.getenv("XDG_DATA_HOME", Path.home() / ".local" / "share"))

    path = base / COMPANY_NAME / APP_NAME
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError:
        # read-only or missing home: fall back to a dot-dir
        path = Path.home() / f".{APP_NAME}"
        path.mkdir(parents=True, exist_ok=True)
    return path


def default_log_dir() -> Path:
    return user_data_dir() / "logs"


__all__ = ["APP_NAME", "user_data_dir", "default_log_dir"]
