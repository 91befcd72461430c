from pathlib import Path
import os
import sys


def user_config_dir() -> Path:
    """Per-user configuration directory for the current platform."""
    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        return Path(appdata) if appdata else Path.home() / "AppData" / "Roaming"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"
    xdg = os.environ.get("XDG_CONFIG_HOME")
    # XDG spec: relative paths are invalid and must be ignored
    if xdg and Path(xdg).is_absolute():
        return Path(xdg)
    return Path.home() / ".config"
