"""Configuration management for Splice Organizer.

This module finds and loads the ``config.json`` file. It supports both
AppData and portable installation modes, resolves the configuration
directory, and reads/writes JSON with JSON schema validation against the
bundled ``schemas/config.schema.json``.

Portable mode is controlled via a ``portable.flag`` file located in the
application directory or by passing ``--portable`` to the CLI. The flag
file takes precedence over the command line.

Example usage::

    from splice_organizer.config_service import ConfigService

    config_service = ConfigService(app_dir=Path.cwd())
    cfg = config_service.load_config()
    cfg["destination_dir"] = "D:/Samples/Sorted"
    config_service.save_config(cfg)

"""

from __future__ import annotations

import json
import os
import platform
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import jsonschema

from . import tuning
from .errors import ConfigurationError

SCHEMA_DIR = Path(__file__).resolve().parent / "schemas"


def _get_appdata_root(app_name: str = "SpliceOrganizer") -> Path:
    """Return the platform-specific base directory for config files."""
    system = platform.system().lower()
    if system == "windows":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata) / app_name
        # Fallback to user profile
        return Path.home() / f"AppData/Roaming/{app_name}"
    # On Linux/macOS use XDG_CONFIG_HOME or ~/.config
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / app_name
    return Path.home() / ".config" / app_name


def _load_json(path: Path) -> Any:
    if not path.exists():
        return None
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _save_json(data: Any, file_path: Path) -> None:
    file_path.parent.mkdir(parents=True, exist_ok=True)
    with file_path.open("w", encoding="utf-8", newline="\n") as f:
        json.dump(data, f, indent=2)


def _validate_json(data: Any, schema_path: Path) -> None:
    schema = _load_json(schema_path)
    if not schema:
        return
    try:
        jsonschema.validate(instance=data, schema=schema)
    except jsonschema.ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration: {exc.message}") from exc


@dataclass
class ConfigService:
    """Resolve and manage Splice Organizer configuration."""

    app_dir: Path
    portable_flag_filename: str = "portable.flag"
    config_filename: str = "config.json"
    schema_path: Path = SCHEMA_DIR / "config.schema.json"
    _cached_mode: Optional[bool] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        self.app_dir = Path(self.app_dir)

    def _portable_flag_exists(self) -> bool:
        return (self.app_dir / self.portable_flag_filename).exists()

    def detect_mode(self, cli_portable: bool = False) -> bool:
        """Return ``True`` if portable mode should be used.

        A ``portable.flag`` file in the application directory always forces
        portable mode; otherwise ``cli_portable`` decides. The result is
        cached for subsequent calls.
        """
        if self._cached_mode is None:
            if self._portable_flag_exists():
                self._cached_mode = True
            else:
                self._cached_mode = bool(cli_portable)
        return self._cached_mode

    def get_config_dir(self, cli_portable: bool = False) -> Path:
        """Return the resolved configuration directory."""
        if self.detect_mode(cli_portable=cli_portable):
            return self.app_dir
        return _get_appdata_root()

    def get_config_path(self, cli_portable: bool = False) -> Path:
        return self.get_config_dir(cli_portable) / self.config_filename

    def load_config(self, cli_portable: bool = False) -> Dict[str, Any]:
        """Load configuration merged over defaults.

        A missing file yields the defaults. An unreadable or invalid file
        prints a warning and also yields the defaults.
        """
        cfg_path = self.get_config_path(cli_portable)
        try:
            data = _load_json(cfg_path)
        except (OSError, json.JSONDecodeError) as exc:
            print(f"Warning: could not read {cfg_path}: {exc}. Falling back to defaults.")
            data = None
        if data is None:
            return tuning.resolve_config({})
        try:
            _validate_json(data, self.schema_path)
        except ConfigurationError as exc:
            print(f"Warning: {exc}. Falling back to defaults.")
            return tuning.resolve_config({})
        return tuning.resolve_config(data)

    def save_config(self, config: Dict[str, Any], cli_portable: bool = False) -> Path:
        """Validate and write configuration; returns the written path."""
        _validate_json(config, self.schema_path)
        cfg_path = self.get_config_path(cli_portable)
        _save_json(config, cfg_path)
        return cfg_path
