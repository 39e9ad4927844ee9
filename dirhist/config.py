"""Persistent JSON config helpers.

Reads the database location, date format, initial shortcut-shortening
preference, and list colors. Reading the file is defensive: a missing or
malformed file falls back to defaults. Colors are the exception: a color
string that does not parse is a fatal :class:`ConfigError`.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir

from .theme import ColorError, Palette, parse_color

logger = logging.getLogger(__name__)

APP_NAME = "dirhist"
CONFIG_FILENAME = "config.json"
DB_FILENAME = "history.db"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_DB_PATH = Path(user_data_dir(APP_NAME, appauthor=False)) / DB_FILENAME
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ConfigError(Exception):
    """Raised when configuration values cannot be used."""


@dataclass(frozen=True)
class Colors:
    date: str = "#000080"
    path: str = "#000000"
    highlight: str = "#FFDD51"
    shortcut_name: str = "Green"

    def palette(self) -> Palette:
        """Resolve every color, raising :class:`ConfigError` on the first bad one."""
        resolved = {}
        for name in ("date", "path", "highlight", "shortcut_name"):
            value = getattr(self, name)
            try:
                resolved[name] = parse_color(value)
            except ColorError as exc:
                raise ConfigError(f"colors.{name}: {exc}") from exc
        return Palette(**resolved)


@dataclass(frozen=True)
class Settings:
    database: Path = DEFAULT_DB_PATH
    date_format: str = DEFAULT_DATE_FORMAT
    shorten_paths: bool = True
    colors: Colors = field(default_factory=Colors)


def load_config(path: Path | None = None) -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    config_path = path if path is not None else CONFIG_PATH
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", config_path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _load_colors(value: object) -> Colors:
    """Build ``Colors`` from a JSON object, keeping defaults for absent keys.

    Present keys must be strings; anything else is reported as a config error
    so a typo never silently turns into the default color.
    """
    if not isinstance(value, dict):
        return Colors()
    overrides: dict[str, str] = {}
    for name in ("date", "path", "highlight", "shortcut_name"):
        if name not in value:
            continue
        raw = value[name]
        if not isinstance(raw, str):
            raise ConfigError(f"colors.{name}: expected a string, got {raw!r}")
        overrides[name] = raw
    return Colors(**overrides)


def load_settings(path: Path | None = None) -> Settings:
    """Read config and validate it into :class:`Settings`."""
    data = load_config(path)
    defaults = Settings()

    database = data.get("database")
    db_path = Path(database).expanduser() if isinstance(database, str) and database.strip() else defaults.database

    date_format = data.get("date_format")
    if not isinstance(date_format, str) or not date_format:
        date_format = defaults.date_format

    shorten = data.get("shorten_paths")
    shorten_paths = shorten if isinstance(shorten, bool) else defaults.shorten_paths

    colors = _load_colors(data.get("colors"))
    colors.palette()

    return Settings(
        database=db_path,
        date_format=date_format,
        shorten_paths=shorten_paths,
        colors=colors,
    )
