"""Persistent preferences for the Page Binder CLI.

Remembers the default paper size, orientation and output directory between
runs.  Stored in `<cli_config_dir>/preferences.json`.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

from backend.config import settings


@dataclass
class CliPreferences:
    paper_size: Optional[str] = None
    orientation: Optional[str] = None
    output_dir: Optional[str] = None

    def to_json(self) -> str:
        return json.dumps(asdict(self), indent=2)

    @classmethod
    def from_json(cls, data: str) -> CliPreferences:
        try:
            raw = json.loads(data)
            return cls(**raw)
        except (json.JSONDecodeError, TypeError):
            return cls()


def _get_preferences_path() -> Path:
    """Return the path to the preferences JSON file."""
    return settings.cli_config_dir / "preferences.json"


def load_preferences() -> CliPreferences:
    """Load CLI preferences from disk. Returns defaults if missing/corrupt."""
    path = _get_preferences_path()
    if not path.exists():
        return CliPreferences()

    try:
        return CliPreferences.from_json(path.read_text(encoding="utf-8"))
    except OSError:
        return CliPreferences()


def save_preferences(prefs: CliPreferences) -> None:
    """Save CLI preferences to disk."""
    settings.cli_config_dir.mkdir(parents=True, exist_ok=True)
    _get_preferences_path().write_text(prefs.to_json(), encoding="utf-8")
