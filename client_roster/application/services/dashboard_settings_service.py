"""Application service for persisted dashboard display settings.

Reads/writes the settings to a JSON file under ``Settings.data_dir`` so they
persist across restarts without a database table.
"""

import json
import logging
from pathlib import Path
from typing import Any

from client_roster.application.schemas import DashboardSettings, DashboardSettingsUpdate
from client_roster.config import get_settings

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = "dashboard_settings.json"


def _settings_file(path: Path | None = None) -> Path:
    return path or Path(get_settings().data_dir) / SETTINGS_FILENAME


def _read_stored(path: Path) -> dict[str, Any]:
    """Read the JSON file, returning {} if missing or corrupt."""
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text("utf-8"))
    except (OSError, ValueError):
        logger.warning("Could not read %s — using defaults", path)
        return {}
    if not isinstance(data, dict):
        logger.warning("%s does not hold a JSON object — using defaults", path)
        return {}
    return data


def _write_stored(path: Path, data: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def get_dashboard_settings(path: Path | None = None) -> DashboardSettings:
    """Return stored settings merged over the defaults.

    Stored keys that no longer validate are dropped rather than failing the read.
    """
    stored = _read_stored(_settings_file(path))
    known = {k: v for k, v in stored.items() if k in DashboardSettings.model_fields}
    try:
        return DashboardSettings(**known)
    except ValueError:
        logger.warning("Stored dashboard settings are invalid — using defaults")
        return DashboardSettings()


def update_dashboard_settings(
    updates: DashboardSettingsUpdate, path: Path | None = None
) -> DashboardSettings:
    """Merge the provided keys into the stored settings and return the result."""
    target = _settings_file(path)
    current = get_dashboard_settings(target)
    merged = current.model_copy(update=updates.model_dump(exclude_unset=True, exclude_none=True))
    _write_stored(target, merged.model_dump())
    logger.info("Dashboard settings updated: %s", sorted(updates.model_fields_set))
    return merged


def reset_dashboard_settings(path: Path | None = None) -> DashboardSettings:
    """Restore the defaults."""
    defaults = DashboardSettings()
    _write_stored(_settings_file(path), defaults.model_dump())
    logger.info("Dashboard settings reset to defaults")
    return defaults
