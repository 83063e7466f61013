"""Configuration loading and validation for the document ingestion core."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


class SettingsError(ValueError):
    """Raised when settings validation fails."""


def _require_mapping(data: Dict[str, Any], key: str, path: str) -> Dict[str, Any]:
    value = data.get(key)
    if value is None:
        raise SettingsError(f"Missing required field: {path}.{key}")
    if not isinstance(value, dict):
        raise SettingsError(f"Expected mapping for field: {path}.{key}")
    return value


def _require_value(data: Dict[str, Any], key: str, path: str) -> Any:
    if key not in data or data.get(key) is None:
        raise SettingsError(f"Missing required field: {path}.{key}")
    return data[key]


def _require_str(data: Dict[str, Any], key: str, path: str) -> str:
    value = _require_value(data, key, path)
    if not isinstance(value, str) or not value.strip():
        raise SettingsError(f"Expected non-empty string for field: {path}.{key}")
    return value


def _optional_int(data: Dict[str, Any], key: str, path: str) -> Optional[int]:
    value = data.get(key)
    if value is None:
        return None
    # bool is an int subclass; YAML "true" must not pass as a size
    if isinstance(value, bool) or not isinstance(value, int):
        raise SettingsError(f"Expected integer for field: {path}.{key}")
    return value


def _optional_bool(data: Dict[str, Any], key: str, path: str, default: bool) -> bool:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise SettingsError(f"Expected boolean for field: {path}.{key}")
    return value


@dataclass(frozen=True)
class ObservabilitySettings:
    log_level: str


@dataclass(frozen=True)
class IngestionSettings:
    chunk_size: Optional[int] = None
    follow_symlinks: bool = False


@dataclass(frozen=True)
class Settings:
    observability: ObservabilitySettings
    ingestion: IngestionSettings = IngestionSettings()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        if not isinstance(data, dict):
            raise SettingsError("Settings root must be a mapping")

        observability = _require_mapping(data, "observability", "settings")

        ingestion_settings = IngestionSettings()
        # a section whose keys are all commented out parses as None
        if data.get("ingestion") is not None:
            ingestion = _require_mapping(data, "ingestion", "settings")
            ingestion_settings = IngestionSettings(
                chunk_size=_optional_int(ingestion, "chunk_size", "ingestion"),
                follow_symlinks=_optional_bool(
                    ingestion, "follow_symlinks", "ingestion", default=False
                ),
            )

        return cls(
            observability=ObservabilitySettings(
                log_level=_require_str(observability, "log_level", "observability"),
            ),
            ingestion=ingestion_settings,
        )


def validate_settings(settings: Settings) -> None:
    """Validate settings and raise SettingsError if invalid."""

    if not settings.observability.log_level:
        raise SettingsError("Missing required field: observability.log_level")
    chunk_size = settings.ingestion.chunk_size
    if chunk_size is not None and chunk_size <= 0:
        raise SettingsError("ingestion.chunk_size must be a positive integer")


def load_settings(path: str | Path) -> Settings:
    """Load settings from a YAML file and validate required fields."""

    settings_path = Path(path)
    if not settings_path.exists():
        raise SettingsError(f"Settings file not found: {settings_path}")

    with settings_path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle)

    settings = Settings.from_dict(data or {})
    validate_settings(settings)
    return settings
