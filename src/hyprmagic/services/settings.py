"""Settings dataclasses and loading helpers."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping

from ..polish.errors import ConfigError
from ..polish.service import DEFAULT_MODEL, PolishConfig

__all__ = [
    "Settings",
    "SettingsStore",
    "dump_settings",
    "redact_secret",
]

LOGGER = logging.getLogger(__name__)
_SETTINGS_DIR = Path.home() / ".hyprmagic"
_DEFAULT_SETTINGS_PATH = _SETTINGS_DIR / "settings.json"
_ENV_OVERRIDES: Mapping[str, str] = {
    "GEMINI_API_KEY": "api_key",
    "GEMINI_MODEL": "model",
}
_BOOL_ENV_OVERRIDES: Mapping[str, str] = {
    "HYPRMAGIC_DEBUG": "debug_logging",
}
_TRUE_VALUES = {"1", "true", "yes", "on", "debug"}


@dataclass(slots=True)
class Settings:
    """User-configurable settings read at startup."""

    api_key: str = ""
    model: str = DEFAULT_MODEL
    debug_logging: bool = False

    def to_polish_config(self) -> PolishConfig:
        """Return the immutable API config, raising :class:`ConfigError` without a key."""

        api_key = (self.api_key or "").strip()
        if not api_key:
            raise ConfigError()
        return PolishConfig(api_key=api_key, model=(self.model or "").strip() or DEFAULT_MODEL)


class SettingsStore:
    """Read-only loader combining the settings file with environment overrides."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or _DEFAULT_SETTINGS_PATH

    @property
    def path(self) -> Path:
        """Return the resolved path backing this store."""

        return self._path

    def load(self) -> Settings:
        """Load settings from disk, then apply environment overrides."""

        payload = self._read_payload()
        settings = Settings()
        if payload:
            try:
                settings = Settings(**_filter_fields(payload))
            except TypeError as exc:
                LOGGER.warning("Settings payload contained unexpected data: %s", exc)
                settings = Settings()
        LOGGER.debug("Settings loaded from %s (keys=%s)", self._path, sorted(payload))
        return self._apply_env_overrides(settings)

    def _read_payload(self) -> Dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except json.JSONDecodeError as exc:
            LOGGER.warning("Settings file %s is not valid JSON: %s", self._path, exc)
            return {}
        if not isinstance(data, dict):
            LOGGER.warning("Settings file %s does not contain a JSON object", self._path)
            return {}
        return data

    def _apply_env_overrides(self, settings: Settings) -> Settings:
        overrides: Dict[str, Any] = {}
        for env_name, field_name in _ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value is not None:
                overrides[field_name] = value
        for env_name, field_name in _BOOL_ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value is not None:
                overrides[field_name] = value.strip().lower() in _TRUE_VALUES
        if overrides:
            LOGGER.debug("Applying environment settings overrides: %s", sorted(overrides))
            settings = replace(settings, **overrides)
        return settings


def dump_settings(settings: Settings) -> Dict[str, Any]:
    payload = asdict(settings)
    payload["api_key"] = redact_secret(settings.api_key)
    return payload


def _filter_fields(payload: Mapping[str, Any]) -> Dict[str, Any]:
    defaults = Settings()
    result: Dict[str, Any] = {}
    for field in fields(Settings):
        if field.name not in payload:
            continue
        value = payload[field.name]
        expected = type(getattr(defaults, field.name))
        if not isinstance(value, expected):
            LOGGER.warning(
                "Ignoring settings field %s: expected %s, got %s", field.name, expected.__name__, type(value).__name__
            )
            continue
        result[field.name] = value
    return result


def redact_secret(value: str | None) -> str:
    stripped = (value or "").strip()
    if not stripped:
        return ""
    if len(stripped) <= 4:
        return "*" * len(stripped)
    return f"{stripped[:2]}{'*' * (len(stripped) - 4)}{stripped[-2:]}"
