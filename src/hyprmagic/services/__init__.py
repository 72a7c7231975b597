"""Service layer helpers (settings loading)."""

from .settings import Settings, SettingsStore, dump_settings, redact_secret

__all__ = ["Settings", "SettingsStore", "dump_settings", "redact_secret"]
