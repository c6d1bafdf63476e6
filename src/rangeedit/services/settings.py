"""Settings dataclasses and persistence helpers."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping

from ..core.text import DEFAULT_ENCODING, DEFAULT_EOL, normalize_encoding, resolve_eol
from ..errors import InvalidParameterError

__all__ = [
    "Settings",
    "SettingsStore",
    "default_settings_path",
]

LOGGER = logging.getLogger(__name__)
_SETTINGS_DIR = Path.home() / ".rangeedit"
_DEFAULT_SETTINGS_PATH = _SETTINGS_DIR / "settings.json"
_SETTINGS_PATH_ENV = "RANGEEDIT_SETTINGS"
_SETTINGS_VERSION = 1
_ENV_OVERRIDES: Mapping[str, str] = {
    "RANGEEDIT_EOL": "eol",
    "RANGEEDIT_POSITION_ENCODING": "position_encoding",
    "RANGEEDIT_LOG_LEVEL": "log_level",
    "RANGEEDIT_LOG_DIR": "log_dir",
}
_BOOL_ENV_OVERRIDES: Mapping[str, str] = {
    "RANGEEDIT_DEBUG_LOGGING": "debug_logging",
}
_TRUE_VALUES = {"1", "true", "yes", "on", "debug"}
_MAX_RECENT_FILES = 10


@dataclass(slots=True)
class Settings:
    """User-configurable defaults persisted between sessions."""

    eol: str = DEFAULT_EOL
    position_encoding: str = DEFAULT_ENCODING
    log_level: str = "WARNING"
    debug_logging: bool = False
    recent_files: list[str] = field(default_factory=list)
    log_dir: str | None = None

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug_logging else self.log_level


def default_settings_path() -> Path:
    """Return the settings path, honouring ``RANGEEDIT_SETTINGS``."""

    override = os.environ.get(_SETTINGS_PATH_ENV)
    if override:
        return Path(override).expanduser()
    return _DEFAULT_SETTINGS_PATH


class SettingsStore:
    """Persistence adapter for :class:`Settings`."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or default_settings_path()

    @property
    def path(self) -> Path:
        """Return the resolved path backing this store."""

        return self._path

    def load(self, *, overrides: Mapping[str, Any] | None = None) -> Settings:
        """Load settings from disk, applying CLI/environment overrides when present.

        Raises:
            OSError: the settings path exists but cannot be read.
        """

        settings = self._load_persisted()
        if overrides:
            settings = self._apply_overrides(settings, overrides, source="CLI")

        settings = self._apply_env_overrides(settings)
        return settings

    def _load_persisted(self) -> Settings:
        payload = self._read_payload()
        settings = Settings()
        if payload:
            data = _filter_fields(payload)
            try:
                settings = Settings(**data)
            except TypeError as exc:
                LOGGER.warning("Settings payload contained unexpected data: %s", exc)
                settings = Settings()
            settings = _normalize(settings, source=str(self._path))
            if payload.get("version") != _SETTINGS_VERSION:
                LOGGER.debug(
                    "Settings file %s has version %s; expected %s",
                    self._path,
                    payload.get("version"),
                    _SETTINGS_VERSION,
                )
        return settings

    def save(self, settings: Settings) -> Path:
        """Persist settings to disk with atomic file writes."""

        payload = self._serialize(settings)
        body = json.dumps(payload, indent=2, sort_keys=True)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(".tmp")
        tmp_path.write_text(body, encoding="utf-8")
        tmp_path.replace(self._path)
        LOGGER.debug("Settings saved to %s", self._path)
        return self._path

    def remember_file(self, settings: Settings, path: Path | str) -> Settings:
        """Return ``settings`` with ``path`` moved to the front of ``recent_files``."""

        entry = str(path)
        recent = [entry] + [item for item in settings.recent_files if item != entry]
        return replace(settings, recent_files=recent[:_MAX_RECENT_FILES])

    def record_recent_file(self, path: Path | str) -> Path:
        """Add ``path`` to the persisted recent files.

        Only the stored values are rewritten; CLI and environment overrides in
        effect for this process are not saved.
        """

        return self.save(self.remember_file(self._load_persisted(), path))

    def _serialize(self, settings: Settings) -> Dict[str, Any]:
        data = asdict(settings)
        data["version"] = _SETTINGS_VERSION
        return data

    def _read_payload(self) -> Dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            text = self._path.read_text(encoding="utf-8")
            payload = json.loads(text)
        except FileNotFoundError:
            return {}
        except json.JSONDecodeError as exc:
            LOGGER.warning("Settings file %s is not valid JSON: %s", self._path, exc)
            return {}
        if not isinstance(payload, dict):
            LOGGER.warning("Settings file %s does not contain an object", self._path)
            return {}
        return payload

    def _apply_overrides(
        self,
        settings: Settings,
        overrides: Mapping[str, Any],
        *,
        source: str = "runtime",
    ) -> Settings:
        allowed = {field.name for field in fields(Settings)}
        filtered: Dict[str, Any] = {}
        for key, value in overrides.items():
            if key not in allowed or value is None:
                continue
            filtered[key] = value
        if not filtered:
            return settings
        LOGGER.debug("Applying %s settings overrides: %s", source, sorted(filtered))
        if "eol" in filtered:
            filtered["eol"] = resolve_eol(filtered["eol"])
        if "position_encoding" in filtered:
            filtered["position_encoding"] = normalize_encoding(filtered["position_encoding"])
        return replace(settings, **filtered)

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
            settings = self._apply_overrides(settings, overrides, source="environment")
        return settings


def _filter_fields(payload: Mapping[str, Any]) -> Dict[str, Any]:
    allowed = {field.name for field in fields(Settings)}
    result: Dict[str, Any] = {}
    for key, value in payload.items():
        if key not in allowed:
            continue
        result[key] = value
    return result


def _normalize(settings: Settings, *, source: str) -> Settings:
    """Replace persisted values that cannot be used with their defaults."""

    updates: Dict[str, Any] = {}
    try:
        eol = resolve_eol(settings.eol)
    except (InvalidParameterError, AttributeError):
        LOGGER.warning("Unknown eol %r in %s; defaulting to LF.", settings.eol, source)
        eol = DEFAULT_EOL
    if eol != settings.eol:
        updates["eol"] = eol
    try:
        encoding = normalize_encoding(settings.position_encoding)
    except (InvalidParameterError, AttributeError):
        LOGGER.warning(
            "Unknown position_encoding %r in %s; defaulting to %s.",
            settings.position_encoding,
            source,
            DEFAULT_ENCODING,
        )
        encoding = DEFAULT_ENCODING
    if encoding != settings.position_encoding:
        updates["position_encoding"] = encoding
    if not isinstance(settings.recent_files, list):
        updates["recent_files"] = []
    if settings.log_dir is not None and not isinstance(settings.log_dir, str):
        updates["log_dir"] = None
    return replace(settings, **updates) if updates else settings
