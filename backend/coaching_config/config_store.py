"""Layered settings: push overrides > config file > env > defaults."""
import json
import logging
import threading
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError as SettingsValidationError

logger = logging.getLogger(__name__)

_PARSERS = {".yaml": yaml.safe_load, ".yml": yaml.safe_load, ".json": json.loads}


def parse_structured_file(path: Path) -> Any:
    """Parse a YAML or JSON file by suffix. Raises ValueError for other suffixes."""
    parser = _PARSERS.get(path.suffix.lower())
    if parser is None:
        raise ValueError(f"Expected a .yaml, .yml, or .json file: {path}")
    return parser(path.read_text())


def _read_config_file(path: Path) -> dict[str, Any]:
    """Config file as a flat dict; a missing or unreadable file counts as empty."""
    if not path.exists():
        logger.debug("Config file not found: %s (optional; using env/defaults)", path)
        return {}
    try:
        data = parse_structured_file(path)
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.warning("Ignoring config file %s: %s", path, e)
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning("Config file must contain a mapping; got %s", type(data).__name__)
        return {}
    return data


def _env_dict(SettingsCls: type) -> dict[str, Any]:
    """Build dict from env/.env using Pydantic (env-only load)."""
    return SettingsCls().model_dump()


class ConfigStore:
    """
    Holds config from env, optional config file (master over env), and push overrides.
    Precedence: push overrides > config file > env > defaults.
    """

    def __init__(self, SettingsCls: type, config_file_path: Optional[str] = None):
        self._SettingsCls = SettingsCls
        self._file_path: Optional[Path] = None
        if config_file_path:
            self._file_path = Path(config_file_path).expanduser().resolve()
        self._overrides: dict[str, Any] = {}
        self._current: Optional[Any] = None  # Settings instance
        self._lock = threading.RLock()

    @property
    def overrides(self) -> dict[str, Any]:
        with self._lock:
            return dict(self._overrides)

    def _file_dict(self) -> dict[str, Any]:
        return _read_config_file(self._file_path) if self._file_path else {}

    def load_initial(self) -> None:
        """Build settings: env, then file (overwrites env), then overrides. Call once at startup."""
        with self._lock:
            env_dict = _env_dict(self._SettingsCls)
            file_dict = self._file_dict()
            if file_dict:
                logger.info("Loaded config file (master over env): %s", self._file_path)
            merged = {**env_dict, **file_dict, **self._overrides}
            self._current = self._SettingsCls(**merged)

    def get_settings(self) -> Any:
        """Return current Settings instance. If not yet loaded, load_initial() first."""
        with self._lock:
            if self._current is None:
                self.load_initial()
            return self._current

    def update(self, overrides: dict[str, Any]) -> None:
        """
        Merge overrides and rebuild Settings.

        Unknown keys raise KeyError and invalid values re-raise pydantic's
        ValidationError; either way the previous config stays in place.
        """
        with self._lock:
            if self._current is None:
                self.load_initial()
            unknown = sorted(set(overrides) - set(self._SettingsCls.model_fields))
            if unknown:
                raise KeyError(f"Unknown config keys: {', '.join(unknown)}")
            try:
                merged = {**self._current.model_dump(), **self._overrides, **overrides}
                self._current = self._SettingsCls(**merged)
            except SettingsValidationError as e:
                logger.warning("Config update validation failed; keeping previous config: %s", e)
                raise
            self._overrides.update(overrides)
            logger.info("Config overrides applied: %s", ", ".join(sorted(overrides)))

    def reload_from_file(self) -> None:
        """Re-read config file and apply saved overrides. File remains master over env."""
        with self._lock:
            env_dict = _env_dict(self._SettingsCls)
            merged = {**env_dict, **self._file_dict(), **self._overrides}
            try:
                self._current = self._SettingsCls(**merged)
            except SettingsValidationError as e:
                logger.warning("Config reload validation failed; keeping previous config: %s", e)
                raise

    def clear_overrides(self) -> None:
        """Drop pushed overrides and reset to file (master) + env."""
        with self._lock:
            self._overrides.clear()
            if self._current is not None:
                env_dict = _env_dict(self._SettingsCls)
                self._current = self._SettingsCls(**{**env_dict, **self._file_dict()})
