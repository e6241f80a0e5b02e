"""Config store: config file (master over env) + pushable overrides."""
import json
import logging
import threading
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)


def read_config_file(path: Path) -> dict[str, Any]:
    """Read a YAML or JSON config file to a flat dict. Returns {} when absent or invalid."""
    if not path.exists():
        logger.debug("Config file not found: %s (optional; using env/defaults)", path)
        return {}
    try:
        raw = path.read_text()
    except OSError as e:
        logger.warning("Could not read config file %s: %s", path, e)
        return {}
    suffix = path.suffix.lower()
    try:
        if suffix in (".yaml", ".yml"):
            data = yaml.safe_load(raw)
        elif suffix == ".json":
            data = json.loads(raw)
        else:
            logger.warning("Config file must be .yaml, .yml, or .json: %s", path)
            return {}
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        logger.warning("Invalid config file %s: %s", path, e)
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning("Config file must contain a mapping; got %s", type(data).__name__)
        return {}
    return data


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
        self._current: Optional[Any] = None
        self._lock = threading.RLock()

    def _build(self) -> Any:
        env_dict = self._SettingsCls().model_dump()
        file_dict = read_config_file(self._file_path) if self._file_path else {}
        return self._SettingsCls(**{**env_dict, **file_dict, **self._overrides})

    def load_initial(self) -> None:
        """Build settings: env, then file, then overrides. Call once at startup."""
        with self._lock:
            self._current = self._build()
            if self._file_path and self._file_path.exists():
                logger.info("Loaded config file (master over env): %s", self._file_path)

    def get_settings(self) -> Any:
        """Return current Settings instance, loading on first use."""
        with self._lock:
            if self._current is None:
                self._current = self._build()
            return self._current

    def update(self, overrides: dict[str, Any]) -> None:
        """Merge overrides and rebuild Settings. Keeps previous config on validation error."""
        with self._lock:
            previous = dict(self._overrides)
            self._overrides.update(overrides)
            try:
                self._current = self._build()
            except ValueError as e:
                self._overrides = previous
                logger.warning("Config update validation failed; keeping previous config: %s", e)

    def reload_from_file(self) -> None:
        """Re-read config file and apply saved overrides."""
        with self._lock:
            try:
                self._current = self._build()
            except ValueError as e:
                logger.warning("Config reload validation failed; keeping previous config: %s", e)

    def clear_overrides(self) -> None:
        """Drop pushed overrides and reset to file + env."""
        with self._lock:
            self._overrides.clear()
            self._current = self._build()
