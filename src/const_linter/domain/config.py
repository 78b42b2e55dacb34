"""Configuration loader for linter settings."""

import logging
import tomllib
from pathlib import Path
from typing import ClassVar, Optional

from const_linter.domain.constants import DEFAULT_CONSTRUCTOR_PREFIXES

logger = logging.getLogger(__name__)

TOOL_SECTION: str = "const-linter"


class ConfigurationLoader:
    """
    Singleton that loads linter configuration from pyproject.toml.

    Looks for the [tool.const-linter] section, walking up from the current
    directory to the filesystem root.
    """

    _instance: ClassVar[Optional["ConfigurationLoader"]] = None
    _config: ClassVar[dict[str, object]] = {}
    _source: ClassVar[Optional[Path]] = None

    def __new__(cls) -> "ConfigurationLoader":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance.load_config()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the cached singleton (primarily for testing)."""
        cls._instance = None
        cls._config = {}
        cls._source = None

    def load_config(self, start: Optional[Path] = None) -> None:
        """Find and load pyproject.toml configuration."""
        current_path = (start or Path.cwd()).resolve()
        for candidate in (current_path, *current_path.parents):
            config_file = candidate / "pyproject.toml"
            if not config_file.exists():
                continue
            try:
                with config_file.open("rb") as f:
                    data = tomllib.load(f)
            except (OSError, tomllib.TOMLDecodeError) as exc:
                logger.warning("Ignoring unreadable %s: %s", config_file, exc)
                continue
            section = data.get("tool", {}).get(TOOL_SECTION, {})
            if section:
                ConfigurationLoader._config = section
                ConfigurationLoader._source = config_file
                logger.debug("Loaded [tool.%s] from %s", TOOL_SECTION, config_file)
                return

    def set_config(self, config: dict[str, object]) -> None:
        """Replace the loaded configuration."""
        ConfigurationLoader._config = dict(config)

    @property
    def config(self) -> dict[str, object]:
        return self._config

    @property
    def source(self) -> Optional[Path]:
        return self._source

    def _string_list(self, key: str) -> Optional[list[str]]:
        value = self._config.get(key)
        if value is None:
            return None
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            logger.warning("Configuration Warning: '%s' must be a list of strings, ignoring.", key)
            return None
        return value

    def _flag(self, key: str, default: bool) -> bool:
        value = self._config.get(key, default)
        if not isinstance(value, bool):
            logger.warning("Configuration Warning: '%s' must be true or false, ignoring.", key)
            return default
        return value

    @property
    def constructor_prefixes(self) -> tuple[str, ...]:
        """Name prefixes that mark a method as a constructor of its class."""
        prefixes = self._string_list("constructor-prefixes")
        base = tuple(prefixes) if prefixes is not None else DEFAULT_CONSTRUCTOR_PREFIXES
        extra = self._string_list("extra-constructor-prefixes") or []
        return tuple(p.lower() for p in (*base, *extra))

    @property
    def check_fields(self) -> bool:
        return self._flag("check-fields", True)

    @property
    def check_parameters(self) -> bool:
        return self._flag("check-parameters", True)
