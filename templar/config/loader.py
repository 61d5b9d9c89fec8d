"""Configuration loader - loads and layers config sources."""

import json
import logging
import os
from pathlib import Path
from typing import Optional

import yaml

from templar.config.configuration import ENCODING, Configuration
from templar.config.converters import get_converter
from templar.config.exceptions import ConfigNotFoundError, ConfigParseError
from templar.config.merger import NAME_SEPARATOR, deep_merge, get_option, set_option
from templar.config.settings import VALID_OPTIONS, get_setting_type

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "default_config.yaml"
JSON_CONFIG_FILENAME = "managed-config.json"
ENV_PREFIX = "TEMPLAR_"
CONFIG_FILE_SUFFIX = "CONFIG_FILE"
ENV_NAME_SEPARATOR = "__"


class ConfigLoader:
    """
    Loads configuration from multiple sources.

    Load order (later wins):
        1. default_config.yaml (packaged base settings)
        2. managed-config.json next to the user config (written by `config set`)
        3. user config file ($TEMPLAR_CONFIG_FILE, or the default's config.file)
        4. TEMPLAR_* environment variables

    Usage:
        loader = ConfigLoader()
        config = loader.load()
    """

    def __init__(
        self,
        default_config_path: Optional[Path] = None,
        env_prefix: str = ENV_PREFIX,
        valid_options: Optional[dict] = None,
    ):
        self.default_config_path = (
            Path(default_config_path) if default_config_path else DEFAULT_CONFIG_PATH
        )
        self.env_prefix = env_prefix
        self.config_file_env_var = env_prefix + CONFIG_FILE_SUFFIX
        self.valid_options = valid_options if valid_options is not None else VALID_OPTIONS

    def _load_yaml(self, path: Path) -> dict:
        """Load and parse a YAML file."""
        if not path.exists():
            raise ConfigNotFoundError(f"Config file not found: {path}")

        try:
            with open(path, encoding=ENCODING) as f:
                content = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigParseError(f"Invalid YAML in {path}: {e}")

        logger.debug(f"Loaded config: {path}")
        return _require_mapping(content, path, "YAML")

    def _load_json(self, path: Path) -> dict:
        """Load the managed JSON settings, or an empty dict if there are none."""
        if not path.exists():
            return {}

        try:
            with open(path, encoding=ENCODING) as f:
                content = json.load(f) or {}
        except json.JSONDecodeError as e:
            raise ConfigParseError(f"Invalid JSON in {path}: {e}")

        logger.debug(f"Loaded managed config: {path}")
        return _require_mapping(content, path, "JSON")

    def user_config_file(self, defaults: dict) -> Path:
        """Work out where the user config file lives."""
        configured = os.environ.get(self.config_file_env_var) or get_option(defaults, "config.file")
        if not configured:
            raise ConfigNotFoundError("No user config file configured")
        return Path(configured).expanduser()

    def load_environment(self) -> dict:
        """
        Collect setting overrides from environment variables.

        TEMPLAR_GIT__NAME=Jo becomes {"git": {"name": "Jo"}}. Values of known
        settings are converted to the setting's type where possible; anything
        else is kept as text and left for validation to report.
        """
        overrides: dict = {}
        for key, value in os.environ.items():
            if not key.startswith(self.env_prefix) or key == self.config_file_env_var:
                continue

            name = key[len(self.env_prefix):].lower().replace(ENV_NAME_SEPARATOR, NAME_SEPARATOR)
            set_option(overrides, name, self._convert_env_value(name, value))

        return overrides

    def _convert_env_value(self, name: str, value: str):
        setting_type = get_setting_type(name, self.valid_options)
        if setting_type is None:
            logger.warning(f"Unknown option '{name}' set in the environment")
            return value

        converter = get_converter(setting_type)
        if converter is None:
            return value

        try:
            return converter.to_type(value)
        except ValueError:
            logger.warning(f"Option '{name}' has an invalid value in the environment: {value}")
            return value

    def load(self) -> Configuration:
        """
        Load the complete configuration.

        Returns:
            Validated Configuration

        Raises:
            ConfigNotFoundError: If the packaged defaults are missing
            ConfigParseError: If any config file can't be parsed
            InvalidSettingsBatch: If settings hold values of the wrong type
        """
        # 1. Load packaged defaults
        defaults = self._load_yaml(self.default_config_path)
        logger.debug(f"Loaded default config: {self.default_config_path}")

        # 2. Load managed settings stored beside the user config
        user_file = self.user_config_file(defaults)
        json_file = user_file.parent / JSON_CONFIG_FILENAME
        managed = self._load_json(json_file)

        # 3. Load user config, which may not exist yet
        overrides = self._load_yaml(user_file) if user_file.exists() else {}
        if overrides:
            logger.debug(f"Loaded user config: {user_file}")

        # 4. Environment wins over everything
        env_overrides = self.load_environment()
        if env_overrides:
            overrides = deep_merge(overrides, env_overrides)
            logger.debug("Merged environment overrides")

        return Configuration(defaults, overrides, managed, self.valid_options, json_file)

    def health_check(self) -> bool:
        """Check if the packaged defaults and user config directory exist."""
        if not self.default_config_path.exists():
            return False
        return self.user_config_file(self._load_yaml(self.default_config_path)).parent.exists()


def _require_mapping(content, path: Path, file_format: str) -> dict:
    """Settings files must hold a mapping at the top level."""
    if not isinstance(content, dict):
        raise ConfigParseError(f"Invalid {file_format} in {path}: expected a mapping")
    return content
