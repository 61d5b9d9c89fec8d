"""Layered, validated configuration settings."""

import copy
import json
import logging
import os
import re
from pathlib import Path
from typing import Any

from templar.config.converters import list_element_type, require_converter
from templar.config.exceptions import (
    InvalidSettingError,
    InvalidSettingsBatch,
    UnknownSettingError,
)
from templar.config.merger import (
    NAME_SEPARATOR,
    clear_option,
    deep_merge,
    find_shared_keys,
    flatten,
    get_option,
    set_option,
)
from templar.config.settings import (
    get_setting_type,
    setting_name_as_regex,
    validate_setting,
)

logger = logging.getLogger(__name__)

ENCODING = "utf-8"
ENV_EXPORT_KEY = "env"


class Configuration:
    """
    Settings merged from a base config, an app-managed JSON file and the
    user's own config.

    Precedence (later wins):
        1. base settings (packaged defaults)
        2. managed settings (changed at runtime, persisted as JSON)
        3. override settings (user config file and environment)

    Every setting must be known and hold a value of its declared type;
    otherwise construction fails so that typos in a user's config are
    reported straight away.

    Usage:
        config = Configuration(base, overrides, managed, VALID_OPTIONS, json_file)
        config.put_setting("git.name", "Jo")
        config.store_settings()
    """

    def __init__(
        self,
        base_settings: dict,
        override_settings: dict,
        managed_settings: dict,
        valid_options: dict,
        json_config_file: Path,
    ):
        self.override_settings = override_settings
        self.valid_options = valid_options
        self.json_config_file = Path(json_config_file)

        self.managed_settings = copy.deepcopy(managed_settings)
        settings = deep_merge(copy.deepcopy(base_settings), copy.deepcopy(managed_settings))
        self.settings = deep_merge(settings, copy.deepcopy(override_settings))

        flattened = flatten(self.settings)
        invalid = [
            name
            for name, value in flattened.items()
            if not validate_setting(name, valid_options, value)
        ]
        if invalid:
            raise InvalidSettingsBatch(invalid)

        self._export_environment(flattened)

    def _export_environment(self, flattened: dict) -> None:
        """Copy validated "env.*" settings into the process environment."""
        prefix = ENV_EXPORT_KEY + NAME_SEPARATOR
        for name, value in flattened.items():
            if name.startswith(prefix) and value is not None:
                os.environ[name[len(prefix):]] = str(value)
                logger.debug(f"Exported '{name}' to the environment")

    def store_settings(self) -> list[str]:
        """
        Persist the managed settings as JSON.

        Returns:
            Dotted names of managed settings that the user config overrides
        """
        shared = find_shared_keys(self.managed_settings, self.override_settings)

        self.json_config_file.parent.mkdir(parents=True, exist_ok=True)
        self.json_config_file.write_text(
            json.dumps(self.managed_settings, indent=4), encoding=ENCODING
        )
        logger.debug(f"Stored managed settings: {self.json_config_file}")
        return shared

    def get_setting(self, name: str) -> Any:
        """
        Get the value of a setting.

        Raises:
            UnknownSettingError: If the name isn't a known setting
        """
        self.require_setting_type(name)
        return get_option(self.settings, name)

    def get_sub_settings(self, root_name: str) -> dict:
        """
        Get every setting below a partial name, e.g. "templates.mappings".

        Returns:
            Dict of the settings under the name, empty if there are none

        Raises:
            InvalidSettingError: If the name is a complete setting name
            UnknownSettingError: If no known setting lives under the name
        """
        if root_name in self.valid_options:
            raise InvalidSettingError(
                root_name, None, f"'{root_name}' has no sub-settings"
            )

        prefix = root_name + NAME_SEPARATOR
        found = any(
            key.startswith(prefix) or _matches(key, root_name)
            for key in self.valid_options
        )
        if not found:
            raise UnknownSettingError(root_name)

        value = get_option(self.settings, root_name)
        return copy.deepcopy(value) if isinstance(value, dict) else {}

    def get_all_settings(self) -> dict:
        """All current settings as a flat dict of dotted names."""
        return flatten(self.settings)

    def put_setting(self, name: str, value: Any) -> bool:
        """
        Add or update a setting.

        Strings are converted to the setting's declared type; any other
        value must already be of that type.

        Returns:
            False if the user config overrides this setting, so the new value
            won't survive a reload

        Raises:
            UnknownSettingError: If the name isn't a known setting
            InvalidSettingError: If the value can't be converted or is of the
                wrong type
        """
        setting_type = self.require_setting_type(name)

        try:
            if isinstance(value, str):
                converted = require_converter(setting_type).to_type(value)
            else:
                converted = self.require_value_of_type(name, value, setting_type)
        except (ValueError, TypeError) as e:
            logger.debug(f"Conversion of '{name}' failed: {e}")
            raise InvalidSettingError(name, value) from e

        set_option(self.settings, name, converted)
        set_option(self.managed_settings, name, copy.deepcopy(converted))
        return get_option(self.override_settings, name) is None

    def append_to_setting(self, name: str, value: Any) -> bool:
        """
        Add a value to a list setting.

        Returns:
            False if the user config overrides this setting

        Raises:
            UnknownSettingError: If the name isn't a known setting
            InvalidSettingError: If the setting isn't a list, or the value is
                of the wrong type
        """
        setting_type = self.require_setting_type(name)
        element_type = list_element_type(setting_type)
        if element_type is None:
            raise InvalidSettingError(
                name,
                value,
                f"Setting '{name}' is not an array type, so you cannot add to it",
            )

        try:
            if isinstance(value, str):
                converted = require_converter(element_type).to_type(value)
            else:
                converted = self.require_value_of_type(name, value, element_type)
        except (ValueError, TypeError) as e:
            logger.debug(f"Conversion of '{name}' failed: {e}")
            raise InvalidSettingError(name, value) from e

        _option_as_list(self.settings, name).append(converted)
        _option_as_list(self.managed_settings, name).append(converted)
        return get_option(self.override_settings, name) is None

    def clear_setting(self, name: str) -> None:
        """
        Remove a setting from the current and managed settings.

        Raises:
            UnknownSettingError: If the name isn't a known setting
        """
        self.require_setting_type(name)

        clear_option(self.settings, name)
        clear_option(self.managed_settings, name)

    def require_setting_type(self, name: str) -> Any:
        setting_type = get_setting_type(name, self.valid_options)
        if setting_type is None:
            raise UnknownSettingError(name)
        return setting_type

    def require_value_of_type(self, name: str, value: Any, setting_type: Any) -> Any:
        if require_converter(setting_type).validate(value):
            return value
        raise InvalidSettingError(name, value)


def _matches(pattern: str, name: str) -> bool:
    return re.fullmatch(setting_name_as_regex(pattern), name) is not None


def _option_as_list(root: dict, name: str) -> list:
    """Get a setting as a list, wrapping a scalar value, and store it back."""
    initial = get_option(root, name)
    if isinstance(initial, (list, tuple)):
        values = list(initial)
    elif initial is not None:
        values = [initial]
    else:
        values = []

    set_option(root, name, values)
    return values
