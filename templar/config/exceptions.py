"""Configuration-related exceptions."""

from typing import Any, Iterable, Optional, get_origin

INVALID_SETTINGS_PREFIX = "The following configuration settings are invalid: "
MISSING_CONVERTER_PREFIX = "No converter could be found for values of type "


def qualified_name(value_type: Any) -> str:
    """
    Render the dotted, fully-qualified name of a type.

    Builtins are rendered as they appear in source (``int``, not
    ``builtins.int``). Parameterized generics such as ``list[str]`` are
    rendered via their repr.
    """
    if get_origin(value_type) is not None or not isinstance(value_type, type):
        return repr(value_type)

    module = value_type.__module__
    if module in (None, "builtins"):
        return value_type.__qualname__
    return f"{module}.{value_type.__qualname__}"


class ConfigError(Exception):
    """Base exception for config errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigNotFoundError(ConfigError):
    """Raised when config file doesn't exist."""

    pass


class ConfigParseError(ConfigError):
    """Raised when config file has invalid YAML or JSON."""

    pass


class UnknownSettingError(ConfigError):
    """Raised when a setting name isn't in the table of known settings."""

    def __init__(self, setting_name: str, message: Optional[str] = None):
        super().__init__(message or f"Unknown configuration setting: '{setting_name}'")
        self.setting_name = setting_name


class InvalidSettingError(ConfigError):
    """Raised when a single setting value can't be accepted."""

    def __init__(self, setting_name: str, value: Any, message: Optional[str] = None):
        super().__init__(
            message or f"The value [{value}] is not valid for the setting '{setting_name}'"
        )
        self.setting_name = setting_name
        self.value = value


class InvalidSettingsBatch(ConfigError):
    """
    Raised when one or more configuration settings hold invalid values.

    The offending names are kept in the order they were reported. Reads of
    ``setting_names`` return a copy, so callers can't alter the error.
    """

    def __init__(self, setting_names: Iterable[str], message: Optional[str] = None):
        names = tuple(setting_names)
        if message is None:
            message = INVALID_SETTINGS_PREFIX + ", ".join(names)
        super().__init__(message)
        self._setting_names = names

    @property
    def setting_names(self) -> list[str]:
        return list(self._setting_names)


class MissingConverter(ConfigError):
    """Raised when no converter is registered for a setting's value type."""

    def __init__(self, requested_type: Any, message: Optional[str] = None):
        if requested_type is None:
            raise TypeError("requested_type must not be None")
        if message is None:
            message = MISSING_CONVERTER_PREFIX + qualified_name(requested_type)
        super().__init__(message)
        self._requested_type = requested_type

    @property
    def requested_type(self) -> Any:
        return self._requested_type
