"""Configuration management module."""

# Public API
from templar.config.configuration import Configuration
from templar.config.converters import (
    Converter,
    Url,
    get_converter,
    register_converter,
    require_converter,
)
from templar.config.exceptions import (
    ConfigError,
    ConfigNotFoundError,
    ConfigParseError,
    InvalidSettingError,
    InvalidSettingsBatch,
    MissingConverter,
    UnknownSettingError,
)
from templar.config.loader import ConfigLoader
from templar.config.settings import VALID_OPTIONS

__all__ = [
    "Configuration",
    "ConfigLoader",
    "Converter",
    "Url",
    "VALID_OPTIONS",
    "get_converter",
    "register_converter",
    "require_converter",
    "ConfigError",
    "ConfigNotFoundError",
    "ConfigParseError",
    "InvalidSettingError",
    "InvalidSettingsBatch",
    "MissingConverter",
    "UnknownSettingError",
]
