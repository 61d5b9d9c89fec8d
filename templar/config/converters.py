"""Value converters for configuration settings, with a type-keyed registry."""

import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Optional, get_args, get_origin
from urllib.parse import urlparse

from templar.config.exceptions import MissingConverter

logger = logging.getLogger(__name__)

CONVERTERS = {}

LIST_SEPARATOR = re.compile(r",\s+")


class Url(str):
    """Marks a string setting whose value must be an absolute URL."""

    pass


class Converter(ABC):
    """
    Abstract base class that all setting converters must implement.

    A converter turns the raw text a user types on the command line into
    the typed value a setting is declared with, and checks that values
    loaded from config files already have that type.
    """

    @abstractmethod
    def to_type(self, value: str) -> Any:
        """
        Convert raw text into a typed value.

        Raises:
            ValueError: If the text can't be converted
        """
        pass

    def to_string(self, value: Any) -> str:
        return str(value)

    @abstractmethod
    def validate(self, value: Any) -> bool:
        """Return True if the value is acceptable for this converter's type."""
        pass


def register_converter(value_type: type):
    """
    Decorator to register a converter class for a value type.

    Usage:
        @register_converter(int)
        class IntegerConverter(Converter):
            ...
    """

    def decorator(cls):
        CONVERTERS[value_type] = cls()
        return cls

    return decorator


@register_converter(object)
class ObjectConverter(Converter):
    """Accepts anything that isn't None."""

    def to_type(self, value: str) -> Any:
        return value

    def validate(self, value: Any) -> bool:
        return value is not None


@register_converter(str)
class StringConverter(Converter):
    def to_type(self, value: str) -> str:
        return value

    def validate(self, value: Any) -> bool:
        return isinstance(value, str)


@register_converter(bool)
class BooleanConverter(Converter):
    def to_type(self, value: str) -> bool:
        return value.strip().lower() == "true"

    def to_string(self, value: Any) -> str:
        return str(value).lower()

    def validate(self, value: Any) -> bool:
        return isinstance(value, bool)


@register_converter(int)
class IntegerConverter(Converter):
    def to_type(self, value: str) -> int:
        return int(value)

    def validate(self, value: Any) -> bool:
        # bool is a subclass of int
        return isinstance(value, int) and not isinstance(value, bool)


@register_converter(Url)
class UrlConverter(Converter):
    """Converts text into a Url, which must be absolute (scheme and location)."""

    def to_type(self, value: str) -> Url:
        if not _is_absolute_url(value):
            raise ValueError(f"Not an absolute URL: {value}")
        return Url(value)

    def validate(self, value: Any) -> bool:
        if value is None or isinstance(value, Url):
            return True
        return isinstance(value, str) and _is_absolute_url(value)


class ListConverter(Converter):
    """
    Converts comma-separated text into a list, element by element.

    Built on demand for ``list[T]`` types rather than registered, since the
    element converter depends on ``T``.
    """

    def __init__(self, element_type: Any):
        self.element_type = element_type
        self.element_converter = require_converter(element_type)

    def to_type(self, value: str) -> list:
        return [self.element_converter.to_type(v) for v in LIST_SEPARATOR.split(value)]

    def to_string(self, value: Any) -> str:
        return ", ".join(self.element_converter.to_string(v) for v in value)

    def validate(self, value: Any) -> bool:
        if value is None:
            return True
        return isinstance(value, list) and all(
            self.element_converter.validate(v) for v in value
        )


def _is_absolute_url(value: str) -> bool:
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return bool(parsed.scheme and (parsed.netloc or parsed.path))


def list_element_type(value_type: Any) -> Optional[Any]:
    """Return T for a ``list[T]`` type, otherwise None."""
    if get_origin(value_type) is list:
        args = get_args(value_type)
        return args[0] if args else object
    return None


def get_converter(value_type: Any) -> Optional[Converter]:
    """
    Get the converter for a value type.

    Args:
        value_type: A registered type, or ``list[T]`` for a registered T

    Returns:
        Converter instance, or None if there isn't one
    """
    element_type = list_element_type(value_type)
    if element_type is not None:
        if get_converter(element_type) is None:
            return None
        return ListConverter(element_type)

    return CONVERTERS.get(value_type)


def require_converter(value_type: Any) -> Converter:
    """
    Get the converter for a value type.

    Raises:
        MissingConverter: If no converter is registered for the type
    """
    converter = get_converter(value_type)
    if converter is None:
        logger.debug(f"No converter registered for {value_type!r}")
        raise MissingConverter(value_type)
    return converter
