"""Tests for setting converters."""

import pytest

from templar.config.converters import (
    CONVERTERS,
    BooleanConverter,
    Converter,
    IntegerConverter,
    ListConverter,
    Url,
    get_converter,
    register_converter,
    require_converter,
)
from templar.config.exceptions import MissingConverter


class TestBuiltinConverters:
    """Tests for the registered converters."""

    def test_boolean_to_type(self):
        """Only "true" in any case should convert to True."""
        converter = BooleanConverter()

        assert converter.to_type("true") is True
        assert converter.to_type("TRUE") is True
        assert converter.to_type("yes") is False
        assert converter.to_string(True) == "true"

    def test_boolean_validate(self):
        """Should accept only bools."""
        converter = BooleanConverter()

        assert converter.validate(False) is True
        assert converter.validate("true") is False

    def test_integer_converter(self):
        """Should parse integers and reject bools."""
        converter = IntegerConverter()

        assert converter.to_type("42") == 42
        assert converter.validate(42) is True
        assert converter.validate(True) is False

        with pytest.raises(ValueError):
            converter.to_type("forty-two")

    def test_string_converter(self):
        """Should accept strings only."""
        converter = require_converter(str)

        assert converter.to_type("abc") == "abc"
        assert converter.validate("abc") is True
        assert converter.validate(1) is False

    def test_object_converter(self):
        """Should accept anything but None."""
        converter = require_converter(object)

        assert converter.validate(1) is True
        assert converter.validate(None) is False

    def test_url_converter(self):
        """Should require absolute URLs."""
        converter = require_converter(Url)

        result = converter.to_type("https://example.com/templates")

        assert isinstance(result, Url)
        assert result == "https://example.com/templates"
        assert converter.validate("file:///tmp/templates") is True
        assert converter.validate(None) is True
        assert converter.validate("not a url") is False

        with pytest.raises(ValueError):
            converter.to_type("relative/path")


class TestListConverter:
    """Tests for list converters."""

    def test_splits_on_comma_and_space(self):
        """Should split on comma followed by whitespace."""
        converter = require_converter(list[str])

        assert converter.to_type("a, b,  c") == ["a", "b", "c"]

    def test_converts_elements(self):
        """Should convert each element with the element converter."""
        converter = ListConverter(int)

        assert converter.to_type("1, 2, 3") == [1, 2, 3]
        assert converter.to_string([1, 2, 3]) == "1, 2, 3"

    def test_validate(self):
        """Should accept None or lists of valid elements."""
        converter = ListConverter(int)

        assert converter.validate(None) is True
        assert converter.validate([1, 2]) is True
        assert converter.validate([1, "2"]) is False
        assert converter.validate(1) is False


class TestRegistry:
    """Tests for converter lookup and registration."""

    def test_get_converter_unknown_type(self):
        """Should return None for unregistered types."""
        assert get_converter(complex) is None
        assert get_converter(list[complex]) is None

    def test_require_converter_raises(self):
        """Should raise MissingConverter carrying the requested type."""
        with pytest.raises(MissingConverter) as exc_info:
            require_converter(complex)

        assert exc_info.value.requested_type is complex
        assert str(exc_info.value) == "No converter could be found for values of type complex"

    def test_require_converter_for_list_of_unknown(self):
        """Should report the list type when its element type is unknown."""
        with pytest.raises(MissingConverter) as exc_info:
            require_converter(list[complex])

        assert exc_info.value.requested_type == list[complex]

    def test_register_converter(self):
        """Decorated converters should become available."""

        class Version(str):
            pass

        # Arrange
        @register_converter(Version)
        class VersionConverter(Converter):
            def to_type(self, value):
                return Version(value)

            def validate(self, value):
                return isinstance(value, Version)

        try:
            # Act
            converter = require_converter(Version)

            # Assert
            assert isinstance(converter, VersionConverter)
        finally:
            del CONVERTERS[Version]
