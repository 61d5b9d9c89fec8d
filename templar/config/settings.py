"""Table of known settings and name matching against it."""

import re
from typing import Any, Optional

from templar.config.converters import Url, require_converter
from templar.config.exceptions import UnknownSettingError
from templar.config.merger import NAME_SEPARATOR

WILDCARD = "*"

# Setting name -> declared value type. A trailing "*" matches one word segment.
VALID_OPTIONS = {
    "config.file": str,
    "cache.dir": str,
    "git.name": str,
    "git.email": str,
    "options.log_level": str,
    "options.verbose": bool,
    "options.quiet": bool,
    "options.info": bool,
    "repositories": list[str],
    "templates.mappings.*": Url,
    "env.*": object,
}


def make_wildcard(name: str) -> str:
    """Replace the last segment of a dotted name with a wildcard."""
    if NAME_SEPARATOR not in name:
        return name
    return name.rsplit(NAME_SEPARATOR, 1)[0] + NAME_SEPARATOR + WILDCARD


def setting_name_as_regex(name: str) -> str:
    return re.escape(name).replace(re.escape(WILDCARD), r"\w+")


def matching_setting(name: str, known_settings: dict) -> Optional[tuple[str, Any]]:
    """Find the first known setting that equals or matches the given name."""
    for key, value_type in known_settings.items():
        if key == name or re.fullmatch(setting_name_as_regex(key), name):
            return key, value_type
    return None


def get_setting_type(name: str, known_settings: dict) -> Optional[Any]:
    if name in known_settings:
        return known_settings[name]
    return known_settings.get(make_wildcard(name))


def validate_setting(name: str, known_settings: dict, value: Any) -> bool:
    """
    Check a value against the declared type of a setting.

    Returns:
        True if the value is None or acceptable to the type's converter

    Raises:
        UnknownSettingError: If the name doesn't match any known setting
        MissingConverter: If the declared type has no converter
    """
    setting = matching_setting(name, known_settings)
    if setting is None:
        raise UnknownSettingError(name)

    converter = require_converter(setting[1])
    return value is None or converter.validate(value)
