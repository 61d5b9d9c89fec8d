"""Merge and dotted-name access helpers for nested configuration dicts."""

from typing import Any

NAME_SEPARATOR = "."


def deep_merge(base: dict, override: dict) -> dict:
    """
    Deep merge two dictionaries. Override wins on conflicts.

    Args:
        base: Base configuration
        override: Configuration to merge on top

    Returns:
        New merged dictionary

    Example:
        base = {"git": {"name": "Jo", "email": "jo@example.com"}}
        override = {"git": {"name": "Sam"}}
        result = {"git": {"name": "Sam", "email": "jo@example.com"}}
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            # Both are dicts - recurse
            result[key] = deep_merge(result[key], value)
        else:
            # Override wins
            result[key] = value

    return result


def flatten(config: dict, prefix: str = "") -> dict:
    """
    Flatten a nested dict into dot-separated keys.

    Example:
        {"git": {"name": "Jo"}} -> {"git.name": "Jo"}
    """
    result = {}
    for key, value in config.items():
        name = f"{prefix}{NAME_SEPARATOR}{key}" if prefix else str(key)
        if isinstance(value, dict):
            # Empty sections contribute no settings
            result.update(flatten(value, name))
        else:
            result[name] = value
    return result


def get_option(root: dict, name: str) -> Any:
    """Get the value at a dotted name, or None if any part is missing."""
    node: Any = root
    for part in name.split(NAME_SEPARATOR):
        if not isinstance(node, dict):
            return None
        node = node.get(part)
    return node


def set_option(root: dict, name: str, value: Any) -> dict:
    """
    Set the value at a dotted name, creating intermediate dicts as needed.

    Returns:
        The dict holding the final name segment
    """
    *parents, last = name.split(NAME_SEPARATOR)
    node = root
    for part in parents:
        child = node.get(part)
        if not isinstance(child, dict):
            child = {}
            node[part] = child
        node = child

    node[last] = value
    return node


def clear_option(root: dict, name: str) -> None:
    """Remove a dotted name, pruning any parent dicts left empty."""
    parts = name.split(NAME_SEPARATOR)
    chain = [root]
    for part in parts[:-1]:
        child = chain[-1].get(part)
        if not isinstance(child, dict):
            return
        chain.append(child)

    chain[-1].pop(parts[-1], None)

    for depth in range(len(parts) - 2, -1, -1):
        if chain[depth + 1]:
            break
        chain[depth].pop(parts[depth], None)


def find_shared_keys(first: dict, second: dict) -> list[str]:
    """
    Find the dotted names present in both dicts.

    Sub-dicts present on both sides are compared key by key, so
    {"a": {"b": 1}} and {"a": {"b": 2, "c": 3}} share only "a.b".
    """
    result = []
    for key in first:
        if key not in second:
            continue
        if isinstance(first[key], dict) and isinstance(second[key], dict):
            result.extend(
                f"{key}{NAME_SEPARATOR}{sub}"
                for sub in find_shared_keys(first[key], second[key])
            )
        else:
            result.append(key)
    return result
