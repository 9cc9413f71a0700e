"""
Common utility functions for jsavro.
"""

import json
import re


def avro_type_name(name):
    """
    Convert a name into the name of a named Avro type.

    Every character outside [A-Za-z0-9] is removed and the first remaining
    character is upper-cased. Empty or None names are returned unchanged.

    Args:
        name (str): The name to convert.

    Returns:
        str: The type name.
    """
    if not name:
        return name
    cleaned = re.sub(r'[^a-zA-Z0-9]', '', name)
    return cleaned[:1].upper() + cleaned[1:]


def symbol_text(value) -> str:
    """Render a JSON literal as an enum symbol."""
    if isinstance(value, str):
        return value
    return json.dumps(value)


def unique(values: list) -> list:
    """Return the values with repeats removed, keeping the first occurrence."""
    result = []
    for v in values:
        if v not in result:
            result.append(v)
    return result
