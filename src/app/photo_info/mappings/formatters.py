from typing import Any

from app.photo_info.mappings.exif_mappings import FormatterMapping, UnitMapping, get_mapping
from app.utils.math import format_number


def format_exif_value(tag_name: str, value: Any) -> str:
    """
    Format a tag value for display.

    A mapping's formatter wins over its unit; units are appended as
    "{value} {unit}". Missing values are never decorated.
    """
    mapping = get_mapping(tag_name)
    if value is None or mapping is None:
        return format_number(value)

    if isinstance(mapping, FormatterMapping):
        return mapping.formatter(value)
    if isinstance(mapping, UnitMapping):
        return f"{format_number(value)} {mapping.unit}"
    return format_number(value)
