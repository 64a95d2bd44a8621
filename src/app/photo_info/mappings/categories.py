from typing import Any, Dict, Mapping

from app.common.models import ExifTag, MappedTag
from app.photo_info.mappings.exif_mappings import get_display_name, get_mapping
from app.photo_info.mappings.formatters import format_exif_value
from app.schemas.enum import ExifCategory


def _empty_categories() -> Dict[str, Dict[str, Any]]:
    return {category.value: {} for category in ExifCategory}


def map_tags(tags: Mapping[str, ExifTag]) -> Dict[str, MappedTag]:
    """Display name and formatted description for every described, mapped tag."""
    mapped: Dict[str, MappedTag] = {}
    for tag_name, tag in tags.items():
        mapping = get_mapping(tag_name)
        if mapping is None or tag is None or tag.description is None:
            continue
        mapped[tag_name] = MappedTag(
            value=tag.value,
            display_name=mapping.display_name,
            formatted_value=format_exif_value(tag_name, tag.description),
        )
    return mapped


def group_by_category(values: Mapping[str, Any]) -> Dict[str, Dict[str, Any]]:
    """
    Group raw tag values by category, keyed by tag name.

    All categories are present in the result, even when empty.
    """
    grouped = _empty_categories()
    for tag_name, value in values.items():
        mapping = get_mapping(tag_name)
        if mapping is not None:
            grouped[mapping.category.value][tag_name] = value
    return grouped


def group_for_display(values: Mapping[str, Any], prune_empty: bool = False) -> Dict[str, Dict[str, str]]:
    """
    Group formatted values by category, keyed by display name.

    Every category is present unless ``prune_empty`` drops the ones without entries.
    """
    grouped: Dict[str, Dict[str, str]] = {}
    for category, entries in group_by_category(values).items():
        if prune_empty and not entries:
            continue
        grouped[category] = {
            get_display_name(tag_name): format_exif_value(tag_name, value)
            for tag_name, value in entries.items()
        }
    return grouped
