import os
import sys

import pytest

# Add src to sys.path
sys.path.append(os.path.join(os.path.dirname(__file__), "../src"))

from app.common.models import ExifTag, MappedTag
from app.photo_info.mappings.categories import group_by_category, group_for_display, map_tags
from app.photo_info.mappings.exif_mappings import (
    EXIF_PROPERTY_MAPPINGS,
    FormatterMapping,
    PlainMapping,
    UnitMapping,
    format_aperture,
    get_category,
    get_display_name,
    get_mapping,
)
from app.photo_info.mappings.formatters import format_exif_value
from app.schemas.enum import ExifCategory


def test_display_names():
    assert get_display_name("FNumber") == "Aperture"
    assert get_display_name("Make") == "Camera Make"
    assert get_display_name("ISOSpeedRatings") == "ISO"
    assert get_display_name("DateTime") == "Date/Time"
    assert get_display_name("SomeVendorTag") == "SomeVendorTag"


def test_categories():
    assert get_category("FNumber") == ExifCategory.EXPOSURE
    assert get_category("GPSLatitude") == ExifCategory.GPS
    assert get_category("Lens") == ExifCategory.VENDOR
    assert get_category("SomeVendorTag") is None


def test_mapping_variants():
    assert isinstance(get_mapping("Make"), PlainMapping)
    assert isinstance(get_mapping("FocalLength"), UnitMapping)
    assert isinstance(get_mapping("FNumber"), FormatterMapping)
    assert get_mapping("SomeVendorTag") is None


def test_mapping_table_is_read_only():
    with pytest.raises(TypeError):
        EXIF_PROPERTY_MAPPINGS["Make"] = PlainMapping("Brand", ExifCategory.CAMERA)


def test_every_mapping_has_a_category():
    for tag_name, mapping in EXIF_PROPERTY_MAPPINGS.items():
        assert isinstance(mapping.category, ExifCategory), tag_name
        assert mapping.display_name, tag_name


@pytest.mark.parametrize("tag_name,value,expected", [
    ("FocalLength", 24, "24 mm"),
    ("FocalLength", 24.0, "24 mm"),
    ("FocalLength", "6.86", "6.86 mm"),
    ("GPSAltitude", "6.49", "6.49 m"),
    ("Image Width", 4032, "4032 px"),
    ("FNumber", 2.8, "f/2.8"),
    ("FNumber", "f/2.8", "f/2.8"),
    ("MaxApertureValue", "1.69", "f/1.69"),
    ("ISOSpeedRatings", 640, "640"),
    ("Make", "Apple", "Apple"),
    ("SomeVendorTag", 1.0, "1"),
])
def test_format_exif_value(tag_name, value, expected):
    assert format_exif_value(tag_name, value) == expected


def test_missing_values_are_not_decorated():
    assert format_exif_value("FocalLength", None) == "None"
    assert format_exif_value("FNumber", None) == "None"


def test_aperture_format_is_idempotent():
    assert format_aperture(format_aperture(1.78)) == "f/1.78"


def test_map_tags():
    mapped = map_tags({
        "FocalLength": ExifTag(value=[686, 100], description="6.86"),
        "FNumber": ExifTag(value=[178, 100], description="f/1.78"),
        "MakerNote": ExifTag(value=b"\x00", description="..."),
        "Model": ExifTag(value="iPhone 14 Pro", description=None),
    })
    assert mapped == {
        "FocalLength": MappedTag(value=[686, 100], display_name="Focal Length", formatted_value="6.86 mm"),
        "FNumber": MappedTag(value=[178, 100], display_name="Aperture", formatted_value="f/1.78"),
    }


def test_map_tags_empty():
    assert map_tags({}) == {}


def test_group_by_category_keeps_every_category():
    grouped = group_by_category({"Make": "Apple", "GPSAltitude": 6.49, "SomeVendorTag": 1})
    assert set(grouped) == {category.value for category in ExifCategory}
    assert grouped["camera"] == {"Make": "Apple"}
    assert grouped["gps"] == {"GPSAltitude": 6.49}
    assert grouped["lens"] == {}


def test_group_by_category_empty():
    grouped = group_by_category({})
    assert len(grouped) == 8
    assert all(entries == {} for entries in grouped.values())


DISPLAY_VALUES = {
    "Make": "Apple",
    "Model": "iPhone 14 Pro",
    "FocalLength": "6.86",
    "FNumber": "f/1.78",
    "SomeVendorTag": "x",
}


def test_group_for_display_keeps_every_category():
    grouped = group_for_display(DISPLAY_VALUES)
    assert grouped == {
        "camera": {"Camera Make": "Apple", "Camera Model": "iPhone 14 Pro"},
        "lens": {"Focal Length": "6.86 mm"},
        "exposure": {"Aperture": "f/1.78"},
        "image": {},
        "gps": {},
        "time": {},
        "advanced": {},
        "vendor": {},
    }


def test_group_for_display_pruned():
    assert group_for_display(DISPLAY_VALUES, prune_empty=True) == {
        "camera": {"Camera Make": "Apple", "Camera Model": "iPhone 14 Pro"},
        "lens": {"Focal Length": "6.86 mm"},
        "exposure": {"Aperture": "f/1.78"},
    }


def test_group_for_display_empty():
    grouped = group_for_display({})
    assert set(grouped) == {category.value for category in ExifCategory}
    assert all(entries == {} for entries in grouped.values())
    assert group_for_display({}, prune_empty=True) == {}
