"""
Display mapping for EXIF tags.

Every known tag maps to a display name and a category, plus either a unit
suffix or a formatter for its value. Tags not listed here are not shown.
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Union

from app.schemas.enum import ExifCategory
from app.utils.math import format_number


@dataclass(frozen=True)
class PlainMapping:
    display_name: str
    category: ExifCategory


@dataclass(frozen=True)
class UnitMapping(PlainMapping):
    unit: str


@dataclass(frozen=True)
class FormatterMapping(PlainMapping):
    formatter: Callable[[Any], str]


ExifPropertyMapping = Union[PlainMapping, UnitMapping, FormatterMapping]


def format_aperture(value: Any) -> str:
    text = format_number(value)
    # Descriptions may already carry the prefix
    return text if text.startswith("f/") else f"f/{text}"


CAMERA = ExifCategory.CAMERA
LENS = ExifCategory.LENS
EXPOSURE = ExifCategory.EXPOSURE
IMAGE = ExifCategory.IMAGE
GPS = ExifCategory.GPS
TIME = ExifCategory.TIME
ADVANCED = ExifCategory.ADVANCED
VENDOR = ExifCategory.VENDOR

EXIF_PROPERTY_MAPPINGS: Mapping[str, ExifPropertyMapping] = MappingProxyType({
    # Camera
    "Make": PlainMapping("Camera Make", CAMERA),
    "Model": PlainMapping("Camera Model", CAMERA),
    "Software": PlainMapping("Software", CAMERA),
    "SerialNumber": PlainMapping("Camera Serial Number", CAMERA),
    "BodySerialNumber": PlainMapping("Body Serial Number", CAMERA),
    "ImageNumber": PlainMapping("Image Number", CAMERA),

    # Lens
    "LensModel": PlainMapping("Lens Model", LENS),
    "LensMake": PlainMapping("Lens Make", LENS),
    "LensSpecification": PlainMapping("Lens Specification", LENS),
    "LensSerialNumber": PlainMapping("Lens Serial Number", LENS),
    "FocalLength": UnitMapping("Focal Length", LENS, "mm"),
    "FocalLengthIn35mmFilm": UnitMapping("35mm Equivalent", LENS, "mm"),
    "MaxApertureValue": FormatterMapping("Maximum Aperture", LENS, format_aperture),

    # Exposure
    "FNumber": FormatterMapping("Aperture", EXPOSURE, format_aperture),
    "ExposureTime": PlainMapping("Shutter Speed", EXPOSURE),
    "ISOSpeedRatings": PlainMapping("ISO", EXPOSURE),
    "ExposureBiasValue": UnitMapping("Exposure Compensation", EXPOSURE, "EV"),
    "ExposureProgram": PlainMapping("Exposure Program", EXPOSURE),
    "ExposureMode": PlainMapping("Exposure Mode", EXPOSURE),
    "MeteringMode": PlainMapping("Metering Mode", EXPOSURE),
    "BrightnessValue": UnitMapping("Brightness", EXPOSURE, "EV"),
    "Flash": PlainMapping("Flash", EXPOSURE),
    "FlashEnergy": PlainMapping("Flash Energy", EXPOSURE),
    "WhiteBalance": PlainMapping("White Balance", EXPOSURE),
    "LightSource": PlainMapping("Light Source", EXPOSURE),

    # Image
    "Image Width": UnitMapping("Width", IMAGE, "px"),
    "Image Height": UnitMapping("Height", IMAGE, "px"),
    "PixelXDimension": UnitMapping("Pixel Width", IMAGE, "px"),
    "PixelYDimension": UnitMapping("Pixel Height", IMAGE, "px"),
    "Orientation": PlainMapping("Orientation", IMAGE),
    "XResolution": UnitMapping("Horizontal Resolution", IMAGE, "dpi"),
    "YResolution": UnitMapping("Vertical Resolution", IMAGE, "dpi"),
    "ResolutionUnit": PlainMapping("Resolution Unit", IMAGE),
    "ColorSpace": PlainMapping("Color Space", IMAGE),
    "BitsPerSample": PlainMapping("Bits Per Sample", IMAGE),

    # GPS
    "GPSLatitude": UnitMapping("Latitude", GPS, "°"),
    "GPSLongitude": UnitMapping("Longitude", GPS, "°"),
    "GPSAltitude": UnitMapping("Altitude", GPS, "m"),
    "GPSSpeed": PlainMapping("Speed", GPS),
    "GPSSpeedRef": PlainMapping("Speed Unit", GPS),
    "GPSImgDirection": UnitMapping("Direction", GPS, "°"),
    "GPSDestBearing": UnitMapping("Destination Bearing", GPS, "°"),
    "GPSTrack": UnitMapping("Movement Direction", GPS, "°"),
    "GPSHPositioningError": UnitMapping("GPS Accuracy", GPS, "m"),
    "GPSDOP": PlainMapping("GPS Precision", GPS),
    "GPSMapDatum": PlainMapping("Map Datum", GPS),

    # Time
    "DateTime": PlainMapping("Date/Time", TIME),
    "DateTimeOriginal": PlainMapping("Original Date/Time", TIME),
    "DateTimeDigitized": PlainMapping("Digitized Date/Time", TIME),
    "SubSecTimeOriginal": PlainMapping("Subsecond Time", TIME),
    "OffsetTimeOriginal": PlainMapping("Time Zone Offset", TIME),
    "GPSDateStamp": PlainMapping("GPS Date", TIME),
    "GPSTimeStamp": PlainMapping("GPS Time", TIME),

    # Advanced
    "ExifVersion": PlainMapping("EXIF Version", ADVANCED),
    "FlashpixVersion": PlainMapping("Flashpix Version", ADVANCED),
    "FieldOfView": UnitMapping("Field of View", ADVANCED, "°"),
    "SceneType": PlainMapping("Scene Type", ADVANCED),
    "SceneCaptureType": PlainMapping("Scene Capture Type", ADVANCED),
    "SubjectArea": PlainMapping("Focus Area", ADVANCED),
    "SubjectDistance": UnitMapping("Subject Distance", ADVANCED, "m"),
    "SubjectDistanceRange": PlainMapping("Distance Range", ADVANCED),
    "DigitalZoomRatio": UnitMapping("Digital Zoom", ADVANCED, "x"),
    "Contrast": PlainMapping("Contrast", ADVANCED),
    "Saturation": PlainMapping("Saturation", ADVANCED),
    "Sharpness": PlainMapping("Sharpness", ADVANCED),
    "GainControl": PlainMapping("Gain Control", ADVANCED),
    "CustomRendered": PlainMapping("Custom Processing", ADVANCED),
    "SensingMethod": PlainMapping("Sensor Type", ADVANCED),
    "FileSource": PlainMapping("File Source", ADVANCED),
    "Artist": PlainMapping("Artist/Photographer", ADVANCED),
    "Copyright": PlainMapping("Copyright", ADVANCED),
    "ImageDescription": PlainMapping("Description", ADVANCED),
    "UserComment": PlainMapping("User Comment", ADVANCED),

    # Vendor-specific
    "Lens": PlainMapping("Lens Info", VENDOR),
})


def get_mapping(tag_name: str) -> Optional[ExifPropertyMapping]:
    return EXIF_PROPERTY_MAPPINGS.get(tag_name)


def get_display_name(tag_name: str) -> str:
    """User-friendly name for a tag, or the tag name itself when unmapped."""
    mapping = EXIF_PROPERTY_MAPPINGS.get(tag_name)
    return mapping.display_name if mapping else tag_name


def get_category(tag_name: str) -> Optional[ExifCategory]:
    mapping = EXIF_PROPERTY_MAPPINGS.get(tag_name)
    return mapping.category if mapping else None
