from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, Union

from app.schemas.enum import AccuracyGrade, Orientation

# (latitude, longitude) or (latitude, longitude, altitude)
Position = Union[Tuple[float, float], Tuple[float, float, float]]


@dataclass(frozen=True)
class ExifTag:
    value: Any = None
    description: Optional[str] = None


@dataclass(frozen=True)
class GPSAccuracy:
    error: float  # meters
    grade: AccuracyGrade
    description: str


@dataclass(frozen=True)
class GPSSpeed:
    value: float
    unit: str


@dataclass(frozen=True)
class MappedTag:
    value: Any
    display_name: str
    formatted_value: str


@dataclass(frozen=True)
class PhotoInfo:
    make: Optional[str] = None
    model: Optional[str] = None
    lens: Optional[str] = None
    front_camera: bool = False
    focal_length: Optional[float] = None
    focal_length_in_35mm: Optional[float] = None
    angle_of_view: Optional[float] = None
    effective_angle_of_view: Optional[float] = None  # orientation-aware, used by map markers
    gps_position: Optional[Position] = None
    gps_accuracy: Optional[GPSAccuracy] = None
    gps_speed: Optional[GPSSpeed] = None
    bearing: Optional[float] = None  # degrees
    width: int = 0
    height: int = 0
    orientation: Orientation = Orientation.LANDSCAPE
    date_time: Optional[str] = None  # ISO 8601, no timezone
    exposure_time: Optional[str] = None
    exposure_program: Optional[str] = None
    f_number: Optional[str] = None
    original_tags: Optional[Dict[str, ExifTag]] = None


@dataclass(frozen=True)
class ComprehensivePhotoInfo:
    original: PhotoInfo
    mapped: Dict[str, MappedTag] = field(default_factory=dict)
    grouped: Dict[str, Dict[str, str]] = field(default_factory=dict)
