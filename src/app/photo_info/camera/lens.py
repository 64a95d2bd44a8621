import logging
import math
from typing import NamedTuple, Optional, Tuple

from app.config import GeometryConfig
from app.photo_info.camera.sensor import calculate_sensor_diagonal, parse_aspect_ratio
from app.photo_info.parser import TagAccessor
from app.schemas.enum import Orientation
from app.utils.math import divide_by_next, format_number

logger = logging.getLogger(__name__)

GEOMETRY = GeometryConfig()


class SensorSize(NamedTuple):
    width: float
    height: float


class AnglesOfView(NamedTuple):
    horizontal: Optional[float]
    vertical: Optional[float]


def calculate_sensor_size(
    focal_length_in_35mm: float,
    focal_length: float,
    aspect_ratio: str = GEOMETRY.default_aspect_ratio,
) -> SensorSize:
    """
    Estimate the physical sensor size from the real and 35mm equivalent focal lengths.

    The equivalent diagonal (full-frame diagonal / crop factor) is split into
    width and height in proportion to the aspect ratio.

    Args:
        focal_length_in_35mm: 35mm equivalent focal length.
        focal_length: Real focal length.
        aspect_ratio: "width:height", defaults to "4:3".

    Returns:
        Sensor width and height in mm, 2 dp.
    """
    crop_factor = focal_length_in_35mm / focal_length
    sensor_diagonal = calculate_sensor_diagonal() / crop_factor
    ratio_width, ratio_height = parse_aspect_ratio(aspect_ratio)
    ratio_diagonal = math.sqrt(ratio_width ** 2 + ratio_height ** 2)

    return SensorSize(
        width=round(sensor_diagonal * (ratio_width / ratio_diagonal), 2),
        height=round(sensor_diagonal * (ratio_height / ratio_diagonal), 2),
    )


def _angle(sensor_dimension: float, focal_length: float, precision: int = 4) -> Optional[float]:
    degrees = math.degrees(2 * math.atan(sensor_dimension / (2 * focal_length)))
    return round(degrees, precision) if degrees else None


def calculate_angle_of_view(
    focal_length: Optional[float],
    focal_length_in_35mm: Optional[float] = None,
    aspect_ratio: Optional[str] = None,
) -> Optional[float]:
    """
    Horizontal angle of view in degrees (4 dp), from the estimated sensor width.

    Without a 35mm equivalent the real focal length is used for both, i.e. a
    full-frame sensor is assumed. Returns None when there is no focal length.
    """
    return calculate_angles_of_view(focal_length, focal_length_in_35mm, aspect_ratio).horizontal


def calculate_angles_of_view(
    focal_length: Optional[float],
    focal_length_in_35mm: Optional[float] = None,
    aspect_ratio: Optional[str] = None,
) -> AnglesOfView:
    """Horizontal and vertical angles of view in degrees (4 dp)."""
    if not focal_length:
        return AnglesOfView(None, None)

    width, height = calculate_sensor_size(
        focal_length_in_35mm or focal_length,
        focal_length,
        aspect_ratio or GEOMETRY.default_aspect_ratio,
    )
    return AnglesOfView(_angle(width, focal_length), _angle(height, focal_length))


def calculate_35mm_angles_of_view(focal_length_in_35mm: float) -> AnglesOfView:
    """Angles of view of a 35mm equivalent focal length on the 36x24mm reference frame."""
    return AnglesOfView(
        _angle(GEOMETRY.full_frame_width, focal_length_in_35mm),
        _angle(GEOMETRY.full_frame_height, focal_length_in_35mm),
    )


def vertical_from_horizontal(horizontal_fov: float, aspect_ratio: str) -> float:
    """Vertical angle of view from a horizontal one: 2*atan(tan(h/2) / (W/H))."""
    ratio_width, ratio_height = parse_aspect_ratio(aspect_ratio)
    horizontal_rad = math.radians(horizontal_fov)
    vertical_rad = 2 * math.atan(math.tan(horizontal_rad / 2) / (ratio_width / ratio_height))
    return round(math.degrees(vertical_rad), 4)


def resolve_angles_of_view(
    focal_length: Optional[float],
    focal_length_in_35mm: Optional[float],
    exif_field_of_view: Optional[float],
    orientation: Orientation,
    aspect_ratio: Optional[str],
    config: GeometryConfig = GEOMETRY,
) -> Tuple[Optional[float], Optional[float]]:
    """
    Pick the published angle of view and the orientation-adjusted one used for map markers.

    1. A FieldOfView reported by the camera is taken as the horizontal FOV; for
       portrait photos the vertical FOV is derived from the aspect ratio.
    2. Otherwise, sensors with a crop factor above the phone threshold use the
       35mm equivalent against the 36x24mm frame; others use the estimated
       sensor dimensions.

    Returns:
        (angle_of_view, effective_angle_of_view); the first is always horizontal.
    """
    portrait = orientation == Orientation.PORTRAIT

    if exif_field_of_view:
        angle_of_view = round(exif_field_of_view, 4)
        if portrait and aspect_ratio:
            return angle_of_view, vertical_from_horizontal(angle_of_view, aspect_ratio)
        return angle_of_view, angle_of_view

    if not focal_length:
        return None, None

    crop_factor = focal_length_in_35mm / focal_length if focal_length_in_35mm else 1
    if crop_factor > config.phone_crop_factor_threshold and focal_length_in_35mm:
        logger.debug(f"Crop factor {crop_factor:.2f} above {config.phone_crop_factor_threshold}, using 35mm frame")
        fovs = calculate_35mm_angles_of_view(focal_length_in_35mm)
    else:
        fovs = calculate_angles_of_view(focal_length, focal_length_in_35mm, aspect_ratio)

    return fovs.horizontal, fovs.vertical if portrait else fovs.horizontal


def _rational(value) -> Optional[float]:
    return divide_by_next(value) if isinstance(value, (list, tuple)) else None


def _to_float(value) -> Optional[float]:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def extract_focal_length(tags: TagAccessor, precision: int = 2) -> Optional[float]:
    focal_length = tags.get("FocalLength", "value", _rational)
    return round(focal_length, precision) if focal_length else None


def extract_focal_length_in_35mm(tags: TagAccessor) -> Optional[float]:
    return tags.get("FocalLengthIn35mmFilm", "value", _to_float)


def _angle_in_degrees(value) -> Optional[float]:
    degrees = _to_float(value)
    if degrees is None or not math.isfinite(degrees) or degrees <= 0:
        return None
    return degrees


def extract_field_of_view(tags: TagAccessor) -> Optional[float]:
    """Camera-reported horizontal FOV; anything but a finite positive angle counts as absent."""
    return tags.get("FieldOfView", "value", _angle_in_degrees)


def extract_f_number(tags: TagAccessor) -> Optional[str]:
    f_number = tags.get("FNumber", "value", _rational)
    return f"f/{format_number(f_number)}" if f_number else None


def extract_lens_info(tags: TagAccessor) -> Tuple[Optional[str], bool]:
    """Lens description and whether it is a front (selfie) camera."""
    lens = tags.get("Lens", "value")
    if lens is None:
        lens = tags.get("LensModel", "description")
    front_camera = isinstance(lens, str) and " front " in lens
    return lens, front_camera
