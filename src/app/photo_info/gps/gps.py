import logging
import math
from typing import Any, List, Optional, Tuple

from app.common.models import GPSAccuracy, GPSSpeed, Position
from app.photo_info.parser import TagAccessor
from app.schemas.enum import AccuracyGrade
from app.utils.math import divide_by_next

logger = logging.getLogger(__name__)

NO_ERROR_REPORTED = "Excellent - No positioning error reported"

# (upper bound in meters, grade, description), checked in order
ACCURACY_GRADES: List[Tuple[float, AccuracyGrade, str]] = [
    (5, AccuracyGrade.A, "Excellent - Strong satellite fix"),
    (10, AccuracyGrade.B, "Good - Typical smartphone accuracy"),
    (20, AccuracyGrade.C, "Fair - Some obstructions"),
    (50, AccuracyGrade.D, "Poor - Weak signal or just acquired"),
]
WORST_GRADE = (AccuracyGrade.F, "Very poor - Unreliable GPS data")

SPEED_UNITS = {
    "Kilometers per hour": "km/h",
    "Miles per hour": "mph",
    "Knots": "kn",
}


def calculate_gps_accuracy(error: Optional[float]) -> GPSAccuracy:
    """
    Grade a horizontal positioning error (meters).

    No error tag usually means the receiver had a good fix, so None grades as A.
    """
    if error is None:
        return GPSAccuracy(error=0, grade=AccuracyGrade.A, description=NO_ERROR_REPORTED)

    grade, description = WORST_GRADE
    for upper_bound, bound_grade, bound_description in ACCURACY_GRADES:
        if error < upper_bound:
            grade, description = bound_grade, bound_description
            break

    return GPSAccuracy(error=round(error, 2), grade=grade, description=description)


def _hemisphere_sign(positive: str):
    def sign(ref: Any) -> int:
        if isinstance(ref, (list, tuple)):
            ref = ref[0] if ref else None
        return 1 if ref == positive else -1

    return sign


def _signed_coordinate(sign: int):
    def coordinate(description: Any) -> Optional[float]:
        try:
            value = float(description) * sign
        except (TypeError, ValueError):
            return None
        return value if math.isfinite(value) else None

    return coordinate


def _rational(value: Any) -> Optional[float]:
    return divide_by_next(value) if isinstance(value, (list, tuple)) else None


def extract_gps_position(tags: TagAccessor, coordinate_precision: int = 7, altitude_precision: int = 2) -> Optional[Position]:
    """
    Get the position of the photo as a (latitude, longitude[, altitude]) tuple.

    Both coordinates need their hemisphere reference; anything less yields None.
    """
    if not (tags.has("GPSLatitude") and tags.has("GPSLongitude")):
        return None

    # South latitude and west longitude are negative
    lat_ref = tags.get("GPSLatitudeRef", "value", _hemisphere_sign("N"))
    lon_ref = tags.get("GPSLongitudeRef", "value", _hemisphere_sign("E"))
    if lat_ref is None or lon_ref is None:
        logger.debug("GPS coordinates present without hemisphere references, ignoring position")
        return None

    latitude = tags.get("GPSLatitude", "description", _signed_coordinate(lat_ref))
    longitude = tags.get("GPSLongitude", "description", _signed_coordinate(lon_ref))
    if latitude is None or longitude is None:
        return None

    latitude = round(latitude, coordinate_precision)
    longitude = round(longitude, coordinate_precision)

    altitude = tags.get("GPSAltitude", "value", _rational)
    if altitude:
        # 1 = below sea level
        if tags.get("GPSAltitudeRef", "value") == 1:
            altitude = -altitude
        return latitude, longitude, round(altitude, altitude_precision)

    return latitude, longitude


def extract_gps_speed(tags: TagAccessor) -> Optional[GPSSpeed]:
    speed = tags.get("GPSSpeed", "value", _rational)
    speed_ref = tags.get("GPSSpeedRef", "description")

    if speed is None or speed_ref is None:
        return None
    return GPSSpeed(value=speed, unit=truncate_speed_unit(speed_ref))


def _bearing(description: Any, precision: int = 2) -> Optional[float]:
    try:
        degrees = float(description)
    except (TypeError, ValueError):
        return None
    return round(degrees, precision) if math.isfinite(degrees) else None


def extract_bearing(tags: TagAccessor, precision: int = 2) -> Optional[float]:
    """Compass direction the camera was pointing, in degrees (2 dp)."""
    return tags.get("GPSImgDirection", "description", lambda description: _bearing(description, precision))


def extract_gps_error(tags: TagAccessor) -> Optional[float]:
    """Horizontal positioning error in meters, as reported by the receiver."""
    return tags.get("GPSHPositioningError", "value", divide_by_next)


def truncate_speed_unit(unit: str) -> str:
    return SPEED_UNITS.get(unit, unit)
