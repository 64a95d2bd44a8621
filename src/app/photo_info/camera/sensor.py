import logging
import math
from typing import List, Tuple

from app.config import GeometryConfig

logger = logging.getLogger(__name__)

GEOMETRY = GeometryConfig()

# Common photographic aspect ratios and their decimal values
COMMON_ASPECT_RATIOS: List[Tuple[str, float]] = [
    ("3:2", 3 / 2),  # DSLRs (full frame and APS-C)
    ("4:3", 4 / 3),  # Micro Four Thirds, phones
    ("16:9", 16 / 9),  # video / cinema
    ("5:4", 5 / 4),  # some medium format
    ("1:1", 1.0),  # square
]


def calculate_sensor_diagonal(
    width: float = GEOMETRY.full_frame_width,
    height: float = GEOMETRY.full_frame_height,
) -> float:
    """Sensor diagonal in mm. Defaults to the 36x24mm full-frame reference."""
    return math.sqrt(width ** 2 + height ** 2)


def calculate_crop_factor(sensor_width: float, sensor_height: float) -> float:
    """Crop factor relative to 35mm full frame, from physical sensor dimensions (2 dp)."""
    crop_factor = calculate_sensor_diagonal() / calculate_sensor_diagonal(sensor_width, sensor_height)
    return round(crop_factor, 2)


def calculate_35mm_equivalent_focal_length(focal_length: float, sensor_width: float, sensor_height: float) -> int:
    """35mm equivalent focal length, rounded half up to a whole millimetre."""
    equivalent = focal_length * calculate_crop_factor(sensor_width, sensor_height)
    return int(math.floor(equivalent + 0.5))


def parse_aspect_ratio(aspect_ratio: str) -> Tuple[float, float]:
    """Splits a "W:H" string into its two numeric parts."""
    width, height = aspect_ratio.split(":")
    return float(width), float(height)


def infer_sensor_aspect_ratio(width: int, height: int) -> str:
    """
    Determine the sensor aspect ratio from pixel dimensions.

    The long/short ratio is matched to the closest common ratio. When nothing
    is within tolerance, the result falls back to "3:2" (DSLR) or "4:3"
    (everything else), whichever reference is closer.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        Aspect ratio string such as "3:2" or "4:3".
    """
    short_side = min(width, height)
    if short_side <= 0:
        return GEOMETRY.default_aspect_ratio

    ratio = max(width, height) / short_side
    closest_format, closest_value = min(COMMON_ASPECT_RATIOS, key=lambda r: abs(ratio - r[1]))

    if abs(ratio - closest_value) > GEOMETRY.aspect_ratio_tolerance:
        logger.debug(f"Unusual aspect ratio {ratio:.3f} for {width}x{height}, using a DSLR/phone default")
        return "3:2" if abs(ratio - 1.5) < abs(ratio - 1.333) else "4:3"

    return closest_format
