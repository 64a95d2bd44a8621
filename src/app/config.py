from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class GeometryConfig:
    # 35mm full-frame reference sensor (mm)
    full_frame_width: float = 36.0
    full_frame_height: float = 24.0
    default_aspect_ratio: str = "4:3"
    # Above this crop factor the sensor is treated as a phone sensor and the
    # angle of view is derived from the 35mm equivalent focal length directly.
    phone_crop_factor_threshold: float = 5.0
    aspect_ratio_tolerance: float = 0.05


@dataclass(frozen=True)
class OrientationConfig:
    # Orientation tag descriptions that mean the sensor was rotated 90 degrees
    portrait_markers: Tuple[str, ...] = ("right-top", "left-top")


@dataclass(frozen=True)
class PhotoInfoConfig:
    geometry: GeometryConfig = field(default_factory=GeometryConfig)
    orientation: OrientationConfig = field(default_factory=OrientationConfig)

    # General settings
    coordinate_precision: int = 7
    altitude_precision: int = 2
    bearing_precision: int = 2
    focal_length_precision: int = 2
