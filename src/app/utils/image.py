import logging
from typing import Iterable, NamedTuple, Optional, Tuple

from app.config import OrientationConfig
from app.photo_info.parser import TagAccessor
from app.schemas.enum import Orientation

logger = logging.getLogger(__name__)

PORTRAIT_MARKERS = OrientationConfig().portrait_markers


class OrientedDimensions(NamedTuple):
    orientation: Orientation
    width: int
    height: int


def _to_int(value) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def extract_image_dimensions(tags: TagAccessor) -> Tuple[int, int]:
    """
    Pixel width and height; 0 when unknown.

    The decoded frame size wins over the EXIF PixelX/YDimension tags, which
    editors often leave stale.
    """
    width = tags.get("Image Width", "value", _to_int)
    if width is None:
        width = tags.get("PixelXDimension", "value", _to_int)
    height = tags.get("Image Height", "value", _to_int)
    if height is None:
        height = tags.get("PixelYDimension", "value", _to_int)
    return width or 0, height or 0


def determine_orientation(
    width: int,
    height: int,
    orientation_description: Optional[str],
    portrait_markers: Iterable[str] = PORTRAIT_MARKERS,
) -> OrientedDimensions:
    """
    Classify the photo as landscape, portrait or square and fix up its dimensions.

    Some cameras store the unrotated sensor dimensions alongside a rotated
    orientation tag; in that case width and height are swapped so they match
    what a viewer displays.
    """
    rotated = (orientation_description or "") in portrait_markers

    # Unknown dimensions (0x0) also classify as square
    if width == height:
        orientation = Orientation.SQUARE
    elif height > width or rotated:
        orientation = Orientation.PORTRAIT
    else:
        orientation = Orientation.LANDSCAPE

    if width > height and rotated:
        logger.debug(f"Swapping {width}x{height} to match orientation '{orientation_description}'")
        return OrientedDimensions(orientation, height, width)

    return OrientedDimensions(orientation, width, height)


def extract_camera_info(tags: TagAccessor) -> Tuple[Optional[str], Optional[str]]:
    return tags.get("Make", "description"), tags.get("Model", "description")


def extract_date_time(tags: TagAccessor) -> Optional[str]:
    """Capture time as stored by the camera, falling back to the file modification time tag."""
    return tags.get("DateTimeOriginal", "description") or tags.get("DateTime", "description")
