import asyncio
import io
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import aiofiles
import httpx
import piexif
from PIL import Image, UnidentifiedImageError

from app.common.models import ExifTag
from app.photo_info.exceptions import TagSourceError
from app.utils.math import format_number
from core.config import configs

logger = logging.getLogger(__name__)

# Local path, http(s) URL or raw image bytes
PhotoSource = Union[str, Path, bytes]

# IFDs that describe the primary image; "1st" (thumbnail) is skipped so it
# cannot shadow primary-image tags with the same name.
PRIMARY_IFDS = ("0th", "Exif", "GPS", "Interop")
SKIPPED_TAGS = {
    "MakerNote",
    "JPEGInterchangeFormat",
    "JPEGInterchangeFormatLength",
    # IFD pointers
    "ExifTag",
    "GPSTag",
    "InteroperabilityTag",
}
RATIONAL_TYPES = {piexif.TYPES.Rational, piexif.TYPES.SRational}

ORIENTATION_DESCRIPTIONS = {
    1: "top-left",
    2: "top-right",
    3: "bottom-right",
    4: "bottom-left",
    5: "left-top",
    6: "right-top",
    7: "right-bottom",
    8: "left-bottom",
}

EXPOSURE_PROGRAM_DESCRIPTIONS = {
    0: "Undefined",
    1: "Manual",
    2: "Normal program",
    3: "Aperture priority",
    4: "Shutter priority",
    5: "Creative program",
    6: "Action program",
    7: "Portrait mode",
    8: "Landscape mode",
}

METERING_MODE_DESCRIPTIONS = {
    0: "Unknown",
    1: "Average",
    2: "CenterWeightedAverage",
    3: "Spot",
    4: "MultiSpot",
    5: "Pattern",
    6: "Partial",
    255: "Other",
}

ENUM_DESCRIPTIONS = {
    "Orientation": ORIENTATION_DESCRIPTIONS,
    "ExposureProgram": EXPOSURE_PROGRAM_DESCRIPTIONS,
    "MeteringMode": METERING_MODE_DESCRIPTIONS,
    "WhiteBalance": {0: "Auto white balance", 1: "Manual white balance"},
    "ExposureMode": {0: "Auto exposure", 1: "Manual exposure", 2: "Auto bracket"},
    "ColorSpace": {1: "sRGB", 65535: "Uncalibrated"},
    "ResolutionUnit": {1: "None", 2: "inches", 3: "centimeters"},
    "SceneCaptureType": {0: "Standard", 1: "Landscape", 2: "Portrait", 3: "Night scene"},
    "GPSAltitudeRef": {0: "Sea level", 1: "Sea level reference (negative value)"},
}

REF_DESCRIPTIONS = {
    "GPSLatitudeRef": {"N": "North latitude", "S": "South latitude"},
    "GPSLongitudeRef": {"E": "East longitude", "W": "West longitude"},
    "GPSSpeedRef": {"K": "Kilometers per hour", "M": "Miles per hour", "N": "Knots"},
    "GPSImgDirectionRef": {"T": "True North", "M": "Magnetic North"},
    "GPSDestBearingRef": {"T": "True North", "M": "Magnetic North"},
    "GPSTrackRef": {"T": "True North", "M": "Magnetic North"},
}

DEGREE_TAGS = {"GPSLatitude", "GPSLongitude", "GPSDestLatitude", "GPSDestLongitude"}

# UserComment starts with an 8-byte character code ("ASCII\0\0\0", "UNICODE\0", ...)
USER_COMMENT_HEADER_LENGTH = 8


def has_exif_container(content: bytes) -> bool:
    """
    True for JPEG, TIFF, WebP or bare "Exif" payloads.

    piexif.load treats any other str/bytes as a filename, so nothing else may reach it.
    """
    return (
        content[:2] == b"\xff\xd8"
        or content[:4] in (b"II*\x00", b"MM\x00*", b"Exif")
        or (content[:4] == b"RIFF" and content[8:12] == b"WEBP")
    )


def describe_source(file: PhotoSource) -> str:
    """Short label for logs: the path/URL, or the payload size for raw bytes."""
    if isinstance(file, (bytes, bytearray)):
        return f"<{len(file)} bytes>"
    return str(file)


class TagSource(ABC):
    """Abstract base class for photo tag decoders."""

    @abstractmethod
    async def load(self, file: PhotoSource) -> Dict[str, ExifTag]:
        """
        Decode the tags embedded in a photo.

        Args:
            file: A local path, an http(s) URL or the raw image bytes.

        Returns:
            A mapping of tag name to ExifTag(value, description).

        Raises:
            TagSourceError: If the photo cannot be read or decoded.
        """
        pass


class PiexifTagSource(TagSource):
    """
    Tag source backed by piexif (EXIF IFDs) and Pillow (pixel dimensions).

    Descriptions are bare human-readable values; units are left to the
    display mapping layer.
    """

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout if timeout is not None else configs.HTTP_TIMEOUT_SECONDS

    async def load(self, file: PhotoSource) -> Dict[str, ExifTag]:
        label = describe_source(file)
        content = await self._read(file, label)
        # piexif and Pillow are blocking; keep the event loop free
        return await asyncio.to_thread(self.decode, content, label)

    async def _read(self, file: PhotoSource, label: str) -> bytes:
        if isinstance(file, (bytes, bytearray)):
            return bytes(file)

        path = str(file)
        try:
            if path.startswith(("http://", "https://")):
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    resp = await client.get(path)
                    resp.raise_for_status()
                    return resp.content

            async with aiofiles.open(path, "rb") as f:
                return await f.read()
        except (httpx.HTTPError, OSError) as e:
            raise TagSourceError(label, str(e)) from e

    def decode(self, content: bytes, label: str = "<bytes>") -> Dict[str, ExifTag]:
        """Synchronous decode of raw image bytes into named tags."""
        if not has_exif_container(content):
            raise TagSourceError(label, "not a JPEG, TIFF or WebP image")

        try:
            exif = piexif.load(content)
        except Exception as e:
            raise TagSourceError(label, f"unreadable EXIF container ({e})") from e

        tags: Dict[str, ExifTag] = {}
        for ifd in PRIMARY_IFDS:
            ifd_tags = piexif.TAGS.get(ifd, {})
            for tag_id, raw in (exif.get(ifd) or {}).items():
                info = ifd_tags.get(tag_id)
                if not info or info["name"] in SKIPPED_TAGS:
                    continue
                name = info["name"]
                tags[name] = self._describe(name, raw, info["type"])

        tags.update(self._dimensions(content, label))
        logger.debug(f"Decoded {len(tags)} tags from {label}")
        return tags

    def _dimensions(self, content: bytes, label: str) -> Dict[str, ExifTag]:
        try:
            with Image.open(io.BytesIO(content)) as img:
                width, height = img.size
        except (UnidentifiedImageError, OSError) as e:
            logger.debug(f"Could not read pixel dimensions for {label}: {e}")
            return {}

        return {
            "Image Width": ExifTag(value=width, description=str(width)),
            "Image Height": ExifTag(value=height, description=str(height)),
        }

    def _describe(self, name: str, raw: Any, tag_type: int) -> ExifTag:
        if isinstance(raw, bytes):
            if name == "UserComment":
                raw = raw[USER_COMMENT_HEADER_LENGTH:]
            text = _decode_text(raw)
            description = REF_DESCRIPTIONS.get(name, {}).get(text, text)
            return ExifTag(value=text, description=description)

        if tag_type in RATIONAL_TYPES:
            return self._describe_rational(name, raw)

        if isinstance(raw, tuple) and len(raw) == 1:
            raw = raw[0]

        if isinstance(raw, tuple):
            values = list(raw)
            return ExifTag(value=values, description=", ".join(str(v) for v in values))

        if name in ENUM_DESCRIPTIONS:
            return ExifTag(value=raw, description=ENUM_DESCRIPTIONS[name].get(raw, str(raw)))

        return ExifTag(value=raw, description=str(raw))

    def _describe_rational(self, name: str, raw: Any) -> ExifTag:
        if not raw:
            return ExifTag(value=[], description="")
        if isinstance(raw[0], tuple):
            values = [list(r) for r in raw]
            floats = [_ratio(r) for r in raw]
            if name in DEGREE_TAGS and len(floats) == 3:
                degrees, minutes, seconds = floats
                description = format_number(round(degrees + minutes / 60.0 + seconds / 3600.0, 7))
            else:
                description = ", ".join(format_number(round(f, 4)) for f in floats)
            return ExifTag(value=values, description=description)

        value = list(raw)
        number = _ratio(raw)
        if name == "ExposureTime" and 0 < number < 1:
            description = f"1/{round(1 / number)}"
        elif name == "FNumber":
            description = f"f/{format_number(round(number, 2))}"
        else:
            description = format_number(round(number, 4))
        return ExifTag(value=value, description=description)


def _ratio(pair: Union[tuple, List[int]]) -> float:
    num, den = pair
    return float(num) / float(den) if den else 0.0


def _decode_text(raw: bytes) -> str:
    return raw.decode("utf-8", errors="ignore").replace("\x00", "").strip()
