import io
import os
import sys

import piexif
import pytest
from PIL import Image

# Add src to sys.path
sys.path.append(os.path.join(os.path.dirname(__file__), "../src"))


def build_exif(orientation: int = 1, with_gps: bool = True) -> dict:
    exif = {
        "0th": {
            piexif.ImageIFD.Make: b"Apple",
            piexif.ImageIFD.Model: b"iPhone 14 Pro",
            piexif.ImageIFD.Orientation: orientation,
            piexif.ImageIFD.DateTime: b"2024:10:19 01:05:00",
        },
        "Exif": {
            piexif.ExifIFD.DateTimeOriginal: b"2024:10:19 01:01:24",
            piexif.ExifIFD.FocalLength: (686, 100),
            piexif.ExifIFD.FocalLengthIn35mmFilm: 24,
            piexif.ExifIFD.FNumber: (178, 100),
            piexif.ExifIFD.ExposureTime: (1, 20),
            piexif.ExifIFD.ExposureProgram: 2,
            piexif.ExifIFD.ISOSpeedRatings: 640,
            piexif.ExifIFD.LensModel: b"iPhone 14 Pro back triple camera 6.86mm f/1.78",
        },
        "GPS": {},
        "1st": {},
        "thumbnail": None,
    }
    if with_gps:
        exif["GPS"] = {
            piexif.GPSIFD.GPSLatitudeRef: b"N",
            piexif.GPSIFD.GPSLatitude: ((51, 1), (30, 1), (1525, 100)),
            piexif.GPSIFD.GPSLongitudeRef: b"W",
            piexif.GPSIFD.GPSLongitude: ((0, 1), (2, 1), (4751, 100)),
            piexif.GPSIFD.GPSAltitudeRef: 0,
            piexif.GPSIFD.GPSAltitude: (649, 100),
            piexif.GPSIFD.GPSSpeedRef: b"K",
            piexif.GPSIFD.GPSSpeed: (18, 10),
            piexif.GPSIFD.GPSImgDirection: (29993, 100),
        }
    return exif


def build_jpeg(width: int = 400, height: int = 300, exif: dict = None) -> bytes:
    buf = io.BytesIO()
    img = Image.new("RGB", (width, height), color=(120, 160, 200))
    if exif is None:
        img.save(buf, format="JPEG")
    else:
        img.save(buf, format="JPEG", exif=piexif.dump(exif))
    return buf.getvalue()


@pytest.fixture
def jpeg_bytes():
    return build_jpeg(exif=build_exif())


@pytest.fixture
def jpeg_path(tmp_path, jpeg_bytes):
    path = tmp_path / "photo.jpg"
    path.write_bytes(jpeg_bytes)
    return path
