from enum import Enum


class Orientation(str, Enum):
    LANDSCAPE = "landscape"
    PORTRAIT = "portrait"
    SQUARE = "square"


class AccuracyGrade(str, Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"


class ExifCategory(str, Enum):
    CAMERA = "camera"
    LENS = "lens"
    EXPOSURE = "exposure"
    IMAGE = "image"
    GPS = "gps"
    TIME = "time"
    ADVANCED = "advanced"
    VENDOR = "vendor"
