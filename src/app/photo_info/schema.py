from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from app.schemas.enum import AccuracyGrade, Orientation


class GPSAccuracyResponse(BaseModel):
    error: float = Field(description="Horizontal positioning error in meters")
    grade: AccuracyGrade
    description: str


class GPSSpeedResponse(BaseModel):
    value: float
    unit: str


class ExifTagResponse(BaseModel):
    value: Any = None
    description: Optional[str] = None


class PhotoInfoResponse(BaseModel):
    make: Optional[str] = None
    model: Optional[str] = None
    lens: Optional[str] = None
    front_camera: bool = False
    focal_length: Optional[float] = None
    focal_length_in_35mm: Optional[float] = None
    angle_of_view: Optional[float] = Field(None, description="Horizontal angle of view in degrees")
    effective_angle_of_view: Optional[float] = Field(None, description="Orientation-aware angle of view for map markers")
    gps_position: Optional[List[float]] = Field(None, description="[latitude, longitude, altitude?]")
    gps_accuracy: Optional[GPSAccuracyResponse] = None
    gps_speed: Optional[GPSSpeedResponse] = None
    bearing: Optional[float] = None
    width: int = 0
    height: int = 0
    orientation: Orientation = Orientation.LANDSCAPE
    date_time: Optional[str] = None
    exposure_time: Optional[str] = None
    exposure_program: Optional[str] = None
    f_number: Optional[str] = None
    original_tags: Optional[Dict[str, ExifTagResponse]] = None


class MappedTagResponse(BaseModel):
    value: Any = None
    display_name: str
    formatted_value: str


class ComprehensivePhotoInfoResponse(BaseModel):
    original: PhotoInfoResponse
    mapped: Dict[str, MappedTagResponse]
    grouped: Dict[str, Dict[str, str]]
