from typing import Dict, Optional

from app.common.models import ComprehensivePhotoInfo, ExifTag, MappedTag, PhotoInfo
from app.photo_info.schema import (
    ComprehensivePhotoInfoResponse,
    ExifTagResponse,
    GPSAccuracyResponse,
    GPSSpeedResponse,
    MappedTagResponse,
    PhotoInfoResponse,
)


def _to_original_tags(tags: Optional[Dict[str, ExifTag]]) -> Optional[Dict[str, ExifTagResponse]]:
    if tags is None:
        return None
    return {name: ExifTagResponse(value=tag.value, description=tag.description) for name, tag in tags.items()}


def format_photo_info(info: PhotoInfo) -> PhotoInfoResponse:
    """내부 PhotoInfo 객체를 응답용 Pydantic 모델로 변환"""
    return PhotoInfoResponse(
        make=info.make,
        model=info.model,
        lens=info.lens,
        front_camera=info.front_camera,
        focal_length=info.focal_length,
        focal_length_in_35mm=info.focal_length_in_35mm,
        angle_of_view=info.angle_of_view,
        effective_angle_of_view=info.effective_angle_of_view,
        gps_position=list(info.gps_position) if info.gps_position else None,
        gps_accuracy=GPSAccuracyResponse(
            error=info.gps_accuracy.error,
            grade=info.gps_accuracy.grade,
            description=info.gps_accuracy.description,
        ) if info.gps_accuracy else None,
        gps_speed=GPSSpeedResponse(value=info.gps_speed.value, unit=info.gps_speed.unit) if info.gps_speed else None,
        bearing=info.bearing,
        width=info.width,
        height=info.height,
        orientation=info.orientation,
        date_time=info.date_time,
        exposure_time=info.exposure_time,
        exposure_program=info.exposure_program,
        f_number=info.f_number,
        original_tags=_to_original_tags(info.original_tags),
    )


def format_mapped_tags(mapped: Dict[str, MappedTag]) -> Dict[str, MappedTagResponse]:
    return {
        name: MappedTagResponse(value=tag.value, display_name=tag.display_name, formatted_value=tag.formatted_value)
        for name, tag in mapped.items()
    }


def format_comprehensive_info(info: ComprehensivePhotoInfo) -> ComprehensivePhotoInfoResponse:
    return ComprehensivePhotoInfoResponse(
        original=format_photo_info(info.original),
        mapped=format_mapped_tags(info.mapped),
        grouped=info.grouped,
    )
