import asyncio
import logging
from typing import Dict, Optional

from app.common.models import ComprehensivePhotoInfo, MappedTag, PhotoInfo
from app.config import PhotoInfoConfig
from app.photo_info.camera.exposure import extract_exposure_program, extract_exposure_time
from app.photo_info.camera.lens import (
    extract_f_number,
    extract_field_of_view,
    extract_focal_length,
    extract_focal_length_in_35mm,
    extract_lens_info,
    resolve_angles_of_view,
)
from app.photo_info.camera.sensor import infer_sensor_aspect_ratio
from app.photo_info.gps.gps import (
    calculate_gps_accuracy,
    extract_bearing,
    extract_gps_error,
    extract_gps_position,
    extract_gps_speed,
)
from app.photo_info.mappings.categories import group_for_display, map_tags
from app.photo_info.parser import TagAccessor, parse_exif_data
from app.photo_info.tag_source import PhotoSource, PiexifTagSource, TagSource, describe_source
from app.utils.date import reformat_date
from app.utils.image import (
    determine_orientation,
    extract_camera_info,
    extract_date_time,
    extract_image_dimensions,
)
from app.utils.performance import PerformanceMonitor

logger = logging.getLogger(__name__)


class PhotoInfoExtractor:
    """
    Derives display-ready photo information from the tags embedded in a photo.

    Every public operation decodes the photo once through the tag source and
    never raises for unreadable or partial metadata.
    """

    def __init__(self, tag_source: Optional[TagSource] = None, config: Optional[PhotoInfoConfig] = None):
        self.tag_source = tag_source or PiexifTagSource()
        self.config = config or PhotoInfoConfig()

    async def get_photo_info(
        self,
        file: PhotoSource,
        include_original_tags: bool = False,
        debug: bool = False,
    ) -> PhotoInfo:
        """Primary derivation: geometry, GPS, orientation and exposure of one photo."""
        monitor = PerformanceMonitor()
        monitor.start()

        tags = await parse_exif_data(self.tag_source, file)
        info = self.build_photo_info(tags, include_original_tags)

        monitor.stop()
        monitor.report("photo_info")

        if debug:
            logger.info(f"EXIF data for {describe_source(file)}: {tags.tags}")
            logger.info(f"Extracted data for {describe_source(file)}: {info}")
        return info

    async def get_mapped_photo_info(self, file: PhotoSource) -> Dict[str, MappedTag]:
        """Mapped tags with display names and formatted values."""
        monitor = PerformanceMonitor()
        monitor.start()

        tags = await parse_exif_data(self.tag_source, file)
        mapped = map_tags(tags.tags)

        monitor.stop()
        monitor.report("mapped", count=len(mapped))
        return mapped

    async def get_grouped_photo_info(self, file: PhotoSource, prune_empty: bool = False) -> Dict[str, Dict[str, str]]:
        """Formatted tag values grouped by all categories; ``prune_empty`` drops the empty ones."""
        monitor = PerformanceMonitor()
        monitor.start()

        tags = await parse_exif_data(self.tag_source, file)
        grouped = group_for_display(tags.descriptions(), prune_empty=prune_empty)

        monitor.stop()
        monitor.report("grouped", count=len(grouped))
        return grouped

    async def get_comprehensive_photo_info(self, file: PhotoSource) -> ComprehensivePhotoInfo:
        """
        Run the plain, mapped and grouped derivations concurrently. The grouped
        view here leaves out empty categories.

        A branch that fails is logged and replaced by its empty result so the
        other two are still returned.
        """
        original, mapped, grouped = await asyncio.gather(
            self.get_photo_info(file, include_original_tags=True),
            self.get_mapped_photo_info(file),
            self.get_grouped_photo_info(file, prune_empty=True),
            return_exceptions=True,
        )

        label = describe_source(file)
        if isinstance(original, Exception):
            logger.error(f"Photo info derivation failed for {label}: {original}")
            original = PhotoInfo(original_tags={})
        if isinstance(mapped, Exception):
            logger.error(f"Tag mapping failed for {label}: {mapped}")
            mapped = {}
        if isinstance(grouped, Exception):
            logger.error(f"Tag grouping failed for {label}: {grouped}")
            grouped = {}

        return ComprehensivePhotoInfo(original=original, mapped=mapped, grouped=grouped)

    def build_photo_info(self, tags: TagAccessor, include_original_tags: bool = False) -> PhotoInfo:
        config = self.config

        gps_position = extract_gps_position(tags, config.coordinate_precision, config.altitude_precision)
        focal_length = extract_focal_length(tags, config.focal_length_precision)
        focal_length_in_35mm = extract_focal_length_in_35mm(tags)
        width, height = extract_image_dimensions(tags)
        lens, front_camera = extract_lens_info(tags)
        make, model = extract_camera_info(tags)

        orientation, adjusted_width, adjusted_height = determine_orientation(
            width,
            height,
            tags.get("Orientation", "description"),
            config.orientation.portrait_markers,
        )

        aspect_ratio = infer_sensor_aspect_ratio(width, height) if width and height else None
        angle_of_view, effective_angle_of_view = resolve_angles_of_view(
            focal_length,
            focal_length_in_35mm,
            extract_field_of_view(tags),
            orientation,
            aspect_ratio,
            config.geometry,
        )

        # Accuracy only means something for a photo that has a position
        gps_accuracy = calculate_gps_accuracy(extract_gps_error(tags)) if gps_position else None

        return PhotoInfo(
            make=make,
            model=model,
            lens=lens,
            front_camera=front_camera,
            focal_length=focal_length,
            focal_length_in_35mm=focal_length_in_35mm,
            angle_of_view=angle_of_view,
            effective_angle_of_view=effective_angle_of_view,
            gps_position=gps_position,
            gps_accuracy=gps_accuracy,
            gps_speed=extract_gps_speed(tags),
            bearing=extract_bearing(tags, config.bearing_precision),
            width=adjusted_width,
            height=adjusted_height,
            orientation=orientation,
            date_time=reformat_date(extract_date_time(tags)),
            exposure_time=extract_exposure_time(tags),
            exposure_program=extract_exposure_program(tags),
            f_number=extract_f_number(tags),
            original_tags=dict(tags.tags) if include_original_tags else None,
        )


async def get_photo_info(file: PhotoSource, include_original_tags: bool = False, debug: bool = False) -> PhotoInfo:
    return await PhotoInfoExtractor().get_photo_info(file, include_original_tags, debug)


async def get_mapped_photo_info(file: PhotoSource) -> Dict[str, MappedTag]:
    return await PhotoInfoExtractor().get_mapped_photo_info(file)


async def get_grouped_photo_info(file: PhotoSource, prune_empty: bool = False) -> Dict[str, Dict[str, str]]:
    return await PhotoInfoExtractor().get_grouped_photo_info(file, prune_empty)


async def get_comprehensive_photo_info(file: PhotoSource) -> ComprehensivePhotoInfo:
    return await PhotoInfoExtractor().get_comprehensive_photo_info(file)
