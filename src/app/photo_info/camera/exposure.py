from typing import Optional

from app.photo_info.parser import TagAccessor


def extract_exposure_time(tags: TagAccessor) -> Optional[str]:
    return tags.get("ExposureTime", "description")


def extract_exposure_program(tags: TagAccessor) -> Optional[str]:
    return tags.get("ExposureProgram", "description")
