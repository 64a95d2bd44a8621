from functools import lru_cache

from app.photo_info.services.extractor import PhotoInfoExtractor
from app.photo_info.tag_source import PiexifTagSource


@lru_cache()
def get_photo_info_extractor() -> PhotoInfoExtractor:
    # Stateless, safe to share across requests
    return PhotoInfoExtractor(PiexifTagSource())
