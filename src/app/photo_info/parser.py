import logging
from typing import Any, Callable, Dict, Literal, Mapping, Optional, TypeVar

from app.common.models import ExifTag
from app.photo_info.tag_source import PhotoSource, TagSource, describe_source
from app.utils.performance import DECODE_FAILURES_TOTAL

logger = logging.getLogger(__name__)

T = TypeVar("T")
TagField = Literal["value", "description"]


class TagAccessor:
    """Typed read access to a decoded tag snapshot."""

    def __init__(self, tags: Dict[str, ExifTag]):
        self.tags = tags

    def get(
        self,
        tag_name: str,
        field: TagField = "value",
        transform: Optional[Callable[[Any], T]] = None,
    ) -> Optional[T]:
        """
        Returns one field of a tag, optionally passed through ``transform``.

        A missing tag always yields None; the transform only runs for tags that exist.
        """
        tag = self.tags.get(tag_name)
        if tag is None:
            return None

        value = getattr(tag, field)
        if transform is not None:
            return transform(value)
        return value

    def has(self, tag_name: str) -> bool:
        return self.tags.get(tag_name) is not None

    def descriptions(self) -> Dict[str, Any]:
        """Flat tag -> description map, skipping tags without a description."""
        return {name: tag.description for name, tag in self.tags.items() if tag.description is not None}


def normalize_tags(raw_tags: Mapping[str, Any]) -> Dict[str, ExifTag]:
    """Drops entries that are not tag records; plain ``{"value", "description"}`` dicts are accepted."""
    tags: Dict[str, ExifTag] = {}
    for name, tag in raw_tags.items():
        if isinstance(tag, ExifTag):
            tags[name] = tag
        elif isinstance(tag, Mapping):
            tags[name] = ExifTag(value=tag.get("value"), description=tag.get("description"))
    return tags


async def parse_exif_data(source: TagSource, file: PhotoSource) -> TagAccessor:
    """
    Loads tags through ``source``. A decode failure is logged and replaced by an
    empty snapshot so that every derived field degrades instead of raising.
    """
    try:
        raw_tags = await source.load(file)
    except Exception as e:
        logger.warning(f"Failed to parse EXIF data for {describe_source(file)}: {e}")
        DECODE_FAILURES_TOTAL.inc()
        raw_tags = {}

    return TagAccessor(normalize_tags(raw_tags or {}))
