class PhotoInfoError(Exception):
    """Base error for the photo info engine."""


class TagSourceError(PhotoInfoError):
    """Raised when a tag source cannot decode or fetch a photo."""

    def __init__(self, file_label: str, reason: str):
        self.file_label = file_label
        self.reason = reason
        super().__init__(f"Failed to decode tags for {file_label}: {reason}")
