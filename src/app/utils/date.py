from typing import Optional


def reformat_date(value: Optional[str]) -> Optional[str]:
    """
    Reformats an EXIF date ("YYYY:MM:DD HH:MM:SS") to ISO 8601 ("YYYY-MM-DDTHH:MM:SS").
    """
    if not value:
        return None

    date, _, time = value.strip().partition(" ")
    formatted_date = date.replace(":", "-")
    if not time:
        return formatted_date
    return f"{formatted_date}T{time}"
