"""Input checks for club provisioning. Nothing here touches the network."""

from typing import Optional
from pathlib import PurePosixPath

from sportsync.config import settings
from sportsync.core.errors import ValidationError

_EXTENSION_BY_CONTENT_TYPE = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/svg+xml": "svg",
}


def normalize_club_name(name: Optional[str]) -> str:
    trimmed = (name or "").strip()
    if not trimmed:
        raise ValidationError("Please enter a club name.")
    return trimmed


def validate_logo(content_type: Optional[str], size: int) -> str:
    """Return the normalized content type, or raise ValidationError."""
    normalized = (content_type or "").split(";")[0].strip().lower()
    if normalized not in settings.get_club_logo_content_types():
        raise ValidationError("Please choose a PNG, JPG or SVG file.")
    if size > settings.club_logo_max_bytes:
        max_mb = settings.club_logo_max_bytes // (1024 * 1024)
        raise ValidationError(f"File is too large. Max size is {max_mb}MB.")
    return normalized


def logo_extension(filename: Optional[str], content_type: Optional[str] = None) -> str:
    """Extension for the stored object: the filename's suffix, else one implied by the content type, else png."""
    if filename:
        suffix = PurePosixPath(filename).suffix.lstrip(".").lower()
        if suffix:
            return suffix
    return _EXTENSION_BY_CONTENT_TYPE.get((content_type or "").lower(), "png")
