"""Media type (``type/subtype+suffix; params``) inspection."""

from __future__ import annotations

from typing import NamedTuple, Optional


class MediaType(NamedTuple):
    type: str
    subtype: str
    suffix: Optional[str]


def parse_media_type(value: str) -> Optional[MediaType]:
    """Split a media type into type, subtype and structured-syntax suffix.

    Parameters are discarded. Returns ``None`` when *value* has no ``/``.
    """
    essence = value.split(";", 1)[0].strip().lower()
    if "/" not in essence:
        return None
    type_, subtype = essence.split("/", 1)
    suffix: Optional[str] = None
    if "+" in subtype:
        subtype, suffix = subtype.rsplit("+", 1)
    return MediaType(type_, subtype, suffix)


def is_json_media_type(value: str) -> bool:
    """True for ``application/json`` and any ``+json`` structured syntax."""
    media_type = parse_media_type(value)
    if media_type is None:
        return False
    return media_type.subtype == "json" or media_type.suffix == "json"
