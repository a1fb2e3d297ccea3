from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from flatten_archive.config import KIB

TRUNCATION_MARKER = "\n\nThis file is too large, truncated at {limit_kb}KB. There is {remaining:.2f} KB remaining."


class Truncation(BaseModel):
    """Outcome of capping a file's content for display."""

    model_config = ConfigDict(frozen=True)

    content: str
    displayed_size: int
    is_truncated: bool


def truncate_content(content: str, original_size: int, max_display_size: int = 30 * KIB) -> Truncation:
    """Cap content at `max_display_size` for display.

    The limit is expressed in bytes but the cut is made on characters, so
    multi-byte text may keep more bytes than the limit. The remaining size in
    the marker is computed from the byte size.

    Args:
        content (str): the decoded file content
        original_size (int): UTF-8 byte length of `content`
        max_display_size (int, optional): display limit in bytes. Defaults to 30 KiB.

    Returns:
        Truncation: the displayed content, the size accounted for display and the truncation flag
    """
    if original_size <= max_display_size:
        return Truncation(content=content, displayed_size=original_size, is_truncated=False)

    marker = TRUNCATION_MARKER.format(
        limit_kb=max_display_size // KIB,
        remaining=(original_size - max_display_size) / KIB,
    )
    return Truncation(
        content=content[:max_display_size] + marker,
        displayed_size=max_display_size,
        is_truncated=True,
    )
