"""Destination-type hints embedded in trailing comments (``// javaType: long``)."""

from __future__ import annotations

import re
from typing import Optional

DEFAULT_MARKER = "javaType"

_TRAILING_NOISE = re.compile(r"[\s;]*$")


def parse_hint(comment: Optional[str], marker: str = DEFAULT_MARKER) -> Optional[str]:
    """Return the hinted type from a comment, or ``None`` when there is none.

    The marker is matched case-insensitively and must be followed by ``:``
    or ``=``. The value runs to the end of the comment or the next ``//``.
    """
    if not comment or not marker:
        return None

    lowered = comment.lower()
    position = lowered.find(marker.lower())
    while position >= 0:
        separator = position + len(marker)
        while separator < len(comment) and comment[separator].isspace():
            separator += 1
        if separator < len(comment) and comment[separator] in ":=":
            value = comment[separator + 1 :]
            next_comment = value.find("//")
            if next_comment >= 0:
                value = value[:next_comment]
            value = _TRAILING_NOISE.sub("", value).strip()
            return value or None
        position = lowered.find(marker.lower(), position + 1)
    return None


def parse_hint_from_line(line: Optional[str], marker: str = DEFAULT_MARKER) -> Optional[str]:
    """Parse a hint from the last ``//`` comment of a full source line."""
    if not line or not line.strip():
        return None
    start = line.rfind("//")
    if start < 0:
        return None
    return parse_hint(line[start + 2 :], marker)


__all__ = ["DEFAULT_MARKER", "parse_hint", "parse_hint_from_line"]
