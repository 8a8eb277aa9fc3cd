"""Block-comment normalisation that keeps offsets aligned with the original text."""

from __future__ import annotations

import re
from dataclasses import dataclass

from .scanning import find_line_comment

_BLOCK_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)


@dataclass(frozen=True)
class NormalizedSource:
    """A file's original text and its block-comment-free twin.

    Both strings have identical length and line breaks, so an offset found
    in ``stripped`` addresses the same character in ``original``.
    """

    original: str
    stripped: str


def _blank(match: re.Match[str]) -> str:
    return "".join(char if char in "\r\n" else " " for char in match.group(0))


def strip_block_comments(text: str) -> str:
    """Replace every ``/* ... */`` comment with whitespace of equal length."""
    return _BLOCK_COMMENT.sub(_blank, text)


def normalize(text: str) -> NormalizedSource:
    return NormalizedSource(original=text, stripped=strip_block_comments(text))


def line_bounds(text: str, offset: int) -> tuple[int, int]:
    """Return the ``[start, end)`` span of the line containing ``offset``."""
    offset = max(0, min(len(text), offset))
    start = text.rfind("\n", 0, offset) + 1
    end = text.find("\n", offset)
    if end < 0:
        end = len(text)
    return start, end


def line_at(text: str, offset: int) -> str:
    start, end = line_bounds(text, offset)
    return text[start:end].rstrip("\r")


def trailing_comment(text: str, offset: int) -> str | None:
    """Return the ``//`` comment that follows ``offset`` on the same line."""
    _, end = line_bounds(text, offset)
    index = find_line_comment(text, offset, end)
    if index is None:
        return None
    comment = text[index:end].strip()
    return comment or None


__all__ = [
    "NormalizedSource",
    "line_at",
    "line_bounds",
    "normalize",
    "strip_block_comments",
    "trailing_comment",
]
