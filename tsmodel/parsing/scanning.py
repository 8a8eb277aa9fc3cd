"""Brace-balance scanning helpers shared by the locator, extractor and synthesizer.

All scanners skip string literals and ``//`` line comments so that braces or
separators inside them never shift the computed nesting depth. Block
comments are expected to be blanked out beforehand (see ``comments``).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

_QUOTES = "'\"`"
_OPENERS = "{[(<"
_CLOSERS = "}])>"


@dataclass(frozen=True)
class Nesting:
    braces: int = 0
    parens: int = 0
    brackets: int = 0


def _string_end(text: str, start: int, end: int) -> int:
    quote = text[start]
    index = start + 1
    while index < end:
        char = text[index]
        if char == "\\":
            index += 2
            continue
        if char == quote:
            return index
        if char == "\n" and quote != "`":
            # Unterminated literal: stop before the line break.
            return index - 1
        index += 1
    return end


def iter_code(text: str, start: int = 0, end: Optional[int] = None) -> Iterator[Tuple[int, str]]:
    """Yield ``(index, char)`` for characters outside strings and line comments."""
    end = len(text) if end is None else min(end, len(text))
    index = max(0, start)
    while index < end:
        char = text[index]
        if char in _QUOTES:
            index = _string_end(text, index, end) + 1
            continue
        if char == "/" and index + 1 < end and text[index + 1] == "/":
            newline = text.find("\n", index, end)
            if newline < 0:
                return
            index = newline
            continue
        yield index, char
        index += 1


def _is_arrow(text: str, index: int) -> bool:
    return text[index] == ">" and index > 0 and text[index - 1] == "="


def _is_arrow_start(text: str, index: int) -> bool:
    return text[index] == "=" and text[index + 1 : index + 2] == ">"


def find_matching_brace(text: str, open_index: int) -> Optional[int]:
    """Return the index of the ``}`` closing the ``{`` at ``open_index``.

    ``None`` means the brace is unbalanced before the end of ``text``.
    """
    if open_index < 0 or open_index >= len(text) or text[open_index] != "{":
        return None
    depth = 0
    for index, char in iter_code(text, open_index):
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index
    return None


def find_matching_paren(text: str, open_index: int) -> Optional[int]:
    if open_index < 0 or open_index >= len(text) or text[open_index] != "(":
        return None
    depth = 0
    for index, char in iter_code(text, open_index):
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return index
    return None


def brace_depth_at(text: str, pos: int) -> int:
    """Brace depth before ``pos``; the outer body's ``{`` makes depth one."""
    depth = 0
    for _, char in iter_code(text, 0, pos):
        if char == "{":
            depth += 1
        elif char == "}":
            depth = max(0, depth - 1)
    return depth


def nesting_at(text: str, pos: int) -> Nesting:
    braces = parens = brackets = 0
    for _, char in iter_code(text, 0, pos):
        if char == "{":
            braces += 1
        elif char == "}":
            braces = max(0, braces - 1)
        elif char == "(":
            parens += 1
        elif char == ")":
            parens = max(0, parens - 1)
        elif char == "[":
            brackets += 1
        elif char == "]":
            brackets = max(0, brackets - 1)
    return Nesting(braces=braces, parens=parens, brackets=brackets)


def scan_type_end(text: str, start: int, stops: str, end: Optional[int] = None) -> int:
    """Return where a type expression starting at ``start`` ends.

    The type ends at the first character of ``stops`` seen at depth zero,
    at a closer that has no opener inside the type, or at ``end``.
    ``{ [ ( <`` nest; the ``>`` of an arrow ``=>`` does not close anything.
    """
    limit = len(text) if end is None else min(end, len(text))
    depth = 0
    for index, char in iter_code(text, start, limit):
        if depth == 0 and char in stops and not _is_arrow_start(text, index):
            return index
        if char in _OPENERS:
            depth += 1
        elif char in _CLOSERS:
            if _is_arrow(text, index):
                continue
            if depth == 0:
                return index
            depth -= 1
    return limit


def find_top_level(
    text: str,
    targets: str,
    start: int = 0,
    end: Optional[int] = None,
    *,
    angles: bool = True,
) -> Optional[int]:
    """Return the first index of a ``targets`` character at depth zero.

    With ``angles=False`` the ``<`` and ``>`` characters do not nest, which
    suits value expressions such as ``1 << 2``.
    """
    limit = len(text) if end is None else min(end, len(text))
    openers = _OPENERS if angles else "{[("
    closers = _CLOSERS if angles else "}])"
    depth = 0
    for index, char in iter_code(text, start, limit):
        if depth == 0 and char in targets and not _is_arrow_start(text, index):
            return index
        if char in openers:
            depth += 1
        elif char in closers and not _is_arrow(text, index):
            depth = max(0, depth - 1)
    return None


def split_top_level(text: str, separator: str = ",", *, angles: bool = True) -> List[str]:
    """Split ``text`` at depth-zero separators, keeping empty parts out."""
    parts: List[str] = []
    position = 0
    while position <= len(text):
        index = find_top_level(text, separator, position, angles=angles)
        if index is None:
            parts.append(text[position:])
            break
        parts.append(text[position:index])
        position = index + 1
    return [part.strip() for part in parts if part.strip()]


def find_line_comment(text: str, start: int = 0, end: Optional[int] = None) -> Optional[int]:
    """Return the index of the first ``//`` outside string literals."""
    limit = len(text) if end is None else min(end, len(text))
    index = max(0, start)
    while index < limit:
        char = text[index]
        if char in _QUOTES:
            index = _string_end(text, index, limit) + 1
            continue
        if char == "/" and index + 1 < limit and text[index + 1] == "/":
            return index
        index += 1
    return None


def split_line_comment(text: str) -> Tuple[str, Optional[str]]:
    """Split ``text`` at the first ``//`` that sits outside any nested braces.

    Comments inside a nested ``{ ... }`` stay in the code part, so the
    members of an inline object keep their own comments.
    """
    position = 0
    while True:
        index = find_line_comment(text, position)
        if index is None:
            return text, None
        if brace_depth_at(text, index) == 0:
            return text[:index], text[index:].strip() or None
        position = index + 2


def mask_non_code(text: str) -> str:
    """Blank out string literals and line comments, keeping offsets and line breaks."""
    chars = list(text)
    length = len(text)
    index = 0
    while index < length:
        char = text[index]
        if char in _QUOTES:
            close = min(_string_end(text, index, length), length - 1)
            for position in range(index + 1, close):
                if chars[position] not in "\r\n":
                    chars[position] = " "
            index = close + 1
            continue
        if char == "/" and index + 1 < length and text[index + 1] == "/":
            newline = text.find("\n", index)
            stop = length if newline < 0 else newline
            for position in range(index, stop):
                chars[position] = " "
            index = stop
            continue
        index += 1
    return "".join(chars)


def remove_line_comments(text: str) -> str:
    """Drop ``//`` comments, leaving string literals untouched."""
    pieces: List[str] = []
    index = 0
    length = len(text)
    while index < length:
        char = text[index]
        if char in _QUOTES:
            close = _string_end(text, index, length)
            pieces.append(text[index : close + 1])
            index = close + 1
            continue
        if char == "/" and index + 1 < length and text[index + 1] == "/":
            newline = text.find("\n", index)
            if newline < 0:
                break
            index = newline
            continue
        pieces.append(char)
        index += 1
    return "".join(pieces)


__all__ = [
    "Nesting",
    "brace_depth_at",
    "find_matching_brace",
    "find_matching_paren",
    "find_line_comment",
    "find_top_level",
    "iter_code",
    "mask_non_code",
    "nesting_at",
    "remove_line_comments",
    "scan_type_end",
    "split_line_comment",
    "split_top_level",
]
