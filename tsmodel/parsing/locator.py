"""Locate declaration headers and compute the span of each declaration body."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional

from .scanning import (
    find_matching_brace,
    find_top_level,
    iter_code,
    mask_non_code,
    remove_line_comments,
    scan_type_end,
    split_top_level,
)

INTERFACE = "interface"
CLASS = "class"
ENUM = "enum"
TYPE_ALIAS = "type"

_INTERFACE_HEADER = re.compile(
    r"\b(?:export\s+)?(?:default\s+)?(?:declare\s+)?interface\s+([A-Za-z_$][A-Za-z0-9_$]*)\b"
)
_CLASS_HEADER = re.compile(
    r"\b(?:export\s+)?(?:default\s+)?(?:declare\s+)?(?:abstract\s+)?class\s+([A-Za-z_$][A-Za-z0-9_$]*)\b"
)
_ENUM_HEADER = re.compile(
    r"(?m)^[\t ]*(?:export\s+)?(?:declare\s+)?(?:const\s+)?enum\s+([A-Za-z_$][A-Za-z0-9_$]*)\s*\{"
)
_TYPE_HEADER = re.compile(
    r"(?m)\b(?:export\s+)?(?:declare\s+)?type\s+([A-Za-z_$][A-Za-z0-9_$]*)\s*(?:<[^;]*?>)?\s*="
)
_EXTENDS = re.compile(r"\bextends\s+(.+?)(?=\bimplements\b|$)", re.DOTALL)
_IMPLEMENTS = re.compile(r"\bimplements\s+(.+)$", re.DOTALL)

_CONTINUATION_CHARS = "|&=,:?(<[{"


@dataclass
class DeclarationSpan:
    """Where a declaration lives in the stripped source.

    For brace-delimited kinds ``text[body_start:body_end]`` begins at the
    opening brace and stops before the closing brace. For type aliases it
    covers ``= <rhs>`` up to the terminator.
    """

    kind: str
    name: str
    header_start: int
    body_start: int
    body_end: int
    balanced: bool = True
    header: str = ""

    def body(self, text: str) -> str:
        return text[self.body_start : self.body_end]


def _brace_span(text: str, kind: str, match: re.Match[str]) -> Optional[DeclarationSpan]:
    name = match.group(1)
    header_end = match.end()
    open_brace = find_top_level(text, "{;}=", header_end)
    if open_brace is None or text[open_brace] != "{":
        # A stray keyword (e.g. inside an expression), not a declaration header.
        return None
    header_tail = text[header_end:open_brace]
    close = find_matching_brace(text, open_brace)
    return DeclarationSpan(
        kind=kind,
        name=name,
        header_start=match.start(),
        body_start=open_brace,
        body_end=close if close is not None else len(text),
        balanced=close is not None,
        header=header_tail.strip(),
    )


def locate_interfaces(text: str, masked: Optional[str] = None) -> List[DeclarationSpan]:
    masked = mask_non_code(text) if masked is None else masked
    spans = (_brace_span(text, INTERFACE, match) for match in _INTERFACE_HEADER.finditer(masked))
    return [span for span in spans if span is not None]


def locate_classes(text: str, masked: Optional[str] = None) -> List[DeclarationSpan]:
    masked = mask_non_code(text) if masked is None else masked
    spans = (_brace_span(text, CLASS, match) for match in _CLASS_HEADER.finditer(masked))
    return [span for span in spans if span is not None]


def locate_enums(text: str, masked: Optional[str] = None) -> List[DeclarationSpan]:
    masked = mask_non_code(text) if masked is None else masked
    spans: List[DeclarationSpan] = []
    for match in _ENUM_HEADER.finditer(masked):
        # The header already consumed the brace; back up to exactly that one.
        open_brace = text.rfind("{", match.start(), match.end())
        close = find_matching_brace(text, open_brace)
        spans.append(
            DeclarationSpan(
                kind=ENUM,
                name=match.group(1),
                header_start=match.start(),
                body_start=open_brace,
                body_end=close if close is not None else len(text),
                balanced=close is not None,
            )
        )
    return spans


def locate_type_aliases(text: str, masked: Optional[str] = None) -> List[DeclarationSpan]:
    masked = mask_non_code(text) if masked is None else masked
    spans: List[DeclarationSpan] = []
    for match in _TYPE_HEADER.finditer(masked):
        equals = match.end() - 1
        spans.append(
            DeclarationSpan(
                kind=TYPE_ALIAS,
                name=match.group(1),
                header_start=match.start(),
                body_start=equals,
                body_end=_alias_end(text, equals + 1),
            )
        )
    return spans


def locate_all(text: str) -> List[DeclarationSpan]:
    masked = mask_non_code(text)
    spans = (
        locate_interfaces(text, masked)
        + locate_enums(text, masked)
        + locate_classes(text, masked)
        + locate_type_aliases(text, masked)
    )
    return sorted(spans, key=lambda span: span.header_start)


def _alias_end(text: str, start: int) -> int:
    depth = 0
    for index, char in iter_code(text, start):
        if char in "{[(<":
            depth += 1
        elif char in "}])>":
            if char == ">" and text[index - 1] == "=":
                continue
            depth = max(0, depth - 1)
        elif depth == 0 and char == ";":
            return index
        elif depth == 0 and char == "\n" and _statement_ends_at(text, start, index):
            return index
    return len(text)


def _statement_ends_at(text: str, start: int, newline: int) -> bool:
    before = remove_line_comments(text[start:newline]).rstrip()
    if not before.strip():
        return False
    if before[-1] in _CONTINUATION_CHARS:
        return False
    after = text[newline:].lstrip()
    if not after:
        return True
    return after[0] not in "|&=.?:"


def parse_heritage(header: str) -> List[str]:
    """Return simple names from ``extends``/``implements`` clauses.

    Generic arguments are stripped: ``extends Base<T>, Other`` gives
    ``["Base", "Other"]``.
    """
    header = header.strip()
    if header.startswith("<"):
        # Type parameters may carry their own `extends` constraints.
        header = header[scan_type_end(header, 1, "") + 1 :]
    names: List[str] = []
    for pattern in (_EXTENDS, _IMPLEMENTS):
        match = pattern.search(header)
        if not match:
            continue
        for part in split_top_level(match.group(1), ","):
            lt = part.find("<")
            if lt > 0:
                part = part[:lt]
            name = re.sub(r"\s+", "", part)
            if name and name not in names:
                names.append(name)
    return names


__all__ = [
    "CLASS",
    "DeclarationSpan",
    "ENUM",
    "INTERFACE",
    "TYPE_ALIAS",
    "locate_all",
    "locate_classes",
    "locate_enums",
    "locate_interfaces",
    "locate_type_aliases",
    "parse_heritage",
]
