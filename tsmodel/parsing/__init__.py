"""Text-level helpers that turn TypeScript source into declaration records."""

from __future__ import annotations

from .comments import NormalizedSource, normalize
from .hints import DEFAULT_MARKER, parse_hint, parse_hint_from_line
from .locator import DeclarationSpan, locate_all, parse_heritage
from .members import (
    extract_alias_target,
    extract_enum_members,
    extract_imports,
    extract_methods,
    extract_properties,
)

__all__ = [
    "DEFAULT_MARKER",
    "DeclarationSpan",
    "NormalizedSource",
    "extract_alias_target",
    "extract_enum_members",
    "extract_imports",
    "extract_methods",
    "extract_properties",
    "locate_all",
    "normalize",
    "parse_heritage",
    "parse_hint",
    "parse_hint_from_line",
]
