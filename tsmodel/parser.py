"""Per-file parsing: turn one source text into a ``SourceFile`` record."""

from __future__ import annotations

from typing import List

from .logging import get_logger
from .models import ClassDecl, EnumDecl, Interface, SourceFile, TypeAlias
from .parsing import (
    DEFAULT_MARKER,
    DeclarationSpan,
    NormalizedSource,
    extract_alias_target,
    extract_enum_members,
    extract_imports,
    extract_methods,
    extract_properties,
    locate_all,
    normalize,
    parse_heritage,
)
from .parsing.locator import CLASS, ENUM, INTERFACE, TYPE_ALIAS
from .source_loader import SourceText


class SourceParser:
    """Extracts declarations from a single file.

    The parser holds no per-run state, so one instance can be shared by
    worker threads parsing different files at the same time.
    """

    def __init__(self, hint_marker: str = DEFAULT_MARKER) -> None:
        self.hint_marker = hint_marker
        self.logger = get_logger("parser")

    def parse(self, source: SourceText) -> SourceFile:
        normalized = normalize(source.text)
        result = SourceFile(path=source.path, imports=extract_imports(normalized.stripped))

        skipped: List[str] = []
        for span in locate_all(normalized.stripped):
            if not span.balanced:
                self.logger.warning(
                    "Skipping %s %s in %s: unbalanced braces", span.kind, span.name, source.path
                )
                skipped.append(span.name)
                continue
            self._add_declaration(result, span, normalized)

        self.logger.debug(
            "Parsed %s: %d interface(s), %d class(es), %d enum(s), %d alias(es), %d skipped",
            source.path,
            len(result.interfaces),
            len(result.classes),
            len(result.enums),
            len(result.type_aliases),
            len(skipped),
        )
        return result

    def _add_declaration(
        self, result: SourceFile, span: DeclarationSpan, normalized: NormalizedSource
    ) -> None:
        body = span.body(normalized.stripped)
        if span.kind == INTERFACE:
            result.interfaces.append(self._structured(Interface, span, normalized))
        elif span.kind == CLASS:
            result.classes.append(self._structured(ClassDecl, span, normalized))
        elif span.kind == ENUM:
            names, values = extract_enum_members(body)
            result.enums.append(EnumDecl(name=span.name, values=names, enum_values=values))
        elif span.kind == TYPE_ALIAS:
            result.type_aliases.append(
                TypeAlias(name=span.name, target=extract_alias_target(body))
            )

    def _structured(self, factory, span: DeclarationSpan, normalized: NormalizedSource):
        body = span.body(normalized.stripped)
        return factory(
            name=span.name,
            extends=parse_heritage(span.header),
            properties=extract_properties(
                body, span.body(normalized.original), self.hint_marker
            ),
            methods=extract_methods(body),
        )


__all__ = ["SourceParser"]
