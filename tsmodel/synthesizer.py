"""Replace anonymous inline object types with named synthetic interfaces."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Set, Tuple

from .logging import get_logger
from .models import Interface, Model, Property, SourceFile
from .parsing.hints import DEFAULT_MARKER, parse_hint
from .parsing.scanning import (
    find_line_comment,
    find_matching_brace,
    find_top_level,
    remove_line_comments,
    scan_type_end,
    split_line_comment,
)

_ARRAY_OPEN = re.compile(r"^Array\s*<\s*(?=\{)")
_NAME_NOISE = re.compile(r"[^A-Za-z0-9_$]")
_MEMBER_MODIFIERS = re.compile(r"^(?:(?:readonly|public|private|protected)\s+)+")

_PLAIN = "{name}"
_ARRAY_GENERIC = "Array<{name}>"
_ARRAY_SUFFIX = "{name}[]"


@dataclass
class InlineShape:
    """An inline object literal type and how its name is written back."""

    body: str
    template: str

    def rewrite(self, name: str) -> str:
        return self.template.format(name=name)


def inline_shape(type_text: str) -> Optional[InlineShape]:
    """Return the inline object inside ``type_text`` when it is a candidate.

    Candidates are ``{ ... }`` objects with at least one ``:``, optionally
    wrapped as ``Array<{ ... }>`` or followed by ``[]``. Anything else
    (unions, intersections, ``{}``) is left alone.
    """
    text = type_text.strip()
    template = _PLAIN
    array = _ARRAY_OPEN.match(text)
    if array:
        text = text[array.end() :]
        template = _ARRAY_GENERIC
    if not text.startswith("{"):
        return None
    close = find_matching_brace(text, 0)
    if close is None:
        return None
    rest = "".join(text[close + 1 :].split())
    if template == _ARRAY_GENERIC:
        if rest != ">":
            return None
    elif rest == "[]":
        template = _ARRAY_SUFFIX
    elif rest:
        return None
    body = text[: close + 1]
    if ":" not in remove_line_comments(body):
        return None
    return InlineShape(body=body, template=template)


def _capitalize(name: str) -> str:
    cleaned = _NAME_NOISE.sub("", name)
    if not cleaned:
        return "Inline"
    return cleaned[0].upper() + cleaned[1:]


def _skip_trivia(text: str, pos: int) -> int:
    """Advance past whitespace, member separators and comments."""
    while pos < len(text):
        if text[pos].isspace() or text[pos] in ";,":
            pos += 1
        elif text.startswith("//", pos):
            newline = text.find("\n", pos)
            pos = len(text) if newline < 0 else newline + 1
        elif text.startswith("/*", pos):
            close = text.find("*/", pos + 2)
            pos = len(text) if close < 0 else close + 2
        else:
            break
    return pos


class InlineTypeSynthesizer:
    """Names inline object property types and registers them as interfaces.

    A synthetic name is built from the owner and property names only, so
    repeated runs over the same input produce the same names. Nested
    objects use the parent's stem: ``Owner.owner.nested`` becomes
    ``OwnerOwnerNestedDTO``. Not thread-safe; run it once per model.
    """

    def __init__(
        self,
        suffix: str = "DTO",
        max_depth: int = 16,
        hint_marker: str = DEFAULT_MARKER,
    ) -> None:
        self.suffix = suffix
        self.max_depth = max_depth
        self.hint_marker = hint_marker
        self.logger = get_logger("synthesizer")

    def run(self, model: Model) -> List[Interface]:
        created: List[Interface] = []
        visited: Set[int] = set()
        # Each pass only looks at owners it has not seen; the bound guards
        # against a model that keeps growing.
        for _ in range(self.max_depth + 1):
            rewrites, staged = self._pass(model, visited)
            for source_file, synthetic in staged:
                self._register(source_file, synthetic)
                visited.add(id(synthetic))
                created.append(synthetic)
            if not rewrites:
                break
        if created:
            self.logger.info("Synthesized %d inline type(s)", len(created))
        return created

    def synthetic_name(self, stem: str, property_name: str) -> str:
        return f"{stem}{_capitalize(property_name)}{self.suffix}"

    def _pass(
        self, model: Model, visited: Set[int]
    ) -> Tuple[int, List[Tuple[SourceFile, Interface]]]:
        rewrites = 0
        staged: List[Tuple[SourceFile, Interface]] = []
        for source_file in model.files:
            owners = [*source_file.interfaces, *source_file.classes]
            for owner in owners:
                if id(owner) in visited:
                    continue
                visited.add(id(owner))
                pending: List[Interface] = []
                for prop in owner.properties:
                    shape = inline_shape(prop.type)
                    if shape is None:
                        continue
                    stem = f"{owner.name}{_capitalize(prop.name)}"
                    name = self._synthesize(shape.body, stem, 1, pending)
                    if name is None:
                        continue
                    prop.type = shape.rewrite(name)
                    rewrites += 1
                staged.extend((source_file, synthetic) for synthetic in pending)
        return rewrites, staged

    def _synthesize(
        self, body: str, stem: str, depth: int, pending: List[Interface]
    ) -> Optional[str]:
        """Build the interface for ``body``; children are staged before it."""
        name = f"{stem}{self.suffix}"
        if depth > self.max_depth:
            self.logger.warning(
                "Inline type %s nests deeper than %d level(s); left as written",
                name,
                self.max_depth,
            )
            return None
        properties = self._parse_members(body, stem, depth, pending)
        if not properties:
            return None
        pending.append(Interface(name=name, properties=properties))
        return name

    def _parse_members(
        self, body: str, stem: str, depth: int, pending: List[Interface]
    ) -> List[Property]:
        close = find_matching_brace(body, 0)
        inner = body[1:close] if close is not None else body[1:]
        properties: List[Property] = []
        pos = _skip_trivia(inner, 0)
        while pos < len(inner):
            split = find_top_level(inner, ":;,\n", pos)
            if split is None:
                break
            if inner[split] != ":":
                pos = _skip_trivia(inner, split + 1)
                continue
            end = scan_type_end(inner, split + 1, ";,\n")
            raw_name = _MEMBER_MODIFIERS.sub("", inner[pos:split].strip())
            next_pos = _skip_trivia(inner, end + 1)
            if not raw_name or raw_name.startswith("[") or "(" in raw_name:
                # Index signature or method member.
                pos = next_pos
                continue

            optional = raw_name.endswith("?")
            member = raw_name.rstrip("?").strip().strip("'\"`")
            raw_type, comment = split_line_comment(inner[split + 1 : end])
            if comment is None and end < len(inner) and inner[end] in ";,":
                comment = _line_comment_after(inner, end + 1)

            # Checked on the raw text so hints inside the nested object survive.
            shape = inline_shape(raw_type)
            type_text: Optional[str] = None
            if shape is not None:
                nested = self._synthesize(
                    shape.body, f"{stem}{_capitalize(member)}", depth + 1, pending
                )
                if nested is not None:
                    type_text = shape.rewrite(nested)
            if type_text is None:
                type_text = " ".join(remove_line_comments(raw_type).split())
            if type_text:
                properties.append(
                    Property(
                        name=member,
                        type=type_text,
                        optional=optional,
                        comment=comment,
                        type_hint=parse_hint(comment, self.hint_marker),
                    )
                )
            pos = next_pos
        return properties

    def _register(self, source_file: SourceFile, synthetic: Interface) -> None:
        if synthetic.name in source_file.declaration_names():
            self.logger.warning(
                "Synthetic type %s collides with an existing declaration in %s",
                synthetic.name,
                source_file.path,
            )
        source_file.interfaces.append(synthetic)


def _line_comment_after(text: str, pos: int) -> Optional[str]:
    newline = text.find("\n", pos)
    end = len(text) if newline < 0 else newline
    index = find_line_comment(text, pos, end)
    if index is None:
        return None
    return text[index:end].strip() or None


__all__ = ["InlineShape", "InlineTypeSynthesizer", "inline_shape"]
