"""Extract members from located declaration bodies.

Bodies are slices of the block-comment-free source that start at the
declaration's opening brace, so a direct member sits at brace depth one.
Member patterns are anchored at a line start or right after `{`, `;` or
`,`; structural rules then throw out candidates that only look like
properties (index signatures, method signatures, parameters of a
multi-line parameter list).
"""

from __future__ import annotations

import re
from typing import Iterator, List, Optional, Set, Tuple

from ..models import EnumValue, Method, Parameter, Property
from .comments import line_at, trailing_comment
from .hints import DEFAULT_MARKER, parse_hint, parse_hint_from_line
from .scanning import (
    find_matching_brace,
    find_matching_paren,
    find_top_level,
    nesting_at,
    remove_line_comments,
    scan_type_end,
    split_line_comment,
    split_top_level,
)

_MODIFIERS = r"(?:(?:readonly|static|declare|override|abstract|accessor)[\t ]+)*"
# A member starts a line or follows another member on the same line.
_MEMBER_START = r"(?m)(?:^|(?<=[{;,]))[\t ]*"

_PROPERTY_HEAD = re.compile(
    _MEMBER_START
    + r"(?:(public|private|protected)[\t ]+)?"
    + _MODIFIERS
    + r"([A-Za-z_$][A-Za-z0-9_$]*)([^:\r\n;{}=,]*?):(?!:)"
)
_INLINE_OBJECT_HEAD = re.compile(
    _MEMBER_START
    + r"(?:(public|private|protected)[\t ]+)?"
    + _MODIFIERS
    + r"([A-Za-z_$][A-Za-z0-9_$]*)[\t ]*(\?)?[\t ]*:[\t ]*\{"
)
_METHOD_HEAD = re.compile(
    _MEMBER_START
    + r"(?:@[\w.]+(?:\([^)\r\n]*\))?[\t ]*)*"
    + r"(?:(public|private|protected)[\t ]+)?"
    + r"(?:(?:static|async|abstract|override|declare|get|set)[\t ]+)*"
    + r"(constructor|[A-Za-z_$][A-Za-z0-9_$]*)[\t ]*(\?)?[\t ]*(?:<[^()\r\n]*>)?[\t ]*\("
)
_ENUM_MEMBER = re.compile(r"^([A-Za-z_$][A-Za-z0-9_$]*)\s*(?:=\s*(.*))?$", re.DOTALL)
_QUOTED = re.compile(r"^(['\"`])(.*)\1$", re.DOTALL)
_DECORATORS = re.compile(r"^(?:@[\w.]+(?:\([^)]*\))?\s*)+")
_PARAMETER_MODIFIERS = re.compile(r"^(?:(?:public|private|protected|readonly|override)\s+)+")

_IMPORT_FROM = re.compile(r"\bimport\s+[^;]*?\bfrom\s*['\"]([^'\"]+)['\"]")
_EXPORT_FROM = re.compile(r"\bexport\s+[^;'\"]*?\bfrom\s*['\"]([^'\"]+)['\"]")
_IMPORT_SIDE_EFFECT = re.compile(r"\bimport\s*['\"]([^'\"]+)['\"]")

_NOT_METHODS = {
    "if",
    "for",
    "while",
    "switch",
    "catch",
    "return",
    "function",
    "new",
    "typeof",
    "await",
    "super",
    "this",
    "else",
    "do",
    "throw",
    "with",
    "yield",
    "delete",
    "void",
}


def _is_direct_member(body: str, pos: int) -> bool:
    nesting = nesting_at(body, pos)
    return nesting.braces == 1 and nesting.parens == 0 and nesting.brackets == 0


def _preceded_by_bracket(body: str, pos: int) -> bool:
    index = pos - 1
    while index >= 0 and body[index].isspace():
        index -= 1
    return index >= 0 and body[index] == "["


# Properties


def extract_properties(
    body: str,
    original_body: Optional[str] = None,
    hint_marker: str = DEFAULT_MARKER,
) -> List[Property]:
    """Return the direct properties of a declaration body in source order."""
    original = body if original_body is None else original_body
    found: List[Tuple[int, Property]] = list(_single_line_properties(body, original, hint_marker))
    seen: Set[str] = {prop.name for _, prop in found}
    found.extend(_inline_object_properties(body, original, seen, hint_marker))
    found.sort(key=lambda item: item[0])
    return [prop for _, prop in found]


def _single_line_properties(
    body: str, original: str, hint_marker: str
) -> Iterator[Tuple[int, Property]]:
    for match in _PROPERTY_HEAD.finditer(body):
        name_start = match.start(2)
        if not _is_direct_member(body, name_start):
            continue
        if _preceded_by_bracket(body, name_start):
            continue
        between = match.group(3)
        if "(" in between:
            continue
        flags = between.strip()
        if flags not in ("", "?", "!"):
            continue

        type_start = match.end()
        type_end = scan_type_end(body, type_start, ";,=\n")
        raw_type, comment = split_line_comment(body[type_start:type_end])
        multi_line = "\n" in raw_type.strip()
        if multi_line and raw_type.lstrip().startswith("{"):
            # Multi-line inline object; the inline-object pass owns it.
            continue
        if multi_line and "{" in raw_type:
            # Kept as written so hints inside the nested object reach synthesis.
            type_text = raw_type.strip()
        else:
            type_text = " ".join(remove_line_comments(raw_type).split())
        if not type_text or "import(" in type_text:
            continue

        if comment is None:
            comment = trailing_comment(original, type_end)
        yield match.start(), Property(
            name=match.group(2),
            type=type_text,
            optional=flags == "?",
            visibility=match.group(1),
            comment=comment,
            type_hint=parse_hint(comment, hint_marker),
        )


def _inline_object_properties(
    body: str, original: str, seen: Set[str], hint_marker: str
) -> Iterator[Tuple[int, Property]]:
    for match in _INLINE_OBJECT_HEAD.finditer(body):
        name = match.group(2)
        if name in seen:
            continue
        if not _is_direct_member(body, match.start(2)):
            continue
        brace_start = match.end() - 1
        brace_end = find_matching_brace(body, brace_start)
        if brace_end is None:
            continue

        # The type runs on past the brace to its terminator, so `}[]` and
        # `} | null` stay part of it.
        type_end = scan_type_end(body, brace_end + 1, ";,=\n")
        tail, comment = split_line_comment(body[brace_end + 1 : type_end])
        if comment is None:
            comment = trailing_comment(original, type_end)
        hint = parse_hint_from_line(line_at(original, brace_end), hint_marker) if comment else None
        seen.add(name)
        yield match.start(), Property(
            name=name,
            type=(body[brace_start : brace_end + 1] + tail.rstrip()).strip(),
            optional=match.group(3) == "?",
            visibility=match.group(1),
            comment=comment,
            type_hint=hint,
        )


# Methods


def extract_methods(body: str) -> List[Method]:
    """Return direct method signatures (and constructors) of a body."""
    methods: List[Method] = []
    for match in _METHOD_HEAD.finditer(body):
        name = match.group(2)
        if name in _NOT_METHODS:
            continue
        if not _is_direct_member(body, match.start(2)):
            continue
        open_paren = match.end() - 1
        close_paren = find_matching_paren(body, open_paren)
        if close_paren is None:
            continue
        methods.append(
            Method(
                name=name,
                parameters=parse_parameters(body[open_paren + 1 : close_paren]),
                return_type=_return_type(body, close_paren + 1),
                is_constructor=name == "constructor",
            )
        )
    return methods


def _return_type(body: str, start: int) -> Optional[str]:
    index = start
    while index < len(body) and body[index] in " \t":
        index += 1
    if index >= len(body) or body[index] != ":":
        return None
    type_start = index + 1
    while type_start < len(body) and body[type_start] in " \t":
        type_start += 1
    if body.startswith("{", type_start):
        close = find_matching_brace(body, type_start)
        if close is None:
            return None
        return " ".join(body[type_start : close + 1].split())
    type_end = scan_type_end(body, type_start, ";{\n")
    text = " ".join(body[type_start:type_end].split())
    return text or None


def parse_parameters(text: str) -> List[Parameter]:
    """Split a parameter list into name/type/optional triples."""
    parameters: List[Parameter] = []
    for raw in split_top_level(remove_line_comments(text), ","):
        raw = _DECORATORS.sub("", raw)
        raw = _PARAMETER_MODIFIERS.sub("", raw).strip()
        if not raw:
            continue
        has_default = False
        assign = find_top_level(raw, "=")
        if assign is not None:
            raw = raw[:assign].strip()
            has_default = True
        colon = find_top_level(raw, ":")
        if colon is None:
            name, type_text = raw, None
        else:
            name = raw[:colon].strip()
            type_text = " ".join(raw[colon + 1 :].split()) or None
        if name.startswith("..."):
            name = name[3:].strip()
        optional = has_default
        if name.endswith("?"):
            name = name[:-1].strip()
            optional = True
        parameters.append(Parameter(name=name, type=type_text, optional=optional))
    return parameters


# Enums


def extract_enum_members(body: str) -> Tuple[List[str], List[EnumValue]]:
    """Return bare member names and ``(name, value)`` pairs in source order.

    A quoted value keeps only its content, any other assignment keeps the
    trimmed expression text, and an unassigned member takes its own name.
    """
    inner = body[1:] if body.startswith("{") else body
    names: List[str] = []
    values: List[EnumValue] = []
    for entry in split_top_level(remove_line_comments(inner), ",", angles=False):
        match = _ENUM_MEMBER.match(entry.strip())
        if not match:
            continue
        name = match.group(1)
        assigned = match.group(2)
        if assigned is None:
            value = name
        else:
            assigned = assigned.strip()
            if not assigned:
                continue
            quoted = _QUOTED.match(assigned)
            value = quoted.group(2) if quoted else " ".join(assigned.split())
        names.append(name)
        values.append(EnumValue(name=name, value=value))
    return names, values


# Type aliases and imports


def extract_alias_target(declaration: str) -> Optional[str]:
    """Return a type alias right-hand side collapsed to a single line."""
    equals = declaration.find("=")
    if equals < 0:
        return None
    rhs = remove_line_comments(declaration[equals + 1 :]).strip()
    if rhs.endswith(";"):
        rhs = rhs[:-1].strip()
    rhs = re.sub(r"\s*[\r\n]+\s*", " ", rhs).strip()
    return rhs or None


def extract_imports(text: str) -> List[str]:
    """Return import specifiers in source order, without duplicates."""
    code = remove_line_comments(text)
    found: List[Tuple[int, str]] = []
    for pattern in (_IMPORT_FROM, _EXPORT_FROM, _IMPORT_SIDE_EFFECT):
        found.extend((match.start(), match.group(1)) for match in pattern.finditer(code))
    imports: List[str] = []
    for _, module in sorted(found):
        if module not in imports:
            imports.append(module)
    return imports


__all__ = [
    "extract_alias_target",
    "extract_enum_members",
    "extract_imports",
    "extract_methods",
    "extract_properties",
    "parse_parameters",
]
