"""Structural model records shared across tsmodel components."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Union

_INTEGER_LITERAL = re.compile(r"^[+-]?\d+$")


@dataclass
class Property:
    """A member property of an interface or class."""

    name: str
    type: str
    optional: bool = False
    visibility: Optional[str] = None
    comment: Optional[str] = None
    type_hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "optional": self.optional,
            "visibility": self.visibility,
            "javaTypeHint": self.type_hint,
            "comment": self.comment,
        }


@dataclass
class Parameter:
    """A single method parameter."""

    name: str
    type: Optional[str] = None
    optional: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "type": self.type, "optional": self.optional}


@dataclass
class Method:
    """A method signature; captured for completeness, not elaborated further."""

    name: str
    parameters: List[Parameter] = field(default_factory=list)
    return_type: Optional[str] = None
    is_constructor: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "parameters": [parameter.to_dict() for parameter in self.parameters],
            "returnType": self.return_type,
            "constructor": self.is_constructor,
        }


@dataclass
class Interface:
    """An interface declaration, user-authored or synthesized."""

    name: str
    extends: List[str] = field(default_factory=list)
    properties: List[Property] = field(default_factory=list)
    methods: List[Method] = field(default_factory=list)

    def property(self, name: str) -> Optional[Property]:
        for candidate in self.properties:
            if candidate.name == name:
                return candidate
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "extends": list(self.extends),
            "properties": [prop.to_dict() for prop in self.properties],
            "methods": [method.to_dict() for method in self.methods],
        }


@dataclass
class ClassDecl(Interface):
    """A class declaration; structurally identical to an interface."""


@dataclass
class EnumValue:
    """Enum member name with its literal or defaulted value."""

    name: str
    value: str

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "value": self.value}


@dataclass
class EnumDecl:
    """An enum declaration with bare names and (name, value) pairs."""

    name: str
    values: List[str] = field(default_factory=list)
    enum_values: List[EnumValue] = field(default_factory=list)

    @property
    def is_integer_backed(self) -> bool:
        """True only when every value is a pure integer literal."""
        if not self.enum_values:
            return False
        return all(_INTEGER_LITERAL.match(entry.value.strip()) for entry in self.enum_values)

    @property
    def encoding(self) -> str:
        return "integer" if self.is_integer_backed else "string"

    def encoded_values(self) -> List[Union[int, str]]:
        """Return all values as integers or all as strings, never a mix."""
        if self.is_integer_backed:
            return [int(entry.value.strip()) for entry in self.enum_values]
        return [str(entry.value) for entry in self.enum_values]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "values": list(self.values),
            "enumValues": [entry.to_dict() for entry in self.enum_values],
            "encoding": self.encoding,
        }


@dataclass
class TypeAlias:
    """A type alias and its collapsed right-hand side."""

    name: str
    target: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "target": self.target}


Declaration = Union[Interface, ClassDecl, EnumDecl, TypeAlias]


@dataclass
class SourceFile:
    """Declarations found in a single source file."""

    path: str
    imports: List[str] = field(default_factory=list)
    interfaces: List[Interface] = field(default_factory=list)
    enums: List[EnumDecl] = field(default_factory=list)
    classes: List[ClassDecl] = field(default_factory=list)
    type_aliases: List[TypeAlias] = field(default_factory=list)

    def declarations(self) -> Iterator[Declaration]:
        yield from self.interfaces
        yield from self.enums
        yield from self.classes
        yield from self.type_aliases

    def declaration_names(self) -> List[str]:
        return [declaration.name for declaration in self.declarations()]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "imports": list(self.imports),
            "interfaces": [item.to_dict() for item in self.interfaces],
            "enums": [item.to_dict() for item in self.enums],
            "classes": [item.to_dict() for item in self.classes],
            "typeAliases": [item.to_dict() for item in self.type_aliases],
        }


@dataclass
class Model:
    """Root of the structural model, files in discovery order."""

    files: List[SourceFile] = field(default_factory=list)

    def add_file(self, source_file: SourceFile) -> None:
        self.files.append(source_file)

    def all_interfaces(self) -> List[Interface]:
        return [item for source_file in self.files for item in source_file.interfaces]

    def find(self, name: str) -> List[Declaration]:
        """Return every declaration with the given name, across files."""
        return [
            declaration
            for source_file in self.files
            for declaration in source_file.declarations()
            if declaration.name == name
        ]

    @staticmethod
    def qualified_name(source_file: SourceFile, declaration: Declaration) -> str:
        return f"{source_file.path}#{declaration.name}"

    def to_dict(self) -> Dict[str, Any]:
        return {"files": [source_file.to_dict() for source_file in self.files]}


__all__ = [
    "ClassDecl",
    "Declaration",
    "EnumDecl",
    "EnumValue",
    "Interface",
    "Method",
    "Model",
    "Parameter",
    "Property",
    "SourceFile",
    "TypeAlias",
]
