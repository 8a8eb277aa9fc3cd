"""Tests for tsmodel.parsing.members."""

from __future__ import annotations

import textwrap

from tsmodel.parsing.members import (
    extract_alias_target,
    extract_enum_members,
    extract_imports,
    extract_methods,
    extract_properties,
    parse_parameters,
)


def _body(text: str) -> str:
    """Build a declaration body: the opening brace followed by members."""
    return "{\n" + textwrap.dedent(text).lstrip("\n")


def test_extracts_each_direct_property_once() -> None:
    body = _body(
        """
        id: number;
        name?: string;
        readonly tags: string[];
        meta: Map<string, number>;
        [key: string]: unknown;
        greet(name: string): void;
        cTs: number; // comment
        dTs: number; //javaType: long
        """
    )

    properties = extract_properties(body)

    assert [prop.name for prop in properties] == ["id", "name", "tags", "meta", "cTs", "dTs"]
    by_name = {prop.name: prop for prop in properties}
    assert by_name["name"].optional is True
    assert by_name["id"].optional is False
    assert by_name["tags"].type == "string[]"
    assert by_name["meta"].type == "Map<string, number>"
    assert by_name["cTs"].comment == "// comment"
    assert by_name["cTs"].type_hint is None
    assert by_name["dTs"].type_hint == "long"


def test_single_line_body_members_are_found() -> None:
    properties = extract_properties("{ a: string; b?: number ")

    assert [(prop.name, prop.type, prop.optional) for prop in properties] == [
        ("a", "string", False),
        ("b", "number", True),
    ]


def test_class_visibility_and_constructor_parameters() -> None:
    body = _body(
        """
        private secret: string;
        public id: number;
        protected label?: string;
        static count = 0;
        constructor(
          private readonly api: Api,
          public name: string,
        ) {}
        """
    )

    properties = extract_properties(body)
    methods = extract_methods(body)

    assert [(prop.name, prop.visibility) for prop in properties] == [
        ("secret", "private"),
        ("id", "public"),
        ("label", "protected"),
    ]
    (constructor,) = methods
    assert constructor.is_constructor is True
    assert [(param.name, param.type) for param in constructor.parameters] == [
        ("api", "Api"),
        ("name", "string"),
    ]


def test_multi_line_parameter_lists_are_not_properties() -> None:
    body = _body(
        """
        find(
          id: string,
          opts?: Options,
        ): Result;
        total: number;
        """
    )

    assert [prop.name for prop in extract_properties(body)] == ["total"]
    (method,) = extract_methods(body)
    assert method.name == "find"
    assert method.return_type == "Result"
    assert [(param.name, param.optional) for param in method.parameters] == [
        ("id", False),
        ("opts", True),
    ]


def test_multi_line_inline_object_is_captured_whole() -> None:
    body = _body(
        """
        owner?: {
          a: string; // javaType: Long
          nested: { b: number }
        }; // javaType: OwnerDto
        after: string;
        """
    )

    properties = extract_properties(body)

    assert [prop.name for prop in properties] == ["owner", "after"]
    owner = properties[0]
    assert owner.optional is True
    assert owner.type.startswith("{")
    assert owner.type.endswith("}")
    assert "// javaType: Long" in owner.type
    assert owner.type_hint == "OwnerDto"


def test_multi_line_inline_object_keeps_array_suffix_and_union_tail() -> None:
    body = _body(
        """
        items: {
          a: string;
        }[]; // javaType: List
        item: {
          a: string;
        } | null;
        after: string;
        """
    )

    properties = extract_properties(body)

    assert [prop.name for prop in properties] == ["items", "item", "after"]
    items, item, _ = properties
    assert items.type.startswith("{")
    assert items.type.endswith("}[]")
    assert items.comment == "// javaType: List"
    assert items.type_hint == "List"
    assert item.type.endswith("} | null")
    assert item.comment is None


def test_multi_line_array_generic_keeps_nested_comments() -> None:
    body = _body(
        """
        points: Array<{
          x: number; // javaType: long
          y: number;
        }>; // outer
        after: string;
        """
    )

    properties = extract_properties(body)

    assert [prop.name for prop in properties] == ["points", "after"]
    points = properties[0]
    assert points.type.startswith("Array<{")
    assert points.type.endswith("}>")
    assert "// javaType: long" in points.type
    assert points.comment == "// outer"


def test_single_line_inline_object_keeps_hint() -> None:
    body = _body("point: { x: number; y: number } // javaType: Point\n")

    (prop,) = extract_properties(body)

    assert prop.type == "{ x: number; y: number }"
    assert prop.type_hint == "Point"


def test_dynamic_import_types_and_empty_types_are_skipped() -> None:
    body = _body(
        """
        lazy: import('./x').Y;
        ok: boolean;
        """
    )

    assert [prop.name for prop in extract_properties(body)] == ["ok"]


def test_hint_is_read_from_original_text() -> None:
    original = _body("value: number; /* note */ // javaType: BigDecimal\n")
    stripped = original.replace("/* note */", " " * len("/* note */"))

    (prop,) = extract_properties(stripped, original)

    assert prop.type_hint == "BigDecimal"


def test_nested_members_are_not_direct_properties() -> None:
    body = _body(
        """
        run(): void {
          const local: string = "x";
        }
        name: string;
        """
    )

    assert [prop.name for prop in extract_properties(body)] == ["name"]
    assert [method.name for method in extract_methods(body)] == ["run"]


def test_parse_parameters_strips_decorators_modifiers_and_defaults() -> None:
    parameters = parse_parameters(
        "@Inject(TOKEN) private readonly svc: Service, ...rest: string[], x = 5, y?: number"
    )

    assert [(param.name, param.type, param.optional) for param in parameters] == [
        ("svc", "Service", False),
        ("rest", "string[]", False),
        ("x", None, True),
        ("y", "number", True),
    ]


def test_enum_members_take_quoted_expression_or_name_values() -> None:
    body = _body(
        """
        A = 1 << 2,
        B = 'b',
        C,
        D = "d", // note
        E = Foo.Bar,
        """
    )

    names, values = extract_enum_members(body)

    assert names == ["A", "B", "C", "D", "E"]
    assert [entry.value for entry in values] == ["1 << 2", "b", "C", "d", "Foo.Bar"]


def test_alias_target_is_collapsed() -> None:
    assert extract_alias_target("= string | number") == "string | number"
    assert extract_alias_target("= {\n  a: string; // c\n}") == "{ a: string; }"
    assert extract_alias_target("no equals") is None


def test_imports_are_ordered_and_unique() -> None:
    text = textwrap.dedent(
        """
        import { A } from './a';
        import type { B } from "./b";
        import './side-effect';
        export { C } from './c';
        // import { D } from './d';
        import { A2 } from './a';
        """
    )

    assert extract_imports(text) == ["./a", "./b", "./side-effect", "./c"]
