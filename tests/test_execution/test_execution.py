# -*- coding: utf-8 -*-

import asyncio

import pytest

from gqlkit.exc import (
    CoercionError,
    InvalidOperationError,
    ResolverError,
    VariableCoercionError,
)
from gqlkit.execution import GraphQLResult, ResolveInfo, execute
from gqlkit.lang import parse
from gqlkit.schema import (
    Argument,
    Boolean,
    Field,
    Int,
    ListType,
    NonNullType,
    ObjectType,
    Schema,
    String,
)
from gqlkit.sdl import build_schema

from ._test_utils import assert_execution, create_test_schema

# All test coroutines will be treated as marked.
pytestmark = pytest.mark.asyncio


async def test_uses_the_root_value_and_default_resolver():
    data = {
        "a": "Apple",
        "b": lambda: "Banana",
        "c": "Cookie",
        "d": 42,
        "e": True,
    }

    schema = Schema(
        ObjectType(
            "Query",
            [
                Field("a", String),
                Field("b", String),
                Field("c", String),
                Field("d", Int),
                Field("e", Boolean),
            ],
        )
    )

    await assert_execution(
        schema,
        "{ a, b, c, d, e }",
        root_value=data,
        expected_data={
            "a": "Apple",
            "b": "Banana",
            "c": "Cookie",
            "d": 42,
            "e": True,
        },
    )


async def test_default_resolver_on_objects():
    class Point:
        def __init__(self, x, y):
            self.x = x
            self.y = y

        def norm(self):
            return abs(self.x) + abs(self.y)

    schema = create_test_schema(
        ObjectType("Point", [Field("x", Int), Field("y", Int), Field("norm", Int)]),
        resolver=lambda *_: Point(1, -2),
    )

    await assert_execution(
        schema,
        "{ test { x y norm } }",
        expected_data={"test": {"x": 1, "y": -2, "norm": 3}},
    )


async def test_missing_attributes_resolve_to_none():
    await assert_execution(
        create_test_schema(String),
        "{ test }",
        root_value=object(),
        expected_data={"test": None},
    )


async def test_custom_field_resolver():
    async def resolver(source, args, context, info):
        return "%s!" % info.field_name

    schema = Schema(
        ObjectType(
            "Query",
            [
                Field("a", String),
                Field("b", String, resolver=lambda *_: "own"),
            ],
        )
    )

    await assert_execution(
        schema,
        "{ a b }",
        field_resolver=resolver,
        expected_data={"a": "a!", "b": "own"},
    )


async def test_resolver_arguments():
    received = {}

    def resolver(source, args, context, info):
        received.update(source=source, args=args, context=context, info=info)
        return "ok"

    schema = create_test_schema(
        String,
        args=[Argument("a", Int), Argument("b", String, default_value="foo")],
        resolver=resolver,
    )

    root, context = object(), object()
    await assert_execution(
        schema,
        "query Q { test(a: 42) }",
        root_value=root,
        context_value=context,
        expected_data={"test": "ok"},
    )

    assert received["source"] is root
    assert received["context"] is context
    assert received["args"] == {"a": 42, "b": "foo"}

    info = received["info"]
    assert isinstance(info, ResolveInfo)
    assert info.field_name == "test"
    assert info.return_type is String
    assert info.parent_type is schema.query_type
    assert info.schema is schema
    assert info.root_value is root
    assert info.operation.name.value == "Q"
    assert info.path.as_list() == ["test"]
    assert info.variables == {}
    assert [node.name.value for node in info.nodes] == ["test"]


async def test_arguments_from_variables():
    schema = create_test_schema(
        String,
        args=[Argument("a", NonNullType(Int)), Argument("b", ListType(Int))],
        resolver=lambda _, args, *__: repr(sorted(args.items())),
    )

    await assert_execution(
        schema,
        "query ($a: Int!, $b: Int) { test(a: $a, b: [$b, 3]) }",
        variables={"a": 1, "b": 2},
        expected_data={"test": "[('a', 1), ('b', [2, 3])]"},
    )


async def test_argument_errors_are_field_errors():
    schema = create_test_schema(
        String,
        args=[Argument("a", NonNullType(Int))],
        resolver=lambda *_: "ok",
    )

    await assert_execution(
        schema,
        "query ($a: Int) { test(a: $a) }",
        expected_data={"test": None},
        expected_errors=[
            (
                'Argument "a" of required type "Int!" was provided the '
                'missing variable "$a"',
                (1, 19),
                "test",
            )
        ],
    )


async def test_typename_and_aliases():
    schema = create_test_schema(
        ObjectType("Obj", [Field("a", String)]), resolver=lambda *_: {"a": "b"}
    )

    await assert_execution(
        schema,
        "{ __typename, test { t: __typename, a, other: a } }",
        expected_data={
            "__typename": "Query",
            "test": {"t": "Obj", "a": "b", "other": "b"},
        },
    )


async def test_merges_parallel_fragments():
    Type = ObjectType(
        "Type",
        [
            Field("a", String, resolver=lambda *_: "Apple"),
            Field("b", String, resolver=lambda *_: "Banana"),
            Field("c", String, resolver=lambda *_: "Cherry"),
            Field("deep", lambda: Type, resolver=lambda *_: {}),
        ],
    )  # type: ObjectType

    await assert_execution(
        Schema(Type),
        """
        { a, ...FragOne, ...FragTwo }

        fragment FragOne on Type {
            b
            deep { b, deeper: deep { b } }
        }

        fragment FragTwo on Type {
            c
            deep { c, deeper: deep { c } }
        }
        """,
        root_value={},
        expected_data={
            "a": "Apple",
            "b": "Banana",
            "c": "Cherry",
            "deep": {
                "b": "Banana",
                "c": "Cherry",
                "deeper": {"b": "Banana", "c": "Cherry"},
            },
        },
    )


async def test_ignores_fields_not_in_schema():
    schema = create_test_schema(String, resolver=lambda *_: "foo")
    await assert_execution(
        schema, "{ test, unknown }", expected_data={"test": "foo"}
    )


async def test_skip_and_include():
    schema = Schema(ObjectType("Query", [Field("a", String), Field("b", String)]))
    await assert_execution(
        schema,
        "query ($skip: Boolean!) { a @skip(if: $skip), b @include(if: $skip) }",
        root_value={"a": "a", "b": "b"},
        variables={"skip": True},
        expected_data={"b": "b"},
    )


async def test_directive_arguments_from_info():
    def resolve_a(source, args, context, info):
        return info.get_directive_arguments("custom")["value"]

    schema = build_schema(
        """
        directive @custom(value: Int) on FIELD
        type Query { a: Int }
        """,
        resolvers={"Query": {"a": resolve_a}},
    )

    await assert_execution(
        schema,
        "query ($v: Int) { a @custom(value: $v) }",
        variables={"v": 42},
        expected_data={"a": 42},
    )


async def test_leaf_serialization_errors():
    schema = Schema(
        ObjectType(
            "Query",
            [
                Field("int", Int, resolver=lambda *_: "abc"),
                Field("str", String, resolver=lambda *_: "abc"),
            ],
        )
    )

    await assert_execution(
        schema,
        "{ int str }",
        expected_data={"int": None, "str": "abc"},
        expected_errors=[
            (
                "Expected a value of type \"Int\" but received: 'abc' "
                "(Int cannot represent non-integer value: 'abc')",
                (1, 3),
                "int",
            )
        ],
    )


async def test_sibling_fields_are_resolved_concurrently():
    event = asyncio.Event()

    async def wait(*_):
        await asyncio.wait_for(event.wait(), timeout=1)
        return "waited"

    def trigger(*_):
        event.set()
        return "triggered"

    schema = Schema(
        ObjectType(
            "Query",
            [
                Field("a", String, resolver=wait),
                Field("b", String, resolver=trigger),
            ],
        )
    )

    await assert_execution(
        schema, "{ a b }", expected_data={"a": "waited", "b": "triggered"}
    )


async def test_mutation_root_fields_are_resolved_serially():
    log = []

    def make_resolver(name, delay):
        async def resolver(*_):
            log.append("start %s" % name)
            await asyncio.sleep(delay)
            log.append("end %s" % name)
            return name

        return resolver

    schema = Schema(
        ObjectType("Query", [Field("a", String)]),
        ObjectType(
            "Mutation",
            [
                Field("first", String, resolver=make_resolver("first", 0.02)),
                Field("second", String, resolver=make_resolver("second", 0)),
            ],
        ),
    )

    await assert_execution(
        schema,
        "mutation { first second }",
        expected_data={"first": "first", "second": "second"},
    )
    assert log == ["start first", "end first", "start second", "end second"]


async def test_operation_name_selects_the_operation():
    schema = create_test_schema(String, resolver=lambda *_: "foo")
    await assert_execution(
        schema,
        "query A { a: test } query B { b: test }",
        operation_name="B",
        expected_data={"b": "foo"},
    )


@pytest.mark.parametrize(
    "source, operation_name, message",
    [
        (
            "fragment F on Query { test }",
            None,
            "Expected at least one operation definition",
        ),
        (
            "query A { test } query B { test }",
            None,
            "Operation name is required when document contains multiple "
            "operation definitions",
        ),
        ("query A { test }", "C", 'No operation "C" in document'),
        ("mutation { test }", None, "Schema doesn't support mutation operation"),
    ],
)
async def test_invalid_operations(source, operation_name, message):
    schema = create_test_schema(String)
    result = await execute(schema, parse(source), operation_name=operation_name)
    assert not result.has_data
    assert [str(err) for err in result.errors] == [message]
    assert isinstance(result.errors[0], InvalidOperationError)
    assert result.response() == {"errors": [{"message": message}]}


async def test_invalid_variables_prevent_execution():
    schema = create_test_schema(
        String, args=[Argument("a", Int)], resolver=lambda *_: "foo"
    )
    result = await execute(
        schema, parse("query ($a: Int!) { test(a: $a) }"), variables={}
    )
    assert not result.has_data
    assert not result
    assert isinstance(result.errors[0], VariableCoercionError)
    assert result.response() == {
        "errors": [
            {
                "message": (
                    'Variable "$a" of required type "Int!" was not provided.'
                ),
                "locations": [{"line": 1, "column": 8}],
            }
        ]
    }


async def test_invalid_root_directive_arguments_prevent_execution():
    schema = create_test_schema(String, resolver=lambda *_: "foo")
    result = await execute(schema, parse("{ test @skip(if: 1) }"))
    assert not result.has_data
    assert isinstance(result.errors[0], CoercionError)
    assert "data" not in result.response()
    assert result.response()["errors"][0]["locations"] == [
        {"line": 1, "column": 8}
    ]


async def test_result_response_and_json(raiser):
    schema = Schema(
        ObjectType(
            "Query",
            [
                Field("a", String, resolver=lambda *_: "a"),
                Field(
                    "b",
                    String,
                    resolver=raiser(
                        ResolverError, "Failed", extensions={"code": 1}
                    ),
                ),
            ],
        )
    )
    result = await execute(schema, parse("{ a b }"))
    assert isinstance(result, GraphQLResult)

    data, errors = result
    assert data == {"a": "a", "b": None}
    assert len(errors) == 1

    expected = {
        "errors": [
            {
                "message": "Failed",
                "locations": [{"line": 1, "column": 5}],
                "path": ["b"],
                "extensions": {"code": 1},
            }
        ],
        "data": {"a": "a", "b": None},
    }
    assert result.response() == expected
    assert result.json(sort_keys=True) == (
        '{"data": {"a": "a", "b": null}, "errors": [{"extensions": {"code": 1}, '
        '"locations": [{"column": 5, "line": 1}], "message": "Failed", '
        '"path": ["b"]}]}'
    )


@pytest.mark.parametrize(
    "source, expected",
    [
        ("mutation { set, get }", {"set": 1, "get": 1}),
        ("mutation { get, set }", {"get": 0, "set": 1}),
    ],
)
async def test_mutations_observe_previous_writes(source, expected):
    state = {"value": 0}

    async def set_value(*_):
        await asyncio.sleep(0)
        state["value"] += 1
        return state["value"]

    schema = Schema(
        ObjectType("Query", [Field("a", String)]),
        ObjectType(
            "Mutation",
            [
                Field("set", Int, resolver=set_value),
                Field("get", Int, resolver=lambda *_: state["value"]),
            ],
        ),
    )

    await assert_execution(schema, source, expected_data=expected)
