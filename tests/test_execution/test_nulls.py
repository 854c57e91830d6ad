# -*- coding: utf-8 -*-

import pytest

from gqlkit.exc import ResolverError
from gqlkit.schema import Field, NonNullType, ObjectType, Schema, String

from ._test_utils import assert_execution

# All test coroutines will be treated as marked.
pytestmark = pytest.mark.asyncio

NullNonNullDataType = ObjectType(
    "DataType",
    [
        Field("scalar", String),
        Field("scalarNonNull", NonNullType(String)),
        Field("nested", lambda: NullNonNullDataType),
        Field("nestedNonNull", lambda: NonNullType(NullNonNullDataType)),
    ],
)  # type: ObjectType

NullAndNonNullSchema = Schema(NullNonNullDataType)


async def test_nulls_nullable_field():
    await assert_execution(
        NullAndNonNullSchema,
        "query Q { scalar }",
        root_value=dict(scalar=None),
        expected_data={"scalar": None},
    )


async def test_nulls_lazy_nullable_field():
    await assert_execution(
        NullAndNonNullSchema,
        "query Q { scalar }",
        root_value=dict(scalar=lambda: None),
        expected_data={"scalar": None},
    )


async def test_nulls_and_report_error_on_non_nullable_root_field():
    result = await assert_execution(
        NullAndNonNullSchema,
        "query Q { scalar scalarNonNull }",
        root_value=dict(scalar="foo", scalarNonNull=None),
        expected_errors=[
            (
                "Cannot return null for non-nullable field "
                "DataType.scalarNonNull.",
                (1, 18),
                "scalarNonNull",
            )
        ],
    )
    assert result.data is None
    assert result.has_data


async def test_nulls_tree_of_nullable_fields():
    await assert_execution(
        NullAndNonNullSchema,
        """
        query Q {
            nested {
                scalar
                nested {
                    scalar
                    nested {
                        scalar
                    }
                }
            }
        }
        """,
        root_value=dict(
            nested=dict(scalar=None, nested=dict(scalar=None, nested=None))
        ),
        expected_data={
            "nested": {
                "scalar": None,
                "nested": {"scalar": None, "nested": None},
            }
        },
    )


async def test_nulls_propagate_to_the_first_nullable_parent():
    await assert_execution(
        NullAndNonNullSchema,
        """
        query Q {
            nested {
                scalar
                nestedNonNull {
                    scalarNonNull
                }
            }
            scalar
        }
        """,
        root_value=dict(
            scalar="root",
            nested=dict(scalar="a", nestedNonNull=dict(scalarNonNull=None)),
        ),
        expected_data={"nested": None, "scalar": "root"},
        expected_errors=[
            (
                "Cannot return null for non-nullable field "
                "DataType.scalarNonNull.",
                (5, 13),
                "nested.nestedNonNull.scalarNonNull",
            )
        ],
    )


async def test_nulls_nested_non_null_object():
    await assert_execution(
        NullAndNonNullSchema,
        """
        query Q {
            nested {
                nestedNonNull {
                    scalar
                }
            }
        }
        """,
        root_value=dict(nested=dict(nestedNonNull=None)),
        expected_data={"nested": None},
        expected_errors=[
            (
                "Cannot return null for non-nullable field "
                "DataType.nestedNonNull.",
                (3, 9),
                "nested.nestedNonNull",
            )
        ],
    )


async def test_resolver_errors_on_nullable_fields(raiser):
    schema = Schema(
        ObjectType(
            "Query",
            [
                Field("ok", String, resolver=lambda *_: "ok"),
                Field(
                    "error",
                    String,
                    resolver=raiser(ResolverError, "Resolver failed"),
                ),
                Field("crash", String, resolver=raiser(ValueError, "Boom")),
            ],
        )
    )
    await assert_execution(
        schema,
        "{ ok error crash }",
        expected_data={"ok": "ok", "error": None, "crash": None},
        expected_errors=[
            ("Resolver failed", (1, 6), "error"),
            ("Boom", (1, 12), "crash"),
        ],
    )


async def test_resolver_errors_on_non_nullable_fields(raiser):
    schema = Schema(
        ObjectType(
            "Query",
            [
                Field(
                    "nested",
                    ObjectType(
                        "Nested",
                        [
                            Field(
                                "error",
                                NonNullType(String),
                                resolver=raiser(ResolverError, "Failed"),
                            ),
                            Field("ok", String),
                        ],
                    ),
                    resolver=lambda *_: {"ok": "ok"},
                )
            ],
        )
    )
    await assert_execution(
        schema,
        "{ nested { ok error } }",
        expected_data={"nested": None},
        expected_errors=[("Failed", (1, 15), "nested.error")],
    )


async def test_all_sibling_errors_are_reported(raiser):
    schema = Schema(
        ObjectType(
            "Query",
            [
                Field(
                    "nested",
                    ObjectType(
                        "Nested",
                        [
                            Field(
                                "a",
                                NonNullType(String),
                                resolver=raiser(ResolverError, "A"),
                            ),
                            Field(
                                "b",
                                String,
                                resolver=raiser(ResolverError, "B"),
                            ),
                        ],
                    ),
                    resolver=lambda *_: {},
                )
            ],
        )
    )
    await assert_execution(
        schema,
        "{ nested { a b } }",
        expected_data={"nested": None},
        expected_errors=[("A", (1, 12), "nested.a"), ("B", (1, 14), "nested.b")],
    )


async def test_shared_error_instance_is_located_per_field():
    error = ResolverError("Shared", extensions={"code": 1})

    def resolve(*_):
        raise error

    schema = Schema(
        ObjectType(
            "Query",
            [
                Field("a", String, resolver=resolve),
                Field("b", String, resolver=resolve),
            ],
        )
    )
    result = await assert_execution(
        schema,
        "{ a b }",
        expected_data={"a": None, "b": None},
        expected_errors=[("Shared", (1, 3), "a"), ("Shared", (1, 5), "b")],
    )
    assert [err.extensions for err in result.errors] == [{"code": 1}] * 2
    assert error.path is None
    assert error.nodes == []
