# -*- coding: utf-8 -*-
""" Directive rules. """

from gqlkit.validation.rules import (
    KnownDirectivesChecker,
    UniqueDirectivesPerLocationChecker,
)

from .._test_utils import assert_checker_validation_result as run_test
from .._test_utils import assert_validation_result


def test_with_known_directives(schema):
    run_test(
        KnownDirectivesChecker,
        schema,
        """
        query Foo($var: Boolean) @onQuery {
            dog @include(if: true) {
                name
            }
            human @skip(if: false) {
                name
                ...Frag @onFragmentSpread
                ... @onInlineFragment {
                    name
                }
            }
        }
        fragment Frag on Human @onFragmentDefinition {
            name @onField
        }
        """,
    )


def test_with_unknown_directive(schema):
    run_test(
        KnownDirectivesChecker,
        schema,
        """
        {
            dog @unknown(directive: "value") {
                name
            }
        }
        """,
        ['Unknown directive "@unknown".'],
        [(2, 9)],
    )


def test_with_misplaced_directives(schema):
    run_test(
        KnownDirectivesChecker,
        schema,
        """
        query Foo @include(if: true) {
            name @onQuery
            ...Frag @onQuery
        }
        mutation Bar @onQuery {
            someField
        }
        """,
        [
            'Directive "@include" may not be used on QUERY.',
            'Directive "@onQuery" may not be used on FIELD.',
            'Directive "@onQuery" may not be used on FRAGMENT_SPREAD.',
            'Directive "@onQuery" may not be used on MUTATION.',
        ],
        [(1, 11), (2, 10), (3, 13), (5, 14)],
    )


def test_within_schema_language(schema):
    run_test(
        KnownDirectivesChecker,
        schema,
        """
        type MyObj implements MyInterface @onObject {
            myField(myArg: Int @onQuery): String @onFieldDefinition
        }
        schema @onSchema {
            query: MyQuery
        }
        """,
        ['Directive "@onQuery" may not be used on ARGUMENT_DEFINITION.'],
    )


def test_no_duplicate_directives(schema):
    run_test(
        UniqueDirectivesPerLocationChecker,
        schema,
        """
        fragment Test on Type {
            field @include(if: true) @skip(if: false)
        }
        """,
    )


def test_unknown_directives_are_ignored(schema):
    run_test(
        UniqueDirectivesPerLocationChecker,
        schema,
        """
        fragment Test on Type {
            field @unknown @unknown
        }
        """,
    )


def test_duplicate_directives_in_one_location(schema):
    run_test(
        UniqueDirectivesPerLocationChecker,
        schema,
        """
        fragment Test on Type {
            field @skip(if: true) @skip(if: false)
        }
        """,
        ['The directive "@skip" can only be used once at this location.'],
        [[(2, 11), (2, 27)]],
    )


def test_repeatable_directive_used_twice_in_one_location(schema):
    run_test(
        UniqueDirectivesPerLocationChecker,
        schema,
        """
        fragment Test on Dog {
            name @repeatableOnField @repeatableOnField
        }
        """,
    )


def test_repeatable_directive_passes_full_validation(schema):
    assert_validation_result(
        schema, "{ dog { name @repeatableOnField @repeatableOnField } }"
    )


def test_different_duplicate_directives_in_one_location(schema):
    run_test(
        UniqueDirectivesPerLocationChecker,
        schema,
        """
        fragment Test on Type @onFragmentDefinition @onFragmentDefinition {
            field @skip(if: true) @include(if: true) @skip(if: false)
        }
        """,
        [
            'The directive "@onFragmentDefinition" can only be used once at '
            "this location.",
            'The directive "@skip" can only be used once at this location.',
        ],
    )
