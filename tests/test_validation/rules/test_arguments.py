# -*- coding: utf-8 -*-
""" Argument rules. """

from gqlkit.validation.rules import (
    KnownArgumentNamesChecker,
    ProvidedRequiredArgumentsChecker,
    UniqueArgumentNamesChecker,
)

from .._test_utils import assert_checker_validation_result as run_test


def test_known_argument_names(schema):
    run_test(
        KnownArgumentNamesChecker,
        schema,
        """
        fragment argOnRequiredArg on Dog {
            doesKnowCommand(dogCommand: SIT)
            isAtLocation(y: 1, x: 2)
            name @include(if: true)
        }
        """,
    )


def test_ignores_arguments_of_unknown_fields(schema):
    run_test(
        KnownArgumentNamesChecker,
        schema,
        """
        fragment argOnUnknownField on Dog {
            unknownField(unknownArg: SIT)
        }
        """,
    )


def test_unknown_field_argument(schema):
    run_test(
        KnownArgumentNamesChecker,
        schema,
        """
        fragment invalidArgName on Dog {
            doesKnowCommand(unknown: true)
        }
        """,
        ['Unknown argument "unknown" on field "Dog.doesKnowCommand".'],
        [(2, 21)],
    )


def test_misspelled_field_argument(schema):
    run_test(
        KnownArgumentNamesChecker,
        schema,
        """
        fragment invalidArgName on Dog {
            doesKnowCommand(DogCommand: true)
        }
        """,
        [
            'Unknown argument "DogCommand" on field "Dog.doesKnowCommand". '
            'Did you mean "dogCommand"?'
        ],
    )


def test_unknown_directive_argument(schema):
    run_test(
        KnownArgumentNamesChecker,
        schema,
        """
        {
            dog @skip(unless: true) {
                name
            }
        }
        """,
        ['Unknown argument "unless" on directive "@skip".'],
        [(2, 15)],
    )


def test_unique_argument_names(schema):
    run_test(
        UniqueArgumentNamesChecker,
        schema,
        """
        {
            field(arg1: "value", arg2: "value") @directive(arg1: "value")
        }
        """,
    )


def test_duplicate_argument_names(schema):
    run_test(
        UniqueArgumentNamesChecker,
        schema,
        """
        {
            field(arg1: "value", arg1: "value", arg1: "value")
            dog @directive(arg1: "value", arg1: "value")
        }
        """,
        [
            'There can be only one argument named "arg1".',
            'There can be only one argument named "arg1".',
            'There can be only one argument named "arg1".',
        ],
        [[(2, 11), (2, 26)], [(2, 11), (2, 41)], [(3, 20), (3, 35)]],
    )


def test_required_arguments_provided(schema):
    run_test(
        ProvidedRequiredArgumentsChecker,
        schema,
        """
        {
            complicatedArgs {
                multipleReqs(req1: 1, req2: 2)
                nonNullFieldWithDefault
                multipleOpts
            }
            dog @include(if: true) {
                name
            }
        }
        """,
    )


def test_missing_required_field_arguments(schema):
    run_test(
        ProvidedRequiredArgumentsChecker,
        schema,
        """
        {
            complicatedArgs {
                multipleReqs(req2: 2)
            }
        }
        """,
        [
            'Field "multipleReqs" argument "req1" of type "Int!" is required, '
            "but it was not provided."
        ],
        [(3, 9)],
    )


def test_missing_multiple_required_arguments(schema):
    run_test(
        ProvidedRequiredArgumentsChecker,
        schema,
        """
        {
            complicatedArgs {
                multipleReqs
            }
        }
        """,
        [
            'Field "multipleReqs" argument "req1" of type "Int!" is required, '
            "but it was not provided.",
            'Field "multipleReqs" argument "req2" of type "Int!" is required, '
            "but it was not provided.",
        ],
    )


def test_missing_directive_arguments(schema):
    run_test(
        ProvidedRequiredArgumentsChecker,
        schema,
        """
        {
            dog @include {
                name @skip
            }
        }
        """,
        [
            'Directive "@include" argument "if" of type "Boolean!" is '
            "required, but it was not provided.",
            'Directive "@skip" argument "if" of type "Boolean!" is required, '
            "but it was not provided.",
        ],
        [(2, 9), (3, 14)],
    )
