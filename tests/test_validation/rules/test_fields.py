# -*- coding: utf-8 -*-
""" Field selection rules. """

from gqlkit.validation.rules import (
    FieldsOnCorrectTypeChecker,
    KnownTypeNamesChecker,
    ScalarLeafsChecker,
)

from .._test_utils import assert_checker_validation_result as run_test


def test_object_field_selection(schema):
    run_test(
        FieldsOnCorrectTypeChecker,
        schema,
        """
        fragment objectFieldSelection on Dog {
            __typename
            name
            otherName: nickname
        }
        fragment interfaceFieldSelection on Pet {
            __typename
            name
        }
        fragment unionTypename on CatOrDog {
            __typename
        }
        """,
    )


def test_ignores_fields_on_unknown_type(schema):
    run_test(
        FieldsOnCorrectTypeChecker,
        schema,
        """
        fragment unknownSelection on UnknownType {
            unknownField
        }
        """,
    )


def test_field_not_defined_on_fragment(schema):
    run_test(
        FieldsOnCorrectTypeChecker,
        schema,
        """
        fragment fieldNotDefined on Dog {
            meowVolume
        }
        """,
        [
            'Cannot query field "meowVolume" on type "Dog". '
            'Did you mean "barkVolume"?'
        ],
        [(2, 5)],
    )


def test_reports_errors_when_type_is_known_again(schema):
    run_test(
        FieldsOnCorrectTypeChecker,
        schema,
        """
        fragment typeKnownAgain on Pet {
            unknown_pet_field {
                ... on Cat {
                    unknown_cat_field
                }
            }
        }
        """,
        [
            'Cannot query field "unknown_pet_field" on type "Pet".',
            'Cannot query field "unknown_cat_field" on type "Cat".',
        ],
        [(2, 5), (4, 13)],
    )


def test_direct_field_selection_on_union(schema):
    run_test(
        FieldsOnCorrectTypeChecker,
        schema,
        """
        fragment directFieldSelectionOnUnion on CatOrDog {
            directField
        }
        """,
        [
            'Cannot query field "directField" on type "CatOrDog". '
            'Did you mean to use an inline fragment on "Dog" or "Cat"?'
        ],
    )


def test_valid_scalar_selection(schema):
    run_test(
        ScalarLeafsChecker,
        schema,
        """
        fragment scalarSelection on Dog {
            barks
            doesKnowCommand(dogCommand: SIT)
        }
        """,
    )


def test_object_type_missing_selection(schema):
    run_test(
        ScalarLeafsChecker,
        schema,
        """
        query directQueryOnObjectWithoutSubFields {
            human
        }
        """,
        [
            'Field "human" of type "Human" must have a selection of '
            'subfields. Did you mean "human { ... }"?'
        ],
        [(2, 5)],
    )


def test_list_type_missing_selection(schema):
    run_test(
        ScalarLeafsChecker,
        schema,
        """
        {
            human {
                pets
            }
        }
        """,
        [
            'Field "pets" of type "[Pet]" must have a selection of '
            'subfields. Did you mean "pets { ... }"?'
        ],
    )


def test_scalar_selection_not_allowed(schema):
    run_test(
        ScalarLeafsChecker,
        schema,
        """
        fragment scalarSelectionsNotAllowedOnBoolean on Dog {
            barks { sinceWhen }
        }
        fragment scalarSelectionsNotAllowedOnEnum on Cat {
            furColor { inHexdec }
        }
        """,
        [
            'Field "barks" must not have a selection since type "Boolean" '
            "has no subfields.",
            'Field "furColor" must not have a selection since type '
            '"FurColor" has no subfields.',
        ],
        [(2, 11), (5, 14)],
    )


def test_known_type_names_are_valid(schema):
    run_test(
        KnownTypeNamesChecker,
        schema,
        """
        query Foo($var: String, $required: [String!]!) {
            user(id: 4) {
                pets { ... on Pet { name }, ...PetFields, ... { name } }
            }
        }
        fragment PetFields on Pet {
            name
        }
        """,
    )


def test_unknown_type_names_are_invalid(schema):
    run_test(
        KnownTypeNamesChecker,
        schema,
        """
        query Foo($var: JumbledUpLetters) {
            user(id: 4) {
                name
                pets { ... on Badger { name }, ...PetFields }
            }
        }
        fragment PetFields on Peettt {
            name
        }
        """,
        [
            'Unknown type "JumbledUpLetters".',
            'Unknown type "Badger".',
            'Unknown type "Peettt". Did you mean "Pet"?',
        ],
        [(1, 17), (4, 23), (7, 23)],
    )


def test_ignores_type_definitions(schema):
    run_test(
        KnownTypeNamesChecker,
        schema,
        """
        type NotInTheSchema {
            field: FooBar
        }
        interface FooBar {
            field: NotInTheSchema
        }
        query Foo($var: NotInTheSchema) {
            user(id: $var) {
                id
            }
        }
        """,
        ['Unknown type "NotInTheSchema".'],
        [(7, 17)],
    )
