# -*- coding: utf-8 -*-
""" Test default validation. """

from gqlkit._string_utils import dedent
from gqlkit.lang import parse
from gqlkit.validation import ValidationVisitor, validate

from ._test_utils import assert_validation_result


def test_it_validates_queries(schema):
    assert_validation_result(
        schema,
        """
        query {
            catOrDog {
                ... on Cat {
                    furColor
                }
                ... on Dog {
                    isHousetrained
                }
            }
        }
        """,
    )


def test_it_detects_bad_scalar_parse(schema):
    assert_validation_result(
        schema,
        """
        query {
            invalidArg(arg: "bad value")
        }
        """,
        [
            'Expected type Invalid, found "bad value" '
            "(Invalid scalar is always invalid)"
        ],
    )


def test_errors_are_reported_in_rule_order(schema):
    assert_validation_result(
        schema,
        """
        query Foo($unused: Int) {
            dog {
                ...Unknown
            }
        }
        query Foo {
            dog
        }
        """,
        [
            'There can only be one operation named "Foo".',
            'Field "dog" of type "Dog" must have a selection of subfields. '
            'Did you mean "dog { ... }"?',
            'Unknown fragment "Unknown".',
            'Variable "$unused" is never used by operation "Foo".',
        ],
    )


def test_validation_is_idempotent(schema):
    document = parse("{ dog { unknownField } }")
    first = [str(err) for err in validate(schema, document)]
    second = [str(err) for err in validate(schema, document)]
    assert first == second == [
        'Cannot query field "unknownField" on type "Dog".'
    ]


def test_it_stops_after_max_errors(starwars_schema):
    errors = validate(starwars_schema, parse("{ a b c d e }"), max_errors=3)
    assert [str(err) for err in errors] == [
        'Cannot query field "a" on type "Query".',
        'Cannot query field "b" on type "Query".',
        'Cannot query field "c" on type "Query".',
        "Too many validation errors, error limit reached. Validation aborted.",
    ]


def test_errors_expose_locations(starwars_schema):
    source = dedent(
        """
        {
            hero {
                favoriteSpaceship
            }
        }
        """
    )
    errors = validate(starwars_schema, parse(source))
    assert [err.to_dict() for err in errors] == [
        {
            "message": (
                'Cannot query field "favoriteSpaceship" on type "Character".'
            ),
            "locations": [{"line": 3, "column": 9}],
        }
    ]


def test_custom_rules(starwars_schema):
    class NoAliasesChecker(ValidationVisitor):
        def enter_field(self, node, *_):
            if node.alias is not None:
                self.add_error("Aliases are not allowed", [node])

    errors = validate(
        starwars_schema,
        parse("{ hero { name, nick: name } }"),
        rules=[NoAliasesChecker],
    )
    assert [str(err) for err in errors] == ["Aliases are not allowed"]


# Star Wars schema related tests


def test_complex_but_valid_query(starwars_schema):
    assert_validation_result(
        starwars_schema,
        """
        query NestedQueryWithFragment {
            hero {
                ...NameAndAppearances
                friends {
                    ...NameAndAppearances
                    friends {
                        ...NameAndAppearances
                    }
                }
            }
        }

        fragment NameAndAppearances on Character {
            name
            appearsIn
        }
        """,
    )


def test_object_type_without_subfields(starwars_schema):
    assert_validation_result(
        starwars_schema,
        """
        query HeroNoFieldsQuery {
            hero
        }
        """,
        [
            'Field "hero" of type "Character" must have a selection of '
            'subfields. Did you mean "hero { ... }"?'
        ],
        [(2, 5)],
    )


def test_fields_on_scalars(starwars_schema):
    assert_validation_result(
        starwars_schema,
        """
        query HeroFieldsOnScalarQuery {
            hero {
                name {
                    firstCharacterOfName
                }
            }
        }
        """,
        [
            'Field "name" must not have a selection since type "String" has '
            "no subfields."
        ],
    )


def test_fields_on_correct_type_through_fragments(starwars_schema):
    assert_validation_result(
        starwars_schema,
        """
        query DroidFieldInFragment {
            hero {
                name
                ...DroidFields
            }
        }

        fragment DroidFields on Droid {
            primaryFunction
        }
        """,
    )


def test_fields_not_on_interface(starwars_schema):
    assert_validation_result(
        starwars_schema,
        """
        query DroidFieldOnCharacter {
            hero {
                name
                primaryFunction
            }
        }
        """,
        ['Cannot query field "primaryFunction" on type "Character".'],
    )


def test_impossible_spread(starwars_schema):
    assert_validation_result(
        starwars_schema,
        """
        {
            human(id: "1000") {
                ... on Droid {
                    primaryFunction
                }
            }
        }
        """,
        [
            'Fragment cannot be spread here as objects of type "Human" can '
            'never be of type "Droid".'
        ],
    )
