# -*- coding: utf-8 -*-

import pytest

from gqlkit.schema import ScalarType
from gqlkit.sdl import build_schema


def _always_invalid(*_):
    raise ValueError("Invalid scalar is always invalid")


InvalidScalar = ScalarType("Invalid", str, _always_invalid, _always_invalid)

AnyScalar = ScalarType("Any", str, lambda value: value)  # type: ScalarType


SDL = """
schema {
    query: QueryRoot
}

directive @onQuery on QUERY
directive @onMutation on MUTATION
directive @onSubscription on SUBSCRIPTION
directive @onField on FIELD
directive @onFragmentDefinition on FRAGMENT_DEFINITION
directive @onFragmentSpread on FRAGMENT_SPREAD
directive @onInlineFragment on INLINE_FRAGMENT
directive @onSchema on SCHEMA
directive @onObject on OBJECT
directive @onFieldDefinition on FIELD_DEFINITION
directive @repeatableOnField repeatable on FIELD

scalar Invalid
scalar Any

interface Being {
    name(surname: Boolean): String
}

interface Pet {
    name(surname: Boolean): String
}

interface Canine {
    name(surname: Boolean): String
}

interface Intelligent {
    iq: Int
}

enum DogCommand { SIT HEEL DOWN }

enum FurColor { BROWN BLACK TAN SPOTTED NO_FUR UNKNOWN }

type Dog implements Being & Pet & Canine {
    name(surname: Boolean): String
    nickname: String
    barkVolume: Int
    barks: Boolean
    doesKnowCommand(dogCommand: DogCommand): Boolean
    isHousetrained(atOtherHomes: Boolean = true): Boolean
    isAtLocation(x: Int, y: Int): Boolean
}

type Cat implements Being & Pet {
    name(surname: Boolean): String
    nickname: String
    meowVolume: Int
    meows: Boolean
    furColor: FurColor
}

type Human implements Being & Intelligent {
    name(surname: Boolean): String
    iq: Int
    pets: [Pet]
    relatives: [Human]
}

type Alien implements Being & Intelligent {
    name(surname: Boolean): String
    iq: Int
    numEyes: Int
}

union CatOrDog = Dog | Cat
union DogOrHuman = Dog | Human
union HumanOrAlien = Human | Alien

input ComplexInput {
    requiredField: Boolean!
    nonNullField: Boolean! = false
    intField: Int
    stringField: String
    booleanField: Boolean
    stringListField: [String]
}

type ComplicatedArgs {
    intArgField(intArg: Int): String
    nonNullIntArgField(nonNullIntArg: Int!): String
    stringArgField(stringArg: String): String
    booleanArgField(booleanArg: Boolean): String
    enumArgField(enumArg: FurColor): String
    floatArgField(floatArg: Float): String
    idArgField(idArg: ID): String
    stringListArgField(stringListArg: [String]): String
    stringListNonNullArgField(stringListNonNullArg: [String!]): String
    complexArgField(complexArg: ComplexInput): String
    multipleReqs(req1: Int!, req2: Int!): String
    nonNullFieldWithDefault(arg: Int! = 0): String
    multipleOpts(opt1: Int = 0, opt2: Int = 0): String
}

type QueryRoot {
    human(id: ID): Human
    alien: Alien
    dog: Dog
    cat: Cat
    pet: Pet
    catOrDog: CatOrDog
    dogOrHuman: DogOrHuman
    humanOrAlien: HumanOrAlien
    complicatedArgs: ComplicatedArgs
    invalidArg(arg: Invalid): String
    anyArg(arg: Any): String
}
"""

# Boxes sharing field names with incompatible return types.
BOXES_SDL = """
schema {
    query: QueryRoot
}

interface SomeBox {
    deepBox: SomeBox
    unrelatedField: String
}

type StringBox implements SomeBox {
    scalar: String
    deepBox: StringBox
    unrelatedField: String
    listStringBox: [StringBox]
    stringBox: StringBox
    intBox: IntBox
}

type IntBox implements SomeBox {
    scalar: Int
    deepBox: IntBox
    unrelatedField: String
    listStringBox: [StringBox]
    stringBox: StringBox
    intBox: IntBox
}

type NonNullStringBox implements SomeBox {
    scalar: String!
    unrelatedField: String
    deepBox: SomeBox
}

type QueryRoot {
    someBox: SomeBox
}
"""


@pytest.fixture
def schema():
    return build_schema(SDL, additional_types=[InvalidScalar, AnyScalar])


@pytest.fixture
def schema_2():
    return build_schema(BOXES_SDL)
