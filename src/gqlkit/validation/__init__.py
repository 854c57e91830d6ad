# -*- coding: utf-8 -*-
"""
Validation of GraphQL (query) documents.

Note:
    This module is only concerned with validating executable documents, not
    SDL documents which are validated when using :func:`gqlkit.build_schema`
    or :meth:`gqlkit.schema.Schema.validate`.
"""

import logging
from typing import List, Optional, Sequence, Type

from ..exc import ValidationError
from ..lang import ast as _ast
from ..lang.visitor import BREAK, ParallelVisitor, visit
from ..schema import Schema
from ..utilities.type_info import TypeInfo, TypeInfoVisitor
from .rules import (
    ExecutableDefinitionsChecker,
    FieldsOnCorrectTypeChecker,
    FragmentsOnCompositeTypesChecker,
    KnownArgumentNamesChecker,
    KnownDirectivesChecker,
    KnownFragmentNamesChecker,
    KnownTypeNamesChecker,
    LoneAnonymousOperationChecker,
    NoFragmentCyclesChecker,
    NoUndefinedVariablesChecker,
    NoUnusedFragmentsChecker,
    NoUnusedVariablesChecker,
    OverlappingFieldsCanBeMergedChecker,
    PossibleFragmentSpreadsChecker,
    ProvidedRequiredArgumentsChecker,
    ScalarLeafsChecker,
    SingleFieldSubscriptionsChecker,
    UniqueArgumentNamesChecker,
    UniqueDirectivesPerLocationChecker,
    UniqueFragmentNamesChecker,
    UniqueInputFieldNamesChecker,
    UniqueOperationNameChecker,
    UniqueVariableNamesChecker,
    ValuesOfCorrectTypeChecker,
    VariablesAreInputTypesChecker,
    VariablesInAllowedPositionChecker,
)
from .visitors import ValidationVisitor, VariablesCollector

__all__ = (
    "validate",
    "ValidationVisitor",
    "VariablesCollector",
    "SPECIFIED_RULES",
    "MAX_ERRORS",
)

logger = logging.getLogger(__name__)

MAX_ERRORS = 100

SPECIFIED_RULES = (
    ExecutableDefinitionsChecker,
    UniqueOperationNameChecker,
    LoneAnonymousOperationChecker,
    SingleFieldSubscriptionsChecker,
    KnownTypeNamesChecker,
    FragmentsOnCompositeTypesChecker,
    VariablesAreInputTypesChecker,
    ScalarLeafsChecker,
    FieldsOnCorrectTypeChecker,
    UniqueFragmentNamesChecker,
    KnownFragmentNamesChecker,
    NoUnusedFragmentsChecker,
    PossibleFragmentSpreadsChecker,
    NoFragmentCyclesChecker,
    UniqueVariableNamesChecker,
    NoUndefinedVariablesChecker,
    NoUnusedVariablesChecker,
    KnownDirectivesChecker,
    UniqueDirectivesPerLocationChecker,
    KnownArgumentNamesChecker,
    UniqueArgumentNamesChecker,
    ValuesOfCorrectTypeChecker,
    ProvidedRequiredArgumentsChecker,
    VariablesInAllowedPositionChecker,
    OverlappingFieldsCanBeMergedChecker,
    UniqueInputFieldNamesChecker,
)


class _BoundedParallelVisitor(ParallelVisitor):
    """
    Run all the rules in a single traversal, stopping once the combined
    number of errors reaches ``max_errors``.
    """

    def __init__(self, visitors: Sequence[ValidationVisitor], max_errors: int):
        super().__init__(visitors)
        self.max_errors = max_errors

    @property
    def error_count(self) -> int:
        return sum(len(v.errors) for v in self.visitors)  # type: ignore

    def enter(self, node, key, parent, path, ancestors):
        result = super().enter(node, key, parent, path, ancestors)
        if self.error_count >= self.max_errors:
            return BREAK
        return result

    def leave(self, node, key, parent, path, ancestors):
        result = super().leave(node, key, parent, path, ancestors)
        if self.error_count >= self.max_errors:
            return BREAK
        return result


def validate(
    schema: Schema,
    document: _ast.Document,
    rules: Optional[Sequence[Type[ValidationVisitor]]] = None,
    max_errors: int = MAX_ERRORS,
) -> List[ValidationError]:
    """
    Check that a document is valid for execution against a schema.

    Validation never raises for an invalid document, all errors are
    collected and returned. Running it multiple times over the same inputs
    yields the same errors.

    Args:
        schema: Schema to validate against
        document: Parsed document
        rules: Rules to run, defaults to :data:`SPECIFIED_RULES`
        max_errors: Stop once that many errors have been found, in which
            case a final error is appended to the list

    Returns:
        List of errors, empty if the document is valid.
    """
    type_info = TypeInfo(schema)
    visitors = [
        rule(schema, type_info)
        for rule in (SPECIFIED_RULES if rules is None else rules)
    ]
    runner = _BoundedParallelVisitor(visitors, max_errors)

    visit(document, TypeInfoVisitor(type_info, runner))

    errors = []  # type: List[ValidationError]
    for visitor in visitors:
        errors.extend(visitor.errors)

    if len(errors) >= max_errors:
        errors = errors[:max_errors]
        errors.append(
            ValidationError(
                "Too many validation errors, error limit reached. "
                "Validation aborted."
            )
        )

    logger.debug("Validated document with %d error(s)", len(errors))
    return errors
