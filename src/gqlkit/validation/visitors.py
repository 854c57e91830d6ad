# -*- coding: utf-8 -*-

from typing import Dict, List, Optional, Sequence, Set, Tuple, Union

from ..exc import ValidationError
from ..lang import ast as _ast
from ..lang.visitor import Visitor
from ..schema import Argument, GraphQLType, InputField, Schema
from ..utilities.type_info import TypeInfo

VariableUsage = Tuple[
    _ast.Variable, Optional[GraphQLType], Optional[Union[Argument, InputField]]
]


class ValidationVisitor(Visitor):
    """
    Base class for validation rules.

    Subclass this to implement custom rules. Use :meth:`add_error` to
    register errors and return ``False`` from an ``enter_*`` method to
    prevent validating the children of an invalid node.

    Args:
        schema: Schema to validate against
        type_info: Type information shared by all rules of a validation run

    Attributes:
        schema (gqlkit.schema.Schema): Schema to validate against
        type_info (gqlkit.utilities.type_info.TypeInfo): Type information
            for the current node
        errors (List[gqlkit.exc.ValidationError]): Collected errors
    """

    def __init__(self, schema: Schema, type_info: TypeInfo):
        self.schema = schema
        self.type_info = type_info
        self.errors = []  # type: List[ValidationError]

    def add_error(
        self, message: str, nodes: Optional[Sequence[_ast.Node]] = None
    ) -> None:
        """ Register an error.

        Args:
            message: Error description
            nodes: Nodes where the error comes from
        """
        self.errors.append(ValidationError(message, nodes))


class VariablesCollector(ValidationVisitor):
    """
    Validation visitor which tracks variable definitions and usages in every
    operation and fragment, along with the fragments each operation uses
    directly or transitively.

    Subclasses should do their work in ``leave_document`` after calling the
    parent implementation.
    """

    def __init__(self, schema, type_info):
        super().__init__(schema, type_info)
        self._definition = None  # type: Optional[str]
        self._in_var_def = False

        # Keyed by operation name ("" for anonymous operations).
        self.defined_variables = (
            {}
        )  # type: Dict[str, Dict[str, _ast.VariableDefinition]]
        self.operation_fragments = {}  # type: Dict[str, List[str]]
        self.operations = {}  # type: Dict[str, _ast.OperationDefinition]

        # Keyed by "operation:<name>" or "fragment:<name>".
        self._usages = {}  # type: Dict[str, List[VariableUsage]]
        self._spreads = {}  # type: Dict[str, List[str]]

    def enter_operation_definition(self, node, *_):
        name = node.name.value if node.name else ""
        self._definition = "operation:%s" % name
        self.defined_variables.setdefault(name, {})
        self.operations.setdefault(name, node)
        self._usages.setdefault(self._definition, [])
        self._spreads.setdefault(self._definition, [])

    def enter_fragment_definition(self, node, *_):
        self._definition = "fragment:%s" % node.name.value
        self._usages.setdefault(self._definition, [])
        self._spreads.setdefault(self._definition, [])

    def leave_operation_definition(self, *_):
        self._definition = None

    leave_fragment_definition = leave_operation_definition

    def enter_fragment_spread(self, node, *_):
        if self._definition is not None:
            self._spreads[self._definition].append(node.name.value)

    def enter_variable_definition(self, node, *_):
        self._in_var_def = True
        if self._definition is not None and self._definition.startswith(
            "operation:"
        ):
            op = self._definition[len("operation:") :]
            self.defined_variables[op].setdefault(
                node.variable.name.value, node
            )

    def leave_variable_definition(self, *_):
        self._in_var_def = False

    def enter_variable(self, node, *_):
        if self._in_var_def or self._definition is None:
            return
        self._usages[self._definition].append(
            (node, self.type_info.input_type, self.type_info.input_value_def)
        )

    def _reachable_fragments(self, key: str) -> List[str]:
        seen = set()  # type: Set[str]
        ordered = []  # type: List[str]
        stack = list(reversed(self._spreads.get(key, [])))
        while stack:
            name = stack.pop()
            if name in seen:
                continue
            seen.add(name)
            ordered.append(name)
            stack.extend(reversed(self._spreads.get("fragment:%s" % name, [])))
        return ordered

    def leave_document(self, *_):
        for op in self.defined_variables:
            self.operation_fragments[op] = self._reachable_fragments(
                "operation:%s" % op
            )

    def operation_usages(self, op: str) -> List[VariableUsage]:
        """ Variables used by an operation, directly or through fragments. """
        usages = list(self._usages.get("operation:%s" % op, []))
        for fragment in self.operation_fragments.get(op, []):
            usages.extend(self._usages.get("fragment:%s" % fragment, []))
        return usages

