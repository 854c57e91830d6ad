# -*- coding: utf-8 -*-

import pytest

from gqlkit.lang import ast as _ast
from gqlkit.lang.parser import parse
from gqlkit.lang.printer import print_ast
from gqlkit.lang.visitor import BREAK, REMOVE, ParallelVisitor, Visitor, visit


class Tracker(Visitor):
    def __init__(self):
        self.stack = []

    def enter(self, node, *_):
        self.stack.append(("enter", node.__class__.__name__))

    def leave(self, node, *_):
        self.stack.append(("leave", node.__class__.__name__))


def test_null_visitor_does_not_crash():
    ast = parse("{ a }", no_location=True)
    assert visit(ast, Visitor()) is ast


def test_it_processes_nodes_in_the_correct_order():
    ast = parse("{ a }", no_location=True)
    visitor = Tracker()
    visit(ast, visitor)
    assert visitor.stack == [
        ("enter", "Document"),
        ("enter", "OperationDefinition"),
        ("enter", "SelectionSet"),
        ("enter", "Field"),
        ("enter", "Name"),
        ("leave", "Name"),
        ("leave", "Field"),
        ("leave", "SelectionSet"),
        ("leave", "OperationDefinition"),
        ("leave", "Document"),
    ]


def test_kind_specific_callbacks_take_precedence():
    class _Visitor(Tracker):
        def enter_field(self, node, *_):
            self.stack.append(("field", node.name.value))

    ast = parse("{ a { b } }", no_location=True)
    visitor = _Visitor()
    visit(ast, visitor)
    assert ("field", "a") in visitor.stack
    assert ("field", "b") in visitor.stack
    assert ("enter", "Field") not in visitor.stack
    assert ("leave", "Field") in visitor.stack


def test_callbacks_receive_key_parent_path_and_ancestors():
    ast = parse("{ a { b } }", no_location=True)
    seen = []

    class _Visitor(Visitor):
        def enter_field(self, node, key, parent, path, ancestors):
            seen.append(
                (
                    node.name.value,
                    key,
                    parent.__class__.__name__,
                    path,
                    [a.__class__.__name__ for a in ancestors],
                )
            )

    visit(ast, _Visitor())
    assert seen == [
        (
            "a",
            0,
            "SelectionSet",
            ["definitions", 0, "selection_set", "selections", 0],
            ["Document", "OperationDefinition", "SelectionSet"],
        ),
        (
            "b",
            0,
            "SelectionSet",
            [
                "definitions",
                0,
                "selection_set",
                "selections",
                0,
                "selection_set",
                "selections",
                0,
            ],
            [
                "Document",
                "OperationDefinition",
                "SelectionSet",
                "Field",
                "SelectionSet",
            ],
        ),
    ]


def test_returning_false_skips_the_subtree():
    ast = parse("{ a { b { c } } d }", no_location=True)
    entered = []

    class _Visitor(Visitor):
        def enter_field(self, node, *_):
            entered.append(node.name.value)
            if node.name.value == "a":
                return False

        def leave_field(self, node, *_):
            entered.append("/" + node.name.value)

    visit(ast, _Visitor())
    assert entered == ["a", "d", "/d"]


def test_break_stops_the_traversal():
    ast = parse("{ a { b { c } } d }", no_location=True)
    entered = []

    class _Visitor(Visitor):
        def enter_field(self, node, *_):
            entered.append(node.name.value)
            if node.name.value == "b":
                return BREAK

    visit(ast, _Visitor())
    assert entered == ["a", "b"]


def test_remove_deletes_nodes_without_mutating_the_input():
    ast = parse("{ a b c }", no_location=True)

    class _Visitor(Visitor):
        def enter_field(self, node, *_):
            if node.name.value == "b":
                return REMOVE

    edited = visit(ast, _Visitor())
    assert print_ast(edited) == "{\n  a\n  c\n}\n"
    assert print_ast(ast) == "{\n  a\n  b\n  c\n}\n"


def test_replacing_nodes_on_enter():
    ast = parse("{ a { x } b }", no_location=True)
    visited = []

    class _Visitor(Visitor):
        def enter_field(self, node, *_):
            visited.append(node.name.value)
            if node.name.value == "a":
                return node.copy(
                    name=_ast.Name(value="renamed"),
                    selection_set=_ast.SelectionSet(
                        selections=[_ast.Field(name=_ast.Name(value="y"))]
                    ),
                )

    edited = visit(ast, _Visitor())
    assert print_ast(edited) == "{\n  renamed {\n    y\n  }\n  b\n}\n"
    # Traversal continues into the replacement.
    assert visited == ["a", "y", "b"]


def test_replacing_nodes_on_leave():
    ast = parse("{ a(x: 1) }", no_location=True)

    class _Visitor(Visitor):
        def leave_int_value(self, node, *_):
            return _ast.IntValue(value=str(int(node.value) + 41))

    assert print_ast(visit(ast, _Visitor())) == "{\n  a(x: 42)\n}\n"


def test_removing_the_root():
    class _Visitor(Visitor):
        def enter_document(self, *_):
            return REMOVE

    assert visit(parse("{ a }"), _Visitor()) is None


def test_invalid_return_values_raise():
    class _Visitor(Visitor):
        def enter_field(self, *_):
            return 42

    with pytest.raises(TypeError):
        visit(parse("{ a }"), _Visitor())


def test_parallel_visitor_isolates_skips():
    ast = parse("{ a { b } c }", no_location=True)
    first, second = [], []

    class Skipper(Visitor):
        def enter_field(self, node, *_):
            first.append(node.name.value)
            if node.name.value == "a":
                return False

        def leave_field(self, node, *_):
            first.append("/" + node.name.value)

    class Recorder(Visitor):
        def enter_field(self, node, *_):
            second.append(node.name.value)

    visit(ast, ParallelVisitor([Skipper(), Recorder()]))
    assert first == ["a", "c", "/c"]
    assert second == ["a", "b", "c"]


def test_parallel_visitor_isolates_breaks():
    ast = parse("{ a b c }", no_location=True)
    first, second = [], []

    class Breaker(Visitor):
        def enter_field(self, node, *_):
            first.append(node.name.value)
            if node.name.value == "a":
                return BREAK

    class Recorder(Visitor):
        def enter_field(self, node, *_):
            second.append(node.name.value)

    visit(ast, ParallelVisitor([Breaker(), Recorder()]))
    assert first == ["a"]
    assert second == ["a", "b", "c"]


def test_parallel_visitor_applies_edits():
    ast = parse("{ a b }", no_location=True)

    class Remover(Visitor):
        def enter_field(self, node, *_):
            if node.name.value == "a":
                return REMOVE

    assert (
        print_ast(visit(ast, ParallelVisitor([Visitor(), Remover()])))
        == "{\n  b\n}\n"
    )
