# -*- coding: utf-8 -*-
"""
Generic traversal of GraphQL ASTs.

:func:`visit` walks a tree depth first and calls the visitor on the way in
(``enter``) and on the way out (``leave``) of every node. Callbacks are looked
up by node kind first (``enter_field``, ``leave_selection_set``, ...) falling
back to the generic ``enter`` / ``leave`` methods, and all receive the same
arguments: ``(node, key, parent, path, ancestors)``.

What a callback returns drives the traversal:

- ``None``: continue, leaving the node unchanged;
- ``False``: when entering, skip the node's children and its ``leave`` call;
- a :class:`~gqlkit.lang.ast.Node`: replace the current node, when entering
  traversal continues into the replacement;
- :data:`REMOVE`: drop the node from its parent;
- :data:`BREAK`: stop the whole traversal.

Edits never mutate the visited tree, affected parents are copied instead and
:func:`visit` returns the new root.
"""

from typing import Any, List, Optional, Sequence, Union

from . import ast as _ast

__all__ = ("BREAK", "REMOVE", "Visitor", "ParallelVisitor", "visit")


class _Sentinel:
    __slots__ = ("name",)

    def __init__(self, name: str):
        self.name = name

    def __repr__(self) -> str:
        return self.name


BREAK = _Sentinel("BREAK")
REMOVE = _Sentinel("REMOVE")

Key = Union[int, str, None]


class Visitor:
    """
    Base visitor, subclass it and implement ``enter_<kind>`` /
    ``leave_<kind>`` methods for the nodes you care about, or override
    :meth:`enter` / :meth:`leave` to handle every node.
    """

    def enter(
        self,
        node: _ast.Node,
        key: Key,
        parent: Optional[_ast.Node],
        path: List[Key],
        ancestors: List[_ast.Node],
    ) -> Any:
        return None

    def leave(
        self,
        node: _ast.Node,
        key: Key,
        parent: Optional[_ast.Node],
        path: List[Key],
        ancestors: List[_ast.Node],
    ) -> Any:
        return None


def _callback(visitor: Visitor, stage: str, kind: str) -> Any:
    return getattr(visitor, "%s_%s" % (stage, kind), None) or getattr(
        visitor, stage
    )


class ParallelVisitor(Visitor):
    """
    Run multiple visitors in a single traversal.

    Each visitor is isolated from the others: returning ``False`` only skips
    the subtree for the visitor which returned it and :data:`BREAK` only
    stops that visitor. The first visitor to return an edit wins and the
    remaining visitors are not called for that node.
    """

    def __init__(self, visitors: Sequence[Visitor]):
        self.visitors = list(visitors)
        self._skipping = [None] * len(self.visitors)  # type: List[Any]

    def enter(self, node, key, parent, path, ancestors):
        for index, visitor in enumerate(self.visitors):
            if self._skipping[index] is not None:
                continue
            result = _callback(visitor, "enter", node.kind)(
                node, key, parent, path, ancestors
            )
            if result is False:
                self._skipping[index] = node
            elif result is BREAK:
                self._skipping[index] = BREAK
            elif result is not None:
                return result
        return None

    def leave(self, node, key, parent, path, ancestors):
        for index, visitor in enumerate(self.visitors):
            skipping = self._skipping[index]
            if skipping is None:
                result = _callback(visitor, "leave", node.kind)(
                    node, key, parent, path, ancestors
                )
                if result is BREAK:
                    self._skipping[index] = BREAK
                elif result is not None and result is not False:
                    return result
            elif skipping is node:
                self._skipping[index] = None
        return None


class _Traversal:
    __slots__ = ("visitor", "stopped")

    def __init__(self, visitor: Visitor):
        self.visitor = visitor
        self.stopped = False

    def _call(self, stage, node, key, parent, path, ancestors):
        result = _callback(self.visitor, stage, node.kind)(
            node, key, parent, path, ancestors
        )
        if result is BREAK:
            self.stopped = True
        elif not (
            result is None
            or result is False
            or result is REMOVE
            or isinstance(result, _ast.Node)
        ):
            raise TypeError(
                "Invalid return value from %s visitor: %r" % (stage, result)
            )
        return result

    def visit(self, node, key, parent, path, ancestors):
        if not isinstance(node, _ast.Node):
            raise TypeError("Invalid AST node: %r" % (node,))

        result = self._call("enter", node, key, parent, path, ancestors)
        if result is BREAK or result is False:
            return node
        if result is REMOVE:
            return REMOVE
        if result is not None:
            node = result

        edits = {}
        ancestors = ancestors + [node]
        for name, value in node.children():
            if self.stopped:
                break
            if isinstance(value, list):
                updated = self._visit_list(value, node, path + [name], ancestors)
                if updated is not value:
                    edits[name] = updated
            elif isinstance(value, _ast.Node):
                updated = self.visit(value, name, node, path + [name], ancestors)
                if updated is REMOVE:
                    edits[name] = None
                elif updated is not value:
                    edits[name] = updated

        if edits:
            node = node.copy(**edits)

        if self.stopped:
            return node

        result = self._call("leave", node, key, parent, path, ancestors[:-1])
        if result is REMOVE:
            return REMOVE
        if isinstance(result, _ast.Node):
            return result
        return node

    def _visit_list(self, values, parent, path, ancestors):
        updated = []
        changed = False
        for index, value in enumerate(values):
            if self.stopped:
                updated.extend(values[index:])
                break
            result = self.visit(value, index, parent, path + [index], ancestors)
            if result is REMOVE:
                changed = True
            else:
                changed = changed or result is not value
                updated.append(result)
        return updated if changed else values


def visit(root: _ast.Node, visitor: Visitor) -> Optional[_ast.Node]:
    """
    Traverse ``root`` depth first with ``visitor``.

    Returns:
        The root node, edited if any callback returned an edit. ``None`` if
        the root itself was removed.

    Raises:
        TypeError: when something other than a node is found where a node is
            expected.
    """
    result = _Traversal(visitor).visit(root, None, None, [], [])
    return None if result is REMOVE else result
