"""Depth-first tree walker shared by all rules."""
from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Union

from .tree import Node

# Visitor return values. None (or CONTINUE) keeps walking.
CONTINUE = "continue"
SKIP = "skip"
EXIT = "exit"

Visitor = Callable[[Node, "int | None", "Node | None"], "str | None"]
Test = Union[str, Iterable[str], Callable[[Node, "int | None", "Node | None"], bool], None]


def convert_test(test: Test) -> Callable[[Node, int | None, Node | None], bool]:
    """Turn a type tag, a collection of tags or a predicate into a predicate."""
    if test is None:
        return lambda node, index, parent: True
    if isinstance(test, str):
        return lambda node, index, parent: node.type == test
    if callable(test):
        return test
    types = frozenset(test)
    return lambda node, index, parent: node.type in types


def visit(
    tree: Node,
    visitor: Visitor,
    test: Test = None,
    reverse: bool = False,
) -> None:
    """
    Walk a tree in pre-order, calling `visitor(node, index, parent)`.

    Args:
        tree: Root of the walk (visited too, with index and parent None)
        visitor: Callback; may return SKIP to not descend into the node,
            or EXIT to stop the whole walk
        test: Only call the visitor for matching nodes. Descent is not
            filtered: children of non-matching nodes are still walked.
        reverse: Walk children last-to-first (parents still come first)
    """
    is_match = convert_test(test)

    # Explicit stack keeps deep trees away from the recursion limit
    stack: list[tuple[Node, int | None, Node | None]] = [(tree, None, None)]

    while stack:
        node, index, parent = stack.pop()

        action = None
        if is_match(node, index, parent):
            action = visitor(node, index, parent)

        if action == EXIT:
            return
        if action == SKIP or not node.children:
            continue

        # Push so that the next child to visit ends up on top
        positions = range(len(node.children))
        if not reverse:
            positions = reversed(positions)
        for child_index in positions:
            stack.append((node.children[child_index], child_index, node))
