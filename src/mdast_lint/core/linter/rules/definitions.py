"""Definition linting rules."""
import re
from typing import Generator

from ...position import point_start, position, stringify_position
from ...tree import Node, Point
from ...visit import visit
from ..models import LintIssue

COMMENT_PATTERN = re.compile(r'^\s*<!--')

DEFINITION_TYPES = frozenset({"definition", "footnoteDefinition"})


def no_duplicate_definitions(tree: Node, file, options=None) -> Generator[LintIssue, None, None]:
    """
    Flag definitions with the same identifier as an earlier one.

    Covers link definitions and footnote definitions. Identifiers are
    compared lower-cased; every duplicate cites the first definition.
    """
    seen: dict[str, Point] = {}
    issues = []

    def visitor(node, index, parent):
        place = position(node)
        if place is None or node.identifier is None:
            return

        identifier = node.identifier.lower()
        first = seen.get(identifier)

        if first is not None:
            issues.append(LintIssue(
                rule="no-duplicate-definitions",
                message=(
                    "Do not use definitions with the same identifier "
                    f"({stringify_position(first)})"
                ),
                place=place,
            ))
        else:
            seen[identifier] = place.start

    visit(tree, visitor, DEFINITION_TYPES)
    yield from issues


def final_definition(tree: Node, file, options=None) -> Generator[LintIssue, None, None]:
    """
    Flag definitions that are not at the end of the file.

    Walks the tree backwards and remembers the line of the last content
    node (HTML comments and generated nodes don't count); any definition
    starting before that line is out of place.
    """
    last_content_line = 0
    issues = []

    def visitor(node, index, parent):
        nonlocal last_content_line

        start = point_start(node)
        if (
            start is None
            or node.type == "root"
            or (node.type == "html" and COMMENT_PATTERN.match(node.value or ""))
        ):
            return

        if node.type == "definition":
            if last_content_line and last_content_line > start.line:
                issues.append(LintIssue(
                    rule="final-definition",
                    message=(
                        "Move definitions to the end of the file "
                        f"(after the node at line `{last_content_line}`)"
                    ),
                    place=position(node),
                ))
        elif last_content_line == 0:
            last_content_line = start.line

    visit(tree, visitor, reverse=True)
    yield from issues
