"""Heading linting rules."""
import re
from typing import Generator

from ...position import generated, point_start, position, stringify_position
from ...tree import Node, Point, to_string
from ...visit import visit
from ..models import LintIssue
from .options import compile_class

DEFAULT_PUNCTUATION = "!,.:;?"

# One more hash than the deepest heading
HEADING_LIKE_FENCE = "#######"


def configure_heading_punctuation(value) -> re.Pattern:
    if value is None or value is True:
        value = DEFAULT_PUNCTUATION
    return compile_class(value, "no-heading-punctuation")


def no_heading_punctuation(
    tree: Node, file, expression: re.Pattern
) -> Generator[LintIssue, None, None]:
    """
    Flag headings whose text ends in punctuation.

    The last character of the flattened heading text (markup ignored) is
    matched against a character class, `!,.:;?` by default.
    """
    issues = []

    def visitor(node, index, parent):
        place = position(node)
        if place is None:
            return

        tail = to_string(node)[-1:]
        if tail and expression.search(tail):
            issues.append(LintIssue(
                rule="no-heading-punctuation",
                message=f"Don’t add a trailing `{tail}` to headings",
                place=place,
            ))

    visit(tree, visitor, "heading")
    yield from issues


def no_duplicate_headings(tree: Node, file, options=None) -> Generator[LintIssue, None, None]:
    """
    Flag headings with the same text as an earlier heading.

    Text is compared case-insensitively; every duplicate cites the first
    heading with that text.
    """
    seen: dict[str, Point] = {}
    issues = []

    def visitor(node, index, parent):
        place = position(node)
        if place is None:
            return

        value = to_string(node).upper()
        first = seen.get(value)

        if first is not None:
            issues.append(LintIssue(
                rule="no-duplicate-headings",
                message=f"Do not use headings with similar content ({stringify_position(first)})",
                place=place,
            ))
        else:
            seen[value] = place.start

    visit(tree, visitor, "heading")
    yield from issues


def no_duplicate_headings_in_section(
    tree: Node, file, options=None
) -> Generator[LintIssue, None, None]:
    """
    Flag headings with the same text as a sibling in the same section.

    Keeps one scope per heading depth. A heading of depth N closes every
    section deeper than N, so `### Bravo` under two different `##`
    sections is fine, but twice under the same one is not.
    """
    # scopes[depth - 1] maps upper-cased text to the first start point
    scopes: list[dict[str, Point]] = []
    issues = []

    def visitor(node, index, parent):
        depth = node.depth
        if not depth:
            return

        # Generated headings still close deeper sections
        if generated(node):
            del scopes[depth:]
            return

        while len(scopes) < depth:
            scopes.append({})

        scope = scopes[depth - 1]
        value = to_string(node).upper()
        first = scope.get(value)

        if first is not None:
            issues.append(LintIssue(
                rule="no-duplicate-headings-in-section",
                message=(
                    "Do not use headings with similar content per section "
                    f"({stringify_position(first)})"
                ),
                place=position(node),
            ))
        else:
            scope[value] = point_start(node)

        del scopes[depth:]

    visit(tree, visitor, "heading")
    yield from issues


def no_emphasis_as_heading(tree: Node, file, options=None) -> Generator[LintIssue, None, None]:
    """
    Flag paragraphs of only emphasis or strong text used as a heading.

    Matches a paragraph whose single child is emphasis/strong, that is
    followed by another paragraph and not preceded by a heading.
    """
    issues = []

    def visitor(node, index, parent):
        if generated(node) or parent is None or index is None:
            return

        children = node.children or []
        if len(children) != 1 or children[0].type not in ("emphasis", "strong"):
            return

        previous = parent.children[index - 1] if index > 0 else None
        following = parent.children[index + 1] if index + 1 < len(parent.children) else None

        if (
            (previous is None or previous.type != "heading")
            and following is not None
            and following.type == "paragraph"
        ):
            issues.append(LintIssue(
                rule="no-emphasis-as-heading",
                message="Don’t use emphasis to introduce a section, use a heading",
                place=position(node),
            ))

    visit(tree, visitor, "paragraph")
    yield from issues


def no_heading_like_paragraph(tree: Node, file, options=None) -> Generator[LintIssue, None, None]:
    """
    Flag paragraphs that start with seven or more hashes.

    Such text looks like a heading but is too deep to be one.
    """
    issues = []

    def visitor(node, index, parent):
        place = position(node)
        if place is None or not node.children:
            return

        head = node.children[0]
        if head.type == "text" and (head.value or "").startswith(HEADING_LIKE_FENCE):
            issues.append(LintIssue(
                rule="no-heading-like-paragraph",
                message="This looks like a heading but has too many hashes",
                place=place,
            ))

    visit(tree, visitor, "paragraph")
    yield from issues
