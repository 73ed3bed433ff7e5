"""Block structure and spacing rules."""
import re
from dataclasses import dataclass
from typing import Generator, Optional

from ...position import generated, point_end, point_start, position
from ...tree import BLOCK_TYPES, Node, Position
from ...visit import visit
from ..consistency import ConsistencyTracker, is_consistent
from ..models import LintIssue, RuleConfigError
from .options import parse_record

COMMENT_PATTERN = re.compile(r'^\s*<!--')


@dataclass
class MissingBlankLinesOptions:
    except_tight_lists: bool = False


@dataclass
class ListItemSpacingOptions:
    check_blanks: bool = False


def configure_missing_blank_lines(value) -> MissingBlankLinesOptions:
    return parse_record(MissingBlankLinesOptions, value, "no-missing-blank-lines")


def configure_list_item_spacing(value) -> ListItemSpacingOptions:
    return parse_record(ListItemSpacingOptions, value, "list-item-spacing")


def configure_blockquote_indentation(value) -> Optional[int]:
    if is_consistent(value) or value is True:
        return None
    if isinstance(value, int) and not isinstance(value, bool) and value > 0:
        return value
    raise RuleConfigError(
        f"Incorrect `blockquote-indentation` value `{value}`: "
        "use either `'consistent'` or a positive number of spaces"
    )


def no_missing_blank_lines(
    tree: Node, file, options: MissingBlankLinesOptions
) -> Generator[LintIssue, None, None]:
    """
    Flag block nodes that directly follow the previous sibling.

    A block (paragraph, heading, list, ...) starting on the line right
    after its previous sibling ends has no blank line before it. With
    `exceptTightLists`, siblings inside list items are not checked.
    """
    issues = []

    def visitor(node, index, parent):
        end = point_end(node)
        if parent is None or index is None or end is None:
            return
        if options.except_tight_lists and parent.type == "listItem":
            return

        if index + 1 >= len(parent.children):
            return

        following = parent.children[index + 1]
        following_start = point_start(following)

        if (
            following_start is not None
            and following.type in BLOCK_TYPES
            and following_start.line == end.line + 1
        ):
            issues.append(LintIssue(
                rule="no-missing-blank-lines",
                message="Missing blank line before block node",
                place=position(following),
            ))

    visit(tree, visitor)
    yield from issues


def _gap(before: Node, after: Node) -> Optional[int]:
    """Lines between the end of one node and the start of the next."""
    end = point_end(before)
    start = point_start(after)
    if end is None or start is None:
        return None
    return start.line - end.line


def _has_blank_line(item: Node) -> bool:
    children = item.children or []
    for before, after in zip(children, children[1:]):
        gap = _gap(before, after)
        if gap is not None and gap > 1:
            return True
    return False


def _is_multiline(item: Node) -> bool:
    children = item.children or []
    if not children:
        return False
    first_start = point_start(children[0])
    last_end = point_end(children[-1])
    if first_start is None or last_end is None:
        return False
    return last_end.line - first_start.line > 0


def list_item_spacing(
    tree: Node, file, options: ListItemSpacingOptions
) -> Generator[LintIssue, None, None]:
    """
    Flag inconsistent blank lines between list items.

    A list is loose when any item spans several lines (or, with
    `checkBlanks`, contains a blank line between its children). Items of
    a loose list must be separated by a blank line; items of a tight
    list must not be.
    """
    infer = _has_blank_line if options.check_blanks else _is_multiline
    issues = []

    def visitor(node, index, parent):
        if generated(node) or not node.children:
            return

        items = node.children
        tight = not any(infer(item) for item in items)

        for before, after in zip(items, items[1:]):
            gap = _gap(before, after)
            if gap is None or (gap < 2) == tight:
                continue

            issues.append(LintIssue(
                rule="list-item-spacing",
                message=(
                    "Extraneous new line after list item"
                    if tight
                    else "Missing new line after list item"
                ),
                place=Position(point_end(before), point_start(after)),
            ))

    visit(tree, visitor, "list")
    yield from issues


def blockquote_indentation(
    tree: Node, file, preferred: Optional[int]
) -> Generator[LintIssue, None, None]:
    """
    Flag block quotes with inconsistent indentation.

    Indentation is the distance from the `>` to the start of the content.
    With `'consistent'` the first block quote sets the width.
    """
    tracker: ConsistencyTracker[int] = ConsistencyTracker(preferred)
    issues = []

    def visitor(node, index, parent):
        if not node.children:
            return

        start = point_start(node)
        head = point_start(node.children[0])
        if start is None or head is None:
            return

        count = head.column - start.column
        expected = tracker.check(count)
        if expected is None:
            return

        diff = expected - count
        amount = abs(diff)
        issues.append(LintIssue(
            rule="blockquote-indentation",
            message=(
                f"{'Add' if diff > 0 else 'Remove'} {amount} "
                f"{'space' if amount == 1 else 'spaces'} between block quote and content"
            ),
            place=head,
        ))

    visit(tree, visitor, "blockquote")
    yield from issues


def no_html(tree: Node, file, options=None) -> Generator[LintIssue, None, None]:
    """Flag raw HTML. Comments are allowed."""
    issues = []

    def visitor(node, index, parent):
        place = position(node)
        if place is not None and not COMMENT_PATTERN.match(node.value or ""):
            issues.append(LintIssue(
                rule="no-html",
                message="Do not use HTML in markdown",
                place=place,
            ))

    visit(tree, visitor, "html")
    yield from issues
