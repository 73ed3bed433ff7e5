"""Marker consistency rules.

Each rule reads the marker a node was written with straight from the
source text and compares it to a configured or inferred preference.
"""
import re
from typing import Generator, Optional

from ...position import SourceFile, point_end, point_start, position
from ...tree import Node
from ...visit import visit
from ..consistency import ConsistencyTracker, is_consistent
from ..models import LintIssue, RuleConfigError
from .options import parse_marker

RULE_CHARACTERS = re.compile(r'^[-_* ]+$')

STRIKETHROUGH_MARKERS = {"~": "~", "~~": "~~"}


def configure_rule_style(value) -> Optional[str]:
    if is_consistent(value) or value is True:
        return None
    if isinstance(value, str) and RULE_CHARACTERS.match(value):
        return value
    raise RuleConfigError(
        f"Incorrect preferred rule style `{value}`: use either `'consistent'` "
        "or a thematic break made of `-`, `_` or `*` (with optional spaces), "
        "such as `'***'` or `'- - -'`"
    )


def configure_strikethrough_marker(value) -> Optional[str]:
    return parse_marker(value, "strikethrough-marker", STRIKETHROUGH_MARKERS)


def _source_slice(node: Node, file: SourceFile) -> Optional[str]:
    start = point_start(node)
    end = point_end(node)
    if start is None or end is None:
        return None

    first = file.to_index(start)
    last = file.to_index(end)
    if first is None or last is None:
        return None
    return str(file)[first:last]


def rule_style(
    tree: Node, file: SourceFile, preferred: Optional[str]
) -> Generator[LintIssue, None, None]:
    """
    Flag thematic breaks written differently from the preferred style.

    The whole break as written (`***`, `- - -`, ...) is compared. With
    `'consistent'` the first break sets the style.
    """
    tracker: ConsistencyTracker[str] = ConsistencyTracker(preferred)
    issues = []

    def visitor(node, index, parent):
        marker = _source_slice(node, file)
        if marker is None:
            return

        expected = tracker.check(marker)
        if expected is not None:
            issues.append(LintIssue(
                rule="rule-style",
                message=f"Rules should use `{expected}`",
                place=position(node),
            ))

    visit(tree, visitor, "thematicBreak")
    yield from issues


def strikethrough_marker(
    tree: Node, file: SourceFile, preferred: Optional[str]
) -> Generator[LintIssue, None, None]:
    """
    Flag strikethrough written with an unexpected number of tildes.

    Strikethrough is `~text~` or `~~text~~`. With `'consistent'` the first
    strikethrough sets the marker.
    """
    tracker: ConsistencyTracker[str] = ConsistencyTracker(preferred)
    issues = []

    def visitor(node, index, parent):
        text = _source_slice(node, file)
        if not text:
            return

        run = len(text) - len(text.lstrip("~"))
        # Not written with tildes (e.g. a generated or HTML strikethrough)
        if run not in (1, 2):
            return

        marker = "~" * run
        expected = tracker.check(marker)
        if expected is not None:
            issues.append(LintIssue(
                rule="strikethrough-marker",
                message=f"Unexpected strikethrough marker `{marker}`, expected `{expected}`",
                place=position(node),
            ))

    visit(tree, visitor, "delete")
    yield from issues
