"""Link, image and reference linting rules."""
from typing import Generator, Optional

from ...position import SourceFile, point_end, point_start, position
from ...tree import Node, Position, to_string
from ...visit import visit
from ..consistency import ConsistencyTracker
from ..models import LintIssue
from .options import parse_marker

# Closing title marker -> opening title marker
TITLE_MARKERS = {
    '"': '"',
    "'": "'",
    ")": "(",
}

TITLE_STYLES = {
    '"': '"',
    "'": "'",
    "()": ")",
    "(": ")",
    ")": ")",
}


def configure_link_title_style(value) -> Optional[str]:
    return parse_marker(value, "link-title-style", TITLE_STYLES, shown=['"', "'", "()"])


def _find_title(node: Node, file: SourceFile) -> Optional[tuple[int, int, str]]:
    """
    Locate the title of a link, image or definition in the source.

    Scans back from the end of the node (skipping the closing paren of a
    link or image, then whitespace) to a closing title marker, then back
    to its opening marker. The opening marker must come after the node's
    last child (or its start) and be preceded by whitespace.

    Returns:
        (opening index, closing index, closing marker) or None when the
        node has no title
    """
    start = point_start(node)
    end = point_end(node)
    if start is None or end is None:
        return None

    node_start = file.to_index(start)
    node_end = file.to_index(end)
    if node_start is None or node_end is None:
        return None

    contents = str(file)
    last = node_end - 1
    if node.type != "definition":
        last -= 1

    tail = node.children[-1] if node.children else None
    tail_end = point_end(tail)
    begin = file.to_index(tail_end) if tail_end else None
    if begin is None:
        begin = node_start

    final = None
    while 0 < last < len(contents):
        final = contents[last]
        if final.isspace():
            last -= 1
        else:
            break

    if final not in TITLE_MARKERS:
        return None

    first = contents.rfind(TITLE_MARKERS[final], 0, last)
    if first <= begin or not contents[first - 1].isspace():
        return None

    return first, last, final


def link_title_style(
    tree: Node, file: SourceFile, preferred: Optional[str]
) -> Generator[LintIssue, None, None]:
    """
    Flag link, image and definition titles using an unexpected quote.

    Titles can be quoted with `"`, `'` or `()`. With `'consistent'` the
    first title found sets the style for the rest of the document.
    """
    tracker: ConsistencyTracker[str] = ConsistencyTracker(preferred)
    issues = []

    def visitor(node, index, parent):
        found = _find_title(node, file)
        if found is None:
            return

        first, last, final = found
        expected = tracker.check(final)
        if expected is None:
            return

        start = file.to_point(first)
        end = file.to_point(last + 1)
        place = Position(start, end) if start and end else position(node)

        issues.append(LintIssue(
            rule="link-title-style",
            message=f"Titles should use `{'()' if expected == ')' else expected}` as a quote",
            place=place,
        ))

    visit(tree, visitor, {"link", "image", "definition"})
    yield from issues


def no_empty_url(tree: Node, file, options=None) -> Generator[LintIssue, None, None]:
    """Flag links, images and definitions without a URL."""
    issues = []

    def visitor(node, index, parent):
        place = position(node)
        if place is not None and not node.url:
            issues.append(LintIssue(
                rule="no-empty-url",
                message=f"Don’t use {node.type}s without URL",
                place=place,
            ))

    visit(tree, visitor, {"definition", "image", "link"})
    yield from issues


def no_literal_urls(tree: Node, file, options=None) -> Generator[LintIssue, None, None]:
    """
    Flag URLs written as plain text instead of `<autolinks>`.

    A link is literal when its text spans the whole node (no brackets or
    parens around it) and equals its URL, optionally with `mailto:`.
    """
    issues = []

    def visitor(node, index, parent):
        if not node.children:
            return

        start = point_start(node)
        end = point_end(node)
        head_start = point_start(node.children[0])
        tail_end = point_end(node.children[-1])

        if start is None or end is None or head_start is None or tail_end is None:
            return

        value = to_string(node)
        if (
            end.column == tail_end.column
            and start.column == head_start.column
            and (node.url == value or node.url == f"mailto:{value}")
        ):
            issues.append(LintIssue(
                rule="no-literal-urls",
                message="Don’t use literal URLs without angle brackets",
                place=position(node),
            ))

    visit(tree, visitor, "link")
    yield from issues


def no_reference_like_url(tree: Node, file, options=None) -> Generator[LintIssue, None, None]:
    """
    Flag links and images whose URL is a defined identifier.

    `[text](alpha)` next to a `[alpha]: <url>` definition was most likely
    meant to be the reference `[text][alpha]`.
    """
    identifiers: set[str] = set()

    def collect(node, index, parent):
        if node.identifier is not None:
            identifiers.add(node.identifier.lower())

    visit(tree, collect, "definition")

    issues = []

    def visitor(node, index, parent):
        place = position(node)
        if place is not None and node.url is not None and node.url.lower() in identifiers:
            issues.append(LintIssue(
                rule="no-reference-like-url",
                message=(
                    f"Did you mean to use `[{node.url}]` instead of "
                    f"`({node.url})`, a reference?"
                ),
                place=place,
            ))

    visit(tree, visitor, {"image", "link"})
    yield from issues


def no_shortcut_reference_link(tree: Node, file, options=None) -> Generator[LintIssue, None, None]:
    """Flag shortcut reference links (`[foo]` instead of `[foo][]`)."""
    issues = []

    def visitor(node, index, parent):
        place = position(node)
        if place is not None and node.reference_type == "shortcut":
            issues.append(LintIssue(
                rule="no-shortcut-reference-link",
                message="Use the trailing `[]` on reference links",
                place=place,
            ))

    visit(tree, visitor, "linkReference")
    yield from issues
