"""Tests for block structure and spacing rules."""
import pytest

from mdast_lint.core.linter import RuleConfigError, run_rule
from mdast_lint.core.linter.rules import RULES
from mdast_lint.core.tree import Point, Position

from builders import Doc


def _run(name, doc, tree, options=None):
    return run_rule(RULES[name], tree, doc.file, options)


def _paragraph(doc, text):
    return doc.node("paragraph", text, children=[doc.text(text)])


# ---------------------------------------------------------------------------
# no-missing-blank-lines
# ---------------------------------------------------------------------------


def test_block_directly_after_previous_is_flagged():
    doc = Doc("# Title\nParagraph.\n\nAnother.\n")
    tree = doc.root(
        doc.heading(1, "Title"),
        _paragraph(doc, "Paragraph."),
        _paragraph(doc, "Another."),
    )

    issues = _run("no-missing-blank-lines", doc, tree)

    assert len(issues) == 1
    assert issues[0].message == "Missing blank line before block node"
    assert (issues[0].line, issues[0].column) == (2, 1)


def test_gap_of_two_lines_is_fine():
    doc = Doc("# Title\n\nParagraph.\n\n\nAnother.\n")
    tree = doc.root(
        doc.heading(1, "Title"),
        _paragraph(doc, "Paragraph."),
        _paragraph(doc, "Another."),
    )
    assert _run("no-missing-blank-lines", doc, tree) == []


def test_inline_siblings_are_not_checked():
    # Text after a line break is not a block
    doc = Doc("One\nTwo\n")
    tree = doc.root(doc.node("paragraph", "One\nTwo", children=[
        doc.text("One"),
        doc.node("break", "\n"),
        doc.text("Two"),
    ]))
    assert _run("no-missing-blank-lines", doc, tree) == []


def _nested_list(doc):
    nested = doc.node("list", "- Nested", children=[
        doc.node("listItem", "- Nested", children=[_paragraph(doc, "Nested")]),
    ])
    return doc.root(doc.node("list", "- Item\n  - Nested", children=[
        doc.node("listItem", "- Item\n  - Nested", children=[
            _paragraph(doc, "Item"),
            nested,
        ]),
    ]))


def test_tight_list_content_is_flagged_by_default():
    doc = Doc("- Item\n  - Nested\n")
    issues = _run("no-missing-blank-lines", doc, _nested_list(doc))
    assert [(i.line, i.column) for i in issues] == [(2, 3)]


def test_except_tight_lists():
    doc = Doc("- Item\n  - Nested\n")
    tree = _nested_list(doc)

    assert _run("no-missing-blank-lines", doc, tree, {"exceptTightLists": True}) == []
    assert _run("no-missing-blank-lines", doc, tree, {"except_tight_lists": True}) == []
    assert len(_run("no-missing-blank-lines", doc, tree, {"exceptTightLists": False})) == 1


@pytest.mark.parametrize("options", [
    "yes",
    {"exceptTightLists": "yes"},
    {"exceptLists": True},
])
def test_invalid_blank_line_options(options):
    doc = Doc("- Item\n  - Nested\n")
    with pytest.raises(RuleConfigError):
        _run("no-missing-blank-lines", doc, _nested_list(doc), options)


# ---------------------------------------------------------------------------
# list-item-spacing
# ---------------------------------------------------------------------------


def _list(doc, *items):
    return doc.node(
        "list",
        doc.source.rstrip("\n"),
        children=[
            doc.node("listItem", raw, children=[_paragraph(doc, text)])
            for raw, text in items
        ],
    )


def test_tight_list_with_blank_line_is_flagged():
    doc = Doc("- a\n\n- b\n")
    tree = doc.root(_list(doc, ("- a", "a"), ("- b", "b")))

    issues = _run("list-item-spacing", doc, tree)

    assert [i.message for i in issues] == ["Extraneous new line after list item"]
    assert issues[0].place == Position(Point(1, 4, 3), Point(3, 1, 5))


def test_loose_list_without_blank_line_is_flagged():
    doc = Doc("- a\n  more\n- b\n")
    tree = doc.root(_list(doc, ("- a\n  more", "a\n  more"), ("- b", "b")))

    issues = _run("list-item-spacing", doc, tree)
    assert [i.message for i in issues] == ["Missing new line after list item"]


def test_tight_list_is_fine():
    doc = Doc("- a\n- b\n- c\n")
    tree = doc.root(_list(doc, ("- a", "a"), ("- b", "b"), ("- c", "c")))
    assert _run("list-item-spacing", doc, tree) == []


def test_check_blanks_ignores_multiline_items():
    doc = Doc("- a\n  more\n- b\n")
    tree = doc.root(_list(doc, ("- a\n  more", "a\n  more"), ("- b", "b")))
    assert _run("list-item-spacing", doc, tree, {"checkBlanks": True}) == []


# ---------------------------------------------------------------------------
# blockquote-indentation
# ---------------------------------------------------------------------------


QUOTES = "> one\n\n>   two\n\n> three\n"


def _quotes_tree(doc):
    return doc.root(*[
        doc.node("blockquote", raw, children=[_paragraph(doc, text)])
        for raw, text in [("> one", "one"), (">   two", "two"), ("> three", "three")]
    ])


def test_consistent_indentation():
    doc = Doc(QUOTES)
    issues = _run("blockquote-indentation", doc, _quotes_tree(doc))

    assert [i.message for i in issues] == ["Remove 2 spaces between block quote and content"]
    # Reported at the start of the content
    assert issues[0].place == Point(3, 5, 11)


def test_configured_indentation():
    doc = Doc(QUOTES)
    issues = _run("blockquote-indentation", doc, _quotes_tree(doc), 4)
    assert [i.message for i in issues] == [
        "Add 2 spaces between block quote and content",
        "Add 2 spaces between block quote and content",
    ]


def test_singular_space():
    doc = Doc(QUOTES)
    issues = _run("blockquote-indentation", doc, _quotes_tree(doc), 3)
    assert issues[0].message == "Add 1 space between block quote and content"
    assert issues[1].message == "Remove 1 space between block quote and content"


@pytest.mark.parametrize("options", ["wide", 0, -2, "2"])
def test_invalid_indentation(options):
    doc = Doc(QUOTES)
    with pytest.raises(RuleConfigError, match="blockquote-indentation"):
        _run("blockquote-indentation", doc, _quotes_tree(doc), options)


def test_empty_blockquote_is_skipped():
    doc = Doc(">\n")
    tree = doc.root(doc.node("blockquote", ">", children=[]))
    assert _run("blockquote-indentation", doc, tree) == []


# ---------------------------------------------------------------------------
# no-html
# ---------------------------------------------------------------------------


def test_html_is_flagged_but_comments_are_not():
    doc = Doc("<div>x</div>\n\n<!-- note -->\n")
    tree = doc.root(
        doc.node("html", "<div>x</div>", value="<div>x</div>"),
        doc.node("html", "<!-- note -->", value="<!-- note -->"),
    )

    issues = _run("no-html", doc, tree)
    assert [i.message for i in issues] == ["Do not use HTML in markdown"]
    assert issues[0].line == 1
