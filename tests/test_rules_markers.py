"""Tests for marker consistency and file-level rules."""
import pytest

from mdast_lint.core.linter import RuleConfigError, run_rule
from mdast_lint.core.linter.rules import RULES

from builders import Doc, without_offsets


def _run(name, doc, tree, options=None):
    return run_rule(RULES[name], tree, doc.file, options)


# ---------------------------------------------------------------------------
# rule-style
# ---------------------------------------------------------------------------


RULES_SOURCE = "***\n\n---\n\n***\n"


def _rules_tree(doc):
    return doc.root(
        doc.node("thematicBreak", "***"),
        doc.node("thematicBreak", "---"),
        doc.node("thematicBreak", "***", nth=1),
    )


def test_consistent_rule_style():
    doc = Doc(RULES_SOURCE)
    issues = _run("rule-style", doc, _rules_tree(doc))

    assert [i.message for i in issues] == ["Rules should use `***`"]
    assert issues[0].line == 3


def test_configured_rule_style():
    doc = Doc(RULES_SOURCE)
    issues = _run("rule-style", doc, _rules_tree(doc), "* * *")
    assert [i.line for i in issues] == [1, 3, 5]
    assert issues[0].message == "Rules should use `* * *`"


def test_invalid_rule_style_fails():
    doc = Doc(RULES_SOURCE)
    with pytest.raises(RuleConfigError, match="Incorrect preferred rule style `abc`"):
        _run("rule-style", doc, _rules_tree(doc), "abc")


def test_rule_style_with_line_and_column_only():
    doc = Doc("***\n\n---\n")
    tree = without_offsets(doc.root(
        doc.node("thematicBreak", "***"),
        doc.node("thematicBreak", "---"),
    ))

    issues = _run("rule-style", doc, tree, "***")
    assert [i.line for i in issues] == [3]


def test_rule_style_after_astral_character():
    # Offsets count UTF-16 units, so the emoji shifts them by one
    doc = Doc("***\n\n\U0001F600\n\n***\n")
    tree = doc.root(
        doc.node("thematicBreak", "***"),
        doc.node("thematicBreak", "***", nth=1),
    )
    assert tree.children[1].position.start.offset == 9

    assert _run("rule-style", doc, tree) == []


# ---------------------------------------------------------------------------
# strikethrough-marker
# ---------------------------------------------------------------------------


STRIKE_SOURCE = "~a~ and ~~b~~\n"


def _strike_tree(doc):
    return doc.root(doc.node("paragraph", "~a~ and ~~b~~", children=[
        doc.node("delete", "~a~", children=[doc.text("a")]),
        doc.text(" and "),
        doc.node("delete", "~~b~~", children=[doc.text("b")]),
    ]))


def test_consistent_strikethrough():
    doc = Doc(STRIKE_SOURCE)
    issues = _run("strikethrough-marker", doc, _strike_tree(doc))

    assert [i.message for i in issues] == ["Unexpected strikethrough marker `~~`, expected `~`"]
    assert issues[0].column == 9


def test_configured_strikethrough():
    doc = Doc(STRIKE_SOURCE)
    issues = _run("strikethrough-marker", doc, _strike_tree(doc), "~~")
    assert [i.message for i in issues] == ["Unexpected strikethrough marker `~`, expected `~~`"]
    assert issues[0].column == 1


def test_invalid_strikethrough_marker_fails():
    doc = Doc(STRIKE_SOURCE)
    with pytest.raises(RuleConfigError, match="strikethrough-marker"):
        _run("strikethrough-marker", doc, _strike_tree(doc), "~~~")


def test_strikethrough_after_astral_character():
    doc = Doc("\U0001F600 ~a~ ~b~\n")
    tree = doc.root(doc.node("paragraph", "\U0001F600 ~a~ ~b~", children=[
        doc.node("delete", "~a~", children=[doc.text("a")]),
        doc.node("delete", "~b~", children=[doc.text("b")]),
    ]))

    issues = _run("strikethrough-marker", doc, tree, "~~")
    assert [i.column for i in issues] == [4, 8]


def test_strikethrough_with_line_and_column_only():
    doc = Doc(STRIKE_SOURCE)
    tree = without_offsets(_strike_tree(doc))

    issues = _run("strikethrough-marker", doc, tree)
    assert [i.column for i in issues] == [9]


# ---------------------------------------------------------------------------
# final-newline
# ---------------------------------------------------------------------------


def test_missing_final_newline():
    doc = Doc("# x")
    issues = _run("final-newline", doc, doc.root(doc.heading(1, "x")))

    assert [i.message for i in issues] == ["Missing newline character at end of file"]
    assert issues[0].place is None
    assert (issues[0].line, issues[0].column) == (1, 1)


@pytest.mark.parametrize("source", ["", "# x\n"])
def test_final_newline_present_or_empty(source):
    doc = Doc(source)
    assert _run("final-newline", doc, doc.root()) == []
