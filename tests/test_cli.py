"""Tests for the command line interface."""
import json

import pytest

from mdast_lint.cli import main

from builders import Doc


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ("MDAST_LINT_CONFIG", "MDAST_LINT_FORMAT", "MDAST_LINT_COLOR", "NO_COLOR"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.chdir(tmp_path)


def _write_doc(tmp_path, source, tree, name="doc.md"):
    md = tmp_path / name
    md.write_text(source, encoding="utf-8")
    (tmp_path / f"{name}.json").write_text(json.dumps(tree.to_dict()), encoding="utf-8")
    return md


@pytest.fixture
def bad_doc(tmp_path):
    doc = Doc("# Hello:\n\n# Hello:")
    tree = doc.root(doc.heading(1, "Hello:"), doc.heading(1, "Hello:", nth=1))
    return _write_doc(tmp_path, doc.source, tree)


@pytest.fixture
def good_doc(tmp_path):
    doc = Doc("# Hello\n")
    return _write_doc(tmp_path, doc.source, doc.root(doc.heading(1, "Hello")), name="good.md")


def test_rules_lists_every_rule(capsys):
    assert main(["rules"]) == 0

    out = capsys.readouterr().out
    assert "no-heading-punctuation" in out
    assert "final-newline" in out


def test_lint_clean_file(good_doc, capsys):
    assert main(["lint", str(good_doc)]) == 0
    assert "no issues" in capsys.readouterr().out


def test_lint_reports_issues(bad_doc, capsys):
    assert main(["lint", str(bad_doc)]) == 1

    out = capsys.readouterr().out
    assert "no-duplicate-headings" in out
    assert "final-newline" in out


def test_lint_json_output(bad_doc, capsys):
    assert main(["lint", str(bad_doc), "-f", "json", "-r", "final-newline"]) == 1

    reports = json.loads(capsys.readouterr().out)
    assert len(reports) == 1
    assert reports[0]["source_path"] == str(bad_doc)
    assert [i["rule"] for i in reports[0]["issues"]] == ["final-newline"]


def test_lint_uses_config_file(tmp_path, bad_doc, capsys):
    (tmp_path / ".mdast-lint.yaml").write_text(
        "rules:\n"
        "  no-heading-punctuation: off\n"
        "  final-newline: error\n"
    )

    main(["lint", str(bad_doc), "-f", "json"])

    issues = json.loads(capsys.readouterr().out)[0]["issues"]
    rules = {i["rule"] for i in issues}
    assert "no-heading-punctuation" not in rules
    assert [i["severity"] for i in issues if i["rule"] == "final-newline"] == ["error"]


def test_lint_missing_tree(tmp_path, capsys):
    md = tmp_path / "orphan.md"
    md.write_text("# x\n")

    assert main(["lint", str(md)]) == 2
    assert "Cannot read tree" in capsys.readouterr().err


def test_tree_option_needs_single_file(bad_doc, good_doc, capsys):
    assert main(["lint", str(bad_doc), str(good_doc), "-t", "x.json"]) == 2


def test_check_valid_config(capsys):
    assert main(["check"]) == 0

    out = capsys.readouterr().out
    assert "(none, using defaults)" in out
    assert "no-html: warning" in out


def test_check_flags_invalid_settings(tmp_path, capsys):
    (tmp_path / ".mdast-lint.yaml").write_text(
        "rules:\n"
        "  blockquote-indentation: wide\n"
        "  no-html: off\n"
        "  made-up-rule: error\n"
    )

    assert main(["check"]) == 1

    out = capsys.readouterr().out
    assert "blockquote-indentation: INVALID" in out
    assert "no-html: off" in out
    assert "made-up-rule: unknown rule" in out


def test_bad_config_file(tmp_path, capsys):
    path = tmp_path / "bad.yaml"
    path.write_text("rules: [unclosed\n")

    assert main(["-c", str(path), "rules"]) == 2
    assert "Failed to parse YAML" in capsys.readouterr().err
