"""Lint engine - validates rule settings and runs rules over a tree."""
import logging
from pathlib import Path
from typing import Any, Optional

from ..position import SourceFile
from ..tree import Node, load_tree
from .models import LintIssue, LintReport, LintRule, RuleConfigError, Severity
from .rules import RULES

logger = logging.getLogger(__name__)

_DISABLED = object()

NUMERIC_LEVELS = {0: _DISABLED, 1: Severity.WARNING, 2: Severity.ERROR}

NAMED_LEVELS = {
    "off": _DISABLED,
    "on": Severity.WARNING,
    "warn": Severity.WARNING,
    "error": Severity.ERROR,
}


def _level(value: Any) -> Any:
    """Look up a severity level; _DISABLED for off, None if not a level."""
    if isinstance(value, bool):
        return Severity.WARNING if value else _DISABLED
    if isinstance(value, int):
        return NUMERIC_LEVELS.get(value)
    if isinstance(value, str):
        return NAMED_LEVELS.get(value)
    return None


def parse_setting(setting: Any) -> tuple[Optional[Severity], Any]:
    """
    Split a rule setting into (severity, options).

    Settings follow the common remark-lint shape:
    - False / "off": rule disabled (severity None)
    - True / "on" / "warn" / "error": enabled with default options
    - [level, options]: level as above (or 0/1/2) plus options
    - anything else: the rule's options, at warning level

    Bare numbers are options, not levels, so `blockquote-indentation: 2`
    means two spaces.
    """
    if setting is None:
        return Severity.WARNING, None

    if isinstance(setting, (list, tuple)) and setting:
        level = _level(setting[0])
        if level is not None:
            options = setting[1] if len(setting) > 1 else None
            return (None if level is _DISABLED else level), options

    if isinstance(setting, (bool, str)):
        level = _level(setting)
        if level is _DISABLED:
            return None, None
        if level is not None:
            return level, None

    return Severity.WARNING, setting


def run_rule(rule: LintRule, tree: Node, file: SourceFile, options: Any = None) -> list[LintIssue]:
    """
    Run one rule and collect its issues in the order they were found.

    Options are parsed before the tree is touched.

    Raises:
        RuleConfigError: If the options are invalid (no issues are returned)
    """
    parsed = rule.configure(options)
    return list(rule.check(tree, file, parsed))


def lint_tree(
    tree: Node,
    file: SourceFile,
    settings: Optional[dict[str, Any]] = None,
    rules: Optional[list[str]] = None
) -> LintReport:
    """
    Lint a parsed Markdown tree.

    Args:
        tree: Root node of the document
        file: The source the tree was parsed from
        settings: Rule name -> setting (see parse_setting)
        rules: Specific rules to run (default: all)

    Returns:
        LintReport with issues grouped by rule, each rule's issues in
        discovery order. A rule with invalid options contributes a single
        fatal issue instead.
    """
    settings = settings or {}
    report = LintReport(source_path=file.path)

    # Determine which rules to run
    rules_to_run = rules if rules else list(RULES.keys())

    for rule_name in rules_to_run:
        if rule_name not in RULES:
            logger.warning(f"Unknown rule: {rule_name}")
            continue

        severity, options = parse_setting(settings.get(rule_name))
        if severity is None:
            logger.debug(f"Rule {rule_name} is off")
            continue

        try:
            issues = run_rule(RULES[rule_name], tree, file, options)
        except RuleConfigError as e:
            logger.warning(f"Rule {rule_name} misconfigured: {e}")
            report.add_issue(LintIssue(
                rule=rule_name,
                message=str(e),
                severity=Severity.ERROR,
                fatal=True,
            ))
            continue
        except Exception as e:
            logger.error(f"Rule {rule_name} failed: {e}", exc_info=True)
            continue

        for issue in issues:
            issue.severity = severity
            report.add_issue(issue)

    logger.debug(f"Linted {file.path}: {report.total_issues} issues")
    return report


def lint_file(
    path: Path,
    tree_path: Optional[Path] = None,
    settings: Optional[dict[str, Any]] = None,
    rules: Optional[list[str]] = None
) -> LintReport:
    """
    Lint a Markdown file using its serialized tree.

    Args:
        path: Path to the .md file
        tree_path: Path to the tree (default: `<path>.json` next to it)
        settings: Rule name -> setting
        rules: Specific rules to run (default: all)

    Raises:
        TreeLoadError: If the tree cannot be read
        OSError: If the Markdown file cannot be read
    """
    content = path.read_text(encoding='utf-8')

    if tree_path is None:
        tree_path = path.with_name(path.name + ".json")

    tree = load_tree(tree_path)
    return lint_tree(tree, SourceFile(content, str(path)), settings=settings, rules=rules)


def get_available_rules() -> dict[str, str]:
    """
    Get list of available rules with descriptions.

    Returns:
        Dict mapping rule name to the first line of its docstring
    """
    return {name: rule.description for name, rule in RULES.items()}
