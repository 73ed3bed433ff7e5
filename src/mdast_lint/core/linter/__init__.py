"""Rule engine for Markdown syntax trees."""
from .engine import lint_file, lint_tree, run_rule, get_available_rules
from .models import LintIssue, LintReport, LintRule, RuleConfigError, Severity

__all__ = [
    "lint_file",
    "lint_tree",
    "run_rule",
    "get_available_rules",
    "LintIssue",
    "LintReport",
    "LintRule",
    "RuleConfigError",
    "Severity",
]
