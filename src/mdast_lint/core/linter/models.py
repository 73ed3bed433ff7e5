"""Data models for the linter."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterator, Optional, Union

from ..position import stringify_position
from ..tree import Point, Position

Place = Union[Position, Point, None]


class Severity(Enum):
    """Severity levels for lint issues."""
    WARNING = "warning"       # Style violation
    ERROR = "error"           # Rule set to error, or a fatal config failure


class RuleConfigError(Exception):
    """Raised by a rule's option parser when its configuration is invalid."""


@dataclass
class LintIssue:
    """A single lint issue found in the document."""
    rule: str
    message: str
    place: Place = None
    severity: Severity = Severity.WARNING
    fatal: bool = False

    @property
    def start(self) -> Optional[Point]:
        if isinstance(self.place, Position):
            return self.place.start
        return self.place

    @property
    def end(self) -> Optional[Point]:
        if isinstance(self.place, Position):
            return self.place.end
        return None

    # File-level issues are reported at the start of the file
    @property
    def line(self) -> int:
        return self.start.line if self.start else 1

    @property
    def column(self) -> int:
        return self.start.column if self.start else 1

    @property
    def end_line(self) -> Optional[int]:
        return self.end.line if self.end else None

    @property
    def end_column(self) -> Optional[int]:
        return self.end.column if self.end else None

    @property
    def location(self) -> str:
        """Human-readable location, e.g. `3:1-3:9`."""
        return stringify_position(self.place) or "1:1"

    def to_dict(self) -> dict:
        return {
            "rule": self.rule,
            "reason": self.message,
            "severity": self.severity.value,
            "fatal": self.fatal,
            "start_line": self.line,
            "start_column": self.column,
            "end_line": self.end_line,
            "end_column": self.end_column,
        }


@dataclass
class LintReport:
    """Complete lint report for a document."""
    source_path: str
    total_issues: int = 0
    warnings: int = 0
    errors: int = 0
    fatal: int = 0
    issues: list[LintIssue] = field(default_factory=list)

    def add_issue(self, issue: LintIssue) -> None:
        """Add an issue to the report and update counts."""
        self.issues.append(issue)
        self.total_issues += 1

        if issue.fatal:
            self.fatal += 1

        if issue.severity == Severity.WARNING:
            self.warnings += 1
        elif issue.severity == Severity.ERROR:
            self.errors += 1

    def sorted_issues(self) -> list[LintIssue]:
        """
        Issues ordered by position for display.

        The sort is stable, so issues at the same place keep the order
        they were found in. File-level issues come first.
        """
        return sorted(self.issues, key=lambda i: (i.place is not None, i.line, i.column))

    def by_rule(self) -> dict[str, list[LintIssue]]:
        grouped: dict[str, list[LintIssue]] = {}
        for issue in self.issues:
            grouped.setdefault(issue.rule, []).append(issue)
        return grouped

    def to_dict(self) -> dict:
        return {
            "source_path": self.source_path,
            "total_issues": self.total_issues,
            "warnings": self.warnings,
            "errors": self.errors,
            "fatal": self.fatal,
            "issues": [i.to_dict() for i in self.issues],
        }


def no_options(value: Any) -> None:
    """Option parser for rules that take no options."""
    return None


@dataclass
class LintRule:
    """
    A registered rule.

    `configure` turns the raw setting into the rule's options and raises
    RuleConfigError when it is invalid; it always runs before `check`.
    """
    name: str
    check: Callable[..., Iterator[LintIssue]]
    configure: Callable[[Any], Any] = no_options

    @property
    def description(self) -> str:
        return (self.check.__doc__ or "No description").strip().split('\n')[0]
