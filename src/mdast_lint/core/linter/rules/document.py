"""File-level rules."""
from typing import Generator

from ...position import SourceFile
from ...tree import Node
from ..models import LintIssue


def final_newline(tree: Node, file: SourceFile, options=None) -> Generator[LintIssue, None, None]:
    """
    Flag files that don't end in a newline.

    Empty files are fine. The issue has no position.
    """
    value = str(file)

    if value and not value.endswith("\n"):
        yield LintIssue(
            rule="final-newline",
            message="Missing newline character at end of file",
        )
