"""CLI for mdast-lint.

Lints Markdown files given the syntax tree an external parser produced
for them (mdast JSON or YAML).
"""
import argparse
import json
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

from mdast_lint import __version__
from mdast_lint.config import Config, ConfigError
from mdast_lint.core.linter import LintReport, RuleConfigError, Severity, engine
from mdast_lint.core.tree import TreeLoadError

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        prog="mdast-lint",
        description="Check Markdown syntax trees against style rules"
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Show debug logging"
    )
    parser.add_argument(
        "-c", "--config", type=Path,
        help="Config file (default: .mdast-lint.yaml in the current directory)"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # lint command
    lint = subparsers.add_parser("lint", help="Lint Markdown files")
    lint.add_argument("paths", type=Path, nargs="+", help="Markdown files")
    lint.add_argument(
        "-t", "--tree", type=Path,
        help="Tree for a single file (default: <file>.json next to it)"
    )
    lint.add_argument(
        "-r", "--rule", dest="rules", action="append", metavar="NAME",
        help="Run only this rule (repeatable)"
    )
    lint.add_argument(
        "-f", "--format", choices=["text", "json"],
        help="Output format (default: text)"
    )

    # rules command
    subparsers.add_parser("rules", help="List available rules")

    # check command
    subparsers.add_parser("check", help="Show the effective configuration")

    args = parser.parse_args(argv)

    _setup_logging(args.verbose)

    try:
        config = Config.load(args.config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.command == "lint":
        return lint_command(args, config)
    elif args.command == "rules":
        return rules_command(config)
    elif args.command == "check":
        return check_command(config)
    return 2


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s"
    )


def lint_command(args, config: Config) -> int:
    """Execute the lint command. Returns 1 if any issue was found."""
    if args.tree and len(args.paths) > 1:
        print("Error: --tree can only be used with a single file", file=sys.stderr)
        return 2

    output_format = args.format or config.output_format
    console = Console(no_color=not config.color, highlight=False)

    reports: list[LintReport] = []
    failed = False

    for path in args.paths:
        logger.debug(f"Linting {path} (rules={args.rules or 'all'})")
        try:
            report = engine.lint_file(
                path.expanduser(),
                tree_path=args.tree,
                settings=config.rules,
                rules=args.rules
            )
        except (OSError, TreeLoadError) as e:
            print(f"Error: {e}", file=sys.stderr)
            failed = True
            continue

        reports.append(report)

    if output_format == "json":
        print(json.dumps([r.to_dict() for r in reports], indent=2))
    else:
        for report in reports:
            print_report(console, report)

    if failed:
        return 2
    return 1 if any(r.total_issues for r in reports) else 0


def print_report(console: Console, report: LintReport) -> None:
    """Print one report as a table of issues ordered by position."""
    if not report.issues:
        console.print(f"[green]{report.source_path}[/green]: no issues")
        return

    table = Table(title=report.source_path, title_justify="left", show_edge=False)
    table.add_column("Place", style="dim", no_wrap=True)
    table.add_column("Level", no_wrap=True)
    table.add_column("Message")
    table.add_column("Rule", style="cyan", no_wrap=True)

    for issue in report.sorted_issues():
        if issue.fatal:
            level = "[bold red]fatal[/bold red]"
        elif issue.severity == Severity.ERROR:
            level = "[red]error[/red]"
        else:
            level = "[yellow]warning[/yellow]"
        table.add_row(issue.location, level, issue.message, issue.rule)

    console.print(table)
    console.print(
        f"{report.total_issues} issues "
        f"({report.warnings} warnings, {report.errors} errors)"
    )
    console.print()


def rules_command(config: Config) -> int:
    """Execute the rules command."""
    console = Console(no_color=not config.color, highlight=False)

    table = Table(show_edge=False)
    table.add_column("Rule", style="cyan", no_wrap=True)
    table.add_column("Description")

    for name, description in engine.get_available_rules().items():
        table.add_row(name, description)

    console.print(table)
    return 0


def check_command(config: Config) -> int:
    """Execute the check command. Returns 1 if any rule setting is invalid."""
    print(f"mdast-lint v{__version__}")
    print("=" * 40)

    print("\nConfiguration:")
    print(f"  Config file: {config.config_path or '(none, using defaults)'}")
    print(f"  Output format: {config.output_format}")
    print(f"  Color: {config.color}")

    print("\nRules:")
    invalid = 0
    for name, rule in engine.RULES.items():
        severity, options = engine.parse_setting(config.rules.get(name))
        if severity is None:
            print(f"  {name}: off")
            continue
        try:
            rule.configure(options)
        except RuleConfigError as e:
            invalid += 1
            print(f"  {name}: INVALID ({e})")
            continue
        shown = "" if options is None else f" {options!r}"
        print(f"  {name}: {severity.value}{shown}")

    unknown = sorted(set(config.rules) - set(engine.RULES))
    for name in unknown:
        print(f"  {name}: unknown rule (ignored)")

    print("\n" + "=" * 40)
    if invalid:
        print(f"{invalid} rule settings are invalid")
        return 1
    print("Ready to lint!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
