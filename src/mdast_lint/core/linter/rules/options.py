"""Option parsing shared by the rules.

Every parser runs once, before the tree is walked, and raises
RuleConfigError naming the bad value and the accepted alternatives.
"""
import dataclasses
import re
from typing import Any, Optional, TypeVar

from ..consistency import is_consistent
from ..models import RuleConfigError

R = TypeVar("R")


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def parse_record(cls: type[R], value: Any, rule: str) -> R:
    """
    Parse a record of boolean options into the dataclass `cls`.

    Keys may be given in camelCase (as in mdast tooling configs) or
    snake_case. Missing keys keep their defaults.
    """
    if value is None or value is True:
        return cls()

    if not isinstance(value, dict):
        raise RuleConfigError(
            f"Incorrect options `{value!r}` for `{rule}`: expected a mapping"
        )

    known = {}
    for f in dataclasses.fields(cls):
        known[f.name] = f.name
        known[_camel(f.name)] = f.name

    kwargs = {}
    for key, val in value.items():
        if key not in known:
            accepted = ", ".join(f"`{_camel(f.name)}`" for f in dataclasses.fields(cls))
            raise RuleConfigError(
                f"Unknown option `{key}` for `{rule}`: use {accepted}"
            )
        if not isinstance(val, bool):
            raise RuleConfigError(
                f"Incorrect value `{val!r}` for option `{key}` of `{rule}`: "
                "use `true` or `false`"
            )
        kwargs[known[key]] = val

    return cls(**kwargs)


def parse_marker(
    value: Any,
    rule: str,
    markers: dict[str, str],
    shown: Optional[list[str]] = None,
) -> Optional[str]:
    """
    Parse a preferred-marker option.

    Args:
        value: Raw option
        rule: Rule name for messages
        markers: Accepted spellings mapped to the canonical marker
        shown: Spellings to list in the failure message (default: all)

    Returns:
        The canonical marker, or None for `'consistent'`
    """
    if is_consistent(value) or value is True:
        return None

    if isinstance(value, str) and value in markers:
        return markers[value]

    accepted = ", ".join(f"`{m!r}`" for m in (shown or markers))
    raise RuleConfigError(
        f"Incorrect `{rule}` marker `{value}`: use either `'consistent'`, {accepted}"
    )


def compile_class(characters: str, rule: str) -> re.Pattern:
    """Build a one-character class matcher, failing on an invalid class."""
    if not isinstance(characters, str) or not characters:
        raise RuleConfigError(
            f"Incorrect character class `{characters!r}` for `{rule}`: "
            "expected a non-empty string such as `'!,.:;?'`"
        )
    try:
        return re.compile(f"[{characters}]")
    except re.error as e:
        raise RuleConfigError(
            f"Incorrect character class `{characters}` for `{rule}`: {e}"
        ) from e
