"""Markdown syntax tree (mdast) data model.

Trees are produced by an external parser and handed to the linter as JSON
(or YAML). Each node has:
- type: the node kind tag
- children: child nodes (container kinds only)
- position: start/end points, absent on generated nodes
- type-specific fields (depth, url, identifier, value, ...)

Node.from_dict()/to_dict() convert between the camelCase mdast shape and
the dataclasses below.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

import yaml

logger = logging.getLogger(__name__)


NodeType = Literal[
    "root",
    "paragraph",
    "heading",
    "thematicBreak",
    "blockquote",
    "list",
    "listItem",
    "table",
    "tableRow",
    "tableCell",
    "html",
    "code",
    "yaml",
    "definition",
    "footnoteDefinition",
    "text",
    "emphasis",
    "strong",
    "delete",
    "inlineCode",
    "break",
    "link",
    "image",
    "linkReference",
    "imageReference",
    "footnoteReference",
]

KNOWN_TYPES = frozenset(NodeType.__args__)

# Structural (non-inline) kinds that must be separated by a blank line
BLOCK_TYPES = frozenset({
    "paragraph",
    "heading",
    "thematicBreak",
    "blockquote",
    "list",
    "table",
    "html",
    "code",
    "yaml",
})

# mdast key -> Node attribute
_FIELDS = {
    "value": "value",
    "depth": "depth",
    "url": "url",
    "title": "title",
    "alt": "alt",
    "identifier": "identifier",
    "label": "label",
    "referenceType": "reference_type",
    "ordered": "ordered",
    "start": "start",
    "spread": "spread",
    "checked": "checked",
    "lang": "lang",
    "meta": "meta",
}


class TreeLoadError(Exception):
    """Raised when a serialized tree cannot be read."""


@dataclass(frozen=True)
class Point:
    """A place in the source: 1-based line/column, 0-based offset."""
    line: int
    column: int
    offset: int | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"line": self.line, "column": self.column}
        if self.offset is not None:
            data["offset"] = self.offset
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Point | None:
        """Return None when line or column is missing."""
        if not isinstance(data, dict):
            return None
        line = data.get("line")
        column = data.get("column")
        if not isinstance(line, int) or not isinstance(column, int):
            return None
        offset = data.get("offset")
        return cls(line=line, column=column, offset=offset if isinstance(offset, int) else None)


@dataclass(frozen=True)
class Position:
    """Start and end points of a node."""
    start: Point
    end: Point

    def to_dict(self) -> dict[str, Any]:
        return {"start": self.start.to_dict(), "end": self.end.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Position | None:
        if not isinstance(data, dict):
            return None
        start = Point.from_dict(data.get("start"))
        end = Point.from_dict(data.get("end"))
        if start is None or end is None:
            return None
        return cls(start=start, end=end)


@dataclass
class Node:
    """One element of the document tree."""
    type: str
    children: list[Node] | None = None
    position: Position | None = None

    value: str | None = None
    depth: int | None = None
    url: str | None = None
    title: str | None = None
    alt: str | None = None
    identifier: str | None = None
    label: str | None = None
    reference_type: str | None = None
    ordered: bool | None = None
    start: int | None = None
    spread: bool | None = None
    checked: bool | None = None
    lang: str | None = None
    meta: str | None = None

    # Fields this model does not name (extensions, data, ...)
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert back to the mdast JSON shape."""
        data: dict[str, Any] = {"type": self.type}
        for key, attr in _FIELDS.items():
            val = getattr(self, attr)
            if val is not None:
                data[key] = val
        data.update(self.extra)
        if self.children is not None:
            data["children"] = [child.to_dict() for child in self.children]
        if self.position is not None:
            data["position"] = self.position.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Node:
        """Create from an mdast dict. Raises TreeLoadError on a missing type."""
        if not isinstance(data, dict) or not isinstance(data.get("type"), str):
            raise TreeLoadError(f"Not a node (missing 'type'): {data!r:.80}")

        node_type = data["type"]
        if node_type not in KNOWN_TYPES:
            logger.debug(f"Unknown node type '{node_type}', keeping as-is")

        kwargs: dict[str, Any] = {}
        extra: dict[str, Any] = {}
        for key, val in data.items():
            if key in ("type", "children", "position"):
                continue
            if key in _FIELDS:
                kwargs[_FIELDS[key]] = val
            else:
                extra[key] = val

        children = None
        if "children" in data:
            raw_children = data["children"]
            if not isinstance(raw_children, list):
                raise TreeLoadError(f"'children' of {node_type} is not a list")
            children = [cls.from_dict(child) for child in raw_children]

        return cls(
            type=node_type,
            children=children,
            position=Position.from_dict(data.get("position")),
            extra=extra,
            **kwargs,
        )


def to_string(node: Node | None) -> str:
    """
    Get the flattened text content of a node.

    Uses `value` when present, `alt` for images, and otherwise the
    concatenated text of all children. Markup itself contributes nothing.
    """
    if node is None:
        return ""
    if node.value is not None:
        return node.value
    if node.alt is not None:
        return node.alt
    if node.children:
        return "".join(to_string(child) for child in node.children)
    return ""


def load_tree(path: Path) -> Node:
    """
    Load a serialized tree from a .json, .yaml or .yml file.

    Raises:
        TreeLoadError: If the file is missing, unparsable or not a tree
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise TreeLoadError(f"Cannot read tree {path}: {e}") from e

    try:
        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise TreeLoadError(f"Cannot parse tree {path}: {e}") from e

    tree = Node.from_dict(data)
    logger.debug(f"Loaded {tree.type} tree from {path}")
    return tree
