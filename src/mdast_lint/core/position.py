"""Position helpers and the source file wrapper.

Nodes without a position are "generated" (synthesized by a transform, not
traceable to the source). Every helper here returns None for them so rules
can skip such nodes instead of reporting a made-up location.
"""
from __future__ import annotations

from bisect import bisect_left, bisect_right
from dataclasses import dataclass, field

from .tree import Node, Point, Position


def point_start(node: Node | None) -> Point | None:
    """Get the start point of a node, or None if it has no position."""
    if node is None or node.position is None:
        return None
    return node.position.start


def point_end(node: Node | None) -> Point | None:
    """Get the end point of a node, or None if it has no position."""
    if node is None or node.position is None:
        return None
    return node.position.end


def position(node: Node | None) -> Position | None:
    """Get the full position of a node, or None if it has no position."""
    if node is None:
        return None
    return node.position


def generated(node: Node | None) -> bool:
    """Check whether a node was generated (has no source position)."""
    return position(node) is None


def stringify_position(place: Point | Position | None) -> str:
    """
    Render a point as `line:column` or a position as `l:c-l:c`.

    Used to embed an earlier occurrence in a message, e.g. `(3:1)`.
    """
    if place is None:
        return ""
    if isinstance(place, Position):
        return f"{stringify_position(place.start)}-{stringify_position(place.end)}"
    return f"{place.line or 1}:{place.column or 1}"


@dataclass
class SourceFile:
    """
    The Markdown source a tree was parsed from.

    Tree points count columns and offsets in UTF-16 code units, as remark
    records them. Rules slice `value` by string index, so points go
    through `to_index` and come back through `to_point`.
    """
    value: str
    path: str = "<string>"
    _line_starts: list[int] = field(init=False, repr=False)
    # UTF-16 offset of every string index; None when the two agree
    _units: list[int] | None = field(init=False, repr=False)

    def __post_init__(self):
        self._line_starts = [0]
        for index, char in enumerate(self.value):
            if char == "\n":
                self._line_starts.append(index + 1)

        self._units = None
        if any(ord(char) > 0xFFFF for char in self.value):
            units = [0]
            for char in self.value:
                units.append(units[-1] + (2 if ord(char) > 0xFFFF else 1))
            self._units = units

    def __str__(self) -> str:
        return self.value

    def _unit(self, index: int) -> int:
        return self._units[index] if self._units else index

    def _index(self, unit: int) -> int | None:
        if self._units is None:
            return unit if 0 <= unit <= len(self.value) else None
        index = bisect_left(self._units, unit)
        # Offsets inside a surrogate pair don't name a character
        if index >= len(self._units) or self._units[index] != unit:
            return None
        return index

    def to_point(self, index: int) -> Point | None:
        """Convert a string index to a point. None when out of range."""
        if index < 0 or index > len(self.value):
            return None
        line = bisect_right(self._line_starts, index)
        offset = self._unit(index)
        column = offset - self._unit(self._line_starts[line - 1]) + 1
        return Point(line=line, column=column, offset=offset)

    def to_index(self, point: Point) -> int | None:
        """
        Convert a tree point to a string index.

        The recorded offset is used when there is one, otherwise the
        line and column. None when the point is outside the source.
        """
        if point.offset is not None:
            return self._index(point.offset)

        if point.line < 1 or point.line > len(self._line_starts) or point.column < 1:
            return None
        line_start = self._line_starts[point.line - 1]
        index = self._index(self._unit(line_start) + point.column - 1)
        if index is None:
            return None

        # Columns past the end of the line
        if point.line < len(self._line_starts) and index >= self._line_starts[point.line]:
            return None
        return index
