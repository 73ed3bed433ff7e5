"""Tree model, positions and traversal."""
from .tree import (
    BLOCK_TYPES,
    Node,
    Point,
    Position,
    TreeLoadError,
    load_tree,
    to_string,
)
from .position import (
    SourceFile,
    generated,
    point_end,
    point_start,
    position,
    stringify_position,
)
from .visit import CONTINUE, EXIT, SKIP, visit

__all__ = [
    "BLOCK_TYPES",
    "Node",
    "Point",
    "Position",
    "TreeLoadError",
    "load_tree",
    "to_string",
    "SourceFile",
    "generated",
    "point_end",
    "point_start",
    "position",
    "stringify_position",
    "CONTINUE",
    "EXIT",
    "SKIP",
    "visit",
]
