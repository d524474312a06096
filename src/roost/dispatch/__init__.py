"""Dispatch — path cursors, catalog entries, and the resolving node.

Paths are consumed one segment at a time, and each node decides whether
the segment ends the walk, descends, or hands the rest to an operation.
"""

from roost.dispatch.cursor import DelimitedPath, PathCursor
from roost.dispatch.entry import Child, Entry, EntryKind, Operation, Value
from roost.dispatch.node import DispatchNode

__all__ = [
    "Child",
    "DelimitedPath",
    "DispatchNode",
    "Entry",
    "EntryKind",
    "Operation",
    "PathCursor",
    "Value",
]
