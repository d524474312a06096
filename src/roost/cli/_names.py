"""``roost names`` and ``roost tree`` — list registered names.

Both read the catalog only. Neither resolves values or calls operations,
so inspecting a registry never triggers an operation's side effects.
"""

import argparse

from roost.cli._resolve import fail, load_or_exit
from roost.dispatch.entry import Child
from roost.dispatch.node import DispatchNode


def _descend(root: DispatchNode, path: str) -> DispatchNode:
    """Walk child entries along *path* without resolving anything else."""
    node = root
    cursor = root.path(path)
    while cursor.has_next():
        name = cursor.pop_next() or ""
        entry = node.entry(name)
        if not isinstance(entry, Child):
            fail(f"{name!r} is not a child node")
        node = entry.node
    return node


def run_names(args: argparse.Namespace) -> None:
    """Print ``KIND  NAME`` for every entry at one level, sorted by name."""
    registry = load_or_exit(args.app)
    node = _descend(registry, args.path) if args.path else registry

    rows: list[tuple[str, str]] = []
    for name in sorted(node.list_names()):
        entry = node.entry(name)
        if entry is not None:
            rows.append((entry.kind.value, name))

    if not rows:
        print("No names registered.")
        return

    width = max(len(kind) for kind, _ in rows)
    for kind, name in rows:
        print(f"{kind:<{width}}  {name}")


def _tree_lines(node: DispatchNode, depth: int, seen: set[int]) -> list[str]:
    lines: list[str] = []
    for name in sorted(node.list_names()):
        entry = node.entry(name)
        if entry is None:
            continue
        indent = "  " * depth
        if isinstance(entry, Child):
            lines.append(f"{indent}{name}{node.config.delimiter}")
            # Guard against a node registered beneath itself.
            if id(entry.node) in seen:
                lines.append(f"{indent}  ...")
                continue
            lines.extend(_tree_lines(entry.node, depth + 1, seen | {id(entry.node)}))
        else:
            lines.append(f"{indent}{name}  ({entry.kind.value})")
    return lines


def run_tree(args: argparse.Namespace) -> None:
    """Print every entry in the registry, children indented under parents."""
    registry = load_or_exit(args.app)

    lines = _tree_lines(registry, 0, {id(registry)})
    if not lines:
        print("No names registered.")
        return
    for line in lines:
        print(line)
