"""Roost CLI — resolve paths and inspect registries from the shell.

Entry point registered as ``roost`` in ``pyproject.toml``::

    [project.scripts]
    roost = "roost.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``roost`` command."""
    parser = argparse.ArgumentParser(
        prog="roost",
        description="Roost — a hierarchical, path-addressed dispatch registry.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log dispatch activity to stderr",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- roost get --------------------------------------------------------
    get_parser = subparsers.add_parser("get", help="Resolve a path and print the result")
    get_parser.add_argument("app", help="Import string (e.g. myapp:registry)")
    get_parser.add_argument("path", help="Path to resolve (e.g. zone1/temp)")
    get_parser.add_argument(
        "--payload",
        default=None,
        help="JSON payload handed to the operation the path ends in",
    )
    get_parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indentation (default: 2)",
    )

    # -- roost names ------------------------------------------------------
    names_parser = subparsers.add_parser("names", help="List the names at one level")
    names_parser.add_argument("app", help="Import string (e.g. myapp:registry)")
    names_parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Path to a child node (default: the root)",
    )

    # -- roost tree -------------------------------------------------------
    tree_parser = subparsers.add_parser("tree", help="Print the whole registry tree")
    tree_parser.add_argument("app", help="Import string (e.g. myapp:registry)")

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "get":
        from roost.cli._get import run_get

        run_get(args)
    elif args.command == "names":
        from roost.cli._names import run_names

        run_names(args)
    elif args.command == "tree":
        from roost.cli._names import run_tree

        run_tree(args)
