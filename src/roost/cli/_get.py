"""``roost get`` — resolve one path and print the result as JSON."""

import argparse
import json
import logging

from roost.cli._resolve import fail, load_or_exit
from roost.errors import RoostError

logger = logging.getLogger("roost.cli")


def run_get(args: argparse.Namespace) -> None:
    """Resolve ``args.path`` against the registry and print it.

    Values JSON cannot encode are printed through ``str()``. Dispatch
    errors print their message and exit with status 1.
    """
    registry = load_or_exit(args.app)

    payload = None
    if args.payload is not None:
        try:
            payload = json.loads(args.payload)
        except json.JSONDecodeError as exc:
            fail(f"--payload is not valid JSON: {exc}", exc)

    logger.debug("Resolving %r against %s", args.path, args.app)
    try:
        result = registry.get(args.path, payload)
    except RoostError as exc:
        fail(f"{exc} [{exc.condition}]" if exc.condition else str(exc), exc)

    print(json.dumps(result, indent=args.indent, default=str, sort_keys=True))
