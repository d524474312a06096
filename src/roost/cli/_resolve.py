"""Registry loading — turn ``"module:attribute"`` into a DispatchNode.

Every ``roost`` subcommand starts here. ``load_or_exit`` is the entry the
subcommands use; it turns lookup failures into ``Error: ...`` on stderr
and exit status 1.
"""

import importlib
import sys
from typing import Any, NoReturn

from roost.dispatch.node import DispatchNode

DEFAULT_ATTRIBUTE = "registry"


def _as_node(obj: Any, import_string: str) -> DispatchNode:
    """Accept a node as is, or build one by calling a factory."""
    if isinstance(obj, DispatchNode):
        return obj
    if callable(obj):
        try:
            built = obj()
        except Exception as exc:
            msg = f"Factory {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc
        if isinstance(built, DispatchNode):
            return built
        obj = built
    msg = f"{import_string!r} resolved to {type(obj).__name__}, not a roost.DispatchNode"
    raise TypeError(msg)


def resolve_registry(import_string: str) -> DispatchNode:
    """Import *import_string* and return the DispatchNode it names.

    ``"pkg.mod:attr"`` names an attribute; ``"pkg.mod"`` alone means
    ``pkg.mod.registry``. A callable attribute that is not a node is
    called once with no arguments and must return a node.

    Raises ``ModuleNotFoundError``, ``AttributeError``, or ``TypeError``.
    """
    module_path, _, attr_name = import_string.partition(":")
    module = importlib.import_module(module_path)
    return _as_node(getattr(module, attr_name or DEFAULT_ATTRIBUTE), import_string)


def load_or_exit(import_string: str) -> DispatchNode:
    """Like ``resolve_registry`` but prints the error and exits with status 1."""
    try:
        return resolve_registry(import_string)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        fail(str(exc), exc)


def fail(message: str, cause: BaseException | None = None) -> NoReturn:
    print(f"Error: {message}", file=sys.stderr)
    raise SystemExit(1) from cause
