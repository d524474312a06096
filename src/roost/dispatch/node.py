"""Dispatch node — a named catalog plus recursive path resolution.

A node maps names to entries. Resolving a path pops one segment, looks it
up, and then either returns a value, recurses into a child node with the
shorter cursor, or calls an operation with whatever is left of the cursor::

    root = DispatchNode()
    zone = root.child("zone1")
    zone.add_value("temp", 72)

    root.get("zone1/temp")    # 72
    root.get("*")             # {"zone1": {"temp": 72}}
    root.get("?")             # ["zone1"]

Operations are bound once, at registration. The node can be subclassed
(operations are methods on the subclass) or wrap another object::

    class Thermostat(DispatchNode):
        def __init__(self) -> None:
            super().__init__()
            self.add_operation("setpoint")

        def setpoint(self, cursor, payload):
            return cursor.pop_next()

    front = DispatchNode(target=controller)
    front.add_operation("reset", "reset_controller")

Enumeration hazard:
    ``get_all()`` resolves every name, and that includes calling every
    operation with an empty cursor and a ``None`` payload. Operations with
    side effects must check their residual path before acting.

Free-threading safety:
    - Entries are frozen dataclasses
    - The catalog is guarded by a per-node RLock, held only for the
      lookup or mutation itself, never across recursion or operation calls
    - Cursors are owned by the caller and never shared
"""

import logging
import threading
from collections.abc import Callable
from contextvars import ContextVar
from typing import Any

from roost._internal.invoke import bind_operation, call_operation, check_operation
from roost._internal.types import OperationFunc
from roost.config import DEFAULT_CONFIG, DispatchConfig
from roost.dispatch.cursor import DelimitedPath, PathCursor
from roost.dispatch.entry import Child, Entry, EntryKind, Operation, Value
from roost.errors import DuplicateName, NotFound, OperationNotFound, PathExhausted, ReservedName

logger = logging.getLogger("roost.dispatch")

# Ids of nodes whose get_all() is running in this thread or task.
_enumerating: ContextVar[frozenset[int]] = ContextVar("roost_enumerating", default=frozenset())


class DispatchNode:
    """A catalog of values, child nodes, and operations, addressed by path."""

    def __init__(
        self,
        target: Any = None,
        *,
        config: DispatchConfig | None = None,
    ) -> None:
        # Operations are looked up on the target; the node itself by default.
        self._target: Any = self if target is None else target
        self._config = config or DEFAULT_CONFIG
        self._catalog: dict[str, Entry] = {}
        self._lock = threading.RLock()

    @property
    def config(self) -> DispatchConfig:
        return self._config

    @property
    def target(self) -> Any:
        return self._target

    # -- Registration ------------------------------------------------------

    def _insert(self, name: str, entry: Entry) -> None:
        if name in self._config.meta_symbols:
            raise ReservedName(name, self._config.meta_symbols)
        with self._lock:
            if name in self._catalog:
                raise DuplicateName(name)
            self._catalog[name] = entry
        logger.debug("Registered %s %r", entry.kind.value, name)

    def add_value(self, name: str, value: Any) -> None:
        """Register a plain value under *name*.

        Raises ``ReservedName`` or ``DuplicateName``.
        """
        if isinstance(value, DispatchNode):
            msg = f"Use add_child() to register a node under {name!r}"
            raise TypeError(msg)
        if isinstance(value, (Value, Child, Operation)):
            msg = f"Register the wrapped object, not a {type(value).__name__} entry"
            raise TypeError(msg)
        self._insert(name, Value(value))

    def add_child(self, name: str, node: "DispatchNode") -> None:
        """Register a nested node under *name*.

        Raises ``ReservedName`` or ``DuplicateName``.
        """
        if not isinstance(node, DispatchNode):
            msg = f"add_child() expects a DispatchNode, got {type(node).__name__}"
            raise TypeError(msg)
        self._insert(name, Child(node))

    def child(
        self,
        name: str,
        *,
        target: Any = None,
        config: DispatchConfig | None = None,
    ) -> "DispatchNode":
        """Create a node under *name* and return it.

        The new node shares this node's config unless *config* is given.
        """
        node = DispatchNode(target, config=config or self._config)
        self.add_child(name, node)
        return node

    def add_operation(
        self,
        name: str,
        operation: str | OperationFunc | None = None,
    ) -> None:
        """Register an operation under *name*.

        *operation* is a callable, or the name of a callable on the target.
        Omitted, it defaults to *name*. The callable must accept
        ``(cursor, payload)``.

        Raises ``OperationNotFound``, ``ReservedName``, or ``DuplicateName``.
        """
        if operation is None:
            operation = name
        if isinstance(operation, str):
            func = bind_operation(self.target, operation)
            operation_name = operation
        else:
            operation_name = getattr(operation, "__name__", name)
            func = check_operation(operation, operation_name)
        if _is_node_api(func):
            raise OperationNotFound(operation_name, "DispatchNode's own methods cannot be operations")
        self._insert(name, Operation(operation_name, func))

    def operation(self, name: str | None = None) -> Callable[[OperationFunc], OperationFunc]:
        """Decorator form of ``add_operation()`` for plain functions.

        Usage::

            @node.operation("echo")
            def echo(cursor, payload):
                return cursor.render()
        """

        def decorator(func: OperationFunc) -> OperationFunc:
            self.add_operation(name or func.__name__, func)
            return func

        return decorator

    def remove(self, name: str) -> None:
        """Remove the entry under *name*, if there is one."""
        with self._lock:
            self._catalog.pop(name, None)

    # -- Introspection -----------------------------------------------------

    def has_name(self, name: str) -> bool:
        with self._lock:
            return name in self._catalog

    def list_names(self, kind: EntryKind | None = None) -> list[str]:
        """Return registered names, optionally only those of one *kind*.

        Order is unspecified.
        """
        with self._lock:
            if kind is None:
                return list(self._catalog)
            return [name for name, entry in self._catalog.items() if entry.kind is kind]

    def entry(self, name: str) -> Entry | None:
        """Look up the raw entry under *name*. Returns ``None`` if absent."""
        with self._lock:
            return self._catalog.get(name)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._catalog

    def __len__(self) -> int:
        with self._lock:
            return len(self._catalog)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} names={sorted(self.list_names())!r}>"

    # -- Resolution --------------------------------------------------------

    def path(self, expression: str | None = None) -> DelimitedPath:
        """Build a cursor for *expression* using this node's delimiter."""
        return DelimitedPath(expression, self._config.delimiter)

    def get(self, path: str | PathCursor, payload: Any = None) -> Any:
        """Resolve a path given as a string or a cursor."""
        cursor = self.path(path) if isinstance(path, str) else path
        return self.resolve(cursor, payload)

    def resolve(self, cursor: PathCursor, payload: Any = None) -> Any:
        """Consume *cursor* from the front and return what it addresses.

        Raises ``PathExhausted`` if the cursor is empty and ``NotFound`` if
        the head segment is not registered here. Errors raised by child
        nodes and operations propagate unchanged.
        """
        item = cursor.pop_next() if cursor.has_next() else None
        if item is None:
            raise PathExhausted()

        # Meta-symbols are terminal and never looked up.
        if item == self._config.get_all_symbol:
            return self.get_all()
        if item == self._config.get_params_symbol:
            return self.get_params()

        with self._lock:
            entry = self._catalog.get(item)
        if entry is None:
            raise NotFound(item)

        match entry:
            case Value(value=value):
                return value
            case Child(node=node):
                return node.resolve(cursor, payload)
            case Operation(func=func):
                logger.debug("Invoking %r with residual %r", item, cursor.render())
                return call_operation(item, func, cursor, payload)

    def get_all(self) -> dict[str, Any]:
        """Resolve every registered name and collect the results.

        Best-effort: names whose resolution raises, or resolves to
        ``None``, are left out. Child nodes contribute their own
        ``get_all()``. A child whose own ``get_all()`` is already running
        further up (a node registered beneath itself or an ancestor) is
        left out. Not atomic across names.
        """
        active = _enumerating.get() | {id(self)}
        token = _enumerating.set(active)
        try:
            return self._collect(active)
        finally:
            _enumerating.reset(token)

    def _collect(self, active: frozenset[int]) -> dict[str, Any]:
        results: dict[str, Any] = {}
        for name in self.list_names():
            if name == self._config.get_all_symbol:
                continue
            entry = self.entry(name)
            try:
                if isinstance(entry, Child):
                    if id(entry.node) in active:
                        logger.debug("Omitting %r from get-all: cycle back to an enclosing node", name)
                        continue
                    value = entry.node.get_all()
                else:
                    cursor = DelimitedPath.from_segments([name], self._config.delimiter)
                    value = self.resolve(cursor, None)
            except Exception as exc:
                logger.debug("Omitting %r from get-all: %s", name, exc)
                continue
            if value is None:
                continue
            results[name] = value
        return results

    def get_params(self) -> list[str]:
        """Return the names registered at this level.

        Unsorted and unfiltered. Subclasses may override for a narrower view.
        """
        return self.list_names()


def _is_node_api(func: Any) -> bool:
    """Return whether *func* is a node method inherited unchanged from DispatchNode.

    Methods a subclass adds or overrides are not part of the base API.
    """
    if not isinstance(getattr(func, "__self__", None), DispatchNode):
        return False
    base = DispatchNode.__dict__.get(getattr(func, "__name__", ""))
    return base is not None and getattr(func, "__func__", None) is base
