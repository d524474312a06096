"""Roost — a hierarchical, path-addressed dispatch registry.

Expose a tree of values and operations under slash-delimited names, then
resolve paths against it. Two reserved segments (``*`` and ``?`` by
default) turn any level into an introspection point.

Basic usage::

    from roost import DispatchNode

    registry = DispatchNode()
    ports = registry.child("ports")
    ports.add_value("count", 2)

    @ports.operation("bitrate")
    def bitrate(cursor, payload):
        port = cursor.pop_next()
        return rates[port]

    registry.get("ports/count")          # 2
    registry.get("ports/bitrate/COM1")   # rates["COM1"]
    registry.get("ports/*")              # {"count": 2, ...}
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "DelimitedPath",
    "DispatchConfig",
    "DispatchError",
    "DispatchNode",
    "DuplicateName",
    "EntryKind",
    "InvocationError",
    "NotFound",
    "OperationError",
    "OperationNotFound",
    "PathCursor",
    "PathExhausted",
    "ReservedName",
    "RoostError",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import roost`` fast while providing a clean top-level API.
    """
    if name == "DispatchNode":
        from roost.dispatch.node import DispatchNode

        return DispatchNode

    if name in ("DelimitedPath", "PathCursor"):
        from roost.dispatch import cursor as _cursor

        return getattr(_cursor, name)

    if name == "EntryKind":
        from roost.dispatch.entry import EntryKind

        return EntryKind

    if name == "DispatchConfig":
        from roost.config import DispatchConfig

        return DispatchConfig

    if name in (
        "ConfigurationError",
        "DispatchError",
        "DuplicateName",
        "InvocationError",
        "NotFound",
        "OperationError",
        "OperationNotFound",
        "PathExhausted",
        "ReservedName",
        "RoostError",
    ):
        from roost import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
