"""Roost exception hierarchy.

Shared across cursors, nodes, operations, and the CLI so every module
raises and catches the same types.

Every error carries a ``condition``: a short machine-readable code that
callers can forward over a wire without parsing the message.
"""


class RoostError(Exception):
    """Base for all roost-specific errors."""

    condition: str = ""

    def __init__(self, message: str = "", condition: str | None = None) -> None:
        super().__init__(message)
        if condition is not None:
            self.condition = condition


class ConfigurationError(RoostError):
    """Raised when a node, config, or cursor is set up with invalid values."""

    condition = "configuration-error"


class OperationError(RoostError):
    """A domain failure raised by an operation's own logic.

    The dispatch engine never raises this itself. It passes through every
    level of recursion unchanged, condition code included::

        def shutdown(cursor, payload):
            if cursor.pop_next() != "now":
                raise OperationError("shutdown requires 'now'", condition="refused")
    """


class DispatchError(RoostError):
    """Base for failures raised by the dispatch engine."""


class PathExhausted(DispatchError):  # noqa: N818 — reads as a state, like StopIteration
    """The path ran out before a terminal action was found."""

    condition = "path-exhausted"

    def __init__(self) -> None:
        super().__init__("Path ran out before a terminal action was found")


class NotFound(DispatchError):  # noqa: N818 — conventional name
    """The popped segment has no entry in this node's catalog."""

    condition = "not-found"

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Not found: {name!r}")


class ReservedName(DispatchError):  # noqa: N818 — conventional name
    """Registration used a name equal to one of the node's meta-symbols."""

    condition = "reserved-name"

    def __init__(self, name: str, reserved: tuple[str, ...] = ()) -> None:
        self.name = name
        self.reserved = reserved
        msg = f"Cannot add {name!r}: name is reserved"
        if reserved:
            msg = f"{msg} (meta-symbols: {', '.join(repr(s) for s in reserved)})"
        super().__init__(msg)


class DuplicateName(DispatchError):  # noqa: N818 — conventional name
    """Registration used a name already present in this node's catalog."""

    condition = "duplicate-name"

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Cannot add {name!r}: name is already assigned")


class OperationNotFound(DispatchError):  # noqa: N818 — conventional name
    """No callable accepting ``(cursor, payload)`` could be bound for a name."""

    condition = "operation-not-found"

    def __init__(self, operation_name: str, reason: str = "") -> None:
        self.operation_name = operation_name
        self.reason = reason
        msg = f"Operation not found: {operation_name!r}"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)


class InvocationError(DispatchError):
    """A structural failure while invoking a bound operation.

    Distinct from ``OperationError``: this means the engine could not run
    the operation at all, not that the operation refused.
    """

    condition = "invocation-error"

    def __init__(self, name: str, details: str) -> None:
        self.name = name
        self.details = details
        super().__init__(f"Cannot invoke {name!r}: {details}")
