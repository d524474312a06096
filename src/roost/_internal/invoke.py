"""Invoke helpers — bind operations and call them with structural checks.

Binding happens once, at registration. A name is looked up on the node's
target (attribute lookup on an object, key lookup on a mapping) and the
result must accept ``(cursor, payload)``. Anything else is an
``OperationNotFound`` raised before the entry ever lands in a catalog.

Calling goes through ``call_operation`` so the checks that separate a
structural failure from an operation's own error live in exactly one place.

Usage::

    from roost._internal.invoke import bind_operation, call_operation

    func = bind_operation(target, "status")
    result = call_operation("status", func, cursor, payload)
"""

import inspect
from collections.abc import Callable, Mapping
from typing import Any

from roost._internal.types import OperationFunc
from roost.errors import InvocationError, OperationNotFound


def accepts_cursor_and_payload(func: Callable[..., Any]) -> bool:
    """Return whether *func* can be called positionally with two arguments.

    Callables without an introspectable signature (some builtins, objects
    with an unusable ``__signature__``) are given the benefit of the doubt.
    Such a callable is not checked at registration, so if it rejects
    ``(cursor, payload)`` the ``TypeError`` surfaces from ``call_operation``
    as raised, not as ``InvocationError``.
    """
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return True
    try:
        signature.bind(None, None)
    except TypeError:
        return False
    return True


def bind_operation(target: Any, operation_name: str) -> OperationFunc:
    """Resolve *operation_name* against *target* into an operation callable.

    Raises ``OperationNotFound`` if the name is private, missing, not
    callable, or has the wrong shape.
    """
    if not operation_name or operation_name.startswith("_"):
        raise OperationNotFound(operation_name, "only public names can be bound")

    if isinstance(target, Mapping):
        func = target.get(operation_name)
    else:
        func = getattr(target, operation_name, None)

    if func is None:
        raise OperationNotFound(operation_name, f"{type(target).__name__} has no such callable")
    return check_operation(func, operation_name)


def check_operation(func: Any, operation_name: str) -> OperationFunc:
    """Validate that *func* is a callable of shape ``(cursor, payload)``."""
    if not callable(func):
        raise OperationNotFound(operation_name, f"{type(func).__name__} is not callable")
    if not accepts_cursor_and_payload(func):
        raise OperationNotFound(
            operation_name,
            "operations must accept (cursor, payload)",
        )
    return func


def call_operation(name: str, func: OperationFunc, cursor: Any, payload: Any) -> Any:
    """Call a bound operation and return its result.

    Exceptions raised inside the operation propagate unchanged. Only
    failures of the call itself become ``InvocationError``. A wrong-arity
    call is indistinguishable from a ``TypeError`` raised by the operation,
    so it propagates too; see ``accepts_cursor_and_payload``.
    """
    if not callable(func):
        raise InvocationError(name, "bound operation is no longer callable")

    result = func(cursor, payload)
    if inspect.isawaitable(result):
        if inspect.iscoroutine(result):
            result.close()
        raise InvocationError(name, "operation returned an awaitable; dispatch is synchronous")
    return result
