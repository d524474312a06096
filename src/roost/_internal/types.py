"""Shared type aliases used across roost modules."""

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeAlias

if TYPE_CHECKING:
    from roost.dispatch.cursor import PathCursor

# Opaque payload handed through to operations untouched
Payload: TypeAlias = Any

# Operation — called with the residual cursor and the payload
OperationFunc: TypeAlias = Callable[["PathCursor", Any], Any]
