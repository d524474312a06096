"""Catalog entries — Value, Child, and Operation frozen dataclasses."""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar, TypeAlias

from roost._internal.types import OperationFunc

if TYPE_CHECKING:
    from roost.dispatch.node import DispatchNode


class EntryKind(Enum):
    """What a catalog entry resolves to."""

    VALUE = "value"
    CHILD = "child"
    OPERATION = "operation"


@dataclass(frozen=True, slots=True)
class Value:
    """An opaque value, returned verbatim when resolution stops here."""

    kind: ClassVar[EntryKind] = EntryKind.VALUE

    value: Any


@dataclass(frozen=True, slots=True)
class Child:
    """A nested dispatch scope. Resolution recurses into it."""

    kind: ClassVar[EntryKind] = EntryKind.CHILD

    node: "DispatchNode"


@dataclass(frozen=True, slots=True)
class Operation:
    """A bound handler, called as ``func(residual_cursor, payload)``.

    ``name`` is the operation's own name (the method or function name it
    was bound from), which can differ from the catalog name it serves.
    """

    kind: ClassVar[EntryKind] = EntryKind.OPERATION

    name: str
    func: OperationFunc


Entry: TypeAlias = Value | Child | Operation
