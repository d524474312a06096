"""Path cursors — the segment stream that dispatch consumes.

Dispatch code depends only on the ``PathCursor`` protocol. ``DelimitedPath``
is the default implementation: a string split on a single delimiter
character, with no escaping and no normalization.

Splitting is literal::

    "111/2222/33"  -> ["111", "2222", "33"]
    "a//b"         -> ["a", "", "b"]
    "/a/"          -> ["", "a", ""]

A segment can never contain the delimiter.
"""

from collections.abc import Iterable, Iterator
from typing import Protocol, runtime_checkable

from roost.errors import ConfigurationError

DEFAULT_DELIMITER = "/"


@runtime_checkable
class PathCursor(Protocol):
    """Ordered, mutable view of the path segments still to be resolved.

    A cursor belongs to the call that created it. Resolution consumes it
    from the front and may leave it partially consumed, so never reuse one
    across independent resolutions or share one between threads.
    """

    def has_next(self) -> bool: ...

    def pop_next(self) -> str | None: ...

    def append(self, other: "str | PathCursor | None") -> None: ...

    def render(self) -> str: ...

    def __iter__(self) -> Iterator[str]: ...


class DelimitedPath:
    """A ``PathCursor`` over a delimited string.

    Usage::

        path = DelimitedPath("ports/COM1/bitrate")
        path.pop_next()   # "ports"
        str(path)         # "/COM1/bitrate"
    """

    __slots__ = ("_delimiter", "_segments")

    def __init__(self, path: str | None = None, delimiter: str = DEFAULT_DELIMITER) -> None:
        if len(delimiter) != 1:
            msg = f"Delimiter must be a single character, got {delimiter!r}"
            raise ConfigurationError(msg)
        self._delimiter = delimiter
        self._segments: list[str] = []
        self.append(path)

    @classmethod
    def from_segments(
        cls,
        segments: Iterable[str],
        delimiter: str = DEFAULT_DELIMITER,
    ) -> "DelimitedPath":
        """Build a cursor from literal segments, without splitting them."""
        path = cls(delimiter=delimiter)
        path._segments.extend(segments)
        return path

    @property
    def delimiter(self) -> str:
        return self._delimiter

    def has_next(self) -> bool:
        return bool(self._segments)

    def pop_next(self) -> str | None:
        """Remove and return the head segment, or ``None`` if the path is empty."""
        if not self._segments:
            return None
        return self._segments.pop(0)

    def append(self, other: "str | PathCursor | None") -> None:
        """Append a delimited string or another cursor's remaining segments.

        Another cursor is read through iteration only, so it is left
        exactly as it was.
        """
        if other is None:
            return
        if isinstance(other, str):
            self._segments.extend(other.split(self._delimiter))
            return
        self._segments.extend(other)

    def copy(self) -> "DelimitedPath":
        return DelimitedPath.from_segments(self._segments, self._delimiter)

    def render(self) -> str:
        """Rebuild ``<delim><seg><delim><seg>...`` from the remaining segments.

        For diagnostics only; not guaranteed to match the original input.
        """
        return "".join(f"{self._delimiter}{segment}" for segment in self._segments)

    def __iter__(self) -> Iterator[str]:
        # Iterate over a snapshot so popping mid-iteration can't skip segments.
        return iter(tuple(self._segments))

    def __len__(self) -> int:
        return len(self._segments)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.render()!r})"
