"""List-nesting stack for delimited output.

Tracks, per open list, how many elements have been emitted and which
separator goes between them. The first element of a list gets no
separator; every later one does.

Example:
    >>> stack = ListStack()
    >>> stack.push(", ")
    >>> stack.next() is None
    True
    >>> stack.next()
    ', '
    >>> stack.pop().count
    2

"""

from __future__ import annotations

from dataclasses import dataclass

from chunkbuf.config import DEFAULT_MAX_LIST_DEPTH
from chunkbuf.errors import ListNestingError


@dataclass(slots=True)
class ListFrame:
    """Bookkeeping for one open list.

    Attributes:
        separator: Inserted between successive elements
        count: Elements emitted so far

    """

    separator: str
    count: int = 0


class ListStack:
    """Bounded stack of ListFrame objects."""

    __slots__ = ("_frames", "max_depth")

    def __init__(self, max_depth: int = DEFAULT_MAX_LIST_DEPTH) -> None:
        self._frames: list[ListFrame] = []
        self.max_depth = max_depth

    def push(self, separator: str) -> ListFrame:
        """Open a new list.

        Raises:
            ListNestingError: If max_depth lists are already open
        """
        if len(self._frames) >= self.max_depth:
            raise ListNestingError("list nesting too deep", depth=len(self._frames))
        frame = ListFrame(separator)
        self._frames.append(frame)
        return frame

    def pop(self) -> ListFrame:
        """Close the innermost list.

        Raises:
            ListNestingError: If no list is open
        """
        if not self._frames:
            raise ListNestingError("list pop without matching push", depth=0)
        return self._frames.pop()

    def next(self) -> str | None:
        """Count a new element in the innermost list.

        Returns:
            The separator to emit before the element, or None for the
            first element of the list

        Raises:
            ListNestingError: If no list is open
        """
        if not self._frames:
            raise ListNestingError("list next outside of a list", depth=0)
        frame = self._frames[-1]
        frame.count += 1
        return frame.separator if frame.count > 1 else None

    @property
    def top(self) -> ListFrame | None:
        return self._frames[-1] if self._frames else None

    @property
    def depth(self) -> int:
        return len(self._frames)

    def clear(self) -> None:
        self._frames.clear()

    def __len__(self) -> int:
        return len(self._frames)
