"""Chunk storage for StrBuf.

Text accumulates in a singly linked chain of fixed-capacity chunks instead of
one growing string. Appending never touches earlier chunks, so the cost of an
append is proportional to the appended text only; the chain is joined exactly
once, when the buffer is finalized.

Chunk kinds:
    EMBEDDED: The first chunk. Created with the chain and reused after every
        clear, so small outputs never link a second chunk.
    HEAP: Linked on demand when the current chunk fills up. Normally
        ``chunk_size`` characters, or exactly the size of a single append
        that would not fit in a fresh chunk.
    STRING: Holds one caller-supplied string as-is (zero-copy). Its capacity
        equals its length, so the following append always starts a new chunk.

Example:
    >>> chain = ChunkChain(chunk_size=4)
    >>> chain.append("abc")
    >>> chain.append("def")
    >>> chain.count
    2
    >>> chain.concatenate()
    'abcdef'

"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum, auto

from chunkbuf.config import DEFAULT_CHUNK_SIZE
from chunkbuf.utils.logger import get_logger

logger = get_logger(__name__)


class ChunkKind(Enum):
    """Storage variant of a chunk."""

    EMBEDDED = auto()
    HEAP = auto()
    STRING = auto()


@dataclass(slots=True, eq=False)
class Chunk:
    """One append-only segment of a chunk chain.

    Attributes:
        kind: Storage variant
        capacity: Maximum number of characters the chunk holds
        used: Number of characters written so far
        parts: Written text, in order. Never modified once written.
        owned: For STRING chunks, whether the buffer took ownership of the
            string (as opposed to borrowing it)
        next: Following chunk, None at the tail

    """

    kind: ChunkKind
    capacity: int
    used: int = 0
    parts: list[str] = field(default_factory=list)
    owned: bool = False
    next: Chunk | None = None

    @property
    def room(self) -> int:
        """Characters that still fit in this chunk."""
        return self.capacity - self.used

    def write(self, text: str) -> None:
        self.parts.append(text)
        self.used += len(text)

    def text(self) -> str:
        return "".join(self.parts)

    def __repr__(self) -> str:
        return f"Chunk({self.kind.name}, {self.used}/{self.capacity})"


class ChunkChain:
    """Chain of chunks with O(1) capacity tracking.

    ``remaining`` is the room left in ``current`` and is maintained on every
    write rather than recomputed, so appends never walk the chain.

    Invariants:
        - ``current`` is the only chunk whose ``next`` is None.
        - On a fresh or cleared chain, ``current is first``.
        - ``length`` is the sum of ``used`` over all chunks.

    """

    __slots__ = ("chunk_size", "first", "current", "remaining", "count", "length")

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        """Initialize a chain holding only the embedded chunk.

        Args:
            chunk_size: Capacity of the embedded chunk and of standard heap chunks
        """
        self.chunk_size = chunk_size
        self.first = Chunk(ChunkKind.EMBEDDED, chunk_size)
        self.current = self.first
        self.remaining = chunk_size
        self.count = 1
        self.length = 0

    def ensure_capacity(self, n: int) -> None:
        """Make sure the current chunk has room for ``n`` more characters.

        Links a new heap chunk when it does not. The new chunk has the
        standard capacity, or exactly ``n`` if ``n`` is larger.

        Args:
            n: Number of characters about to be written
        """
        if self.remaining < n:
            self._link(Chunk(ChunkKind.HEAP, max(self.chunk_size, n)))

    def append(self, text: str) -> None:
        """Copy ``text`` into the chain.

        Text that fits goes into the current chunk. Text longer than a fresh
        chunk gets a heap chunk of its own, sized to fit. Anything else fills
        the current chunk and continues in one new chunk.

        Args:
            text: Text to append
        """
        n = len(text)
        if not n:
            return
        if n <= self.remaining:
            self._write(text)
        elif n > self.chunk_size:
            self._link(Chunk(ChunkKind.HEAP, n))
            self._write(text)
        else:
            head = self.remaining
            if head:
                self._write(text[:head])
                text = text[head:]
            self.ensure_capacity(len(text))
            self._write(text)

    def adopt(self, text: str, *, owned: bool) -> Chunk:
        """Link ``text`` into the chain without copying it.

        Args:
            text: String to reference
            owned: Whether the chain takes ownership of the string

        Returns:
            The STRING chunk now referencing ``text``
        """
        n = len(text)
        chunk = Chunk(ChunkKind.STRING, n, n, [text], owned)
        self._link(chunk)
        self.length += n
        return chunk

    def splice(self, other: ChunkChain) -> None:
        """Move all content of ``other`` to the end of this chain.

        The embedded chunk of ``other`` stays with ``other``, so its text is
        copied. Every chunk after it is relinked without copying. ``other``
        is cleared afterwards.

        Args:
            other: Chain to drain into this one

        Raises:
            ValueError: If ``other`` is this chain
        """
        if other is self:
            raise ValueError("cannot splice a chunk chain into itself")

        first = other.first
        for part in first.parts:
            self.append(part)

        moved = first.next
        if moved is not None:
            self.current.next = moved
            self.current = other.current
            self.remaining = other.remaining
            self.count += other.count - 1
            self.length += other.length - first.used
            logger.debug("spliced %d chunks", other.count - 1)

        # Detach so clearing other leaves the moved chunks alone
        first.next = None
        other.clear()

    def concatenate(self) -> str:
        """Join every chunk into one string, in a single pass."""
        return "".join([part for chunk in self for part in chunk.parts])

    def clear(self) -> None:
        """Release every chunk after the embedded one and empty the chain.

        Owned strings are dropped; borrowed strings are left untouched.
        Clearing an empty chain is a no-op.
        """
        chunk = self.first.next
        while chunk is not None:
            following = chunk.next
            chunk.next = None
            if chunk.kind is not ChunkKind.STRING or chunk.owned:
                chunk.parts.clear()
            chunk = following

        first = self.first
        first.parts.clear()
        first.used = 0
        first.next = None
        self.current = first
        self.remaining = self.chunk_size
        self.count = 1
        self.length = 0

    def _link(self, chunk: Chunk) -> None:
        self.current.next = chunk
        self.current = chunk
        self.remaining = chunk.room
        self.count += 1
        logger.debug(
            "linked %s chunk #%d (capacity %d)", chunk.kind.name, self.count, chunk.capacity
        )

    def _write(self, text: str) -> None:
        self.current.write(text)
        self.remaining -= len(text)
        self.length += len(text)

    def __iter__(self) -> Iterator[Chunk]:
        chunk: Chunk | None = self.first
        while chunk is not None:
            yield chunk
            chunk = chunk.next

    def __len__(self) -> int:
        """Return total number of characters (not chunks)."""
        return self.length
