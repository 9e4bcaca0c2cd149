"""chunkbuf BufferAccumulator: opt-in profiling for string buffers.

This module provides accumulated metrics across buffer finalization:
- Number of get() calls
- Total characters produced
- Chunks used to produce them
- Merges and limit truncations

Zero overhead when disabled (get_buffer_accumulator() returns None).

Example:
    from chunkbuf import StrBuf
    from chunkbuf.profiling import profiled_buffers

    with profiled_buffers() as metrics:
        buf = StrBuf()
        buf.append("%d items", 3)
        buf.get()

    print(metrics.summary())
    # {"total_ms": 0.1, "finalize_calls": 1, "output_length": 7, ...}

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any


@dataclass
class BufferAccumulator:
    """Accumulated metrics for buffers finalized in a profiled context.

    Attributes:
        start_time: Profiling start timestamp.
        finalize_calls: Number of get() calls recorded.
        output_length: Total characters returned by get().
        chunk_count: Total chunks finalized.
        merge_calls: Number of merge() calls recorded.
        limit_hits: Number of appends that hit max_length or the target capacity.

    """

    start_time: float = field(default_factory=perf_counter)
    finalize_calls: int = 0
    output_length: int = 0
    chunk_count: int = 0
    merge_calls: int = 0
    limit_hits: int = 0

    def record_finalize(self, output_length: int, chunk_count: int) -> None:
        """Record a get() call.

        Args:
            output_length: Length of the returned string.
            chunk_count: Number of chunks that were joined.

        """
        self.finalize_calls += 1
        self.output_length += output_length
        self.chunk_count += chunk_count

    def record_merge(self) -> None:
        self.merge_calls += 1

    def record_limit(self) -> None:
        self.limit_hits += 1

    @property
    def total_duration_ms(self) -> float:
        """Total profiling duration in milliseconds."""
        return (perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        """Get summary of buffer metrics.

        Returns:
            Dict with total_ms, finalize_calls, output_length, chunk_count,
            merge_calls, limit_hits.

        """
        return {
            "total_ms": round(self.total_duration_ms, 2),
            "finalize_calls": self.finalize_calls,
            "output_length": self.output_length,
            "chunk_count": self.chunk_count,
            "merge_calls": self.merge_calls,
            "limit_hits": self.limit_hits,
        }


# Module-level ContextVar
_accumulator: ContextVar[BufferAccumulator | None] = ContextVar(
    "buffer_accumulator",
    default=None,
)


def get_buffer_accumulator() -> BufferAccumulator | None:
    """Get current accumulator (None if profiling disabled)."""
    return _accumulator.get()


@contextmanager
def profiled_buffers() -> Iterator[BufferAccumulator]:
    """Context manager for profiled buffer use.

    Creates a BufferAccumulator and makes it available via
    get_buffer_accumulator() for the duration of the with block.

    Yields:
        BufferAccumulator that will be populated as buffers are used.

    """
    acc = BufferAccumulator()
    token: Token[BufferAccumulator | None] = _accumulator.set(acc)
    try:
        yield acc
    finally:
        _accumulator.reset(token)
