"""Tests for chunkbuf.profiling, the buffer profiling API."""

from chunkbuf import StrBuf
from chunkbuf.profiling import (
    BufferAccumulator,
    get_buffer_accumulator,
    profiled_buffers,
)


class TestGetBufferAccumulator:
    def test_returns_none_when_disabled(self) -> None:
        assert get_buffer_accumulator() is None

    def test_returns_none_outside_context(self) -> None:
        with profiled_buffers():
            pass
        assert get_buffer_accumulator() is None


class TestProfiledBuffers:
    def test_yields_accumulator(self) -> None:
        with profiled_buffers() as acc:
            assert isinstance(acc, BufferAccumulator)
            assert get_buffer_accumulator() is acc

    def test_records_finalize(self) -> None:
        with profiled_buffers() as acc:
            buf = StrBuf()
            buf.append("%s", "hello")
            buf.get()
        assert acc.finalize_calls == 1
        assert acc.output_length == 5
        assert acc.chunk_count == 1

    def test_records_chunks_of_large_output(self) -> None:
        with profiled_buffers() as acc:
            buf = StrBuf()
            buf.append_owned("x" * 2000)
            buf.get()
        assert acc.chunk_count == 2

    def test_reset_is_not_a_finalize(self) -> None:
        with profiled_buffers() as acc:
            buf = StrBuf()
            buf.append_str("dropped")
            buf.reset()
        assert acc.finalize_calls == 0

    def test_records_merges_and_limits(self) -> None:
        with profiled_buffers() as acc:
            dst = StrBuf(max_length=3)
            src = StrBuf()
            src.append_str("abcdef")
            dst.merge(src)
            dst.append_str("more")
        assert acc.merge_calls == 1
        assert acc.limit_hits == 2

    def test_buffers_work_without_profiling(self) -> None:
        buf = StrBuf()
        buf.append_str("x")
        assert buf.get() == "x"


class TestSummary:
    def test_empty_summary(self) -> None:
        summary = BufferAccumulator().summary()
        assert summary["finalize_calls"] == 0
        assert summary["output_length"] == 0
        assert summary["chunk_count"] == 0
        assert summary["merge_calls"] == 0
        assert summary["limit_hits"] == 0

    def test_summary_after_use(self) -> None:
        with profiled_buffers() as acc:
            for word in ("one", "two"):
                buf = StrBuf()
                buf.append_str(word)
                buf.get()
        summary = acc.summary()
        assert summary["finalize_calls"] == 2
        assert summary["output_length"] == 6
        assert summary["total_ms"] >= 0
