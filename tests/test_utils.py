"""Tests for chunkbuf utility modules."""

import logging


class TestGetLogger:
    """Tests for get_logger function."""

    def test_adds_prefix(self) -> None:
        from chunkbuf.utils.logger import get_logger

        assert get_logger("mymodule").name == "chunkbuf.mymodule"

    def test_keeps_existing_prefix(self) -> None:
        from chunkbuf.utils.logger import get_logger

        assert get_logger("chunkbuf.strbuf").name == "chunkbuf.strbuf"
        assert get_logger("chunkbuf").name == "chunkbuf"

    def test_similar_prefix_is_namespaced(self) -> None:
        from chunkbuf.utils.logger import get_logger

        assert get_logger("chunkbufx").name == "chunkbuf.chunkbufx"

    def test_returns_stdlib_logger(self) -> None:
        from chunkbuf.utils import get_logger

        assert isinstance(get_logger(__name__), logging.Logger)


class TestLibraryLogging:
    """The buffer logs chunk growth and truncation at debug level."""

    def test_chunk_growth_logged(self, caplog) -> None:
        from chunkbuf import BufferConfig, StrBuf

        buf = StrBuf(config=BufferConfig(chunk_size=4))
        with caplog.at_level(logging.DEBUG, logger="chunkbuf"):
            buf.append_str("abcdefgh")
        assert any("linked HEAP chunk" in r.getMessage() for r in caplog.records)

    def test_truncation_logged_once(self, caplog) -> None:
        from chunkbuf import StrBuf

        buf = StrBuf(max_length=2)
        with caplog.at_level(logging.DEBUG, logger="chunkbuf"):
            buf.append_str("abc")
            buf.append_str("def")
        messages = [r.getMessage() for r in caplog.records if "limit" in r.getMessage()]
        assert messages == ["output limit reached at 2 characters"]

    def test_merge_logged(self, caplog) -> None:
        from chunkbuf import StrBuf

        dst = StrBuf()
        src = StrBuf()
        src.append_str("payload")
        with caplog.at_level(logging.DEBUG, logger="chunkbuf"):
            dst.merge(src)
        assert "merged 7 characters" in [r.getMessage() for r in caplog.records]
