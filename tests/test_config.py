"""Tests for ContextVar-based buffer configuration.

Validates defaults, validation, context manager behavior, thread isolation
and that buffers snapshot the config at construction.
"""

from threading import Thread

import pytest

from chunkbuf import (
    BufferConfig,
    StrBuf,
    buffer_config_context,
    get_buffer_config,
    reset_buffer_config,
    set_buffer_config,
)


class TestBufferConfigDataclass:
    """Test BufferConfig frozen dataclass behavior."""

    def test_default_values(self) -> None:
        config = BufferConfig()
        assert config.chunk_size == 511
        assert config.max_list_depth == 32
        assert config.strict_lists is False
        assert config.encoding == "utf-8"

    def test_immutability(self) -> None:
        config = BufferConfig()
        with pytest.raises(AttributeError):
            config.chunk_size = 1024  # type: ignore[misc]

    @pytest.mark.parametrize("field", ["chunk_size", "max_list_depth"])
    @pytest.mark.parametrize("value", [0, -5])
    def test_rejects_non_positive_sizes(self, field: str, value: int) -> None:
        with pytest.raises(ValueError):
            BufferConfig(**{field: value})

    def test_from_dict_ignores_unknown_keys(self) -> None:
        config = BufferConfig.from_dict(
            {"chunk_size": 4096, "strict_lists": True, "unknown_key": "ignored"}
        )
        assert config.chunk_size == 4096
        assert config.strict_lists is True

    def test_from_dict_empty(self) -> None:
        assert BufferConfig.from_dict({}) == BufferConfig()


class TestConfigContext:
    def setup_method(self) -> None:
        reset_buffer_config()

    def teardown_method(self) -> None:
        reset_buffer_config()

    def test_default_config(self) -> None:
        assert get_buffer_config() == BufferConfig()

    def test_set_and_reset(self) -> None:
        set_buffer_config(BufferConfig(chunk_size=64))
        assert get_buffer_config().chunk_size == 64
        reset_buffer_config()
        assert get_buffer_config().chunk_size == 511

    def test_context_manager_restores_previous(self) -> None:
        set_buffer_config(BufferConfig(chunk_size=100))
        with buffer_config_context(BufferConfig(chunk_size=200)):
            assert get_buffer_config().chunk_size == 200
        assert get_buffer_config().chunk_size == 100

    def test_context_manager_restores_on_exception(self) -> None:
        with pytest.raises(RuntimeError):
            with buffer_config_context(BufferConfig(chunk_size=16)):
                raise RuntimeError("boom")
        assert get_buffer_config().chunk_size == 511

    def test_buffer_snapshots_active_config(self) -> None:
        with buffer_config_context(BufferConfig(chunk_size=16)):
            buf = StrBuf()
        assert buf.config.chunk_size == 16
        buf.append_str("x" * 10)
        buf.append_str("y" * 10)
        assert buf.chunk_count == 2

    def test_explicit_config_wins(self) -> None:
        with buffer_config_context(BufferConfig(chunk_size=16)):
            buf = StrBuf(config=BufferConfig(chunk_size=32))
        assert buf.config.chunk_size == 32

    def test_thread_changes_do_not_leak(self) -> None:
        seen: dict[str, int] = {}

        def worker() -> None:
            set_buffer_config(BufferConfig(chunk_size=32))
            seen["worker"] = StrBuf().config.chunk_size

        with buffer_config_context(BufferConfig(chunk_size=64)):
            thread = Thread(target=worker)
            thread.start()
            thread.join()
            seen["main"] = get_buffer_config().chunk_size

        assert seen == {"worker": 32, "main": 64}
