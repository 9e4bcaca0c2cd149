"""ContextVar-based buffer configuration for chunkbuf.

Provides context-local configuration using Python's ContextVars (PEP 567).
A StrBuf reads the active config once, when it is constructed, and keeps
that snapshot for its whole life.

Usage:
    # Defaults
    buf = StrBuf()

    # Scoped override
    from chunkbuf.config import buffer_config_context, BufferConfig

    with buffer_config_context(BufferConfig(chunk_size=4096)):
        buf = StrBuf()

    # Or per buffer
    buf = StrBuf(config=BufferConfig(strict_lists=True))

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass

#: Characters per heap chunk. Large enough that most emitted fragments fit
#: in one chunk, small enough that the unused tail of the last chunk stays
#: cheap.
DEFAULT_CHUNK_SIZE = 511

#: Maximum number of simultaneously open lists.
DEFAULT_MAX_LIST_DEPTH = 32


@dataclass(frozen=True, slots=True)
class BufferConfig:
    """Immutable buffer configuration.

    Attributes:
        chunk_size: Capacity of the embedded chunk and of each heap chunk
        max_list_depth: Maximum list nesting before list_push raises
        strict_lists: Raise ListNestingError when a buffer is finalized or
            reset with lists still open (otherwise a warning is logged)
        encoding: Encoding used when writing into a fixed-capacity target

    """

    chunk_size: int = DEFAULT_CHUNK_SIZE
    max_list_depth: int = DEFAULT_MAX_LIST_DEPTH
    strict_lists: bool = False
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        if self.chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")
        if self.max_list_depth < 1:
            raise ValueError(
                f"max_list_depth must be positive, got {self.max_list_depth}"
            )

    @classmethod
    def from_dict(cls, config_dict: dict) -> "BufferConfig":
        """Create BufferConfig from dictionary.

        Only includes keys that are valid BufferConfig fields; unknown keys
        are silently ignored.

        Args:
            config_dict: Dictionary with config values. Keys should match
                BufferConfig attribute names.

        Returns:
            New BufferConfig instance with values from dict.

        Example:
            >>> config = BufferConfig.from_dict({
            ...     "chunk_size": 4096,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.chunk_size
            4096

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: BufferConfig = BufferConfig()

_buffer_config: ContextVar[BufferConfig] = ContextVar(
    "buffer_config",
    default=_DEFAULT_CONFIG,
)


def get_buffer_config() -> BufferConfig:
    """Get current buffer configuration.

    Returns:
        The active BufferConfig for this thread/context.

    """
    return _buffer_config.get()


def set_buffer_config(config: BufferConfig) -> None:
    """Set buffer configuration for current context.

    Args:
        config: BufferConfig instance to use for buffers created in this context.

    """
    _buffer_config.set(config)


def reset_buffer_config() -> None:
    """Reset to default configuration.

    Reuses the module-level _DEFAULT_CONFIG singleton, avoiding allocation.

    """
    _buffer_config.set(_DEFAULT_CONFIG)


@contextmanager
def buffer_config_context(config: BufferConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: BufferConfig to use within the context.

    Yields:
        None

    Example:
        >>> with buffer_config_context(BufferConfig(chunk_size=64)):
        ...     buf = StrBuf()
        >>> # Automatically reset to previous config

    Buffers created inside the block keep the config after the block exits.
    The previous config is restored even if an exception is raised.

    """
    previous = _buffer_config.get()
    _buffer_config.set(config)
    try:
        yield
    finally:
        _buffer_config.set(previous)


__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "DEFAULT_MAX_LIST_DEPTH",
    "BufferConfig",
    "get_buffer_config",
    "set_buffer_config",
    "reset_buffer_config",
    "buffer_config_context",
]
