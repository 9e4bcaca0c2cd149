"""
chunkbuf: chunked string buffer for Python

Builds large strings from many small appends without repeated
reallocation: text accumulates in fixed-size chunks that are joined once.
Supports zero-copy appends, buffer merging, bounded output and nested
delimited lists for serializers.

Quick Start:
    >>> from chunkbuf import StrBuf
    >>> buf = StrBuf()
    >>> buf.append("%s=%d", "answer", 42)
    True
    >>> buf.get()
    'answer=42'

Serializing nested structures:
    >>> buf = StrBuf()
    >>> buf.list_push("{", ", ")
    >>> buf.list_append('"a": %d', 1)
    True
    >>> buf.list_next()
    >>> buf.append_str('"b": ')
    True
    >>> buf.list_push("[", ",")
    >>> buf.list_append_str("1")
    True
    >>> buf.list_append_str("2")
    True
    >>> buf.list_pop("]")
    >>> buf.list_pop("}")
    >>> buf.get()
    '{"a": 1, "b": [1,2]}'

Installation:
    pip install chunkbuf             # Zero runtime dependencies
"""

from chunkbuf.chunks import Chunk, ChunkChain, ChunkKind
from chunkbuf.config import (
    BufferConfig,
    buffer_config_context,
    get_buffer_config,
    reset_buffer_config,
    set_buffer_config,
)
from chunkbuf.errors import ChunkbufError, ListNestingError, TargetError, TemplateError
from chunkbuf.lists import ListFrame, ListStack
from chunkbuf.profiling import BufferAccumulator, get_buffer_accumulator, profiled_buffers
from chunkbuf.strbuf import StrBuf, merge, render_template
from chunkbuf.target import FixedTarget

__version__ = "0.1.0"

__all__ = [  # noqa: RUF022 - grouped by category
    # Version
    "__version__",
    # Buffer
    "StrBuf",
    "merge",
    "render_template",
    # Storage
    "Chunk",
    "ChunkChain",
    "ChunkKind",
    "FixedTarget",
    # Lists
    "ListFrame",
    "ListStack",
    # Config
    "BufferConfig",
    "buffer_config_context",
    "get_buffer_config",
    "reset_buffer_config",
    "set_buffer_config",
    # Errors
    "ChunkbufError",
    "ListNestingError",
    "TargetError",
    "TemplateError",
    # Profiling
    "BufferAccumulator",
    "get_buffer_accumulator",
    "profiled_buffers",
]
