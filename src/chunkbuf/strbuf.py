"""StrBuf: chunked string accumulation with bounded output.

Builds large strings (serialized data, diagnostics, generated source) from
many small appends. Text goes into a chain of fixed-size chunks that are
joined once, in get(), so the total cost stays linear in the output size
no matter how it is split across appends.

On top of raw storage the buffer provides:
- printf-style formatted appends (``template % args``)
- zero-copy appends that link a caller's string instead of copying it
- merging one buffer into another without recopying its chunks
- an optional max_length: output is cut at exactly that many characters
  and appends report the cut by returning False
- nested list tracking for comma-style output (arrays, argument lists)
- fixed-capacity mode, writing into a caller-supplied byte region

Thread Safety:
StrBuf instances have a single owner and are not synchronized.
Share results, not buffers.

Example:
    >>> buf = StrBuf()
    >>> buf.list_push("[", ", ")
    >>> for n in (1, 2, 3):
    ...     buf.list_append("%d", n)
    True
    True
    True
    >>> buf.list_pop("]")
    >>> buf.get()
    '[1, 2, 3]'

"""

from __future__ import annotations

import math
from collections.abc import Iterator, Mapping
from typing import Any

from chunkbuf.chunks import Chunk, ChunkChain
from chunkbuf.config import BufferConfig, get_buffer_config
from chunkbuf.errors import ListNestingError, TemplateError
from chunkbuf.lists import ListStack
from chunkbuf.profiling import get_buffer_accumulator
from chunkbuf.target import FixedTarget
from chunkbuf.utils.logger import get_logger

logger = get_logger(__name__)


def render_template(template: str, args: tuple[Any, ...]) -> str:
    """Render a printf-style template.

    A single mapping argument is used for ``%(name)s`` style templates, the
    same way the logging module treats it.

    Raises:
        TemplateError: If the arguments do not match the template
    """
    if len(args) == 1 and isinstance(args[0], Mapping) and args[0]:
        values: Any = args[0]
    else:
        values = args
    try:
        return template % values
    except (TypeError, ValueError, KeyError) as e:
        raise TemplateError(template, e) from e


class StrBuf:
    """Chunked string buffer.

    Every append method returns True while there is still room, and False
    once the text had to be cut to honor ``max_length`` (or the capacity of
    the fixed target). A cut append writes exactly the characters that fit;
    later appends write nothing and keep returning False. The buffer stays
    usable throughout.

    Usage:
            >>> buf = StrBuf(max_length=8)
            >>> buf.append_str("abc")
            True
            >>> buf.append("%s-%s", "def", "ghi")
            False
            >>> buf.get()
            'abcdef-g'

    A buffer returns to its empty state after get() or reset() and can be
    reused.

    """

    __slots__ = ("_config", "_chain", "_lists", "_target", "_max", "_length", "_truncated")

    def __init__(
        self,
        *,
        max_length: int | None = None,
        target: bytearray | memoryview | FixedTarget | None = None,
        config: BufferConfig | None = None,
    ) -> None:
        """Initialize an empty buffer.

        Args:
            max_length: Maximum number of characters to emit (None = unlimited)
            target: Byte region to write into instead of the chunk chain
            config: Buffer configuration (defaults to the active context config)
        """
        self._config = config if config is not None else get_buffer_config()
        self._chain = ChunkChain(self._config.chunk_size)
        self._lists = ListStack(self._config.max_list_depth)
        self._target: FixedTarget | None = None
        self._max: int | None = None
        self._length = 0
        self._truncated = False

        self.max_length = max_length
        self.target = target

    # -- configuration ------------------------------------------------------

    @property
    def config(self) -> BufferConfig:
        return self._config

    @property
    def max_length(self) -> int | None:
        """Maximum number of characters this buffer emits (None = unlimited)."""
        return self._max

    @max_length.setter
    def max_length(self, value: int | None) -> None:
        if value is not None:
            if value < 0:
                raise ValueError(f"max_length must be >= 0, got {value}")
            if value < self._length:
                raise ValueError(
                    f"max_length {value} is below the {self._length} characters already written"
                )
        self._max = value

    @property
    def target(self) -> FixedTarget | None:
        """Fixed-capacity target, or None when writing to the chunk chain."""
        return self._target

    @target.setter
    def target(self, value: bytearray | memoryview | FixedTarget | None) -> None:
        if self._length:
            raise ValueError("cannot change the target of a non-empty buffer")
        if value is not None and not isinstance(value, FixedTarget):
            value = FixedTarget(value, self._config.encoding)
        self._target = value

    # -- appends ------------------------------------------------------------

    def append(self, template: str, *args: Any) -> bool:
        """Append a printf-style formatted string.

        The template is always interpreted, so ``%%`` must be used for a
        literal percent sign even without arguments.

        Args:
            template: printf-style template
            *args: Values for the template (or a single mapping)

        Returns:
            False if the limit was reached

        Raises:
            TemplateError: If the arguments do not match the template
        """
        return self._write(render_template(template, args))

    def append_str(self, text: str) -> bool:
        """Append ``text`` verbatim."""
        return self._write(text)

    def append_strn(self, text: str, n: int) -> bool:
        """Append the first ``n`` characters of ``text``.

        Raises:
            ValueError: If ``n`` is negative
        """
        if n < 0:
            raise ValueError(f"n must be >= 0, got {n}")
        return self._write(text[:n])

    def append_owned(self, text: str) -> bool:
        """Append ``text`` by reference, taking ownership of it.

        The string is linked into the chain as its own chunk, not copied.
        The caller hands the string over and should drop its reference.
        """
        return self._adopt(text, owned=True)

    def append_borrowed(self, text: str) -> bool:
        """Append ``text`` by reference without taking ownership.

        The caller guarantees the string outlives the buffer; the buffer
        never releases it.
        """
        return self._adopt(text, owned=False)

    def append_char(self, ch: str) -> bool:
        """Append a single character.

        Raises:
            ValueError: If ``ch`` is not exactly one character
        """
        if len(ch) != 1:
            raise ValueError(f"expected a single character, got {ch!r}")
        return self._write(ch)

    def append_int(self, value: int) -> bool:
        return self._write("%d" % value)

    def append_float(self, value: float, nan_delim: str | None = None) -> bool:
        """Append a float in its shortest round-tripping form.

        NaN and infinities are written as ``NaN``, ``Inf`` and ``-Inf``.
        With ``nan_delim`` they are wrapped in it, e.g. ``'"NaN"'`` for
        JSON output.
        """
        if math.isnan(value):
            text = "NaN"
        elif math.isinf(value):
            text = "Inf" if value > 0 else "-Inf"
        else:
            return self._write(repr(float(value)))
        if nan_delim:
            text = f"{nan_delim}{text}{nan_delim}"
        return self._write(text)

    def append_bool(self, value: bool) -> bool:
        return self._write("true" if value else "false")

    def merge(self, src: StrBuf) -> bool:
        """Move the content of ``src`` to the end of this buffer.

        Chunks are relinked, not copied, when both buffers use chunk storage
        and ``src`` fits within this buffer's limit. Otherwise the content
        of ``src`` is appended as text, cut at the limit if needed. Nothing
        is added once this buffer's output has been cut.
        ``src`` is left empty either way.

        Args:
            src: Buffer to drain

        Returns:
            False if the limit was reached

        Raises:
            ValueError: If ``src`` is this buffer
        """
        if src is self:
            raise ValueError("cannot merge a buffer into itself")

        acc = get_buffer_accumulator()
        if acc is not None:
            acc.record_merge()

        if (
            self._truncated
            or self._target is not None
            or src._target is not None
            or (self._max is not None and src._length > self._max - self._length)
        ):
            text = src._contents()
            src._close()
            return self._write(text)

        src._check_lists()
        length = src._length
        self._chain.splice(src._chain)
        self._length += length
        src._close()
        logger.debug("merged %d characters", length)
        return True

    # -- lists --------------------------------------------------------------

    def list_push(self, open: str, separator: str) -> None:
        """Open a list: append ``open`` and start counting elements.

        Raises:
            ListNestingError: If the maximum list depth is reached
        """
        self._lists.push(separator)
        if open:
            self._write(open)

    def list_pop(self, close: str) -> None:
        """Close the innermost list and append ``close``.

        Raises:
            ListNestingError: If no list is open
        """
        self._lists.pop()
        if close:
            self._write(close)

    def list_next(self) -> None:
        """Start a new element, appending the separator if one is due.

        Raises:
            ListNestingError: If no list is open
        """
        separator = self._lists.next()
        if separator:
            self._write(separator)

    def list_append(self, template: str, *args: Any) -> bool:
        """Formatted append as a new list element."""
        self.list_next()
        return self.append(template, *args)

    def list_append_str(self, text: str) -> bool:
        """Raw append as a new list element."""
        self.list_next()
        return self._write(text)

    # -- finalization -------------------------------------------------------

    def get(self) -> str:
        """Return everything appended so far and reset the buffer.

        In fixed-capacity mode the region is NUL-terminated and its text
        returned; the region is then rewound for reuse.

        Returns:
            The buffer content; an empty string if nothing was appended

        Raises:
            ListNestingError: With ``strict_lists``, if lists are still open
        """
        result = self._contents()
        chunks = self._chain.count if self._target is None else 0
        if self._target is not None:
            self._target.terminate()
        self._close()

        acc = get_buffer_accumulator()
        if acc is not None:
            acc.record_finalize(len(result), chunks)
        return result

    def reset(self) -> None:
        """Discard all content. Resetting an empty buffer is a no-op.

        Raises:
            ListNestingError: With ``strict_lists``, if lists are still open
        """
        self._close()

    # -- diagnostics --------------------------------------------------------

    @property
    def chunk_count(self) -> int:
        """Number of chunks in the chain (0 in fixed-capacity mode)."""
        return self._chain.count if self._target is None else 0

    @property
    def list_depth(self) -> int:
        return self._lists.depth

    @property
    def limit_reached(self) -> bool:
        """True once an append was cut short since the last get/reset."""
        return self._truncated

    def chunks(self) -> Iterator[Chunk]:
        """Iterate over the chunk chain."""
        return iter(self._chain)

    def __len__(self) -> int:
        """Return number of characters appended (not chunks)."""
        return self._length

    def __bool__(self) -> bool:
        """Return True if anything has been appended."""
        return self._length > 0

    def __repr__(self) -> str:
        mode = "fixed" if self._target is not None else f"{self._chain.count} chunks"
        return f"<StrBuf ({self._length} chars, {mode}) at 0x{id(self):08x}>"

    # -- internals ----------------------------------------------------------

    def _write(self, text: str) -> bool:
        if not text:
            return True
        if self._truncated:
            # Nothing more is written once output was cut, even if a shorter
            # piece would still fit the target
            self._limit_hit()
            return False

        complete = True
        if self._max is not None:
            room = self._max - self._length
            if len(text) > room:
                text = text[:room]
                complete = False

        if self._target is not None:
            written = self._target.write(text) if text else 0
            if written < len(text):
                complete = False
            self._length += written
        elif text:
            self._chain.append(text)
            self._length += len(text)

        if not complete:
            self._limit_hit()
        return complete

    def _adopt(self, text: str, *, owned: bool) -> bool:
        if not text:
            return True
        if (
            self._truncated
            or self._target is not None
            or (self._max is not None and len(text) > self._max - self._length)
        ):
            return self._write(text)
        self._chain.adopt(text, owned=owned)
        self._length += len(text)
        return True

    def _limit_hit(self) -> None:
        if not self._truncated:
            logger.debug("output limit reached at %d characters", self._length)
            self._truncated = True
        acc = get_buffer_accumulator()
        if acc is not None:
            acc.record_limit()

    def _contents(self) -> str:
        if self._target is not None:
            return self._target.value()
        return self._chain.concatenate()

    def _check_lists(self) -> None:
        depth = self._lists.depth
        if not depth:
            return
        if self._config.strict_lists:
            raise ListNestingError("buffer finalized with open lists", depth=depth)
        logger.warning("discarding %d unclosed list(s)", depth)
        self._lists.clear()

    def _close(self) -> None:
        self._check_lists()
        self._chain.clear()
        if self._target is not None:
            self._target.rewind()
        self._length = 0
        self._truncated = False


def merge(dst: StrBuf, src: StrBuf) -> bool:
    """Move the content of ``src`` to the end of ``dst``. See StrBuf.merge."""
    return dst.merge(src)
