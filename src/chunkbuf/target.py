"""Fixed-capacity output into a caller-supplied byte region.

When a StrBuf is given a target, text is encoded and written straight into
the region instead of the chunk chain. One byte is always kept free for the
terminating NUL, so a region of N bytes holds at most N - 1 bytes of text.

Text that does not fit is cut on a character boundary: a multi-byte
character is written whole or not at all. Lone surrogates are written
as-is (``surrogatepass``), so any ``str`` the chunk chain accepts can be
written here too when the encoding is one of the UTF codecs.

Example:
    >>> region = bytearray(6)
    >>> target = FixedTarget(region)
    >>> target.write("hello world")
    5
    >>> target.terminate()
    >>> bytes(region)
    b'hello\\x00'

"""

from __future__ import annotations

from chunkbuf.errors import TargetError


class FixedTarget:
    """Write cursor over a writable byte region."""

    __slots__ = ("region", "encoding", "errors", "_view", "_pos")

    def __init__(
        self,
        region: bytearray | memoryview,
        encoding: str = "utf-8",
        errors: str = "surrogatepass",
    ) -> None:
        """Wrap ``region`` for writing.

        Args:
            region: Writable buffer (bytearray, writable memoryview, ...)
            encoding: Encoding applied to appended text. Should not emit a
                byte order mark, since every write is encoded separately.
            errors: Codec error handler used for both encoding and decoding

        Raises:
            TargetError: If the region is not a writable buffer or has no
                room for the terminating NUL byte
        """
        try:
            view = memoryview(region)
        except TypeError as e:
            raise TargetError(f"{type(region).__name__} is not a buffer") from e
        if view.readonly:
            raise TargetError("target region is read-only")
        view = view.cast("B")
        if view.nbytes < 1:
            raise TargetError("target region has no room for the terminating NUL byte")

        self.region = region
        self.encoding = encoding
        self.errors = errors
        self._view = view
        self._pos = 0

    @property
    def capacity(self) -> int:
        """Bytes of text the region can hold."""
        return self._view.nbytes - 1

    @property
    def used(self) -> int:
        return self._pos

    @property
    def full(self) -> bool:
        return self._pos >= self.capacity

    def write(self, text: str) -> int:
        """Encode ``text`` into the region.

        Args:
            text: Text to write

        Returns:
            Number of characters written; less than ``len(text)`` when the
            text was cut short

        Raises:
            TargetError: If ``text`` cannot be represented in the encoding
        """
        data = self._encode(text)
        room = self.capacity - self._pos
        written = len(text)
        if len(data) > room:
            written = self._fit(text, room)
            data = self._encode(text[:written])

        end = self._pos + len(data)
        self._view[self._pos:end] = data
        self._pos = end
        return written

    def terminate(self) -> None:
        """Write the NUL byte after the text."""
        self._view[self._pos] = 0

    def value(self) -> str:
        """Return the text written so far."""
        return self._view[: self._pos].tobytes().decode(self.encoding, self.errors)

    def rewind(self) -> None:
        """Start writing from the beginning of the region again."""
        self._pos = 0

    def _encode(self, text: str) -> bytes:
        try:
            return text.encode(self.encoding, self.errors)
        except UnicodeEncodeError as e:
            raise TargetError(f"cannot encode text as {self.encoding}: {e.reason}") from e

    def _fit(self, text: str, room: int) -> int:
        # Number of leading characters whose encoding fits in room bytes
        size = 0
        for i, ch in enumerate(text):
            size += len(self._encode(ch))
            if size > room:
                return i
        return len(text)

    def __len__(self) -> int:
        """Return number of bytes written (not characters)."""
        return self._pos

    def __repr__(self) -> str:
        return f"FixedTarget({self._pos}/{self.capacity} bytes, {self.encoding!r})"
