"""Build a string from formatted pieces and read it back in one call."""

from chunkbuf import StrBuf

buf = StrBuf()
buf.append_str("Hello, ")
buf.append("%s! You have %d new messages.", "World", 3)
print(buf.get())
