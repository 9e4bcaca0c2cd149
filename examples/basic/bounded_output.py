"""Cap diagnostic output at a fixed number of characters.

Appends return False once the cap is hit, so a producer can stop early
instead of formatting output nobody will see.
"""

from chunkbuf import StrBuf

buf = StrBuf(max_length=60)
for lineno in range(1, 1000):
    if not buf.append("line %d: value out of range\n", lineno):
        break

print(buf.get())
print(f"(stopped at line {lineno})")
