"""Write straight into a preallocated byte region (fixed-capacity mode)."""

from chunkbuf import StrBuf

region = bytearray(32)
buf = StrBuf(target=region)

buf.list_push("args(", ", ")
for name in ("alpha", "beta", "gamma", "delta", "epsilon"):
    if not buf.list_append_str(name):
        break
buf.list_pop(")")

print(repr(buf.get()))
print(bytes(region))
