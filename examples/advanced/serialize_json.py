"""Serialize nested Python values to JSON with list tracking and merges.

Each container is rendered into its own StrBuf and spliced into the parent
with merge(), so nested content is never copied on the way up.
"""

import json
from typing import Any

from chunkbuf import StrBuf


def serialize(value: Any) -> StrBuf:
    buf = StrBuf()
    if isinstance(value, dict):
        buf.list_push("{", ", ")
        for key, item in value.items():
            buf.list_append("%s: ", json.dumps(str(key)))
            buf.merge(serialize(item))
        buf.list_pop("}")
    elif isinstance(value, (list, tuple)):
        buf.list_push("[", ", ")
        for item in value:
            buf.list_next()
            buf.merge(serialize(item))
        buf.list_pop("]")
    elif isinstance(value, bool):
        buf.append_bool(value)
    elif isinstance(value, int):
        buf.append_int(value)
    elif isinstance(value, float):
        buf.append_float(value, nan_delim='"')
    elif value is None:
        buf.append_str("null")
    else:
        # Large strings are linked, not copied
        buf.append_owned(json.dumps(str(value)))
    return buf


if __name__ == "__main__":
    data = {
        "name": "chunkbuf",
        "tags": ["text", "buffer"],
        "ratio": float("nan"),
        "nested": {"ok": True, "items": [1, 2.5, None]},
        "blob": "x" * 2000,
    }
    text = serialize(data).get()
    print(text[:120], "...")
    print(json.loads(text)["nested"])
