"""Logger lookup for chunkbuf modules.

All chunkbuf loggers live under the ``chunkbuf`` namespace and no handlers
are installed, so output is controlled by the application. Messages
emitted:

- DEBUG ``chunkbuf.chunks``: a chunk was linked (growth or zero-copy) or
  chunks were spliced in from another chain
- DEBUG ``chunkbuf.strbuf``: a merge spliced chunks, or output was first
  cut at ``max_length`` or the target capacity
- WARNING ``chunkbuf.strbuf``: a buffer was finalized with lists still open

Example:
    >>> import logging
    >>> logging.getLogger("chunkbuf").setLevel(logging.DEBUG)
"""

from __future__ import annotations

import logging

_NAMESPACE = "chunkbuf"


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` inside the chunkbuf namespace.

    Module names already under ``chunkbuf`` are used unchanged; anything
    else is nested beneath it.

        >>> get_logger("chunkbuf.strbuf").name
        'chunkbuf.strbuf'
        >>> get_logger("serializer").name
        'chunkbuf.serializer'
    """
    if name != _NAMESPACE and not name.startswith(_NAMESPACE + "."):
        name = f"{_NAMESPACE}.{name}"
    return logging.getLogger(name)
