"""Exception classes for chunkbuf.

Reaching ``max_length`` or the end of a fixed-capacity target is not an
error: append operations report it through their boolean result. The
exceptions here cover caller mistakes only.
"""

from __future__ import annotations


class ChunkbufError(Exception):
    """Base exception for all chunkbuf errors.
    
    Subclass this for specific error categories.
    """

    pass


class ListNestingError(ChunkbufError):
    """List push/pop/next used out of order.
    
    Raised when a list is popped without a matching push, when pushing would
    exceed the configured nesting depth, when ``list_next`` is called outside
    any list, or (with ``strict_lists``) when a buffer is finalized while
    lists are still open.
    """

    def __init__(self, message: str, depth: int | None = None) -> None:
        """Initialize nesting error.
        
        Args:
            message: Description of the violation
            depth: Nesting depth at the time of the violation (optional)
        """
        self.message = message
        self.depth = depth

        if depth is not None:
            super().__init__(f"{message} (depth {depth})")
        else:
            super().__init__(message)


class TemplateError(ChunkbufError):
    """A printf-style template could not be rendered with its arguments."""

    def __init__(self, template: str, cause: Exception) -> None:
        """Initialize template error.
        
        Args:
            template: The template that failed to render
            cause: The underlying TypeError/ValueError/KeyError
        """
        self.template = template
        self.cause = cause
        super().__init__(f"cannot render template {template!r}: {cause}")


class TargetError(ChunkbufError):
    """An external region cannot be used as a fixed-capacity target.
    
    Raised for read-only regions and regions too small to hold the
    terminating NUL byte.
    """

    pass
