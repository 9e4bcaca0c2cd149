"""Error-path tests.

Exercises exception construction and formatting, and checks that a buffer
that raised stays usable. Limit handling is covered in test_strbuf.py since
it is not an error.
"""

import pytest

from chunkbuf import StrBuf
from chunkbuf.errors import ChunkbufError, ListNestingError, TargetError, TemplateError

# =========================================================================
# Exception construction and formatting
# =========================================================================


class TestListNestingErrorFormatting:
    def test_message_only(self) -> None:
        err = ListNestingError("list pop without matching push")
        assert str(err) == "list pop without matching push"
        assert err.depth is None

    def test_with_depth(self) -> None:
        err = ListNestingError("list nesting too deep", depth=32)
        assert str(err) == "list nesting too deep (depth 32)"
        assert err.depth == 32


class TestTemplateErrorFormatting:
    def test_wraps_cause(self) -> None:
        cause = TypeError("not enough arguments for format string")
        err = TemplateError("%s %s", cause)
        assert err.template == "%s %s"
        assert err.cause is cause
        assert "'%s %s'" in str(err)
        assert "not enough arguments" in str(err)

    def test_raised_from_cause(self) -> None:
        with pytest.raises(TemplateError) as exc_info:
            StrBuf().append("%d", "x")
        assert isinstance(exc_info.value.__cause__, TypeError)


class TestHierarchy:
    @pytest.mark.parametrize("cls", [ListNestingError, TemplateError, TargetError])
    def test_subclasses_base(self, cls: type) -> None:
        assert issubclass(cls, ChunkbufError)

    def test_catch_all(self) -> None:
        with pytest.raises(ChunkbufError):
            StrBuf().list_pop("]")


# =========================================================================
# Buffer state after errors
# =========================================================================


class TestRecoveryAfterErrors:
    def test_template_error_leaves_content_intact(self) -> None:
        buf = StrBuf()
        buf.append_str("before;")
        with pytest.raises(TemplateError):
            buf.append("%(key)s", {"other": 1})
        buf.append_str("after")
        assert buf.get() == "before;after"

    def test_nesting_error_leaves_content_intact(self) -> None:
        buf = StrBuf()
        buf.append_str("text")
        with pytest.raises(ListNestingError):
            buf.list_next()
        assert buf.get() == "text"

    def test_target_error_on_construction(self) -> None:
        with pytest.raises(TargetError):
            StrBuf(target=bytes(4))  # type: ignore[arg-type]
