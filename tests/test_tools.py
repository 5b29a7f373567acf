#
# golit - Tools Tests
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from golit.gotypes import GoType
from golit.tools import fmt_type, fmt_value


class BrokenRepr:
    def __repr__(self):
        raise RuntimeError("boom")


# Tests ----------------------------------------------------------------------------------------------------------------

class TestFmtType:
    @pytest.mark.parametrize(
        "obj, expected",
        [
            pytest.param(42, "<type: int>", id="instance"),
            pytest.param(int, "<type: int>", id="type"),
            pytest.param(None, "<type: NoneType>", id="none"),
        ],
    )
    def test_ascii(self, obj, expected):
        """Format the type of a value or a type itself."""
        assert fmt_type(obj) == expected

    def test_show_module(self):
        """Builtins never get a module prefix, other types do."""
        assert fmt_type([], show_module=True) == "<type: list>"
        assert fmt_type(GoType, show_module=True) == "<type: golit.gotypes.GoType>"

    def test_truncate_type_name(self):
        """Long type names are cut like reprs."""
        assert fmt_type(GoType, max_repr=2, show_module=True) == "<type: go...>"


class TestFmtValue:
    def test_basic(self):
        """Values print as type and repr."""
        assert fmt_value(42) == "<int: 42>"
        assert fmt_value("a") == "<str: 'a'>"

    def test_truncate_quoted(self):
        """Quoted reprs keep their quotes when truncated."""
        assert fmt_value("hello world", max_repr=8) == "<str: 'hell'...>"

    def test_truncate_plain(self):
        """Long reprs are cut with an ellipsis."""
        assert fmt_value(list(range(100)), max_repr=5) == "<list: [0, 1...>"

    def test_ascii_escapes_closing_angle(self):
        """A '>' inside the repr cannot close the token."""
        assert fmt_value("a>b") == "<str: 'a\\>b'>"

    def test_broken_repr(self):
        """A failing __repr__ does not propagate."""
        assert fmt_value(BrokenRepr()) == "<BrokenRepr: <BrokenRepr object (repr failed: RuntimeError)\\>>"
