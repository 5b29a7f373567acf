#
# golit - Sentinels Tests
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from golit.sentinels import UNSET, UnsetType, ifnotunset


# Tests ----------------------------------------------------------------------------------------------------------------

class TestUnset:
    def test_singleton_identity(self):
        """Ensure UNSET is a singleton object."""
        assert UNSET is UnsetType()

    def test_repr_clean(self):
        """Assert repr shows clean angle-bracketed name."""
        assert repr(UNSET) == "<UNSET>"

    def test_falsy(self):
        """UNSET is falsy."""
        assert bool(UNSET) is False

    def test_not_equal_to_falsy_values(self):
        """UNSET equals only itself."""
        assert UNSET == UNSET
        assert UNSET != None  # noqa: E711
        assert UNSET != False  # noqa: E712


class TestIfNotUnset:
    @pytest.mark.parametrize(
        "value, default, expected",
        [
            pytest.param(UNSET, 5, 5, id="unset-default"),
            pytest.param(False, True, False, id="false-kept"),
            pytest.param(None, "x", None, id="none-kept"),
            pytest.param(0, 1, 0, id="zero-kept"),
        ],
    )
    def test_core_behavior(self, value, default, expected):
        """Return the value unless it is UNSET."""
        assert ifnotunset(value, default=default) == expected

    def test_default_is_none(self):
        """Without a default, UNSET becomes None."""
        assert ifnotunset(UNSET) is None
