#
# golit - Kinds Tests
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from golit.kinds import Kind, bit_size, is_composite, is_nilable, is_primitive, may_require_multiline


# Tests ----------------------------------------------------------------------------------------------------------------

class TestPredicates:
    @pytest.mark.parametrize(
        "kind, primitive, multiline, nilable, composite",
        [
            pytest.param(Kind.BOOL, True, False, False, False, id="bool"),
            pytest.param(Kind.INT, True, False, False, False, id="int"),
            pytest.param(Kind.UINTPTR, True, False, False, False, id="uintptr"),
            pytest.param(Kind.COMPLEX64, True, False, False, False, id="complex64"),
            pytest.param(Kind.STRING, True, False, False, False, id="string"),
            pytest.param(Kind.UNSAFE_POINTER, False, False, False, False, id="unsafe-pointer"),
            pytest.param(Kind.ARRAY, False, True, False, True, id="array"),
            pytest.param(Kind.SLICE, False, True, True, True, id="slice"),
            pytest.param(Kind.MAP, False, True, True, True, id="map"),
            pytest.param(Kind.STRUCT, False, True, False, True, id="struct"),
            pytest.param(Kind.PTR, False, True, True, False, id="ptr"),
            pytest.param(Kind.INTERFACE, False, True, True, False, id="interface"),
            pytest.param(Kind.CHAN, False, True, True, False, id="chan"),
            pytest.param(Kind.FUNC, False, True, True, False, id="func"),
        ],
    )
    def test_classification(self, kind, primitive, multiline, nilable, composite):
        """Classify every kind."""
        assert is_primitive(kind) is primitive
        assert may_require_multiline(kind) is multiline
        assert is_nilable(kind) is nilable
        assert is_composite(kind) is composite

    def test_string_values(self):
        """Kinds print as the Go spelling of their type."""
        assert str(Kind.UINT8) == "uint8"
        assert str(Kind.UNSAFE_POINTER) == "unsafe.Pointer"


class TestBitSize:
    @pytest.mark.parametrize(
        "kind, bits",
        [
            pytest.param(Kind.INT, 64, id="int"),
            pytest.param(Kind.INT8, 8, id="int8"),
            pytest.param(Kind.UINT16, 16, id="uint16"),
            pytest.param(Kind.FLOAT32, 32, id="float32"),
            pytest.param(Kind.COMPLEX128, 128, id="complex128"),
        ],
    )
    def test_numeric(self, kind, bits):
        """Numeric kinds have a storage width."""
        assert bit_size(kind) == bits

    def test_non_numeric(self):
        """Other kinds have none."""
        with pytest.raises(ValueError, match="no bit size"):
            bit_size(Kind.STRING)
