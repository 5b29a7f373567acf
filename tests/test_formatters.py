#
# golit - Formatters Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import math

# Third Party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from golit.formatters import format_bool, format_byte, format_complex, format_float, format_hex, format_int, quote
from golit.kinds import Kind


# Tests ----------------------------------------------------------------------------------------------------------------

class TestFormatBool:
    def test_values(self):
        """Print Go boolean literals."""
        assert format_bool(True) == "true"
        assert format_bool(False) == "false"

    def test_rejects_int(self):
        """Only real bools are accepted."""
        with pytest.raises(TypeError):
            format_bool(1)


class TestFormatInt:
    @pytest.mark.parametrize(
        "x, kind, expected",
        [
            pytest.param(0, Kind.INT, "0", id="zero"),
            pytest.param(-42, Kind.INT, "-42", id="negative"),
            pytest.param(-128, Kind.INT8, "-128", id="int8-min"),
            pytest.param(127, Kind.INT8, "127", id="int8-max"),
            pytest.param(2**63 - 1, Kind.INT64, "9223372036854775807", id="int64-max"),
            pytest.param(2**64 - 1, Kind.UINT64, "18446744073709551615", id="uint64-max"),
            pytest.param(65535, Kind.UINT16, "65535", id="uint16-max"),
        ],
    )
    def test_in_range(self, x, kind, expected):
        """Format integers in base 10."""
        assert format_int(x, kind) == expected

    @pytest.mark.parametrize(
        "x, kind",
        [
            pytest.param(128, Kind.INT8, id="int8-over"),
            pytest.param(-129, Kind.INT8, id="int8-under"),
            pytest.param(-1, Kind.UINT, id="uint-negative"),
            pytest.param(2**64, Kind.UINT64, id="uint64-over"),
            pytest.param(2**63, Kind.INT, id="int-over"),
        ],
    )
    def test_out_of_range(self, x, kind):
        """Values outside the kind's range raise ValueError."""
        with pytest.raises(ValueError, match="out of range"):
            format_int(x, kind)

    @pytest.mark.parametrize(
        "x",
        [
            pytest.param(True, id="bool"),
            pytest.param(1.0, id="float"),
            pytest.param("1", id="str"),
        ],
    )
    def test_rejects_non_int(self, x):
        """Non-int values raise TypeError."""
        with pytest.raises(TypeError, match="int expected"):
            format_int(x)

    def test_non_integer_kind(self):
        """Float kinds have no integer range."""
        with pytest.raises(ValueError):
            format_int(1, Kind.FLOAT64)


class TestFormatHex:
    def test_values(self):
        """Addresses print in lowercase hex without padding."""
        assert format_hex(0) == "0x0"
        assert format_hex(0xC000012345) == "0xc000012345"
        assert format_hex(0xDEAD, Kind.UNSAFE_POINTER) == "0xdead"

    def test_negative(self):
        """Addresses are unsigned."""
        with pytest.raises(ValueError):
            format_hex(-1)


class TestFormatByte:
    @pytest.mark.parametrize(
        "x, expected",
        [
            pytest.param(0, "0x00", id="zero"),
            pytest.param(10, "0x0a", id="pad"),
            pytest.param(0x60, "0x60", id="two-digits"),
            pytest.param(255, "0xff", id="max"),
        ],
    )
    def test_values(self, x, expected):
        """Bytes print as exactly two hex digits."""
        assert format_byte(x) == expected

    def test_out_of_range(self):
        """Bytes are 0..255."""
        with pytest.raises(ValueError, match="uint8"):
            format_byte(256)


class TestFormatFloat:
    @pytest.mark.parametrize(
        "x, expected",
        [
            pytest.param(0.0, "0", id="zero"),
            pytest.param(-0.0, "-0", id="negative-zero"),
            pytest.param(1.0, "1", id="whole"),
            pytest.param(-2.5, "-2.5", id="fraction"),
            pytest.param(0.1, "0.1", id="shortest"),
            pytest.param(1 / 3, "0.3333333333333333", id="repeating"),
            pytest.param(1e21, "1000000000000000000000", id="large"),
            pytest.param(1e-7, "0.0000001", id="small"),
            pytest.param(3, "3", id="int-input"),
            pytest.param(math.nan, "NaN", id="nan"),
            pytest.param(math.inf, "+Inf", id="inf"),
            pytest.param(-math.inf, "-Inf", id="negative-inf"),
        ],
    )
    def test_float64(self, x, expected):
        """Shortest round-trip digits, never in exponent form."""
        assert format_float(x) == expected

    @pytest.mark.parametrize(
        "x, expected",
        [
            pytest.param(0.1, "0.1", id="tenth"),
            pytest.param(1 / 3, "0.33333334", id="third"),
            pytest.param(16777217.0, "16777216", id="rounded"),
            pytest.param(-0.0, "-0", id="negative-zero"),
        ],
    )
    def test_float32(self, x, expected):
        """Single precision uses the shortest digits that round-trip in 32 bits."""
        assert format_float(x, bits=32) == expected

    def test_float32_overflow(self):
        """Values beyond single precision are rejected."""
        with pytest.raises(ValueError, match="float32"):
            format_float(1e300, bits=32)

    def test_bad_bits(self):
        """Only 32 and 64 bit floats exist."""
        with pytest.raises(ValueError):
            format_float(1.0, bits=16)

    def test_rejects_non_number(self):
        """Strings and bools are not floats."""
        with pytest.raises(TypeError):
            format_float("1.0")
        with pytest.raises(TypeError):
            format_float(True)


class TestFormatComplex:
    @pytest.mark.parametrize(
        "z, expected",
        [
            pytest.param(0j, "(0+0i)", id="zero"),
            pytest.param(1.5 - 2j, "(1.5-2i)", id="negative-imag"),
            pytest.param(complex(-1, 0.25), "(-1+0.25i)", id="negative-real"),
            pytest.param(2, "(2+0i)", id="int-input"),
        ],
    )
    def test_complex128(self, z, expected):
        """The sign of the imaginary part is always written."""
        assert format_complex(z) == expected

    def test_complex64(self):
        """complex64 parts are rounded to single precision and widened."""
        assert format_complex(0.1 + 0.5j, bits=64) == "(0.10000000149011612+0.5i)"

    def test_bad_bits(self):
        """Only 64 and 128 bit complexes exist."""
        with pytest.raises(ValueError):
            format_complex(1j, bits=32)


class TestQuote:
    @pytest.mark.parametrize(
        "s, expected",
        [
            pytest.param("", '""', id="empty"),
            pytest.param("hello world!", '"hello world!"', id="plain"),
            pytest.param('say "hi"', r'"say \"hi\""', id="quote"),
            pytest.param("a\\b", r'"a\\b"', id="backslash"),
            pytest.param("\n\t\r", r'"\n\t\r"', id="short-escapes"),
            pytest.param("\a\b\f\v", r'"\a\b\f\v"', id="bell-and-friends"),
            pytest.param("\x00\x1b", r'"\x00\x1b"', id="control"),
            pytest.param("\x7f", r'"\x7f"', id="delete"),
            pytest.param("héllo", '"héllo"', id="printable-unicode"),
            pytest.param("\u200b", r'"\u200b"', id="zero-width-space"),
            pytest.param("\U000e0001", r'"\U000e0001"', id="astral-format"),
            pytest.param("'", '"\'"', id="single-quote"),
        ],
    )
    def test_escapes(self, s, expected):
        """Escape like Go's strconv.Quote."""
        assert quote(s) == expected

    def test_surrogate_escape(self):
        """Bytes decoded with surrogateescape print as raw bytes."""
        s = b"a\xffb".decode("utf-8", "surrogateescape")
        assert quote(s) == r'"a\xffb"'

    def test_lone_surrogate(self):
        """Other lone surrogates print as their invalid UTF-8 bytes."""
        assert quote("\ud800") == r'"\xed\xa0\x80"'

    def test_rejects_non_str(self):
        """Only str can be quoted."""
        with pytest.raises(TypeError, match="str expected"):
            quote(b"x")
