"""
Go literal syntax for scalar values.

Integers print in base 10, addresses and bytes in lowercase hex, floats as the
shortest decimal that round-trips at the given precision (never in exponent form),
and strings with the escapes of Go's strconv.Quote.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import math
import struct
from decimal import Decimal

# Local ----------------------------------------------------------------------------------------------------------------
from .kinds import Kind, SIGNED_KINDS, UNSIGNED_KINDS, bit_size
from .tools import fmt_type, fmt_value

_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    '"': '\\"',
}

_HEX_DIGITS = "0123456789abcdef"


# Methods --------------------------------------------------------------------------------------------------------------

def format_bool(x: bool) -> str:
    if not isinstance(x, bool):
        raise TypeError(f"bool expected, but got {fmt_type(x)}")
    return "true" if x else "false"


def format_int(x: int, kind: Kind = Kind.INT) -> str:
    """
    Format an integer in base 10 after checking it fits the kind.

    Raises:
        TypeError: If x is not an int (bool is rejected too).
        ValueError: If x is out of range for the kind.
    """
    _check_int_range(x, kind)
    return str(x)


def format_hex(x: int, kind: Kind = Kind.UINTPTR) -> str:
    """
    Format an address-sized value as 0x followed by lowercase hex digits.

    Examples:
        >>> format_hex(0xc000012345)
        '0xc000012345'
        >>> format_hex(0)
        '0x0'
    """
    _check_int_range(x, kind)
    return f"0x{x:x}"


def format_byte(x: int) -> str:
    """
    Format a byte as 0x followed by exactly two lowercase hex digits.

    Examples:
        >>> format_byte(10)
        '0x0a'
    """
    _check_int_range(x, Kind.UINT8)
    return "0x" + _HEX_DIGITS[x >> 4] + _HEX_DIGITS[x & 0x0f]


def format_float(x: float, bits: int = 64) -> str:
    """
    Format a float as the shortest decimal that reads back to the same value.

    For bits=32 the value is first rounded to single precision and the shortest
    decimal that round-trips through single precision is used.

    Examples:
        >>> format_float(1.0)
        '1'
        >>> format_float(1e21)
        '1000000000000000000000'
        >>> format_float(0.1, bits=32)
        '0.1'
        >>> format_float(float("-inf"))
        '-Inf'

    Raises:
        TypeError: If x is not a real number.
        ValueError: If bits is not 32 or 64, or x overflows single precision.
    """
    if isinstance(x, bool) or not isinstance(x, (int, float)):
        raise TypeError(f"float expected, but got {fmt_type(x)}")
    if bits not in (32, 64):
        raise ValueError(f"float bits must be 32 or 64, but got {fmt_value(bits)}")

    x = float(x)
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "+Inf" if x > 0 else "-Inf"

    if bits == 64:
        digits = repr(x)
    else:
        digits = _shortest_float32(x)
    return format(Decimal(digits).normalize(), "f")


def format_complex(z: complex, bits: int = 128) -> str:
    """
    Format a complex number as (re+imi), the sign of the imaginary part always explicit.

    Both parts are printed at double precision. For bits=64 they are rounded to single
    precision first, so complex64 values show their widened float64 digits.

    Examples:
        >>> format_complex(1.5-2j)
        '(1.5-2i)'
        >>> format_complex(0j)
        '(0+0i)'
    """
    if isinstance(z, bool) or not isinstance(z, (int, float, complex)):
        raise TypeError(f"complex expected, but got {fmt_type(z)}")
    if bits not in (64, 128):
        raise ValueError(f"complex bits must be 64 or 128, but got {fmt_value(bits)}")
    z = complex(z)
    real, imag = z.real, z.imag
    if bits == 64:
        real, imag = _to_float32(real), _to_float32(imag)
    real = format_float(real)
    sign = "" if imag < 0 else "+"
    return f"({real}{sign}{format_float(imag)}i)"


def quote(s: str) -> str:
    """
    Quote a string with Go's double-quoted escaping.

    Quotes and backslashes are escaped, the usual control characters get their short
    escapes, other control bytes become \\xHH and non-printable runes become \\uHHHH
    or \\UHHHHHHHH. Lone surrogates stand for invalid UTF-8 and print as raw bytes.
    """
    if not isinstance(s, str):
        raise TypeError(f"str expected, but got {fmt_type(s)}")

    parts = ['"']
    for ch in s:
        escape = _ESCAPES.get(ch)
        if escape is not None:
            parts.append(escape)
        elif ch.isprintable():
            parts.append(ch)
        else:
            parts.append(_escape_rune(ord(ch)))
    parts.append('"')
    return "".join(parts)


# Private Methods ------------------------------------------------------------------------------------------------------

def _check_int_range(x: int, kind: Kind):
    if isinstance(x, bool) or not isinstance(x, int):
        raise TypeError(f"int expected for {kind!s}, but got {fmt_type(x)}")

    bits = bit_size(kind)
    if kind in SIGNED_KINDS:
        lo, hi = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    elif kind in UNSIGNED_KINDS or kind is Kind.UNSAFE_POINTER:
        lo, hi = 0, (1 << bits) - 1
    else:
        raise ValueError(f"kind {kind!s} is not an integer kind")

    if not lo <= x <= hi:
        raise ValueError(f"{kind!s} value out of range [{lo}, {hi}]: {fmt_value(x)}")


def _to_float32(x: float) -> float:
    try:
        packed = struct.pack("<f", x)
    except OverflowError:
        raise ValueError(f"float32 value out of range: {fmt_value(x)}") from None
    return struct.unpack("<f", packed)[0]


def _shortest_float32(x: float) -> str:
    f32 = _to_float32(x)
    if f32 == 0:
        return "-0" if math.copysign(1.0, f32) < 0 else "0"

    for precision in range(1, 10):
        digits = f"{f32:.{precision}g}"
        if struct.unpack("<f", struct.pack("<f", float(digits)))[0] == f32:
            return digits
    return repr(f32)


def _escape_rune(cp: int) -> str:
    if cp < 0x20 or cp == 0x7f:
        return f"\\x{cp:02x}"
    if 0xdc80 <= cp <= 0xdcff:
        # byte smuggled in by the surrogateescape error handler
        return f"\\x{cp - 0xdc00:02x}"
    if 0xd800 <= cp <= 0xdfff:
        return "".join(f"\\x{b:02x}" for b in chr(cp).encode("utf-8", "surrogatepass"))
    if cp < 0x10000:
        return f"\\u{cp:04x}"
    return f"\\U{cp:08x}"
