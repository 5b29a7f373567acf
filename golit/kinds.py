"""
Go value kinds and the classification predicates the renderer branches on.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from enum import StrEnum, unique


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class Kind(StrEnum):
    """
    Every shape a Go value can take, named as in Go's reflect package.
    """
    BOOL = "bool"
    INT = "int"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT = "uint"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    UINTPTR = "uintptr"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    COMPLEX64 = "complex64"
    COMPLEX128 = "complex128"
    STRING = "string"
    UNSAFE_POINTER = "unsafe.Pointer"
    CHAN = "chan"
    FUNC = "func"
    INTERFACE = "interface"
    ARRAY = "array"
    SLICE = "slice"
    STRUCT = "struct"
    MAP = "map"
    PTR = "ptr"


SIGNED_KINDS = frozenset({Kind.INT, Kind.INT8, Kind.INT16, Kind.INT32, Kind.INT64})

UNSIGNED_KINDS = frozenset({Kind.UINT, Kind.UINT8, Kind.UINT16, Kind.UINT32, Kind.UINT64, Kind.UINTPTR})

FLOAT_KINDS = frozenset({Kind.FLOAT32, Kind.FLOAT64})

COMPLEX_KINDS = frozenset({Kind.COMPLEX64, Kind.COMPLEX128})

PRIMITIVE_KINDS = SIGNED_KINDS | UNSIGNED_KINDS | FLOAT_KINDS | COMPLEX_KINDS | {Kind.BOOL, Kind.STRING}

MULTILINE_KINDS = frozenset({
    Kind.ARRAY,
    Kind.CHAN,
    Kind.FUNC,
    Kind.INTERFACE,
    Kind.MAP,
    Kind.PTR,
    Kind.SLICE,
    Kind.STRUCT,
})

NILABLE_KINDS = frozenset({Kind.CHAN, Kind.FUNC, Kind.INTERFACE, Kind.MAP, Kind.PTR, Kind.SLICE})

# Pointers to these kinds have a literal form (&T{...})
COMPOSITE_KINDS = frozenset({Kind.ARRAY, Kind.SLICE, Kind.STRUCT, Kind.MAP})

_BIT_SIZES = {
    Kind.INT: 64,
    Kind.INT8: 8,
    Kind.INT16: 16,
    Kind.INT32: 32,
    Kind.INT64: 64,
    Kind.UINT: 64,
    Kind.UINT8: 8,
    Kind.UINT16: 16,
    Kind.UINT32: 32,
    Kind.UINT64: 64,
    Kind.UINTPTR: 64,
    Kind.UNSAFE_POINTER: 64,
    Kind.FLOAT32: 32,
    Kind.FLOAT64: 64,
    Kind.COMPLEX64: 64,
    Kind.COMPLEX128: 128,
}


# Methods --------------------------------------------------------------------------------------------------------------

def is_primitive(kind: Kind) -> bool:
    """Bool, numeric and string kinds: values that never need a type name to be unambiguous."""
    return kind in PRIMITIVE_KINDS


def may_require_multiline(kind: Kind) -> bool:
    """
    Kinds whose literal can span several lines in multi-line mode.

    A list whose element kind is not one of these may be collapsed to a single line.
    """
    return kind in MULTILINE_KINDS


def is_nilable(kind: Kind) -> bool:
    return kind in NILABLE_KINDS


def is_composite(kind: Kind) -> bool:
    return kind in COMPOSITE_KINDS


def bit_size(kind: Kind) -> int:
    """
    Storage width of a numeric kind in bits.

    Raises:
        ValueError: If the kind is not numeric.
    """
    try:
        return _BIT_SIZES[kind]
    except KeyError:
        raise ValueError(f"kind {kind!s} has no bit size") from None
