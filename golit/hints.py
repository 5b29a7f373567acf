"""
Type hint vocabulary for Go types that have no Python counterpart.

Annotate dataclass fields with these markers to pin down the Go type of a value:

    @dataclass
    class AbiFunction:
        Name: str
        Selector: Array[uint8, 4]
        Elem: Ptr["AbiType"] = None

Sized numbers are typing.NewType markers over the matching Python number, so values
stay plain ints, floats and complexes at runtime. Wrap a marker in your own NewType
to declare a named Go type, e.g. ``AbiKind = NewType("AbiKind", uint8)``.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import dataclasses
from dataclasses import dataclass
from typing import Any, ForwardRef, NewType

# Local ----------------------------------------------------------------------------------------------------------------
from .gotypes import ChanDir
from .tools import fmt_type, fmt_value

# Sized numbers --------------------------------------------------------------------------------------------------------

int8 = NewType("int8", int)
int16 = NewType("int16", int)
int32 = NewType("int32", int)
int64 = NewType("int64", int)
uint = NewType("uint", int)
uint8 = NewType("uint8", int)
uint16 = NewType("uint16", int)
uint32 = NewType("uint32", int)
uint64 = NewType("uint64", int)
uintptr = NewType("uintptr", int)
float32 = NewType("float32", float)
float64 = NewType("float64", float)
complex64 = NewType("complex64", complex)
complex128 = NewType("complex128", complex)
UnsafePointer = NewType("UnsafePointer", int)

byte = uint8
rune = int32

# Dataclass field metadata key holding the Go name of a field
GO_NAME = "go_name"


# Classes --------------------------------------------------------------------------------------------------------------

class _GoHint:
    """
    Base of the composite markers.

    Markers are callable only so that typing accepts them inside Optional, Union and
    forward references; calling one is always an error.
    """

    def __call__(self, *args, **kwargs):
        raise TypeError(f"{self!r} is a type hint and cannot be instantiated")


@dataclass(frozen=True, repr=False)
class ArrayHint(_GoHint):
    elem: Any
    length: int

    def __repr__(self) -> str:
        return f"Array[{_hint_repr(self.elem)}, {self.length}]"


@dataclass(frozen=True, repr=False)
class PtrHint(_GoHint):
    elem: Any

    def __repr__(self) -> str:
        return f"Ptr[{_hint_repr(self.elem)}]"


@dataclass(frozen=True, repr=False)
class ChanHint(_GoHint):
    elem: Any
    dir: ChanDir = ChanDir.BOTH

    def __repr__(self) -> str:
        return f"Chan[{_hint_repr(self.elem)}]"


class Array:
    """
    Fixed-length array marker: ``Array[elem, length]``.

    Values are any sequence of exactly length items; bytes and bytearray work for
    byte arrays.
    """

    def __class_getitem__(cls, params) -> ArrayHint:
        if not isinstance(params, tuple) or len(params) != 2:
            raise TypeError(f"Array[...] expects an element type and a length, but got {fmt_value(params)}")
        elem, length = params
        if isinstance(length, bool) or not isinstance(length, int):
            raise TypeError(f"Array length must be int, but got {fmt_type(length)}")
        if length < 0:
            raise ValueError(f"Array length must be non-negative, but got {fmt_value(length)}")
        return ArrayHint(_forward(elem), length)


class Ptr:
    """
    Pointer marker: ``Ptr[elem]``.

    Python has no pointers, so the value of a pointer is the pointee itself and None
    is nil. ``Optional[T]`` means the same thing for struct, array and scalar types.
    """

    def __class_getitem__(cls, elem) -> PtrHint:
        return PtrHint(_forward(elem))


class Chan:
    """Channel marker: ``Chan[elem]``. Channels always render as nil."""

    def __class_getitem__(cls, params) -> ChanHint:
        if isinstance(params, tuple):
            elem, direction = params
            return ChanHint(_forward(elem), ChanDir(direction))
        return ChanHint(_forward(params))


# Methods --------------------------------------------------------------------------------------------------------------

def go_field(name: str, **kwargs) -> Any:
    """
    A dataclasses.field that renders under the Go name given, e.g.
    ``selector: Array[uint8, 4] = go_field("Selector", default=None)``.
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[GO_NAME] = name
    return dataclasses.field(metadata=metadata, **kwargs)


# Private Methods ------------------------------------------------------------------------------------------------------

def _forward(hint: Any) -> Any:
    if isinstance(hint, str):
        return ForwardRef(hint)
    return hint


def _hint_repr(hint: Any) -> str:
    if isinstance(hint, ForwardRef):
        return repr(hint.__forward_arg__)
    return getattr(hint, "__name__", None) or repr(hint)
