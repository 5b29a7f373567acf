"""
Recursive Go literal emitter.

append_any walks a Value and appends the text of its Go literal to a list of string
chunks. Builtin scalars take a fast path straight to their literal; everything else
dispatches on the kind of its type:

    named scalars       TypeName(literal), or literal when the type is elided
    chan, func          TypeName(nil), or nil
    pointers            &literal of the pointee, or nil
    arrays, slices      TypeName{...}, byte arrays and slices as a hex block
    structs, maps       TypeName{...}

The type name is elided where the enclosing literal already fixes the type: scalar
and nil struct fields, and elements of lists and maps unless force_constructor_name
is set or the element type is an interface.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from dataclasses import dataclass, replace
from typing import Callable

# Local ----------------------------------------------------------------------------------------------------------------
from .formatters import format_bool, format_byte, format_complex, format_float, format_hex, format_int, quote
from .gotypes import (
    BOOL,
    COMPLEX128,
    COMPLEX64,
    FLOAT32,
    FLOAT64,
    INT,
    INT16,
    INT32,
    INT64,
    INT8,
    STRING,
    UINT,
    UINT16,
    UINT32,
    UINT64,
    UINT8,
    UINTPTR,
    UNSAFE_POINTER,
    GoType,
    type_name,
)
from .kinds import COMPLEX_KINDS, FLOAT_KINDS, SIGNED_KINDS, UNSIGNED_KINDS, Kind, is_composite, is_primitive
from .kinds import may_require_multiline
from .options import ReprOptions
from .reflect import BYTES, Value, is_zero

# Lists of scalars up to and including this length stay on one line in multi-line mode
MAX_INLINE_ITEMS = 48

# Bytes per row of a multi-line byte block
BYTES_PER_ROW = 8


# Classes --------------------------------------------------------------------------------------------------------------

class UnsupportedValueError(TypeError):
    """
    The value has no Go literal form.

    Raised for an interface value reaching dispatch without a concrete value (a nil
    element of []interface {}, for instance) and for a pointer to a non-composite type.
    """


@dataclass(frozen=True, slots=True)
class RenderState:
    """
    Per-call state threaded through the recursion.

    Each descent derives a new state, so siblings never see each other's changes.

    Attributes:
        indent: Nesting depth in multi-line output.
        elide_type: The enclosing literal already fixes the type of the next value.
    """
    indent: int = 0
    elide_type: bool = False

    def nested(self, elide_type: bool) -> "RenderState":
        """State for a child placed on its own line, one level deeper."""
        return RenderState(indent=self.indent + 1, elide_type=elide_type)

    def inline(self, elide_type: bool) -> "RenderState":
        """State for a child placed on the current line."""
        return replace(self, elide_type=elide_type)


# Methods --------------------------------------------------------------------------------------------------------------

def append_any(out: list[str], value: Value, options: ReprOptions, state: RenderState) -> list[str]:
    """
    Append the Go literal of value to out and return out.

    Raises:
        UnsupportedValueError: For values with no literal form.
        TypeError: If an object does not match the shape of its Go type.
        ValueError: If a number does not fit its Go type.
    """
    fast = _FAST_PATH.get(value.type)
    if fast is not None:
        out.append(fast(value.scalar()))
        return out

    if value.type is BYTES and not value.is_nil():
        if not state.elide_type:
            out.append("[]uint8")
        return _append_bytes(out, value.bytes(), options, state.indent)

    return _append_generic(out, value, options, state)


# Private Methods ------------------------------------------------------------------------------------------------------

def _scalar_literal(value: Value) -> str:
    kind = value.kind
    x = value.scalar()
    if kind is Kind.BOOL:
        return format_bool(x)
    if kind is Kind.UINTPTR or kind is Kind.UNSAFE_POINTER:
        return format_hex(x, kind)
    if kind in SIGNED_KINDS or kind in UNSIGNED_KINDS:
        return format_int(x, kind)
    if kind in FLOAT_KINDS:
        return format_float(x, 32 if kind is Kind.FLOAT32 else 64)
    if kind in COMPLEX_KINDS:
        return format_complex(x, 64 if kind is Kind.COMPLEX64 else 128)
    return quote(x)


_FAST_PATH: dict[GoType, Callable[[object], str]] = {
    BOOL: format_bool,
    INT: format_int,
    INT8: lambda x: format_int(x, Kind.INT8),
    INT16: lambda x: format_int(x, Kind.INT16),
    INT32: lambda x: format_int(x, Kind.INT32),
    INT64: lambda x: format_int(x, Kind.INT64),
    UINT: lambda x: format_int(x, Kind.UINT),
    UINT8: format_byte,
    UINT16: lambda x: format_int(x, Kind.UINT16),
    UINT32: lambda x: format_int(x, Kind.UINT32),
    UINT64: lambda x: format_int(x, Kind.UINT64),
    UINTPTR: format_hex,
    UNSAFE_POINTER: lambda x: format_hex(x, Kind.UNSAFE_POINTER),
    FLOAT32: lambda x: format_float(x, 32),
    FLOAT64: format_float,
    COMPLEX64: lambda x: format_complex(x, 64),
    COMPLEX128: format_complex,
    STRING: quote,
}


def _append_generic(out: list[str], value: Value, options: ReprOptions, state: RenderState) -> list[str]:
    typ = value.type
    kind = typ.kind

    if is_primitive(kind) or kind is Kind.UNSAFE_POINTER:
        return _append_cast(out, typ, _scalar_literal(value), options, state)

    if kind is Kind.CHAN or kind is Kind.FUNC:
        return _append_cast(out, typ, "nil", options, state)

    if kind is Kind.INTERFACE:
        raise UnsupportedValueError(f"cannot print a bare interface value of type {typ.go_string()}; "
                                    f"a concrete value is required")

    if kind is Kind.PTR:
        if not is_composite(typ.elem.kind):
            raise UnsupportedValueError(f"cannot print pointer type {typ.go_string()}: Go has no literal "
                                        f"for the address of a {typ.elem.kind!s} value")
        if value.is_nil():
            out.append("nil")
            return out
        # an elided &T is written as a bare composite literal
        if not state.elide_type:
            out.append("&")
        return append_any(out, value.elem(), options, state)

    if kind is Kind.ARRAY:
        if not state.elide_type:
            out.append(type_name(typ, options.package_map))
        if typ.elem is UINT8:
            return _append_bytes(out, value.bytes(), options, state.indent)
        return _append_list(out, value, options, state)

    if kind is Kind.SLICE:
        if not state.elide_type:
            out.append(type_name(typ, options.package_map))
        if value.is_nil():
            out.append("nil" if state.elide_type else "(nil)")
            return out
        if typ.elem is UINT8:
            return _append_bytes(out, value.bytes(), options, state.indent)
        return _append_list(out, value, options, state)

    if kind is Kind.STRUCT:
        if not state.elide_type:
            out.append(type_name(typ, options.package_map))
        return _append_struct(out, value, options, state)

    if kind is Kind.MAP:
        if not state.elide_type:
            out.append(type_name(typ, options.package_map))
        if value.is_nil():
            out.append("nil" if state.elide_type else "(nil)")
            return out
        return _append_map(out, value, options, state)

    raise UnsupportedValueError(f"cannot print value of kind {kind!s}")


def _append_cast(out: list[str], typ: GoType, literal: str, options: ReprOptions, state: RenderState) -> list[str]:
    if state.elide_type:
        out.append(literal)
    else:
        name = type_name(typ, options.package_map)
        if not typ.name and typ.kind in (Kind.CHAN, Kind.FUNC):
            # func(int) string(nil) would parse as a function type returning string(nil)
            name = f"({name})"
        out.append(name)
        out.append("(")
        out.append(literal)
        out.append(")")
    return out


def _elide_elem(elem: GoType, options: ReprOptions) -> bool:
    """Whether list or map elements of static type elem may drop their type name."""
    if elem.kind is Kind.INTERFACE:
        return False
    return is_primitive(elem.kind) or not options.force_constructor_name


def _append_list(out: list[str], value: Value, options: ReprOptions, state: RenderState) -> list[str]:
    elem_type = value.type.elem
    elide = _elide_elem(elem_type, options)
    count = value.len()

    if options.is_single_line or (not may_require_multiline(elem_type.kind) and count <= MAX_INLINE_ITEMS):
        out.append("{")
        child = state.inline(elide)
        for i, item in enumerate(value.elements()):
            if i:
                out.append(", ")
            append_any(out, item, options, child)
        out.append("}")
        return out

    out.append("{")
    if count:
        out.append("\n")
    child = state.nested(elide)
    inner = options.indent * child.indent
    for item in value.elements():
        out.append(inner)
        append_any(out, item, options, child)
        out.append(",\n")
    if count:
        out.append(options.indent * state.indent)
    out.append("}")
    return out


def _append_struct(out: list[str], value: Value, options: ReprOptions, state: RenderState) -> list[str]:
    single_line = options.is_single_line
    out.append("{")
    kept = 0
    inner = options.indent * (state.indent + 1)

    for field, item in value.fields():
        if not field.exported:
            continue
        if options.omit_zero_fields and is_zero(item, field.type):
            continue

        elide = is_primitive(field.type.kind) or item.is_nil()
        if single_line:
            if kept:
                out.append(", ")
            child = state.inline(elide)
        else:
            if not kept:
                out.append("\n")
            out.append(inner)
            child = state.nested(elide)
        kept += 1

        out.append(field.name)
        out.append(": ")
        append_any(out, item, options, child)
        if not single_line:
            out.append(",\n")

    if kept and not single_line:
        out.append(options.indent * state.indent)
    out.append("}")
    return out


def _append_map(out: list[str], value: Value, options: ReprOptions, state: RenderState) -> list[str]:
    elide_key = _elide_elem(value.type.key, options)
    elide_elem = _elide_elem(value.type.elem, options)

    if options.is_single_line:
        out.append("{")
        key_state = state.inline(elide_key)
        elem_state = state.inline(elide_elem)
        for i, (key, item) in enumerate(value.map_items()):
            if i:
                out.append(", ")
            append_any(out, key, options, key_state)
            out.append(": ")
            append_any(out, item, options, elem_state)
        out.append("}")
        return out

    out.append("{")
    key_state = state.nested(elide_key)
    elem_state = state.nested(elide_elem)
    inner = options.indent * key_state.indent
    count = 0
    for key, item in value.map_items():
        if not count:
            out.append("\n")
        count += 1
        out.append(inner)
        append_any(out, key, options, key_state)
        out.append(": ")
        append_any(out, item, options, elem_state)
        out.append(",\n")
    if count:
        out.append(options.indent * state.indent)
    out.append("}")
    return out


def _append_bytes(out: list[str], data: bytes, options: ReprOptions, indent: int) -> list[str]:
    """
    Byte block: {0x60, 0x80} on one line, or rows of eight bytes in multi-line mode.
    """
    if options.is_single_line or len(data) <= BYTES_PER_ROW:
        out.append("{")
        out.append(", ".join(format_byte(b) for b in data))
        out.append("}")
        return out

    inner = options.indent * (indent + 1)
    rows = (
        ", ".join(format_byte(b) for b in data[start:start + BYTES_PER_ROW])
        for start in range(0, len(data), BYTES_PER_ROW)
    )
    out.append("{\n")
    out.append(inner)
    out.append((",\n" + inner).join(rows))
    out.append(",\n")
    out.append(options.indent * indent)
    out.append("}")
    return out
