"""
Introspection of Python values as Go values.

Two questions are answered here: which Go type a Python type hint (or a bare Python
value) stands for, and how to walk a Python object as a value of a given Go type.

    >>> type_of_hint(list[int]).go_string()
    '[]int'
    >>> value_of({"a": 1}).type.go_string()
    'map[string]int'

Python has no pointers and no typed nil, so the mapping follows two rules:

- the value of a pointer is its pointee, and None is the nil pointer;
- None stands for the zero value of any type: nil for nilable kinds, and false, 0,
  "" or an all-zero composite otherwise.

Struct types come from dataclasses and NamedTuple classes. Field types are resolved
on first use with typing.get_type_hints, so a struct may refer to itself.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import builtins
import collections.abc as abc
import dataclasses
import logging
import sys
import types
from enum import Enum
from typing import (
    Annotated,
    Any,
    ForwardRef,
    Iterator,
    Literal,
    NewType,
    TypeVar,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

# Local ----------------------------------------------------------------------------------------------------------------
from . import hints
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
    INTERFACE,
    STRING,
    UINT,
    UINT16,
    UINT32,
    UINT64,
    UINT8,
    UINTPTR,
    UNSAFE_POINTER,
    GoType,
    StructField,
    array_of,
    chan_of,
    func_of,
    map_of,
    named,
    pointer_to,
    slice_of,
    struct_of,
)
from .hints import ArrayHint, ChanHint, PtrHint
from .kinds import COMPLEX_KINDS, FLOAT_KINDS, SIGNED_KINDS, UNSIGNED_KINDS, Kind, is_nilable
from .tools import fmt_type, fmt_value

logger = logging.getLogger(__name__)

BYTES = slice_of(UINT8)

_PY_TYPES = {
    bool: BOOL,
    int: INT,
    float: FLOAT64,
    complex: COMPLEX128,
    str: STRING,
}

_SIZED_TYPES = {
    hints.int8: INT8,
    hints.int16: INT16,
    hints.int32: INT32,
    hints.int64: INT64,
    hints.uint: UINT,
    hints.uint8: UINT8,
    hints.uint16: UINT16,
    hints.uint32: UINT32,
    hints.uint64: UINT64,
    hints.uintptr: UINTPTR,
    hints.float32: FLOAT32,
    hints.float64: FLOAT64,
    hints.complex64: COMPLEX64,
    hints.complex128: COMPLEX128,
    hints.UnsafePointer: UNSAFE_POINTER,
}

_SEQUENCE_ORIGINS = (list, tuple, abc.Sequence, abc.MutableSequence)

_MAPPING_ORIGINS = (dict, abc.Mapping, abc.MutableMapping)

_INT_KINDS = SIGNED_KINDS | UNSIGNED_KINDS | {Kind.UNSAFE_POINTER}

_hint_cache: dict[tuple, GoType] = {}


# Classes --------------------------------------------------------------------------------------------------------------

class Value:
    """
    A Python object viewed as a value of a Go type.

    The object is never modified. Children (elements, fields, map entries, pointees)
    are produced as new Value instances on demand.
    """

    __slots__ = ("type", "obj")

    def __init__(self, typ: GoType, obj: Any = None):
        self.type = typ
        self.obj = obj

    @property
    def kind(self) -> Kind:
        return self.type.kind

    def is_nil(self) -> bool:
        """True for a nilable value holding None."""
        return self.obj is None and is_nilable(self.type.kind)

    def scalar(self) -> Any:
        """
        The plain Python bool, int, float, complex or str behind a scalar value.

        None becomes the zero value; enum members and subclasses of the builtin
        types are reduced to the builtin value.
        """
        kind = self.type.kind
        obj = self.obj
        if isinstance(obj, Enum):
            obj = obj.value
        if kind is Kind.BOOL:
            return bool(obj)
        if kind in _INT_KINDS:
            return 0 if obj is None else int(obj)
        if kind in FLOAT_KINDS:
            return 0.0 if obj is None else float(obj)
        if kind in COMPLEX_KINDS:
            return 0j if obj is None else complex(obj)
        if kind is Kind.STRING:
            return "" if obj is None else str.__str__(obj)
        raise TypeError(f"{self.type.go_string()} is not a scalar type")

    def len(self) -> int:
        kind = self.type.kind
        if kind is Kind.ARRAY:
            return self.type.length
        if kind in (Kind.SLICE, Kind.MAP):
            return 0 if self.obj is None else len(self.obj)
        raise TypeError(f"len of {self.type.go_string()}")

    def index(self, i: int) -> "Value":
        """Element i of an array or slice."""
        kind = self.type.kind
        if kind not in (Kind.ARRAY, Kind.SLICE):
            raise TypeError(f"index of {self.type.go_string()}")
        if self.obj is None:
            if kind is Kind.SLICE or not 0 <= i < self.type.length:
                raise IndexError(f"index {i} out of range for {self.type.go_string()}")
            return value_at(self.type.elem, None)
        return value_at(self.type.elem, self.obj[i])

    def elements(self) -> Iterator["Value"]:
        """
        Elements of an array or slice in order.

        Raises:
            TypeError: At the call, if the value is not an array or slice.
        """
        kind = self.type.kind
        if kind not in (Kind.ARRAY, Kind.SLICE):
            raise TypeError(f"elements of {self.type.go_string()}")
        if self.obj is None:
            count = self.type.length if kind is Kind.ARRAY else 0
            return (value_at(self.type.elem, None) for _ in range(count))
        return (value_at(self.type.elem, item) for item in self.obj)

    def bytes(self) -> bytes:
        """Contents of a byte array or byte slice."""
        if self.type.kind not in (Kind.ARRAY, Kind.SLICE) or self.type.elem.kind is not Kind.UINT8:
            raise TypeError(f"bytes of {self.type.go_string()}")
        obj = self.obj
        if obj is None:
            return bytes(self.type.length) if self.type.kind is Kind.ARRAY else b""
        if isinstance(obj, (bytes, bytearray, memoryview)):
            return bytes(obj)
        return bytes(0 if b is None else b for b in obj)

    def fields(self) -> Iterator[tuple[StructField, "Value"]]:
        """
        Struct fields in declaration order, unexported ones included.

        Raises:
            TypeError: At the call, if the value is not a struct.
        """
        if self.type.kind is not Kind.STRUCT:
            raise TypeError(f"fields of {self.type.go_string()}")
        return self._iter_fields()

    def map_items(self) -> Iterator[tuple["Value", "Value"]]:
        """
        Map entries in the iteration order of the underlying mapping.

        Raises:
            TypeError: At the call, if the value is not a map.
        """
        if self.type.kind is not Kind.MAP:
            raise TypeError(f"map items of {self.type.go_string()}")
        if self.obj is None:
            return iter(())
        key_type, elem_type = self.type.key, self.type.elem
        return ((value_at(key_type, key), value_at(elem_type, item)) for key, item in self.obj.items())

    def elem(self) -> "Value":
        """The value a pointer points to."""
        if self.type.kind is not Kind.PTR:
            raise TypeError(f"elem of {self.type.go_string()}")
        if self.obj is None:
            raise ValueError(f"nil pointer dereference of {self.type.go_string()}")
        return value_at(self.type.elem, self.obj)

    def __repr__(self) -> str:
        return f"Value({self.type.go_string()}, {self.obj!r})"

    def _iter_fields(self) -> Iterator[tuple[StructField, "Value"]]:
        obj = self.obj
        for field in self.type.fields:
            item = None if obj is None else getattr(obj, field.py_name)
            yield field, value_at(field.type, item)


# Methods --------------------------------------------------------------------------------------------------------------

def type_of_hint(hint: Any, namespace: dict | None = None) -> GoType:
    """
    Resolve a Python type hint to its Go type.

    Args:
        hint: A type, a typing construct, a golit.hints marker, a GoType, or a string
            naming a type.
        namespace: Globals used to resolve string and forward references.

    Returns:
        The canonical GoType for the hint.

    Raises:
        TypeError: If the hint has no Go counterpart.

    Examples:
        >>> type_of_hint(dict[str, list[bytes]]).go_string()
        'map[string][][]uint8'
        >>> type_of_hint(Optional[Array[uint8, 4]]).go_string()
        '*[4]uint8'
    """
    if isinstance(hint, GoType):
        return hint
    hint = _resolve_forward(hint, namespace)

    key = (hint, 0 if namespace is None else id(namespace))
    try:
        typ = _hint_cache.get(key)
    except TypeError:
        return _type_of_hint(hint, namespace)

    if typ is None:
        typ = _hint_cache.setdefault(key, _type_of_hint(hint, namespace))
        logger.debug("resolved hint %r to %s", hint, typ.go_string())
    return typ


def type_of(obj: Any) -> GoType:
    """
    Infer the Go type of a Python value.

    Lists and tuples become slices and dicts become maps; the element type is the type
    shared by all non-None items, or interface {} when items disagree or there are none.
    None has no type of its own and maps to interface {}.

    Raises:
        TypeError: If the value has no Go counterpart (sets, arbitrary objects).
    """
    if isinstance(obj, Value):
        return obj.type
    cls = type(obj)

    builtin = _PY_TYPES.get(cls)
    if builtin is not None:
        return builtin
    if cls is bytes or cls is bytearray:
        return BYTES
    if cls is list or cls is tuple:
        return slice_of(_common_type(obj, "slice"))
    if cls is dict:
        return map_of(_common_type(obj.keys(), "map key"), _common_type(obj.values(), "map"))
    if obj is None:
        return INTERFACE

    if dataclasses.is_dataclass(cls) or _is_namedtuple(cls) or issubclass(cls, _NAMED_BASES):
        return type_of_hint(cls)
    if isinstance(obj, abc.Mapping):
        return map_of(_common_type(obj.keys(), "map key"), _common_type(obj.values(), "map"))
    if isinstance(obj, abc.Sequence) and not isinstance(obj, str):
        return slice_of(_common_type(obj, "slice"))
    if callable(obj):
        return func_of()
    raise TypeError(f"no Go type for value {fmt_value(obj)}")


def value_at(typ: GoType, obj: Any) -> Value:
    """
    View obj as a value stored in a location of static type typ.

    Interface locations take the dynamic type of the object, as Go boxes a concrete
    value into an interface. Other locations check that the object has a matching shape.

    Raises:
        TypeError: If obj cannot be a value of typ.
        ValueError: If an array value has the wrong length.
    """
    if isinstance(obj, Value):
        if typ.kind is Kind.INTERFACE or obj.type is typ:
            return obj
        raise TypeError(f"value of type {obj.type.go_string()} used as {typ.go_string()}")

    if typ.kind is Kind.INTERFACE:
        if obj is None:
            return Value(typ, None)
        return value_at(type_of(obj), obj)

    _check_shape(typ, obj)
    return Value(typ, obj)


def value_of(obj: Any, hint: Any = None) -> Value:
    """
    Wrap obj as a Go value, typed by hint when given and inferred otherwise.

    A hint is required for named non-struct types declared with NewType, since the
    object itself (an int, a list, bytes) does not carry that name.
    """
    if hint is None:
        return value_at(INTERFACE, obj)
    return value_at(type_of_hint(hint), obj)


def is_zero(value: Value, static: GoType | None = None) -> bool:
    """
    Whether the value is the zero value of its type.

    Scalars compare to false, 0 or "". Nilable kinds are zero only when nil. Arrays and
    structs are zero when every element or field is, unexported fields included.

    Args:
        value: The value to check.
        static: Static type of the location holding the value. An interface location
            holds its dynamic value, but is zero only when it is nil.
    """
    obj = value.obj
    if obj is None:
        return True
    if static is not None and static.kind is Kind.INTERFACE:
        return False

    kind = value.kind
    if is_nilable(kind):
        return False
    if kind is Kind.ARRAY:
        if value.type.elem.kind is Kind.UINT8:
            return not any(value.bytes())
        elem = value.type.elem
        return all(is_zero(item, elem) for item in value.elements())
    if kind is Kind.STRUCT:
        return all(is_zero(item, field.type) for field, item in value.fields())
    if kind is Kind.STRING:
        return value.scalar() == ""
    return value.scalar() == 0


# Private Methods ------------------------------------------------------------------------------------------------------

_NAMED_BASES = (str, int, float, complex, bytes, bytearray, list, dict)


def _type_of_hint(hint: Any, namespace: dict | None) -> GoType:
    if hint is Any or hint is object or isinstance(hint, TypeVar):
        return INTERFACE

    if isinstance(hint, NewType):
        sized = _SIZED_TYPES.get(hint)
        if sized is not None:
            return sized
        owner = _module_namespace(hint.__module__)
        return named(hint.__name__, hint.__module__, type_of_hint(hint.__supertype__, owner), py_type=hint)

    if isinstance(hint, ArrayHint):
        return array_of(type_of_hint(hint.elem, namespace), hint.length)
    if isinstance(hint, PtrHint):
        return pointer_to(type_of_hint(hint.elem, namespace))
    if isinstance(hint, ChanHint):
        return chan_of(type_of_hint(hint.elem, namespace), hint.dir)

    origin = get_origin(hint)
    args = get_args(hint)

    if origin is Annotated:
        return type_of_hint(args[0], namespace)

    if origin is Union or origin is types.UnionType:
        members = [arg for arg in args if arg is not type(None)]
        if len(members) == 1 and len(args) == 2:
            inner = type_of_hint(members[0], namespace)
            return inner if is_nilable(inner.kind) else pointer_to(inner)
        return INTERFACE

    if origin is Literal:
        found = {type_of(arg) for arg in args}
        return found.pop() if len(found) == 1 else INTERFACE

    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return slice_of(type_of_hint(args[0], namespace))
        found = {type_of_hint(arg, namespace) for arg in args}
        return slice_of(found.pop() if len(found) == 1 else INTERFACE)

    if origin in _SEQUENCE_ORIGINS:
        return slice_of(type_of_hint(args[0], namespace) if args else INTERFACE)

    if origin in _MAPPING_ORIGINS:
        if not args:
            return map_of(INTERFACE, INTERFACE)
        return map_of(type_of_hint(args[0], namespace), type_of_hint(args[1], namespace))

    if origin is abc.Callable:
        return _func_type(args, namespace)

    if isinstance(origin, type):
        # parametrized user generic such as Abi[int]: the class decides
        return type_of_hint(origin, namespace)

    if not isinstance(hint, type):
        raise TypeError(f"no Go type for type hint {hint!r}")

    builtin = _PY_TYPES.get(hint)
    if builtin is not None:
        return builtin
    if hint is bytes or hint is bytearray:
        return BYTES
    if hint in _SEQUENCE_ORIGINS:
        return slice_of(INTERFACE)
    if hint in _MAPPING_ORIGINS:
        return map_of(INTERFACE, INTERFACE)
    if hint is abc.Callable:
        return func_of()
    if dataclasses.is_dataclass(hint) or _is_namedtuple(hint):
        return _struct_type(hint)
    return _named_type(hint)


def _func_type(args: tuple, namespace: dict | None) -> GoType:
    if not args:
        return func_of()
    params, result = args
    param_types = [] if params is Ellipsis else [type_of_hint(p, namespace) for p in params]
    result_types = [] if result is None or result is type(None) else [type_of_hint(result, namespace)]
    return func_of(param_types, result_types)


def _struct_type(cls: type) -> GoType:
    def resolve_fields() -> list[StructField]:
        field_hints = get_type_hints(cls, include_extras=True)
        owner = _module_namespace(cls.__module__)
        if dataclasses.is_dataclass(cls):
            entries = [(f.name, f.metadata.get(hints.GO_NAME, f.name)) for f in dataclasses.fields(cls)]
        else:
            entries = [(name, name) for name in cls._fields]

        fields = [
            StructField(
                name=go_name,
                type=type_of_hint(field_hints.get(py_name, Any), owner),
                py_name=py_name,
                exported=not py_name.startswith("_"),
            )
            for py_name, go_name in entries
        ]
        logger.debug("resolved %d fields of struct %s.%s", len(fields), cls.__module__, cls.__qualname__)
        return fields

    return struct_of(cls.__name__, cls.__module__, resolve_fields, py_type=cls)


def _named_type(cls: type) -> GoType:
    owner = _module_namespace(cls.__module__)
    if issubclass(cls, (bytes, bytearray)):
        underlying = BYTES
    elif issubclass(cls, str):
        underlying = STRING
    elif issubclass(cls, int):
        underlying = INT
    elif issubclass(cls, float):
        underlying = FLOAT64
    elif issubclass(cls, complex):
        underlying = COMPLEX128
    elif issubclass(cls, list):
        elem, = _generic_args(cls, list, owner) or (INTERFACE,)
        underlying = slice_of(elem)
    elif issubclass(cls, dict):
        key, elem = _generic_args(cls, dict, owner) or (INTERFACE, INTERFACE)
        underlying = map_of(key, elem)
    else:
        raise TypeError(f"no Go type for class {fmt_type(cls, show_module=True)}")
    return named(cls.__name__, cls.__module__, underlying, py_type=cls)


def _generic_args(cls: type, base: type, namespace: dict) -> tuple[GoType, ...]:
    """Type arguments given to base in the class bases, e.g. (INT,) for class Ids(list[int])."""
    for klass in cls.__mro__:
        for orig in klass.__dict__.get("__orig_bases__", ()):
            if get_origin(orig) is base:
                return tuple(type_of_hint(arg, namespace) for arg in get_args(orig))
    return ()


def _common_type(items: abc.Iterable, what: str) -> GoType:
    found = None
    for item in items:
        if item is None:
            continue
        typ = type_of(item)
        if found is None:
            found = typ
        elif typ is not found:
            logger.debug("mixed %s element types %s and %s, using interface {}",
                         what, found.go_string(), typ.go_string())
            return INTERFACE
    return INTERFACE if found is None else found


def _check_shape(typ: GoType, obj: Any):
    if obj is None:
        return

    kind = typ.kind
    if kind is Kind.BOOL:
        ok = isinstance(obj, bool)
    elif kind in _INT_KINDS:
        ok = isinstance(obj, int) and not isinstance(obj, bool)
    elif kind in FLOAT_KINDS:
        ok = isinstance(obj, (int, float)) and not isinstance(obj, bool)
    elif kind in COMPLEX_KINDS:
        ok = isinstance(obj, (int, float, complex)) and not isinstance(obj, bool)
    elif kind is Kind.STRING:
        ok = isinstance(obj, str)
    elif kind is Kind.ARRAY:
        ok = _is_sequence(obj)
        if ok and len(obj) != typ.length:
            raise ValueError(f"{typ.go_string()} value must have {typ.length} items, but got {len(obj)}")
    elif kind is Kind.SLICE:
        ok = _is_sequence(obj)
    elif kind is Kind.MAP:
        ok = isinstance(obj, abc.Mapping)
    elif kind is Kind.STRUCT:
        ok = not isinstance(typ.py_type, type) or isinstance(obj, typ.py_type)
    elif kind is Kind.PTR:
        _check_shape(typ.elem, obj)
        ok = True
    else:
        ok = True

    if not ok:
        raise TypeError(f"{fmt_type(obj)} cannot be a value of Go type {typ.go_string()}")


def _is_sequence(obj: Any) -> bool:
    if isinstance(obj, (list, tuple, bytes, bytearray, memoryview)):
        return True
    return isinstance(obj, abc.Sequence) and not isinstance(obj, str)


def _is_namedtuple(cls: Any) -> bool:
    return isinstance(cls, type) and issubclass(cls, tuple) and hasattr(cls, "_fields")


def _module_namespace(module_name: str) -> dict:
    module = sys.modules.get(module_name)
    return vars(module) if module is not None else {}


def _resolve_forward(hint: Any, namespace: dict | None) -> Any:
    if isinstance(hint, str):
        name = hint
    elif isinstance(hint, ForwardRef):
        name = hint.__forward_arg__
        module = getattr(hint, "__forward_module__", None)
        if module is not None:
            namespace = _module_namespace(module)
    else:
        return hint

    namespace = namespace if namespace is not None else {}
    head, *rest = name.split(".")
    try:
        obj = namespace[head] if head in namespace else getattr(builtins, head)
        for part in rest:
            obj = getattr(obj, part)
    except AttributeError:
        raise TypeError(f"cannot resolve forward reference {name!r}") from None
    return obj
