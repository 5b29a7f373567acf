"""
Go type descriptors.

A GoType describes a Go type the way reflect.Type does: its kind, its name and
declaring package when the type is named, and its components (element, key, length,
fields, parameters). Descriptors are canonical: every constructor in this module
returns the same object for the same arguments, so descriptors compare by identity.

The package path of a type declared in Python is the module that declares it;
the default string form qualifies a named type with the last component of that
path, the way Go qualifies types with the package name.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import threading
from dataclasses import dataclass
from enum import StrEnum, unique
from typing import Any, Callable, Iterable, Mapping

# Local ----------------------------------------------------------------------------------------------------------------
from .kinds import Kind
from .tools import fmt_type, fmt_value


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class ChanDir(StrEnum):
    """Channel direction, rendered as the prefix or infix of a chan type."""
    BOTH = "chan"
    RECV = "<-chan"
    SEND = "chan<-"


@dataclass(frozen=True)
class StructField:
    """
    A struct field as seen by the renderer.

    Attributes:
        name: Go field name printed in literals.
        type: Static Go type of the field.
        py_name: Attribute name on the Python object.
        exported: Unexported fields are never printed, whatever the options say.
    """
    name: str
    type: "GoType"
    py_name: str
    exported: bool = True


class GoType:
    """
    Descriptor of a single Go type.

    Build instances through the module constructors (array_of, slice_of, named, ...)
    rather than directly, so that identical types share one descriptor.
    """

    __slots__ = (
        "kind",
        "name",
        "pkg_path",
        "elem",
        "key",
        "length",
        "dir",
        "params",
        "results",
        "py_type",
        "_fields",
        "_fields_resolver",
    )

    def __init__(self,
                 kind: Kind,
                 *,
                 name: str = "",
                 pkg_path: str = "",
                 elem: "GoType | None" = None,
                 key: "GoType | None" = None,
                 length: int = 0,
                 dir: ChanDir = ChanDir.BOTH,
                 params: tuple["GoType", ...] = (),
                 results: tuple["GoType", ...] = (),
                 fields: tuple[StructField, ...] | None = None,
                 fields_resolver: Callable[[], Iterable[StructField]] | None = None,
                 py_type: Any = None,
                 ):
        if not isinstance(kind, Kind):
            raise TypeError(f"kind must be Kind, but got {fmt_type(kind)}")
        self.kind = kind
        self.name = name
        self.pkg_path = pkg_path
        self.elem = elem
        self.key = key
        self.length = length
        self.dir = dir
        self.params = params
        self.results = results
        self.py_type = py_type
        self._fields = fields
        self._fields_resolver = fields_resolver

    @property
    def fields(self) -> tuple[StructField, ...]:
        """
        Struct fields in declaration order.

        Fields of types declared in Python are resolved on first access, which lets a
        struct refer to itself through a pointer field.
        """
        if self.kind is not Kind.STRUCT:
            raise TypeError(f"fields of non-struct type {self.go_string()}")
        if self._fields is None:
            with _fields_lock:
                if self._fields is None:
                    resolver = self._fields_resolver
                    self._fields = tuple(resolver()) if resolver is not None else ()
                    self._fields_resolver = None
        return self._fields

    @property
    def is_named(self) -> bool:
        return bool(self.name)

    @property
    def is_builtin(self) -> bool:
        """Predeclared types such as int or string: named, but declared in no package."""
        return bool(self.name) and not self.pkg_path

    @property
    def pkg_name(self) -> str:
        """Last component of the package path, used to qualify the default string form."""
        return self.pkg_path.rpartition(".")[2]

    def go_string(self) -> str:
        """
        Default string form of the type, as reflect.Type.String() prints it.

        Examples:
            >>> slice_of(UINT8).go_string()
            '[]uint8'
            >>> map_of(STRING, pointer_to(slice_of(INT))).go_string()
            'map[string]*[]int'
        """
        if self.name:
            if self.pkg_path:
                return f"{self.pkg_name}.{self.name}"
            return self.name

        kind = self.kind
        if kind is Kind.ARRAY:
            return f"[{self.length}]{self.elem.go_string()}"
        if kind is Kind.SLICE:
            return f"[]{self.elem.go_string()}"
        if kind is Kind.MAP:
            return f"map[{self.key.go_string()}]{self.elem.go_string()}"
        if kind is Kind.PTR:
            return f"*{self.elem.go_string()}"
        if kind is Kind.CHAN:
            return _chan_string(self.dir, self.elem.go_string())
        if kind is Kind.FUNC:
            return _func_string([p.go_string() for p in self.params],
                                [r.go_string() for r in self.results])
        if kind is Kind.INTERFACE:
            return "interface {}"
        if kind is Kind.STRUCT:
            return "struct {}"
        return str(kind)

    def __repr__(self) -> str:
        return f"GoType({self.go_string()})"


# Builtin Types --------------------------------------------------------------------------------------------------------

def _builtin(kind: Kind) -> GoType:
    return GoType(kind, name=str(kind))


BOOL = _builtin(Kind.BOOL)
INT = _builtin(Kind.INT)
INT8 = _builtin(Kind.INT8)
INT16 = _builtin(Kind.INT16)
INT32 = _builtin(Kind.INT32)
INT64 = _builtin(Kind.INT64)
UINT = _builtin(Kind.UINT)
UINT8 = _builtin(Kind.UINT8)
UINT16 = _builtin(Kind.UINT16)
UINT32 = _builtin(Kind.UINT32)
UINT64 = _builtin(Kind.UINT64)
UINTPTR = _builtin(Kind.UINTPTR)
FLOAT32 = _builtin(Kind.FLOAT32)
FLOAT64 = _builtin(Kind.FLOAT64)
COMPLEX64 = _builtin(Kind.COMPLEX64)
COMPLEX128 = _builtin(Kind.COMPLEX128)
STRING = _builtin(Kind.STRING)
UNSAFE_POINTER = _builtin(Kind.UNSAFE_POINTER)
INTERFACE = GoType(Kind.INTERFACE)

# byte and rune are aliases in Go, so they print as uint8 and int32
BYTE = UINT8
RUNE = INT32

BUILTIN_TYPES = (
    BOOL, INT, INT8, INT16, INT32, INT64,
    UINT, UINT8, UINT16, UINT32, UINT64, UINTPTR,
    FLOAT32, FLOAT64, COMPLEX64, COMPLEX128,
    STRING, UNSAFE_POINTER,
)

_cache: dict[tuple, GoType] = {}

# Reentrant: resolving one struct may resolve the fields of the struct it names
_fields_lock = threading.RLock()


# Methods --------------------------------------------------------------------------------------------------------------

def array_of(elem: GoType, length: int) -> GoType:
    """Unnamed fixed-length array type [length]elem."""
    _check_type("array element", elem)
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError(f"array length must be int, but got {fmt_type(length)}")
    if length < 0:
        raise ValueError(f"array length must be non-negative, but got {fmt_value(length)}")
    return _cached((Kind.ARRAY, elem, length), lambda: GoType(Kind.ARRAY, elem=elem, length=length))


def slice_of(elem: GoType) -> GoType:
    """Unnamed slice type []elem."""
    _check_type("slice element", elem)
    return _cached((Kind.SLICE, elem), lambda: GoType(Kind.SLICE, elem=elem))


def map_of(key: GoType, elem: GoType) -> GoType:
    """Unnamed map type map[key]elem."""
    _check_type("map key", key)
    _check_type("map element", elem)
    return _cached((Kind.MAP, key, elem), lambda: GoType(Kind.MAP, key=key, elem=elem))


def pointer_to(elem: GoType) -> GoType:
    """Unnamed pointer type *elem."""
    _check_type("pointer element", elem)
    return _cached((Kind.PTR, elem), lambda: GoType(Kind.PTR, elem=elem))


def chan_of(elem: GoType, dir: ChanDir = ChanDir.BOTH) -> GoType:
    """Unnamed channel type chan elem."""
    _check_type("channel element", elem)
    dir = ChanDir(dir)
    return _cached((Kind.CHAN, elem, dir), lambda: GoType(Kind.CHAN, elem=elem, dir=dir))


def func_of(params: Iterable[GoType] = (), results: Iterable[GoType] = ()) -> GoType:
    """Unnamed function type func(params) results."""
    params = tuple(params)
    results = tuple(results)
    for t in params + results:
        _check_type("function signature", t)
    return _cached((Kind.FUNC, params, results), lambda: GoType(Kind.FUNC, params=params, results=results))


def named(name: str, pkg_path: str, underlying: GoType, py_type: Any = None) -> GoType:
    """
    Named type declared as `type name underlying` in package pkg_path.

    The named type shares the kind and the components of its underlying type.
    Structs get their own descriptor through struct_of instead.
    """
    _check_name(name, pkg_path)
    _check_type("underlying", underlying)
    if underlying.kind is Kind.STRUCT:
        return struct_of(name, pkg_path, lambda: underlying.fields, py_type=py_type)

    def build() -> GoType:
        return GoType(
            underlying.kind,
            name=name,
            pkg_path=pkg_path,
            elem=underlying.elem,
            key=underlying.key,
            length=underlying.length,
            dir=underlying.dir,
            params=underlying.params,
            results=underlying.results,
            py_type=py_type,
        )

    return _cached(("named", pkg_path, name, underlying), build)


def struct_of(name: str,
              pkg_path: str,
              fields: Iterable[StructField] | Callable[[], Iterable[StructField]],
              py_type: Any = None,
              ) -> GoType:
    """
    Named struct type. Pass a callable for fields to resolve them on first use.
    """
    _check_name(name, pkg_path)
    key = ("struct", pkg_path, name, py_type)
    if callable(fields):
        return _cached(key, lambda: GoType(Kind.STRUCT, name=name, pkg_path=pkg_path,
                                           fields_resolver=fields, py_type=py_type))
    fields = tuple(fields)
    return _cached(key, lambda: GoType(Kind.STRUCT, name=name, pkg_path=pkg_path,
                                       fields=fields, py_type=py_type))


def type_name(typ: GoType, package_map: Mapping[str, str]) -> str:
    """
    Render a type for output, applying package aliases.

    Unnamed types are rendered from their components, so an alias applies to every
    named type they mention. A named type declared in a package absent from the map
    keeps its default string form; an empty alias drops the qualifier; any other
    alias replaces it.

    Examples:
        >>> type_name(slice_of(param), {"abi": ""})
        '[]AbiParam'
        >>> type_name(param, {"abi": "test"})
        'test.AbiParam'
    """
    if not typ.name:
        kind = typ.kind
        if kind is Kind.ARRAY:
            return f"[{typ.length}]{type_name(typ.elem, package_map)}"
        if kind is Kind.SLICE:
            return f"[]{type_name(typ.elem, package_map)}"
        if kind is Kind.MAP:
            return f"map[{type_name(typ.key, package_map)}]{type_name(typ.elem, package_map)}"
        if kind is Kind.PTR:
            return f"*{type_name(typ.elem, package_map)}"
        if kind is Kind.CHAN:
            return _chan_string(typ.dir, type_name(typ.elem, package_map))
        if kind is Kind.FUNC:
            return _func_string([type_name(p, package_map) for p in typ.params],
                                [type_name(r, package_map) for r in typ.results])
        return typ.go_string()

    if not typ.pkg_path or typ.pkg_path not in package_map:
        return typ.go_string()
    alias = package_map[typ.pkg_path]
    if not alias:
        return typ.name
    return f"{alias}.{typ.name}"


# Private Methods ------------------------------------------------------------------------------------------------------

def _cached(key: tuple, build: Callable[[], GoType]) -> GoType:
    typ = _cache.get(key)
    if typ is None:
        typ = _cache.setdefault(key, build())
    return typ


def _check_type(role: str, typ: Any):
    if not isinstance(typ, GoType):
        raise TypeError(f"{role} type must be GoType, but got {fmt_type(typ)}")


def _check_name(name: Any, pkg_path: Any):
    if not isinstance(name, str) or not name:
        raise ValueError(f"type name must be a non-empty str, but got {fmt_value(name)}")
    if not isinstance(pkg_path, str):
        raise TypeError(f"package path must be str, but got {fmt_type(pkg_path)}")


def _chan_string(dir: ChanDir, elem: str) -> str:
    if dir is ChanDir.SEND:
        return f"chan<- {elem}"
    if dir is ChanDir.RECV:
        return f"<-chan {elem}"
    return f"chan {elem}"


def _func_string(params: list[str], results: list[str]) -> str:
    head = f"func({', '.join(params)})"
    if not results:
        return head
    if len(results) == 1:
        return f"{head} {results[0]}"
    return f"{head} ({', '.join(results)})"
