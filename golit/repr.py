"""
Print Python values as syntactically valid Go code.

Useful for generating Go fixtures, test vectors and lookup tables from Python data:

    >>> @dataclass
    ... class Data:
    ...     Number: int
    ...     String: str
    ...     List: list[int]
    >>> print(repr_str(Data(123, "hello world!", [10, 20, 30])))
    Data{
        Number: 123,
        String: "hello world!",
        List: []int{10, 20, 30},
    }

Output is multi-line by default and close to gofmt style, except that values in
struct literals are not column-aligned; run the result through gofmt for that.
Zero struct fields are omitted and bytes print in hex, eight per row in multi-line mode.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import sys
from typing import Any, TextIO

# Local ----------------------------------------------------------------------------------------------------------------
from .options import DEFAULT_OPTIONS, ReprOptions
from .reflect import value_of
from .render import RenderState, append_any
from .tools import fmt_type


# Methods --------------------------------------------------------------------------------------------------------------

def repr_str(value: Any, options: ReprOptions | None = None, *, hint: Any = None) -> str:
    """
    Format a value as a Go literal.

    Args:
        value: The value to print. Dataclasses and NamedTuples print as structs, lists
            and tuples as slices, dicts as maps.
        options: Layout and naming options, DEFAULT_OPTIONS when None.
        hint: Static type of the value, for values whose Go type cannot be inferred
            from the object alone (a NewType over a list or bytes, a sized integer).

    Returns:
        The literal, without a trailing newline.

    Raises:
        UnsupportedValueError: For values with no Go literal form.
        TypeError: If the value or hint has no Go counterpart or they disagree.
        ValueError: If a number does not fit its Go type.
    """
    options = _check_options(options)
    chunks = append_any([], value_of(value, hint), options, RenderState())
    return "".join(chunks)


def repr_bytes(value: Any, options: ReprOptions | None = None, *, hint: Any = None) -> bytes:
    """Same as repr_str, encoded as UTF-8."""
    return repr_str(value, options, hint=hint).encode("utf-8")


def repr_append(out: bytearray, value: Any, options: ReprOptions | None = None, *, hint: Any = None) -> bytearray:
    """
    Append the UTF-8 literal of value to out in place and return out.
    """
    if not isinstance(out, bytearray):
        raise TypeError(f"out must be bytearray, but got {fmt_type(out)}")
    out += repr_bytes(value, options, hint=hint)
    return out


def repr_print(value: Any,
               options: ReprOptions | None = None,
               *,
               hint: Any = None,
               file: TextIO | None = None,
               ) -> int:
    """
    Write the literal of value followed by a newline.

    Args:
        file: Text stream to write to, sys.stdout when None.

    Returns:
        Number of characters written, newline included.
    """
    text = repr_str(value, options, hint=hint) + "\n"
    stream = sys.stdout if file is None else file
    return stream.write(text)


# Private Methods ------------------------------------------------------------------------------------------------------

def _check_options(options: ReprOptions | None) -> ReprOptions:
    if options is None:
        return DEFAULT_OPTIONS
    if not isinstance(options, ReprOptions):
        raise TypeError(f"options must be ReprOptions, but got {fmt_type(options)}")
    return options
