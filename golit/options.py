"""
Rendering options.

ReprOptions is immutable: derive variants with merge() or the presets, and share
DEFAULT_OPTIONS freely between threads and calls.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from dataclasses import dataclass, field
from typing import Final, Mapping, Self

# Third-party ----------------------------------------------------------------------------------------------------------
from frozendict import frozendict

# Local ----------------------------------------------------------------------------------------------------------------
from .sentinels import UNSET, UnsetType, ifnotunset
from .tools import fmt_type, fmt_value


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class ReprOptions:
    """
    Layout and naming controls for Go literal output.

    Attributes:
        single_line: Put the whole literal on one line. An empty indent has the same effect.
        omit_zero_fields: Leave out struct fields that hold their zero value.
        force_constructor_name: Repeat the type name of every composite element inside
            lists and maps instead of the bare ``{...}`` form. Elements of interface
            type always carry their type name.
        package_map: Maps a package path (the module declaring a type) to the qualifier
            printed before its type names. An empty alias drops the qualifier, modules
            absent from the map keep their default ``module.Name`` form. The default
            strips the qualifier of types declared in ``__main__``.
        indent: Text repeated once per nesting level in multi-line output.

    Raises:
        TypeError: If an option has the wrong type.
    """
    single_line: bool = False
    omit_zero_fields: bool = True
    force_constructor_name: bool = False
    package_map: Mapping[str, str] = field(default_factory=lambda: frozendict({"__main__": ""}))
    indent: str = "\t"

    def __post_init__(self):
        """Validate and freeze fields"""
        for name in ("single_line", "omit_zero_fields", "force_constructor_name"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise TypeError(f"{name} must be bool, but got {fmt_type(value)}")

        if not isinstance(self.indent, str):
            raise TypeError(f"indent must be str, but got {fmt_type(self.indent)}")
        if self.indent.strip(" \t"):
            raise ValueError(f"indent must contain only spaces and tabs, but got {fmt_value(self.indent)}")

        if not isinstance(self.package_map, Mapping):
            raise TypeError(f"package_map must be a Mapping, but got {fmt_type(self.package_map)}")
        for pkg, alias in self.package_map.items():
            if not isinstance(pkg, str) or not isinstance(alias, str):
                raise TypeError(f"package_map entries must be str to str, but got "
                                f"{fmt_value(pkg)}: {fmt_value(alias)}")
        if not isinstance(self.package_map, frozendict):
            object.__setattr__(self, "package_map", frozendict(self.package_map))

    @classmethod
    def compact(cls) -> Self:
        """Everything on one line, zero fields omitted."""
        return cls(single_line=True)

    @classmethod
    def verbose(cls) -> Self:
        """
        Multi-line output that spells out every field and every element type name.

        Useful when the output is meant for review rather than for compilation as-is.
        """
        return cls(omit_zero_fields=False, force_constructor_name=True)

    @property
    def is_single_line(self) -> bool:
        return self.single_line or not self.indent

    def merge(self,
              single_line: bool | UnsetType = UNSET,
              omit_zero_fields: bool | UnsetType = UNSET,
              force_constructor_name: bool | UnsetType = UNSET,
              package_map: Mapping[str, str] | UnsetType = UNSET,
              indent: str | UnsetType = UNSET,
              ) -> Self:
        """
        Create a new ReprOptions instance with merged options.

        Parameters not provided (UNSET) are inherited from the current instance.
        A package_map given here replaces the current one rather than extending it.
        """
        return type(self)(
            single_line=ifnotunset(single_line, default=self.single_line),
            omit_zero_fields=ifnotunset(omit_zero_fields, default=self.omit_zero_fields),
            force_constructor_name=ifnotunset(force_constructor_name, default=self.force_constructor_name),
            package_map=ifnotunset(package_map, default=self.package_map),
            indent=ifnotunset(indent, default=self.indent),
        )

    def with_packages(self, aliases: Mapping[str, str]) -> Self:
        """
        Extend the package map, e.g. ``options.with_packages({"eth.abi": "abi"})``.
        """
        return self.merge(package_map=self.package_map | frozendict(aliases))


# Module-level ---------------------------------------------------------------------------------------------------------

DEFAULT_OPTIONS: Final[ReprOptions] = ReprOptions()
"""Options used when none are passed. Never modified by the renderer."""
