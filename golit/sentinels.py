"""
Sentinel for arguments that were not provided.

UNSET distinguishes an omitted keyword argument from an explicit None or False,
which matters for options merging where False is a meaningful override.

Example:
    >>> def merge(self, single_line: bool | UnsetType = UNSET): ...
    >>> single_line = self.single_line if single_line is UNSET else single_line
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any, Final

__all__ = [
    'UNSET',
    'UnsetType',
    'ifnotunset',
]


# Sentinel Types -------------------------------------------------------------------------------------------------------

class UnsetType:
    """Sentinel type for UNSET. Singleton and falsy."""
    __slots__ = ()

    _instance: 'UnsetType | None' = None

    def __new__(cls) -> 'UnsetType':
        """Ensures singleton behavior."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return '<UNSET>'

    def __bool__(self) -> bool:
        return False


# Sentinel Objects -----------------------------------------------------------------------------------------------------

UNSET: Final[UnsetType] = UnsetType()
"""
Sentinel representing an unprovided optional argument.

Use with identity check: `if arg is UNSET:`
"""


# Methods --------------------------------------------------------------------------------------------------------------

def ifnotunset(value: Any, *, default: Any = None) -> Any:
    """Return value unless it is UNSET, otherwise the default."""
    return default if value is UNSET else value
