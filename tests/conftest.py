#
# Pytest Fixtures
#

# Standard library -----------------------------------------------------------------------------------------------------
import pathlib
import re
from typing import Callable

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
import abi
from golit.options import ReprOptions

DATA_DIR = pathlib.Path(__file__).parent / "data"


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture
def golden() -> Callable[[str], str]:
    """Load an expected Go literal from tests/data by file stem."""

    def _load(name: str) -> str:
        return (DATA_DIR / f"{name}.txt").read_text(encoding="utf-8")

    return _load


@pytest.fixture
def abi_options() -> ReprOptions:
    """Options that print types of the ABI fixture with the 'test.' qualifier of the golden files."""
    return ReprOptions(package_map={abi.__name__: "test"})


@pytest.fixture
def contract_bytes(golden) -> bytes:
    """Contract bytecode listed in the hex golden file."""
    return bytes(int(h, 16) for h in re.findall(r"0x([0-9a-f]{2})", golden("bytes_hex")))
