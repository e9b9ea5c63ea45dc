# tests/conftest.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Pytest configuration for solgraph tests.

Ensures the src package is importable without installation and provides
shared Solidity fixtures.
"""

import sys
from pathlib import Path

import pytest

# Add src directory to path for local packages
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


BASE_DERIVED_SOURCE = """
pragma solidity ^0.8.0;

contract Base {
    function g() public {}
}

contract Derived is Base {
    function f() public {
        Base x;
        x.g();
    }
}
"""

LIBRARY_SOURCE = """
pragma solidity ^0.8.0;

library L {
    function g(uint256 a) internal pure returns (uint256) {
        return a;
    }
}

contract C {
    using L for uint256;

    function f(uint256 y) public pure returns (uint256) {
        return uint256(y).g();
    }
}
"""


@pytest.fixture
def base_derived_source():
    """Base and Derived, with Derived calling Base through a local."""
    return BASE_DERIVED_SOURCE


@pytest.fixture
def library_source():
    """Library L attached to uint256 in contract C."""
    return LIBRARY_SOURCE


@pytest.fixture
def write_sol(tmp_path):
    """Write a Solidity file under tmp_path and return its path as str."""

    def _write(name: str, content: str) -> str:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return str(path)

    return _write
