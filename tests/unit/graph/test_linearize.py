# tests/unit/graph/test_linearize.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Unit tests for solgraph.graph.linearize.

Tests C3 linearization of Solidity inheritance, where base lists are
written from most base-like to most derived.
"""

import pytest

from solgraph.errors import InheritanceCycleError, LinearizationError
from solgraph.graph.linearize import linearize


class TestLinearize:
    """Tests for linearize."""

    def test_contract_without_bases(self):
        """A root contract linearizes to itself."""
        assert linearize({"A": []}) == {"A": ["A"]}

    def test_single_base(self):
        """Nearest base follows the contract itself."""
        result = linearize({"A": [], "B": ["A"]})
        assert result["B"] == ["B", "A"]

    def test_chain(self):
        """Ancestors are ordered nearest first."""
        result = linearize({"A": [], "B": ["A"], "C": ["B"]})
        assert result["C"] == ["C", "B", "A"]

    def test_diamond_uses_last_base_first(self):
        """`D is B, C` puts C (most derived) before B."""
        bases = {"A": [], "B": ["A"], "C": ["A"], "D": ["B", "C"]}
        result = linearize(bases)
        assert result["D"] == ["D", "C", "B", "A"]

    def test_undeclared_base_linearizes_to_itself(self):
        """Bases outside the input set are treated as roots."""
        result = linearize({"Token": ["Ownable"]})
        assert result["Token"] == ["Token", "Ownable"]
        assert result["Ownable"] == ["Ownable"]

    def test_every_declared_contract_present(self):
        """Every key in the base map gets an entry."""
        result = linearize({"A": [], "B": ["A"], "X": []})
        assert set(result) >= {"A", "B", "X"}


class TestLinearizeErrors:
    """Tests for inconsistent hierarchies."""

    def test_self_inheritance_is_cycle(self):
        """A contract inheriting from itself raises InheritanceCycleError."""
        with pytest.raises(InheritanceCycleError) as exc_info:
            linearize({"A": ["A"]})
        assert exc_info.value.contract == "A"

    def test_indirect_cycle(self):
        """Transitive cycles are detected."""
        with pytest.raises(InheritanceCycleError):
            linearize({"A": ["B"], "B": ["A"]})

    def test_cycle_is_linearization_error(self):
        """Cycles can be caught as LinearizationError."""
        with pytest.raises(LinearizationError):
            linearize({"A": ["C"], "B": ["A"], "C": ["B"]})

    def test_inconsistent_order(self):
        """Conflicting base orders have no C3 linearization."""
        bases = {"A": [], "B": ["A"], "C": ["B", "A"]}
        with pytest.raises(LinearizationError, match="C3 linearization"):
            linearize(bases)
