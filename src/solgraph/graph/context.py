# solgraph/graph/context.py
# AI-Mind (c) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Shared state threaded through the resolution pass."""

from dataclasses import dataclass, field

from .contract_graph import ContractGraph
from .declarations import DeclarationTable


@dataclass
class AnalysisContext:
    """Everything Pass 2 reads or writes.

    Attributes:
        declarations: Complete declaration tables from Pass 1.
        linearization: contract -> [contract, nearest base, ..., root].
        graph: Graph accumulator shared by both passes.
        suppress_libraries: Drop calls redirected through using-for.
    """

    declarations: DeclarationTable
    linearization: dict[str, list[str]] = field(default_factory=dict)
    graph: ContractGraph = field(default_factory=ContractGraph)
    suppress_libraries: bool = False

    def order(self, contract: str) -> list[str]:
        """Linearized order for contract, just itself if unknown."""
        return self.linearization.get(contract, [contract])
