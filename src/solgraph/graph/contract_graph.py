# solgraph/graph/contract_graph.py
# AI-Mind (c) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Contract-level call graph with node styling state and deduplicated edges.

Nodes are keyed by contract name. A node is "defined" once its declaration
has been collected and "undefined" while it is only referenced as a call
target. Edges are keyed by the ordered (caller, callee) pair; the first call
site that produces a pair decides its kind.
"""

from dataclasses import dataclass

from .models import CallKind


@dataclass
class ContractNode:
    name: str
    label: str
    defined: bool = False


class ContractGraph:
    """Directed contract graph.

    `edges` maps each ordered (caller, callee) pair to its kind and preserves
    insertion order, which is the order edges are emitted in.
    """

    def __init__(self):
        """Initialize empty graph."""
        self.nodes: dict[str, ContractNode] = {}
        self.edges: dict[tuple[str, str], CallKind] = {}

    def add_contract(self, name: str) -> ContractNode:
        """Create a defined node, or upgrade an existing undefined one.

        Args:
            name: Contract name.

        Returns:
            The node for name, now defined.
        """
        node = self.nodes.get(name)
        if node is None:
            node = self.nodes[name] = ContractNode(name=name, label=name)
        node.defined = True
        return node

    def ensure_node(self, name: str) -> ContractNode:
        """Get the node for name, creating an undefined one on first reference."""
        node = self.nodes.get(name)
        if node is None:
            node = self.nodes[name] = ContractNode(name=name, label=name, defined=False)
        return node

    def has_edge(self, caller: str, callee: str) -> bool:
        return (caller, callee) in self.edges

    def add_edge(self, caller: str, callee: str, kind: CallKind) -> bool:
        """Add a call relationship unless the ordered pair already exists.

        Args:
            caller: Contract making the call.
            callee: Contract being called.
            kind: Classification of the call site that produced the edge.

        Returns:
            True if the edge was added, False if it was already present.
        """
        if self.has_edge(caller, callee):
            return False
        self.ensure_node(callee)
        self.edges[(caller, callee)] = kind
        return True

    def is_defined(self, name: str) -> bool:
        node = self.nodes.get(name)
        return node is not None and node.defined
