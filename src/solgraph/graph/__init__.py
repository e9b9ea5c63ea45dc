# solgraph/graph/__init__.py
# AI-Mind (c) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Contract call graph construction.

Components:
- DeclarationCollector: Pass 1, fills the DeclarationTable and defined nodes
- linearize: C3 inheritance order per contract
- CallResolver / resolve_calls: Pass 2, classifies calls and adds edges
- ContractGraph: nodes with defined/undefined state and deduplicated edges
- generate_dot: DOT text with legend
"""

from .models import CallKind, CallTarget, ContractDeclaration
from .contract_graph import ContractGraph, ContractNode
from .declarations import DeclarationCollector, DeclarationTable
from .linearize import linearize
from .context import AnalysisContext
from .scope import Scope
from .resolver import CallResolver, resolve_calls
from .dot import generate_dot

__all__ = [
    # Core types
    "CallKind",
    "CallTarget",
    "ContractDeclaration",
    # Graph
    "ContractGraph",
    "ContractNode",
    # Pass 1
    "DeclarationCollector",
    "DeclarationTable",
    "linearize",
    # Pass 2
    "AnalysisContext",
    "Scope",
    "CallResolver",
    "resolve_calls",
    # Output
    "generate_dot",
]
