# solgraph/__init__.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Contract-level call graphs for Solidity.

Parses Solidity sources, linearizes inheritance, resolves which contract
each call targets and renders the result as Graphviz DOT with a legend.

Usage:
    from solgraph import graph_simple
    dot = graph_simple(["contracts/Token.sol"], {"colorScheme": "dark"})

Components:
    - graph_simple: One-call API returning DOT text
    - SimpleGraphBuilder: Two-pass builder behind graph_simple
    - GraphOptions: Options model (YAML, environment, or in code)
    - ColorScheme: Node, edge and graph colours
"""

from .builder import SimpleGraphBuilder, graph_simple
from .config import ColorScheme, GraphOptions, get_color_scheme, load_options
from .errors import (
    ConfigurationError,
    InheritanceCycleError,
    LinearizationError,
    SolGraphError,
    SolidityParseError,
)

__all__ = [
    # API
    "graph_simple",
    "SimpleGraphBuilder",
    # Config
    "ColorScheme",
    "GraphOptions",
    "get_color_scheme",
    "load_options",
    # Errors
    "SolGraphError",
    "ConfigurationError",
    "SolidityParseError",
    "LinearizationError",
    "InheritanceCycleError",
]
