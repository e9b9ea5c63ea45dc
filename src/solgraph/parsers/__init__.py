# solgraph/parsers/__init__.py
# AI-Mind (c) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Solidity parsing for solgraph.

Tree-sitter based parser producing the typed AST consumed by the call graph.
"""

from .base import (
    BaseParser,
    ContractDefinition,
    FunctionCall,
    SourceUnit,
    TypeName,
    VariableDeclaration,
)
from .solidity_parser import SolidityParser

__all__ = [
    # Base types
    "BaseParser",
    "SourceUnit",
    "ContractDefinition",
    "FunctionCall",
    "TypeName",
    "VariableDeclaration",
    # Parsers
    "SolidityParser",
]
