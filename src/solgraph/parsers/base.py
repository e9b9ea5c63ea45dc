# solgraph/parsers/base.py
# AI-Mind (c) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Typed AST and base parser interface for solgraph.

The parser converts a tree-sitter concrete syntax tree into the small typed
tree defined here. Only what the call graph needs survives the conversion:
contract headers, declarations, and the local declarations and call
expressions of each function body in source order.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterator, Optional, Union


# TypeName kinds
ELEMENTARY = "elementary"
USER_DEFINED = "user_defined"
ARRAY = "array"
MAPPING = "mapping"
FUNCTION = "function"


@dataclass
class TypeName:
    """A declared type.

    `name` is set for elementary and user-defined types ("uint256",
    "IERC20", "Lib.Data"). `base` is the element type of an array or the
    value type of a mapping.
    """

    kind: str
    name: Optional[str] = None
    base: Optional["TypeName"] = None


@dataclass
class VariableDeclaration:
    """A parameter, return parameter or local variable."""

    name: Optional[str]
    type_name: TypeName


# Expressions


@dataclass
class Identifier:
    name: str


@dataclass
class NumberLiteral:
    number: str


@dataclass
class ElementaryTypeNameExpression:
    """An elementary type used as a callee, as in `address(x)`."""

    type_name: str


@dataclass
class MemberAccess:
    expression: "Expression"
    member_name: str


@dataclass
class FunctionCall:
    expression: "Expression"
    arguments: list["Expression"] = field(default_factory=list)
    line: int = 0


@dataclass
class OtherExpression:
    """Any expression the call graph does not inspect.

    Sub-expressions are kept so nested calls are still visited.
    """

    text: str
    operands: list["Expression"] = field(default_factory=list)


Expression = Union[
    Identifier,
    NumberLiteral,
    ElementaryTypeNameExpression,
    MemberAccess,
    FunctionCall,
    OtherExpression,
]

# A function body is flattened to its local declarations and call expressions
BodyItem = Union[VariableDeclaration, FunctionCall]


# Contract members


@dataclass
class StateVariableDeclaration:
    name: str
    type_name: TypeName


@dataclass
class FunctionDefinition:
    """A function, constructor, fallback or receive function.

    `body` is None for functions without an implementation.
    """

    name: Optional[str]
    kind: str  # "function" | "constructor" | "fallback" | "receive"
    parameters: list[VariableDeclaration] = field(default_factory=list)
    body: Optional[list[BodyItem]] = None


@dataclass
class ModifierDefinition:
    name: str
    parameters: list[VariableDeclaration] = field(default_factory=list)
    body: Optional[list[BodyItem]] = None


@dataclass
class EventDefinition:
    name: str


@dataclass
class StructDefinition:
    name: str


@dataclass
class UsingForDeclaration:
    """`using <library> for <type>;`, type_name None for `*`."""

    library_name: str
    type_name: Optional[str]


ContractMember = Union[
    StateVariableDeclaration,
    FunctionDefinition,
    ModifierDefinition,
    EventDefinition,
    StructDefinition,
    UsingForDeclaration,
]


@dataclass
class ContractDefinition:
    name: str
    kind: str  # "contract" | "interface" | "library"
    base_contracts: list[str] = field(default_factory=list)
    members: list[ContractMember] = field(default_factory=list)


@dataclass
class SourceUnit:
    """Result of parsing one Solidity source.

    `imports` holds the raw paths of the file's import directives, used by
    the importer to crawl dependencies.
    """

    contracts: list[ContractDefinition]
    imports: list[str] = field(default_factory=list)


class BaseParser(ABC):
    """Base class for tree-sitter backed parsers."""

    def __init__(self):
        """Initialize parser with language-specific tree-sitter."""
        self.parser = None
        self.language = None
        self._load_parser()

    @abstractmethod
    def _load_parser(self) -> None:
        """Load the tree-sitter parser for this language."""
        pass

    def parse_tree(self, content: str) -> "tree_sitter.Tree":
        """Parse source code and return the raw tree-sitter tree.

        Args:
            content: Source code as string.

        Returns:
            Tree-sitter Tree.
        """
        return self.parser.parse(content.encode())

    @abstractmethod
    def parse(self, content: str, file_path: Optional[str] = None) -> SourceUnit:
        """Parse source code into a typed SourceUnit.

        Args:
            content: Source code as string.
            file_path: Path the content was read from, for error messages.

        Returns:
            SourceUnit for the content.
        """
        pass

    def _get_node_text(self, node) -> str:
        """Get the text content of a node."""
        return node.text.decode()

    def _get_node_line(self, node) -> int:
        """Get the 1-indexed line number of a node."""
        return node.start_point[0] + 1

    def _walk_tree(self, node) -> Iterator:
        """Walk all nodes in a tree using a generator."""
        yield node
        for child in node.children:
            yield from self._walk_tree(child)
