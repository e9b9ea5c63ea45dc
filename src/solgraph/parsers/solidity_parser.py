# solgraph/parsers/solidity_parser.py
# AI-Mind (c) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Solidity parser for solgraph using tree-sitter.

Converts the tree-sitter-solidity syntax tree into the typed AST in
parsers.base. Lookups prefer grammar field names and fall back to node
position, so minor grammar revisions do not change the result.
"""

import re
from typing import Optional

import tree_sitter_solidity
from tree_sitter import Language, Parser

from ..errors import SolidityParseError
from .base import (
    ARRAY,
    ELEMENTARY,
    FUNCTION,
    MAPPING,
    USER_DEFINED,
    BaseParser,
    BodyItem,
    ContractDefinition,
    ContractMember,
    ElementaryTypeNameExpression,
    EventDefinition,
    Expression,
    FunctionCall,
    FunctionDefinition,
    Identifier,
    MemberAccess,
    ModifierDefinition,
    NumberLiteral,
    OtherExpression,
    SourceUnit,
    StateVariableDeclaration,
    StructDefinition,
    TypeName,
    UsingForDeclaration,
    VariableDeclaration,
)

CONTRACT_KINDS = {
    "contract_declaration": "contract",
    "interface_declaration": "interface",
    "library_declaration": "library",
}

ELEMENTARY_TYPE_RE = re.compile(
    r"^(address(\s+payable)?|bool|string|byte|var|bytes\d*|u?int\d*|u?fixed(\d+x\d+)?)$"
)
IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
NUMBER_RE = re.compile(r"^(0[xX][0-9a-fA-F_]+|[0-9][0-9_]*(\.[0-9_]*)?([eE]-?[0-9]+)?)$")
IMPORT_PATH_RE = re.compile(r"[\"']([^\"']+)[\"']")

# Wrapper nodes with a single meaningful child
TRANSPARENT_NODES = ("expression", "parenthesized_expression")


class SolidityParser(BaseParser):
    """Parser for Solidity source units."""

    def _load_parser(self) -> None:
        """Load Solidity tree-sitter parser."""
        self.language = Language(tree_sitter_solidity.language())
        self.parser = Parser(self.language)

    def parse(self, content: str, file_path: Optional[str] = None) -> SourceUnit:
        """Parse Solidity source into a SourceUnit.

        Args:
            content: Solidity source code.
            file_path: Path the content was read from, for error messages.

        Returns:
            SourceUnit with every contract, interface and library.

        Raises:
            SolidityParseError: If the source contains syntax errors.
        """
        tree = self.parse_tree(content)
        root = tree.root_node
        if root.has_error:
            self._raise_syntax_error(root, file_path)

        unit = SourceUnit(contracts=[])
        for child in root.named_children:
            if child.type in CONTRACT_KINDS:
                unit.contracts.append(self._contract(child))
            elif child.type == "import_directive":
                match = IMPORT_PATH_RE.search(self._get_node_text(child))
                if match:
                    unit.imports.append(match.group(1))
        return unit

    def _raise_syntax_error(self, root, file_path: Optional[str]) -> None:
        for node in self._walk_tree(root):
            if node.type == "ERROR" or node.is_missing:
                line, column = node.start_point
                raise SolidityParseError(
                    "Syntax error", path=file_path, line=line + 1, column=column + 1
                )
        raise SolidityParseError("Syntax error", path=file_path)

    # Declarations

    def _contract(self, node) -> ContractDefinition:
        contract = ContractDefinition(
            name=self._get_node_text(self._name_node(node)),
            kind=CONTRACT_KINDS[node.type],
        )

        for child in node.named_children:
            if child.type == "inheritance_specifier":
                ancestor = child.child_by_field_name("ancestor") or child.named_children[0]
                contract.base_contracts.append(self._compact_text(ancestor))

        body = node.child_by_field_name("body") or self._first_child(node, "contract_body")
        if body is not None:
            for child in body.named_children:
                member = self._member(child)
                if member is not None:
                    contract.members.append(member)
        return contract

    def _member(self, node) -> Optional[ContractMember]:
        kind = node.type
        if kind == "state_variable_declaration":
            return StateVariableDeclaration(
                name=self._get_node_text(self._name_node(node)),
                type_name=self._type_name(self._type_node(node)),
            )
        if kind == "function_definition":
            return FunctionDefinition(
                name=self._get_node_text(self._name_node(node)),
                kind="function",
                parameters=self._parameters(node),
                body=self._body(node),
            )
        if kind == "constructor_definition":
            return FunctionDefinition(
                name=None,
                kind="constructor",
                parameters=self._parameters(node),
                body=self._body(node),
            )
        if kind == "fallback_receive_definition":
            tokens = {child.type for child in node.children}
            return FunctionDefinition(
                name=None,
                kind="receive" if "receive" in tokens else "fallback",
                parameters=[],
                body=self._body(node),
            )
        if kind == "modifier_definition":
            return ModifierDefinition(
                name=self._get_node_text(self._name_node(node)),
                parameters=self._parameters(node),
                body=self._body(node),
            )
        if kind == "event_definition":
            return EventDefinition(name=self._get_node_text(self._name_node(node)))
        if kind == "struct_declaration":
            return StructDefinition(name=self._get_node_text(self._name_node(node)))
        if kind == "using_directive":
            return self._using_for(node)
        return None

    def _using_for(self, node) -> Optional[UsingForDeclaration]:
        """Read `using L for T;` by position around the `for` keyword."""
        children = node.children
        for_index = next(
            (i for i, child in enumerate(children) if child.type == "for"), None
        )
        if for_index is None:
            return None

        sources = [c for c in children[1:for_index] if c.is_named]
        if not sources:
            return None
        library_name = self._compact_text(sources[0])
        # `using {f, g} for T` attaches free functions, not a library
        if library_name.startswith("{"):
            return None

        targets = [
            c
            for c in children[for_index + 1 :]
            if self._get_node_text(c) not in ("global", ";")
        ]
        if not targets or self._get_node_text(targets[0]).strip() == "*":
            return UsingForDeclaration(library_name=library_name, type_name=None)

        target = targets[0]
        type_name = self._type_name(target)
        return UsingForDeclaration(
            library_name=library_name,
            type_name=type_name.name or self._compact_text(target),
        )

    def _parameters(self, node) -> list[VariableDeclaration]:
        """Collect parameters and named return parameters of a definition."""
        params: list[VariableDeclaration] = []
        body = node.child_by_field_name("body")
        for child in node.children:
            if child == body or child.type in ("function_body", "modifier_invocation"):
                continue
            self._collect_parameters(child, params)
        return params

    def _collect_parameters(self, node, params: list[VariableDeclaration]) -> None:
        if node.type == "parameter":
            params.append(self._variable_declaration(node))
            return
        # Parameters of a function type belong to the type, not the definition
        if node.type == "type_name":
            return
        for child in node.children:
            self._collect_parameters(child, params)

    def _variable_declaration(self, node) -> VariableDeclaration:
        name_node = node.child_by_field_name("name")
        if name_node is None:
            identifiers = [c for c in node.named_children if c.type == "identifier"]
            name_node = identifiers[-1] if identifiers else None
        return VariableDeclaration(
            name=self._get_node_text(name_node) if name_node is not None else None,
            type_name=self._type_name(self._type_node(node)),
        )

    def _type_name(self, node) -> TypeName:
        if node is None:
            return TypeName(kind=FUNCTION)

        if node.type == "type_name":
            children = node.children
            tokens = [child.type for child in children]
            if tokens and tokens[0] == "mapping":
                arrow = tokens.index("=>") if "=>" in tokens else None
                values = [c for c in children[(arrow or 0) + 1 :] if c.is_named]
                value = node.child_by_field_name("value_type") or (values[0] if values else None)
                return TypeName(kind=MAPPING, base=self._type_name(value))
            if tokens and tokens[0] == "function":
                return TypeName(kind=FUNCTION)
            if "[" in tokens:
                return TypeName(kind=ARRAY, base=self._type_name(children[0]))
            if len(node.named_children) == 1:
                return self._type_name(node.named_children[0])

        text = " ".join(self._get_node_text(node).split())
        if node.type == "primitive_type" or ELEMENTARY_TYPE_RE.match(text):
            return TypeName(kind=ELEMENTARY, name=text)
        return TypeName(kind=USER_DEFINED, name=text.replace(" ", ""))

    # Bodies and expressions

    def _body(self, node) -> Optional[list[BodyItem]]:
        body = node.child_by_field_name("body") or self._first_child(node, "function_body")
        if body is None:
            return None
        items: list[BodyItem] = []
        self._collect_body(body, items)
        return items

    def _collect_body(self, node, items: list[BodyItem]) -> None:
        """Flatten a body to declarations and calls in source order."""
        for child in node.named_children:
            kind = child.type
            if kind in ("variable_declaration", "parameter"):
                items.append(self._variable_declaration(child))
            elif kind in ("call_expression", "type_cast_expression"):
                items.append(self._expression(child))
            elif kind == "emit_statement":
                items.append(self._emit(child))
            else:
                self._collect_body(child, items)

    def _emit(self, node) -> FunctionCall:
        """`emit E(args)` is treated as a call of E."""
        event = node.child_by_field_name("name") or node.named_children[0]
        return FunctionCall(
            expression=self._expression(event),
            arguments=self._arguments(node, skip=event),
            line=self._get_node_line(node),
        )

    def _expression(self, node) -> Expression:
        node = self._unwrap(node)
        kind = node.type

        if kind == "call_expression":
            callee = node.child_by_field_name("function") or node.named_children[0]
            return FunctionCall(
                expression=self._expression(callee),
                arguments=self._arguments(node, skip=callee),
                line=self._get_node_line(node),
            )
        if kind == "type_cast_expression":
            named = node.named_children
            return FunctionCall(
                expression=ElementaryTypeNameExpression(self._compact_type(named[0])),
                arguments=self._arguments(node, skip=named[0]),
                line=self._get_node_line(node),
            )
        if kind == "payable_conversion_expression":
            return FunctionCall(
                expression=ElementaryTypeNameExpression("address payable"),
                arguments=self._arguments(node, skip=None),
                line=self._get_node_line(node),
            )
        if kind == "member_expression":
            obj = node.child_by_field_name("object") or node.named_children[0]
            prop = node.child_by_field_name("property") or node.named_children[-1]
            return MemberAccess(
                expression=self._expression(obj),
                member_name=self._get_node_text(prop),
            )
        if kind == "primitive_type":
            return ElementaryTypeNameExpression(self._compact_type(node))

        text = self._get_node_text(node)
        if kind == "number_literal" or (not node.named_children and NUMBER_RE.match(text)):
            return NumberLiteral(number=text)
        if kind == "identifier" or (not node.named_children and IDENTIFIER_RE.match(text)):
            return Identifier(name=text)
        return OtherExpression(
            text=text,
            operands=[
                self._expression(child)
                for child in node.named_children
                if child.type != "comment"
            ],
        )

    def _arguments(self, node, skip) -> list[Expression]:
        args: list[Expression] = []
        for child in node.named_children:
            if child == skip or child.type == "comment":
                continue
            if child.type == "call_argument" and len(child.named_children) == 1:
                args.append(self._expression(child.named_children[0]))
            else:
                args.append(self._expression(child))
        return args

    # Helpers

    def _unwrap(self, node):
        while node.type in TRANSPARENT_NODES and len(node.named_children) == 1:
            node = node.named_children[0]
        return node

    def _name_node(self, node):
        return node.child_by_field_name("name") or self._first_child(node, "identifier")

    def _type_node(self, node):
        return node.child_by_field_name("type") or self._first_child(node, "type_name")

    def _first_child(self, node, kind: str):
        for child in node.named_children:
            if child.type == kind:
                return child
        return None

    def _compact_text(self, node) -> str:
        """Node text with all whitespace removed ("Lib . Data" -> "Lib.Data")."""
        return "".join(self._get_node_text(node).split())

    def _compact_type(self, node) -> str:
        return " ".join(self._get_node_text(node).split())
