# solgraph/graph/declarations.py
# AI-Mind (c) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Pass 1: declaration collection.

Walks each parsed source unit once and records, per contract, its kind,
direct bases, typed state variables, function/event/struct names and
using-for attachments. Every collected contract also gets a defined node in
the graph.
"""

import logging
from typing import Optional

from ..parsers.base import (
    ContractDefinition,
    EventDefinition,
    FunctionDefinition,
    SourceUnit,
    StateVariableDeclaration,
    StructDefinition,
    UsingForDeclaration,
)
from .contract_graph import ContractGraph
from .models import ContractDeclaration, declared_type

logger = logging.getLogger(__name__)


class DeclarationTable:
    """Maps contract names to their ContractDeclaration across all files.

    Later declarations of the same name replace earlier ones, so the last
    file in input order wins.
    """

    def __init__(self):
        """Initialize empty table."""
        self._contracts: dict[str, ContractDeclaration] = {}

    def add(self, declaration: ContractDeclaration) -> None:
        if declaration.name in self._contracts:
            logger.warning(f"Contract {declaration.name} declared more than once")
        self._contracts[declaration.name] = declaration

    def get(self, name: Optional[str]) -> Optional[ContractDeclaration]:
        """Look up a contract by name, None if not declared in the input."""
        if name is None:
            return None
        return self._contracts.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._contracts

    def __len__(self) -> int:
        return len(self._contracts)

    @property
    def names(self) -> list[str]:
        """Declared contract names in collection order."""
        return list(self._contracts)

    @property
    def bases(self) -> dict[str, list[str]]:
        """The global base map: contract -> direct bases as named."""
        return {name: list(decl.bases) for name, decl in self._contracts.items()}


class DeclarationCollector:
    """Collects declarations from source units into a DeclarationTable."""

    def __init__(self, table: DeclarationTable, graph: ContractGraph):
        self.table = table
        self.graph = graph

    def collect(self, unit: SourceUnit) -> None:
        """Record every contract in a source unit.

        Args:
            unit: Parsed source unit.
        """
        for contract in unit.contracts:
            self.table.add(self._collect_contract(contract))
            self.graph.add_contract(contract.name)

    def _collect_contract(self, contract: ContractDefinition) -> ContractDeclaration:
        declaration = ContractDeclaration(
            name=contract.name,
            kind=contract.kind,
            bases=list(contract.base_contracts),
        )

        for member in contract.members:
            if isinstance(member, StateVariableDeclaration):
                classified = declared_type(member.type_name)
                if classified is None:
                    continue
                is_user_defined, type_name = classified
                if is_user_defined:
                    declaration.user_defined_state_vars[member.name] = type_name
                else:
                    declaration.state_vars[member.name] = type_name
            elif isinstance(member, FunctionDefinition):
                if member.name:
                    declaration.functions.append(member.name)
            elif isinstance(member, EventDefinition):
                declaration.events.append(member.name)
            elif isinstance(member, StructDefinition):
                declaration.structs.append(member.name)
            elif isinstance(member, UsingForDeclaration):
                declaration.attach_library(member.library_name, member.type_name)

        return declaration
