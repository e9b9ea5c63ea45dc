# solgraph/graph/models.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Data models for the contract call graph.

ContractDeclaration holds everything the first pass learns about a contract.
CallTarget is the tagged outcome of resolving a single call expression in
the second pass.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..parsers.base import ARRAY, ELEMENTARY, MAPPING, USER_DEFINED, TypeName


# Key used in using_for for `using L for *;`
WILDCARD = "*"

TYPE_ALIASES = {
    "uint": "uint256",
    "int": "int256",
}


def canonical_type(name: Optional[str]) -> Optional[str]:
    """Map elementary type aliases to their canonical name (uint -> uint256)."""
    if name is None:
        return None
    return TYPE_ALIASES.get(name, name)


def declared_type(type_name: TypeName) -> Optional[tuple[bool, str]]:
    """Classify a declared type for the variable tables.

    Args:
        type_name: Type from a state variable, parameter or local declaration.

    Returns:
        (is_user_defined, name) where name is the declared contract/struct name
        for user-defined types and the canonical value type otherwise. Arrays
        and mappings report their innermost element or value type. None for
        types that cannot be tracked (function types).
    """
    if type_name.kind == USER_DEFINED and type_name.name:
        return True, type_name.name
    if type_name.kind == ELEMENTARY and type_name.name:
        return False, canonical_type(type_name.name)
    if type_name.kind in (ARRAY, MAPPING):
        leaf = type_name.base
        while leaf is not None and leaf.kind in (ARRAY, MAPPING):
            leaf = leaf.base
        if leaf is not None and leaf.name:
            return False, canonical_type(leaf.name)
    return None


@dataclass
class ContractDeclaration:
    """Declaration tables for one contract, interface or library.

    Built during Pass 1 and read-only afterwards. `bases` are the direct bases
    exactly as named in the source; they are resolved by linearization.
    """

    name: str
    kind: str  # "contract" | "interface" | "library"
    bases: list[str] = field(default_factory=list)
    state_vars: dict[str, str] = field(default_factory=dict)  # name -> elementary type
    user_defined_state_vars: dict[str, str] = field(default_factory=dict)  # name -> type name
    functions: list[str] = field(default_factory=list)
    events: list[str] = field(default_factory=list)
    structs: list[str] = field(default_factory=list)
    using_for: dict[str, list[str]] = field(default_factory=dict)  # type or "*" -> libraries

    def attach_library(self, library: str, type_name: Optional[str]) -> None:
        """Record `using library for type_name` (None means all types)."""
        key = canonical_type(type_name) if type_name else WILDCARD
        libraries = self.using_for.setdefault(key, [])
        if library not in libraries:
            libraries.append(library)

    def libraries_for(self, type_name: str) -> list[str]:
        """Libraries attached to a type, specific attachments first."""
        return self.using_for.get(type_name, []) + self.using_for.get(WILDCARD, [])


class CallKind(str, Enum):
    """How a call expression was classified."""

    NO_TARGET = "no-target"
    INTERNAL = "internal"
    THIS = "this"
    SUPER = "super"
    LIBRARY = "library-redirect"
    EXTERNAL = "external"


@dataclass(frozen=True)
class CallTarget:
    """Structured outcome for a single call resolution.

    `contract` is the callee node name; None only for NO_TARGET.
    """

    kind: CallKind
    contract: Optional[str] = None
    member: Optional[str] = None
    reason: Optional[str] = None  # why no target was produced

    @property
    def has_target(self) -> bool:
        return self.kind is not CallKind.NO_TARGET

    @classmethod
    def none(cls, reason: str) -> "CallTarget":
        return cls(kind=CallKind.NO_TARGET, reason=reason)
