# solgraph/graph/scope.py
# AI-Mind (c) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Lexical scope for the resolution pass.

Solidity has no nested function definitions, so a single active scope is
enough: the current contract, and while inside a function or modifier body,
the calling scope and its local variables. Entering and leaving are context
managers so state is always restored, even when resolution raises.
"""

from contextlib import contextmanager
from typing import Iterator, Optional

from ..parsers.base import VariableDeclaration
from .context import AnalysisContext
from .models import declared_type


class Scope:
    """Active contract and function scope during Pass 2."""

    def __init__(self, context: AnalysisContext):
        self.context = context
        self.current_contract: Optional[str] = None
        self.calling_scope: Optional[str] = None
        self.local_vars: dict[str, str] = {}
        self.user_defined_local_vars: dict[str, str] = {}
        self.effective_state_vars: dict[str, str] = {}
        self.effective_user_defined_state_vars: dict[str, str] = {}

    @contextmanager
    def contract(self, name: str) -> Iterator["Scope"]:
        """Enter a contract: build effective state from its linearization.

        Ancestors are folded root first and the contract itself last, so the
        closest declaration of a name wins.
        """
        self.current_contract = name
        for ancestor in reversed(self.context.order(name)):
            declaration = self.context.declarations.get(ancestor)
            if declaration is None:
                continue
            self.effective_state_vars.update(declaration.state_vars)
            self.effective_user_defined_state_vars.update(
                declaration.user_defined_state_vars
            )
        try:
            yield self
        finally:
            self.current_contract = None
            self.effective_state_vars = {}
            self.effective_user_defined_state_vars = {}

    @contextmanager
    def function(self) -> Iterator["Scope"]:
        """Enter a function or modifier body of the current contract."""
        self.calling_scope = self.current_contract
        try:
            yield self
        finally:
            self.calling_scope = None
            self.local_vars = {}
            self.user_defined_local_vars = {}

    def declare(self, variable: VariableDeclaration) -> None:
        """Record a parameter or local variable; locals shadow state."""
        if self.calling_scope is None or not variable.name:
            return
        classified = declared_type(variable.type_name)
        if classified is None:
            return
        is_user_defined, type_name = classified
        if is_user_defined:
            self.user_defined_local_vars[variable.name] = type_name
            self.local_vars.pop(variable.name, None)
        else:
            self.local_vars[variable.name] = type_name
            self.user_defined_local_vars.pop(variable.name, None)

    @property
    def order(self) -> list[str]:
        """Linearized order of the current contract."""
        if self.current_contract is None:
            return []
        return self.context.order(self.current_contract)
