# solgraph/graph/resolver.py
# AI-Mind (c) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Pass 2: call target resolution.

Walks each source unit again, now with every declaration and the
linearization available, and decides which contract each call expression
targets. Each classification rule is a separate predicate; `resolve`
combines them into a CallTarget and `resolve_calls` applies the targets to
the graph.
"""

import logging
from typing import Optional, Union

from ..parsers.base import (
    ElementaryTypeNameExpression,
    Expression,
    FunctionCall,
    FunctionDefinition,
    Identifier,
    MemberAccess,
    ModifierDefinition,
    NumberLiteral,
    OtherExpression,
    SourceUnit,
    VariableDeclaration,
)
from .context import AnalysisContext
from .models import CallKind, CallTarget, canonical_type
from .scope import Scope

logger = logging.getLogger(__name__)


# Built-in context members with a fixed type: (object, member) -> type
SPECIAL_VARIABLES = {
    ("msg", "sender"): "address",
    ("tx", "origin"): "address",
    ("block", "coinbase"): "address",
    ("msg", "value"): "uint256",
    ("msg", "gas"): "uint256",
    ("tx", "gasprice"): "uint256",
    ("block", "number"): "uint256",
    ("block", "timestamp"): "uint256",
    ("block", "difficulty"): "uint256",
    ("block", "prevrandao"): "uint256",
    ("block", "gaslimit"): "uint256",
    ("block", "basefee"): "uint256",
    ("block", "chainid"): "uint256",
    ("msg", "data"): "bytes",
    ("msg", "sig"): "bytes4",
}
SPECIAL_IDENTIFIERS = {"now": "uint256"}

# Array and abi members that never target a contract
BUILTIN_MEMBERS = frozenset(
    {
        "push",
        "pop",
        "encode",
        "encodePacked",
        "encodeWithSelector",
        "encodeWithSignature",
        "encodeCall",
        "decode",
    }
)

ADDRESS_TYPES = ("address", "address payable")


class CallResolver:
    """Resolves call expressions to target contracts.

    Handles several call patterns:
    - Name(...)            - contract/event/struct name, internal call
    - this.f()             - self call on the current contract
    - super.f()            - nearest base in the linearization
    - var.f()              - declared type of a user-defined variable
    - address(x).f()       - object taken from the cast argument
    - Contract(x).f()      - object is the cast contract
    - value.f()            - using-for library attached to the value's type
    - Name.f()             - anything else uses the raw object name
    """

    def __init__(self, context: AnalysisContext, scope: Scope):
        self.context = context
        self.scope = scope

    def resolve(self, call: FunctionCall) -> CallTarget:
        """Resolve one call expression.

        Args:
            call: Call expression visited inside a function or modifier body.

        Returns:
            CallTarget; kind NO_TARGET when no edge should be drawn.
        """
        if self.scope.calling_scope is None:
            return CallTarget.none("outside function or modifier")

        if self.is_direct_name_call(call):
            return CallTarget(
                kind=CallKind.INTERNAL,
                contract=self.scope.current_contract,
                member=call.expression.name,
            )
        if not self.is_member_access_call(call):
            return CallTarget.none("unsupported call form")

        access: MemberAccess = call.expression
        receiver = access.expression
        member = access.member_name
        obj = self.object_name(receiver)

        variable_type = self.builtin_type(receiver)
        if variable_type is None:
            if self.is_elementary_variable(obj):
                # using-for on plain value types is left out of the simple graph
                return CallTarget.none(f"{obj} has an elementary type")
            variable_type = self.user_defined_type(obj)

        library = self.using_for_library(variable_type, member)
        if library is not None:
            if self.context.suppress_libraries:
                return CallTarget.none(f"library edge to {library} suppressed")
            return CallTarget(kind=CallKind.LIBRARY, contract=library, member=member)

        if obj is None:
            return CallTarget.none("unresolved object")
        return self.callee(obj, member)

    # Classification predicates

    def is_direct_name_call(self, call: FunctionCall) -> bool:
        """Bare identifier naming a contract, or an event/struct in scope."""
        callee = call.expression
        if not isinstance(callee, Identifier):
            return False
        if callee.name in self.context.declarations:
            return True
        for ancestor in self.scope.order:
            declaration = self.context.declarations.get(ancestor)
            if declaration is None:
                continue
            if callee.name in declaration.events or callee.name in declaration.structs:
                return True
        return False

    def is_member_access_call(self, call: FunctionCall) -> bool:
        callee = call.expression
        return isinstance(callee, MemberAccess) and callee.member_name not in BUILTIN_MEMBERS

    def object_name(self, receiver: Expression) -> Optional[str]:
        """Name of the object a member is accessed on, None if unresolved."""
        if isinstance(receiver, Identifier):
            return receiver.name

        if isinstance(receiver, FunctionCall):
            callee = receiver.expression
            if (
                isinstance(callee, ElementaryTypeNameExpression)
                and callee.type_name in ADDRESS_TYPES
                and receiver.arguments
            ):
                argument = receiver.arguments[0]
                if isinstance(argument, Identifier):
                    return argument.name
                if isinstance(argument, NumberLiteral):
                    return f"address({argument.number})"
                return flatten_arguments(receiver.arguments)

            if isinstance(callee, Identifier) and callee.name in self.context.declarations:
                return callee.name

        return None

    def builtin_type(self, receiver: Expression) -> Optional[str]:
        """Fixed type of a special variable or an elementary type cast."""
        if isinstance(receiver, MemberAccess) and isinstance(receiver.expression, Identifier):
            return SPECIAL_VARIABLES.get((receiver.expression.name, receiver.member_name))
        if isinstance(receiver, Identifier):
            return SPECIAL_IDENTIFIERS.get(receiver.name)
        if isinstance(receiver, FunctionCall) and isinstance(
            receiver.expression, ElementaryTypeNameExpression
        ):
            return canonical_type(receiver.expression.type_name)
        return None

    def is_elementary_variable(self, obj: Optional[str]) -> bool:
        """True if obj is a local, or an inherited state variable, of plain type."""
        if obj is None:
            return False
        if obj in self.scope.local_vars:
            return True
        if obj in self.scope.user_defined_local_vars:
            return False
        if obj in self.scope.effective_user_defined_state_vars:
            return False
        return obj in self.scope.effective_state_vars

    def user_defined_type(self, obj: Optional[str]) -> Optional[str]:
        """Declared type of a user-defined variable, locals first."""
        if obj is None:
            return None
        if obj in self.scope.user_defined_local_vars:
            return self.scope.user_defined_local_vars[obj]
        return self.scope.effective_user_defined_state_vars.get(obj)

    def using_for_library(self, variable_type: Optional[str], member: str) -> Optional[str]:
        """First library attached to variable_type that declares member."""
        if variable_type is None:
            return None
        declaration = self.context.declarations.get(self.scope.current_contract)
        if declaration is None:
            return None
        for library in declaration.libraries_for(canonical_type(variable_type)):
            library_declaration = self.context.declarations.get(library)
            if library_declaration is not None and member in library_declaration.functions:
                return library
        return None

    def callee(self, obj: str, member: str) -> CallTarget:
        """Final callee contract for a resolved object name."""
        if obj == "this":
            return CallTarget(kind=CallKind.THIS, contract=self.scope.current_contract, member=member)
        if obj == "super":
            order = self.scope.order
            if len(order) < 2:
                return CallTarget.none("super without a base contract")
            return CallTarget(kind=CallKind.SUPER, contract=order[1], member=member)

        declared = self.user_defined_type(obj)
        return CallTarget(kind=CallKind.EXTERNAL, contract=declared or obj, member=member)


def flatten_arguments(arguments: list[Expression]) -> str:
    """Single-line text of call arguments, safe to use as a node name."""
    text = ", ".join(expression_text(argument) for argument in arguments)
    return text.replace('"', "").replace(":", " ")


def expression_text(expression: Expression) -> str:
    if isinstance(expression, Identifier):
        return expression.name
    if isinstance(expression, NumberLiteral):
        return expression.number
    if isinstance(expression, ElementaryTypeNameExpression):
        return expression.type_name
    if isinstance(expression, MemberAccess):
        return f"{expression_text(expression.expression)}.{expression.member_name}"
    if isinstance(expression, FunctionCall):
        args = ", ".join(expression_text(arg) for arg in expression.arguments)
        return f"{expression_text(expression.expression)}({args})"
    return " ".join(expression.text.split())


def resolve_calls(unit: SourceUnit, context: AnalysisContext) -> int:
    """Resolve every call in a source unit and add the resulting edges.

    Args:
        unit: Parsed source unit.
        context: Analysis context with complete Pass 1 state.

    Returns:
        Number of edges added for this unit.
    """
    scope = Scope(context)
    resolver = CallResolver(context, scope)
    added = 0

    for contract in unit.contracts:
        with scope.contract(contract.name):
            for member in contract.members:
                if isinstance(member, (FunctionDefinition, ModifierDefinition)):
                    added += _visit_callable(member, scope, resolver)
    return added


def _visit_callable(
    member: Union[FunctionDefinition, ModifierDefinition],
    scope: Scope,
    resolver: CallResolver,
) -> int:
    added = 0
    with scope.function():
        for parameter in member.parameters:
            scope.declare(parameter)
        for item in member.body or []:
            if isinstance(item, VariableDeclaration):
                scope.declare(item)
            else:
                added += _visit_expression(item, scope, resolver)
    return added


def _visit_expression(expression: Expression, scope: Scope, resolver: CallResolver) -> int:
    """Resolve calls in an expression tree, outer calls first."""
    added = 0
    if isinstance(expression, FunctionCall):
        added += _record(expression, resolver.resolve(expression), scope, resolver.context)
        added += _visit_expression(expression.expression, scope, resolver)
        for argument in expression.arguments:
            added += _visit_expression(argument, scope, resolver)
    elif isinstance(expression, MemberAccess):
        added += _visit_expression(expression.expression, scope, resolver)
    elif isinstance(expression, OtherExpression):
        for operand in expression.operands:
            added += _visit_expression(operand, scope, resolver)
    return added


def _record(
    call: FunctionCall, target: CallTarget, scope: Scope, context: AnalysisContext
) -> int:
    if not target.has_target:
        logger.debug(f"No edge from {scope.calling_scope} at line {call.line}: {target.reason}")
        return 0
    if context.graph.add_edge(scope.calling_scope, target.contract, target.kind):
        logger.debug(
            f"Edge {scope.calling_scope} -> {target.contract} "
            f"({target.kind.value} via {target.member}, line {call.line})"
        )
        return 1
    return 0
