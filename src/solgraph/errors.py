# solgraph/errors.py
# AI-Mind (c) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Exception types raised by solgraph."""

from typing import Optional


class SolGraphError(Exception):
    """Base class for all solgraph errors."""
    pass


class ConfigurationError(SolGraphError):
    """Invalid input set or options, rejected before any processing."""
    pass


class SolidityParseError(SolGraphError):
    """A source unit could not be parsed.

    Attributes:
        path: File the source came from, None for literal content.
        line: 1-indexed line of the first syntax error.
        column: 1-indexed column of the first syntax error.
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ):
        self.path = path
        self.line = line
        self.column = column
        location = ""
        if line is not None:
            location = f" at line {line}, column {column}"
        super().__init__(f"{message}{location}")


class LinearizationError(SolGraphError):
    """The inheritance hierarchy has no consistent C3 linearization."""
    pass


class InheritanceCycleError(LinearizationError):
    """A contract inherits from itself, directly or transitively."""

    def __init__(self, contract: str):
        self.contract = contract
        super().__init__(f"Circular inheritance found for contract {contract}")
