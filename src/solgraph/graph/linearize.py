# solgraph/graph/linearize.py
# AI-Mind (c) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
C3 linearization of the contract inheritance graph.

Solidity lists bases from "most base-like" to "most derived", so base lists
are reversed before merging. Each result starts with the contract itself,
followed by its ancestors nearest first.
"""

from ..errors import InheritanceCycleError, LinearizationError


def linearize(bases: dict[str, list[str]]) -> dict[str, list[str]]:
    """Compute the linearized order of every contract in the base map.

    Args:
        bases: contract name -> direct base names, in declaration order.
               Names that only appear as bases linearize to themselves.

    Returns:
        contract name -> [contract, nearest base, ..., root].

    Raises:
        InheritanceCycleError: If a contract inherits from itself.
        LinearizationError: If no consistent order exists.
    """
    results: dict[str, list[str]] = {}
    for name in bases:
        _linearize(name, bases, results, visiting=set())
    return results


def _linearize(
    name: str,
    bases: dict[str, list[str]],
    results: dict[str, list[str]],
    visiting: set[str],
) -> list[str]:
    if name in results:
        return results[name]
    if name in visiting:
        raise InheritanceCycleError(name)

    parents = list(reversed(bases.get(name, [])))
    if not parents:
        results[name] = [name]
        return results[name]

    visiting.add(name)
    sequences = [_linearize(parent, bases, results, visiting) for parent in parents]
    visiting.discard(name)

    results[name] = [name] + _merge(sequences + [parents], name)
    return results[name]


def _merge(sequences: list[list[str]], name: str) -> list[str]:
    """Standard C3 merge: repeatedly take the first head not in any tail."""
    pending = [list(seq) for seq in sequences if seq]
    merged: list[str] = []

    while pending:
        for seq in pending:
            head = seq[0]
            if not any(head in other[1:] for other in pending):
                break
        else:
            raise LinearizationError(
                f"Cannot find a C3 linearization for contract {name}"
            )

        merged.append(head)
        for seq in pending:
            if seq[0] == head:
                del seq[0]
        pending = [seq for seq in pending if seq]

    return merged
