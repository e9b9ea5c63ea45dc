# solgraph/importer.py
# AI-Mind (c) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Input file de-duplication and import crawling.

With the importer enabled, the input files are only the starting point:
every `import "..."` directive is followed transitively so dependencies
outside the given list are analyzed too.
"""

import logging
from pathlib import Path
from typing import Callable, Iterable, Optional

logger = logging.getLogger(__name__)

NODE_MODULES = "node_modules"


def unique(items: Iterable[str]) -> list[str]:
    """De-duplicate preserving first-seen order."""
    return list(dict.fromkeys(items))


def resolve_import(import_path: str, importing_file: str) -> Optional[str]:
    """Resolve an import directive to a file path.

    Args:
        import_path: Path as written in the directive (e.g., "./Token.sol",
                     "@openzeppelin/contracts/token/ERC20/IERC20.sol").
        importing_file: File containing the directive.

    Returns:
        Path of the imported file, or None if it cannot be found.

    Example:
        import_path: "../lib/Math.sol"
        importing_file: "contracts/core/Vault.sol"
        returns: "contracts/lib/Math.sol"
    """
    base_dir = Path(importing_file).parent

    if import_path.startswith("."):
        candidate = (base_dir / import_path).resolve()
        return str(candidate) if candidate.is_file() else None

    # Package imports: look in node_modules walking up from the importing file
    for directory in [base_dir.resolve(), *base_dir.resolve().parents]:
        candidate = directory / NODE_MODULES / import_path
        if candidate.is_file():
            return str(candidate)

    candidate = (base_dir / import_path).resolve()
    if candidate.is_file():
        return str(candidate)
    return None


def crawl_imports(
    files: list[str], read_imports: Callable[[str], Optional[list[str]]]
) -> list[str]:
    """Collect the input files plus everything they import, transitively.

    Args:
        files: Starting files.
        read_imports: Returns the import paths of a file, or None if the file
                      should be skipped (e.g., it is a directory).

    Returns:
        Every reachable file once, in discovery order.
    """
    ordered: list[str] = []
    seen: set[str] = set()
    pending = list(unique(files))

    while pending:
        file_path = pending.pop(0)
        key = str(Path(file_path).resolve())
        if key in seen:
            continue
        seen.add(key)

        imports = read_imports(file_path)
        if imports is None:
            continue
        ordered.append(file_path)

        for import_path in imports:
            resolved = resolve_import(import_path, file_path)
            if resolved is None:
                logger.warning(f"Could not resolve import {import_path!r} in {file_path}")
                continue
            pending.append(resolved)

    return ordered
