# solgraph/builder.py
# AI-Mind (c) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Two-pass contract call graph construction.

- Pass 1: Parse every file, collect declarations, create defined nodes
- Linearize the inheritance graph
- Pass 2: Resolve calls per file and add deduplicated edges
- Emit DOT with legend
"""

import logging
from pathlib import Path
from typing import Any, Optional, Union

from .config import GraphOptions
from .errors import ConfigurationError, SolidityParseError
from .graph import (
    AnalysisContext,
    ContractGraph,
    DeclarationCollector,
    DeclarationTable,
    generate_dot,
    linearize,
    resolve_calls,
)
from .importer import crawl_imports, unique
from .parsers import SolidityParser, SourceUnit

logger = logging.getLogger(__name__)


class SimpleGraphBuilder:
    """Builds the contract-level call graph for a set of Solidity sources.

    Collection must finish for every file before any call is resolved,
    because calls may reference contracts declared in later files.
    """

    def __init__(self, options: Optional[GraphOptions] = None):
        """Initialize builder.

        Args:
            options: Graph options; defaults to GraphOptions().
        """
        self.options = options or GraphOptions()
        self.parser = SolidityParser()
        self.graph = ContractGraph()
        self.declarations = DeclarationTable()
        self._units: dict[str, SourceUnit] = {}

    def run(self, files: list[str]) -> str:
        """Build the graph and return it as DOT.

        Args:
            files: File paths, or literal sources when
                   options.contents_in_file_path is set.

        Returns:
            DOT source with legend.

        Raises:
            ConfigurationError: If files is empty.
            SolidityParseError: If any source fails to parse.
            LinearizationError: If the inheritance graph is inconsistent.
        """
        if not files:
            raise ConfigurationError(
                "No files were specified for analysis in the arguments. Bailing..."
            )

        units = self._load_units(files)

        # Pass 1: declarations
        collector = DeclarationCollector(self.declarations, self.graph)
        for unit in units:
            collector.collect(unit)
        logger.info(
            f"Pass 1 complete: {len(units)} files, {len(self.declarations)} contracts"
        )

        context = AnalysisContext(
            declarations=self.declarations,
            linearization=linearize(self.declarations.bases),
            graph=self.graph,
            suppress_libraries=self.options.libraries,
        )

        # Pass 2: calls
        edge_count = 0
        for unit in units:
            edge_count += resolve_calls(unit, context)
        logger.info(f"Pass 2 complete: {edge_count} edges in call graph")

        return generate_dot(self.graph, self.options.color_scheme)

    def _load_units(self, files: list[str]) -> list[SourceUnit]:
        if self.options.contents_in_file_path:
            return [self._parse(content, None) for content in unique(files)]

        if self.options.importer:
            paths = crawl_imports(files, self._read_imports)
        else:
            paths = [path for path in unique(files) if self._parse_file(path) is not None]
        return [self._units[path] for path in paths]

    def _read_imports(self, file_path: str) -> Optional[list[str]]:
        unit = self._parse_file(file_path)
        return unit.imports if unit is not None else None

    def _parse_file(self, file_path: str) -> Optional[SourceUnit]:
        """Read and parse a file once; None for directories."""
        if file_path in self._units:
            return self._units[file_path]
        try:
            content = Path(file_path).read_text(encoding="utf-8")
        except IsADirectoryError:
            logger.warning(f"Skipping directory {file_path}")
            return None

        unit = self._parse(content, file_path)
        self._units[file_path] = unit
        return unit

    def _parse(self, content: str, file_path: Optional[str]) -> SourceUnit:
        try:
            return self.parser.parse(content, file_path)
        except SolidityParseError:
            if file_path is not None:
                logger.error(f"Error found while parsing the following file: {file_path}")
            else:
                logger.error("Error found while parsing one of the provided files")
            raise


def graph_simple(
    files: list[str], options: Union[GraphOptions, dict[str, Any], None] = None
) -> str:
    """Build a contract-level call graph in DOT.

    Args:
        files: File paths, or literal Solidity sources with
               contentsInFilePath / contents_in_file_path set.
        options: GraphOptions, or a mapping of option names (camelCase
                 names such as "colorScheme" are accepted).

    Returns:
        DOT source with legend.
    """
    if isinstance(options, dict):
        options = GraphOptions(**options)
    return SimpleGraphBuilder(options).run(files)
