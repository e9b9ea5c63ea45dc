# tests/unit/test_main.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Unit tests for solgraph.main.

Tests the command-line entry point and option merging.
"""

import yaml

from solgraph.config import dark_color_scheme
from solgraph.main import build_parser, main, resolve_options


class TestResolveOptions:
    """Tests for merging config file and flags."""

    def test_flags_override_config(self, tmp_path):
        """Command-line flags take precedence over the config file."""
        config_file = tmp_path / "solgraph.yaml"
        config_file.write_text(yaml.dump({"colorScheme": "default", "importer": False}))
        args = build_parser().parse_args(
            ["A.sol", "--config", str(config_file), "--color-scheme", "dark", "--importer"]
        )

        options = resolve_options(args)

        assert options.color_scheme == dark_color_scheme()
        assert options.importer is True
        assert options.libraries is False

    def test_config_values_kept(self, tmp_path):
        """Values not given on the command line come from the file."""
        config_file = tmp_path / "solgraph.yaml"
        config_file.write_text(yaml.dump({"libraries": True}))
        args = build_parser().parse_args(["A.sol", "--config", str(config_file)])

        assert resolve_options(args).libraries is True


class TestMain:
    """Tests for main."""

    def test_prints_dot(self, write_sol, base_derived_source, capsys):
        """DOT is printed to stdout and the exit code is 0."""
        path = write_sol("Contracts.sol", base_derived_source)

        assert main([path]) == 0

        out = capsys.readouterr().out
        assert out.startswith("digraph G {")
        assert "Derived -> Base" in out

    def test_writes_output_file(self, write_sol, base_derived_source, tmp_path):
        """--output writes the graph to a file."""
        path = write_sol("Contracts.sol", base_derived_source)
        output = tmp_path / "graph.dot"

        assert main([path, "--output", str(output)]) == 0
        assert "Derived -> Base" in output.read_text()

    def test_no_files(self):
        """No input files exits with 1."""
        assert main([]) == 1

    def test_missing_config(self, tmp_path):
        """A missing config file exits with 1."""
        assert main(["A.sol", "--config", str(tmp_path / "missing.yaml")]) == 1

    def test_parse_error(self, write_sol):
        """Syntax errors exit with 1."""
        path = write_sol("Broken.sol", "contract Broken {")

        assert main([path]) == 1
