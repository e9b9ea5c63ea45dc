# tests/unit/test_importer.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Unit tests for solgraph.importer.

Tests input de-duplication, import path resolution and crawling.
"""

from pathlib import Path

from solgraph.importer import crawl_imports, resolve_import, unique


class TestUnique:
    """Tests for unique."""

    def test_keeps_first_seen_order(self):
        """Duplicates are dropped, order is preserved."""
        assert unique(["b.sol", "a.sol", "b.sol", "c.sol", "a.sol"]) == [
            "b.sol",
            "a.sol",
            "c.sol",
        ]

    def test_empty(self):
        """Empty input gives an empty list."""
        assert unique([]) == []


class TestResolveImport:
    """Tests for resolve_import."""

    def test_relative_import(self, tmp_path):
        """./ and ../ paths resolve against the importing file."""
        (tmp_path / "lib").mkdir()
        (tmp_path / "core").mkdir()
        target = tmp_path / "lib" / "Math.sol"
        target.write_text("")
        importer = tmp_path / "core" / "Vault.sol"
        importer.write_text("")

        resolved = resolve_import("../lib/Math.sol", str(importer))

        assert Path(resolved) == target.resolve()

    def test_missing_relative_import(self, tmp_path):
        """Unresolvable relative imports give None."""
        importer = tmp_path / "Vault.sol"
        importer.write_text("")

        assert resolve_import("./Missing.sol", str(importer)) is None

    def test_node_modules_import(self, tmp_path):
        """Package imports are found in an ancestor node_modules."""
        package_file = tmp_path / "node_modules" / "@oz" / "token" / "IERC20.sol"
        package_file.parent.mkdir(parents=True)
        package_file.write_text("")
        (tmp_path / "contracts").mkdir()
        importer = tmp_path / "contracts" / "Vault.sol"
        importer.write_text("")

        resolved = resolve_import("@oz/token/IERC20.sol", str(importer))

        assert Path(resolved) == package_file.resolve()

    def test_bare_path_next_to_importer(self, tmp_path):
        """Bare paths fall back to the importing file's directory."""
        target = tmp_path / "Token.sol"
        target.write_text("")
        importer = tmp_path / "Vault.sol"
        importer.write_text("")

        assert Path(resolve_import("Token.sol", str(importer))) == target.resolve()


class TestCrawlImports:
    """Tests for crawl_imports."""

    def test_follows_imports_transitively(self, tmp_path):
        """Every reachable file is returned once in discovery order."""
        a = tmp_path / "A.sol"
        b = tmp_path / "B.sol"
        c = tmp_path / "C.sol"
        for path in (a, b, c):
            path.write_text("")
        imports = {
            str(a): ["./B.sol"],
            str(b.resolve()): ["./C.sol", "./A.sol"],
            str(c.resolve()): [],
        }

        result = crawl_imports([str(a)], lambda path: imports[path])

        assert [Path(p).name for p in result] == ["A.sol", "B.sol", "C.sol"]

    def test_duplicate_inputs_read_once(self, tmp_path):
        """A file given twice is read once."""
        a = tmp_path / "A.sol"
        a.write_text("")
        reads = []

        def read_imports(path):
            reads.append(path)
            return []

        result = crawl_imports([str(a), str(a)], read_imports)

        assert result == [str(a)]
        assert reads == [str(a)]

    def test_skipped_files_not_returned(self, tmp_path):
        """Files whose reader returns None are left out."""
        a = tmp_path / "A.sol"
        a.write_text("")

        result = crawl_imports([str(tmp_path), str(a)], lambda p: None if p == str(tmp_path) else [])

        assert result == [str(a)]

    def test_unresolved_import_logged(self, tmp_path, caplog):
        """Missing imports are logged and skipped."""
        a = tmp_path / "A.sol"
        a.write_text("")

        result = crawl_imports([str(a)], lambda p: ["./Missing.sol"])

        assert result == [str(a)]
        assert "Could not resolve import" in caplog.text
