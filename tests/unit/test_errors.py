"""Tests for error handling paths."""

import json
import tempfile
from pathlib import Path

import pytest

from refdoc.config import load_config
from refdoc.core.builder import DocBuilder
from refdoc.core.exceptions import (
    ConfigError,
    RefdocError,
    SourceError,
    SymbolNotFoundError,
)
from refdoc.sources import ManifestSource, PhpSource


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as td:
        yield Path(td)


class TestSourceErrors:
    """Tests for source error handling."""

    def test_parse_encoding_error(self, temp_dir: Path) -> None:
        """Test that encoding errors raise SourceError."""
        file_path = temp_dir / "Bad.php"
        file_path.write_bytes(b"\xff\xfe invalid utf-8 \x80\x81")

        with pytest.raises(SourceError) as exc_info:
            PhpSource(temp_dir).parse_file(file_path)

        assert "Cannot read" in str(exc_info.value)

    def test_missing_file(self, temp_dir: Path) -> None:
        with pytest.raises(SourceError):
            PhpSource(temp_dir).parse_file(temp_dir / "Missing.php")

    def test_parse_empty_file(self, temp_dir: Path) -> None:
        """Test that empty files parse without error."""
        file_path = temp_dir / "Empty.php"
        file_path.write_text("")

        assert PhpSource(temp_dir).parse_file(file_path) == []

    def test_truncated_file(self, temp_dir: Path) -> None:
        """Test that unterminated code still yields what was declared."""
        file_path = temp_dir / "Broken.php"
        file_path.write_text("<?php namespace A; class Ok {} class Broken { public function x(")

        symbols = PhpSource(temp_dir).parse_file(file_path)
        assert "\\A\\Ok" in [s.name for s in symbols]

    def test_manifest_invalid_json(self, temp_dir: Path) -> None:
        path = temp_dir / "manifest.json"
        path.write_text("{not json")

        with pytest.raises(SourceError) as exc_info:
            ManifestSource(path).symbols()
        assert "Invalid manifest" in str(exc_info.value)

    def test_manifest_without_symbols(self, temp_dir: Path) -> None:
        path = temp_dir / "manifest.json"
        path.write_text(json.dumps({"classes": []}))

        with pytest.raises(SourceError):
            ManifestSource(path).symbols()

    def test_manifest_bad_entry(self, temp_dir: Path) -> None:
        path = temp_dir / "manifest.json"
        path.write_text(json.dumps({"symbols": [{"kind": "class"}]}))

        with pytest.raises(SourceError) as exc_info:
            ManifestSource(path).symbols()
        assert "#0" in str(exc_info.value)

    def test_manifest_bad_kind(self, temp_dir: Path) -> None:
        path = temp_dir / "manifest.json"
        path.write_text(json.dumps({"symbols": [{"name": "A\\B", "kind": "module"}]}))

        with pytest.raises(SourceError):
            ManifestSource(path).symbols()

    def test_manifest_missing(self, temp_dir: Path) -> None:
        with pytest.raises(SourceError):
            ManifestSource(temp_dir / "nope.json").symbols()


class TestBuilderErrors:
    """Tests for builder error handling."""

    def test_build_collects_source_errors(self, temp_dir: Path) -> None:
        (temp_dir / "Bad.php").write_bytes(b"<?php \xff")
        (temp_dir / "Good.php").write_text("<?php namespace A; /** Good. */ class Good {}")

        project = DocBuilder(load_config(temp_dir)).build()

        assert project.stats.symbols == 1
        assert len(project.stats.errors) == 1

    def test_unknown_symbol(self, temp_dir: Path) -> None:
        (temp_dir / "Good.php").write_text("<?php namespace A; /** Good. */ class Good {}")
        project = DocBuilder(load_config(temp_dir)).build()

        with pytest.raises(SymbolNotFoundError):
            project.get("\\A\\Missing")
        with pytest.raises(SymbolNotFoundError):
            project.resolve("\\A\\Missing", "int")

    def test_empty_type_text(self, temp_dir: Path) -> None:
        (temp_dir / "Good.php").write_text("<?php namespace A; /** Good. */ class Good {}")
        project = DocBuilder(load_config(temp_dir)).build()

        with pytest.raises(ValueError):
            project.resolve("\\A\\Good", "")


class TestExceptionHierarchy:
    """Tests for exception class hierarchy."""

    @pytest.mark.parametrize("error", [SourceError, ConfigError, SymbolNotFoundError])
    def test_is_refdoc_error(self, error: type[Exception]) -> None:
        """Test that every error can be caught as RefdocError."""
        with pytest.raises(RefdocError):
            raise error("test")
