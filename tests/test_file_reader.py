"""Tests for safe file reading."""
import tempfile
from pathlib import Path

import pytest

from syntax_sweep.file_reader import read_source


def test_read_source_utf8():
    """Test reading valid UTF-8 file."""
    with tempfile.TemporaryDirectory() as tmpdir:
        test_file = Path(tmpdir) / "app.js"
        test_file.write_text("console.log('hola');", encoding="utf-8")

        assert read_source(test_file, max_size_bytes=1024) == "console.log('hola');"


def test_read_source_falls_back_to_latin1():
    """Test fallback to latin-1 for invalid UTF-8."""
    with tempfile.TemporaryDirectory() as tmpdir:
        test_file = Path(tmpdir) / "latin.js"
        test_file.write_bytes("// Café".encode("latin-1"))

        assert read_source(test_file, max_size_bytes=1024) == "// Café"


def test_read_source_exceeds_size():
    """Test that oversized files raise instead of being read."""
    with tempfile.TemporaryDirectory() as tmpdir:
        test_file = Path(tmpdir) / "bundle.js"
        test_file.write_text("x" * 2000)

        with pytest.raises(OSError, match="size limit"):
            read_source(test_file, max_size_bytes=1000)


def test_read_source_missing_file():
    """Test that a missing file raises OSError."""
    with tempfile.TemporaryDirectory() as tmpdir:
        with pytest.raises(OSError):
            read_source(Path(tmpdir) / "gone.js", max_size_bytes=1024)
