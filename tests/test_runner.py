import os
import tempfile
from pathlib import Path
from unittest.mock import patch

from syntax_sweep.errors import CheckerError
from syntax_sweep.runner import run, validate_file
from syntax_sweep.types import Diagnostic, Kind, Severity


class FakeValidator:
    """Returns canned diagnostics keyed by file content."""

    def __init__(self, by_content=None, fail_on=None):
        self.by_content = by_content or {}
        self.fail_on = fail_on
        self.seen = []

    def validate(self, content, filename="x"):
        self.seen.append(filename)
        if content == self.fail_on:
            raise CheckerError("checker crashed")
        return list(self.by_content.get(content, []))


def _run(root, validator, **kwargs):
    lines = []
    summary = run(root, ".js", Kind.SCRIPT, validator, emit=lines.append, **kwargs)
    return summary, lines


def test_empty_project_root_fails():
    """Test that an empty root gives zero files and a failed run."""
    with tempfile.TemporaryDirectory() as tmpdir:
        summary, lines = _run(Path(tmpdir), FakeValidator())

        assert summary.total_files == 0
        assert summary.success is False
        assert any("No script files found" in line for line in lines)


def test_missing_root_is_recorded_failure():
    """Test that discovery failure yields a failed summary, not an exception."""
    with tempfile.TemporaryDirectory() as tmpdir:
        summary, lines = _run(Path(tmpdir) / "public", FakeValidator())

        assert summary.success is False
        assert summary.total_files == 0
        assert summary.error_count == 0
        assert "does not exist" in summary.failure
        assert summary.results == ()
        assert any("could not run" in line for line in lines)


def test_counts_errors_and_warnings():
    """Test aggregation of per-file diagnostics."""
    error = Diagnostic(Severity.ERROR, "bad", 1, 1, "no-dupe-keys")
    warning = Diagnostic(Severity.WARNING, "meh", 2, 1, "no-unused-vars")

    with tempfile.TemporaryDirectory() as tmpdir:
        tmpdir = Path(tmpdir)
        (tmpdir / "a.js").write_text("bad")
        (tmpdir / "b.js").write_text("warn")
        (tmpdir / "c.js").write_text("clean")
        validator = FakeValidator({"bad": [error, warning], "warn": [warning]})

        summary, lines = _run(tmpdir, validator)

        assert summary.total_files == 3
        assert summary.error_count == 1
        assert summary.warning_count == 2
        assert summary.success is False
        assert [r.valid for r in summary.results] == [False, True, True]
        assert "[FAIL] a.js (1 error, 1 warning)" in lines
        assert "[WARN] b.js (1 warning)" in lines
        assert "[PASS] c.js" in lines
        assert "   [ERROR] line 1:1 - bad [no-dupe-keys]" in lines


def test_warnings_only_run_succeeds():
    """Test that warnings never fail the run."""
    warning = Diagnostic(Severity.WARNING, "unused", 1, 7, "no-unused-vars")

    with tempfile.TemporaryDirectory() as tmpdir:
        tmpdir = Path(tmpdir)
        (tmpdir / "app.js").write_text("const x = 1;")

        summary, _ = _run(tmpdir, FakeValidator({"const x = 1;": [warning]}))

        assert summary.success is True
        assert summary.warning_count == 1


def test_files_validated_in_sorted_order():
    """Test deterministic sorted processing and identical repeated output."""
    with tempfile.TemporaryDirectory() as tmpdir:
        tmpdir = Path(tmpdir)
        (tmpdir / "zeta.js").write_text("z")
        (tmpdir / "alpha.js").write_text("a")
        (tmpdir / "lib").mkdir()
        (tmpdir / "lib" / "mid.js").write_text("m")

        validator = FakeValidator()
        _, first = _run(tmpdir, validator)
        _, second = _run(tmpdir, FakeValidator())

        assert validator.seen == sorted(["zeta.js", "alpha.js", os.path.join("lib", "mid.js")])
        assert first == second


def test_checker_crash_becomes_error_on_that_file():
    """Test that one crashing file does not abort the run."""
    with tempfile.TemporaryDirectory() as tmpdir:
        tmpdir = Path(tmpdir)
        (tmpdir / "a.js").write_text("boom")
        (tmpdir / "b.js").write_text("fine")

        summary, _ = _run(tmpdir, FakeValidator(fail_on="boom"))

        assert summary.total_files == 2
        assert summary.error_count == 1
        crashed = summary.results[0]
        assert crashed.file == "a.js"
        assert len(crashed.diagnostics) == 1
        assert "checker crashed" in crashed.diagnostics[0].message
        assert summary.results[1].valid


def test_unreadable_file_becomes_error():
    """Test that read failures are reported on the file."""
    with tempfile.TemporaryDirectory() as tmpdir:
        tmpdir = Path(tmpdir)
        (tmpdir / "a.js").write_text("x")

        with patch("syntax_sweep.runner.read_source", side_effect=PermissionError("denied")):
            summary, _ = _run(tmpdir, FakeValidator())

        assert summary.error_count == 1
        assert "Could not read file" in summary.results[0].diagnostics[0].message


def test_oversized_file_reported_not_validated():
    """Test the size limit path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        tmpdir = Path(tmpdir)
        (tmpdir / "bundle.js").write_text("x" * 100)
        validator = FakeValidator()

        summary, _ = _run(tmpdir, validator, max_size_bytes=10)

        assert summary.error_count == 1
        assert validator.seen == []


def test_paths_reported_relative_to_project_root():
    """Test display names relative to the project root."""
    with tempfile.TemporaryDirectory() as tmpdir:
        tmpdir = Path(tmpdir)
        public = tmpdir / "public"
        public.mkdir()
        (public / "index.js").write_text("x")

        summary, _ = _run(public, FakeValidator(), project_root=tmpdir)

        assert summary.results[0].file == os.path.join("public", "index.js")


def test_validate_file_passes_display_name():
    """Test that the checker receives the display name."""
    with tempfile.TemporaryDirectory() as tmpdir:
        target = Path(tmpdir) / "a.js"
        target.write_text("x")
        validator = FakeValidator()

        result = validate_file(target, "a.js", validator)

        assert result.valid
        assert validator.seen == ["a.js"]
