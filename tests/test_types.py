from syntax_sweep.types import (
    Diagnostic,
    FileResult,
    Kind,
    RunSummary,
    Severity,
    SuiteVerdict,
)


def _error(message="bad"):
    return Diagnostic(Severity.ERROR, message, line=1, column=1, rule_id="rule")


def _warning(message="meh"):
    return Diagnostic(Severity.WARNING, message, line=2, column=3, rule_id="rule")


def test_file_without_errors_is_valid_regardless_of_warnings():
    """Test that warnings never affect validity."""
    result = FileResult("a.js", (_warning(), _warning(), _warning()))

    assert result.valid is True
    assert result.warning_count == 3
    assert result.error_count == 0


def test_file_with_error_is_invalid():
    """Test that one error makes the file invalid."""
    result = FileResult("a.js", (_warning(), _error()))

    assert result.valid is False
    assert result.error_count == 1


def test_file_without_diagnostics_is_valid():
    """Test that a clean file is valid."""
    assert FileResult("a.js").valid is True


def test_run_summary_success_requires_files():
    """Test that an empty run is a failure, not a vacuous pass."""
    assert RunSummary(Kind.SCRIPT, total_files=0).success is False


def test_run_summary_success_requires_no_errors():
    """Test that errors fail the run and warnings do not."""
    assert RunSummary(Kind.SCRIPT, total_files=3, error_count=1).success is False
    assert RunSummary(Kind.SCRIPT, total_files=3, warning_count=5).success is True


def test_failed_run_summary():
    """Test the helper for runs that never validated a file."""
    summary = RunSummary.failed(Kind.MARKUP, "Directory does not exist")

    assert summary.success is False
    assert summary.total_files == 0
    assert summary.error_count == 0
    assert summary.failure == "Directory does not exist"


def test_overall_success_is_and_of_kinds():
    """Test AND semantics across kinds."""
    ok = RunSummary(Kind.SCRIPT, total_files=1)
    bad = RunSummary(Kind.MARKUP, total_files=1, error_count=2)

    assert SuiteVerdict({Kind.SCRIPT: ok, Kind.MARKUP: ok}).overall_success is True
    assert SuiteVerdict({Kind.SCRIPT: ok, Kind.MARKUP: bad}).overall_success is False
    assert SuiteVerdict({Kind.SCRIPT: bad, Kind.MARKUP: ok}).overall_success is False


def test_suite_totals():
    """Test grand totals across kinds."""
    verdict = SuiteVerdict(
        {
            Kind.MARKUP: RunSummary(Kind.MARKUP, total_files=2, error_count=1, warning_count=3),
            Kind.SCRIPT: RunSummary(Kind.SCRIPT, total_files=5, error_count=0, warning_count=1),
        }
    )

    assert verdict.total_files == 7
    assert verdict.error_count == 1
    assert verdict.warning_count == 4
