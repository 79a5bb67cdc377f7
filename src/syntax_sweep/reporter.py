"""Report formatting and output."""
from syntax_sweep.types import Diagnostic, FileResult, Kind, RunSummary, Severity, SuiteVerdict

RULE = "=" * 60

KIND_TITLES = {
    Kind.MARKUP: "MARKUP FILES",
    Kind.SCRIPT: "SCRIPT FILES",
}


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def format_kind_banner(kind: Kind) -> list[str]:
    return ["", f"VALIDATING {KIND_TITLES.get(kind, kind.value.upper())}", RULE]


def format_run_header(kind: Kind, total_files: int) -> str:
    return f"Validating {_plural(total_files, kind.value + ' file')}..."


def format_file_line(result: FileResult) -> str:
    """Format the status line for one file.

    Args:
        result: File result

    Returns:
        "[PASS] path", "[WARN] path (...)" or "[FAIL] path (...)"
    """
    if not result.diagnostics:
        return f"[PASS] {result.file}"
    if result.valid:
        return f"[WARN] {result.file} ({_plural(result.warning_count, 'warning')})"
    return (
        f"[FAIL] {result.file} "
        f"({_plural(result.error_count, 'error')}, {_plural(result.warning_count, 'warning')})"
    )


def format_diagnostic_line(diagnostic: Diagnostic) -> str:
    """Format one diagnostic as an indented detail line.

    Args:
        diagnostic: Diagnostic to format

    Returns:
        e.g. "   [ERROR] line 3:5 - Unexpected token [no-undef]"
    """
    label = "ERROR" if diagnostic.severity is Severity.ERROR else "WARNING"

    if diagnostic.line is None:
        location = "line unknown"
    elif diagnostic.column is None:
        location = f"line {diagnostic.line}"
    else:
        location = f"line {diagnostic.line}:{diagnostic.column}"

    rule = f" [{diagnostic.rule_id}]" if diagnostic.rule_id else ""
    return f"   [{label}] {location} - {diagnostic.message}{rule}"


def format_file_report(result: FileResult) -> list[str]:
    lines = [format_file_line(result)]
    lines.extend(format_diagnostic_line(d) for d in result.diagnostics)
    return lines


def format_run_summary(summary: RunSummary) -> list[str]:
    """Format the trailing summary block of one kind's run.

    Args:
        summary: Run summary

    Returns:
        Lines of the summary block
    """
    lines = [""]
    if summary.failure:
        lines.append(f"[FAIL] {summary.kind.value} validation could not run: {summary.failure}")
        return lines

    lines.append("Summary:")
    lines.append(f"   Files: {summary.total_files}")
    lines.append(f"   Errors: {summary.error_count}")
    lines.append(f"   Warnings: {summary.warning_count}")
    lines.append("")

    if summary.total_files == 0:
        lines.append(f"[FAIL] No {summary.kind.value} files found")
    elif summary.success:
        lines.append(f"[PASS] All {summary.kind.value} files are valid")
    else:
        lines.append(
            f"[FAIL] {summary.kind.value} validation failed with "
            f"{_plural(summary.error_count, 'error')}"
        )
    return lines


def format_suite_summary(verdict: SuiteVerdict) -> list[str]:
    """Format the final block with counts per kind and the grand total.

    Args:
        verdict: Suite verdict

    Returns:
        Lines of the final summary
    """
    lines = ["", RULE]
    for kind, summary in verdict.per_kind.items():
        status = "PASS" if summary.success else "FAIL"
        lines.append(
            f"[{status}] {kind.value}: {_plural(summary.total_files, 'file')}, "
            f"{_plural(summary.error_count, 'error')}, "
            f"{_plural(summary.warning_count, 'warning')}"
        )
    lines.append(
        f"Total: {_plural(verdict.total_files, 'file')}, "
        f"{_plural(verdict.error_count, 'error')}, "
        f"{_plural(verdict.warning_count, 'warning')}"
    )
    lines.append(RULE)
    if verdict.overall_success:
        lines.append("ALL VALIDATIONS PASSED")
    else:
        lines.append("SOME VALIDATIONS FAILED")
    lines.append(RULE)
    return lines


def get_exit_code(verdict: SuiteVerdict) -> int:
    """Get exit code based on the verdict.

    Args:
        verdict: Suite verdict

    Returns:
        0 if every kind succeeded, 1 otherwise
    """
    return 0 if verdict.overall_success else 1
