"""Run coordinator: discovery, per-file validation and aggregation for one kind."""
from collections.abc import Callable
from pathlib import Path

import click

from syntax_sweep.discovery import discover, relative_name
from syntax_sweep.errors import DiscoveryError
from syntax_sweep.file_reader import read_source
from syntax_sweep.logging_config import get_logger
from syntax_sweep.reporter import format_file_report, format_run_header, format_run_summary
from syntax_sweep.types import Diagnostic, FileResult, Kind, RunSummary, Severity
from syntax_sweep.validators import Validator

logger = get_logger(__name__)

Emit = Callable[[str], None]

DEFAULT_MAX_FILE_SIZE_BYTES = 5 * 1024 * 1024


def validate_file(
    file_path: Path,
    display_name: str,
    validator: Validator,
    max_size_bytes: int = DEFAULT_MAX_FILE_SIZE_BYTES,
) -> FileResult:
    """Read and validate one file.

    Read failures and validator failures are reported as a single error
    diagnostic on the file so the sweep always continues.

    Args:
        file_path: File to validate
        display_name: Name used in the report and passed to the checker
        validator: Validator adapter for the file's kind
        max_size_bytes: Files above this size are not validated

    Returns:
        FileResult for the file
    """
    try:
        content = read_source(file_path, max_size_bytes)
    except OSError as e:
        logger.warning(f"Cannot read {display_name}: {e}")
        return FileResult(
            file=display_name,
            diagnostics=(Diagnostic(Severity.ERROR, f"Could not read file: {e}"),),
        )

    try:
        diagnostics = validator.validate(content, display_name)
    except Exception as e:
        logger.warning(f"Validator failed on {display_name}: {e}")
        return FileResult(
            file=display_name,
            diagnostics=(Diagnostic(Severity.ERROR, f"Validator failed: {e}"),),
        )

    return FileResult(file=display_name, diagnostics=tuple(diagnostics))


def run(
    root_dir: Path,
    suffix: str,
    kind: Kind,
    validator: Validator,
    project_root: Path | None = None,
    emit: Emit = click.echo,
    max_size_bytes: int = DEFAULT_MAX_FILE_SIZE_BYTES,
) -> RunSummary:
    """Validate every file of one kind under root_dir.

    Files are validated one at a time in sorted path order so repeated runs
    over an unchanged tree produce identical reports.

    Args:
        root_dir: Directory to discover files under
        suffix: File name suffix for this kind
        kind: Content kind being validated
        validator: Validator adapter for the kind
        project_root: Base for the paths shown in the report (defaults to root_dir)
        emit: Receives each report line
        max_size_bytes: Files above this size are reported instead of validated

    Returns:
        RunSummary for the kind
    """
    base = project_root or root_dir

    try:
        files = discover(root_dir, suffix)
    except DiscoveryError as e:
        logger.error(f"{kind.value} discovery failed: {e}")
        summary = RunSummary.failed(kind, str(e))
        for line in format_run_summary(summary):
            emit(line)
        return summary

    files = sorted(files, key=lambda p: relative_name(p, base))
    emit(format_run_header(kind, len(files)))
    emit("")

    results = []
    error_count = 0
    warning_count = 0

    for file_path in files:
        result = validate_file(file_path, relative_name(file_path, base), validator, max_size_bytes)
        results.append(result)
        error_count += result.error_count
        warning_count += result.warning_count

        for line in format_file_report(result):
            emit(line)

    summary = RunSummary(
        kind=kind,
        total_files=len(files),
        error_count=error_count,
        warning_count=warning_count,
        results=tuple(results),
    )
    for line in format_run_summary(summary):
        emit(line)
    return summary
