"""Suite runner composing one isolated run per content kind."""
import concurrent.futures
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import click

from syntax_sweep.checkers import EslintChecker, HtmlValidateChecker
from syntax_sweep.config import Config
from syntax_sweep.logging_config import get_logger
from syntax_sweep.reporter import format_kind_banner, format_run_summary, format_suite_summary
from syntax_sweep.runner import Emit, run
from syntax_sweep.types import Kind, RunSummary, SuiteVerdict
from syntax_sweep.validators import MarkupValidator, ScriptValidator, Validator

logger = get_logger(__name__)

MARKUP_DIR = "public"
MARKUP_SUFFIX = ".html"
SCRIPT_SUFFIX = ".js"


@dataclass(frozen=True)
class KindRun:
    """Everything needed to run one kind's sweep."""

    kind: Kind
    root_dir: Path
    suffix: str
    make_validator: Callable[[], Validator]


def build_runs(project_root: Path, config: Config) -> list[KindRun]:
    """Build the fixed set of runs: markup under public/, scripts under the root.

    Args:
        project_root: Project root directory
        config: Configuration carrying the rule sets

    Returns:
        Runs in reporting order
    """
    node_command = list(config.node_command)
    timeout = config.checker_timeout_seconds

    def markup_validator() -> Validator:
        return MarkupValidator(HtmlValidateChecker(config.markup, node_command, timeout))

    def script_validator() -> Validator:
        return ScriptValidator(EslintChecker(config.script, node_command, timeout))

    return [
        KindRun(Kind.MARKUP, project_root / MARKUP_DIR, MARKUP_SUFFIX, markup_validator),
        KindRun(Kind.SCRIPT, project_root, SCRIPT_SUFFIX, script_validator),
    ]


def _run_isolated(
    kind_run: KindRun, project_root: Path, max_size_bytes: int, emit: Emit
) -> RunSummary:
    """Run one kind, turning any uncaught failure into a failed summary."""
    for line in format_kind_banner(kind_run.kind):
        emit(line)
    try:
        validator = kind_run.make_validator()
        return run(
            kind_run.root_dir,
            kind_run.suffix,
            kind_run.kind,
            validator,
            project_root=project_root,
            emit=emit,
            max_size_bytes=max_size_bytes,
        )
    except Exception as e:
        logger.exception(f"{kind_run.kind.value} validation crashed")
        summary = RunSummary.failed(kind_run.kind, f"Unexpected error: {e}")
        for line in format_run_summary(summary):
            emit(line)
        return summary


def _run_sequential(
    runs: list[KindRun], project_root: Path, max_size_bytes: int, emit: Emit
) -> dict[Kind, RunSummary]:
    return {r.kind: _run_isolated(r, project_root, max_size_bytes, emit) for r in runs}


def _run_parallel(
    runs: list[KindRun], project_root: Path, max_size_bytes: int, emit: Emit
) -> dict[Kind, RunSummary]:
    """Run every kind concurrently, then flush their output in run order.

    Each run writes into its own buffer so lines never interleave.
    """
    buffers: dict[Kind, list[str]] = {r.kind: [] for r in runs}
    summaries: dict[Kind, RunSummary] = {}

    with concurrent.futures.ThreadPoolExecutor(max_workers=len(runs)) as executor:
        future_to_kind = {
            executor.submit(
                _run_isolated, r, project_root, max_size_bytes, buffers[r.kind].append
            ): r.kind
            for r in runs
        }
        for future in concurrent.futures.as_completed(future_to_kind):
            kind = future_to_kind[future]
            try:
                summaries[kind] = future.result()
            except Exception as e:
                logger.exception(f"{kind.value} validation crashed")
                summaries[kind] = RunSummary.failed(kind, f"Unexpected error: {e}")
                buffers[kind].extend(format_run_summary(summaries[kind]))

    for r in runs:
        for line in buffers[r.kind]:
            emit(line)

    return {r.kind: summaries[r.kind] for r in runs}


def run_suite(
    project_root: Path,
    config: Config,
    emit: Emit = click.echo,
    runs: list[KindRun] | None = None,
) -> SuiteVerdict:
    """Validate every content kind and combine the verdicts.

    A failure in one kind never stops the others; the overall verdict is the
    AND of every kind's success.

    Args:
        project_root: Project root directory
        config: Configuration
        emit: Receives each report line
        runs: Runs to perform (defaults to markup and script)

    Returns:
        SuiteVerdict with one RunSummary per kind
    """
    if runs is None:
        runs = build_runs(project_root, config)
    max_size_bytes = int(config.max_file_size_mb * 1024 * 1024)

    if config.parallel and len(runs) > 1:
        per_kind = _run_parallel(runs, project_root, max_size_bytes, emit)
    else:
        per_kind = _run_sequential(runs, project_root, max_size_bytes, emit)

    verdict = SuiteVerdict(per_kind=per_kind)
    for line in format_suite_summary(verdict):
        emit(line)
    return verdict
