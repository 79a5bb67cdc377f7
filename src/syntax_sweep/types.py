"""Type definitions for syntax-sweep.

All result objects are immutable and created fresh for every run.
"""
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum


class Severity(str, Enum):
    """Diagnostic severity."""

    ERROR = "error"
    WARNING = "warning"


class Kind(str, Enum):
    """Category of asset being validated."""

    SCRIPT = "script"
    MARKUP = "markup"


@dataclass(frozen=True)
class Diagnostic:
    """Single reported issue.

    ``line`` is None when the location is unknown; ``column`` and ``rule_id``
    are None when absent.
    """

    severity: Severity
    message: str
    line: int | None = None
    column: int | None = None
    rule_id: str | None = None

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR


@dataclass(frozen=True)
class FileResult:
    """Validation outcome for a single file."""

    file: str
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def error_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity is Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity is Severity.WARNING)

    @property
    def valid(self) -> bool:
        """True iff no diagnostic has error severity."""
        return self.error_count == 0


@dataclass(frozen=True)
class RunSummary:
    """Aggregate result of one kind's validation sweep.

    ``failure`` records a discovery failure or a caught run failure; it is
    context for reporting and never counted as a diagnostic.
    """

    kind: Kind
    total_files: int = 0
    error_count: int = 0
    warning_count: int = 0
    results: tuple[FileResult, ...] = ()
    failure: str | None = None

    @property
    def success(self) -> bool:
        # An empty sweep signals a misconfigured root, not a vacuous pass
        return self.error_count == 0 and self.total_files > 0

    @classmethod
    def failed(cls, kind: Kind, reason: str) -> "RunSummary":
        """Build a summary for a run that never validated any file."""
        return cls(kind=kind, failure=reason)


@dataclass(frozen=True)
class SuiteVerdict:
    """Combined result across all kinds."""

    per_kind: Mapping[Kind, RunSummary] = field(default_factory=dict)

    @property
    def overall_success(self) -> bool:
        return all(summary.success for summary in self.per_kind.values())

    @property
    def total_files(self) -> int:
        return sum(s.total_files for s in self.per_kind.values())

    @property
    def error_count(self) -> int:
        return sum(s.error_count for s in self.per_kind.values())

    @property
    def warning_count(self) -> int:
        return sum(s.warning_count for s in self.per_kind.values())
