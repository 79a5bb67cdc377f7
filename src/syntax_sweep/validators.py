"""Validator adapters: one per content kind, one diagnostic shape for all.

Each adapter turns a checker's native result into Diagnostic objects so no
checker-specific fields travel past this module.
"""
from collections.abc import Callable
from typing import Any, Protocol

from syntax_sweep.checkers import MarkupChecker, ScriptChecker
from syntax_sweep.document import Document, parse
from syntax_sweep.errors import MarkupParseError
from syntax_sweep.logging_config import get_logger
from syntax_sweep.types import Diagnostic, Severity

logger = get_logger(__name__)

# ESLint and html-validate both encode severity as 1 (warning) or 2 (error)
_NATIVE_SEVERITY = {1: Severity.WARNING, 2: Severity.ERROR}


class Validator(Protocol):
    def validate(self, content: str, filename: str = ...) -> list[Diagnostic]: ...


def _position(value: Any) -> int | None:
    if isinstance(value, int) and not isinstance(value, bool) and value >= 1:
        return value
    return None


def normalize_message(message: dict[str, Any]) -> Diagnostic | None:
    """Convert one native checker message into a Diagnostic.

    Fatal messages (hard parse failures) are always errors and carry no
    rule id. Messages with severity 0 (rule off) yield None.
    """
    fatal = bool(message.get("fatal"))
    if fatal:
        severity = Severity.ERROR
    else:
        severity = _NATIVE_SEVERITY.get(message.get("severity"))
        if severity is None:
            return None

    rule_id = None if fatal else message.get("ruleId") or None
    return Diagnostic(
        severity=severity,
        message=str(message.get("message", "")).strip() or "Unknown problem",
        line=_position(message.get("line")),
        column=_position(message.get("column")),
        rule_id=rule_id,
    )


def normalize_report(report: dict[str, Any]) -> list[Diagnostic]:
    diagnostics = []
    for message in report.get("messages") or []:
        diagnostic = normalize_message(message)
        if diagnostic is not None:
            diagnostics.append(diagnostic)
    return diagnostics


class ScriptValidator:
    """Validates script content through a rule-based checker."""

    def __init__(self, checker: ScriptChecker) -> None:
        self.checker = checker

    def validate(self, content: str, filename: str = "<stdin>.js") -> list[Diagnostic]:
        """Return the diagnostics the checker reports for content.

        Raises:
            CheckerError: If the checker itself fails; malformed content
                never raises
        """
        report = self.checker.check(content, filename)
        return normalize_report(report)


def check_structure(document: Document) -> list[Diagnostic]:
    """Structural well-formedness checks on a parsed document.

    Every finding is an error without position, since the document model
    does not track source locations.
    """
    problems = []

    if document.doctype is None:
        problems.append("Missing DOCTYPE declaration")

    # parse() always creates html, head and body; other parsers may not
    html_elements = document.find_all("html")
    html_roots = [el for el in document.roots() if el.tag == "html"]
    if not html_elements:
        problems.append("Missing <html> root element")
    elif len(html_elements) > 1 or len(html_roots) != 1:
        problems.append(
            f"Expected exactly one <html> root element, found {len(html_elements)} <html> elements"
        )

    if document.stray_html_tags:
        if document.root_implied_by is None:
            problems.append(f"Duplicate <html> start tag ({document.stray_html_tags} extra)")
        elif document.root_implied_by == "text":
            problems.append("Text appears before the <html> start tag")
        else:
            problems.append(f"<{document.root_implied_by}> appears before the <html> start tag")

    if document.find("head") is None:
        problems.append("Missing <head> element")
    if document.find("body") is None:
        problems.append("Missing <body> element")

    # First occurrence wins; each duplicated value is reported once
    occurrences: dict[str, int] = {}
    for element in document.with_attribute("id"):
        value = element.get("id") or ""
        occurrences[value] = occurrences.get(value, 0) + 1
    for value, count in occurrences.items():
        if count > 1:
            problems.append(f'Duplicate id "{value}" used by {count} elements')

    return [Diagnostic(severity=Severity.ERROR, message=problem) for problem in problems]


class MarkupValidator:
    """Validates markup: structural oracle checks plus rule-based linting."""

    def __init__(
        self,
        checker: MarkupChecker,
        parser: Callable[[str], Document] = parse,
    ) -> None:
        self.checker = checker
        self.parser = parser

    def validate(self, content: str, filename: str = "<stdin>.html") -> list[Diagnostic]:
        """Return structural diagnostics followed by rule diagnostics.

        If the document cannot be parsed at all, the parse failure is the
        only diagnostic and rule linting is skipped.

        Raises:
            CheckerError: If the rule engine itself fails
        """
        try:
            document = self.parser(content)
        except MarkupParseError as e:
            logger.info(f"Document oracle rejected {filename}: {e}")
            return [Diagnostic(severity=Severity.ERROR, message=str(e))]
        except Exception as e:
            logger.info(f"Document oracle failed on {filename}: {e}")
            return [Diagnostic(severity=Severity.ERROR, message=f"Markup could not be parsed: {e}")]

        diagnostics = check_structure(document)
        diagnostics.extend(normalize_report(self.checker.check(content, filename)))
        return diagnostics
