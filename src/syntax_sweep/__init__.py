"""Syntax-sweep: syntax validation for a web project's script and markup assets."""

from syntax_sweep.__version__ import __version__
from syntax_sweep.config import Config, get_default_config, load_config
from syntax_sweep.discovery import discover
from syntax_sweep.errors import CheckerError, DiscoveryError, MarkupParseError, SweepError
from syntax_sweep.runner import run
from syntax_sweep.suite import run_suite
from syntax_sweep.types import Diagnostic, FileResult, Kind, RunSummary, Severity, SuiteVerdict

__all__ = [
    "__version__",
    "Config",
    "load_config",
    "get_default_config",
    "discover",
    "run",
    "run_suite",
    "Diagnostic",
    "FileResult",
    "Kind",
    "RunSummary",
    "Severity",
    "SuiteVerdict",
    "SweepError",
    "DiscoveryError",
    "CheckerError",
    "MarkupParseError",
]
