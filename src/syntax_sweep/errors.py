"""Exception hierarchy for syntax-sweep."""


class SweepError(Exception):
    """Base class for all syntax-sweep errors."""


class DiscoveryError(SweepError):
    """Root directory missing, not a directory, or not listable."""


class CheckerError(SweepError):
    """External checker failed to run or returned unusable output."""


class MarkupParseError(SweepError):
    """Document oracle could not build a document from the markup."""
