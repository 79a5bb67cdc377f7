"""Logging setup: diagnostics go to stderr, the report owns stdout.

Every module logs under the ``syntax_sweep`` namespace. Verbose and debug
output tag each record with the module that emitted it; debug output also
names the worker thread, since script and markup runs log concurrently.
"""
import logging
import sys

NAMESPACE = "syntax_sweep"

PLAIN_FORMAT = "%(levelname)s: %(message)s"
VERBOSE_FORMAT = "%(levelname)s [%(module_name)s] %(message)s"
DEBUG_FORMAT = "%(asctime)s %(levelname)s [%(threadName)s %(module_name)s] %(message)s"


class ModuleNameFormatter(logging.Formatter):
    """Formatter exposing the logger name without the package prefix."""

    def format(self, record: logging.LogRecord) -> str:
        name = record.name
        if name.startswith(NAMESPACE + "."):
            name = name[len(NAMESPACE) + 1 :]
        record.module_name = name
        return super().format(record)


def resolve_level(verbose: bool = False, quiet: bool = False, debug: bool = False) -> int:
    """Pick the log level; quiet beats debug, debug beats verbose."""
    if quiet:
        return logging.ERROR
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    return logging.WARNING


def setup_logging(
    verbose: bool = False, quiet: bool = False, debug: bool = False
) -> logging.Handler:
    """Configure the package logger.

    Args:
        verbose: INFO level, records tagged with their module
        quiet: ERROR only
        debug: DEBUG level, adds timestamps, thread names and checker commands

    Returns:
        The stderr handler that was installed
    """
    level = resolve_level(verbose=verbose, quiet=quiet, debug=debug)
    if level == logging.DEBUG:
        fmt = DEBUG_FORMAT
    elif level == logging.INFO:
        fmt = VERBOSE_FORMAT
    else:
        fmt = PLAIN_FORMAT

    logger = logging.getLogger(NAMESPACE)
    logger.setLevel(level)
    logger.propagate = False
    # Repeated setup (tests, re-invocation) replaces rather than stacks handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(ModuleNameFormatter(fmt))
    logger.addHandler(handler)
    return handler


def get_logger(name: str) -> logging.Logger:
    """Get logger for module.

    Args:
        name: Module name, placed under the package namespace if outside it

    Returns:
        Logger instance
    """
    if name != NAMESPACE and not name.startswith(NAMESPACE + "."):
        name = f"{NAMESPACE}.{name}"
    return logging.getLogger(name)
