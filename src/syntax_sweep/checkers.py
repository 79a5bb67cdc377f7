"""External rule-based checkers run as Node.js command-line tools.

Both checkers read content on stdin and report JSON on stdout. They return
the tool's native per-file result (a dict with ``messages``,
``errorCount`` and ``warningCount``); normalization happens in the
validators.
"""
import json
import os
import subprocess
import tempfile
from pathlib import Path
from typing import Any, Protocol

from syntax_sweep.config import MarkupCheckerConfig, ScriptCheckerConfig
from syntax_sweep.errors import CheckerError
from syntax_sweep.logging_config import get_logger

logger = get_logger(__name__)

# Timeout for one checker invocation in seconds
CHECKER_TIMEOUT = 60.0

DEFAULT_NODE_COMMAND = ("npx", "--no-install")

# Read-only globals each runtime environment provides
ENVIRONMENT_GLOBALS: dict[str, tuple[str, ...]] = {
    "browser": (
        "AbortController",
        "Blob",
        "CustomEvent",
        "Element",
        "Event",
        "EventTarget",
        "File",
        "FileReader",
        "FormData",
        "HTMLElement",
        "Headers",
        "IntersectionObserver",
        "MutationObserver",
        "Node",
        "NodeList",
        "Request",
        "ResizeObserver",
        "Response",
        "URL",
        "URLSearchParams",
        "WebSocket",
        "XMLHttpRequest",
        "alert",
        "atob",
        "btoa",
        "cancelAnimationFrame",
        "clearInterval",
        "clearTimeout",
        "confirm",
        "console",
        "crypto",
        "document",
        "fetch",
        "getComputedStyle",
        "history",
        "localStorage",
        "location",
        "matchMedia",
        "navigator",
        "performance",
        "prompt",
        "queueMicrotask",
        "requestAnimationFrame",
        "self",
        "sessionStorage",
        "setInterval",
        "setTimeout",
        "structuredClone",
        "window",
    ),
    "node": (
        "Buffer",
        "__dirname",
        "__filename",
        "clearImmediate",
        "clearInterval",
        "clearTimeout",
        "console",
        "exports",
        "global",
        "module",
        "process",
        "queueMicrotask",
        "require",
        "setImmediate",
        "setInterval",
        "setTimeout",
        "structuredClone",
    ),
}

# html-validate rules that repeat the structure checks; off unless set explicitly
STRUCTURE_RULES = ("missing-doctype", "no-dup-id")


class ScriptChecker(Protocol):
    def check(self, content: str, filename: str) -> dict[str, Any]: ...


class MarkupChecker(Protocol):
    def check(self, content: str, filename: str) -> dict[str, Any]: ...


def run_node_tool(
    args: list[str],
    content: str,
    timeout: float = CHECKER_TIMEOUT,
    ok_codes: tuple[int, ...] = (0, 1),
    env: dict[str, str] | None = None,
) -> str:
    """Run a Node.js tool with content on stdin and return its stdout.

    Args:
        args: Full command line
        content: Text fed to stdin
        timeout: Seconds to wait before giving up
        ok_codes: Exit codes that mean the tool ran (lint findings included)
        env: Extra environment variables for the tool

    Returns:
        Captured stdout

    Raises:
        CheckerError: If the tool is missing, times out or exits abnormally
    """
    logger.debug(f"Running: {' '.join(args)}")
    try:
        result = subprocess.run(
            args,
            input=content,
            capture_output=True,
            text=True,
            encoding="utf-8",
            timeout=timeout,
            env={**os.environ, **env} if env else None,
        )
    except FileNotFoundError as e:
        raise CheckerError(f"Checker executable not found: {args[0]}") from e
    except subprocess.TimeoutExpired as e:
        raise CheckerError(f"Checker timed out after {timeout}s") from e

    if result.returncode not in ok_codes:
        detail = result.stderr.strip() or result.stdout.strip() or "no output"
        raise CheckerError(f"Checker exited with status {result.returncode}: {detail}")

    return result.stdout


def parse_json_report(output: str) -> dict[str, Any]:
    """Extract the single file result from a JSON formatter's output.

    Raises:
        CheckerError: If the output is not the expected JSON list
    """
    try:
        report = json.loads(output)
    except json.JSONDecodeError as e:
        raise CheckerError(f"Checker produced invalid JSON: {e}") from e

    if not isinstance(report, list):
        raise CheckerError("Checker JSON output is not a list of results")
    if not report:
        # html-validate omits files without findings
        return {"messages": [], "errorCount": 0, "warningCount": 0}
    result = report[0]
    if not isinstance(result, dict):
        raise CheckerError("Checker JSON result is not an object")
    return result


class EslintChecker:
    """ESLint driven through its CLI with a generated flat config file.

    Needs an ESLint release that reads flat config (8.57 or later).
    """

    def __init__(
        self,
        config: ScriptCheckerConfig,
        node_command: tuple[str, ...] | list[str] = DEFAULT_NODE_COMMAND,
        timeout: float = CHECKER_TIMEOUT,
    ) -> None:
        self.config = config
        self.node_command = list(node_command)
        self.timeout = timeout

    def config_document(self) -> list[dict[str, Any]]:
        """Flat config array: parser options, environment globals and rules."""
        globals_: dict[str, str] = {}
        for environment in self.config.environments:
            for name in ENVIRONMENT_GLOBALS[environment]:
                globals_[name] = "readonly"
        for name in self.config.globals:
            globals_[name] = "readonly"

        ecma_version: int | str = self.config.ecma_version
        if self.config.ecma_version.isdigit():
            ecma_version = int(self.config.ecma_version)

        return [
            {
                "languageOptions": {
                    "ecmaVersion": ecma_version,
                    "sourceType": self.config.source_type,
                    "globals": globals_,
                },
                "rules": dict(self.config.rules),
            }
        ]

    def render_config(self) -> str:
        return "export default " + json.dumps(self.config_document(), indent=2) + ";\n"

    def build_command(self, config_path: Path, filename: str) -> list[str]:
        return self.node_command + [
            "eslint",
            "--config",
            str(config_path),
            "--stdin",
            "--stdin-filename",
            filename,
            "--format",
            "json",
        ]

    def check(self, content: str, filename: str) -> dict[str, Any]:
        with tempfile.TemporaryDirectory(prefix="syntax-sweep-") as tmpdir:
            config_path = Path(tmpdir) / "eslint.config.mjs"
            config_path.write_text(self.render_config(), encoding="utf-8")
            output = run_node_tool(
                self.build_command(config_path, filename),
                content,
                self.timeout,
                env={"ESLINT_USE_FLAT_CONFIG": "true"},
            )
        return parse_json_report(output)


class HtmlValidateChecker:
    """html-validate driven through its CLI with a generated config file."""

    def __init__(
        self,
        config: MarkupCheckerConfig,
        node_command: tuple[str, ...] | list[str] = DEFAULT_NODE_COMMAND,
        timeout: float = CHECKER_TIMEOUT,
    ) -> None:
        self.config = config
        self.node_command = list(node_command)
        self.timeout = timeout

    def config_document(self) -> dict[str, Any]:
        rules = {name: "off" for name in STRUCTURE_RULES}
        rules.update(self.config.rules)
        return {"extends": list(self.config.extends), "rules": rules}

    def build_command(self, config_path: Path, filename: str) -> list[str]:
        return self.node_command + [
            "html-validate",
            "--config",
            str(config_path),
            "--formatter",
            "json",
            "--stdin",
            "--stdin-filename",
            filename,
        ]

    def check(self, content: str, filename: str) -> dict[str, Any]:
        with tempfile.TemporaryDirectory(prefix="syntax-sweep-") as tmpdir:
            config_path = Path(tmpdir) / "htmlvalidate.json"
            config_path.write_text(json.dumps(self.config_document()), encoding="utf-8")
            output = run_node_tool(
                self.build_command(config_path, filename), content, self.timeout
            )
        return parse_json_report(output)
