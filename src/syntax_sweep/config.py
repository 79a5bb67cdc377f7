"""Configuration management for syntax-sweep."""
import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

CONFIG_FILENAME = ".syntax-sweep.json"

# Runtime environments whose globals the script checker can predefine
SCRIPT_ENVIRONMENTS = ("browser", "node")

# Accepted spellings for a rule's enforcement level
_LEVEL_ALIASES: dict[Any, str] = {
    "off": "off",
    0: "off",
    "0": "off",
    "warn": "warn",
    "warning": "warn",
    1: "warn",
    "1": "warn",
    "error": "error",
    2: "error",
    "2": "error",
}

DEFAULT_SCRIPT_RULES: dict[str, str] = {
    "no-unused-vars": "warn",
    "no-undef": "warn",
    "no-console": "off",
    "no-debugger": "warn",
    "no-irregular-whitespace": "error",
    "no-unexpected-multiline": "error",
    "no-unreachable": "error",
    "constructor-super": "error",
    "for-direction": "error",
    "getter-return": "error",
    "no-async-promise-executor": "error",
    "no-class-assign": "error",
    "no-compare-neg-zero": "error",
    "no-cond-assign": "error",
    "no-const-assign": "error",
    "no-constant-condition": "error",
    "no-control-regex": "error",
    "no-dupe-args": "error",
    "no-dupe-class-members": "error",
    "no-dupe-else-if": "error",
    "no-dupe-keys": "error",
    "no-duplicate-case": "error",
    "no-empty": "error",
    "no-empty-character-class": "error",
    "no-empty-pattern": "error",
    "no-ex-assign": "error",
    "no-extra-boolean-cast": "error",
    "no-func-assign": "error",
    "no-import-assign": "error",
    "no-invalid-regexp": "error",
    "no-loss-of-precision": "error",
    "no-misleading-character-class": "error",
    "no-obj-calls": "error",
    "no-promise-executor-return": "error",
    "no-prototype-builtins": "error",
    "no-regex-spaces": "error",
    "no-setter-return": "error",
    "no-sparse-arrays": "error",
    "no-this-before-super": "error",
    "no-unsafe-finally": "error",
    "no-unsafe-negation": "error",
    "no-unsafe-optional-chaining": "error",
    "no-useless-backreference": "error",
    "use-isnan": "error",
    "valid-typeof": "error",
}

DEFAULT_MARKUP_RULES: dict[str, str] = {
    "doctype-html": "error",
    # Doctype presence and id uniqueness are reported by the structure checks
    "missing-doctype": "off",
    "no-dup-id": "off",
    "element-required-attributes": "error",
    "void-style": "warn",
    "no-unknown-elements": "warn",
    "attr-quotes": "warn",
    "close-attr": "error",
    "close-order": "error",
    "no-conditional-comment": "off",
    "no-inline-style": "off",
    "require-sri": "off",
    "no-trailing-whitespace": "off",
}


def normalize_rule_levels(rules: dict[str, Any]) -> dict[str, str]:
    """Map every rule level onto one of 'off', 'warn' or 'error'.

    Args:
        rules: Mapping of rule name to level in any accepted spelling

    Returns:
        Mapping of rule name to normalized level

    Raises:
        ValueError: If a rule name is empty or a level is not recognized
    """
    if not isinstance(rules, dict):
        raise ValueError("rules must be a mapping of rule name to level")
    normalized = {}
    for name, level in rules.items():
        if not str(name).strip():
            raise ValueError("rule names cannot be empty strings")
        key = level.lower() if isinstance(level, str) else level
        if isinstance(key, bool) or key not in _LEVEL_ALIASES:
            raise ValueError(f"Invalid level for rule '{name}': {level!r}")
        normalized[name] = _LEVEL_ALIASES[key]
    return normalized


class ScriptCheckerConfig(BaseModel):
    """Rule set and parser options handed to the script checker."""

    rules: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_SCRIPT_RULES), description="Rule name to level"
    )
    ecma_version: str = Field(default="latest", description="ECMAScript version to parse")
    source_type: str = Field(default="module", description="'module' or 'script'")
    globals: list[str] = Field(default_factory=list, description="Extra read-only globals")
    environments: list[str] = Field(
        default_factory=lambda: list(SCRIPT_ENVIRONMENTS),
        description="Runtime environments whose globals are predefined",
    )

    @field_validator("rules", mode="before")
    @classmethod
    def validate_rules(cls, v: dict[str, Any]) -> dict[str, str]:
        return normalize_rule_levels(v)

    @field_validator("ecma_version", mode="before")
    @classmethod
    def validate_ecma_version(cls, v: Any) -> str:
        # JSON configs commonly give the year as a number
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("source_type")
    @classmethod
    def validate_source_type(cls, v: str) -> str:
        if v not in ("module", "script", "commonjs"):
            raise ValueError(f"source_type must be module, script or commonjs, got: {v}")
        return v

    @field_validator("environments")
    @classmethod
    def validate_environments(cls, v: list[str]) -> list[str]:
        unknown = [name for name in v if name not in SCRIPT_ENVIRONMENTS]
        if unknown:
            raise ValueError(f"Unknown environments: {', '.join(unknown)}")
        return v

    model_config = {"frozen": True}


class MarkupCheckerConfig(BaseModel):
    """Presets and rule set handed to the markup rule engine."""

    extends: list[str] = Field(
        default_factory=lambda: ["html-validate:recommended"], description="Presets to extend"
    )
    rules: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_MARKUP_RULES), description="Rule name to level"
    )

    @field_validator("rules", mode="before")
    @classmethod
    def validate_rules(cls, v: dict[str, Any]) -> dict[str, str]:
        return normalize_rule_levels(v)

    model_config = {"frozen": True}


class Config(BaseModel):
    """Configuration for syntax-sweep with validation."""

    script: ScriptCheckerConfig = Field(default_factory=ScriptCheckerConfig)
    markup: MarkupCheckerConfig = Field(default_factory=MarkupCheckerConfig)
    node_command: list[str] = Field(
        default_factory=lambda: ["npx", "--no-install"],
        min_length=1,
        description="Command prefix used to launch Node.js tools",
    )
    checker_timeout_seconds: float = Field(
        default=60.0, gt=0, le=600, description="Timeout for one checker call in seconds"
    )
    max_file_size_mb: float = Field(default=5.0, gt=0, le=100, description="Maximum file size in MB")
    parallel: bool = Field(default=True, description="Validate script and markup concurrently")

    model_config = {"frozen": True}


def get_default_config() -> Config:
    """Return default configuration.

    Returns:
        Config with default values
    """
    return Config()


def load_config(config_path: Path) -> Config:
    """Load configuration from file or return defaults.

    Supports both snake_case (preferred) and camelCase keys.

    Args:
        config_path: Path to .syntax-sweep.json file

    Returns:
        Config object with loaded or default values

    Raises:
        ValueError: If the file is not a JSON object
        pydantic.ValidationError: If configuration values are invalid
    """
    if not config_path.exists():
        return get_default_config()

    with config_path.open(encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Configuration in {config_path} must be a JSON object")

    defaults = get_default_config()

    script = data.get("script", {})
    markup = data.get("markup", {})
    for section, value in (("script", script), ("markup", markup)):
        if not isinstance(value, dict):
            raise ValueError(f"'{section}' in {config_path} must be a JSON object")

    config_data = {
        "script": {
            "rules": script.get("rules", defaults.script.rules),
            "ecma_version": script.get(
                "ecma_version", script.get("ecmaVersion", defaults.script.ecma_version)
            ),
            "source_type": script.get(
                "source_type", script.get("sourceType", defaults.script.source_type)
            ),
            "globals": script.get("globals", defaults.script.globals),
            "environments": script.get("environments", defaults.script.environments),
        },
        "markup": {
            "extends": markup.get("extends", defaults.markup.extends),
            "rules": markup.get("rules", defaults.markup.rules),
        },
        "node_command": data.get("node_command", data.get("nodeCommand", defaults.node_command)),
        "checker_timeout_seconds": data.get(
            "checker_timeout_seconds",
            data.get("checkerTimeoutSeconds", defaults.checker_timeout_seconds),
        ),
        "max_file_size_mb": data.get(
            "max_file_size_mb", data.get("maxFileSizeMb", defaults.max_file_size_mb)
        ),
        "parallel": data.get("parallel", defaults.parallel),
    }

    return Config(**config_data)
