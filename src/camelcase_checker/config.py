"""Configuration loader for the camelcase rule.

Reads the rule configuration from a JSON or YAML file, or from an http(s) URL,
and validates its structure against ``CONFIG_SCHEMA``. Two shapes are
accepted:

* the bare options object: ``{"properties": "never"}``
* an eslintrc-style rules map: ``{"rules": {"camelcase": ["warn", {...}]}}``

Only the structure is strict. An unrecognised ``properties`` value is accepted
and resolves to ``always`` when the rule runs.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from collections.abc import Iterable
from typing import Any
from urllib.parse import urlparse

import requests
import yaml
from jsonschema import Draft202012Validator
from requests import Response
from tenacity import retry, stop_after_attempt, wait_fixed

from .rules.camelcase import OPTIONS_SCHEMA, RULE_ID, Mode

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV_VAR = "CAMELCASE_CHECKER_CONFIG"
DEFAULT_CONFIG_NAMES = (".camelcaserc.json", ".camelcaserc.yaml", ".camelcaserc.yml")

_SEVERITY_NAMES = {0: "off", 1: "warn", 2: "error"}
_SEVERITY_SCHEMA: dict[str, Any] = {"enum": ["off", "warn", "error", 0, 1, 2]}

CONFIG_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "properties": OPTIONS_SCHEMA["properties"]["properties"],
        "rules": {
            "type": "object",
            "properties": {
                RULE_ID: {
                    "oneOf": [
                        _SEVERITY_SCHEMA,
                        {
                            "type": "array",
                            "prefixItems": [_SEVERITY_SCHEMA, OPTIONS_SCHEMA],
                            "minItems": 1,
                            "maxItems": 2,
                        },
                    ]
                }
            },
        },
    },
    "additionalProperties": False,
    "not": {"required": ["properties", "rules"]},
}


class ConfigError(RuntimeError):
    """Raised when the configuration cannot be loaded or is invalid."""


@dataclass(slots=True, frozen=True)
class RuleConfig:
    """Resolved configuration for the camelcase rule."""

    severity: str = "error"
    options: dict[str, Any] = field(default_factory=dict)

    @property
    def enabled(self) -> bool:
        return self.severity != "off"

    @property
    def mode(self) -> Mode:
        return Mode.from_options(self.options)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RuleConfig:
        """Create a RuleConfig from a document that already passed validation."""
        rules = data.get("rules")
        if rules is None:
            return cls(options=dict(data))

        entry = rules.get(RULE_ID)
        if entry is None:
            return cls()
        if isinstance(entry, list):
            severity, options = entry[0], (entry[1] if len(entry) > 1 else {})
        else:
            severity, options = entry, {}
        return cls(severity=_SEVERITY_NAMES.get(severity, severity), options=dict(options))


def _format_errors(errors: Iterable) -> str:
    messages = []
    for error in errors:
        pointer = "/".join(str(p) for p in error.path)
        messages.append(f"- {pointer or '<root>'}: {error.message}")
    return "\n".join(messages)


def validate_config(document: Any) -> None:
    """Raise ConfigError if ``document`` does not match ``CONFIG_SCHEMA``."""
    validator = Draft202012Validator(CONFIG_SCHEMA)
    errors = sorted(validator.iter_errors(document), key=lambda e: [str(p) for p in e.path])
    if errors:
        raise ConfigError("Invalid configuration:\n" + _format_errors(errors))


def _is_url(source: str) -> bool:
    return source.startswith("http://") or source.startswith("https://")


@retry(reraise=True, stop=stop_after_attempt(3), wait=wait_fixed(2))
def _http_get(url: str) -> Response:
    return requests.get(url, timeout=10)


def _fetch_text(url: str) -> str:
    try:
        response = _http_get(url)
    except requests.RequestException as exc:  # pragma: no cover - network failure path
        raise ConfigError(f"Failed to fetch configuration from {url}: {exc}") from exc

    if response.status_code != 200:
        raise ConfigError(f"Unexpected status code {response.status_code} fetching {url}")
    return response.text


def _parse(content: str, name: str) -> Any:
    if name.endswith((".yaml", ".yml")):
        try:
            return yaml.safe_load(content) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in configuration file: {exc}") from exc
    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in configuration file: {exc}") from exc


def _resolve_config_source(source: Path | str | None, root: Path) -> str | None:
    """Resolve where the configuration comes from.

    Priority:
    1. Explicit path or URL argument
    2. CAMELCASE_CHECKER_CONFIG environment variable
    3. The first of ``DEFAULT_CONFIG_NAMES`` present in ``root``
    """
    if source is not None:
        return str(source)

    env_source = os.environ.get(CONFIG_PATH_ENV_VAR)
    if env_source:
        return env_source

    for name in DEFAULT_CONFIG_NAMES:
        candidate = root / name
        if candidate.is_file():
            return str(candidate)

    return None


def load_config(source: Path | str | None = None, root: Path | None = None) -> RuleConfig:
    """Load and validate the rule configuration.

    Args:
        source: Optional path or http(s) URL. If not provided, uses the
            CAMELCASE_CHECKER_CONFIG env var or a ``.camelcaserc.*`` file in
            ``root``.
        root: Directory searched for default config files (default: cwd).

    Returns:
        A RuleConfig; defaults (severity ``error``, mode ``always``) when no
        configuration is found.

    Raises:
        ConfigError: If the configuration cannot be read or is invalid.
    """
    resolved = _resolve_config_source(source, root or Path.cwd())
    if resolved is None:
        logger.debug("No configuration found; using defaults")
        return RuleConfig()

    logger.debug("Loading configuration from %s", resolved)
    if _is_url(resolved):
        content = _fetch_text(resolved)
        name = urlparse(resolved).path
    else:
        config_path = Path(resolved)
        if not config_path.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")
        try:
            content = config_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Failed to read configuration file: {exc}") from exc
        name = config_path.name

    document = _parse(content, name)
    validate_config(document)
    return RuleConfig.from_dict(document)
