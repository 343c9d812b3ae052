"""The skylint configuration file and how it is applied to a registry."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from skykit.linter.registry import Registry
from skykit.linter.rule import RuleConfig, Severity

__all__ = [
    "ConfigError",
    "RuleConfigOverride",
    "Config",
    "load_config",
    "parse_severity",
    "CONFIG_FILE_NAME",
]

CONFIG_FILE_NAME = ".skylint.json"

_SEVERITIES = {
    "error": Severity.ERROR,
    "warning": Severity.WARNING,
    "info": Severity.INFO,
    "hint": Severity.HINT,
}


class ConfigError(ValueError):
    """A configuration file that cannot be read, parsed or applied."""


@dataclass
class RuleConfigOverride:
    """Per-rule settings from the configuration file."""

    severity: str = ""
    options: dict[str, Any] = field(default_factory=dict)


@dataclass
class Config:
    """The skylint configuration."""

    enable: list[str] = field(default_factory=list)
    disable: list[str] = field(default_factory=list)
    warnings_as_errors: bool = False
    rules: dict[str, RuleConfigOverride] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> Config:
        """Build a config from decoded JSON; unknown keys are ignored."""
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError("parse config file: expected a JSON object")
        warnings_as_errors = data.get("warnings_as_errors")
        if warnings_as_errors is None:
            warnings_as_errors = False
        elif not isinstance(warnings_as_errors, bool):
            raise ConfigError("parse config file: warnings_as_errors must be a boolean")
        return cls(
            enable=_string_list(data.get("enable"), "enable"),
            disable=_string_list(data.get("disable"), "disable"),
            warnings_as_errors=warnings_as_errors,
            rules=_rule_overrides(data.get("rules")),
        )

    def apply_to_registry(self, registry: Registry) -> None:
        """Apply enable, disable and per-rule settings to a registry."""
        if self.enable:
            registry.enable(*self.enable)
        if self.disable:
            registry.disable(*self.disable)

        for rule_name, override in self.rules.items():
            if registry.rule(rule_name) is None:
                raise ConfigError(f"unknown rule in config: {rule_name}")
            severity: Severity | None = None
            if override.severity:
                try:
                    severity = parse_severity(override.severity)
                except ConfigError as err:
                    raise ConfigError(
                        f"invalid severity for rule {rule_name}: {err}"
                    ) from err
            registry.set_config(
                rule_name,
                RuleConfig(severity=severity, options=dict(override.options)),
            )


def _string_list(value: Any, key: str) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"parse config file: {key} must be a list of strings")
    return list(value)


def _rule_overrides(value: Any) -> dict[str, RuleConfigOverride]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError("parse config file: rules must be an object")
    overrides: dict[str, RuleConfigOverride] = {}
    for name, entry in value.items():
        if entry is None:
            overrides[name] = RuleConfigOverride()
            continue
        if not isinstance(entry, dict):
            raise ConfigError(f"parse config file: rule {name} must be an object")
        severity = entry.get("severity")
        if severity is None:
            severity = ""
        elif not isinstance(severity, str):
            raise ConfigError(f"parse config file: severity of {name} must be a string")
        options = entry.get("options")
        if options is None:
            options = {}
        elif not isinstance(options, dict):
            raise ConfigError(f"parse config file: options of {name} must be an object")
        overrides[name] = RuleConfigOverride(severity=severity, options=dict(options))
    return overrides


def _find_config_file() -> Path | None:
    """Search the working directory and its parents for the config file."""
    try:
        directory = Path.cwd()
    except OSError as err:
        raise ConfigError(f"get working directory: {err}") from err
    for candidate_dir in (directory, *directory.parents):
        candidate = candidate_dir / CONFIG_FILE_NAME
        if candidate.exists():
            return candidate
    return None


def load_config(path: str | os.PathLike[str] | None = None) -> Config:
    """Load a config file; with no path, search upward for .skylint.json."""
    if path:
        config_path = Path(path)
    else:
        found = _find_config_file()
        if found is None:
            return Config()
        config_path = found

    try:
        data = config_path.read_bytes()
    except FileNotFoundError as err:
        raise ConfigError(f"config file not found: {config_path}") from err
    except OSError as err:
        raise ConfigError(f"read config file: {err}") from err

    try:
        decoded = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as err:
        raise ConfigError(f"parse config file: {err}") from err

    return Config.from_dict(decoded)


def parse_severity(s: str) -> Severity:
    """Convert a severity name (case-sensitive) to a Severity."""
    try:
        return _SEVERITIES[s]
    except KeyError:
        raise ConfigError(
            f"unknown severity: {s} (must be one of: error, warning, info, hint)"
        ) from None