"""A collection of lint rules with enable, disable and per-rule configuration."""

from __future__ import annotations

import re
from collections import deque

from skykit.linter.rule import Rule, RuleConfig

__all__ = ["RegistryError", "Registry"]


class RegistryError(Exception):
    """An invalid rule, configuration or dependency graph."""


def _is_valid_rule_name(name: str) -> bool:
    """Lowercase letters, with digits, hyphens and underscores after the start."""
    if not name:
        return False
    last = len(name) - 1
    for i, ch in enumerate(name):
        if "a" <= ch <= "z":
            continue
        if "0" <= ch <= "9" and i > 0:
            continue
        if ch in "-_" and 0 < i < last:
            continue
        return False
    return True


def _class_char(pattern: str, j: int) -> tuple[str, int]:
    if j >= len(pattern) or pattern[j] in "-]":
        raise ValueError("bad pattern")
    if pattern[j] == "\\":
        j += 1
        if j >= len(pattern):
            raise ValueError("bad pattern")
    return pattern[j], j + 1


def _translate_glob(pattern: str) -> str:
    """Translate a shell-style pattern into a regular expression."""
    out: list[str] = []
    n = len(pattern)
    i = 0
    while i < n:
        ch = pattern[i]
        if ch == "*":
            out.append("[^/]*")
            i += 1
        elif ch == "?":
            out.append("[^/]")
            i += 1
        elif ch == "\\":
            if i + 1 >= n:
                raise ValueError("bad pattern")
            out.append(re.escape(pattern[i + 1]))
            i += 2
        elif ch == "[":
            j = i + 1
            negate = j < n and pattern[j] == "^"
            if negate:
                j += 1
            parts: list[str] = []
            while True:
                if j >= n:
                    raise ValueError("bad pattern")
                if pattern[j] == "]" and parts:
                    j += 1
                    break
                lo, j = _class_char(pattern, j)
                if j < n and pattern[j] == "-":
                    hi, j = _class_char(pattern, j + 1)
                    if lo > hi:
                        raise ValueError("bad pattern")
                    parts.append(f"{re.escape(lo)}-{re.escape(hi)}")
                else:
                    parts.append(re.escape(lo))
            out.append("[" + ("^" if negate else "") + "".join(parts) + "]")
            i = j
        else:
            out.append(re.escape(ch))
            i += 1
    return "".join(out)


def _match_glob(pattern: str, name: str) -> bool:
    """Match a name against a glob; a malformed pattern matches nothing."""
    try:
        regex = _translate_glob(pattern)
    except ValueError:
        return False
    return re.fullmatch(regex, name) is not None


def _topological_sort(rules: list[Rule]) -> list[Rule]:
    """Order rules so that every rule follows the rules it requires."""
    dependents: dict[str, list[Rule]] = {}
    in_degree: dict[str, int] = {}
    for rule in rules:
        in_degree.setdefault(rule.name, 0)
        for req in rule.requires:
            dependents.setdefault(req.name, []).append(rule)
            in_degree[rule.name] += 1

    queue = deque(rule for rule in rules if in_degree[rule.name] == 0)
    ordered: list[Rule] = []
    while queue:
        rule = queue.popleft()
        ordered.append(rule)
        for dependent in dependents.get(rule.name, []):
            in_degree[dependent.name] -= 1
            if in_degree[dependent.name] == 0:
                queue.append(dependent)

    if len(ordered) != len(rules):
        raise RegistryError("dependency cycle detected in linter rules")
    return ordered


class Registry:
    """Holds lint rules and tracks which are enabled and how they are configured."""

    def __init__(self) -> None:
        self._rules: dict[str, Rule] = {}
        self._enabled: dict[str, bool] = {}
        self._configs: dict[str, RuleConfig] = {}
        self._categories: dict[str, list[str]] = {}

    def register(self, *rules: Rule) -> None:
        """Add rules, enabled by default; raise on an empty, duplicate or bad name."""
        for rule in rules:
            if not rule.name:
                raise RegistryError("rule has empty name")
            if rule.name in self._rules:
                raise RegistryError(f"duplicate rule name: {rule.name}")
            if not _is_valid_rule_name(rule.name):
                raise RegistryError(
                    f"invalid rule name {rule.name!r}: must be kebab-case or "
                    "snake_case (lowercase with hyphens or underscores)"
                )
            self._rules[rule.name] = rule
            self._enabled[rule.name] = True
            if rule.category:
                self._categories.setdefault(rule.category, []).append(rule.name)

    def rule(self, name: str) -> Rule | None:
        """The rule with the given name, or None."""
        return self._rules.get(name)

    def _set_enabled(self, names: tuple[str, ...], value: bool) -> None:
        for name in names:
            if name == "all":
                for rule_name in self._rules:
                    self._enabled[rule_name] = value
            elif name in self._rules:
                self._enabled[name] = value
            elif name in self._categories:
                for rule_name in self._categories[name]:
                    self._enabled[rule_name] = value
            elif "*" in name:
                for rule_name in self._rules:
                    if _match_glob(name, rule_name):
                        self._enabled[rule_name] = value

    def enable(self, *names: str) -> None:
        """Enable rules by name, category, glob pattern, or "all"."""
        self._set_enabled(names, True)

    def disable(self, *names: str) -> None:
        """Disable rules by name, category, glob pattern, or "all"."""
        self._set_enabled(names, False)

    def set_config(self, rule_name: str, config: RuleConfig) -> None:
        """Set the configuration of a registered rule."""
        if rule_name not in self._rules:
            raise RegistryError(f"unknown rule: {rule_name}")
        self._configs[rule_name] = config

    def get_config(self, rule_name: str) -> RuleConfig:
        """The configuration of a rule, or an empty one if none is set."""
        return self._configs.get(rule_name, RuleConfig())

    def enabled_rules(self) -> list[Rule]:
        """Enabled rules, with every rule after the rules it requires."""
        enabled = [rule for name, rule in self._rules.items() if self._enabled[name]]
        return _topological_sort(enabled)

    def all_rules(self) -> list[Rule]:
        """Every registered rule, sorted by name."""
        return sorted(self._rules.values(), key=lambda rule: rule.name)

    def categories(self) -> list[str]:
        """Every known category, sorted."""
        return sorted(self._categories)

    def rules_by_category(self, category: str) -> list[Rule]:
        """The rules in a category, in registration order."""
        return [
            self._rules[name]
            for name in self._categories.get(category, [])
            if name in self._rules
        ]

    def validate(self) -> None:
        """Raise if any rule has a dependency cycle or an unknown requirement."""
        for rule in self._rules.values():
            self._validate_rule(rule, set())

    def _validate_rule(self, rule: Rule, visiting: set[str]) -> None:
        if rule.name in visiting:
            raise RegistryError(
                f"dependency cycle detected involving rule: {rule.name}"
            )
        visiting.add(rule.name)
        try:
            for req in rule.requires:
                if req.name not in self._rules:
                    raise RegistryError(
                        f"rule {rule.name} requires unknown rule: {req.name}"
                    )
                self._validate_rule(req, visiting)
        finally:
            visiting.discard(rule.name)