"""Runs the enabled lint rules over files and directories."""

from __future__ import annotations

import ast
import dataclasses
import os
import stat
from pathlib import Path
from typing import Any

from skykit.classifier import Classification, Classifier, DefaultClassifier
from skykit.filekind import Kind
from skykit.linter.registry import Registry
from skykit.linter.rule import FileError, Finding, LintResult, Pass, Rule, RuleConfig
from skykit.linter.suppress import SuppressionParser, filter_suppressed

__all__ = ["Driver", "is_starlark_file"]

_STARLARK_NAMES = frozenset(
    {
        "BUILD",
        "BUILD.bazel",
        "WORKSPACE",
        "WORKSPACE.bazel",
        "MODULE.bazel",
        "BUCK",
        "Tiltfile",
    }
)

_STARLARK_EXTENSIONS = frozenset(
    {
        ".bzl",
        ".bxl",
        ".star",
        ".starlark",
        ".sky",
        ".skyi",
        ".axl",
        ".ipd",
        ".plz",
        ".pconf",
        ".pinc",
        ".mpconf",
    }
)


def _extension(name: str) -> str:
    dot = name.rfind(".")
    return name[dot:] if dot >= 0 else ""


def _base_name(path: str) -> str:
    if not path:
        return "."
    stripped = path.rstrip("/" + os.sep)
    if not stripped:
        return os.sep
    return os.path.basename(stripped)


def is_starlark_file(name: str) -> bool:
    """True if a file name looks like a Starlark file."""
    return name in _STARLARK_NAMES or _extension(name) in _STARLARK_EXTENSIONS


def _parse_source(content: bytes, path: str) -> ast.Module:
    """Parse Starlark source, which shares Python's surface syntax."""
    try:
        return ast.parse(content, filename=path)
    except (SyntaxError, ValueError) as err:
        raise ValueError(f"parsing file: {err}") from err


def _walk_dir(directory: str, files: list[str]) -> None:
    with os.scandir(directory) as it:
        entries = sorted(it, key=lambda entry: entry.name)
    for entry in entries:
        path = os.path.join(directory, entry.name)
        if entry.is_dir(follow_symlinks=False):
            if entry.name.startswith("."):
                continue
            _walk_dir(path, files)
        elif is_starlark_file(entry.name):
            files.append(path)


def _expand_path(path: str) -> list[str]:
    info = os.stat(path)
    if not stat.S_ISDIR(info.st_mode):
        return [path]
    root_name = _base_name(path)
    if root_name.startswith(".") and root_name != ".":
        return []
    files: list[str] = []
    _walk_dir(path, files)
    return files


def _expand_paths(paths: list[str]) -> list[str]:
    files: list[str] = []
    seen: set[str] = set()
    for path in paths:
        for found in _expand_path(path):
            key = os.path.abspath(found)
            if key not in seen:
                seen.add(key)
                files.append(found)
    return files


class Driver:
    """Executes the enabled rules of a registry on files."""

    def __init__(self, registry: Registry, classifier: Classifier | None = None) -> None:
        self.registry = registry
        self.classifier = classifier if classifier is not None else DefaultClassifier()

    def run(self, paths: list[str]) -> LintResult:
        """Lint files and directories; per-file failures are collected, not raised."""
        files = _expand_paths(list(paths))
        result = LintResult(files=len(files))
        for path in files:
            try:
                findings = self.run_file(path)
            except Exception as err:  # a failing file is recorded and linting goes on
                result.errors.append(FileError(path=path, error=err))
                continue
            result.findings.extend(findings)
        return result

    def run_file(self, path: str) -> list[Finding]:
        """Run every applicable enabled rule on one file."""
        try:
            content = Path(path).read_bytes()
        except OSError as err:
            raise OSError(err.errno, f"reading file: {err}") from err

        try:
            classification = self.classifier.classify(path)
        except Exception:  # unclassifiable files are linted as generic Starlark
            classification = Classification(dialect="", file_kind=Kind.STARLARK)
        kind = classification.file_kind

        tree = _parse_source(content, path)
        suppressions = SuppressionParser(content)

        applicable = [
            rule
            for rule in self.registry.enabled_rules()
            if not rule.file_kinds or kind in rule.file_kinds
        ]

        findings: list[Finding] = []
        results: dict[Rule, Any] = {}

        for rule in applicable:
            if rule.run is None:
                continue
            config = self.registry.get_config(rule.name)
            rule_pass = Pass(
                file=tree,
                file_path=path,
                file_kind=kind,
                content=content,
                config=config,
                report=self._reporter(findings, path, config),
                result_of=results.get,
            )
            try:
                outcome = rule.run(rule_pass)
            except Exception as err:
                raise RuntimeError(f"rule {rule.name}: {err}") from err
            if outcome is not None:
                results[rule] = outcome

        return filter_suppressed(findings, suppressions)

    @staticmethod
    def _reporter(findings: list[Finding], path: str, config: RuleConfig):
        def report(finding: Finding) -> None:
            changes: dict[str, Any] = {"file_path": path}
            if config.severity is not None:
                changes["severity"] = config.severity
            findings.append(dataclasses.replace(finding, **changes))

        return report