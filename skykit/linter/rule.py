"""Lint rules, the context they run in, and the findings they report."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from skykit.filekind import Kind
from skykit.validator import Diagnostic, Severity

__all__ = [
    "Severity",
    "Rule",
    "Pass",
    "RuleConfig",
    "Finding",
    "Replacement",
    "FileError",
    "LintResult",
]


@dataclass(eq=False)
class Rule:
    """A single lint rule; rules compare and hash by identity."""

    name: str
    doc: str = ""
    url: str = ""
    category: str = ""
    severity: Severity = Severity.ERROR
    auto_fix: bool = False
    file_kinds: list[Kind] = field(default_factory=list)
    requires: list[Rule] = field(default_factory=list)
    run: Callable[[Pass], Any] | None = None


@dataclass
class RuleConfig:
    """Per-rule configuration; a severity of None keeps the rule's default."""

    severity: Severity | None = None
    options: dict[str, Any] = field(default_factory=dict)


@dataclass
class Replacement:
    """A suggested fix: replace content between two byte offsets."""

    content: str
    start: int
    end: int


@dataclass
class Finding:
    """A lint diagnostic."""

    file_path: str = ""
    severity: Severity = Severity.ERROR
    message: str = ""
    line: int = 0
    column: int = 0
    end_line: int = 0
    end_column: int = 0
    rule: str = ""
    category: str = ""
    replacement: Replacement | None = None

    def to_diagnostic(self, file_path: str) -> Diagnostic:
        """Convert to a validator diagnostic for the given file."""
        return Diagnostic(
            severity=self.severity,
            message=self.message,
            file=file_path,
            line=self.line,
            column=self.column,
            end_line=self.end_line,
            end_column=self.end_column,
            code=self.rule,
            source="skylint",
        )


def _no_report(finding: Finding) -> None:
    raise RuntimeError("no reporter attached to this pass")


def _no_result(rule: Rule) -> Any:
    return None


@dataclass
class Pass:
    """The context given to a running rule."""

    file: Any = None
    file_path: str = ""
    file_kind: Kind = Kind.UNKNOWN
    content: bytes = b""
    config: RuleConfig = field(default_factory=RuleConfig)
    report: Callable[[Finding], None] = _no_report
    result_of: Callable[[Rule], Any] = _no_result


@dataclass
class FileError:
    """A file that could not be linted, and why."""

    path: str
    error: Exception


@dataclass
class LintResult:
    """The outcome of linting one or more files."""

    files: int = 0
    findings: list[Finding] = field(default_factory=list)
    errors: list[FileError] = field(default_factory=list)

    def has_errors(self) -> bool:
        """True if any finding has error severity."""
        return any(f.severity is Severity.ERROR for f in self.findings)

    def has_warnings(self) -> bool:
        """True if any finding has warning or error severity."""
        return any(
            f.severity in (Severity.ERROR, Severity.WARNING) for f in self.findings
        )

    def error_count(self) -> int:
        """Number of findings with error severity."""
        return sum(1 for f in self.findings if f.severity is Severity.ERROR)

    def warning_count(self) -> int:
        """Number of findings with warning severity."""
        return sum(1 for f in self.findings if f.severity is Severity.WARNING)