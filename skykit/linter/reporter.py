"""Text output of lint results."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TextIO

from skykit.linter.rule import Finding, LintResult, Severity

__all__ = ["Reporter", "TextReporter", "FileReporter", "CompactReporter"]

_PLAIN = {
    Severity.ERROR: "error:",
    Severity.WARNING: "warning:",
    Severity.INFO: "info:",
    Severity.HINT: "hint:",
}

_COLORED = {
    Severity.ERROR: "\033[31merror:\033[0m",
    Severity.WARNING: "\033[33mwarning:\033[0m",
    Severity.INFO: "\033[36minfo:\033[0m",
    Severity.HINT: "\033[90mhint:\033[0m",
}


def _sorted_findings(findings: list[Finding]) -> list[Finding]:
    return sorted(findings, key=lambda f: (f.file_path, f.line, f.column))


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


class Reporter(ABC):
    """Writes lint results to a text stream."""

    @abstractmethod
    def report(self, out: TextIO, result: LintResult) -> None:
        """Write the results to out."""


@dataclass
class TextReporter(Reporter):
    """Human-readable output, grouped by file, with a summary line."""

    show_rule: bool = True
    show_category: bool = False
    color_output: bool = False

    def report(self, out: TextIO, result: LintResult) -> None:
        if not result.findings and not result.errors:
            return

        ordered = _sorted_findings(result.findings)
        current = ""
        for finding in ordered:
            if finding.file_path != current:
                if current:
                    out.write("\n")
                current = finding.file_path
            out.write(self._format_finding(finding) + "\n")

        for file_error in result.errors:
            out.write(f"Error processing {file_error.path}: {file_error.error}\n")

        if ordered:
            out.write("\n")
            self._write_summary(out, result)

    def _format_severity(self, severity: Severity) -> str:
        table = _COLORED if self.color_output else _PLAIN
        return table.get(severity, "unknown:")

    def _format_finding(self, f: Finding) -> str:
        if f.column > 0:
            parts = [f"{f.file_path}:{f.line}:{f.column}:"]
        else:
            parts = [f"{f.file_path}:{f.line}:"]
        parts.append(self._format_severity(f.severity))
        parts.append(f.message)
        if self.show_rule and f.rule:
            parts.append(f"({f.rule})")
        if self.show_category and f.category:
            parts.append(f"[{f.category}]")
        return " ".join(parts)

    @staticmethod
    def _write_summary(out: TextIO, result: LintResult) -> None:
        parts = []
        errors = result.error_count()
        warnings = result.warning_count()
        if errors:
            parts.append(_plural(errors, "error"))
        if warnings:
            parts.append(_plural(warnings, "warning"))
        if parts:
            out.write(f"Found {', '.join(parts)} in {result.files} file(s)\n")


@dataclass
class FileReporter(TextReporter):
    """Text output grouped by file."""


@dataclass
class CompactReporter(Reporter):
    """One line per finding: file:line:column: severity: message (rule)."""

    color_output: bool = False

    def report(self, out: TextIO, result: LintResult) -> None:
        if not result.findings and not result.errors:
            return

        for f in _sorted_findings(result.findings):
            location = f"{f.file_path}:{f.line}:{f.column}:"
            severity = _PLAIN.get(f.severity, "unknown:")
            if f.rule:
                out.write(f"{location} {severity} {f.message} ({f.rule})\n")
            else:
                out.write(f"{location} {severity} {f.message}\n")

        for file_error in result.errors:
            out.write(f"{file_error.path}: error: {file_error.error}\n")