"""GitHub Actions annotation output of lint results."""

from __future__ import annotations

from typing import TextIO

from skykit.linter.reporter import Reporter
from skykit.linter.rule import Finding, LintResult, Severity

__all__ = ["GitHubReporter"]

_LEVELS = {
    Severity.ERROR: "error",
    Severity.WARNING: "warning",
    Severity.INFO: "notice",
    Severity.HINT: "notice",
}


class GitHubReporter(Reporter):
    """Writes findings as ::level file=...,line=...::message annotations."""

    def report(self, out: TextIO, result: LintResult) -> None:
        ordered = sorted(
            result.findings, key=lambda f: (f.file_path, f.line, f.column)
        )
        for finding in ordered:
            out.write(self._annotation(finding) + "\n")
        for file_error in result.errors:
            out.write(
                f"::error file={file_error.path}::Failed to process file: "
                f"{file_error.error}\n"
            )

    @staticmethod
    def _annotation(f: Finding) -> str:
        level = _LEVELS.get(f.severity, "notice")

        title = f"{f.rule} ({f.category})" if f.rule else f.category
        if not title:
            title = "lint"

        location = f"file={f.file_path},line={f.line}"
        if f.column > 0:
            location += f",col={f.column}"
        if f.end_line > 0 and f.end_line != f.line:
            location += f",endLine={f.end_line}"
        if f.end_column > 0 and f.end_column != f.column:
            location += f",endColumn={f.end_column}"

        return f"::{level} {location},title={title}::{f.message}"