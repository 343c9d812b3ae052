"""JSON output of lint results for CI integration."""

from __future__ import annotations

import json
from collections import Counter
from itertools import groupby
from typing import Any, TextIO

from skykit.linter.reporter import Reporter
from skykit.linter.rule import LintResult, Severity

__all__ = ["JSONReporter", "severity_to_string"]

_NAMES = {
    Severity.ERROR: "error",
    Severity.WARNING: "warning",
    Severity.INFO: "info",
    Severity.HINT: "hint",
}

_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def severity_to_string(severity: Any) -> str:
    """The lower-case name of a severity, or "unknown"."""
    return _NAMES.get(severity, "unknown")


def _escape(text: str) -> str:
    for char, replacement in _HTML_ESCAPES.items():
        text = text.replace(char, replacement)
    return text


class JSONReporter(Reporter):
    """Writes findings grouped by file, with a summary, as indented JSON."""

    def build_output(self, result: LintResult) -> dict[str, Any]:
        """Build the JSON-ready structure for a result."""
        ordered = sorted(result.findings, key=lambda f: f.file_path)
        files = []
        for path, group in groupby(ordered, key=lambda f: f.file_path):
            entries = []
            for f in sorted(group, key=lambda f: (f.line, f.column)):
                entry: dict[str, Any] = {
                    "rule": f.rule,
                    "category": f.category,
                    "severity": severity_to_string(f.severity),
                    "message": f.message,
                    "line": f.line,
                    "column": f.column,
                }
                if f.end_line:
                    entry["end_line"] = f.end_line
                if f.end_column:
                    entry["end_column"] = f.end_column
                entries.append(entry)
            files.append({"path": path, "findings": entries})

        by_severity = Counter(severity_to_string(f.severity) for f in result.findings)
        by_rule = Counter(f.rule for f in result.findings if f.rule)
        by_category = Counter(f.category for f in result.findings if f.category)
        severities = Counter(f.severity for f in result.findings)

        summary: dict[str, Any] = {
            "total_files": result.files,
            "total_findings": len(result.findings),
            "errors": severities[Severity.ERROR],
            "warnings": severities[Severity.WARNING],
            "infos": severities[Severity.INFO],
            "hints": severities[Severity.HINT],
        }
        if result.errors:
            summary["file_errors"] = [
                {"path": e.path, "message": str(e.error)} for e in result.errors
            ]
        summary["by_severity"] = dict(sorted(by_severity.items()))
        summary["by_rule"] = dict(sorted(by_rule.items()))
        summary["by_category"] = dict(sorted(by_category.items()))

        return {"files": files, "summary": summary}

    def report(self, out: TextIO, result: LintResult) -> None:
        text = json.dumps(self.build_output(result), indent=2, ensure_ascii=False)
        out.write(_escape(text) + "\n")