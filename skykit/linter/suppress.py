"""Suppression comments that silence lint findings."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import IntEnum

from skykit.linter.rule import Finding

__all__ = [
    "SuppressionType",
    "Suppression",
    "SuppressionParser",
    "filter_suppressed",
]


class SuppressionType(IntEnum):
    """Where a suppression directive applies."""

    NONE = 0
    LINE = 1  # "# skylint: disable=rule" on a line of its own
    NEXT_LINE = 2  # "# skylint: disable-next-line=rule"
    INLINE = 3  # "code()  # skylint: disable=rule"


@dataclass
class Suppression:
    """A suppression directive parsed from a comment; no rules means all rules."""

    type: SuppressionType
    rules: list[str] = field(default_factory=list)
    line: int = 0


_RULE_LIST_END = re.compile(r"[ \t\n\r]")


def _find_directive(comment: str, directive: str) -> tuple[str, int]:
    """Locate "skylint: <directive>" or "skylint:<directive>" in a comment."""
    for prefix in (f"skylint: {directive}", f"skylint:{directive}"):
        idx = comment.find(prefix)
        if idx != -1:
            return prefix, idx
    return "", -1


def _parse_rule_list(text: str) -> list[str]:
    """Split a comma-separated rule list; empty or "all" means every rule."""
    text = text.strip()
    if text in ("", "all"):
        return []
    return [part.strip() for part in text.split(",") if part.strip()]


def _rules_after(comment: str, prefix: str, idx: int) -> list[str]:
    rules_text = comment[idx + len(prefix):].strip()
    rules_text = _RULE_LIST_END.split(rules_text, maxsplit=1)[0]
    return _parse_rule_list(rules_text)


def _parse_line(line: str, line_num: int) -> list[Suppression]:
    comment_idx = line.find("#")
    if comment_idx == -1:
        return []
    comment = line[comment_idx:]
    if "skylint:" not in comment:
        return []

    found: list[Suppression] = []

    prefix, idx = _find_directive(comment, "disable=")
    if idx != -1:
        has_code = bool(line[:comment_idx].strip())
        kind = SuppressionType.INLINE if has_code else SuppressionType.LINE
        found.append(Suppression(kind, _rules_after(comment, prefix, idx), line_num))

    prefix, idx = _find_directive(comment, "disable-next-line=")
    if idx != -1:
        found.append(
            Suppression(
                SuppressionType.NEXT_LINE, _rules_after(comment, prefix, idx), line_num
            )
        )

    return found


def _matches(finding: Finding, rules: list[str]) -> bool:
    return not rules or finding.rule in rules


class SuppressionParser:
    """Collects the suppression directives found in a source file."""

    def __init__(self, content: bytes | str) -> None:
        source = (
            content.decode("utf-8", errors="replace")
            if isinstance(content, bytes)
            else content
        )
        self._suppressions: dict[int, list[Suppression]] = {}
        for line_num, line in enumerate(source.split("\n"), start=1):
            found = _parse_line(line, line_num)
            if found:
                self._suppressions[line_num] = found

    def suppressions_at(self, line: int) -> list[Suppression]:
        """The directives written on a 1-based line."""
        return list(self._suppressions.get(line, []))

    def is_suppressed(self, finding: Finding) -> bool:
        """True if a directive silences this finding."""
        line = finding.line
        for supp in self._suppressions.get(line, []):
            if supp.type in (SuppressionType.INLINE, SuppressionType.LINE) and _matches(
                finding, supp.rules
            ):
                return True
        if line > 1:
            for supp in self._suppressions.get(line - 1, []):
                if supp.type is SuppressionType.NEXT_LINE and _matches(
                    finding, supp.rules
                ):
                    return True
        return False


def filter_suppressed(
    findings: Iterable[Finding], parser: SuppressionParser
) -> list[Finding]:
    """Return the findings that no directive suppresses."""
    return [f for f in findings if not parser.is_suppressed(f)]