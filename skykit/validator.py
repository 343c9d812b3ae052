"""Semantic validation of Starlark files."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from skykit.filekind import Kind


class Severity(IntEnum):
    """How serious a diagnostic is."""

    ERROR = 0
    WARNING = 1
    INFO = 2
    HINT = 3

    def __str__(self) -> str:
        return self.name.lower()


@dataclass
class Diagnostic:
    """A validation finding."""

    severity: Severity
    message: str
    file: str = ""
    line: int = 0
    column: int = 0
    end_line: int = 0
    end_column: int = 0
    code: str = ""
    source: str = ""

    def is_error(self) -> bool:
        """True if this diagnostic is an error."""
        return self.severity is Severity.ERROR

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready mapping; zero end positions are omitted."""
        data: dict[str, Any] = {
            "severity": int(self.severity),
            "message": self.message,
            "file": self.file,
            "line": self.line,
            "column": self.column,
        }
        if self.end_line:
            data["end_line"] = self.end_line
        if self.end_column:
            data["end_column"] = self.end_column
        data["code"] = self.code
        data["source"] = self.source
        return data


@dataclass
class Context:
    """What a validator is told about the file it validates."""

    dialect: str = ""
    file_kind: Kind = Kind.UNKNOWN
    file_path: str = ""
    file_content: bytes = b""


class Validator(ABC):
    """Performs semantic analysis on Starlark files."""

    @abstractmethod
    def name(self) -> str:
        """The unique identifier of this validator."""

    @abstractmethod
    def validate(self, ctx: Context) -> list[Diagnostic]:
        """Return diagnostics; raise only if validation itself fails."""

    @abstractmethod
    def supported_kinds(self) -> list[Kind]:
        """File kinds this validator applies to; empty means all."""


ValidateFn = Callable[[Context], Iterable[Diagnostic]]


class FunctionValidator(Validator):
    """A validator backed by a plain callable."""

    def __init__(
        self,
        name: str,
        kinds: Iterable[Kind] = (),
        validate_fn: ValidateFn | None = None,
    ) -> None:
        self._name = name
        self._kinds = list(kinds)
        self._validate_fn = validate_fn

    def name(self) -> str:
        return self._name

    def validate(self, ctx: Context) -> list[Diagnostic]:
        if self._validate_fn is None:
            return []
        return list(self._validate_fn(ctx))

    def supported_kinds(self) -> list[Kind]:
        return list(self._kinds)


class Runner:
    """Runs several validators and collects their diagnostics."""

    def __init__(self, *validators: Validator) -> None:
        self._validators = list(validators)

    def run(self, ctx: Context) -> list[Diagnostic]:
        """Run every applicable validator; errors from a validator propagate."""
        diagnostics: list[Diagnostic] = []
        for validator in self._validators:
            kinds = validator.supported_kinds()
            if kinds and ctx.file_kind not in kinds:
                continue
            diagnostics.extend(validator.validate(ctx))
        return diagnostics