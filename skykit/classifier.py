"""Classification of Starlark files into dialects and file kinds."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass

from skykit.filekind import Kind


@dataclass(frozen=True)
class Classification:
    """The result of classifying a file path."""

    dialect: str
    file_kind: Kind
    config_path: str = ""


class Classifier(ABC):
    """Determines the dialect and file kind for a path."""

    @abstractmethod
    def classify(self, path: str) -> Classification:
        """Classify a path; raise if it cannot be classified."""

    @abstractmethod
    def supports_dialect(self, dialect: str) -> bool:
        """True if this classifier handles the named dialect."""


class FunctionClassifier(Classifier):
    """A classifier backed by a plain callable; supports every dialect."""

    def __init__(self, fn: Callable[[str], Classification]) -> None:
        self._fn = fn

    def classify(self, path: str) -> Classification:
        return self._fn(path)

    def supports_dialect(self, dialect: str) -> bool:
        return True


class ChainClassifier(Classifier):
    """Tries several classifiers in order, returning the first success."""

    def __init__(self, *classifiers: Classifier) -> None:
        self._classifiers = list(classifiers)

    def classify(self, path: str) -> Classification:
        last_error: Exception | None = None
        for classifier in self._classifiers:
            try:
                return classifier.classify(path)
            except Exception as err:  # any classifier failure moves on to the next
                last_error = err
        if last_error is not None:
            raise last_error
        return Classification(dialect="starlark", file_kind=Kind.UNKNOWN)

    def supports_dialect(self, dialect: str) -> bool:
        return any(c.supports_dialect(dialect) for c in self._classifiers)


_BY_NAME = {
    "BUILD": ("bazel", Kind.BUILD),
    "BUILD.bazel": ("bazel", Kind.BUILD),
    "WORKSPACE": ("bazel", Kind.WORKSPACE),
    "WORKSPACE.bazel": ("bazel", Kind.WORKSPACE),
    "MODULE.bazel": ("bazel", Kind.MODULE),
    "BUCK": ("buck2", Kind.BUCK),
    "Tiltfile": ("starlark", Kind.STARLARK),
}

_GENERIC_EXTENSIONS = (
    ".star", ".starlark", ".sky", ".axl", ".ipd", ".pconf", ".pinc", ".mpconf",
)

_BY_EXTENSION = {
    ".bzl": ("bazel", Kind.BZL),
    ".bxl": ("buck2", Kind.BZL_BUCK),
    ".plz": ("starlark", Kind.BUILD),
    ".skyi": ("starlark", Kind.SKYI),
    **{ext: ("starlark", Kind.STARLARK) for ext in _GENERIC_EXTENSIONS},
}

_SUPPORTED_DIALECTS = frozenset({"bazel", "buck2", "starlark"})


def _base_name(path: str) -> str:
    if not path:
        return "."
    stripped = path.rstrip("/")
    if not stripped:
        return "/"
    return stripped.rsplit("/", 1)[-1]


def _extension(name: str) -> str:
    dot = name.rfind(".")
    return name[dot:] if dot >= 0 else ""


class DefaultClassifier(Classifier):
    """Classifies files from their file name and extension."""

    def classify(self, path: str) -> Classification:
        base = _base_name(path)
        match = _BY_NAME.get(base) or _BY_EXTENSION.get(_extension(base))
        if match is None:
            return Classification(dialect="starlark", file_kind=Kind.UNKNOWN)
        dialect, kind = match
        return Classification(dialect=dialect, file_kind=kind)

    def supports_dialect(self, dialect: str) -> bool:
        return dialect in _SUPPORTED_DIALECTS