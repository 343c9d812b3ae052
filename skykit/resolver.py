"""Resolution of Starlark load() statements to file paths."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field

ModuleID = str


class ResolverError(Exception):
    """A failure to resolve a load statement."""


NO_RESOLVER = ResolverError("no resolver configured")
MODULE_NOT_FOUND = ResolverError("module not found")
INVALID_LOAD_STRING = ResolverError("invalid load string")


@dataclass
class Resolution:
    """The outcome of resolving a load statement."""

    module_id: ModuleID = ""
    candidates: list[str] = field(default_factory=list)
    external: bool = False
    error: Exception | None = None

    def ok(self) -> bool:
        """True if resolution succeeded with at least one candidate."""
        return self.error is None and bool(self.candidates)


class LoadResolver(ABC):
    """Resolves load() statements to file paths."""

    @abstractmethod
    def resolve_load(self, from_file: str, load_string: str) -> Resolution:
        """Resolve a load string written in from_file."""

    @abstractmethod
    def workspace_root(self) -> str:
        """The workspace root path, or an empty string if unknown."""


ResolveFn = Callable[[str, str], Resolution]


class FunctionResolver(LoadResolver):
    """A resolver backed by a plain callable."""

    def __init__(
        self,
        resolve_fn: ResolveFn | None = None,
        workspace_root_path: str = "",
    ) -> None:
        self.resolve_fn = resolve_fn
        self.workspace_root_path = workspace_root_path

    def resolve_load(self, from_file: str, load_string: str) -> Resolution:
        if self.resolve_fn is None:
            return Resolution(error=NO_RESOLVER)
        return self.resolve_fn(from_file, load_string)

    def workspace_root(self) -> str:
        return self.workspace_root_path