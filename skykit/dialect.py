"""Starlark dialect configurations."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from skykit.filekind import Kind
from skykit.typemode import Mode


@dataclass
class Features:
    """Which Starlark language features are enabled."""

    enable_def: bool = False
    enable_lambda: bool = False
    enable_load: bool = False
    enable_load_assign: bool = False
    enable_if: bool = False
    enable_for: bool = False
    enable_while: bool = False
    enable_set_literal: bool = False
    enable_f_string: bool = False
    enable_recursion: bool = False
    enable_type_comments: bool = False
    enable_annotations: bool = False
    require_top_level: bool = False
    strict_string: bool = False


@dataclass
class Dialect:
    """A named Starlark dialect: its features, file kinds and type mode."""

    name: str
    version: str = ""
    description: str = ""
    features: Features = field(default_factory=Features)
    file_kinds: list[Kind] = field(default_factory=list)
    type_mode: Mode = Mode.DISABLED

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready mapping; empty version and description are omitted."""
        data: dict[str, Any] = {"name": self.name}
        if self.version:
            data["version"] = self.version
        if self.description:
            data["description"] = self.description
        data["features"] = asdict(self.features)
        data["file_kinds"] = [kind.value for kind in self.file_kinds]
        data["type_mode"] = self.type_mode.value
        return data


def standard() -> Dialect:
    """Standard Starlark, suitable for generic .star files."""
    return Dialect(
        name="starlark",
        description="Standard Starlark dialect",
        features=Features(
            enable_def=True,
            enable_lambda=True,
            enable_load=True,
            enable_if=True,
            enable_for=True,
        ),
        file_kinds=[Kind.STARLARK],
        type_mode=Mode.DISABLED,
    )


def bazel() -> Dialect:
    """The dialect for Bazel BUILD and .bzl files."""
    return Dialect(
        name="bazel",
        description="Bazel Starlark dialect",
        features=Features(
            enable_def=True,
            enable_lambda=True,
            enable_load=True,
            enable_if=True,
            enable_for=True,
            enable_type_comments=True,
            require_top_level=True,
        ),
        file_kinds=[Kind.BUILD, Kind.BZL, Kind.WORKSPACE, Kind.MODULE, Kind.BZLMOD],
        type_mode=Mode.PARSE_ONLY,
    )


def buck2() -> Dialect:
    """The dialect for Buck2 BUCK and .bzl files."""
    return Dialect(
        name="buck2",
        description="Buck2 Starlark dialect",
        features=Features(
            enable_def=True,
            enable_lambda=True,
            enable_load=True,
            enable_if=True,
            enable_for=True,
            enable_type_comments=True,
        ),
        file_kinds=[Kind.BUCK, Kind.BZL_BUCK],
        type_mode=Mode.PARSE_ONLY,
    )