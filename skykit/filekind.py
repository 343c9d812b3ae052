"""Kinds of Starlark files recognised by the toolchain."""

from __future__ import annotations

from enum import Enum


class Kind(str, Enum):
    """The type of a Starlark file."""

    STARLARK = "starlark"
    SKYI = "skyi"

    BUILD = "BUILD"
    BZL = "bzl"
    WORKSPACE = "WORKSPACE"
    MODULE = "MODULE"
    BZLMOD = "bzlmod"

    BUCK = "BUCK"
    BZL_BUCK = "bzl_buck"
    BUCKCONFIG = "buckconfig"

    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value

    def is_top_level(self) -> bool:
        """True for top-level build files (BUILD, WORKSPACE, MODULE.bazel, BUCK)."""
        return self in _TOP_LEVEL

    def is_extension(self) -> bool:
        """True for extension or library files (.bzl, .star and the like)."""
        return self in _EXTENSION

    def is_bazel(self) -> bool:
        """True for Bazel-specific file kinds."""
        return self in _BAZEL

    def is_buck(self) -> bool:
        """True for Buck2-specific file kinds."""
        return self in _BUCK


_TOP_LEVEL = frozenset({Kind.BUILD, Kind.WORKSPACE, Kind.MODULE, Kind.BUCK})
_EXTENSION = frozenset({Kind.BZL, Kind.BZL_BUCK, Kind.BZLMOD, Kind.STARLARK})
_BAZEL = frozenset({Kind.BUILD, Kind.BZL, Kind.WORKSPACE, Kind.MODULE, Kind.BZLMOD})
_BUCK = frozenset({Kind.BUCK, Kind.BZL_BUCK, Kind.BUCKCONFIG})


def all_kinds() -> list[Kind]:
    """Return every defined file kind."""
    return list(Kind)