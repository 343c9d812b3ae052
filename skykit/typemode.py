"""How type information is processed by the toolchain."""

from __future__ import annotations

from enum import Enum


class Mode(str, Enum):
    """Controls how type annotations are processed."""

    DISABLED = "disabled"
    PARSE_ONLY = "parse_only"
    ENABLED = "enabled"

    def __str__(self) -> str:
        return self.value

    def is_enabled(self) -> bool:
        """True if this mode enables any type processing."""
        return self in (Mode.PARSE_ONLY, Mode.ENABLED)

    def should_check(self) -> bool:
        """True if this mode enables full type checking."""
        return self is Mode.ENABLED


_ALIASES = {
    "": Mode.DISABLED,
    "disabled": Mode.DISABLED,
    "parse_only": Mode.PARSE_ONLY,
    "parse-only": Mode.PARSE_ONLY,
    "parseonly": Mode.PARSE_ONLY,
    "enabled": Mode.ENABLED,
}


def parse(s: str) -> Mode:
    """Parse a string into a Mode; an empty string means disabled."""
    try:
        return _ALIASES[s]
    except KeyError:
        raise ValueError(
            f"unknown type mode: {s!r} (valid: disabled, parse_only, enabled)"
        ) from None


def all_modes() -> list[Mode]:
    """Return every defined type mode."""
    return [Mode.DISABLED, Mode.PARSE_ONLY, Mode.ENABLED]