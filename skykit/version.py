"""Build version information."""

VERSION = "dev"
COMMIT = "none"
DATE = "unknown"


def version_string() -> str:
    """Return the version, commit and build date as one line."""
    return f"{VERSION} (commit {COMMIT}, built {DATE})"