"""Starlark tooling: file classification, dialects, validation, load resolution and linting."""

__version__ = "0.1.0"