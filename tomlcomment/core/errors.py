"""Exception hierarchy for schema description and rendering."""

from __future__ import annotations


class TomlCommentError(RuntimeError):
    """Base class for every error raised while describing or rendering a schema."""


class SchemaError(TomlCommentError):
    """Raised when a schema type cannot be described or rendered."""


class FormattingError(TomlCommentError):
    """Raised when a leaf value has no TOML representation."""
