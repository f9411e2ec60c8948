"""Schema classification, value formatting and rendering."""

from .errors import FormattingError, SchemaError, TomlCommentError
from .formatting import format_key, format_value
from .renderer import default_toml, to_commented_toml
from .schema import SchemaNode, Shape, ShapeKind, TypeDescriptor, classify, describe

__all__ = [
    "FormattingError",
    "SchemaError",
    "TomlCommentError",
    "format_key",
    "format_value",
    "default_toml",
    "to_commented_toml",
    "SchemaNode",
    "Shape",
    "ShapeKind",
    "TypeDescriptor",
    "classify",
    "describe",
]
