"""Render dataclass configuration schemas as commented TOML documents."""

from .core.errors import FormattingError, SchemaError, TomlCommentError
from .core.fields import TomlComment, config_field
from .core.formatting import format_value
from .core.renderer import default_toml, to_commented_toml
from .core.schema import ShapeKind, classify, describe

__version__ = "0.1.0"

__all__ = [
    "FormattingError",
    "SchemaError",
    "TomlCommentError",
    "TomlComment",
    "config_field",
    "format_value",
    "default_toml",
    "to_commented_toml",
    "ShapeKind",
    "classify",
    "describe",
]
