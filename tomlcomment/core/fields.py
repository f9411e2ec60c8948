"""Helpers for declaring documented schema fields."""

from __future__ import annotations

import dataclasses
from typing import Any, Mapping, Optional, Sequence, Union

from tomlcomment.core.renderer import default_toml, to_commented_toml
from tomlcomment.core.schema import DOC_KEY, INLINE_KEY


def config_field(
    default: Any = dataclasses.MISSING,
    *,
    default_factory: Any = dataclasses.MISSING,
    doc: Optional[Union[str, Sequence[str]]] = None,
    inline: bool = False,
    metadata: Optional[Mapping[str, Any]] = None,
    **kwargs: Any,
) -> Any:
    """Declares a dataclass field with rendering metadata.

    Args:
        default: Default value, as for ``dataclasses.field``.
        default_factory: Default factory, as for ``dataclasses.field``.
        doc: Comment text for the field; overrides an attribute docstring.
        inline: Render the field as a single value even if its type is a class.
        metadata: Extra metadata merged with the rendering keys.
        **kwargs: Forwarded to ``dataclasses.field``.

    Returns:
        A ``dataclasses.Field``.
    """
    merged = dict(metadata or {})
    if doc is not None:
        merged[DOC_KEY] = doc
    if inline:
        merged[INLINE_KEY] = True
    return dataclasses.field(default=default, default_factory=default_factory, metadata=merged, **kwargs)


class TomlComment:
    """Mixin adding rendering methods to a dataclass schema."""

    @classmethod
    def default_toml(cls) -> str:
        return default_toml(cls)

    def to_commented_toml(self) -> str:
        return to_commented_toml(self, type(self))
