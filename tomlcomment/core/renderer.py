"""Recursive rendering of dataclass values into commented TOML."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Sequence

from tomlcomment.core.errors import FormattingError, SchemaError
from tomlcomment.core.formatting import format_key, format_value
from tomlcomment.core.schema import Shape, ShapeKind, TypeDescriptor, describe
from tomlcomment.utils.logger import get_logger

logger = get_logger(__name__)

MAX_DEPTH = 64


def is_schema_instance(value: Any) -> bool:
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


@dataclass
class RenderContext:
    """Mutable state of one render call.

    ``out`` is shared by every level of the call; the other attributes belong to
    the struct currently being rendered.
    """

    out: List[str] = field(default_factory=list)
    prefix: str = ""
    first_section: bool = True
    documented: bool = False
    depth: int = 0

    def nested(self, prefix: str, documented: bool) -> "RenderContext":
        if self.depth + 1 > MAX_DEPTH:
            raise SchemaError("Nesting deeper than {} levels at [{}]".format(MAX_DEPTH, prefix))
        return RenderContext(out=self.out, prefix=prefix, documented=documented, depth=self.depth + 1)

    def path(self, name: Any) -> str:
        key = format_key(name)
        return key if not self.prefix else "{}.{}".format(self.prefix, key)


def to_commented_toml(value: Any, schema_type: Optional[type] = None) -> str:
    """Renders a dataclass instance as a commented TOML document.

    Args:
        value: Instance to render.
        schema_type: Schema to render the value with. Defaults to ``type(value)``.

    Returns:
        The complete document. Nothing is returned if rendering fails.

    Raises:
        SchemaError: If the schema cannot be described or nests too deeply.
        FormattingError: If a leaf value has no TOML representation, or a section
            or mapping field holds a value of the wrong type.
    """
    if not is_schema_instance(value):
        raise SchemaError("Expected a dataclass instance, got {!r}".format(value))
    descriptor = describe(schema_type or type(value))
    context = RenderContext(documented=bool(descriptor.documentation))
    render(value, descriptor, context)
    document = "".join(context.out)
    logger.debug("render_done type=%s chars=%d", descriptor.schema_type.__qualname__, len(document))
    return document


def default_toml(schema_type: type) -> str:
    """Renders the default instance of a dataclass schema."""
    describe(schema_type)
    try:
        value = schema_type()
    except TypeError as exc:
        raise SchemaError("{} cannot be built from defaults: {}".format(schema_type.__qualname__, exc)) from exc
    return to_commented_toml(value, schema_type)


def render(value: Any, descriptor: TypeDescriptor, context: RenderContext) -> None:
    """Appends the type documentation and every field of ``value`` to the buffer."""
    _emit_docs(descriptor.documentation, context)
    for node in descriptor.fields:
        _render_field(node.name, getattr(value, node.name), node.shape, node.documentation, context)


def _render_field(name: Any, value: Any, shape: Shape, docs: Sequence[str], context: RenderContext) -> None:
    kind = shape.kind
    if kind is ShapeKind.OPTIONAL:
        if value is None:
            return
        _render_field(name, value, shape.inner, docs, context)
    elif kind is ShapeKind.SECTION:
        _render_section(name, value, shape, docs, context)
    elif kind is ShapeKind.MAP:
        _render_map(value, shape.inner, docs, context)
    else:
        _emit_docs(docs, context)
        _emit_pair(name, value, shape, context)


def _render_section(name: Any, value: Any, shape: Shape, docs: Sequence[str], context: RenderContext) -> None:
    if not isinstance(value, shape.target):
        raise FormattingError(
            "Section '{}' expects {}, got {}".format(name, shape.target.__qualname__, type(value).__name__)
        )
    path = context.path(name)
    if not context.first_section or context.documented:
        context.out.append("\n")
    context.first_section = False

    _emit_docs(docs, context)
    context.out.append("[{}]\n".format(path))

    descriptor = describe(shape.target)
    render(value, descriptor, context.nested(path, bool(descriptor.documentation)))


def _render_map(value: Any, entry_shape: Shape, docs: Sequence[str], context: RenderContext) -> None:
    if not isinstance(value, Mapping):
        raise FormattingError("Expected a mapping, got {}".format(type(value).__name__))
    if not value:
        return
    entry_shape = _entry_shape(entry_shape)
    pending = docs
    for key, item in value.items():
        emitted = len(context.out)
        _render_field(key, item, entry_shape, pending, context)
        if len(context.out) != emitted:
            pending = ()


def _entry_shape(shape: Shape) -> Shape:
    # Entries of a nested mapping have no key path of their own: they render as one inline table.
    if shape.kind is ShapeKind.MAP:
        return Shape(ShapeKind.LEAF, shape.target)
    if shape.kind is ShapeKind.OPTIONAL and shape.inner is not None:
        return Shape(ShapeKind.OPTIONAL, shape.target, _entry_shape(shape.inner))
    return shape


def _emit_pair(name: Any, value: Any, shape: Shape, context: RenderContext) -> None:
    context.out.append("{} = {}\n".format(format_key(name), format_value(value, shape.target)))


def _emit_docs(docs: Iterable[str], context: RenderContext) -> None:
    for line in docs:
        context.out.append("# {}\n".format(line) if line else "#\n")

