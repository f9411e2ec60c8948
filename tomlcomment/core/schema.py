"""Schema classification and cached type descriptors for dataclass schemas."""

from __future__ import annotations

import ast
import dataclasses
import inspect
import textwrap
import types
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum
from functools import lru_cache
from typing import Any, Dict, Optional, Tuple, Union, get_args, get_origin, get_type_hints

from tomlcomment.core.errors import SchemaError
from tomlcomment.utils.logger import get_logger

logger = get_logger(__name__)

DOC_KEY = "doc"
INLINE_KEY = "inline"

LEAF_TYPES = (bool, int, float, str, datetime, date, time, Enum)
OPAQUE_TYPES = (list, tuple, dict, set, frozenset, Mapping)

_ANY_TYPES = (Any, object)

_UNION_ORIGINS = (Union, types.UnionType)
_NONE_TYPE = type(None)


class ShapeKind(str, Enum):
    LEAF = "leaf"
    SECTION = "section"
    OPTIONAL = "optional"
    INLINE = "inline"
    MAP = "map"


@dataclass(frozen=True)
class Shape:
    """How one field is emitted.

    ``target`` is the declared type the shape was computed from. ``inner`` is the
    wrapped shape of an OPTIONAL field or of a MAP field's entries.
    """

    kind: ShapeKind
    target: Any = None
    inner: Optional["Shape"] = None


@dataclass(frozen=True)
class SchemaNode:
    name: str
    shape: Shape
    documentation: Tuple[str, ...] = ()


@dataclass(frozen=True)
class TypeDescriptor:
    schema_type: type
    documentation: Tuple[str, ...]
    fields: Tuple[SchemaNode, ...]


def classify(field_type: Any, inline: bool = False) -> Shape:
    """Classifies a declared field type into a rendering shape.

    Optional and mapping wrappers are resolved first; the ``inline`` marker then
    applies to the wrapped type. Classification never fails: anything that is not
    a wrapper, a known scalar or a plain class is an opaque leaf.

    Args:
        field_type: Resolved type annotation of the field.
        inline: Whether the field is marked to render as a single value.

    Returns:
        The field's shape.
    """
    origin = get_origin(field_type)
    args = get_args(field_type)

    if origin in _UNION_ORIGINS:
        members = tuple(arg for arg in args if arg is not _NONE_TYPE)
        if len(members) == len(args):
            return _opaque(field_type, inline)
        if len(members) == 1:
            inner = classify(members[0], inline)
        else:
            inner = _opaque(Union[members], inline)
        return Shape(ShapeKind.OPTIONAL, field_type, inner)

    if isinstance(origin, type) and issubclass(origin, Mapping) and len(args) == 2 and args[0] is str:
        return Shape(ShapeKind.MAP, field_type, classify(args[1], inline))

    if inline:
        return Shape(ShapeKind.INLINE, field_type)

    if origin is not None or field_type in _ANY_TYPES or not isinstance(field_type, type):
        return Shape(ShapeKind.LEAF, field_type)
    if issubclass(field_type, LEAF_TYPES) or issubclass(field_type, OPAQUE_TYPES):
        return Shape(ShapeKind.LEAF, field_type)
    return Shape(ShapeKind.SECTION, field_type)


def _opaque(field_type: Any, inline: bool) -> Shape:
    return Shape(ShapeKind.INLINE if inline else ShapeKind.LEAF, field_type)


@lru_cache(maxsize=None)
def describe(schema_type: type) -> TypeDescriptor:
    """Builds the type descriptor of a dataclass schema.

    Descriptors are memoized per type and never change afterwards, so they can be
    shared by any number of render calls.

    Raises:
        SchemaError: If the type is not a dataclass, its annotations cannot be
            resolved, or a section field points at a type that is not a dataclass.
    """
    if not (isinstance(schema_type, type) and dataclasses.is_dataclass(schema_type)):
        raise SchemaError("{!r} is not a dataclass type".format(schema_type))

    try:
        hints = get_type_hints(schema_type)
    except (NameError, TypeError) as exc:
        raise SchemaError("Cannot resolve annotations of {}: {}".format(schema_type.__qualname__, exc)) from exc

    docstrings = field_docstrings(schema_type)
    nodes = []
    for item in dataclasses.fields(schema_type):
        inline = bool(item.metadata.get(INLINE_KEY, False))
        shape = classify(hints.get(item.name, item.type), inline)
        _check_sections(schema_type, item.name, shape)
        nodes.append(SchemaNode(item.name, shape, field_documentation(item, docstrings)))

    descriptor = TypeDescriptor(schema_type, class_documentation(schema_type), tuple(nodes))
    logger.debug(
        "descriptor_built type=%s fields=%d documented=%s",
        schema_type.__qualname__,
        len(nodes),
        bool(descriptor.documentation),
    )
    return descriptor


def _check_sections(schema_type: type, name: str, shape: Shape) -> None:
    while shape.inner is not None:
        shape = shape.inner
    if shape.kind is ShapeKind.SECTION and not dataclasses.is_dataclass(shape.target):
        raise SchemaError(
            "Field '{}.{}' has type {} which is neither a scalar nor a dataclass; "
            "mark it inline to render it as a single value".format(
                schema_type.__qualname__, name, getattr(shape.target, "__qualname__", shape.target)
            )
        )


def class_documentation(schema_type: type) -> Tuple[str, ...]:
    doc = schema_type.__dict__.get("__doc__")
    if not isinstance(doc, str):
        return ()
    if doc == _generated_docstring(schema_type):
        return ()
    return tuple(inspect.cleandoc(doc).splitlines())


def _generated_docstring(schema_type: type) -> Optional[str]:
    # The dataclass decorator sets this signature text as the docstring of undocumented classes.
    try:
        signature = inspect.signature(schema_type)
    except (TypeError, ValueError):
        return None
    return schema_type.__name__ + str(signature).replace(" -> None", "")


def field_documentation(item: dataclasses.Field, docstrings: Dict[str, str]) -> Tuple[str, ...]:
    """Returns the comment lines of one field.

    An explicit ``doc`` metadata entry wins over an attribute docstring. It may be
    a string or a sequence of lines; anything else is ignored with a warning.
    """
    doc = item.metadata.get(DOC_KEY)
    if doc is None:
        doc = docstrings.get(item.name)
        if doc is None:
            return ()
    if isinstance(doc, str):
        return tuple(inspect.cleandoc(doc).splitlines()) or ("",)
    if isinstance(doc, (list, tuple)) and all(isinstance(line, str) for line in doc):
        return tuple(doc)
    logger.warning("field_doc_ignored field=%s reason=unsupported_type type=%s", item.name, type(doc).__name__)
    return ()


def field_docstrings(schema_type: type) -> Dict[str, str]:
    """Collects attribute docstrings of a dataclass and its dataclass bases.

    Attribute docstrings are not kept by the runtime, so they are read from the
    class source. Classes without available source have no attribute docstrings.
    """
    docstrings: Dict[str, str] = {}
    for klass in reversed(schema_type.__mro__):
        if dataclasses.is_dataclass(klass):
            docstrings.update(_class_attribute_docstrings(klass))
    return docstrings


def _class_attribute_docstrings(klass: type) -> Dict[str, str]:
    try:
        source = inspect.getsource(klass)
    except (OSError, TypeError) as exc:
        logger.debug("field_docstrings_unavailable type=%s error=%s", klass.__qualname__, exc)
        return {}
    try:
        module = ast.parse(textwrap.dedent(source))
    except SyntaxError as exc:
        logger.warning("field_docstrings_unparsable type=%s error=%s", klass.__qualname__, exc)
        return {}

    class_def = module.body[0] if module.body else None
    if not isinstance(class_def, ast.ClassDef):
        return {}

    docstrings: Dict[str, str] = {}
    scope: Optional[str] = None
    for node in class_def.body:
        if isinstance(node, ast.AnnAssign) and isinstance(node.target, ast.Name):
            scope = node.target.id
            continue
        if (
            scope is not None
            and isinstance(node, ast.Expr)
            and isinstance(node.value, ast.Constant)
            and isinstance(node.value.value, str)
        ):
            docstrings[scope] = inspect.cleandoc(node.value.value)
        scope = None
    return docstrings
