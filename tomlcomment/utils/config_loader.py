"""Loads YAML values files into dataclass schema instances."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from datetime import date, datetime, time
from enum import Enum
from pathlib import Path
from typing import Any, Dict, get_args, get_origin

import yaml

from tomlcomment.core.errors import TomlCommentError
from tomlcomment.core.schema import Shape, ShapeKind, describe
from tomlcomment.utils.logger import get_logger

logger = get_logger(__name__)


class ConfigError(TomlCommentError):
    """Raised when a values file cannot be loaded into a schema."""


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigError("Values file not found: {}".format(path))
    try:
        with path.open("r", encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle) or {}
    except yaml.YAMLError as exc:
        raise ConfigError("Invalid YAML in {}: {}".format(path, exc)) from exc
    if not isinstance(loaded, dict):
        raise ConfigError("Values root must be a mapping in {}".format(path))
    return loaded


def load_values(schema_type: type, path: str) -> Any:
    """Builds a schema instance from a YAML file.

    Keys missing from the file keep the schema defaults.

    Args:
        schema_type: Dataclass schema to instantiate.
        path: Path of the YAML values file.

    Returns:
        The populated schema instance.

    Raises:
        ConfigError: If the file is missing, malformed or does not fit the schema.
    """
    data = _load_yaml(Path(path))
    value = build_instance(schema_type, data, schema_type.__name__)
    logger.debug("values_loaded type=%s path=%s keys=%d", schema_type.__qualname__, path, len(data))
    return value


def build_instance(schema_type: type, data: Any, context: str) -> Any:
    if not isinstance(data, Mapping):
        raise ConfigError("'{}' must be a mapping, got {}".format(context, type(data).__name__))

    descriptor = describe(schema_type)
    nodes = {node.name: node for node in descriptor.fields}
    unknown = sorted(str(key) for key in data if key not in nodes)
    if unknown:
        raise ConfigError("Unknown keys in '{}': {}".format(context, ", ".join(unknown)))

    kwargs = {
        name: _convert(raw, nodes[name].shape, "{}.{}".format(context, name))
        for name, raw in data.items()
    }
    try:
        return schema_type(**kwargs)
    except TypeError as exc:
        raise ConfigError("Cannot build '{}': {}".format(context, exc)) from exc


def _convert(raw: Any, shape: Shape, context: str) -> Any:
    kind = shape.kind
    if kind is ShapeKind.OPTIONAL:
        return None if raw is None else _convert(raw, shape.inner, context)
    if kind is ShapeKind.SECTION:
        return build_instance(shape.target, raw, context)
    if kind is ShapeKind.MAP:
        if not isinstance(raw, Mapping):
            raise ConfigError("'{}' must be a mapping, got {}".format(context, type(raw).__name__))
        return {
            str(key): _convert(item, shape.inner, "{}.{}".format(context, key))
            for key, item in raw.items()
        }
    return _convert_leaf(raw, shape.target, context)


def _convert_leaf(raw: Any, target: Any, context: str) -> Any:
    origin = get_origin(target)
    args = get_args(target)
    if origin in (list, tuple) and args and isinstance(raw, list):
        items = [_convert_leaf(item, args[0], context) for item in raw]
        return tuple(items) if origin is tuple else items
    if not isinstance(target, type) or raw is None:
        return raw

    if issubclass(target, Enum):
        return _convert_enum(raw, target, context)
    if dataclasses.is_dataclass(target) and isinstance(raw, Mapping):
        return build_instance(target, raw, context)
    if target is float and isinstance(raw, int) and not isinstance(raw, bool):
        return float(raw)
    if isinstance(raw, str):
        try:
            if target is datetime:
                return datetime.fromisoformat(raw)
            if target is date:
                return date.fromisoformat(raw)
            if target is time:
                return time.fromisoformat(raw)
        except ValueError as exc:
            raise ConfigError("'{}' is not a valid {}: {}".format(context, target.__name__, exc)) from exc
    return raw


def _convert_enum(raw: Any, target: type, context: str) -> Any:
    if isinstance(raw, target):
        return raw
    if isinstance(raw, str) and raw in target.__members__:
        return target[raw]
    try:
        return target(raw)
    except ValueError as exc:
        choices = ", ".join(target.__members__)
        raise ConfigError("'{}' must be one of {}, got {!r}".format(context, choices, raw)) from exc
