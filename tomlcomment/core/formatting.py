"""TOML text formatting for leaf values."""

from __future__ import annotations

import dataclasses
import math
import re
from collections.abc import Mapping
from datetime import date, datetime, time
from enum import Enum
from functools import lru_cache
from typing import Any, Dict, Iterable, Optional, get_args, get_origin, get_type_hints

from tomlcomment.core.errors import FormattingError

BARE_KEY_REGEX = re.compile(r"^[A-Za-z0-9_-]+$")


def format_string(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return '"{}"'.format(escaped)


def format_key(key: Any) -> str:
    """Formats a table key, quoting it when it is not a valid bare key."""
    text = key if isinstance(key, str) else str(key)
    if BARE_KEY_REGEX.match(text):
        return text
    return format_string(text)


def format_float(value: float) -> str:
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = repr(value)
    # Exponent forms such as 1e+16 are already TOML floats and stay as they are.
    if "." not in text and "e" not in text:
        text += ".0"
    return text


def format_value(value: Any, hint: Any = None) -> str:
    """Formats one value using TOML's inline syntax.

    Args:
        value: Leaf value to format. Containers are formatted recursively as
            inline arrays and inline tables.
        hint: Declared type of the value, if known. It only changes the output
            for float-typed values that hold an ``int``.

    Returns:
        The value's TOML text.

    Raises:
        FormattingError: If the value (or one of its members) has no TOML form.
    """
    if value is None:
        raise FormattingError("None has no TOML representation")
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return format_string(value.name)
    if isinstance(value, int):
        if hint is float:
            return format_float(float(value))
        return str(value)
    if isinstance(value, float):
        return format_float(value)
    if isinstance(value, str):
        return format_string(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, Mapping):
        return _format_table(value.items(), _value_hint(hint))
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        hints = _field_hints(type(value))
        pairs = ((item.name, getattr(value, item.name)) for item in dataclasses.fields(value))
        return _format_table(pairs, None, hints)
    if isinstance(value, (list, tuple)):
        return _format_array(value, _element_hint(hint))
    if isinstance(value, (set, frozenset)):
        try:
            ordered = sorted(value)
        except TypeError as exc:
            raise FormattingError("Set members cannot be ordered: {}".format(exc)) from exc
        return _format_array(ordered, _element_hint(hint))
    raise FormattingError("Unsupported value type: {}".format(type(value).__name__))


def _format_array(items: Iterable[Any], hint: Any) -> str:
    return "[{}]".format(", ".join(format_value(item, hint) for item in items))


def _format_table(pairs: Iterable[Any], hint: Any, hints: Optional[Dict[str, Any]] = None) -> str:
    rendered = []
    for key, item in pairs:
        # TOML has no null: absent members are left out of the table.
        if item is None:
            continue
        item_hint = hints.get(key) if hints else hint
        rendered.append("{} = {}".format(format_key(key), format_value(item, item_hint)))
    return "{{ {} }}".format(", ".join(rendered))


def _element_hint(hint: Any) -> Any:
    args = get_args(hint)
    if get_origin(hint) is not None and args:
        return args[0]
    return None


def _value_hint(hint: Any) -> Any:
    args = get_args(hint)
    if get_origin(hint) is not None and len(args) == 2:
        return args[1]
    return None


@lru_cache(maxsize=None)
def _field_hints(cls: type) -> Dict[str, Any]:
    try:
        return get_type_hints(cls)
    except (NameError, TypeError):
        return {}
