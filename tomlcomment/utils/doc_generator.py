"""Write commented TOML documents to disk."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from tomlcomment.core.renderer import default_toml, to_commented_toml


def write_commented_toml(value: Any, output_path: str) -> str:
    return write_document(to_commented_toml(value), output_path)


def write_default_toml(schema_type: type, output_path: str) -> str:
    return write_document(default_toml(schema_type), output_path)


def write_document(document: str, output_path: str) -> str:
    """Writes a rendered document, creating parent directories as needed."""
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(document, encoding="utf-8")
    return str(output)
