"""CLI entrypoint for rendering commented TOML templates."""

from __future__ import annotations

import argparse
import importlib
import sys
from typing import List, Optional

from tomlcomment.core.errors import TomlCommentError
from tomlcomment.core.renderer import default_toml, to_commented_toml
from tomlcomment.utils.config_loader import load_values
from tomlcomment.utils.doc_generator import write_document
from tomlcomment.utils.logger import configure_logging, get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Builds the CLI argument parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="tomlcomment", description="Render a dataclass schema as commented TOML")
    parser.add_argument("--schema", required=True, help="Schema class as 'package.module:ClassName'")
    parser.add_argument("--values", type=str, default=None, help="YAML file with values to render instead of defaults")
    parser.add_argument("--output", type=str, default=None, help="Write the document here instead of stdout")
    parser.add_argument("--log-level", type=str, default="WARNING")
    return parser


def resolve_schema(reference: str) -> type:
    """Imports the class named by a ``module:ClassName`` reference.

    Raises:
        ValueError: If the reference is malformed or cannot be resolved.
    """
    module_name, sep, attr_path = reference.partition(":")
    if not sep or not module_name or not attr_path:
        raise ValueError("Schema reference must look like 'package.module:ClassName', got '{}'".format(reference))
    try:
        target = importlib.import_module(module_name)
    except ImportError as exc:
        raise ValueError("Cannot import module '{}': {}".format(module_name, exc)) from exc
    for part in attr_path.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            raise ValueError("'{}' has no attribute '{}'".format(module_name, attr_path)) from exc
    if not isinstance(target, type):
        raise ValueError("'{}' is not a class".format(reference))
    return target


def run(schema: str, values: Optional[str] = None, output: Optional[str] = None) -> int:
    """Renders one document and writes it to ``output`` or stdout.

    Returns:
        Process exit code.
    """
    schema_type = resolve_schema(schema)
    if values:
        document = to_commented_toml(load_values(schema_type, values), schema_type)
    else:
        document = default_toml(schema_type)

    if output:
        path = write_document(document, output)
        logger.info("document_written schema=%s path=%s", schema, path)
        print("Commented TOML written to {}".format(path))
    else:
        sys.stdout.write(document)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Application entrypoint.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        return run(args.schema, values=args.values, output=args.output)
    except ValueError as exc:
        parser.error(str(exc))
    except TomlCommentError as exc:
        logger.error("render_failed schema=%s error=%s", args.schema, exc)
        print("error: {}".format(exc), file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
