import unittest
from collections import OrderedDict
from typing import Any, Dict, List, Mapping, Optional, Union

from tests.mocks.schemas import (
    AppConfig,
    BadDocMetadata,
    Cluster,
    EmptyDocs,
    LogLevel,
    MultiLineDocs,
    Server,
    ServerConfig,
    WithEnum,
    WithOpaqueField,
    WithOption,
)
from tomlcomment.core.errors import SchemaError
from tomlcomment.core.schema import (
    ShapeKind,
    class_documentation,
    classify,
    describe,
    field_docstrings,
)


class ClassifyTestCase(unittest.TestCase):
    def test_scalars_are_leaves(self) -> None:
        for field_type in (bool, int, float, str, LogLevel):
            self.assertIs(classify(field_type).kind, ShapeKind.LEAF)

    def test_dataclass_is_section(self) -> None:
        shape = classify(ServerConfig)
        self.assertIs(shape.kind, ShapeKind.SECTION)
        self.assertIs(shape.target, ServerConfig)

    def test_inline_marker_wins_over_section(self) -> None:
        self.assertIs(classify(ServerConfig, inline=True).kind, ShapeKind.INLINE)
        self.assertIs(classify(LogLevel, inline=True).kind, ShapeKind.INLINE)

    def test_optional_wraps_inner_shape(self) -> None:
        shape = classify(Optional[int])
        self.assertIs(shape.kind, ShapeKind.OPTIONAL)
        self.assertIs(shape.inner.kind, ShapeKind.LEAF)
        self.assertIs(classify(Optional[ServerConfig]).inner.kind, ShapeKind.SECTION)
        self.assertIs(classify(ServerConfig | None).inner.kind, ShapeKind.SECTION)

    def test_inline_marker_applies_inside_optional(self) -> None:
        shape = classify(Optional[ServerConfig], inline=True)
        self.assertIs(shape.kind, ShapeKind.OPTIONAL)
        self.assertIs(shape.inner.kind, ShapeKind.INLINE)

    def test_string_keyed_mappings_are_maps(self) -> None:
        for field_type in (Dict[str, int], Mapping[str, int], OrderedDict[str, int], dict[str, int]):
            shape = classify(field_type)
            self.assertIs(shape.kind, ShapeKind.MAP)
            self.assertIs(shape.inner.kind, ShapeKind.LEAF)
        self.assertIs(classify(Dict[str, ServerConfig]).inner.kind, ShapeKind.SECTION)
        self.assertIs(classify(Dict[str, ServerConfig], inline=True).inner.kind, ShapeKind.INLINE)

    def test_other_generics_are_opaque_leaves(self) -> None:
        for field_type in (List[str], List[ServerConfig], Dict[int, str], Union[int, str], Any, list, dict):
            self.assertIs(classify(field_type).kind, ShapeKind.LEAF)

    def test_optional_union_wraps_opaque_leaf(self) -> None:
        shape = classify(Optional[Union[int, str]])
        self.assertIs(shape.kind, ShapeKind.OPTIONAL)
        self.assertIs(shape.inner.kind, ShapeKind.LEAF)


class DescribeTestCase(unittest.TestCase):
    def test_fields_follow_declaration_order(self) -> None:
        descriptor = describe(AppConfig)
        self.assertEqual([node.name for node in descriptor.fields], ["name", "debug", "max_retries"])
        self.assertEqual(descriptor.documentation, ("Application settings",))
        self.assertEqual(descriptor.fields[0].documentation, ("The application name",))

    def test_descriptors_are_cached(self) -> None:
        self.assertIs(describe(Cluster), describe(Cluster))

    def test_metadata_doc_and_inline_marker(self) -> None:
        level = describe(WithEnum).fields[0]
        self.assertIs(level.shape.kind, ShapeKind.INLINE)
        self.assertEqual(level.documentation, ("The log level",))
        owner = describe(MultiLineDocs).fields[1]
        self.assertEqual(owner.documentation, ("Owning team", "", "Contact them first."))

    def test_optional_field_shape(self) -> None:
        extra = describe(WithOption).fields[1]
        self.assertIs(extra.shape.kind, ShapeKind.OPTIONAL)
        self.assertEqual(extra.documentation, ("Sometimes present",))

    def test_non_dataclass_section_is_a_schema_error(self) -> None:
        with self.assertRaises(SchemaError):
            describe(WithOpaqueField)

    def test_non_dataclass_root_is_a_schema_error(self) -> None:
        with self.assertRaises(SchemaError):
            describe(int)

    def test_malformed_doc_metadata_is_ignored(self) -> None:
        describe.cache_clear()
        with self.assertLogs("tomlcomment.core.schema", level="WARNING"):
            descriptor = describe(BadDocMetadata)
        self.assertEqual(descriptor.fields[0].documentation, ())


class DocumentationTestCase(unittest.TestCase):
    def test_generated_dataclass_docstring_is_ignored(self) -> None:
        self.assertEqual(class_documentation(ServerConfig), ())

    def test_class_docstring_lines(self) -> None:
        self.assertEqual(
            class_documentation(MultiLineDocs),
            ("Service template.", "", "Generated for local development."),
        )

    def test_docstring_starting_with_class_name(self) -> None:
        self.assertEqual(class_documentation(Server), ("Server(s) configuration.",))

    def test_empty_attribute_docstring_is_one_blank_line(self) -> None:
        descriptor = describe(EmptyDocs)
        self.assertEqual([node.documentation for node in descriptor.fields], [("",), ("",)])

    def test_attribute_docstrings(self) -> None:
        self.assertEqual(field_docstrings(ServerConfig), {"port": "Port to listen on", "host": "Bind address"})


if __name__ == "__main__":
    unittest.main()
