import unittest
from datetime import date, datetime, time
from typing import List

from tests.mocks.schemas import LogLevel, ServerConfig
from tomlcomment.core.errors import FormattingError
from tomlcomment.core.formatting import format_key, format_value


class FormatScalarTestCase(unittest.TestCase):
    def test_booleans_and_integers(self) -> None:
        self.assertEqual(format_value(True), "true")
        self.assertEqual(format_value(False), "false")
        self.assertEqual(format_value(42), "42")
        self.assertEqual(format_value(-7), "-7")
        self.assertEqual(format_value(10 ** 12), "1000000000000")

    def test_floats_always_look_like_floats(self) -> None:
        self.assertEqual(format_value(1.0), "1.0")
        self.assertEqual(format_value(0.75), "0.75")
        self.assertEqual(format_value(0.1), "0.1")
        self.assertEqual(format_value(-0.0), "-0.0")
        self.assertEqual(format_value(1e20), "1e+20")
        self.assertEqual(format_value(1e16), "1e+16")

    def test_special_floats(self) -> None:
        self.assertEqual(format_value(float("inf")), "inf")
        self.assertEqual(format_value(float("-inf")), "-inf")
        self.assertEqual(format_value(float("nan")), "nan")

    def test_float_hint_converts_integers(self) -> None:
        self.assertEqual(format_value(1, float), "1.0")
        self.assertEqual(format_value(1, int), "1")
        self.assertEqual(format_value([1, 2.5], List[float]), "[1.0, 2.5]")

    def test_strings_escape_only_backslash_and_quote(self) -> None:
        self.assertEqual(format_value("plain"), '"plain"')
        self.assertEqual(format_value('say "hi"'), '"say \\"hi\\""')
        self.assertEqual(format_value("C:\\temp"), '"C:\\\\temp"')
        self.assertEqual(format_value("tab\there"), '"tab\there"')

    def test_enum_members_render_their_name(self) -> None:
        self.assertEqual(format_value(LogLevel.Info), '"Info"')

    def test_dates_and_times_are_unquoted(self) -> None:
        self.assertEqual(format_value(datetime(2024, 1, 2, 3, 4, 5)), "2024-01-02T03:04:05")
        self.assertEqual(format_value(date(2024, 1, 2)), "2024-01-02")
        self.assertEqual(format_value(time(12, 30)), "12:30:00")


class FormatContainerTestCase(unittest.TestCase):
    def test_arrays(self) -> None:
        self.assertEqual(format_value([1, 2, 3]), "[1, 2, 3]")
        self.assertEqual(format_value([]), "[]")
        self.assertEqual(format_value(("a", "b")), '["a", "b"]')
        self.assertEqual(format_value([[1], [2, 3]]), "[[1], [2, 3]]")
        self.assertEqual(format_value({3, 1, 2}), "[1, 2, 3]")

    def test_inline_tables(self) -> None:
        self.assertEqual(format_value({"a": 1, "b": [True]}), "{ a = 1, b = [true] }")
        self.assertEqual(format_value({"my key": "v"}), '{ "my key" = "v" }')
        self.assertEqual(format_value({"a": None, "b": 1}), "{ b = 1 }")
        self.assertEqual(format_value({}), "{  }")

    def test_dataclass_renders_as_inline_table(self) -> None:
        self.assertEqual(format_value(ServerConfig(port=3000, host="0.0.0.0")), '{ port = 3000, host = "0.0.0.0" }')

    def test_keys(self) -> None:
        self.assertEqual(format_key("KEY"), "KEY")
        self.assertEqual(format_key("max-retries_2"), "max-retries_2")
        self.assertEqual(format_key("a.b"), '"a.b"')
        self.assertEqual(format_key(7), "7")


class FormatErrorTestCase(unittest.TestCase):
    def test_none_is_not_representable(self) -> None:
        with self.assertRaises(FormattingError):
            format_value(None)
        with self.assertRaises(FormattingError):
            format_value([1, None])

    def test_unknown_types_are_rejected(self) -> None:
        with self.assertRaises(FormattingError):
            format_value(object())
        with self.assertRaises(FormattingError):
            format_value(b"bytes")

    def test_unorderable_sets_are_rejected(self) -> None:
        with self.assertRaises(FormattingError):
            format_value({1, "a"})


if __name__ == "__main__":
    unittest.main()
