from __future__ import annotations

import unittest

from braillezephyr_core.errors import BadSettingValue
from braillezephyr_core.model import (
    FONT_BOLD,
    FONT_ITALIC,
    FontSpec,
    SettingsRecord,
    WindowSize,
    format_settings,
    parse_bool,
    parse_font,
    parse_int,
    parse_size,
)


class ValueParserTests(unittest.TestCase):
    def test_parse_int(self) -> None:
        self.assertEqual(parse_int("42"), 42)
        self.assertEqual(parse_int("-3"), -3)
        self.assertEqual(parse_int("+7"), 7)
        for bad in ("", " 5", "5 ", "1_000", "4.0", "abc"):
            with self.assertRaises(BadSettingValue):
                parse_int(bad)

    def test_parse_int_rejects_values_outside_32_bits(self) -> None:
        self.assertEqual(parse_int("2147483647"), 2**31 - 1)
        self.assertEqual(parse_int("-2147483648"), -(2**31))
        for bad in ("2147483648", "-2147483649", "99999999999"):
            with self.assertRaises(BadSettingValue):
                parse_int(bad)
        with self.assertRaises(BadSettingValue):
            parse_font("99999999999 0 Courier")
        with self.assertRaises(BadSettingValue):
            parse_size("99999999999 480 true")

    def test_parse_bool(self) -> None:
        self.assertTrue(parse_bool("true"))
        self.assertTrue(parse_bool("TRUE"))
        self.assertFalse(parse_bool("false"))
        self.assertFalse(parse_bool("yes"))
        self.assertFalse(parse_bool("1"))

    def test_parse_size(self) -> None:
        self.assertEqual(parse_size("800 600 true"), (WindowSize(800, 600), True))
        self.assertEqual(parse_size("800 600 no"), (WindowSize(800, 600), False))
        self.assertEqual(parse_size("800 600 false "), (WindowSize(800, 600), False))
        self.assertIsNone(parse_size("640 480"))
        self.assertIsNone(parse_size("640 480 true extra"))
        with self.assertRaises(BadSettingValue):
            parse_size("wide 480 true")

    def test_parse_font_keeps_family_spaces(self) -> None:
        font = parse_font("12 3 DejaVu Sans Mono")
        self.assertEqual(font, FontSpec(point_size=12, style=3, family="DejaVu Sans Mono"))
        self.assertTrue(font.bold)
        self.assertTrue(font.italic)

    def test_parse_font_rejects_short_values(self) -> None:
        self.assertIsNone(parse_font("12"))
        self.assertIsNone(parse_font("12 0"))
        self.assertIsNone(parse_font("12 0 "))
        with self.assertRaises(BadSettingValue):
            parse_font("big 0 Courier")


class RecentFilesTests(unittest.TestCase):
    def test_add_moves_existing_entry_to_front(self) -> None:
        record = SettingsRecord()
        record.add_recent_file("a")
        record.add_recent_file("b")
        record.add_recent_file("a")
        self.assertEqual(record.recent_files, ["a", "b"])

    def test_add_keeps_six_regardless_of_max(self) -> None:
        record = SettingsRecord(recent_files_max=31)
        for i in range(8):
            record.add_recent_file(f"file{i}.brf")
        self.assertEqual(
            record.recent_files,
            [f"file{i}.brf" for i in range(7, 1, -1)],
        )

    def test_remove(self) -> None:
        record = SettingsRecord(recent_files=["a", "b", "c"])
        record.remove_recent_file("b")
        record.remove_recent_file("missing")
        self.assertEqual(record.recent_files, ["a", "c"])

    def test_accept_honours_max(self) -> None:
        record = SettingsRecord(recent_files_max=2)
        self.assertTrue(record.accept_recent_file("a"))
        self.assertTrue(record.accept_recent_file("b"))
        self.assertFalse(record.accept_recent_file("c"))
        self.assertEqual(record.recent_files, ["a", "b"])


class FormatSettingsTests(unittest.TestCase):
    def test_fixed_order_and_omitted_optionals(self) -> None:
        record = SettingsRecord(
            chars_per_line=40,
            line_margin_bell=33,
            lines_per_page=25,
            page_margin_bell=22,
            braille_visible=True,
            braille_font=FontSpec(18, 0, "BrailleZephyr_6"),
            ascii_visible=False,
            ascii_font=FontSpec(13, FONT_BOLD, "DejaVu Sans Mono"),
            recent_files=["/docs/a.brf"],
        )
        expected = (
            "charsPerLine 40\n"
            "lineMarginBell 33\n"
            "linesPerPage 25\n"
            "pageMarginBell 22\n"
            "\n"
            "brailleText.visible true\n"
            "brailleText.font 18 0 BrailleZephyr_6\n"
            "\n"
            "asciiText.visible false\n"
            "asciiText.font 13 1 DejaVu Sans Mono\n"
            "\n"
            "recentFilesMax 31\n"
            "recentFile /docs/a.brf\n"
            "\n"
        )
        self.assertEqual(format_settings(record), expected)

    def test_size_and_sound_paths(self) -> None:
        record = SettingsRecord(
            window_size=WindowSize(1024, 768),
            window_maximized=True,
            chars_per_line=40,
            line_margin_bell=33,
            line_margin_sound_path="/snd/margin.wav",
            line_end_sound_path="/snd/end.wav",
            lines_per_page=25,
            page_margin_bell=22,
            page_margin_sound_path="/snd/page.wav",
            ascii_font=FontSpec(10, FONT_ITALIC, "Courier"),
        )
        lines = format_settings(record).splitlines()
        self.assertEqual(lines[0], "size 1024 768 true")
        self.assertEqual(
            lines[1:8],
            [
                "charsPerLine 40",
                "lineMarginBell 33",
                "lineMarginFileName /snd/margin.wav",
                "lineEndFileName /snd/end.wav",
                "linesPerPage 25",
                "pageMarginBell 22",
                "pageMarginFileName /snd/page.wav",
            ],
        )
        self.assertIn("asciiText.font 10 2 Courier", lines)


if __name__ == "__main__":
    unittest.main()
