from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

try:
    from PyQt6.QtCore import QSize
    from PyQt6.QtGui import QResizeEvent
    from PyQt6.QtWidgets import QApplication, QTextEdit, QWidget
except ImportError:  # pragma: no cover
    QApplication = None  # type: ignore[assignment,misc]


@unittest.skipIf(QApplication is None, "PyQt6 不可用")
class QtAdapterTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.app = QApplication.instance() or QApplication([])

    def setUp(self) -> None:
        from braillezephyr.editor import TextEditorState

        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.dir = Path(self._tmp.name)
        self.parent = QWidget()
        self.braille = QTextEdit(self.parent)
        self.ascii = QTextEdit(self.parent)
        self.editor = TextEditorState(self.braille, self.ascii)

    def test_layout_numbers(self) -> None:
        self.editor.set_chars_per_line(32)
        self.assertEqual(self.editor.chars_per_line(), 32)
        self.assertEqual(self.braille.lineWrapColumnOrWidth(), 32)
        self.assertEqual(self.ascii.lineWrapColumnOrWidth(), 32)
        self.editor.set_lines_per_page(20)
        self.editor.set_page_margin_bell(18)
        self.editor.set_line_margin_bell(28)
        self.assertEqual(
            (self.editor.lines_per_page(), self.editor.page_margin_bell(), self.editor.line_margin_bell()),
            (20, 18, 28),
        )

    def test_fonts_keep_size_and_style(self) -> None:
        from braillezephyr_core.model import FONT_BOLD, FONT_ITALIC

        self.editor.set_braille_font(14, FONT_BOLD | FONT_ITALIC, "DejaVu Sans")
        spec = self.editor.braille_font()
        self.assertEqual(spec.point_size, 14)
        self.assertEqual(spec.style, FONT_BOLD | FONT_ITALIC)

        self.editor.set_ascii_font(11, 0, "Monospace")
        spec = self.editor.ascii_font()
        self.assertEqual(spec.point_size, 11)
        self.assertEqual(spec.style, 0)

    def test_visibility(self) -> None:
        self.assertTrue(self.editor.ascii_visible())
        self.editor.set_ascii_visible(False)
        self.assertFalse(self.editor.ascii_visible())
        self.assertTrue(self.editor.braille_visible())

    def test_missing_sound_file(self) -> None:
        with self.assertRaises(FileNotFoundError):
            self.editor.load_line_margin_sound(str(self.dir / "missing.wav"))
        self.assertIsNone(self.editor.line_margin_sound_path())

    def test_non_wave_sound_file(self) -> None:
        from braillezephyr_core.errors import UnsupportedAudioFormatError

        path = self.dir / "bell.mp3"
        path.write_bytes(b"ID3\x03\x00\x00\x00\x00\x00\x00\x00\x00")
        with self.assertRaises(UnsupportedAudioFormatError):
            self.editor.load_page_margin_sound(str(path))
        self.assertIsNone(self.editor.page_margin_sound_path())

    def test_store_applies_settings(self) -> None:
        from braillezephyr_core.store import SettingsStore

        conf = self.dir / "zephyr.conf"
        conf.write_text(
            "charsPerLine 30\n"
            f"lineEndFileName {self.dir / 'missing.wav'}\n"
            "asciiText.visible false\n"
            "brailleText.font 16 1 Sans\n",
            encoding="utf-8",
        )
        with self.assertLogs("braille_zephyr.settings", level="ERROR"):
            store = SettingsStore(self.editor, path=conf, track_window_size=False)
        self.assertEqual(self.braille.lineWrapColumnOrWidth(), 30)
        self.assertFalse(self.editor.ascii_visible())
        self.assertEqual(self.editor.braille_font().point_size, 16)
        self.assertIsNone(self.editor.line_end_sound_path())
        self.assertTrue(store.save())
        self.assertNotIn("lineEndFileName", conf.read_text(encoding="utf-8"))

    def test_out_of_range_setting_does_not_reach_qt(self) -> None:
        from braillezephyr_core.store import SettingsStore

        conf = self.dir / "zephyr.conf"
        conf.write_text("charsPerLine 99999999999\nlinesPerPage 21\n", encoding="utf-8")
        with self.assertLogs("braille_zephyr.settings", level="WARNING") as cm:
            SettingsStore(self.editor, path=conf, track_window_size=False)
        self.assertTrue(any("bad_setting_value line=1" in m for m in cm.output))
        self.assertEqual(self.braille.lineWrapColumnOrWidth(), 40)
        self.assertEqual(self.editor.lines_per_page(), 21)

    def test_host_window(self) -> None:
        from braillezephyr.window import QtHostWindow

        widget = QWidget()
        host = QtHostWindow(widget)
        host.set_size(300, 200)
        self.assertEqual(host.size(), (300, 200))
        self.assertFalse(host.is_maximized())

        calls: list[int] = []
        host.subscribe_resize(lambda: calls.append(1))
        QApplication.sendEvent(widget, QResizeEvent(QSize(320, 240), QSize(300, 200)))
        self.assertEqual(calls, [1])


if __name__ == "__main__":
    unittest.main()
