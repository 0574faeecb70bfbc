"""编辑器状态：排版参数、字体、窗格可见性与提示音。"""

from __future__ import annotations

import errno
from pathlib import Path
from typing import Optional

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import QTextEdit

from braillezephyr_core.errors import AudioDeviceUnavailableError, UnsupportedAudioFormatError
from braillezephyr_core.model import FONT_BOLD, FONT_ITALIC, FONT_NORMAL, FontSpec

DEFAULT_CHARS_PER_LINE = 40
DEFAULT_LINE_MARGIN_BELL = 33
DEFAULT_LINES_PER_PAGE = 25
DEFAULT_PAGE_MARGIN_BELL = 22

DEFAULT_BRAILLE_FONT = FontSpec(point_size=18, style=FONT_NORMAL, family="BrailleZephyr_6")
DEFAULT_ASCII_FONT = FontSpec(point_size=13, style=FONT_NORMAL, family="Monospace")


def _font_from_spec(spec: FontSpec) -> QFont:
    font = QFont(spec.family, int(spec.point_size))
    font.setBold(spec.bold)
    font.setItalic(spec.italic)
    return font


def _spec_from_font(font: QFont) -> FontSpec:
    style = FONT_NORMAL
    if font.bold():
        style |= FONT_BOLD
    if font.italic():
        style |= FONT_ITALIC
    return FontSpec(point_size=int(font.pointSize()), style=style, family=font.family())


def check_wave_file(path: str) -> Path:
    """确认提示音文件存在、可读且为 WAV 格式。"""
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(errno.ENOENT, "sound file not found", path)
    with p.open("rb") as f:
        header = f.read(12)
    if len(header) < 12 or header[:4] != b"RIFF" or header[8:12] != b"WAVE":
        raise UnsupportedAudioFormatError(path, f"not a WAV file: {path}")
    return p


class SoundCue:
    """一个提示音槽位，只保存加载成功的文件。"""

    def __init__(self, parent: QObject) -> None:
        self._parent = parent
        self.path: Optional[str] = None
        self.effect = None

    def load(self, path: str) -> None:
        wav = check_wave_file(path)
        try:
            from PyQt6.QtMultimedia import QMediaDevices, QSoundEffect
        except ImportError as exc:
            raise AudioDeviceUnavailableError(path, "QtMultimedia unavailable") from exc

        if QMediaDevices.defaultAudioOutput().isNull():
            raise AudioDeviceUnavailableError(path, "no audio output device")

        effect = QSoundEffect(self._parent)
        effect.setSource(QUrl.fromLocalFile(wav.resolve().as_posix()))
        self.effect = effect
        self.path = path


class TextEditorState:
    """把设置映射到盲文窗格与 ASCII 窗格。"""

    def __init__(self, braille_text: QTextEdit, ascii_text: QTextEdit) -> None:
        self._braille = braille_text
        self._ascii = ascii_text

        self._chars_per_line = DEFAULT_CHARS_PER_LINE
        self._line_margin_bell = DEFAULT_LINE_MARGIN_BELL
        self._lines_per_page = DEFAULT_LINES_PER_PAGE
        self._page_margin_bell = DEFAULT_PAGE_MARGIN_BELL
        # 窗格可见性以这两个标志为准
        self._braille_visible = True
        self._ascii_visible = True

        self.line_margin_cue = SoundCue(braille_text)
        self.line_end_cue = SoundCue(braille_text)
        self.page_margin_cue = SoundCue(braille_text)

        for pane in (self._braille, self._ascii):
            pane.setLineWrapMode(QTextEdit.LineWrapMode.FixedColumnWidth)
        self._apply_wrap()
        self._braille.setFont(_font_from_spec(DEFAULT_BRAILLE_FONT))
        self._ascii.setFont(_font_from_spec(DEFAULT_ASCII_FONT))

    def _apply_wrap(self) -> None:
        for pane in (self._braille, self._ascii):
            pane.setLineWrapColumnOrWidth(self._chars_per_line)

    def set_chars_per_line(self, value: int) -> None:
        self._chars_per_line = max(1, int(value))
        self._apply_wrap()

    def chars_per_line(self) -> int:
        return self._chars_per_line

    def set_line_margin_bell(self, value: int) -> None:
        self._line_margin_bell = int(value)

    def line_margin_bell(self) -> int:
        return self._line_margin_bell

    def set_lines_per_page(self, value: int) -> None:
        self._lines_per_page = max(1, int(value))

    def lines_per_page(self) -> int:
        return self._lines_per_page

    def set_page_margin_bell(self, value: int) -> None:
        self._page_margin_bell = int(value)

    def page_margin_bell(self) -> int:
        return self._page_margin_bell

    def set_braille_visible(self, visible: bool) -> None:
        self._braille_visible = bool(visible)
        self._braille.setVisible(self._braille_visible)

    def braille_visible(self) -> bool:
        return self._braille_visible

    def set_ascii_visible(self, visible: bool) -> None:
        self._ascii_visible = bool(visible)
        self._ascii.setVisible(self._ascii_visible)

    def ascii_visible(self) -> bool:
        return self._ascii_visible

    def set_braille_font(self, point_size: int, style: int, family: str) -> None:
        self._braille.setFont(_font_from_spec(FontSpec(point_size, style, family)))

    def braille_font(self) -> FontSpec:
        return _spec_from_font(self._braille.font())

    def set_ascii_font(self, point_size: int, style: int, family: str) -> None:
        self._ascii.setFont(_font_from_spec(FontSpec(point_size, style, family)))

    def ascii_font(self) -> FontSpec:
        return _spec_from_font(self._ascii.font())

    def load_line_margin_sound(self, path: str) -> None:
        self.line_margin_cue.load(path)

    def line_margin_sound_path(self) -> Optional[str]:
        return self.line_margin_cue.path

    def load_line_end_sound(self, path: str) -> None:
        self.line_end_cue.load(path)

    def line_end_sound_path(self) -> Optional[str]:
        return self.line_end_cue.path

    def load_page_margin_sound(self, path: str) -> None:
        self.page_margin_cue.load(path)

    def page_margin_sound_path(self) -> Optional[str]:
        return self.page_margin_cue.path
