"""设置数据模型、值解析与配置文件序列化。"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional

from .errors import BadSettingValue

DEFAULT_RECENT_FILES_MAX = 31
# 运行时插入后固定保留的条数，与 recentFilesMax 无关
RECENT_FILES_KEEP = 6

FONT_NORMAL = 0
FONT_BOLD = 1
FONT_ITALIC = 2

_INT_RE = re.compile(r"[+-]?[0-9]+")
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1


@dataclass(frozen=True, slots=True)
class WindowSize:
    width: int
    height: int


DEFAULT_WINDOW_SIZE = WindowSize(width=640, height=480)


@dataclass(frozen=True, slots=True)
class FontSpec:
    point_size: int
    style: int
    family: str

    @property
    def bold(self) -> bool:
        return bool(self.style & FONT_BOLD)

    @property
    def italic(self) -> bool:
        return bool(self.style & FONT_ITALIC)


@dataclass(slots=True)
class SettingsRecord:
    """持久化设置的内存表示。"""

    window_size: Optional[WindowSize] = None
    window_maximized: bool = False

    chars_per_line: Optional[int] = None
    line_margin_bell: Optional[int] = None
    lines_per_page: Optional[int] = None
    page_margin_bell: Optional[int] = None

    line_margin_sound_path: Optional[str] = None
    line_end_sound_path: Optional[str] = None
    page_margin_sound_path: Optional[str] = None

    braille_visible: Optional[bool] = None
    braille_font: Optional[FontSpec] = None
    ascii_visible: Optional[bool] = None
    ascii_font: Optional[FontSpec] = None

    recent_files: list[str] = field(default_factory=list)
    recent_files_max: int = DEFAULT_RECENT_FILES_MAX

    def add_recent_file(self, path: str) -> None:
        self.remove_recent_file(path)
        self.recent_files.insert(0, path)
        if len(self.recent_files) > RECENT_FILES_KEEP:
            del self.recent_files[RECENT_FILES_KEEP:]

    def remove_recent_file(self, path: str) -> None:
        try:
            self.recent_files.remove(path)
        except ValueError:
            return

    def accept_recent_file(self, path: str) -> bool:
        """读取配置文件时追加，达到 recent_files_max 后忽略。"""
        if len(self.recent_files) >= self.recent_files_max:
            return False
        self.recent_files.append(path)
        return True


def parse_int(text: str) -> int:
    if not _INT_RE.fullmatch(text):
        raise BadSettingValue(f"not an integer: {text!r}")
    value = int(text)
    if not INT_MIN <= value <= INT_MAX:
        raise BadSettingValue(f"integer out of range: {text!r}")
    return value


def parse_bool(text: str) -> bool:
    return text.lower() == "true"


def split_tokens(value: str) -> list[str]:
    # 按单个空格切分，忽略末尾的空记号
    tokens = value.split(" ")
    while tokens and not tokens[-1]:
        tokens.pop()
    return tokens


def parse_size(value: str) -> Optional[tuple[WindowSize, bool]]:
    tokens = split_tokens(value)
    if len(tokens) != 3:
        return None
    size = WindowSize(width=parse_int(tokens[0]), height=parse_int(tokens[1]))
    return size, parse_bool(tokens[2])


def parse_font(value: str) -> Optional[FontSpec]:
    """解析 ``pointSize styleFlags familyName``，字体名可含空格。"""
    offset = value.find(" ") + 1
    if offset < 1 or offset == len(value):
        return None
    offset = value.find(" ", offset) + 1
    if offset < 1 or offset == len(value):
        return None
    tokens = split_tokens(value)
    if len(tokens) < 3:
        return None
    return FontSpec(
        point_size=parse_int(tokens[0]),
        style=parse_int(tokens[1]),
        family=value[offset:],
    )


def format_bool(value: Optional[bool]) -> str:
    return "true" if value else "false"


def format_font(font: FontSpec) -> str:
    return f"{int(font.point_size)} {int(font.style)} {font.family}"


def _append(lines: list[str], key: str, value: object) -> None:
    if value is not None:
        lines.append(f"{key} {value}")


def format_settings(record: SettingsRecord) -> str:
    """按固定顺序输出配置文件内容，未设置的可选项整行省略。"""
    lines: list[str] = []

    if record.window_size is not None:
        lines.append(
            f"size {record.window_size.width} {record.window_size.height} "
            f"{format_bool(record.window_maximized)}"
        )

    _append(lines, "charsPerLine", record.chars_per_line)
    _append(lines, "lineMarginBell", record.line_margin_bell)
    _append(lines, "lineMarginFileName", record.line_margin_sound_path)
    _append(lines, "lineEndFileName", record.line_end_sound_path)

    _append(lines, "linesPerPage", record.lines_per_page)
    _append(lines, "pageMarginBell", record.page_margin_bell)
    _append(lines, "pageMarginFileName", record.page_margin_sound_path)

    lines.append("")

    if record.braille_visible is not None:
        lines.append(f"brailleText.visible {format_bool(record.braille_visible)}")
    if record.braille_font is not None:
        lines.append(f"brailleText.font {format_font(record.braille_font)}")

    lines.append("")

    if record.ascii_visible is not None:
        lines.append(f"asciiText.visible {format_bool(record.ascii_visible)}")
    if record.ascii_font is not None:
        lines.append(f"asciiText.font {format_font(record.ascii_font)}")

    lines.append("")

    lines.append(f"recentFilesMax {record.recent_files_max}")
    for path in record.recent_files:
        lines.append(f"recentFile {path}")

    lines.append("")
    return "\n".join(lines) + "\n"
