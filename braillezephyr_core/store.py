"""设置文件的读取、应用与保存。

设置文件为逐行的 ``key value`` 文本。读取时每一行都单独解析，
出错的行记录日志后跳过，不影响其余设置。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional, Protocol, Union

from .errors import AudioDeviceUnavailableError, BadSettingValue, UnsupportedAudioFormatError
from .model import (
    DEFAULT_WINDOW_SIZE,
    FontSpec,
    SettingsRecord,
    WindowSize,
    format_settings,
    parse_bool,
    parse_font,
    parse_int,
    parse_size,
)

APP_NAME = "braillezephyr"
MAXIMIZE_CHECK_DELAY_MS = 100

logger = logging.getLogger("braille_zephyr.settings")


class EditorState(Protocol):
    """设置所作用的编辑器状态。"""

    def set_chars_per_line(self, value: int) -> None: ...
    def set_line_margin_bell(self, value: int) -> None: ...
    def set_lines_per_page(self, value: int) -> None: ...
    def set_page_margin_bell(self, value: int) -> None: ...
    def set_braille_visible(self, visible: bool) -> None: ...
    def set_braille_font(self, point_size: int, style: int, family: str) -> None: ...
    def set_ascii_visible(self, visible: bool) -> None: ...
    def set_ascii_font(self, point_size: int, style: int, family: str) -> None: ...

    def load_line_margin_sound(self, path: str) -> None: ...
    def load_line_end_sound(self, path: str) -> None: ...
    def load_page_margin_sound(self, path: str) -> None: ...

    def chars_per_line(self) -> int: ...
    def line_margin_bell(self) -> int: ...
    def lines_per_page(self) -> int: ...
    def page_margin_bell(self) -> int: ...
    def braille_visible(self) -> bool: ...
    def braille_font(self) -> FontSpec: ...
    def ascii_visible(self) -> bool: ...
    def ascii_font(self) -> FontSpec: ...
    def line_margin_sound_path(self) -> Optional[str]: ...
    def line_end_sound_path(self) -> Optional[str]: ...
    def page_margin_sound_path(self) -> Optional[str]: ...


class HostWindow(Protocol):
    """承载编辑器的顶层窗口。"""

    def size(self) -> tuple[int, int]: ...
    def set_size(self, width: int, height: int) -> None: ...
    def is_maximized(self) -> bool: ...
    def set_maximized(self, maximized: bool) -> None: ...
    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> None: ...
    def subscribe_resize(self, callback: Callable[[], None]) -> None: ...
    def subscribe_move(self, callback: Callable[[], None]) -> None: ...


def default_settings_path(app_name: str = APP_NAME) -> Path:
    return Path.home() / f".{app_name}.conf"


class SettingsStore:
    """读写设置文件并把设置应用到编辑器。"""

    def __init__(
        self,
        editor: EditorState,
        window: Optional[HostWindow] = None,
        path: Union[str, Path, None] = None,
        track_window_size: bool = True,
    ) -> None:
        self.editor = editor
        self.window = window
        self.path = Path(path) if path is not None else default_settings_path()
        self.record = SettingsRecord()

        self._checking_maximize = False
        self._previous_size: Optional[WindowSize] = None

        self._handlers: dict[str, Callable[[str], bool]] = {
            "size": self._read_size,
            "charsPerLine": self._read_chars_per_line,
            "lineMarginBell": self._read_line_margin_bell,
            "lineMarginFileName": self._read_line_margin_file,
            "lineEndFileName": self._read_line_end_file,
            "linesPerPage": self._read_lines_per_page,
            "pageMarginBell": self._read_page_margin_bell,
            "pageMarginFileName": self._read_page_margin_file,
            "brailleText.visible": self._read_braille_visible,
            "brailleText.font": self._read_braille_font,
            "asciiText.visible": self._read_ascii_visible,
            "asciiText.font": self._read_ascii_font,
            "recentFilesMax": self._read_recent_files_max,
            "recentFile": self._read_recent_file,
        }

        self.load()

        self.track_window_size = bool(track_window_size and window is not None)
        if window is not None and self.track_window_size:
            window.subscribe_resize(self._on_window_resized)
            window.subscribe_move(self._on_window_moved)
            if self.record.window_size is None:
                self.record.window_size = DEFAULT_WINDOW_SIZE
            window.set_size(self.record.window_size.width, self.record.window_size.height)
            window.set_maximized(self.record.window_maximized)

    @property
    def recent_files(self) -> list[str]:
        return self.record.recent_files

    @property
    def recent_files_max(self) -> int:
        return self.record.recent_files_max

    def add_recent_file(self, path: str) -> None:
        self.record.add_recent_file(path)

    def remove_recent_file(self, path: str) -> None:
        self.record.remove_recent_file(path)

    # 读取 ---------------------------------------------------------------

    def parse_line(self, line: str) -> bool:
        """解析一行设置。

        返回 False 表示键未知或格式不对；数值错误抛出 BadSettingValue。
        """
        if not line:
            return True

        offset = line.find(" ")
        if offset < 0:
            return False
        value = line[offset + 1 :]
        if not value:
            return False

        handler = self._handlers.get(line[:offset])
        if handler is None:
            return False
        return handler(value)

    def load(self) -> bool:
        try:
            if not self.path.exists():
                logger.info("settings_not_found path=%s", self.path)
                return False

            with self.path.open("r", encoding="utf-8") as f:
                for line_number, raw in enumerate(f, start=1):
                    line = raw.rstrip("\r\n")
                    try:
                        ok = self.parse_line(line)
                    except BadSettingValue:
                        logger.warning(
                            "bad_setting_value line=%d text=%r path=%s", line_number, line, self.path
                        )
                        continue
                    if not ok:
                        logger.warning(
                            "unknown_setting line=%d text=%r path=%s", line_number, line, self.path
                        )
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("settings_read_failed path=%s error=%s", self.path, exc)
            return False

        logger.info("settings_loaded path=%s", self.path)
        return True

    def _read_size(self, value: str) -> bool:
        parsed = parse_size(value)
        if parsed is None:
            return False
        self.record.window_size, self.record.window_maximized = parsed
        return True

    def _read_chars_per_line(self, value: str) -> bool:
        self.record.chars_per_line = parse_int(value)
        self.editor.set_chars_per_line(self.record.chars_per_line)
        return True

    def _read_line_margin_bell(self, value: str) -> bool:
        self.record.line_margin_bell = parse_int(value)
        self.editor.set_line_margin_bell(self.record.line_margin_bell)
        return True

    def _read_lines_per_page(self, value: str) -> bool:
        self.record.lines_per_page = parse_int(value)
        self.editor.set_lines_per_page(self.record.lines_per_page)
        return True

    def _read_page_margin_bell(self, value: str) -> bool:
        self.record.page_margin_bell = parse_int(value)
        self.editor.set_page_margin_bell(self.record.page_margin_bell)
        return True

    def _read_line_margin_file(self, value: str) -> bool:
        if self._load_sound(self.editor.load_line_margin_sound, "line margin", value):
            self.record.line_margin_sound_path = value
        return True

    def _read_line_end_file(self, value: str) -> bool:
        if self._load_sound(self.editor.load_line_end_sound, "line end", value):
            self.record.line_end_sound_path = value
        return True

    def _read_page_margin_file(self, value: str) -> bool:
        if self._load_sound(self.editor.load_page_margin_sound, "page margin", value):
            self.record.page_margin_sound_path = value
        return True

    def _load_sound(self, loader: Callable[[str], None], cue: str, path: str) -> bool:
        try:
            loader(path)
        except FileNotFoundError as exc:
            logger.error("Unable to open %s sound file: %s", cue, exc)
        except UnsupportedAudioFormatError:
            logger.error("Sound file unsupported for %s bell: %s", cue, path)
        except AudioDeviceUnavailableError:
            logger.error("Audio device unavailable for %s bell: %s", cue, path)
        except OSError as exc:
            logger.error("Unable to read %s sound file: %s", cue, exc)
        else:
            return True
        return False

    def _read_braille_visible(self, value: str) -> bool:
        self.record.braille_visible = parse_bool(value)
        self.editor.set_braille_visible(self.record.braille_visible)
        return True

    def _read_braille_font(self, value: str) -> bool:
        font = parse_font(value)
        if font is None:
            return False
        self.record.braille_font = font
        self.editor.set_braille_font(font.point_size, font.style, font.family)
        return True

    def _read_ascii_visible(self, value: str) -> bool:
        self.record.ascii_visible = parse_bool(value)
        self.editor.set_ascii_visible(self.record.ascii_visible)
        return True

    def _read_ascii_font(self, value: str) -> bool:
        font = parse_font(value)
        if font is None:
            return False
        self.record.ascii_font = font
        self.editor.set_ascii_font(font.point_size, font.style, font.family)
        return True

    def _read_recent_files_max(self, value: str) -> bool:
        self.record.recent_files_max = parse_int(value)
        return True

    def _read_recent_file(self, value: str) -> bool:
        self.record.accept_recent_file(value)
        return True

    # 保存 ---------------------------------------------------------------

    def capture(self) -> SettingsRecord:
        """从编辑器读取当前状态写入 record。"""
        editor = self.editor
        record = self.record
        record.chars_per_line = int(editor.chars_per_line())
        record.line_margin_bell = int(editor.line_margin_bell())
        record.lines_per_page = int(editor.lines_per_page())
        record.page_margin_bell = int(editor.page_margin_bell())
        record.line_margin_sound_path = editor.line_margin_sound_path()
        record.line_end_sound_path = editor.line_end_sound_path()
        record.page_margin_sound_path = editor.page_margin_sound_path()
        record.braille_visible = bool(editor.braille_visible())
        record.braille_font = editor.braille_font()
        record.ascii_visible = bool(editor.ascii_visible())
        record.ascii_font = editor.ascii_font()
        return record

    def save(self) -> bool:
        try:
            if not self.path.exists():
                logger.info("creating_settings_file path=%s", self.path)
                self.path.touch()
        except OSError as exc:
            logger.error("settings_create_failed path=%s error=%s", self.path, exc)
            return False

        text = format_settings(self.capture())
        try:
            with self.path.open("w", encoding="utf-8", newline="\n") as f:
                f.write(text)
        except OSError as exc:
            logger.error("settings_write_failed path=%s error=%s", self.path, exc)
            return False

        logger.info("settings_saved path=%s", self.path)
        return True

    # 窗口尺寸 -----------------------------------------------------------

    def _on_window_resized(self) -> None:
        window = self.window
        if window is None:
            return
        self._previous_size = self.record.window_size
        width, height = window.size()
        self.record.window_size = WindowSize(width=int(width), height=int(height))

        # 部分窗口管理器在 resize 回调里返回的最大化状态不可靠，延迟再查
        if not self._checking_maximize:
            self._checking_maximize = True
            window.schedule(MAXIMIZE_CHECK_DELAY_MS, self._check_maximized)

    def _on_window_moved(self) -> None:
        # 移动不影响记录的尺寸
        return

    def _check_maximized(self) -> None:
        window = self.window
        if window is None:
            return
        self.record.window_maximized = bool(window.is_maximized())
        if self.record.window_maximized:
            self.record.window_size = self._previous_size
        self._checking_maximize = False
