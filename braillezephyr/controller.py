"""业务逻辑控制器。"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union

from PyQt6.QtWidgets import QFileDialog

from braillezephyr_core.store import SettingsStore
from .editor import TextEditorState
from .view import MainWindow
from .window import QtHostWindow

FILE_FILTER = "Braille Files (*.brf);;Text Files (*.txt);;All Files (*.*)"


def _app_data_dir() -> Path:
    from PyQt6.QtCore import QStandardPaths

    base = Path(QStandardPaths.writableLocation(QStandardPaths.StandardLocation.AppDataLocation))
    base.mkdir(parents=True, exist_ok=True)
    return base


def _setup_logger() -> logging.Logger:
    from logging.handlers import RotatingFileHandler

    logger = logging.getLogger("braille_zephyr")
    if logger.handlers:
        return logger
    logger.setLevel(logging.INFO)
    log_path = _app_data_dir() / "history.log"
    handler = RotatingFileHandler(log_path, maxBytes=512_000, backupCount=3, encoding="utf-8")
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    return logger


class Controller:
    """连接 View、编辑器状态与设置存储的控制器。"""

    def __init__(
        self,
        window: MainWindow,
        settings_path: Union[str, Path, None] = None,
        track_window_size: bool = True,
    ) -> None:
        self.window = window
        self.logger = _setup_logger()

        self._current_file: Optional[str] = None

        self.editor = TextEditorState(window.braille_text, window.ascii_text)
        self.settings = SettingsStore(
            self.editor,
            QtHostWindow(window),
            path=settings_path,
            track_window_size=track_window_size,
        )

        self._connect_signals()
        self.window.sync_view_actions(self.editor.braille_visible(), self.editor.ascii_visible())
        self._refresh_recent_menu()

    def _connect_signals(self) -> None:
        w = self.window
        w.openRequested.connect(self.open_file_dialog)
        w.saveRequested.connect(self.save_file)
        w.saveAsRequested.connect(self.save_file_as)
        w.recentFileRequested.connect(self.open_recent_file)
        w.brailleVisibleToggled.connect(self.editor.set_braille_visible)
        w.asciiVisibleToggled.connect(self.editor.set_ascii_visible)
        w.closing.connect(self.on_closing)

    def _refresh_recent_menu(self) -> None:
        self.window.update_recent_files(list(self.settings.recent_files))

    def open_file_dialog(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self.window, "打开", "", FILE_FILTER)
        if not path:
            return
        self.open_file(path)

    def open_recent_file(self, path: str) -> None:
        if path:
            self.open_file(path)

    def open_file(self, path: str) -> bool:
        try:
            with open(path, "r", encoding="utf-8") as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as exc:
            self.logger.error("open_file_failed path=%s error=%s", path, exc)
            self.settings.remove_recent_file(path)
            self._refresh_recent_menu()
            self.window.show_error(f"打开失败：{exc}")
            return False

        self.window.set_text(text)
        self._current_file = path
        self.window.set_document_title(path)
        self.settings.add_recent_file(path)
        self._refresh_recent_menu()
        self.logger.info("open_file path=%s", path)
        return True

    def save_file(self) -> None:
        if not self._current_file:
            self.save_file_as()
            return
        self._save_to_path(self._current_file)

    def save_file_as(self) -> None:
        path, _ = QFileDialog.getSaveFileName(self.window, "另存为", self._current_file or "", FILE_FILTER)
        if not path:
            return
        if not os.path.splitext(path)[1]:
            path = f"{path}.brf"
        if self._save_to_path(path):
            self._current_file = path
            self.window.set_document_title(path)
            self.settings.add_recent_file(path)
            self._refresh_recent_menu()

    def _save_to_path(self, path: str) -> bool:
        try:
            with open(path, "w", encoding="utf-8") as f:
                f.write(self.window.text())
        except OSError as exc:
            self.logger.error("save_file_failed path=%s error=%s", path, exc)
            self.window.show_error(f"保存失败：{exc}")
            return False
        self.window.notify_info("已保存")
        self.logger.info("save_file path=%s", path)
        return True

    def on_closing(self) -> None:
        if not self.settings.save():
            self.logger.warning("settings_not_saved path=%s", self.settings.path)
