"""顶层窗口适配：尺寸、最大化状态与延时回调。"""

from __future__ import annotations

from typing import Callable

from PyQt6.QtCore import QEvent, QObject, Qt, QTimer
from PyQt6.QtWidgets import QWidget


class _GeometryWatcher(QObject):
    """监听窗口的 Resize/Move 事件。"""

    def __init__(self, parent: QWidget) -> None:
        super().__init__(parent)
        self.resize_callbacks: list[Callable[[], None]] = []
        self.move_callbacks: list[Callable[[], None]] = []

    def eventFilter(self, obj, event) -> bool:  # type: ignore[override]  # noqa: N802
        if event.type() == QEvent.Type.Resize:
            for callback in list(self.resize_callbacks):
                callback()
        elif event.type() == QEvent.Type.Move:
            for callback in list(self.move_callbacks):
                callback()
        return False


class QtHostWindow:
    def __init__(self, widget: QWidget) -> None:
        self.widget = widget
        self._watcher = _GeometryWatcher(widget)
        widget.installEventFilter(self._watcher)

    def size(self) -> tuple[int, int]:
        s = self.widget.size()
        return int(s.width()), int(s.height())

    def set_size(self, width: int, height: int) -> None:
        self.widget.resize(int(width), int(height))

    def is_maximized(self) -> bool:
        return bool(self.widget.isMaximized())

    def set_maximized(self, maximized: bool) -> None:
        if maximized:
            self.widget.setWindowState(self.widget.windowState() | Qt.WindowState.WindowMaximized)
        else:
            self.widget.setWindowState(self.widget.windowState() & ~Qt.WindowState.WindowMaximized)

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> None:
        QTimer.singleShot(int(delay_ms), callback)

    def subscribe_resize(self, callback: Callable[[], None]) -> None:
        self._watcher.resize_callbacks.append(callback)

    def subscribe_move(self, callback: Callable[[], None]) -> None:
        self._watcher.move_callbacks.append(callback)
