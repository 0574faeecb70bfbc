"""主界面实现。"""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QAction, QCloseEvent, QKeySequence
from PyQt6.QtWidgets import (
    QLabel,
    QMainWindow,
    QMenu,
    QMessageBox,
    QSplitter,
    QStatusBar,
    QTextEdit,
)


class MainWindow(QMainWindow):
    """主窗口：上方盲文窗格，下方 ASCII 窗格。"""

    openRequested = pyqtSignal()
    saveRequested = pyqtSignal()
    saveAsRequested = pyqtSignal()
    recentFileRequested = pyqtSignal(str)
    brailleVisibleToggled = pyqtSignal(bool)
    asciiVisibleToggled = pyqtSignal(bool)
    closing = pyqtSignal()

    def __init__(self) -> None:
        super().__init__()
        self.setWindowTitle("BrailleZephyr")
        self.resize(640, 480)

        self._build_ui()
        self._build_actions()

    def _build_actions(self) -> None:
        self.action_open = QAction("打开", self)
        self.action_save = QAction("保存", self)
        self.action_save_as = QAction("另存为", self)
        self.action_exit = QAction("退出", self)

        self.action_open.setShortcut(QKeySequence.StandardKey.Open)
        self.action_save.setShortcut(QKeySequence.StandardKey.Save)
        self.action_save_as.setShortcut(QKeySequence.StandardKey.SaveAs)

        self.action_open.triggered.connect(self.openRequested.emit)
        self.action_save.triggered.connect(self.saveRequested.emit)
        self.action_save_as.triggered.connect(self.saveAsRequested.emit)
        self.action_exit.triggered.connect(self.close)

        menubar = self.menuBar()
        file_menu = menubar.addMenu("文件")
        file_menu.addAction(self.action_open)
        file_menu.addAction(self.action_save)
        file_menu.addAction(self.action_save_as)
        file_menu.addSeparator()
        self.recent_menu = QMenu("最近打开", self)
        file_menu.addMenu(self.recent_menu)
        file_menu.addSeparator()
        file_menu.addAction(self.action_exit)

        self.action_braille_visible = QAction("显示盲文", self)
        self.action_braille_visible.setCheckable(True)
        self.action_ascii_visible = QAction("显示 ASCII", self)
        self.action_ascii_visible.setCheckable(True)
        self.action_braille_visible.toggled.connect(self.brailleVisibleToggled.emit)
        self.action_ascii_visible.toggled.connect(self.asciiVisibleToggled.emit)

        view_menu = menubar.addMenu("视图")
        view_menu.addAction(self.action_braille_visible)
        view_menu.addAction(self.action_ascii_visible)

    def _build_ui(self) -> None:
        splitter = QSplitter(Qt.Orientation.Vertical, self)
        splitter.setChildrenCollapsible(False)

        self.braille_text = QTextEdit(splitter)
        self.braille_text.setAcceptRichText(False)
        self.ascii_text = QTextEdit(splitter)
        self.ascii_text.setAcceptRichText(False)
        self.ascii_text.setReadOnly(True)

        splitter.addWidget(self.braille_text)
        splitter.addWidget(self.ascii_text)
        splitter.setStretchFactor(0, 1)
        splitter.setStretchFactor(1, 1)
        self.setCentralWidget(splitter)

        # ASCII 窗格只镜像盲文窗格的内容
        self.braille_text.textChanged.connect(self._mirror_text)

        status = QStatusBar(self)
        self.label_status = QLabel("")
        status.addWidget(self.label_status, 1)
        self.setStatusBar(status)

    def _mirror_text(self) -> None:
        self.ascii_text.setPlainText(self.braille_text.toPlainText())

    def closeEvent(self, event: QCloseEvent) -> None:  # noqa: N802
        self.closing.emit()
        event.accept()

    def text(self) -> str:
        return self.braille_text.toPlainText()

    def set_text(self, text: str) -> None:
        self.braille_text.setPlainText(text)

    def set_document_title(self, path: str) -> None:
        self.setWindowTitle(f"BrailleZephyr - {path}" if path else "BrailleZephyr")

    def sync_view_actions(self, braille_visible: bool, ascii_visible: bool) -> None:
        for action, checked in (
            (self.action_braille_visible, braille_visible),
            (self.action_ascii_visible, ascii_visible),
        ):
            action.blockSignals(True)
            action.setChecked(checked)
            action.blockSignals(False)

    def update_recent_files(self, paths: list[str]) -> None:
        self.recent_menu.clear()
        if not paths:
            action = QAction("(空)", self)
            action.setEnabled(False)
            self.recent_menu.addAction(action)
            return
        for p in paths:
            act = QAction(p, self)
            act.triggered.connect(lambda _, x=p: self.recentFileRequested.emit(x))
            self.recent_menu.addAction(act)

    def show_error(self, message: str) -> None:
        QMessageBox.critical(self, "错误", message)

    def notify_info(self, message: str) -> None:
        self.label_status.setText(message)
