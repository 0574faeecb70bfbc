"""设置读写相关的异常。"""

from __future__ import annotations


class SettingsError(Exception):
    pass


class BadSettingValue(SettingsError, ValueError):
    """单行设置的数值无法解析，只跳过该行。"""


class SoundCueError(SettingsError):
    """提示音文件无法使用（非 I/O 原因）。"""

    def __init__(self, path: str, message: str = "") -> None:
        super().__init__(message or path)
        self.path = path


class UnsupportedAudioFormatError(SoundCueError):
    pass


class AudioDeviceUnavailableError(SoundCueError):
    pass
