"""
errors — классификация ошибок overlay.

- "не найдено" определяется по типу/errno, чтобы принимать ошибки любых бэкендов
- DecodeError — битое сжатое содержимое; наследует OSError, как gzip.BadGzipFile
"""

from __future__ import annotations

import errno


def is_not_found(exc: BaseException) -> bool:
    """True, если исключение означает отсутствие файла."""
    if isinstance(exc, FileNotFoundError):
        return True
    return isinstance(exc, OSError) and exc.errno == errno.ENOENT


class DecodeError(OSError):
    """Декодер отверг сжатые данные (битый заголовок, обрезанный поток и т.п.)."""

    def __init__(self, message: str, path: str | None = None, codec: str | None = None):
        super().__init__(message)
        self.path = path
        self.codec = codec

    def __str__(self) -> str:
        base = str(self.args[0]) if self.args else "decode error"
        if self.path:
            base = f"{base} (path={self.path})"
        return base
