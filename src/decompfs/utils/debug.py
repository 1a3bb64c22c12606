"""
debug — диагностический вывод decompfs.

Выключен по умолчанию. Включается переменной окружения DECOMPFS_DEBUG=1,
без переписывания кода вызывающей стороны.
"""

from __future__ import annotations

import os


def debug_enabled() -> bool:
    return os.getenv("DECOMPFS_DEBUG", "0").strip() in ("1", "true", "True")


def debug(message: str) -> None:
    if debug_enabled():
        print(f"DEBUG: {message}")
