"""
optional_deps — библиотеки кодеков, ставящиеся через extras.

Обязательных зависимостей у пакета нет: gzip/bz2 — стандартная библиотека.
zstandard и lz4 приходят с extras:

    pip install decompfs[zstd]
    pip install decompfs[lz4]
    pip install decompfs[all]

Модуль импортируется при первом открытии файла формата. Если библиотеки нет,
ImportError называет extra, который надо поставить. При DECOMPFS_AUTO_PIP=1
extra ставится через pip прямо из процесса.
"""

from __future__ import annotations

import importlib
import os
import subprocess
import sys
from types import ModuleType

from decompfs.utils.debug import debug

DIST_NAME = "decompfs"

_TRUTHY = ("1", "true", "yes", "on")


def extra_requirement(extra: str) -> str:
    """'zstd' -> 'decompfs[zstd]'."""
    return f"{DIST_NAME}[{extra}]"


def _auto_pip_enabled(auto_install: bool | None) -> bool:
    if auto_install is not None:
        return auto_install
    return os.getenv("DECOMPFS_AUTO_PIP", "0").strip().lower() in _TRUTHY


def _pip_install(requirement: str) -> None:
    debug(f"pip install {requirement}")
    subprocess.check_call([sys.executable, "-m", "pip", "install", requirement])


def ensure_import(
    module: str,
    extra: str | None = None,
    *,
    auto_install: bool | None = None,
    hint: str | None = None,
) -> ModuleType:
    """
    Импортирует библиотеку кодека.

    extra — имя extra пакета (например "zstd"); без него в подсказке стоит имя модуля.
    Ошибка импорта всегда ImportError, чтобы её не спутать с битыми данными.
    """
    try:
        return importlib.import_module(module)
    except ImportError as e:
        requirement = extra_requirement(extra) if extra else module
        if _auto_pip_enabled(auto_install):
            _pip_install(requirement)
            importlib.invalidate_caches()
            return importlib.import_module(module)

        msg = f"Codec library '{module}' is not installed. Install: pip install {requirement}"
        if hint:
            msg += f" ({hint})"
        raise ImportError(msg) from e
