"""
runtime — единственная точка, где определяется:
- есть ли плагин, поставляющий хранилище (entry-point "decompfs.plugin")
- какое хранилище оборачивать распаковкой

Доменный код не должен выбирать бэкенд сам: он берёт get_filestore().

Переменные окружения:
- DECOMPFS_USE_PLUGIN (по умолчанию 1) — искать плагин
- DECOMPFS_LOCAL_ROOT — базовый каталог локального хранилища
- DECOMPFS_DEBUG — подробности при ошибке загрузки плагина
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from importlib.metadata import entry_points

from decompfs.filestore import FileStore, LocalFileStore
from decompfs.overlay import DecompressFileStore
from decompfs.utils.debug import debug_enabled


@dataclass(frozen=True)
class Providers:
    filestore: DecompressFileStore
    source: str  # "plugin" | "local"


_PROVIDERS: Providers | None = None


def _use_plugin() -> bool:
    return os.getenv("DECOMPFS_USE_PLUGIN", "1").strip() not in ("0", "false", "False")


def _load_plugin_store() -> FileStore | None:
    """Пытается получить хранилище из плагина через entry-points."""
    try:
        eps = entry_points().select(group="decompfs.plugin", name="filestore")
        loaded_any = False
        for ep in eps:
            loaded_any = True
            factory = ep.load()
            result = factory()
            if isinstance(result, dict):
                result = result.get("filestore") or result.get("store")
            if result is not None and hasattr(result, "open_read") and hasattr(result, "read_dir"):
                return result

        if loaded_any:
            # entry-point существует, но формат ответа не распознан
            print(
                "WARN: Plugin entrypoint found, but no filestore recognized; "
                "expected an object with open_read/read_dir"
            )
    except Exception as e:
        # Плагин может отсутствовать или быть сломан.
        # В этом случае decompfs обязан перейти на local-режим.
        if debug_enabled():
            import traceback
            print("ERROR: Failed to load plugin filestore:", repr(e))
            traceback.print_exc()
        else:
            print("WARN: Plugin filestore load failed; set DECOMPFS_DEBUG=1 to see details")
        return None
    return None


def _build_local_store() -> FileStore:
    root = os.getenv("DECOMPFS_LOCAL_ROOT")  # опционально: базовый каталог для относительных путей
    return LocalFileStore(root=root)


def get_providers(force_reload: bool = False) -> Providers:
    """Возвращает активные провайдеры. Кэшируется на время процесса."""
    global _PROVIDERS
    if _PROVIDERS is not None and not force_reload:
        return _PROVIDERS

    if _use_plugin():
        store = _load_plugin_store()
        if store is not None:
            _PROVIDERS = Providers(filestore=DecompressFileStore(store), source="plugin")
            print("INFO: Filestore loaded from plugin")
            return _PROVIDERS

    _PROVIDERS = Providers(filestore=DecompressFileStore(_build_local_store()), source="local")
    print("INFO: Filestore loaded from local")
    return _PROVIDERS


def get_filestore() -> DecompressFileStore:
    return get_providers().filestore
