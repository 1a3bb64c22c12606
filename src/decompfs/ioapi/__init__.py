"""
ioapi — единый API чтения поверх FileStore.

Рекомендованный импорт:
    from decompfs import ioapi as ia
"""

from decompfs.ioapi import bytes, txt

__all__ = ["bytes", "txt"]
