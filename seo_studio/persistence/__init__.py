"""
Persistence layer for the generation archive.
"""

from .archive import HISTORY_STORAGE_KEY, HistoryStore, GenerationArchive

__all__ = ["HISTORY_STORAGE_KEY", "HistoryStore", "GenerationArchive"]
