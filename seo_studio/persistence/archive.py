"""
Generation Archive

Local history of generations, stored as one JSON array under a fixed key.
Every mutation builds a new immutable snapshot and overwrites the whole file.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..models import Generation, SEOVariant

logger = logging.getLogger(__name__)

HISTORY_STORAGE_KEY = "seo_tool_history"


class HistoryStore:
    """
    File storage for the archive.

    Reads and writes <base_path>/seo_tool_history.json.
    """

    def __init__(self, base_path: Optional[str] = None):
        """
        Initialize history store.

        Args:
            base_path: Directory for the archive file.
                      Defaults to HISTORY_DIR from settings
        """
        if base_path is None:
            from ..utils.config import get_settings
            base_path = get_settings().HISTORY_DIR

        self.base_path = Path(base_path)
        self.path = self.base_path / f"{HISTORY_STORAGE_KEY}.json"

    def load(self) -> List[Dict[str, Any]]:
        """Load raw records; a missing or unreadable file is an empty archive."""
        if not self.path.exists():
            return []

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to read history at {self.path}: {e}")
            return []

        if not isinstance(data, list):
            logger.warning(f"History at {self.path} is not a list, ignoring")
            return []
        return data

    def save(self, records: Sequence[Dict[str, Any]]) -> None:
        """Overwrite the archive with records."""
        self.base_path.mkdir(parents=True, exist_ok=True)

        tmp_path = self.path.with_suffix(".json.tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(list(records), f, indent=2, ensure_ascii=False)
        os.replace(tmp_path, self.path)

        logger.debug(f"Saved {len(records)} generations to {self.path}")


class GenerationArchive:
    """
    Copy-on-write collection of generations, newest first.

    Usage:
        archive = GenerationArchive(HistoryStore("/tmp/history"))
        archive.add(generation)
        archive.add_enhanced_variant(generation.id, variant)
    """

    def __init__(self, store: HistoryStore):
        self.store = store
        self._snapshot: Tuple[Generation, ...] = self._load()

    def _load(self) -> Tuple[Generation, ...]:
        generations = []
        for record in self.store.load():
            try:
                generations.append(Generation.from_dict(record))
            except (AttributeError, TypeError, ValueError) as e:
                logger.warning(f"Skipping unreadable history record: {e}")
        return tuple(generations)

    def _commit(self, snapshot: Tuple[Generation, ...]) -> Tuple[Generation, ...]:
        self.store.save([g.to_dict() for g in snapshot])
        self._snapshot = snapshot
        return snapshot

    @property
    def snapshot(self) -> Tuple[Generation, ...]:
        return self._snapshot

    def __len__(self) -> int:
        return len(self._snapshot)

    def get(self, generation_id: str) -> Optional[Generation]:
        for generation in self._snapshot:
            if generation.id == generation_id:
                return generation
        return None

    def _require(self, generation_id: str) -> Generation:
        generation = self.get(generation_id)
        if generation is None:
            raise KeyError(generation_id)
        return generation

    def add(self, generation: Generation) -> Tuple[Generation, ...]:
        """Prepend a new generation."""
        logger.info(f"Archiving generation {generation.id} ({generation.url})")
        return self._commit((generation,) + self._snapshot)

    def update(self, generation: Generation) -> Tuple[Generation, ...]:
        """
        Replace the record with the same id.

        Raises:
            KeyError: If no record has that id
        """
        self._require(generation.id)
        return self._commit(tuple(
            generation if g.id == generation.id else g for g in self._snapshot
        ))

    def delete(self, generation_id: str) -> Tuple[Generation, ...]:
        """Remove a record by id; unknown ids leave the archive unchanged."""
        return self._commit(tuple(g for g in self._snapshot if g.id != generation_id))

    def add_enhanced_variant(self, generation_id: str, variant: SEOVariant) -> Generation:
        """Append an assistant variant to a stored generation."""
        updated = self._require(generation_id).with_enhanced_variant(variant)
        self.update(updated)
        return updated

    def replace_schema(self, generation_id: str, schema: Any) -> Generation:
        """Replace a stored generation's schema graph."""
        updated = self._require(generation_id).with_schema(schema)
        self.update(updated)
        return updated
