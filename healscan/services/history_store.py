"""
History store for HealScan AI.

Keeps the most recent analyses, newest first, in a JSON file. The file
is read once when the store is created and rewritten in full after
every recorded analysis.
"""

import json
import tempfile
from pathlib import Path
from typing import List, Optional

from pydantic import TypeAdapter, ValidationError

from healscan.config import settings
from healscan.core.errors import HistoryWriteError
from healscan.models.schemas import AnalysisResult
from healscan.utils.logger import get_logger

logger = get_logger("history_store")

_history_adapter = TypeAdapter(List[AnalysisResult])


class HistoryStore:
    """
    Bounded, most-recent-first list of analysis results.

    Single writer: the store is only mutated by the active analysis
    flow, so no locking is done here.
    """

    def __init__(self, path: Optional[Path] = None, limit: Optional[int] = None):
        self.path = Path(path) if path is not None else settings.history_file
        self.limit = settings.history_limit if limit is None else limit
        self._entries: List[AnalysisResult] = self.load()

    @property
    def entries(self) -> List[AnalysisResult]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def load(self) -> List[AnalysisResult]:
        """
        Read the history file.

        A missing, unreadable or corrupt file yields an empty history.
        """
        if not self.path.exists():
            return []

        try:
            raw = self.path.read_text(encoding="utf-8")
            entries = _history_adapter.validate_json(raw)
        except (OSError, ValueError, ValidationError) as e:
            logger.warning(
                "History file unreadable, starting empty",
                path=str(self.path),
                error=str(e)
            )
            return []

        logger.info("History loaded", path=str(self.path), entries=len(entries))
        return entries[:self.limit]

    def record(self, entry: AnalysisResult) -> List[AnalysisResult]:
        """
        Prepend an entry, drop overflow, and persist.

        The in-memory list only changes once the write succeeded.

        Raises:
            HistoryWriteError: the history file could not be written
        """
        updated = [entry, *self._entries][:self.limit]
        self._save(updated)
        self._entries = updated

        logger.info(
            "History updated",
            timestamp=entry.timestamp,
            entries=len(updated)
        )
        return self.entries

    def select_by_index(self, index: int) -> Optional[AnalysisResult]:
        """Return the entry at index, or None when out of bounds."""
        if 0 <= index < len(self._entries):
            return self._entries[index]
        return None

    def _save(self, entries: List[AnalysisResult]) -> None:
        """Write the full history atomically (temp file + rename)."""
        data = [entry.model_dump(mode="json") for entry in entries]
        tmp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                suffix=".tmp",
                delete=False
            ) as f:
                tmp_path = Path(f.name)
                json.dump(data, f, ensure_ascii=False)
            tmp_path.replace(self.path)
        except OSError as e:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            logger.error("Failed to write history", path=str(self.path), error=str(e))
            raise HistoryWriteError(f"Could not save history: {e}") from e
