# infrastructure/vector_cache.py
"""Simple in-memory term vector cache with size limit"""
import logging
from typing import Dict, Optional, Tuple

from config import settings
from core.interfaces import IVectorCache
from core.vectors import TermVector

logger = logging.getLogger(settings.LOGGER_NAME)


class InMemoryVectorCache(IVectorCache):
    """
    In-memory storage for document term vectors.

    One entry per document, tagged with the hash of the content it was built from.
    Auto-cleanup when max_entries is exceeded (keeps the newest half). Lost on restart.
    """

    def __init__(self, max_entries: int = 1000):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        # document_id -> (content_hash, vector); insertion order doubles as age
        self._vectors: Dict[str, Tuple[str, TermVector]] = {}

    def _cleanup_if_full(self):
        """Remove oldest entries when limit reached"""
        if len(self._vectors) <= self.max_entries:
            return

        keep = max(1, self.max_entries // 2)
        to_remove = len(self._vectors) - keep
        for document_id in list(self._vectors)[:to_remove]:
            del self._vectors[document_id]
        logger.debug(f"Vector cache trimmed by {to_remove} entries")

    def get(self, document_id: str, content_hash: str) -> Optional[TermVector]:
        entry = self._vectors.get(document_id)
        if entry is None or entry[0] != content_hash:
            return None
        return entry[1]

    def put(self, document_id: str, content_hash: str, vector: TermVector) -> None:
        # Re-insert so the entry counts as newest
        self._vectors.pop(document_id, None)
        self._vectors[document_id] = (content_hash, vector)
        self._cleanup_if_full()

    def invalidate(self, document_id: str) -> None:
        self._vectors.pop(document_id, None)

    def clear(self) -> None:
        self._vectors.clear()

    def __len__(self) -> int:
        return len(self._vectors)
