# services/search_service.py
"""Lexical document similarity search"""
import logging
from typing import List, Optional, Sequence

from config import settings
from core.domain import Document, ScoredDocument
from core.interfaces import IVectorCache
from core.similarity import cosine_similarity, rank_results
from core.vectors import TermVector, vectorize_text
from utils.common import get_content_hash

logger = logging.getLogger(settings.LOGGER_NAME)


def _document_vector(document: Document, vector_cache: Optional[IVectorCache]) -> TermVector:
    content = document.content or ""
    if vector_cache is None:
        return vectorize_text(content)

    content_hash = get_content_hash(content)
    vector = vector_cache.get(document.id, content_hash)
    if vector is None:
        vector = vectorize_text(content)
        vector_cache.put(document.id, content_hash, vector)
    return vector


def find_similar_documents(
    query_text: Optional[str],
    candidates: Sequence[Document],
    vector_cache: Optional[IVectorCache] = None
) -> List[ScoredDocument]:
    """
    Rank candidate documents by cosine similarity to the query text.

    Every candidate appears exactly once. An empty query scores everything 0.0,
    which leaves the input order intact. No top-k cut or score threshold is applied.

    Args:
        query_text: Raw query text
        candidates: Documents the caller is allowed to search, in a stable order
        vector_cache: Optional cache of document vectors

    Returns:
        List of ScoredDocument, highest score first
    """
    query_vector = vectorize_text(query_text)

    scored = [
        ScoredDocument(
            document=document,
            score=cosine_similarity(query_vector, _document_vector(document, vector_cache))
        )
        for document in candidates
    ]

    logger.debug(
        f"Scored {len(scored)} candidates against {len(query_vector)} distinct query terms"
    )
    return rank_results(scored)


class SimilaritySearchService:
    """Search entry point holding the optional vector cache"""

    def __init__(self, vector_cache: Optional[IVectorCache] = None):
        self.vector_cache = vector_cache
        if vector_cache is not None:
            logger.info("Similarity search initialized with vector cache")
        else:
            logger.info("Similarity search initialized without cache")

    def search(self, query_text: Optional[str], candidates: Sequence[Document]) -> List[ScoredDocument]:
        return find_similar_documents(query_text, candidates, self.vector_cache)

    def forget(self, document_id: str) -> None:
        """Drop cached state for a deleted document"""
        if self.vector_cache is not None:
            self.vector_cache.invalidate(document_id)
