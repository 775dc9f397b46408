# core/similarity.py
"""Cosine similarity scoring and ranking over term-frequency vectors."""
import math
from typing import Iterable, List, Optional

from core.domain import ScoredDocument
from core.vectors import TermVector, squared_norm, vectorize_text


def cosine_similarity(vec_a: TermVector, vec_b: TermVector) -> float:
    """
    Cosine of the angle between two term-frequency vectors.

    Args:
        vec_a: First vector as a dictionary {term: count}
        vec_b: Second vector as a dictionary {term: count}

    Returns:
        Score in [0, 1]; 0.0 when either vector is empty
    """
    # Terms missing from vec_a contribute nothing to the dot product
    dot_product = sum(count * vec_b.get(term, 0) for term, count in vec_a.items())

    norm_a = squared_norm(vec_a)
    norm_b = squared_norm(vec_b)

    # Avoid division by zero
    if norm_a == 0 or norm_b == 0:
        return 0.0

    # Integer product keeps the denominator symmetric and exact for identical vectors
    score = dot_product / math.sqrt(norm_a * norm_b)
    return min(score, 1.0)


def text_similarity(text_a: Optional[str], text_b: Optional[str]) -> float:
    """Cosine similarity between two raw texts."""
    return cosine_similarity(vectorize_text(text_a), vectorize_text(text_b))


def rank_results(results: Iterable[ScoredDocument]) -> List[ScoredDocument]:
    """
    Order results by score, highest first.

    sorted() is stable, so equal scores keep their input order.
    """
    return sorted(results, key=lambda r: r.score, reverse=True)
