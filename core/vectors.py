# core/vectors.py
"""Sparse term-frequency vectors"""
from collections import Counter
from typing import Dict, Iterable, Optional

from utils.text import tokenize

# term -> occurrence count, only positive counts are stored
TermVector = Dict[str, int]

def vectorize(terms: Iterable[str]) -> TermVector:
    """Count occurrences of each distinct term."""
    return dict(Counter(terms))

def vectorize_text(text: Optional[str]) -> TermVector:
    """Tokenize and vectorize raw text. Missing text is treated as empty."""
    return vectorize(tokenize(text))

def squared_norm(vector: TermVector) -> int:
    return sum(count * count for count in vector.values())
