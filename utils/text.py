# utils/text.py

"""Text normalization and tokenization for lexical matching."""
import re
from typing import List, Optional

# Anything that is neither a word character nor whitespace
_PUNCTUATION = re.compile(r'[^\w\s]')

def normalize_text(text: Optional[str]) -> str:
    """Lowercase text and strip punctuation. Whitespace is left untouched."""
    if not text:
        return ""
    return _PUNCTUATION.sub('', text.lower())

def tokenize(text: Optional[str]) -> List[str]:
    """
    Split text into normalized terms.

    No stemming, stop-word removal or length filter is applied.
    Scripts written without spaces come out as a single term per run.
    """
    return normalize_text(text).split()
