"""
Breed name resolver.

Maps the free-form breed name the LLM comes up with ("Golden Retriever",
"Russian Blue!") onto an id from a provider catalog.
"""
from typing import Optional

from .catalog import Catalog, CatalogEntry, normalize

EXACT_WORD_SCORE = 3
PARTIAL_WORD_SCORE = 1


def _word_score(word: str, part: str) -> int:
    if part == word:
        return EXACT_WORD_SCORE
    if word in part or part in word:
        return PARTIAL_WORD_SCORE
    return 0


def score_entry(words: list[str], entry: CatalogEntry) -> int:
    """Sum the word-vs-token credit of every query word against an entry."""
    return sum(_word_score(word, part) for word in words for part in entry.tokens)


def resolve_breed(label: str, catalog: Catalog) -> Optional[str]:
    """
    Find the catalog id that best matches a breed label.

    Matching strategy (first hit wins):
    1. Exact phrase: the normalized label equals the entry's words in
       either order, so "golden retriever" finds "retriever/golden"
    2. Overlap: every label word is compared with every entry word,
       3 points for equal words and 1 when one contains the other.
       The highest non-zero total wins, earliest entry on ties.

    Returns:
        The matching entry id, or None if nothing scores.
    """
    words = normalize(label)
    if not words:
        return None
    query = " ".join(words)

    for entry in catalog:
        if " ".join(entry.tokens) == query or " ".join(reversed(entry.tokens)) == query:
            return entry.id

    best_id: Optional[str] = None
    best_score = 0
    for entry in catalog:
        score = score_entry(words, entry)
        if score > best_score:
            best_score = score
            best_id = entry.id

    return best_id
