"""
Crude term-frequency relevance score used to build the baseline ranking.

Functions:
- query_terms - Split a query into lower-cased terms longer than 2 characters
- lexical_score - Sum of literal term occurrences in a text
"""

from typing import List

# Terms of this length or shorter are treated as noise
MIN_TERM_LENGTH = 3


def query_terms(query: str) -> List[str]:
    """Lower-case the query and keep whitespace-separated terms of 3+ characters."""
    return [term for term in query.lower().split() if len(term) >= MIN_TERM_LENGTH]


def lexical_score(text: str, query: str) -> int:
    """Count non-overlapping literal occurrences of each query term in the text.

    Matching is a plain substring search, so characters like '+' or '(' in a
    term are matched literally. No length normalisation or IDF weighting.
    """
    terms = query_terms(query)
    if not terms:
        return 0

    lowered = (text or "").lower()
    return sum(lowered.count(term) for term in terms)
