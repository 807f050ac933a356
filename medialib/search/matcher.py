# Match stage: decides whether an item answers a query.
#   - direct: any query term is a substring of "title artist"
#   - semantic (semantic/hybrid modes): expand a term through the taxonomy
# No fuzzy matching, stemming or edit distance.

from __future__ import annotations

from typing import List, Optional

from .taxonomy import Taxonomy, load_taxonomy
from .types import MediaItem, SearchQuery


def query_terms(text: str) -> List[str]:
    return text.lower().split()


def direct_match(terms: List[str], item_text: str) -> bool:
    return any(term in item_text for term in terms)


def semantic_term_match(term: str, item_text: str, taxonomy: Taxonomy) -> bool:
    """
    The first category the term triggers (exact keyword, or the term appears
    inside the category name) decides: the term hits when any of that
    category's keywords occurs in the item text.
    """
    for category, keywords in taxonomy.items():
        if term in keywords or term in category:
            return any(keyword in item_text for keyword in keywords)
    return False


def matches(item: MediaItem, query: SearchQuery, taxonomy: Optional[Taxonomy] = None) -> bool:
    terms = query_terms(query.text)
    item_text = item.item_text

    if direct_match(terms, item_text):
        return True
    if not query.semantic:
        return False

    if taxonomy is None:
        taxonomy = load_taxonomy()
    return any(semantic_term_match(term, item_text, taxonomy) for term in terms)
