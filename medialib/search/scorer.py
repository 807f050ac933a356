# Scoring and tagging stages.
# Both are pure functions of (item, query text, now); `now` is injectable so
# the recency rules can be pinned in tests.

from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional, Tuple

from .matcher import query_terms
from .taxonomy import Taxonomy, load_taxonomy
from .types import MediaItem

# --- score weights ---
EXACT_TITLE = 100
TITLE_CONTAINS_QUERY = 50
ARTIST_CONTAINS_QUERY = 40
TERM_IN_TITLE = 20
TERM_IN_ARTIST = 15
TITLE_STARTS_WITH_TERM = 10
ARTIST_STARTS_WITH_TERM = 8
SEMANTIC_CATEGORY = 25
RECENT_WEEK = 5
RECENT_MONTH = 3

MAX_TAGS = 6
CONTENT_TAGS = 3
STOP_WORDS = frozenset({"the", "and", "for", "with", "from"})

SECONDS_PER_DAY = 60 * 60 * 24


def days_since(created_at: datetime, now: Optional[datetime] = None) -> int:
    """Whole days elapsed (floor of elapsed time), not calendar days."""
    now = now or datetime.now(timezone.utc)
    return int((now - created_at).total_seconds() // SECONDS_PER_DAY)


def score(
    item: MediaItem,
    query_text: str,
    now: Optional[datetime] = None,
    taxonomy: Optional[Taxonomy] = None,
) -> int:
    if taxonomy is None:
        taxonomy = load_taxonomy()
    query = query_text.strip().lower()
    title = item.title.lower()
    artist = item.artist.lower()

    total = 0

    if title == query:
        total += EXACT_TITLE
    if query in title:
        total += TITLE_CONTAINS_QUERY
    if query in artist:
        total += ARTIST_CONTAINS_QUERY

    for term in query_terms(query):
        if term in title:
            total += TERM_IN_TITLE
        if term in artist:
            total += TERM_IN_ARTIST
        if title.startswith(term):
            total += TITLE_STARTS_WITH_TERM
        if artist.startswith(term):
            total += ARTIST_STARTS_WITH_TERM

    # one bonus per category the query evokes and the item carries
    for category, keywords in taxonomy.items():
        if category in query or any(k in query for k in keywords):
            if any(k in title or k in artist for k in keywords):
                total += SEMANTIC_CATEGORY

    age = days_since(item.created_at, now)
    if age <= 7:
        total += RECENT_WEEK
    elif age <= 30:
        total += RECENT_MONTH

    return total


def _content_tags(item_text: str) -> List[str]:
    words = [w for w in item_text.split() if len(w) > 3 and w not in STOP_WORDS]
    return words[:CONTENT_TAGS]


def _recency_tag(age: int) -> Optional[str]:
    if age <= 1:
        return "new"
    if age <= 7:
        return "recent"
    if age <= 30:
        return "this month"
    return None


def tag(
    item: MediaItem,
    query_text: str,
    now: Optional[datetime] = None,
    taxonomy: Optional[Taxonomy] = None,
) -> Tuple[str, ...]:
    """Up to six distinct descriptive tags, in first-seen order."""
    if taxonomy is None:
        taxonomy = load_taxonomy()
    query = query_text.strip().lower()
    item_text = item.item_text

    tags = _content_tags(item_text)

    for category, keywords in taxonomy.items():
        if any(k in item_text or k in query for k in keywords):
            tags.append(category)

    tags.append(item.kind)

    recency = _recency_tag(days_since(item.created_at, now))
    if recency:
        tags.append(recency)

    unique = list(dict.fromkeys(tags))
    capped = unique[:MAX_TAGS]
    if item.kind not in capped:
        # the media kind always survives the cap
        capped[-1] = item.kind
    return tuple(capped)
