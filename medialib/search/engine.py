# Smart search entry point.
# Pipeline per request: filter -> match -> tag/score -> sort -> truncate.
# The engine holds no per-request state and performs no I/O; the corpus is
# loaded by the caller (see medialib.storage).

from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional, Sequence

from loguru import logger

from .filters import filter_items
from .matcher import matches
from .rank import DEFAULT_LIMIT, rank_results
from .scorer import score, tag
from .taxonomy import Taxonomy, load_taxonomy
from .types import MediaItem, SearchQuery, SearchResult


def search(
    corpus: Sequence[MediaItem],
    query: SearchQuery,
    now: Optional[datetime] = None,
    taxonomy: Optional[Taxonomy] = None,
    limit: int = DEFAULT_LIMIT,
) -> List[SearchResult]:
    """Rank `corpus` against `query`; an empty query returns no results."""
    if query.is_empty:
        return []

    now = now or datetime.now(timezone.utc)
    if taxonomy is None:
        taxonomy = load_taxonomy()

    candidates = filter_items(corpus, query, now=now)
    matched = [item for item in candidates if matches(item, query, taxonomy)]

    results = [
        SearchResult(
            item=item,
            relevance=score(item, query.text, now=now, taxonomy=taxonomy),
            tags=tag(item, query.text, now=now, taxonomy=taxonomy),
        )
        for item in matched
    ]

    logger.debug(
        f"search q={query.text!r} mode={query.mode} corpus={len(corpus)} "
        f"filtered={len(candidates)} matched={len(matched)}"
    )
    return rank_results(results, limit=limit)


class SmartSearch:
    """Binds a taxonomy and result cap so callers only pass corpus + query."""

    def __init__(self, taxonomy: Optional[Taxonomy] = None, limit: int = DEFAULT_LIMIT):
        self.taxonomy = taxonomy if taxonomy is not None else load_taxonomy()
        self.limit = limit

    def search(
        self,
        corpus: Sequence[MediaItem],
        query: SearchQuery,
        now: Optional[datetime] = None,
    ) -> List[SearchResult]:
        return search(corpus, query, now=now, taxonomy=self.taxonomy, limit=self.limit)
