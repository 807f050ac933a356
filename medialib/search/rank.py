# Ranking helper: order scored results and clip to the result cap.
# Stateless; ties keep their input order (sorted() is stable).

from __future__ import annotations
from typing import Iterable, List
from .types import SearchResult

DEFAULT_LIMIT = 50


def rank_results(results: Iterable[SearchResult], limit: int = DEFAULT_LIMIT) -> List[SearchResult]:
    ranked = sorted(results, key=lambda r: r.relevance, reverse=True)
    return ranked[:limit]
