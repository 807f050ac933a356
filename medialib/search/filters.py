# Filter stage: structural filters (media kind, recency window) applied to the
# corpus before any text matching. Order-preserving; absent filters pass through.

from __future__ import annotations

import calendar
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence

from .types import MediaItem, SearchQuery


def _shift_months(ts: datetime, months: int) -> datetime:
    """
    Move `ts` by whole calendar months, clamping the day to the target month.
    A day past the month's end is clamped, never rolled forward (Mar 31 - 1 month is Feb 29, not Mar 2).
    """
    month_index = ts.year * 12 + (ts.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(ts.day, calendar.monthrange(year, month)[1])
    return ts.replace(year=year, month=month, day=day)


def date_cutoff(date_range: str, now: datetime) -> datetime:
    """Earliest creation time kept by a date range filter."""
    if date_range == "today":
        return now - timedelta(days=1)
    if date_range == "week":
        return now - timedelta(days=7)
    if date_range == "month":
        return _shift_months(now, -1)
    if date_range == "year":
        return _shift_months(now, -12)
    raise ValueError(f"Unknown date range: {date_range!r}")


def filter_items(
    items: Sequence[MediaItem],
    query: SearchQuery,
    now: Optional[datetime] = None,
) -> List[MediaItem]:
    filtered = list(items)

    if query.media_kind != "all":
        filtered = [item for item in filtered if item.kind == query.media_kind]

    if query.date_range:
        cutoff = date_cutoff(query.date_range, now or datetime.now(timezone.utc))
        filtered = [item for item in filtered if item.created_at >= cutoff]

    return filtered
