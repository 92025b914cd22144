"""Recency ordering and the listing/search filter pipeline."""
from __future__ import annotations

from typing import Iterable, List, Sequence

from .models import ShowcaseFilters, ShowcaseRecord
from .utils import parse_timestamp

SEARCH_FIELDS = (
    "title_en",
    "title_zh",
    "summary_en",
    "summary_zh",
    "body_md_en",
    "body_md_zh",
)


def recency_timestamp(record: ShowcaseRecord) -> float:
    """Return the later of ``created_at``/``updated_at`` as POSIX seconds.

    Missing or unparsable timestamps count as ``0.0`` so they sort as oldest.
    """

    values = [0.0]
    for raw in (record.created_at, record.updated_at):
        parsed = parse_timestamp(raw)
        if parsed is not None:
            values.append(parsed.timestamp())
    return max(values)


def sort_by_recency(
    records: Iterable[ShowcaseRecord], order: str = "latest"
) -> List[ShowcaseRecord]:
    """Return a new list ordered by recency; ties keep their input order."""

    return sorted(records, key=recency_timestamp, reverse=order != "oldest")


def _search_bucket(record: ShowcaseRecord) -> str:
    values = [getattr(record, name) for name in SEARCH_FIELDS]
    return " ".join(value for value in values if value).lower()


def _matches_query(record: ShowcaseRecord, query: str) -> bool:
    return query in _search_bucket(record)


def _matches_tags(record: ShowcaseRecord, tags: set[str]) -> bool:
    record_tags = {tag.lower() for tag in record.tags or []}
    return bool(record_tags & tags)


def _matches_exact(value: str | None, expected: str) -> bool:
    return (value or "").lower() == expected.lower()


def apply_filters(
    records: Sequence[ShowcaseRecord], filters: ShowcaseFilters | None = None
) -> List[ShowcaseRecord]:
    """Sort, filter and paginate ``records`` in memory.

    Mirrors the remote query: recency order, keyword, tag overlap, stack,
    difficulty and finally the ``offset``/``limit`` window.
    """

    filters = filters or ShowcaseFilters()
    results = sort_by_recency(records, filters.order)

    query = (filters.query or "").strip().lower()
    if query:
        results = [record for record in results if _matches_query(record, query)]

    if filters.tags:
        wanted = {tag.lower() for tag in filters.tags}
        results = [record for record in results if _matches_tags(record, wanted)]

    if filters.stack:
        results = [record for record in results if _matches_exact(record.stack, filters.stack)]

    if filters.difficulty:
        results = [
            record
            for record in results
            if _matches_exact(record.difficulty, filters.difficulty)
        ]

    start = max(filters.offset or 0, 0)
    if filters.limit is None:
        return results[start:]
    return results[start : start + max(filters.limit, 0)]
