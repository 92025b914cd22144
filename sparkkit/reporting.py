"""Reporting helpers for summarizing showcase catalog health and sync status."""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Sequence

from .config import FeaturedSettings
from .featured import cycle_key, select_daily_featured
from .models import ShowcaseRecord, SyncStatus
from .select import recency_timestamp


@dataclass
class CatalogStats:
    """Aggregate metrics describing the current showcase collection."""

    total_showcases: int
    difficulties: list[tuple[str, int]]
    stacks: list[tuple[str, int]]
    top_tags: list[tuple[str, int]]
    missing_zh_titles: int
    missing_en_titles: int
    latest_touched_at: str | None


def _ranked(counter: Counter[str]) -> list[tuple[str, int]]:
    return sorted(counter.items(), key=lambda item: (-item[1], item[0]))


def summarize_catalog(records: Sequence[ShowcaseRecord], *, top_tags: int = 5) -> CatalogStats:
    """Compute aggregate statistics for the provided showcases."""

    difficulty_counter: Counter[str] = Counter()
    stack_counter: Counter[str] = Counter()
    tag_counter: Counter[str] = Counter()
    missing_zh = 0
    missing_en = 0
    latest: float = 0.0

    for record in records:
        difficulty = (record.difficulty or "").strip().lower() or "unknown"
        difficulty_counter[difficulty] += 1
        stack = (record.stack or "").strip() or "unknown"
        stack_counter[stack] += 1
        for tag in record.tags or []:
            if tag:
                tag_counter[tag.lower()] += 1
        if not (record.title_zh or "").strip():
            missing_zh += 1
        if not (record.title_en or "").strip():
            missing_en += 1
        latest = max(latest, recency_timestamp(record))

    tag_limit = max(top_tags, 0)
    latest_text = (
        datetime.fromtimestamp(latest, tz=timezone.utc).isoformat() if latest > 0 else None
    )
    return CatalogStats(
        total_showcases=len(records),
        difficulties=_ranked(difficulty_counter),
        stacks=_ranked(stack_counter),
        top_tags=_ranked(tag_counter)[:tag_limit] if tag_limit else [],
        missing_zh_titles=missing_zh,
        missing_en_titles=missing_en,
        latest_touched_at=latest_text,
    )


def generate_status_report(
    *,
    records: Sequence[ShowcaseRecord],
    status: SyncStatus,
    top_tags: int = 5,
    now: datetime | None = None,
    featured: FeaturedSettings | None = None,
) -> str:
    """Return a formatted report summarizing the catalog and today's rotation."""

    featured = featured or FeaturedSettings()
    reference = now or datetime.now(timezone.utc)
    stats = summarize_catalog(records, top_tags=top_tags)

    lines: list[str] = ["Catalog Summary"]
    if stats.total_showcases == 0:
        lines.append("  No showcases available.")
    else:
        lines.append(f"  Total showcases: {stats.total_showcases}")
        lines.append(
            "  Difficulties: "
            + ", ".join(f"{name} ({count})" for name, count in stats.difficulties)
        )
        lines.append(
            "  Stacks: " + ", ".join(f"{name} ({count})" for name, count in stats.stacks)
        )
        if stats.top_tags:
            lines.append(
                "  Top tags: " + ", ".join(f"{name} ({count})" for name, count in stats.top_tags)
            )
        lines.append(f"  Missing zh titles: {stats.missing_zh_titles}")
        lines.append(f"  Missing en titles: {stats.missing_en_titles}")
        if stats.latest_touched_at:
            lines.append(f"  Most recent update: {stats.latest_touched_at}")

    lines.append("")
    lines.append("Sync Status")
    lines.append(f"  Version: {status.version}")
    lines.append(f"  Last synced: {status.last_synced_at}")
    lines.append(f"  Indexed showcases: {status.total_indexed}")
    if status.cache_hit_rate is not None:
        lines.append(f"  Cache hit rate: {status.cache_hit_rate:.0%}")

    lines.append("")
    lines.append("Daily Featured")
    key = cycle_key(reference, refresh_hour=featured.refresh_hour, tz=featured.timezone)
    lines.append(f"  Cycle: {key}")
    picks = select_daily_featured(records, reference, settings=featured)
    if not picks:
        lines.append("  Nothing to feature yet.")
    for record in picks:
        label = record.difficulty or "unrated"
        lines.append(f"  - {record.pen_user}/{record.pen_slug} [{label}]")

    return "\n".join(lines)
