"""Data models for curated showcases."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .utils import detail_path, timestamp

TEXT_FIELDS: Tuple[str, ...] = (
    "author_name",
    "author_url",
    "thumbnail_url",
    "oembed_html",
    "stack",
    "difficulty",
    "title_zh",
    "title_en",
    "summary_zh",
    "summary_en",
    "headline_zh",
    "headline_en",
    "body_md_zh",
    "body_md_en",
    "perf_notes_zh",
    "perf_notes_en",
    "created_at",
    "updated_at",
)

LIST_FIELDS: Tuple[str, ...] = (
    "tags",
    "key_points_zh",
    "key_points_en",
    "reuse_steps_zh",
    "reuse_steps_en",
)

SORT_ORDERS = ("latest", "oldest")


def _optional_text(value: object) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return str(value)


def _optional_list(value: object) -> Optional[List[str]]:
    if not isinstance(value, (list, tuple)):
        return None
    return [str(item) for item in value if item is not None]


@dataclass
class ShowcaseRecord:
    """One curated front-end demo with bilingual editorial commentary."""

    id: str
    pen_user: str
    pen_slug: str
    author_name: Optional[str] = None
    author_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    oembed_html: Optional[str] = None
    stack: Optional[str] = None
    tags: Optional[List[str]] = None
    difficulty: Optional[str] = None
    title_zh: Optional[str] = None
    title_en: Optional[str] = None
    summary_zh: Optional[str] = None
    summary_en: Optional[str] = None
    headline_zh: Optional[str] = None
    headline_en: Optional[str] = None
    key_points_zh: Optional[List[str]] = None
    key_points_en: Optional[List[str]] = None
    body_md_zh: Optional[str] = None
    body_md_en: Optional[str] = None
    reuse_steps_zh: Optional[List[str]] = None
    reuse_steps_en: Optional[List[str]] = None
    perf_notes_zh: Optional[str] = None
    perf_notes_en: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def key(self) -> tuple[str, str]:
        return (self.pen_user, self.pen_slug)

    @property
    def path(self) -> str:
        return detail_path(self.pen_user, self.pen_slug)

    def to_dict(self) -> dict:
        payload: dict = {
            "id": self.id,
            "pen_user": self.pen_user,
            "pen_slug": self.pen_slug,
        }
        for name in TEXT_FIELDS:
            payload[name] = getattr(self, name)
        for name in LIST_FIELDS:
            value = getattr(self, name)
            payload[name] = list(value) if value is not None else None
        return payload

    @classmethod
    def from_dict(cls, payload: dict) -> "ShowcaseRecord":
        identity = {}
        for name in ("id", "pen_user", "pen_slug"):
            raw = payload[name]
            value = str(raw).strip() if raw is not None else ""
            if not value:
                raise ValueError(f"Showcase payload has a blank {name}")
            identity[name] = value
        kwargs = {name: _optional_text(payload.get(name)) for name in TEXT_FIELDS}
        kwargs.update({name: _optional_list(payload.get(name)) for name in LIST_FIELDS})
        return cls(**identity, **kwargs)


@dataclass
class ShowcaseFilters:
    """Criteria for listing and search pages."""

    query: Optional[str] = None
    tags: Optional[List[str]] = None
    stack: Optional[str] = None
    difficulty: Optional[str] = None
    order: str = "latest"
    offset: Optional[int] = None
    limit: Optional[int] = None

    def __post_init__(self) -> None:
        if self.order not in SORT_ORDERS:
            raise ValueError(f"Unsupported sort order: {self.order!r}")


@dataclass
class SyncStatus:
    """Snapshot of the ingestion job reported on the status page."""

    version: str
    last_synced_at: str = field(default_factory=timestamp)
    total_indexed: int = 0
    cache_hit_rate: Optional[float] = None

    @classmethod
    def from_dict(cls, payload: dict) -> "SyncStatus":
        hit_rate = payload.get("cache_hit_rate")
        total = payload.get("total_indexed")
        return cls(
            version=str(payload.get("version") or "0.0.0"),
            last_synced_at=str(payload.get("last_synced_at") or timestamp()),
            total_indexed=int(total) if isinstance(total, (int, float)) else 0,
            cache_hit_rate=float(hit_rate) if isinstance(hit_rate, (int, float)) else None,
        )


@dataclass
class FilterOptions:
    """Distinct values available to the listing filters."""

    tags: List[str]
    stacks: List[str]
    difficulties: List[str]


def collect_filter_options(records: List[ShowcaseRecord]) -> FilterOptions:
    """Return the sorted distinct tags, stacks and difficulties in ``records``."""

    tags: set[str] = set()
    stacks: set[str] = set()
    difficulties: set[str] = set()
    for record in records:
        tags.update(tag for tag in record.tags or [] if tag)
        if record.stack:
            stacks.add(record.stack)
        if record.difficulty:
            difficulties.add(record.difficulty)
    return FilterOptions(
        tags=sorted(tags),
        stacks=sorted(stacks),
        difficulties=sorted(difficulties),
    )
