"""Deterministic daily rotation of the home page "featured" showcases.

The selection is a pure function of the collection and the curation day. The
day (the *cycle key*) is the calendar date in the cycle time zone, rolled back
by one day before the refresh hour, so every request between two refreshes
sees the same picks. The cycle key seeds a Park-Miller generator that drives
tiered sampling (advanced first, then intermediate, then any remaining record)
and a final Fisher-Yates shuffle.

The hash, the generator constants and the draw order are fixed: every
deployment must agree on the same day's selection.
"""
from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone
from typing import List, Sequence
from zoneinfo import ZoneInfo

from .config import CYCLE_TIMEZONE, DAILY_REFRESH_HOUR, FeaturedSettings
from .models import ShowcaseRecord

LEHMER_MODULUS = 2147483647
LEHMER_MULTIPLIER = 16807

ADVANCED = "advanced"
INTERMEDIATE = "intermediate"


def cycle_key(
    reference: datetime,
    *,
    refresh_hour: int = DAILY_REFRESH_HOUR,
    tz: str = CYCLE_TIMEZONE,
) -> str:
    """Return the ``YYYY-MM-DD`` curation day that ``reference`` falls in."""

    if reference.tzinfo is None:
        reference = reference.replace(tzinfo=timezone.utc)
    local = reference.astimezone(ZoneInfo(tz))
    day = local.date()
    if local.hour < refresh_hour:
        day = day - timedelta(days=1)
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def hash_string(text: str) -> int:
    """Polynomial rolling hash over UTF-16 code units with 32-bit wraparound.

    Returns ``abs(hash) + 1`` so the result is always a positive seed.
    """

    value = 0
    encoded = text.encode("utf-16-le")
    for index in range(0, len(encoded), 2):
        unit = encoded[index] | (encoded[index + 1] << 8)
        value = (value * 31 + unit) & 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return abs(value) + 1


class SeededRandom:
    """Lehmer / Park-Miller minimal standard generator yielding floats in [0, 1)."""

    def __init__(self, seed: int) -> None:
        state = abs(seed) % LEHMER_MODULUS
        if seed < 0:
            state = -state
        if state <= 0:
            state += LEHMER_MODULUS - 1
        self.state = state

    def random(self) -> float:
        self.state = (self.state * LEHMER_MULTIPLIER) % LEHMER_MODULUS
        return (self.state - 1) / (LEHMER_MODULUS - 1)

    def index(self, size: int) -> int:
        return math.floor(self.random() * size)


def _normalize_difficulty(value: str | None) -> str:
    return (value or "").strip().lower()


def _draw(
    pool: Sequence[ShowcaseRecord],
    count: int,
    *,
    rng: SeededRandom,
    used: set[str],
    selections: List[ShowcaseRecord],
    capacity: int,
) -> None:
    candidates = [record for record in pool if record.id not in used]
    while candidates and len(selections) < capacity and count > 0:
        chosen = candidates.pop(rng.index(len(candidates)))
        used.add(chosen.id)
        selections.append(chosen)
        count -= 1


def _shuffle(items: List[ShowcaseRecord], rng: SeededRandom) -> List[ShowcaseRecord]:
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.index(i + 1)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def select_daily_featured(
    records: Sequence[ShowcaseRecord],
    reference: datetime | None = None,
    *,
    settings: FeaturedSettings | None = None,
) -> List[ShowcaseRecord]:
    """Return the featured showcases for the curation day containing ``reference``."""

    settings = settings or FeaturedSettings()
    capacity = settings.total
    if len(records) <= capacity:
        return list(records)[:capacity]

    reference = reference or datetime.now(timezone.utc)
    key = cycle_key(reference, refresh_hour=settings.refresh_hour, tz=settings.timezone)
    rng = SeededRandom(hash_string(key))
    used: set[str] = set()
    selections: List[ShowcaseRecord] = []

    advanced = [r for r in records if _normalize_difficulty(r.difficulty) == ADVANCED]
    intermediate = [r for r in records if _normalize_difficulty(r.difficulty) == INTERMEDIATE]

    for pool in (advanced, intermediate):
        _draw(
            pool,
            settings.per_tier,
            rng=rng,
            used=used,
            selections=selections,
            capacity=capacity,
        )

    if len(selections) < capacity:
        _draw(
            records,
            capacity - len(selections),
            rng=rng,
            used=used,
            selections=selections,
            capacity=capacity,
        )

    return _shuffle(selections, rng)[:capacity]
