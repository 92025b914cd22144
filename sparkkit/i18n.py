"""Locale resolution and bilingual field selection."""
from __future__ import annotations

from enum import Enum
from typing import Dict, List, Tuple

from .models import ShowcaseRecord
from .utils import parse_timestamp


class Locale(str, Enum):
    """The two locales the site is published in."""

    ZH = "zh"
    EN = "en"

    @property
    def other(self) -> "Locale":
        return Locale.EN if self is Locale.ZH else Locale.ZH


DEFAULT_LOCALE = Locale.EN

TEXT_FIELD_MAP: Dict[str, Tuple[str, str]] = {
    "title": ("title_zh", "title_en"),
    "summary": ("summary_zh", "summary_en"),
    "headline": ("headline_zh", "headline_en"),
    "body": ("body_md_zh", "body_md_en"),
    "perf": ("perf_notes_zh", "perf_notes_en"),
}

LIST_FIELD_MAP: Dict[str, Tuple[str, str]] = {
    "key_points": ("key_points_zh", "key_points_en"),
    "reuse_steps": ("reuse_steps_zh", "reuse_steps_en"),
}

_EN_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def resolve_locale(signal: str | None) -> Locale:
    """Map an ``Accept-Language`` style value onto a supported locale.

    Any mention of ``zh`` wins, an ``en`` prefix resolves to English and
    everything else (including ``None``) falls back to :data:`DEFAULT_LOCALE`.
    """

    if not signal:
        return DEFAULT_LOCALE
    normalized = signal.lower()
    if "zh" in normalized:
        return Locale.ZH
    if normalized.strip().startswith("en"):
        return Locale.EN
    return DEFAULT_LOCALE


def normalize_language(signal: str | None) -> Locale | None:
    """Strict variant of :func:`resolve_locale` that reports no match as ``None``."""

    if not signal:
        return None
    normalized = signal.strip().lower()
    if normalized.startswith("zh"):
        return Locale.ZH
    if normalized.startswith("en"):
        return Locale.EN
    return None


def default_locale(configured: str | None = None) -> Locale:
    return normalize_language(configured) or DEFAULT_LOCALE


def _pick(record: ShowcaseRecord, names: Tuple[str, str], preferred: Locale) -> Tuple[object, object]:
    zh_name, en_name = names
    zh_value = getattr(record, zh_name)
    en_value = getattr(record, en_name)
    if preferred is Locale.ZH:
        return zh_value, en_value
    return en_value, zh_value


def _text_or_none(value: object) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _list_or_none(value: object) -> List[str] | None:
    if isinstance(value, (list, tuple)) and len(value) > 0:
        return list(value)
    return None


def localized_text(
    record: ShowcaseRecord,
    field: str,
    preferred: Locale = DEFAULT_LOCALE,
) -> str | None:
    """Return the preferred-locale text for ``field`` with cross-locale fallback."""

    first, second = _pick(record, TEXT_FIELD_MAP[field], preferred)
    chosen = _text_or_none(first)
    if chosen is None:
        chosen = _text_or_none(second)
    return chosen


def localized_list(
    record: ShowcaseRecord,
    field: str,
    preferred: Locale = DEFAULT_LOCALE,
) -> List[str]:
    """Return the preferred-locale list for ``field``; empty when neither is set."""

    first, second = _pick(record, LIST_FIELD_MAP[field], preferred)
    chosen = _list_or_none(first)
    if chosen is None:
        chosen = _list_or_none(second)
    return chosen or []


def format_date_readable(value: str | None, locale: Locale = DEFAULT_LOCALE) -> str | None:
    """Format an ISO timestamp for display, or ``None`` when it cannot be parsed."""

    parsed = parse_timestamp(value)
    if parsed is None:
        return None
    if locale is Locale.ZH:
        return f"{parsed.year}年{parsed.month:02d}月{parsed.day:02d}日"
    return f"{_EN_MONTHS[parsed.month - 1]} {parsed.day:02d}, {parsed.year}"
