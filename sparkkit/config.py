"""Configuration helpers for the SparkKit showcase site."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .utils import env_int, normalize_base_path, normalize_url

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent.parent
DATA_DIR = BASE_DIR / "data"
OUTPUT_DIR = BASE_DIR / "public"

DEFAULT_SITE_URL = "https://spark.vincentke.cc"
DEFAULT_SITE_NAME = "灵点集 · SparkKit"
DEFAULT_SITE_DESCRIPTION = "最新的 CodePen 灵感作品，来自 SparkKit 的双语解读。"
DEFAULT_TWITTER_HANDLE = "@sparkkit"

DEFAULT_TABLES: Tuple[str, ...] = ("frontend_showcase", "codepen_showcases")
DEFAULT_STATUS_VIEW = "showcase_sync_status"
DEFAULT_HTTP_TIMEOUT = 10

FEATURED_COUNT_PER_TIER = 3
DAILY_REFRESH_HOUR = 8  # 08:00 Beijing time
CYCLE_TIMEZONE = "Asia/Shanghai"


def _env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None:
        return default
    value = value.strip()
    return value or default


@dataclass(frozen=True)
class SiteSettings:
    """Public site settings used for canonical URLs and SEO artifacts."""

    name: str = DEFAULT_SITE_NAME
    base_url: str = DEFAULT_SITE_URL
    base_path: str = ""
    description: str = DEFAULT_SITE_DESCRIPTION
    default_locale: str | None = None
    twitter_handle: str | None = DEFAULT_TWITTER_HANDLE

    @property
    def root_url(self) -> str:
        return f"{self.base_url}{self.base_path}"

    def absolute_url(self, path: str | None = None) -> str:
        if not path:
            return self.root_url
        if path.startswith(("http://", "https://")):
            return path
        normalized = path if path.startswith("/") else f"/{path}"
        return f"{self.root_url}{normalized}"

    @property
    def og_image_url(self) -> str:
        return self.absolute_url("/og-cover.png")


@dataclass(frozen=True)
class SourceSettings:
    """Connection settings for the hosted showcase database."""

    supabase_url: str | None = None
    supabase_anon_key: str | None = None
    table_candidates: Tuple[str, ...] = DEFAULT_TABLES
    status_view: str = DEFAULT_STATUS_VIEW
    timeout: int = DEFAULT_HTTP_TIMEOUT
    fallback_file: Path | None = None

    @property
    def enabled(self) -> bool:
        return bool(self.supabase_url and self.supabase_anon_key)


@dataclass(frozen=True)
class FeaturedSettings:
    """Knobs for the daily featured rotation."""

    per_tier: int = FEATURED_COUNT_PER_TIER
    refresh_hour: int = DAILY_REFRESH_HOUR
    timezone: str = CYCLE_TIMEZONE

    @property
    def total(self) -> int:
        return self.per_tier * 2


def load_site_settings() -> SiteSettings:
    base_url = normalize_url(_env("SPARKKIT_SITE_URL")) or DEFAULT_SITE_URL
    return SiteSettings(
        name=_env("SPARKKIT_SITE_NAME", DEFAULT_SITE_NAME) or DEFAULT_SITE_NAME,
        base_url=base_url,
        base_path=normalize_base_path(_env("SPARKKIT_BASE_PATH")),
        description=_env("SPARKKIT_SITE_DESCRIPTION", DEFAULT_SITE_DESCRIPTION)
        or DEFAULT_SITE_DESCRIPTION,
        default_locale=_env("SPARKKIT_DEFAULT_LOCALE"),
        twitter_handle=_env("SPARKKIT_TWITTER_HANDLE", DEFAULT_TWITTER_HANDLE),
    )


def _table_candidates() -> Tuple[str, ...]:
    candidates: list[str] = []
    for value in (_env("SUPABASE_TABLE"), *DEFAULT_TABLES):
        if value and value not in candidates:
            candidates.append(value)
    return tuple(candidates)


def load_source_settings() -> SourceSettings:
    fallback_raw = _env("SPARKKIT_FALLBACK_FILE")
    return SourceSettings(
        supabase_url=normalize_url(_env("SUPABASE_URL")),
        supabase_anon_key=_env("SUPABASE_ANON_KEY"),
        table_candidates=_table_candidates(),
        status_view=_env("SUPABASE_STATUS_VIEW", DEFAULT_STATUS_VIEW) or DEFAULT_STATUS_VIEW,
        timeout=max(1, env_int("SPARKKIT_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT)),
        fallback_file=Path(fallback_raw) if fallback_raw else None,
    )


def load_featured_settings() -> FeaturedSettings:
    per_tier = env_int("SPARKKIT_FEATURED_PER_TIER", FEATURED_COUNT_PER_TIER)
    refresh_hour = env_int("SPARKKIT_REFRESH_HOUR", DAILY_REFRESH_HOUR)
    if per_tier < 1:
        logger.warning("SPARKKIT_FEATURED_PER_TIER must be positive; using %s", FEATURED_COUNT_PER_TIER)
        per_tier = FEATURED_COUNT_PER_TIER
    if not 0 <= refresh_hour <= 23:
        logger.warning("SPARKKIT_REFRESH_HOUR must be between 0 and 23; using %s", DAILY_REFRESH_HOUR)
        refresh_hour = DAILY_REFRESH_HOUR
    zone = _env("SPARKKIT_CYCLE_TIMEZONE", CYCLE_TIMEZONE) or CYCLE_TIMEZONE
    try:
        ZoneInfo(zone)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("SPARKKIT_CYCLE_TIMEZONE=%r is not a known time zone; using %s", zone, CYCLE_TIMEZONE)
        zone = CYCLE_TIMEZONE
    return FeaturedSettings(per_tier=per_tier, refresh_hour=refresh_hour, timezone=zone)


def ensure_directories() -> None:
    """Create the default data and output directories if missing."""

    DATA_DIR.mkdir(parents=True, exist_ok=True)
    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
