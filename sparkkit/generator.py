"""Static SEO artifacts (sitemap, robots, RSS) for the SparkKit showcase site."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from html import escape as html_escape
from pathlib import Path
from typing import List, Sequence, Tuple
from urllib.parse import urlsplit

from .config import OUTPUT_DIR, SiteSettings, load_site_settings
from .i18n import Locale, localized_text
from .models import ShowcaseRecord
from .select import sort_by_recency
from .utils import build_pen_url, parse_timestamp

LOGGER = logging.getLogger(__name__)

RSS_ITEM_LIMIT = 100
RSS_TITLE = "SparkKit · CodePen Showcases"

# (path, changefreq, priority)
STATIC_ENTRIES: Tuple[Tuple[str, str, str], ...] = (
    ("/", "daily", "1.0"),
    ("/showcases", "hourly", "0.9"),
    ("/search", "hourly", "0.8"),
    ("/status", "daily", "0.6"),
)
DETAIL_CHANGEFREQ = "hourly"
DETAIL_PRIORITY = "0.8"

ARTIFACTS = ("sitemap.xml", "robots.txt", "rss.xml")


class SiteGenerator:
    def __init__(self, output_dir: Path | str = OUTPUT_DIR, settings: SiteSettings | None = None) -> None:
        self.output_dir = Path(output_dir)
        self.settings = settings or load_site_settings()
        self._sitemap_entries: List[tuple[str, str | None, str, str]] = []

    # ------------------------------------------------------------------
    # Public API

    def build(self, records: Sequence[ShowcaseRecord], now: datetime | None = None) -> List[Path]:
        now = now or datetime.now(timezone.utc)
        LOGGER.info("Writing SEO artifacts for %s showcases to %s", len(records), self.output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self._sitemap_entries = []
        generated = now.astimezone(timezone.utc).isoformat()
        for path, changefreq, priority in STATIC_ENTRIES:
            self._sitemap_entries.append((path, generated, changefreq, priority))
        for record in records:
            self._sitemap_entries.append(
                (
                    record.path,
                    record.updated_at or record.created_at,
                    DETAIL_CHANGEFREQ,
                    DETAIL_PRIORITY,
                )
            )
        self._write_sitemap()
        self._write_robots()
        self._write_rss(records, now)
        return [self.output_dir / name for name in ARTIFACTS]

    # ------------------------------------------------------------------
    # Helpers

    def _abs_url(self, path: str) -> str:
        if path == "/":
            return self.settings.root_url
        return self.settings.absolute_url(path)

    def _safe_write(self, target: Path, content: str) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        LOGGER.debug("Wrote %s", target)

    # ------------------------------------------------------------------
    # Artifacts

    def _write_sitemap(self) -> None:
        entries = [
            "<?xml version=\"1.0\" encoding=\"UTF-8\"?>",
            "<urlset xmlns=\"http://www.sitemaps.org/schemas/sitemap/0.9\">",
        ]
        for path, lastmod, changefreq, priority in self._sitemap_entries:
            entries.append("<url>")
            entries.append(f"<loc>{html_escape(self._abs_url(path))}</loc>")
            if lastmod:
                entries.append(f"<lastmod>{html_escape(lastmod)}</lastmod>")
            entries.append(f"<changefreq>{changefreq}</changefreq>")
            entries.append(f"<priority>{priority}</priority>")
            entries.append("</url>")
        entries.append("</urlset>")
        self._safe_write(self.output_dir / "sitemap.xml", "\n".join(entries) + "\n")

    def _write_robots(self) -> None:
        host = urlsplit(self.settings.base_url).netloc
        content = (
            "User-agent: *\nAllow: /\n"
            f"Disallow: {self.settings.base_path}/status\n"
            f"Sitemap: {self._abs_url('/sitemap.xml')}\n"
            f"Host: {host}\n"
        )
        self._safe_write(self.output_dir / "robots.txt", content)

    def _write_rss(self, records: Sequence[ShowcaseRecord], now: datetime) -> None:
        items: List[str] = []
        for record in sort_by_recency(records)[:RSS_ITEM_LIMIT]:
            title = localized_text(record, "title", Locale.ZH) or f"{record.pen_user}/{record.pen_slug}"
            summary = localized_text(record, "summary", Locale.ZH) or ""
            link = self._abs_url(record.path)
            original = build_pen_url(record.pen_user, record.pen_slug)
            description = f"{summary}\n原作：{original}"
            items.append(
                "<item>"
                f"<title>{_cdata(title)}</title>"
                f"<link>{html_escape(link)}</link>"
                f"<guid isPermaLink=\"false\">{html_escape(record.id)}</guid>"
                f"<pubDate>{_format_rfc2822(record.created_at, now)}</pubDate>"
                f"<description>{_cdata(description)}</description>"
                "</item>"
            )
        rss = (
            "<?xml version=\"1.0\" encoding=\"UTF-8\"?>"
            "<rss version=\"2.0\"><channel>"
            f"<title>{html_escape(RSS_TITLE)}</title>"
            f"<link>{html_escape(self.settings.root_url)}</link>"
            f"<description>{html_escape(self.settings.description)}</description>"
            "<language>zh-CN</language>"
            f"<lastBuildDate>{_format_rfc2822(None, now)}</lastBuildDate>"
            f"{''.join(items)}"
            "</channel></rss>"
        )
        self._safe_write(self.output_dir / "rss.xml", rss)


def _cdata(text: str) -> str:
    return "<![CDATA[" + text.replace("]]>", "]]]]><![CDATA[>") + "]]>"


def _format_rfc2822(iso_date: str | None, now: datetime) -> str:
    parsed = parse_timestamp(iso_date) or now.astimezone(timezone.utc)
    return parsed.strftime("%a, %d %b %Y %H:%M:%S +0000")
