"""Regenerate sitemap.xml, robots.txt and rss.xml from the current showcases."""
from __future__ import annotations

import logging
from pathlib import Path

from sparkkit.config import OUTPUT_DIR, load_site_settings
from sparkkit.generator import SiteGenerator
from sparkkit.meta import detail_metadata
from sparkkit.quality import SeoPayload, passes_seo
from sparkkit.repository import ShowcaseRepository

logger = logging.getLogger(__name__)


def build_seo(output_dir: Path = OUTPUT_DIR) -> list[Path]:
    """Write the SEO artifacts, warning about detail pages that miss the length windows."""

    settings = load_site_settings()
    records = ShowcaseRepository().fetch_showcases()
    for record in records:
        meta = detail_metadata(record, settings)
        payload = SeoPayload(title=meta.title, description=meta.description, canonical=meta.canonical)
        if not passes_seo(payload):
            logger.warning("SEO quality gate failed for %s", record.path)
    return SiteGenerator(output_dir=output_dir, settings=settings).build(records)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    build_seo()
