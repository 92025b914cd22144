"""Command line entrypoints for the SparkKit showcase engine."""
from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from .config import OUTPUT_DIR, load_featured_settings, load_site_settings
from .generator import ARTIFACTS, SiteGenerator
from .i18n import Locale, default_locale, localized_text
from .meta import (
    PageMetadata,
    detail_metadata,
    home_metadata,
    list_metadata,
    search_metadata,
    status_metadata,
)
from .models import SORT_ORDERS, ShowcaseFilters, ShowcaseRecord
from .quality import SeoPayload, seo_problems
from .reporting import generate_status_report
from .repository import ShowcaseRepository
from .utils import parse_timestamp

LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="SparkKit showcase commands")
    subparsers = parser.add_subparsers(dest="command", required=True)

    featured_parser = subparsers.add_parser(
        "featured", help="Show the daily featured showcases"
    )
    featured_parser.add_argument(
        "--at",
        default=None,
        help="ISO-8601 instant to compute the rotation for (defaults to now)",
    )
    featured_parser.add_argument(
        "--json",
        action="store_true",
        help="Emit raw JSON instead of a table",
    )
    featured_parser.set_defaults(func=handle_featured)

    search_parser = subparsers.add_parser("search", help="List showcases matching filters")
    search_parser.add_argument("--query", default=None, help="Keyword matched against titles, summaries and bodies")
    search_parser.add_argument(
        "--tag",
        dest="tags",
        action="append",
        default=None,
        help="Tag to match (repeatable, any tag matches)",
    )
    search_parser.add_argument("--stack", default=None, help="Stack to match exactly")
    search_parser.add_argument("--difficulty", default=None, help="Difficulty to match exactly")
    search_parser.add_argument(
        "--order",
        choices=SORT_ORDERS,
        default="latest",
        help="Recency order of the results",
    )
    search_parser.add_argument("--offset", type=int, default=0, help="Number of results to skip")
    search_parser.add_argument("--limit", type=int, default=20, help="Maximum number of results")
    search_parser.add_argument(
        "--json",
        action="store_true",
        help="Emit raw JSON instead of a table",
    )
    search_parser.set_defaults(func=handle_search)

    artifacts_parser = subparsers.add_parser("build", help="Write sitemap, robots and RSS artifacts")
    artifacts_parser.add_argument(
        "--output",
        type=Path,
        default=OUTPUT_DIR,
        help="Output directory for the generated artifacts",
    )
    artifacts_parser.set_defaults(func=handle_build)

    check_parser = subparsers.add_parser("check", help="Validate artifacts and page metadata before deploy")
    check_parser.add_argument(
        "--output",
        type=Path,
        default=OUTPUT_DIR,
        help="Output directory that should contain the generated artifacts",
    )
    check_parser.set_defaults(func=handle_check)

    stats_parser = subparsers.add_parser(
        "stats", help="Summarize the catalog, sync status and today's rotation"
    )
    stats_parser.add_argument(
        "--top-tags",
        type=int,
        default=5,
        help="Number of top tags to display",
    )
    stats_parser.set_defaults(func=handle_stats)

    return parser


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def _truncate(value: object, width: int) -> str:
    text = str(value or "")
    if len(text) <= width:
        return text.ljust(width)
    if width <= 1:
        return text[:width]
    return (text[: width - 1].rstrip() + "…").ljust(width)


def _display_locale() -> Locale:
    return default_locale(load_site_settings().default_locale)


def _print_records(records: list[ShowcaseRecord], as_json: bool, locale: Locale = Locale.ZH) -> None:
    if as_json:
        print(json.dumps([record.to_dict() for record in records], indent=2, ensure_ascii=False))
        return
    if not records:
        print("No showcases found.")
        return
    header = (
        f"{_truncate('Pen', 32)} {_truncate('Title', 40)} "
        f"{_truncate('Difficulty', 14)} {_truncate('Stack', 10)} Updated"
    )
    print(header)
    print("-" * len(header))
    for record in records:
        title = localized_text(record, "title", locale) or ""
        print(
            f"{_truncate(f'{record.pen_user}/{record.pen_slug}', 32)} "
            f"{_truncate(title, 40)} "
            f"{_truncate(record.difficulty, 14)} {_truncate(record.stack, 10)} "
            f"{record.updated_at or record.created_at or ''}"
        )


def handle_featured(args: argparse.Namespace) -> None:
    reference = None
    if args.at:
        reference = parse_timestamp(args.at)
        if reference is None:
            raise SystemExit("--at must be an ISO-8601 timestamp")
    repository = ShowcaseRepository()
    picks = repository.fetch_daily_featured(reference, settings=load_featured_settings())
    _print_records(picks, args.json, _display_locale())


def handle_search(args: argparse.Namespace) -> None:
    if args.offset < 0:
        raise SystemExit("--offset cannot be negative")
    if args.limit < 1:
        raise SystemExit("--limit must be positive")
    filters = ShowcaseFilters(
        query=args.query,
        tags=args.tags,
        stack=args.stack,
        difficulty=args.difficulty,
        order=args.order,
        offset=args.offset,
        limit=args.limit,
    )
    repository = ShowcaseRepository()
    _print_records(repository.fetch_showcases(filters), args.json, _display_locale())


def handle_build(args: argparse.Namespace) -> None:
    repository = ShowcaseRepository()
    records = repository.fetch_showcases()
    generator = SiteGenerator(output_dir=args.output, settings=load_site_settings())
    generator.build(records)
    LOGGER.info("Generated SEO artifacts for %s showcases", len(records))


def _metadata_problems(name: str, meta: PageMetadata) -> list[str]:
    payload = SeoPayload(title=meta.title, description=meta.description, canonical=meta.canonical)
    return [f"{name}: {problem}" for problem in seo_problems(payload)]


def handle_check(args: argparse.Namespace) -> None:
    settings = load_site_settings()
    featured = load_featured_settings()
    repository = ShowcaseRepository()
    records = repository.fetch_showcases()
    errors: list[str] = []
    pages = [
        ("home", home_metadata(settings, featured)),
        ("showcases", list_metadata(settings)),
        ("search", search_metadata(settings)),
        ("status", status_metadata(settings)),
    ]
    pages.extend((record.path, detail_metadata(record, settings)) for record in records)
    for name, meta in pages:
        errors.extend(_metadata_problems(name, meta))
    paths = set()
    for record in records:
        if record.path in paths:
            errors.append(f"Duplicate showcase path detected: {record.path}")
        paths.add(record.path)
    for required in ARTIFACTS:
        if not (args.output / required).exists():
            errors.append(f"Missing {required} in {args.output}")
    if errors:
        for error in errors:
            LOGGER.error(error)
        raise SystemExit(1)
    LOGGER.info("Check passed: %s showcases, %s pages", len(records), len(pages))


def handle_stats(args: argparse.Namespace) -> None:
    if args.top_tags < 0:
        raise SystemExit("--top-tags cannot be negative")

    repository = ShowcaseRepository()
    report = generate_status_report(
        records=repository.fetch_showcases(),
        status=repository.fetch_sync_status(),
        top_tags=args.top_tags,
        featured=load_featured_settings(),
    )
    print(report)


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging()
    args.func(args)


if __name__ == "__main__":
    main()
