"""General utility helpers."""
from __future__ import annotations

import json
import logging
import os
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)

CODEPEN_BASE_URL = "https://codepen.io"

_WHITESPACE = re.compile(r"\s+")
_FRACTION = re.compile(r"(?<=\d\d:\d\d:\d\d)\.(\d+)")


def collapse_whitespace(value: str | None) -> str:
    """Collapse whitespace runs to single spaces and trim the result."""

    return _WHITESPACE.sub(" ", value or "").strip()


def load_json(path: Path, default: Dict[str, Any] | list | None = None) -> Any:
    """Load a JSON file returning a default value if it does not exist."""

    if not path.exists():
        return default if default is not None else {}
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def dump_json(path: Path, data: Any) -> None:
    """Persist JSON data to disk, ensuring the parent folder exists."""

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def timestamp() -> str:
    """Return an ISO-8601 timestamp in UTC."""

    return datetime.now(timezone.utc).isoformat()


def parse_timestamp(value: object) -> datetime | None:
    """Parse an ISO-8601 string into an aware UTC datetime.

    Returns ``None`` for absent or unparsable values. Naive values are assumed
    to be UTC and a trailing ``Z`` designator is accepted.
    """

    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    # PostgREST trims trailing zeros from fractions; Python 3.10 wants 3 or 6 digits.
    text = _FRACTION.sub(lambda match: "." + match.group(1)[:6].ljust(6, "0"), text, count=1)
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def env_int(name: str, default: int) -> int:
    """Parse an integer environment variable, keeping ``default`` on bad input."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value.strip())
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r; using %s", name, value, default)
        return default


def normalize_url(value: str | None) -> str | None:
    """Return an absolute http(s) URL without a trailing slash, or ``None``."""

    if not value:
        return None
    trimmed = value.strip()
    if not trimmed:
        return None
    try:
        parsed = urlsplit(trimmed)
    except ValueError:
        return None
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        return None
    return trimmed.rstrip("/")


def normalize_base_path(value: str | None) -> str:
    """Normalise a deployment base path to ``""`` or ``/segment``."""

    if not value:
        return ""
    trimmed = value.strip().strip("/")
    if not trimmed:
        return ""
    return f"/{trimmed}"


def build_pen_url(pen_user: str, pen_slug: str) -> str:
    """Return the original CodePen URL for a showcase."""

    return f"{CODEPEN_BASE_URL}/{pen_user}/pen/{pen_slug}"


def detail_path(pen_user: str, pen_slug: str) -> str:
    """Return the site-relative detail page path for a showcase."""

    return f"/p/{pen_user}/{pen_slug}"
