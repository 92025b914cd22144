"""Quality gates to keep generated SEO copy within acceptable bounds."""
from __future__ import annotations

from dataclasses import dataclass

from .text import (
    DESCRIPTION_MAX_LENGTH,
    DESCRIPTION_MIN_LENGTH,
    TITLE_MAX_LENGTH,
    TITLE_MIN_LENGTH,
    strip_title_suffix,
)


@dataclass
class SeoPayload:
    title: str
    description: str
    canonical: str | None = None


def seo_problems(payload: SeoPayload) -> list[str]:
    """Return a human readable list of guardrail violations for ``payload``."""

    problems: list[str] = []
    title = strip_title_suffix((payload.title or "").strip())
    description = (payload.description or "").strip()
    if not TITLE_MIN_LENGTH <= len(title) <= TITLE_MAX_LENGTH:
        problems.append(
            f"title length {len(title)} outside {TITLE_MIN_LENGTH}-{TITLE_MAX_LENGTH}"
        )
    if not DESCRIPTION_MIN_LENGTH <= len(description) <= DESCRIPTION_MAX_LENGTH:
        problems.append(
            f"description length {len(description)} outside "
            f"{DESCRIPTION_MIN_LENGTH}-{DESCRIPTION_MAX_LENGTH}"
        )
    if payload.canonical is not None and not payload.canonical.startswith("https://"):
        problems.append("canonical URL must be absolute https")
    return problems


def passes_seo(payload: SeoPayload) -> bool:
    """Return True when the payload meets the guardrails for SEO pages."""

    return not seo_problems(payload)
