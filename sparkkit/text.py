"""Helpers that keep SEO titles and descriptions inside their length windows.

Lengths are counted in code points (Python ``str`` semantics), which matters
for CJK copy where UTF-16 or byte counts would over-report.
"""
from __future__ import annotations

from .utils import collapse_whitespace

TITLE_MIN_LENGTH = 24
TITLE_MAX_LENGTH = 34
TITLE_FILLER = " 精选拆解"
TITLE_DEFAULT = "SparkKit 精选灵感导航"
TITLE_SUFFIX = " · SparkKit · spark.vincentke.cc"
DETAIL_TITLE_TAIL = " 解读与复用要点全指南"

DESCRIPTION_MIN_LENGTH = 150
DESCRIPTION_MAX_LENGTH = 160
DESCRIPTION_FILLER = " 欢迎收藏 SparkKit，获取每日灵感更新。"
DESCRIPTION_DEFAULT = (
    "SparkKit 提供 CodePen 灵感的亮点拆解、复用步骤与性能提示，"
    "帮助团队快速应用前端创意并保持展示站点持续更新。"
)


def ensure_range(
    value: str | None,
    minimum: int,
    maximum: int,
    filler: str,
    default: str,
) -> str:
    """Return ``value`` padded with ``filler`` or truncated into ``[minimum, maximum]``."""

    output = collapse_whitespace(value)
    if not output:
        output = collapse_whitespace(default)
    if len(output) > maximum:
        return output[:maximum]
    if not filler:
        return output
    while len(output) < minimum:
        output = f"{output}{filler}"
    return output[:maximum]


def normalize_title(raw: str | None) -> str:
    return ensure_range(raw, TITLE_MIN_LENGTH, TITLE_MAX_LENGTH, TITLE_FILLER, TITLE_DEFAULT)


def normalize_description(raw: str | None) -> str:
    return ensure_range(
        raw,
        DESCRIPTION_MIN_LENGTH,
        DESCRIPTION_MAX_LENGTH,
        DESCRIPTION_FILLER,
        DESCRIPTION_DEFAULT,
    )


def compose_title(main: str | None) -> str:
    """Normalise the page title and append the brand suffix."""

    return f"{normalize_title(main)}{TITLE_SUFFIX}"


def compose_detail_title(raw_title: str) -> str:
    base = f"{collapse_whitespace(raw_title)}{DETAIL_TITLE_TAIL}"
    return compose_title(base)


def strip_title_suffix(title: str) -> str:
    if title.endswith(TITLE_SUFFIX):
        return title[: -len(TITLE_SUFFIX)]
    return title
