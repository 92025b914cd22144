"""Page metadata (canonical, hreflang, Open Graph, Twitter) and structured data."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .config import FeaturedSettings, SiteSettings, load_site_settings
from .i18n import Locale, localized_text
from .models import ShowcaseRecord
from .text import compose_detail_title, compose_title, normalize_description
from .utils import build_pen_url

HOME_TITLE = "每日6条前端灵感随取随用，深度解析即刻复用全指南"
HOME_DESCRIPTION = (
    "每日 {count} 条 CodePen 前端灵感搭配亮点拆解、复用步骤与性能提示，减少探索成本。"
    "支持按标签、技术栈、难度筛选，并提供官方嵌入、站点地图与 RSS 订阅让团队随时掌握最新灵感。"
    "精选案例覆盖动画、交互与数据可视化，帮助你在项目迭代中快速落地创意与复用方案。"
)
LIST_TITLE = "全部作品灵感库每日更新，标签难度随心组合智能检索"
LIST_DESCRIPTION = (
    "按标题、摘要、亮点解读搜索所有 CodePen 灵感，并结合标签、技术栈、难度、发布时间筛选，"
    "快速锁定适合的实验素材。配合站点地图与 RSS 保障索引更新，浏览卡片即可获取作者、复用提示与原链接。"
)
SEARCH_TITLE = "灵感搜索结果实时筛选，助你快速定位复用方向全指南"
SEARCH_DESCRIPTION = (
    "输入关键词即可即时筛选 CodePen 灵感，结合标签、技术栈、难度与发布时间过滤，快速缩小结果范围。"
    "搜索结果保留作者、摘要、复用提示与原链接，方便团队复制链接分享，保障灵感库检索体验稳定可靠。"
)
STATUS_TITLE = "运行状态与更新节奏总览，掌握最新灵感发布节拍指南"
STATUS_DESCRIPTION = (
    "查看 SparkKit 展示站的部署版本、最近同步时间与当前上线作品数量，监控每日 08:00 刷新的精选灵感批次。"
    "记录站点地图与 RSS 生成状态与数据来源，便于团队快速排查更新节奏并保持展示准确。"
)
DETAIL_DESCRIPTION_TAIL = (
    " 包含作者信息、亮点拆解、复用步骤与性能提示，配合官方 CodePen 嵌入帮助团队快速实践，"
    "并支持复制链接分享至协作工具。"
)


@dataclass
class PageMetadata:
    """Everything the page head needs for one route."""

    title: str
    description: str
    canonical: str
    alternates: Dict[str, str]
    open_graph: Dict[str, object]
    twitter: Dict[str, object]
    robots: Optional[Dict[str, bool]] = None
    keywords: List[str] = field(default_factory=list)


def hreflang_alternates(canonical: str) -> Dict[str, str]:
    return {
        "zh-CN": canonical,
        "en-US": f"{canonical}?hl=en",
        "x-default": canonical,
    }


def _shared_meta(
    *,
    title: str,
    description: str,
    canonical: str,
    settings: SiteSettings,
    page_type: str = "website",
    image: str | None = None,
    robots: Optional[Dict[str, bool]] = None,
) -> PageMetadata:
    og_image = image or settings.og_image_url
    twitter: Dict[str, object] = {
        "card": "summary_large_image",
        "title": title,
        "description": description,
        "images": [og_image],
    }
    if settings.twitter_handle:
        twitter["site"] = settings.twitter_handle
    return PageMetadata(
        title=title,
        description=description,
        canonical=canonical,
        alternates=hreflang_alternates(canonical),
        open_graph={
            "type": page_type,
            "url": canonical,
            "title": title,
            "description": description,
            "images": [{"url": og_image, "width": 1200, "height": 630, "alt": title}],
            "site_name": settings.name,
        },
        twitter=twitter,
        robots=robots,
    )


def home_metadata(
    settings: SiteSettings | None = None, featured: FeaturedSettings | None = None
) -> PageMetadata:
    settings = settings or load_site_settings()
    featured = featured or FeaturedSettings()
    return _shared_meta(
        title=compose_title(HOME_TITLE),
        description=normalize_description(HOME_DESCRIPTION.format(count=featured.total)),
        canonical=settings.absolute_url("/"),
        settings=settings,
    )


def list_metadata(settings: SiteSettings | None = None, pathname: str = "/showcases") -> PageMetadata:
    settings = settings or load_site_settings()
    return _shared_meta(
        title=compose_title(LIST_TITLE),
        description=normalize_description(LIST_DESCRIPTION),
        canonical=settings.absolute_url(pathname),
        settings=settings,
    )


def search_metadata(settings: SiteSettings | None = None) -> PageMetadata:
    settings = settings or load_site_settings()
    return _shared_meta(
        title=compose_title(SEARCH_TITLE),
        description=normalize_description(SEARCH_DESCRIPTION),
        canonical=settings.absolute_url("/search"),
        settings=settings,
    )


def status_metadata(settings: SiteSettings | None = None) -> PageMetadata:
    settings = settings or load_site_settings()
    return _shared_meta(
        title=compose_title(STATUS_TITLE),
        description=normalize_description(STATUS_DESCRIPTION),
        canonical=settings.absolute_url("/status"),
        settings=settings,
        robots={"index": False, "follow": False, "nocache": True},
    )


def _detail_title_source(record: ShowcaseRecord) -> str:
    return (
        localized_text(record, "title", Locale.ZH)
        or f"{record.pen_user}/{record.pen_slug}"
    )


def detail_metadata(record: ShowcaseRecord, settings: SiteSettings | None = None) -> PageMetadata:
    settings = settings or load_site_settings()
    summary = localized_text(record, "summary", Locale.ZH) or ""
    meta = _shared_meta(
        title=compose_detail_title(_detail_title_source(record)),
        description=normalize_description(f"{summary}{DETAIL_DESCRIPTION_TAIL}"),
        canonical=settings.absolute_url(record.path),
        settings=settings,
        page_type="article",
        image=record.thumbnail_url,
    )
    if record.author_name:
        meta.open_graph["authors"] = [record.author_name]
    if record.created_at:
        meta.open_graph["published_time"] = record.created_at
    if record.tags:
        meta.open_graph["tags"] = list(record.tags)
        meta.keywords = list(record.tags)
    return meta


def detail_json_ld(record: ShowcaseRecord, settings: SiteSettings | None = None) -> dict:
    """Return schema.org ``CreativeWork`` structured data for a detail page."""

    settings = settings or load_site_settings()
    payload: dict = {
        "@context": "https://schema.org",
        "@type": "CreativeWork",
        "name": _detail_title_source(record),
        "url": settings.absolute_url(record.path),
        "isBasedOn": build_pen_url(record.pen_user, record.pen_slug),
        "inLanguage": ["zh-CN", "en-US"],
    }
    summary = localized_text(record, "summary", Locale.ZH)
    if summary:
        payload["description"] = summary
    if record.thumbnail_url:
        payload["image"] = record.thumbnail_url
    if record.author_name:
        author: dict = {"@type": "Person", "name": record.author_name}
        if record.author_url:
            author["url"] = record.author_url
        payload["author"] = author
    if record.created_at:
        payload["datePublished"] = record.created_at
    if record.updated_at:
        payload["dateModified"] = record.updated_at
    if record.tags:
        payload["keywords"] = ", ".join(record.tags)
    return payload
