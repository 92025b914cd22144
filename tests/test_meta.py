from sparkkit.config import FeaturedSettings, SiteSettings
from sparkkit.fallback import fallback_showcases
from sparkkit.meta import (
    detail_json_ld,
    detail_metadata,
    home_metadata,
    hreflang_alternates,
    list_metadata,
    search_metadata,
    status_metadata,
)
from sparkkit.models import ShowcaseRecord
from sparkkit.quality import SeoPayload, passes_seo

SETTINGS = SiteSettings(base_url="https://spark.example.com", twitter_handle="@spark")


def as_payload(meta) -> SeoPayload:
    return SeoPayload(title=meta.title, description=meta.description, canonical=meta.canonical)


def test_hreflang_alternates():
    alternates = hreflang_alternates("https://spark.example.com/search")
    assert alternates == {
        "zh-CN": "https://spark.example.com/search",
        "en-US": "https://spark.example.com/search?hl=en",
        "x-default": "https://spark.example.com/search",
    }


def test_static_pages_pass_quality_gate():
    pages = [
        home_metadata(SETTINGS, FeaturedSettings()),
        list_metadata(SETTINGS),
        search_metadata(SETTINGS),
        status_metadata(SETTINGS),
    ]
    for meta in pages:
        assert passes_seo(as_payload(meta)), meta.title
    assert [meta.canonical for meta in pages] == [
        "https://spark.example.com/",
        "https://spark.example.com/showcases",
        "https://spark.example.com/search",
        "https://spark.example.com/status",
    ]


def test_home_description_mentions_featured_count():
    meta = home_metadata(SETTINGS, FeaturedSettings(per_tier=4))
    assert "每日 8 条" in meta.description


def test_status_page_is_not_indexed():
    assert status_metadata(SETTINGS).robots == {"index": False, "follow": False, "nocache": True}
    assert home_metadata(SETTINGS).robots is None


def test_shared_social_metadata():
    meta = list_metadata(SETTINGS)
    assert meta.open_graph["url"] == meta.canonical
    assert meta.open_graph["images"][0]["url"] == "https://spark.example.com/og-cover.png"
    assert meta.twitter["site"] == "@spark"
    assert meta.twitter["card"] == "summary_large_image"


def test_detail_metadata_for_fallback_record():
    record = fallback_showcases()[0]
    meta = detail_metadata(record, SETTINGS)
    assert meta.canonical == "https://spark.example.com/p/madebyevan/threejs-demo"
    assert meta.title.startswith("Three.js 玻璃态灯光秀 解读与复用要点全指南")
    assert meta.open_graph["type"] == "article"
    assert meta.open_graph["authors"] == ["Evan You"]
    assert meta.open_graph["images"][0]["url"] == record.thumbnail_url
    assert meta.keywords == ["animation", "webgl", "interactive"]
    assert passes_seo(as_payload(meta))


def test_detail_metadata_falls_back_to_pen_identity():
    record = ShowcaseRecord(id="x", pen_user="someone", pen_slug="abc")
    meta = detail_metadata(record, SETTINGS)
    assert meta.title.startswith("someone/abc")
    assert "authors" not in meta.open_graph
    assert meta.keywords == []
    assert passes_seo(as_payload(meta))


def test_detail_json_ld():
    record = fallback_showcases()[1]
    payload = detail_json_ld(record, SETTINGS)
    assert payload["@type"] == "CreativeWork"
    assert payload["isBasedOn"] == "https://codepen.io/sdras/pen/svg-lottie"
    assert payload["url"] == "https://spark.example.com/p/sdras/svg-lottie"
    assert payload["author"] == {
        "@type": "Person",
        "name": "Sarah Drasner",
        "url": "https://codepen.io/sdras",
    }
    assert payload["dateModified"] == "2025-09-23T01:00:00+00:00"
    assert payload["keywords"] == "svg, animation, lottie"
