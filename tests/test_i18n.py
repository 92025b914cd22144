from __future__ import annotations

import unittest

from sparkkit.i18n import (
    DEFAULT_LOCALE,
    Locale,
    default_locale,
    format_date_readable,
    localized_list,
    localized_text,
    normalize_language,
    resolve_locale,
)
from sparkkit.models import ShowcaseRecord


def build_record(**overrides) -> ShowcaseRecord:
    return ShowcaseRecord(id="r1", pen_user="user", pen_slug="slug", **overrides)


class LocaleResolutionTests(unittest.TestCase):
    def test_resolve_locale_prefers_any_chinese_signal(self) -> None:
        self.assertIs(resolve_locale("zh-CN,zh;q=0.9,en;q=0.8"), Locale.ZH)
        self.assertIs(resolve_locale("en-US,en;q=0.9,zh;q=0.5"), Locale.ZH)
        self.assertIs(resolve_locale("ZH-tw"), Locale.ZH)

    def test_resolve_locale_english_and_default(self) -> None:
        self.assertIs(resolve_locale("en-GB"), Locale.EN)
        self.assertIs(resolve_locale("fr-FR"), DEFAULT_LOCALE)
        self.assertIs(resolve_locale(""), DEFAULT_LOCALE)
        self.assertIs(resolve_locale(None), DEFAULT_LOCALE)
        self.assertIs(DEFAULT_LOCALE, Locale.EN)

    def test_normalize_language_is_strict(self) -> None:
        self.assertIs(normalize_language(" zh-Hans "), Locale.ZH)
        self.assertIs(normalize_language("EN"), Locale.EN)
        self.assertIsNone(normalize_language("de"))
        self.assertIsNone(normalize_language(None))

    def test_default_locale_uses_configured_value(self) -> None:
        self.assertIs(default_locale("zh"), Locale.ZH)
        self.assertIs(default_locale("klingon"), Locale.EN)
        self.assertIs(default_locale(None), Locale.EN)

    def test_locale_other(self) -> None:
        self.assertIs(Locale.ZH.other, Locale.EN)
        self.assertIs(Locale.EN.other, Locale.ZH)
        self.assertEqual(Locale.ZH, "zh")


class LocalizedFieldTests(unittest.TestCase):
    def test_localized_text_prefers_requested_locale(self) -> None:
        record = build_record(title_zh="玻璃卡片", title_en="Glass Cards")
        self.assertEqual(localized_text(record, "title", Locale.ZH), "玻璃卡片")
        self.assertEqual(localized_text(record, "title", Locale.EN), "Glass Cards")
        self.assertEqual(localized_text(record, "title"), "Glass Cards")

    def test_localized_text_falls_back_on_blank_values(self) -> None:
        record = build_record(summary_zh="   ", summary_en="Frosted panels")
        self.assertEqual(localized_text(record, "summary", Locale.ZH), "Frosted panels")
        record = build_record(body_md_en="", body_md_zh="正文")
        self.assertEqual(localized_text(record, "body", Locale.EN), "正文")

    def test_localized_text_returns_none_when_both_missing(self) -> None:
        self.assertIsNone(localized_text(build_record(), "headline", Locale.ZH))
        self.assertIsNone(localized_text(build_record(perf_notes_zh=" "), "perf", Locale.EN))

    def test_localized_list_falls_back_on_empty_lists(self) -> None:
        record = build_record(key_points_en=[], key_points_zh=["要点一", "要点二"])
        self.assertEqual(localized_list(record, "key_points", Locale.EN), ["要点一", "要点二"])
        record = build_record(reuse_steps_en=["Split layers"], reuse_steps_zh=["拆分图层"])
        self.assertEqual(localized_list(record, "reuse_steps", Locale.ZH), ["拆分图层"])

    def test_localized_list_returns_empty_list_when_both_missing(self) -> None:
        self.assertEqual(localized_list(build_record(), "reuse_steps", Locale.ZH), [])

    def test_localized_list_returns_a_copy(self) -> None:
        steps = ["one"]
        record = build_record(reuse_steps_en=steps)
        result = localized_list(record, "reuse_steps", Locale.EN)
        result.append("two")
        self.assertEqual(steps, ["one"])


class DateFormattingTests(unittest.TestCase):
    def test_format_date_readable_per_locale(self) -> None:
        value = "2025-09-28T14:32:18+00:00"
        self.assertEqual(format_date_readable(value, Locale.ZH), "2025年09月28日")
        self.assertEqual(format_date_readable(value, Locale.EN), "Sep 28, 2025")

    def test_format_date_readable_handles_invalid_values(self) -> None:
        self.assertIsNone(format_date_readable(None))
        self.assertIsNone(format_date_readable("yesterday"))


if __name__ == "__main__":
    unittest.main()
