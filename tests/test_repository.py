import json
import logging
from datetime import datetime, timezone

import pytest
import requests

from sparkkit.config import SourceSettings
from sparkkit.fallback import fallback_showcases
from sparkkit.models import ShowcaseFilters
from sparkkit.repository import (
    MissingTableError,
    ShowcaseRepository,
    SourceError,
    SupabaseClient,
    build_query_params,
)

SETTINGS = SourceSettings(supabase_url="https://project.supabase.co", supabase_anon_key="anon")


class DummyResponse:
    def __init__(self, status_code: int = 200, payload=None, text: str | None = None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else json.dumps(payload)

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class DummySession:
    def __init__(self, responses):
        self.headers: dict = {}
        self.calls: list[tuple[str, dict]] = []
        self._responses = list(responses)

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, dict(params or {})))
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def remote_row(record_id: str, created_at: str, **overrides) -> dict:
    row = {
        "id": record_id,
        "pen_user": "remote",
        "pen_slug": record_id,
        "title_en": f"Remote {record_id}",
        "difficulty": "Advanced",
        "created_at": created_at,
    }
    row.update(overrides)
    return row


def make_repository(responses, **kwargs):
    session = DummySession(responses)
    client = SupabaseClient(SETTINGS.supabase_url, SETTINGS.supabase_anon_key, timeout=5, session=session)
    return ShowcaseRepository(client, settings=kwargs.pop("settings", SETTINGS), **kwargs), session


def test_build_query_params_maps_filters():
    params = build_query_params(
        ShowcaseFilters(
            query="  glass ",
            tags=["css", "svg"],
            stack="CSS",
            difficulty="advanced",
            order="oldest",
            offset=20,
            limit=10,
        )
    )
    assert params["select"] == "*"
    assert params["order"] == "created_at.asc"
    assert params["or"].startswith('(title_en.ilike."*glass*",title_zh.ilike."*glass*"')
    assert params["or"].endswith('body_md_zh.ilike."*glass*")')
    assert params["tags"] == 'ov.{"css","svg"}'
    assert params["stack"] == "ilike.CSS"
    assert params["difficulty"] == "ilike.advanced"
    assert params["offset"] == "20"
    assert params["limit"] == "10"


def test_build_query_params_defaults():
    assert build_query_params(ShowcaseFilters()) == {"select": "*", "order": "created_at.desc"}


def test_build_query_params_escapes_quotes():
    params = build_query_params(ShowcaseFilters(query='say "hi"'))
    assert '"*say \\"hi\\"*"' in params["or"]


def test_client_sets_auth_headers_and_endpoint():
    session = DummySession([DummyResponse(payload=[{"id": "1"}])])
    client = SupabaseClient("https://project.supabase.co/", "anon", session=session)
    rows = client.select("frontend_showcase", {"select": "*"})
    assert rows == [{"id": "1"}]
    assert session.headers["apikey"] == "anon"
    assert session.headers["Authorization"] == "Bearer anon"
    assert session.calls[0][0] == "https://project.supabase.co/rest/v1/frontend_showcase"


def test_client_classifies_errors():
    session = DummySession(
        [
            DummyResponse(404, {"message": "relation does not exist"}),
            DummyResponse(400, {"code": "PGRST205", "message": "Could not find the table"}),
            DummyResponse(500, None, text="boom"),
            DummyResponse(200, None, text="<html>"),
            DummyResponse(200, {"not": "a list"}),
            requests.ConnectionError("offline"),
        ]
    )
    client = SupabaseClient("https://project.supabase.co", "anon", session=session)
    with pytest.raises(MissingTableError):
        client.select("missing", {})
    with pytest.raises(MissingTableError):
        client.select("missing", {})
    with pytest.raises(SourceError, match="HTTP 500"):
        client.select("broken", {})
    with pytest.raises(SourceError, match="invalid JSON"):
        client.select("broken", {})
    with pytest.raises(SourceError, match="unexpected payload"):
        client.select("broken", {})
    with pytest.raises(SourceError, match="offline"):
        client.select("broken", {})


def test_fetch_showcases_without_client_uses_fallback(monkeypatch):
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("SUPABASE_ANON_KEY", raising=False)
    repository = ShowcaseRepository(settings=SourceSettings())
    assert repository.client is None
    records = repository.fetch_showcases()
    assert [record.id for record in records] == ["mock-1", "mock-2"]
    filtered = repository.fetch_showcases(ShowcaseFilters(tags=["lottie"]))
    assert [record.id for record in filtered] == ["mock-2"]


def test_fetch_showcases_resorts_remote_rows_by_recency():
    rows = [
        remote_row("a", "2025-09-20T00:00:00Z"),
        remote_row("b", "2025-09-10T00:00:00Z", updated_at="2025-09-25T00:00:00Z"),
        {"id": "broken"},
    ]
    repository, session = make_repository([DummyResponse(payload=rows)])
    records = repository.fetch_showcases()
    assert [record.id for record in records] == ["b", "a"]
    assert session.calls[0][1]["order"] == "created_at.desc"


def test_fetch_showcases_tries_next_table_candidate(caplog):
    rows = [remote_row("a", "2025-09-20T00:00:00Z")]
    repository, session = make_repository(
        [DummyResponse(404, {"code": "PGRST205", "message": "missing"}), DummyResponse(payload=rows)]
    )
    with caplog.at_level(logging.WARNING):
        records = repository.fetch_showcases()
    assert [record.id for record in records] == ["a"]
    assert [call[0].rsplit("/", 1)[-1] for call in session.calls] == [
        "frontend_showcase",
        "codepen_showcases",
    ]
    assert "trying next table candidate" in caplog.text


def test_fetch_showcases_falls_back_when_all_tables_missing(caplog):
    repository, _ = make_repository(
        [DummyResponse(404, {"message": "missing"}), DummyResponse(404, {"message": "missing"})]
    )
    with caplog.at_level(logging.ERROR):
        records = repository.fetch_showcases(ShowcaseFilters(order="oldest"))
    assert [record.id for record in records] == ["mock-2", "mock-1"]
    assert "Failed to load showcases" in caplog.text


def test_fetch_showcases_falls_back_on_network_error():
    fallback = fallback_showcases()[:1]
    repository, _ = make_repository([requests.Timeout("slow")], fallback=fallback)
    records = repository.fetch_showcases(ShowcaseFilters(limit=5))
    assert [record.id for record in records] == ["mock-1"]


def test_fetch_showcase_remote_and_fallback():
    row = remote_row("a", "2025-09-20T00:00:00Z")
    repository, session = make_repository([DummyResponse(payload=[row]), DummyResponse(payload=[])])
    record = repository.fetch_showcase("remote", "a")
    assert record is not None and record.id == "a"
    assert session.calls[0][1]["pen_user"] == "eq.remote"
    assert session.calls[0][1]["pen_slug"] == "eq.a"
    assert repository.fetch_showcase("remote", "zzz") is None

    offline, _ = make_repository([requests.ConnectionError("offline")])
    record = offline.fetch_showcase("sdras", "svg-lottie")
    assert record is not None and record.id == "mock-2"


def test_fetch_filter_options_from_fallback():
    repository = ShowcaseRepository(settings=SourceSettings())
    options = repository.fetch_filter_options()
    assert options.tags == ["animation", "interactive", "lottie", "svg", "webgl"]
    assert options.stacks == ["CSS", "SVG"]
    assert options.difficulties == ["Advanced", "Intermediate"]


def test_fetch_sync_status_remote_and_fallback():
    status_row = {"version": "2025.10.01", "last_synced_at": "2025-10-01T00:00:00Z", "total_indexed": 120}
    repository, session = make_repository([DummyResponse(payload=[status_row]), DummyResponse(500, None, "down")])
    status = repository.fetch_sync_status()
    assert status.version == "2025.10.01"
    assert status.total_indexed == 120
    assert session.calls[0][0].endswith("/rest/v1/showcase_sync_status")

    fallback = repository.fetch_sync_status()
    assert fallback.version == "2025.09.23"
    assert fallback.total_indexed == 2


def test_load_fallback_reads_configured_file(tmp_path):
    target = tmp_path / "showcases.json"
    target.write_text(
        json.dumps({"showcases": [remote_row("file-1", "2025-01-01T00:00:00Z"), {"id": "bad"}]}),
        encoding="utf-8",
    )
    repository = ShowcaseRepository(settings=SourceSettings(fallback_file=target))
    assert [record.id for record in repository.load_fallback()] == ["file-1"]

    missing = ShowcaseRepository(settings=SourceSettings(fallback_file=tmp_path / "absent.json"))
    assert [record.id for record in missing.load_fallback()] == ["mock-1", "mock-2"]


def test_fetch_daily_featured_uses_full_collection():
    repository = ShowcaseRepository(settings=SourceSettings())
    reference = datetime(2025, 9, 28, tzinfo=timezone.utc)
    picks = repository.fetch_daily_featured(reference)
    assert [record.id for record in picks] == ["mock-1", "mock-2"]
