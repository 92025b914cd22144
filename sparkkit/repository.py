"""Showcase data access: hosted PostgREST tables with an in-memory fallback."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence

import requests

from .config import FeaturedSettings, SourceSettings, load_source_settings
from .fallback import fallback_showcases, fallback_status
from .featured import select_daily_featured
from .models import (
    FilterOptions,
    ShowcaseFilters,
    ShowcaseRecord,
    SyncStatus,
    collect_filter_options,
)
from .select import SEARCH_FIELDS, apply_filters, sort_by_recency
from .utils import load_json

logger = logging.getLogger(__name__)

MISSING_TABLE_CODES = {"PGRST205", "42P01"}


class SourceError(RuntimeError):
    """Raised when the hosted database cannot answer a query."""


class MissingTableError(SourceError):
    """Raised when the requested table or view does not exist."""


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def build_query_params(filters: ShowcaseFilters) -> Dict[str, str]:
    """Translate filters into PostgREST query parameters."""

    direction = "asc" if filters.order == "oldest" else "desc"
    params: Dict[str, str] = {"select": "*", "order": f"created_at.{direction}"}
    query = (filters.query or "").strip()
    if query:
        pattern = _quote(f"*{query}*")
        clauses = ",".join(f"{name}.ilike.{pattern}" for name in SEARCH_FIELDS)
        params["or"] = f"({clauses})"
    if filters.tags:
        members = ",".join(_quote(tag) for tag in filters.tags)
        params["tags"] = f"ov.{{{members}}}"
    if filters.stack:
        params["stack"] = f"ilike.{filters.stack}"
    if filters.difficulty:
        params["difficulty"] = f"ilike.{filters.difficulty}"
    if filters.limit is not None:
        params["limit"] = str(max(filters.limit, 0))
    if filters.offset:
        params["offset"] = str(max(filters.offset, 0))
    return params


class SupabaseClient:
    """Read-only client for the Supabase REST (PostgREST) endpoint."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout: int = 10,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Accept": "application/json",
            }
        )

    def _endpoint(self, table: str) -> str:
        return f"{self.base_url}/rest/v1/{table}"

    def select(self, table: str, params: Dict[str, str]) -> List[dict]:
        try:
            response = self._session.get(
                self._endpoint(table), params=params, timeout=self.timeout
            )
        except requests.RequestException as exc:
            raise SourceError(f"Request to {table} failed: {exc}") from exc
        if response.status_code >= 400:
            code = None
            message = response.text
            try:
                detail = response.json()
            except ValueError:
                detail = None
            if isinstance(detail, dict):
                code = detail.get("code")
                message = detail.get("message") or message
            if response.status_code == 404 or code in MISSING_TABLE_CODES:
                raise MissingTableError(f"Table {table} is not available: {message}")
            raise SourceError(f"{table} returned HTTP {response.status_code}: {message}")
        try:
            payload = response.json()
        except ValueError as exc:
            raise SourceError(f"{table} returned invalid JSON") from exc
        if not isinstance(payload, list):
            raise SourceError(f"{table} returned an unexpected payload")
        return [row for row in payload if isinstance(row, dict)]


def parse_rows(rows: Iterable[dict]) -> List[ShowcaseRecord]:
    records: List[ShowcaseRecord] = []
    for row in rows:
        try:
            records.append(ShowcaseRecord.from_dict(row))
        except (KeyError, ValueError) as error:
            logger.debug("Skipping invalid showcase row: %s", error)
    return records


class ShowcaseRepository:
    """Fetch showcases from the hosted database, falling back to local data."""

    def __init__(
        self,
        client: SupabaseClient | None = None,
        *,
        settings: SourceSettings | None = None,
        fallback: Sequence[ShowcaseRecord] | None = None,
    ) -> None:
        self.settings = settings or load_source_settings()
        if client is None and self.settings.enabled:
            client = SupabaseClient(
                self.settings.supabase_url or "",
                self.settings.supabase_anon_key or "",
                timeout=self.settings.timeout,
            )
        self.client = client
        self._fallback = list(fallback) if fallback is not None else None

    # ------------------------------------------------------------------
    # Fallback collection

    def load_fallback(self) -> List[ShowcaseRecord]:
        if self._fallback is not None:
            return list(self._fallback)
        path = self.settings.fallback_file
        if path is not None and path.exists():
            payload = load_json(path, default=[])
            if isinstance(payload, dict):
                payload = payload.get("showcases", [])
            if isinstance(payload, list):
                records = parse_rows(item for item in payload if isinstance(item, dict))
                logger.debug("Loaded %s fallback showcases from %s", len(records), path)
                return records
            logger.warning("Ignoring malformed fallback file %s", path)
        return fallback_showcases()

    # ------------------------------------------------------------------
    # Remote queries

    def _select_showcases(self, params: Dict[str, str]) -> List[dict]:
        assert self.client is not None
        for table in self.settings.table_candidates:
            try:
                return self.client.select(table, params)
            except MissingTableError as error:
                logger.warning("%s; trying next table candidate", error)
        raise MissingTableError(
            "No showcase table found among: " + ", ".join(self.settings.table_candidates)
        )

    def fetch_showcases(self, filters: ShowcaseFilters | None = None) -> List[ShowcaseRecord]:
        filters = filters or ShowcaseFilters()
        if self.client is None:
            return apply_filters(self.load_fallback(), filters)
        try:
            rows = self._select_showcases(build_query_params(filters))
        except SourceError as error:
            logger.error("Failed to load showcases from Supabase: %s", error)
            return apply_filters(self.load_fallback(), filters)
        return sort_by_recency(parse_rows(rows), filters.order)

    def fetch_showcase(self, pen_user: str, pen_slug: str) -> Optional[ShowcaseRecord]:
        if self.client is not None:
            params = {
                "select": "*",
                "pen_user": f"eq.{pen_user}",
                "pen_slug": f"eq.{pen_slug}",
                "limit": "1",
            }
            try:
                records = parse_rows(self._select_showcases(params))
            except SourceError as error:
                logger.error("Failed to load showcase detail: %s", error)
            else:
                return records[0] if records else None
        for record in self.load_fallback():
            if record.key == (pen_user, pen_slug):
                return record
        return None

    def fetch_filter_options(self) -> FilterOptions:
        return collect_filter_options(self.fetch_showcases())

    def fetch_sync_status(self) -> SyncStatus:
        if self.client is None:
            return fallback_status(len(self.load_fallback()))
        try:
            rows = self.client.select(self.settings.status_view, {"select": "*", "limit": "1"})
        except SourceError as error:
            logger.error("Failed to load sync status: %s", error)
            return fallback_status(len(self.load_fallback()))
        if not rows:
            return fallback_status(len(self.load_fallback()))
        return SyncStatus.from_dict(rows[0])

    def fetch_daily_featured(
        self,
        reference: datetime | None = None,
        *,
        settings: FeaturedSettings | None = None,
    ) -> List[ShowcaseRecord]:
        return select_daily_featured(self.fetch_showcases(), reference, settings=settings)
