from __future__ import annotations

from threading import Lock
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlencode

import httpx

from hotel_analytics.core.config import Settings, get_settings
from hotel_analytics.core.errors import DataSourceError


class SupabaseClient:
    """Read-only PostgREST client.

    Filters are passed as ``(column, "op.value")`` pairs and URL-encoded, so
    no query text is ever assembled from caller input. Every transport or
    decoding failure is raised as :class:`DataSourceError`.
    """

    _shared_client: httpx.Client | None = None
    _client_lock: Lock = Lock()

    def __init__(
        self,
        settings: Optional[Settings] = None,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        settings = settings or get_settings()
        self.base_url = settings.supabase_url.rstrip("/") + "/rest/v1"
        self.api_key = settings.supabase_service_role_key or settings.supabase_anon_key
        if not self.api_key:
            raise ValueError("Supabase API key is required")
        self.page_size = settings.supabase_page_size
        self._client = http_client or self._get_shared_client(settings.supabase_timeout_seconds)

    @classmethod
    def _get_shared_client(cls, timeout: float) -> httpx.Client:
        if cls._shared_client is not None:
            return cls._shared_client
        with cls._client_lock:
            if cls._shared_client is None:
                cls._shared_client = httpx.Client(
                    timeout=timeout,
                    limits=httpx.Limits(max_keepalive_connections=20, max_connections=100),
                )
        return cls._shared_client

    def select(
        self,
        table: str,
        select: str,
        filters: Optional[List[Tuple[str, str]]] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        order: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        params: List[Tuple[str, str]] = [("select", select)]
        if filters:
            params.extend(filters)
        if limit is not None:
            params.append(("limit", str(limit)))
        if offset is not None:
            params.append(("offset", str(offset)))
        if order:
            params.append(("order", order))

        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json",
        }
        url = f"{self.base_url}/{table}?{urlencode(params, doseq=True)}"
        try:
            response = self._client.get(url, headers=headers)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as exc:
            raise DataSourceError(
                f"{table}: HTTP {exc.response.status_code} {exc.response.text}"
            ) from exc
        except httpx.HTTPError as exc:
            raise DataSourceError(f"{table}: {exc.__class__.__name__} {exc}") from exc
        except ValueError as exc:
            raise DataSourceError(f"{table}: invalid JSON payload") from exc
        if not isinstance(data, list):
            raise DataSourceError(f"{table}: expected a list of rows")
        return data

    def select_all(
        self,
        table: str,
        select: str,
        filters: Optional[List[Tuple[str, str]]] = None,
        order: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        rows: List[Dict[str, Any]] = []
        offset = 0
        while True:
            batch = self.select(
                table=table,
                select=select,
                filters=filters,
                limit=self.page_size,
                offset=offset,
                order=order,
            )
            rows.extend(batch)
            if len(batch) < self.page_size:
                break
            offset += self.page_size
        return rows
