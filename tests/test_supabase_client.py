from __future__ import annotations

from typing import List

import httpx
import pytest

from hotel_analytics.core.config import Settings
from hotel_analytics.core.errors import DataSourceError
from hotel_analytics.core.supabase import SupabaseClient


def make_settings(page_size: int = 2) -> Settings:
    return Settings(
        SUPABASE_URL="https://project.supabase.co/",
        SUPABASE_SERVICE_ROLE_KEY="service-key",
        SUPABASE_PAGE_SIZE=page_size,
    )


def make_client(handler, page_size: int = 2) -> SupabaseClient:
    http_client = httpx.Client(transport=httpx.MockTransport(handler))
    return SupabaseClient(settings=make_settings(page_size), http_client=http_client)


def test_select_all_pages_until_short_batch() -> None:
    seen: List[httpx.URL] = []
    pages = {"0": [{"id": 1}, {"id": 2}], "2": [{"id": 3}]}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url)
        assert request.headers["apikey"] == "service-key"
        return httpx.Response(200, json=pages[request.url.params["offset"]])

    rows = make_client(handler).select_all(
        "bookings", "id", filters=[("city", "eq.Makkah")], order="id.asc"
    )
    assert [row["id"] for row in rows] == [1, 2, 3]
    assert len(seen) == 2
    assert seen[0].path == "/rest/v1/bookings"
    assert seen[0].params["city"] == "eq.Makkah"
    assert seen[0].params["limit"] == "2"


def test_filter_values_are_url_encoded() -> None:
    captured: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json=[])

    make_client(handler).select("bookings", "id", filters=[("city", "eq.Makkah&status=eq.x")])
    assert captured[0].url.params["city"] == "eq.Makkah&status=eq.x"
    assert "status" not in captured[0].url.params


def test_http_errors_become_data_source_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="relation does not exist")

    with pytest.raises(DataSourceError) as exc_info:
        make_client(handler).select("bookings", "id")
    assert "HTTP 500" in exc_info.value.detail
    assert exc_info.value.message == "Failed to fetch analytics data"


def test_transport_errors_become_data_source_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    with pytest.raises(DataSourceError):
        make_client(handler).select_all("operational_costs", "id")


def test_non_list_payload_is_rejected() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"message": "unexpected"})

    with pytest.raises(DataSourceError):
        make_client(handler).select("booking_items", "id")


def test_missing_api_key_is_rejected() -> None:
    settings = Settings(SUPABASE_URL="https://project.supabase.co")
    settings.supabase_service_role_key = None
    settings.supabase_anon_key = None
    with pytest.raises(ValueError):
        SupabaseClient(settings=settings, http_client=httpx.Client())
