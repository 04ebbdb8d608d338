from __future__ import annotations

from datetime import date

from hotel_analytics.api.dependencies import get_analytics_service
from hotel_analytics.core.config import get_settings
from hotel_analytics.core.errors import DataSourceError
from hotel_analytics.schemas.analytics import AnalyticsFilters


class FailingAnalyticsService:
    def get_analytics_data(self, _: AnalyticsFilters):
        raise DataSourceError("connection refused by db-internal:5432")

    def get_revenue_data(self, _: AnalyticsFilters):
        raise DataSourceError("connection refused by db-internal:5432")


def test_revenue_report(client):
    response = client.get("/api/v1/analytics/revenue")
    assert response.status_code == 200
    payload = response.json()
    assert payload["data"]["totalRevenue"] == 1000.0
    assert payload["data"]["revenueByCity"][0]["averageBookingValue"] == 1000.0
    assert payload["data"]["revenueTrend"][0]["date"] == "2026-10-10"
    assert payload["meta"]["currency"] == "SAR"
    assert payload["meta"]["timeWindow"] == "*..*"


def test_profit_report(client):
    response = client.get("/api/v1/analytics/profit")
    assert response.status_code == 200
    payload = response.json()["data"]
    assert payload["netProfit"] == 300.0
    assert payload["totalOperationalCosts"] == 100.0
    assert [row["costType"] for row in payload["costBreakdown"]] == ["Hotel Costs", "transportation"]
    assert payload["profitByCity"][0]["profitMargin"] == 30.0


def test_dashboard_composes_summary(client):
    response = client.get("/api/v1/analytics/dashboard")
    assert response.status_code == 200
    payload = response.json()["data"]
    assert set(payload) == {"revenue", "profit", "summary"}
    summary = payload["summary"]
    assert summary["totalRevenue"] == 1000.0
    assert summary["totalBookings"] == 1
    assert summary["profitMargin"] == 30.0
    assert summary["topPerformingCity"] == {"city": "Makkah", "revenue": 1000.0}


def test_summary_returns_only_summary(client):
    response = client.get("/api/v1/analytics/summary")
    assert response.status_code == 200
    payload = response.json()["data"]
    assert payload["grossProfit"] == 400.0
    assert "revenue" not in payload


def test_filters_are_parsed_from_query(client, fake_service):
    response = client.get(
        "/api/v1/analytics/revenue",
        params={"startDate": "2026-01-01", "endDate": "2026-03-31", "city": "Madinah", "status": "confirmed"},
    )
    assert response.status_code == 200
    assert fake_service.received_filters[0] == AnalyticsFilters(
        start_date=date(2026, 1, 1),
        end_date=date(2026, 3, 31),
        city="Madinah",
        status="confirmed",
    )
    assert response.json()["meta"]["timeWindow"] == "2026-01-01..2026-03-31;city=Madinah;status=confirmed"


def test_malformed_filters_are_dropped(client, fake_service):
    response = client.get(
        "/api/v1/analytics/revenue",
        params={"startDate": "not-a-date", "city": "Jeddah", "status": "archived"},
    )
    assert response.status_code == 200
    assert fake_service.received_filters[0] == AnalyticsFilters()


def test_strict_filters_reject_malformed_values(client, monkeypatch):
    monkeypatch.setattr(get_settings(), "analytics_strict_filters", True)
    response = client.get("/api/v1/analytics/revenue", params={"startDate": "not-a-date"})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "bad_request"


def test_admin_token_required_when_configured(client, monkeypatch):
    monkeypatch.setattr(get_settings(), "analytics_admin_token", "secret")

    response = client.get("/api/v1/analytics/summary")
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "forbidden"

    response = client.get("/api/v1/analytics/summary", headers={"X-Admin-Token": "secret"})
    assert response.status_code == 200


def test_data_source_error_is_generic(client):
    client.app.dependency_overrides[get_analytics_service] = FailingAnalyticsService
    response = client.get("/api/v1/analytics/dashboard")
    assert response.status_code == 502
    payload = response.json()
    assert payload["error"]["code"] == "data_source_error"
    assert payload["error"]["message"] == "Failed to fetch analytics data"
    assert "db-internal" not in response.text


def test_filter_options(client):
    response = client.get("/api/v1/analytics/filter-options")
    assert response.status_code == 200
    payload = response.json()["data"]
    assert payload["cities"] == ["Makkah", "Madinah"]
    assert payload["statuses"] == ["pending", "confirmed", "cancelled"]
    ranges = {row["value"]: row for row in payload["dateRanges"]}
    assert list(ranges) == ["last_7_days", "last_30_days", "this_month", "this_year"]
    assert ranges["this_year"]["endDate"] == date.today().isoformat()
    assert ranges["this_year"]["startDate"] == date.today().replace(month=1, day=1).isoformat()
