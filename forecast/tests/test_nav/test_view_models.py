"""Tests for list item construction."""

from forecast.models.forecast import SiteForecast
from forecast.nav.site_store import normalize_site
from forecast.nav.view_models import build_items, summarize


class TestBuildItems:
    def test_daily_titles(self, daily_site: SiteForecast):
        items = build_items(daily_site, tuple(normalize_site(daily_site)))
        assert [i.title for i in items] == [
            "Mon, 15 Jan 2024 (Day)",
            "Mon, 15 Jan 2024 (Night)",
            "Tue, 16 Jan 2024 (Day)",
            "Tue, 16 Jan 2024 (Night)",
        ]

    def test_hourly_titles(self, hourly_site: SiteForecast):
        items = build_items(hourly_site, tuple(normalize_site(hourly_site)))
        assert items[0].title == "Mon, 15 Jan 2024 (12:00)"
        assert items[2].title == "Tue, 16 Jan 2024 (00:00)"

    def test_items_keep_indices(self, daily_site: SiteForecast):
        items = build_items(daily_site, tuple(normalize_site(daily_site)))
        assert (items[3].period_index, items[3].forecast_index) == (1, 1)


class TestSummarize:
    def test_summary(self, daily_site: SiteForecast):
        night = normalize_site(daily_site)[1]
        assert summarize(night) == "Partly cloudy | 2°C | 9mph"
