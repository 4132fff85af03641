"""Read-only view models handed to the renderer, one per screen."""

from dataclasses import dataclass

from forecast.models.common import Resolution
from forecast.models.forecast import NormalizedForecast, SiteForecast
from forecast.models.site import LocationRow
from forecast.models.weather_codes import describe

TITLE_DATE_FORMAT = "%a, %d %b %Y"


@dataclass(frozen=True)
class ForecastItem:
    title: str
    summary: str
    period_index: int
    forecast_index: int


@dataclass(frozen=True)
class SearchView:
    query: str
    rows: tuple[LocationRow, ...]
    cursor: int
    loading: bool = False
    error: str | None = None


@dataclass(frozen=True)
class LocationListView:
    header: str
    items: tuple[ForecastItem, ...]
    cursor: int
    resolution: Resolution
    loading: bool = False
    error: str | None = None


@dataclass(frozen=True)
class DetailView:
    location_name: str
    title: str
    forecast: NormalizedForecast
    loading: bool = False
    error: str | None = None


View = SearchView | LocationListView | DetailView


def build_items(
    site: SiteForecast, forecasts: tuple[NormalizedForecast, ...]
) -> tuple[ForecastItem, ...]:
    """Build list items for normalized forecasts of ``site``."""
    items = []
    for fc in forecasts:
        day = site.periods[fc.period_index].date
        items.append(
            ForecastItem(
                title=f"{day.strftime(TITLE_DATE_FORMAT)} ({fc.display_time})",
                summary=summarize(fc),
                period_index=fc.period_index,
                forecast_index=fc.forecast_index,
            )
        )
    return tuple(items)


def summarize(fc: NormalizedForecast) -> str:
    return f"{describe(fc.weather_code)} | {fc.temperature}°C | {fc.wind_speed}mph"
