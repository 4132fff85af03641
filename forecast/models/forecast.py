"""DataPoint forecast data models."""

from dataclasses import dataclass
from datetime import date

from forecast.models.common import Resolution

DAY_LABEL = "Day"
NIGHT_LABEL = "Night"


@dataclass(frozen=True)
class RawForecast:
    """One time slot as the upstream sent it.

    ``time_label`` is "Day" or "Night" for daily data and minutes past
    midnight (e.g. "180") for three-hourly data. Night records have no UV
    reading; ``uv`` is left empty for them.
    """

    time_label: str
    weather_code: str
    wind_direction: str
    wind_speed: str
    visibility: str
    uv: str
    precipitation: str
    humidity: str
    gust_speed: str
    temperature: str
    feels_like_temp: str


@dataclass(frozen=True)
class Period:
    date: date
    forecasts: tuple[RawForecast, ...]


@dataclass(frozen=True)
class SiteForecast:
    location_id: str
    name: str
    country: str
    resolution: Resolution
    data_date: str
    periods: tuple[Period, ...]
    fetched_at: str

    @property
    def header(self) -> str:
        if self.country:
            return f"{self.name}, {self.country}"
        return self.name


@dataclass(frozen=True)
class NormalizedForecast:
    display_time: str
    weather_code: str
    wind_direction: str
    wind_speed: str
    visibility: str
    uv: str
    precipitation: str
    humidity: str
    gust_speed: str
    temperature: str
    feels_like_temp: str
    period_index: int  # back-reference into SiteDataStore periods
    forecast_index: int
