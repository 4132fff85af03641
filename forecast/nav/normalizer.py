"""Forecast normalizer: reshape day, night and hourly records into one form.

Field selection by resolution and time label:

    resolution    label      uv         other readings
    daily         "Day"      Day.uv     Day.*
    daily         "Night"    ""         Night.*
    3hourly       "<mins>"   Hourly.uv  Hourly.*

Any other combination raises UnrecognizedForecastShapeError.
"""

from forecast.models.common import Resolution
from forecast.models.forecast import (
    DAY_LABEL,
    NIGHT_LABEL,
    NormalizedForecast,
    Period,
    RawForecast,
)


class UnrecognizedForecastShapeError(ValueError):
    """Raised when a time label does not fit the loaded resolution."""

    def __init__(self, label: str, resolution: Resolution):
        super().__init__(
            f"Unrecognized forecast time label {label!r} for {resolution} data"
        )
        self.label = label
        self.resolution = resolution


def is_minutes_label(label: str) -> bool:
    """True for a three-hourly label made only of ASCII digits."""
    # str.isdigit alone also accepts superscripts such as "²"
    return label.isascii() and label.isdigit()


def display_time(label: str, resolution: Resolution) -> str:
    """Return the label shown for a forecast slot.

    Three-hourly labels are minutes past midnight; any minutes past the hour
    are dropped ("190" -> "03:00").
    """
    if resolution == Resolution.DAILY:
        if label in (DAY_LABEL, NIGHT_LABEL):
            return label
        raise UnrecognizedForecastShapeError(label, resolution)

    if not is_minutes_label(label):
        raise UnrecognizedForecastShapeError(label, resolution)
    hours = int(label) // 60
    return f"{hours:02d}:00"


def normalize(
    period: Period,
    period_index: int,
    raw: RawForecast,
    forecast_index: int,
    resolution: Resolution,
) -> NormalizedForecast:
    """Normalize one record of ``period``; the indices are carried through."""
    shown = display_time(raw.time_label, resolution)
    uv = "" if raw.time_label == NIGHT_LABEL else raw.uv

    return NormalizedForecast(
        display_time=shown,
        weather_code=raw.weather_code,
        wind_direction=raw.wind_direction,
        wind_speed=raw.wind_speed,
        visibility=raw.visibility,
        uv=uv,
        precipitation=raw.precipitation,
        humidity=raw.humidity,
        gust_speed=raw.gust_speed,
        temperature=raw.temperature,
        feels_like_temp=raw.feels_like_temp,
        period_index=period_index,
        forecast_index=forecast_index,
    )
