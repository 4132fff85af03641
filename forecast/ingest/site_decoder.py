"""Decode DataPoint JSON payloads into site and forecast records.

DataPoint collapses single-element arrays into bare objects, so every list
field is read through ``_as_list``.
"""

from datetime import date, datetime

from forecast.ingest.datapoint_client import FetchError
from forecast.models.common import Resolution, utc_now_iso
from forecast.models.forecast import (
    DAY_LABEL,
    NIGHT_LABEL,
    Period,
    RawForecast,
    SiteForecast,
)
from forecast.models.site import Location
from forecast.nav.normalizer import UnrecognizedForecastShapeError, is_minutes_label

PERIOD_DATE_FORMAT = "%Y-%m-%dZ"

# Per-shape upstream keys for uv, precipitation, humidity, gust speed,
# temperature and feels-like temperature, in that order.
_DAY_KEYS = ("U", "PPd", "Hn", "Gn", "Dm", "FDm")
_NIGHT_KEYS = (None, "PPn", "Hm", "Gm", "Nm", "FNm")
_HOURLY_KEYS = ("U", "Pp", "H", "G", "T", "F")


def decode_sitelist(raw: dict) -> list[Location]:
    """Extract the site list from a sitelist response."""
    try:
        entries = raw["Locations"]["Location"]
    except (KeyError, TypeError) as e:
        raise FetchError(f"Malformed sitelist response: missing {e}") from e

    locations = []
    for entry in _as_list(entries):
        locations.append(
            Location(
                id=str(entry.get("id", "")),
                name=entry.get("name", ""),
                region=entry.get("region", ""),
            )
        )
    return locations


def decode_site_forecast(raw: dict, resolution: Resolution) -> SiteForecast:
    """Extract the periods for one site from a forecast response."""
    try:
        dv = raw["SiteRep"]["DV"]
        location = dv["Location"]
    except (KeyError, TypeError) as e:
        raise FetchError(f"Malformed forecast response: missing {e}") from e

    periods = tuple(
        Period(
            date=_parse_period_date(p.get("value", "")),
            forecasts=tuple(
                decode_rep(rep, resolution) for rep in _as_list(p.get("Rep", []))
            ),
        )
        for p in _as_list(location.get("Period", []))
    )

    return SiteForecast(
        location_id=str(location.get("i", "")),
        name=location.get("name", ""),
        country=location.get("country", ""),
        resolution=resolution,
        data_date=dv.get("dataDate", ""),
        periods=periods,
        fetched_at=utc_now_iso(),
    )


def decode_rep(rep: dict, resolution: Resolution) -> RawForecast:
    """Decode a single ``Rep`` entry, picking keys by its time label."""
    label = str(rep.get("$", ""))
    if resolution == Resolution.DAILY and label == DAY_LABEL:
        keys = _DAY_KEYS
    elif resolution == Resolution.DAILY and label == NIGHT_LABEL:
        keys = _NIGHT_KEYS
    elif resolution == Resolution.THREE_HOURLY and is_minutes_label(label):
        keys = _HOURLY_KEYS
    else:
        raise UnrecognizedForecastShapeError(label, resolution)

    uv, precipitation, humidity, gust, temperature, feels_like = (
        rep.get(k, "") if k is not None else "" for k in keys
    )
    return RawForecast(
        time_label=label,
        weather_code=rep.get("W", ""),
        wind_direction=rep.get("D", ""),
        wind_speed=rep.get("S", ""),
        visibility=rep.get("V", ""),
        uv=uv,
        precipitation=precipitation,
        humidity=humidity,
        gust_speed=gust,
        temperature=temperature,
        feels_like_temp=feels_like,
    )


def _parse_period_date(value: str) -> date:
    try:
        return datetime.strptime(value, PERIOD_DATE_FORMAT).date()
    except ValueError as e:
        raise FetchError(f"Bad period date {value!r}") from e


def _as_list(value: object) -> list:
    if isinstance(value, list):
        return value
    if value is None:
        return []
    return [value]
