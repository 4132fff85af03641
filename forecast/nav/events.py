"""Events fed to the navigation controller and commands it hands back."""

from dataclasses import dataclass

from forecast.models.common import Resolution
from forecast.models.forecast import SiteForecast


@dataclass(frozen=True)
class QueryChanged:
    text: str


@dataclass(frozen=True)
class MoveCursor:
    delta: int


@dataclass(frozen=True)
class Confirm:
    pass


@dataclass(frozen=True)
class Back:
    pass


@dataclass(frozen=True)
class ToggleResolution:
    pass


@dataclass(frozen=True)
class Cancel:
    pass


@dataclass(frozen=True)
class ForecastLoaded:
    request_id: int
    site: SiteForecast


@dataclass(frozen=True)
class ForecastFailed:
    request_id: int
    message: str


InputEvent = QueryChanged | MoveCursor | Confirm | Back | ToggleResolution | Cancel
CompletionEvent = ForecastLoaded | ForecastFailed
Event = InputEvent | CompletionEvent


@dataclass(frozen=True)
class FetchForecast:
    """Command: fetch a forecast and report back with the same request id."""

    request_id: int
    location_id: str
    resolution: Resolution
