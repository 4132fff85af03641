"""Site data store: the forecast currently loaded for one location."""

import logging
from collections.abc import Callable

from forecast.ingest.datapoint_client import FetchError
from forecast.models.common import Resolution
from forecast.models.forecast import NormalizedForecast, RawForecast, SiteForecast
from forecast.nav.normalizer import normalize

logger = logging.getLogger(__name__)

ForecastFetch = Callable[[str, Resolution], SiteForecast]


class StaleReferenceError(IndexError):
    """Raised when a selection indexes data that is no longer loaded."""


def normalize_site(site: SiteForecast) -> list[NormalizedForecast]:
    """Normalize every forecast, day by day in the order received."""
    return [
        normalize(period, p_index, raw, f_index, site.resolution)
        for p_index, period in enumerate(site.periods)
        for f_index, raw in enumerate(period.forecasts)
    ]


class SiteDataStore:
    """Holds at most one location's forecast at one resolution.

    Each load replaces the previous data wholesale; normalized items from an
    earlier load must not be used against a later one.
    """

    def __init__(self) -> None:
        self._site: SiteForecast | None = None
        self._items: tuple[NormalizedForecast, ...] = ()

    @property
    def site(self) -> SiteForecast | None:
        return self._site

    @property
    def items(self) -> tuple[NormalizedForecast, ...]:
        return self._items

    @property
    def location_id(self) -> str | None:
        return self._site.location_id if self._site else None

    @property
    def resolution(self) -> Resolution | None:
        return self._site.resolution if self._site else None

    def load(
        self, location_id: str, resolution: Resolution, fetch: ForecastFetch
    ) -> tuple[NormalizedForecast, ...]:
        """Fetch a location's forecast and make it the loaded data."""
        try:
            site = fetch(location_id, resolution)
        except FetchError:
            raise
        except Exception as e:
            logger.exception("Forecast fetch for %s failed", location_id)
            raise FetchError(f"Could not fetch forecast for {location_id}: {e}") from e
        return self.install(site)

    def install(self, site: SiteForecast) -> tuple[NormalizedForecast, ...]:
        """Normalize ``site`` and swap it in.

        Nothing is replaced unless every record normalizes; an empty forecast
        is a fetch failure.
        """
        if not site.periods:
            raise FetchError(f"No forecast periods returned for {site.location_id}")
        items = tuple(normalize_site(site))
        self._site = site
        self._items = items
        logger.debug(
            "Loaded %d %s forecasts for %s", len(items), site.resolution, site.location_id
        )
        return items

    def resolve_selection(self, period_index: int, forecast_index: int) -> RawForecast:
        if self._site is None:
            raise StaleReferenceError("No forecast data is loaded")
        periods = self._site.periods
        if not 0 <= period_index < len(periods):
            raise StaleReferenceError(f"Period index {period_index} out of range")
        forecasts = periods[period_index].forecasts
        if not 0 <= forecast_index < len(forecasts):
            raise StaleReferenceError(
                f"Forecast index {forecast_index} out of range for period {period_index}"
            )
        return forecasts[forecast_index]

    def clear(self) -> None:
        self._site = None
        self._items = ()
