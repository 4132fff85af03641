"""Site fetcher: the sitelist and per-site forecast calls used by the UI."""

import logging

from forecast.ingest.datapoint_client import DataPointClient, FetchError
from forecast.ingest.site_decoder import decode_site_forecast, decode_sitelist
from forecast.models.common import Resolution
from forecast.models.forecast import SiteForecast
from forecast.models.site import Location
from forecast.nav.normalizer import UnrecognizedForecastShapeError

logger = logging.getLogger(__name__)


class SiteFetcher:
    def __init__(self, client: DataPointClient):
        self.client = client

    def fetch_sitelist(self) -> list[Location]:
        raw = self.client.get_sitelist()
        locations = decode_sitelist(raw)
        logger.info("Fetched %d forecast sites", len(locations))
        return locations

    def fetch_forecast(self, location_id: str, resolution: Resolution) -> SiteForecast:
        """Fetch and decode a site's forecast.

        Upstream shape errors are reported as FetchError so callers handle a
        single failure type.
        """
        raw = self.client.get_site_forecast(location_id, resolution)
        try:
            site = decode_site_forecast(raw, resolution)
        except UnrecognizedForecastShapeError as e:
            logger.error("Unexpected forecast shape for site %s: %s", location_id, e)
            raise FetchError(str(e)) from e
        logger.info(
            "Fetched %s forecast for %s (%d periods)",
            resolution, location_id, len(site.periods),
        )
        return site
