"""Met Office DataPoint API client with retry and rate limit handling."""

import logging
import os
import time

import httpx

from forecast.models.common import Resolution

logger = logging.getLogger(__name__)

DATAPOINT_BASE_URL = "http://datapoint.metoffice.gov.uk/public/data"
DATAPOINT_API_KEY_ENV = "MET_OFFICE_API_KEY"
FORECAST_ENDPOINT = "val/wxfcs/all/json"


class FetchError(Exception):
    """Raised when forecast data cannot be fetched or decoded."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class DataPointClient:
    def __init__(
        self,
        api_key: str | None = None,
        base_url: str = DATAPOINT_BASE_URL,
        timeout: float = 10.0,
        max_retries: int = 3,
        retry_base_delay: float = 1.0,
    ):
        self.api_key = api_key or os.environ.get(DATAPOINT_API_KEY_ENV, "")
        if not self.api_key:
            raise FetchError(f"{DATAPOINT_API_KEY_ENV} not set")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_base_delay = retry_base_delay

    def get_sitelist(self) -> dict:
        """Fetch every forecast site DataPoint knows about."""
        return self._get(f"{FORECAST_ENDPOINT}/sitelist")

    def get_site_forecast(self, location_id: str, resolution: Resolution) -> dict:
        """Fetch the five day forecast for one site at the given resolution."""
        return self._get(
            f"{FORECAST_ENDPOINT}/{location_id}", {"res": str(resolution)}
        )

    def _get(self, endpoint: str, params: dict[str, str] | None = None) -> dict:
        """GET a DataPoint endpoint and decode the JSON body.

        Retries on 503/429 and transport errors with exponential backoff.
        """
        url = f"{self.base_url}/{endpoint}"
        query = {"key": self.api_key, **(params or {})}

        for attempt in range(self.max_retries + 1):
            try:
                resp = httpx.get(url, params=query, timeout=self.timeout)
            except httpx.RequestError as e:
                if attempt < self.max_retries:
                    delay = self.retry_base_delay * (2**attempt)
                    logger.warning(
                        "DataPoint request error, retrying in %.1fs: %s", delay, e
                    )
                    time.sleep(delay)
                    continue
                logger.error("DataPoint request failed: %s -> %s", endpoint, e)
                raise FetchError(f"Request failed: {e}") from e

            if resp.status_code in (503, 429) and attempt < self.max_retries:
                delay = self.retry_base_delay * (2**attempt)
                logger.warning(
                    "DataPoint %s returned %d, retrying in %.1fs (attempt %d/%d)",
                    endpoint, resp.status_code, delay, attempt + 1, self.max_retries,
                )
                time.sleep(delay)
                continue
            if resp.status_code >= 400:
                logger.error("DataPoint %d: %s", resp.status_code, endpoint)
                raise FetchError(
                    f"HTTP {resp.status_code} from {endpoint}", resp.status_code
                )
            try:
                return resp.json()
            except ValueError as e:
                raise FetchError(f"Invalid JSON from {endpoint}: {e}") from e

        raise FetchError(f"Retries exhausted for {endpoint}")
