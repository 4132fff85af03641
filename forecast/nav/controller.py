"""Navigation controller: the search -> list -> detail state machine.

All input goes through ``dispatch``; only the handler for the active screen
runs. In asynchronous mode, transitions that need a forecast return a
FetchForecast command and wait in a loading sub-state until a matching
ForecastLoaded or ForecastFailed event arrives. While loading, only Cancel
is honoured.
"""

import logging
from dataclasses import dataclass

from forecast.ingest.datapoint_client import FetchError
from forecast.models.common import NavigationState, Resolution
from forecast.models.forecast import NormalizedForecast
from forecast.models.site import LocationRow
from forecast.nav.events import (
    Back,
    Cancel,
    Confirm,
    Event,
    FetchForecast,
    ForecastFailed,
    ForecastLoaded,
    MoveCursor,
    QueryChanged,
    ToggleResolution,
)
from forecast.nav.location_index import LocationIndex
from forecast.nav.normalizer import UnrecognizedForecastShapeError, normalize
from forecast.nav.site_store import ForecastFetch, SiteDataStore, StaleReferenceError
from forecast.nav.view_models import (
    DetailView,
    ForecastItem,
    LocationListView,
    SearchView,
    View,
    build_items,
)

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Something went wrong, please try again"


@dataclass(frozen=True)
class _PendingLoad:
    request_id: int
    location_id: str
    resolution: Resolution


class NavigationController:
    def __init__(
        self,
        index: LocationIndex,
        store: SiteDataStore,
        fetch: ForecastFetch | None = None,
        resolution: Resolution = Resolution.DAILY,
        asynchronous: bool = False,
    ):
        if fetch is None and not asynchronous:
            raise ValueError("a fetch callable is required in synchronous mode")
        self.index = index
        self.store = store
        self.fetch = fetch
        self.asynchronous = asynchronous

        self.state = NavigationState.SEARCH
        self.resolution = resolution
        self.query = ""
        self.rows: tuple[LocationRow, ...] = tuple(index.filter(""))
        self.search_cursor = 0
        self.items: tuple[ForecastItem, ...] = ()
        self.list_cursor = 0
        self.detail: DetailView | None = None
        self.error: str | None = None
        self.finished = False

        self._pending: _PendingLoad | None = None
        self._next_request_id = 1
        self._handlers = {
            NavigationState.SEARCH: self._on_search,
            NavigationState.LOCATION_LIST: self._on_location_list,
            NavigationState.FORECAST_DETAIL: self._on_detail,
        }

    @property
    def loading(self) -> bool:
        return self._pending is not None

    def dispatch(self, event: Event) -> FetchForecast | None:
        """Apply one event. Returns a fetch command when one must be run."""
        if self.finished:
            return None
        if isinstance(event, Cancel):
            logger.info("Cancel received in %s, exiting", self.state)
            self._pending = None
            self.finished = True
            return None
        if isinstance(event, (ForecastLoaded, ForecastFailed)):
            self._complete(event)
            return None
        if self._pending is not None:
            logger.debug("Ignoring %s while loading", type(event).__name__)
            return None

        self.error = None
        return self._handlers[self.state](event)

    def view(self) -> View:
        if self.state == NavigationState.SEARCH:
            return SearchView(
                query=self.query,
                rows=self.rows,
                cursor=self.search_cursor,
                loading=self.loading,
                error=self.error,
            )
        if self.state == NavigationState.LOCATION_LIST:
            site = self.store.site
            return LocationListView(
                header=site.header if site else "",
                items=self.items,
                cursor=self.list_cursor,
                resolution=self.resolution,
                loading=self.loading,
                error=self.error,
            )
        assert self.detail is not None
        return DetailView(
            location_name=self.detail.location_name,
            title=self.detail.title,
            forecast=self.detail.forecast,
            loading=self.loading,
            error=self.error,
        )

    # --- Screen handlers ---

    def _on_search(self, event: Event) -> FetchForecast | None:
        if isinstance(event, QueryChanged):
            self.query = event.text
            self.rows = tuple(self.index.filter(event.text))
            self.search_cursor = 0
        elif isinstance(event, MoveCursor):
            self.search_cursor = _clamp(self.search_cursor + event.delta, len(self.rows))
        elif isinstance(event, Confirm):
            if not self.rows:
                return None
            row = self.rows[self.search_cursor]
            logger.info("Selected location %s (%s)", row.name, row.id)
            return self._start_load(row.id, self.resolution)
        return None

    def _on_location_list(self, event: Event) -> FetchForecast | None:
        if isinstance(event, MoveCursor):
            self.list_cursor = _clamp(self.list_cursor + event.delta, len(self.items))
        elif isinstance(event, Confirm):
            if self.items:
                self._open_detail(self.items[self.list_cursor])
        elif isinstance(event, ToggleResolution):
            location_id = self.store.location_id
            if location_id is not None:
                return self._start_load(location_id, self.resolution.toggled())
        elif isinstance(event, Back):
            self.store.clear()
            self.items = ()
            self.list_cursor = 0
            self.query = ""
            self.rows = tuple(self.index.filter(""))
            self.search_cursor = 0
            self.state = NavigationState.SEARCH
        return None

    def _on_detail(self, event: Event) -> FetchForecast | None:
        if isinstance(event, Back):
            self.detail = None
            self.state = NavigationState.LOCATION_LIST
        return None

    # --- Transitions ---

    def _open_detail(self, item: ForecastItem) -> None:
        site = self.store.site
        try:
            raw = self.store.resolve_selection(item.period_index, item.forecast_index)
        except StaleReferenceError:
            logger.exception(
                "Selected item (%d, %d) does not match loaded data",
                item.period_index, item.forecast_index,
            )
            self.error = GENERIC_ERROR
            return

        assert site is not None
        forecast: NormalizedForecast = normalize(
            site.periods[item.period_index],
            item.period_index,
            raw,
            item.forecast_index,
            site.resolution,
        )
        self.detail = DetailView(
            location_name=site.name, title=item.title, forecast=forecast
        )
        self.state = NavigationState.FORECAST_DETAIL

    def _start_load(self, location_id: str, resolution: Resolution) -> FetchForecast | None:
        if self.asynchronous:
            request = FetchForecast(
                request_id=self._next_request_id,
                location_id=location_id,
                resolution=resolution,
            )
            self._next_request_id += 1
            self._pending = _PendingLoad(request.request_id, location_id, resolution)
            logger.debug("Requesting %s forecast for %s", resolution, location_id)
            return request

        assert self.fetch is not None
        try:
            self.store.load(location_id, resolution, self.fetch)
        except (FetchError, UnrecognizedForecastShapeError) as e:
            self._fail(location_id, str(e))
            return None
        self._loaded(resolution)
        return None

    def _complete(self, event: ForecastLoaded | ForecastFailed) -> None:
        pending = self._pending
        if pending is None or event.request_id != pending.request_id:
            logger.debug("Dropping stale completion for request %d", event.request_id)
            return
        self._pending = None

        if isinstance(event, ForecastFailed):
            self._fail(pending.location_id, event.message)
            return
        try:
            self.store.install(event.site)
        except (FetchError, UnrecognizedForecastShapeError) as e:
            self._fail(pending.location_id, str(e))
            return
        self._loaded(pending.resolution)

    def _loaded(self, resolution: Resolution) -> None:
        site = self.store.site
        assert site is not None
        self.resolution = resolution
        self.items = build_items(site, self.store.items)
        self.list_cursor = 0
        self.state = NavigationState.LOCATION_LIST

    def _fail(self, location_id: str, message: str) -> None:
        logger.warning("Forecast load for %s failed: %s", location_id, message)
        self.error = f"Could not load forecast: {message}"


def _clamp(cursor: int, length: int) -> int:
    if length == 0:
        return 0
    return max(0, min(cursor, length - 1))
