"""Common types and helpers shared across models."""

from datetime import UTC, datetime
from enum import StrEnum


class Resolution(StrEnum):
    # Values double as the DataPoint ``res=`` query parameter
    DAILY = "daily"
    THREE_HOURLY = "3hourly"

    def toggled(self) -> "Resolution":
        if self is Resolution.DAILY:
            return Resolution.THREE_HOURLY
        return Resolution.DAILY


class NavigationState(StrEnum):
    SEARCH = "search"
    LOCATION_LIST = "location_list"
    FORECAST_DETAIL = "forecast_detail"


def utc_now() -> datetime:
    return datetime.now(UTC)


def utc_now_iso() -> str:
    return utc_now().isoformat()
