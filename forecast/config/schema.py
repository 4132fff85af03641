"""Pydantic v2 configuration schema with strict validation."""

from enum import StrEnum

from pydantic import BaseModel, Field

from forecast.ingest.datapoint_client import DATAPOINT_BASE_URL
from forecast.models.common import Resolution


class Action(StrEnum):
    CONFIRM = "confirm"
    BACK = "back"
    TOGGLE_RESOLUTION = "toggle-resolution"
    UP = "up"
    DOWN = "down"
    CANCEL = "cancel"
    CLEAR_QUERY = "clear-query"


class DataPointConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = DATAPOINT_BASE_URL
    api_key: str = ""
    timeout_seconds: float = Field(default=10.0, gt=0.0)
    max_retries: int = Field(default=3, ge=0)
    retry_base_delay: float = Field(default=1.0, ge=0.0)


class UiConfig(BaseModel):
    model_config = {"extra": "forbid"}

    default_resolution: Resolution = Resolution.DAILY
    key_bindings: dict[str, Action] = {}


class AppConfig(BaseModel):
    model_config = {"extra": "forbid"}

    datapoint: DataPointConfig = DataPointConfig()
    ui: UiConfig = UiConfig()
