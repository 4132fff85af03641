"""Shared test fixtures."""

from pathlib import Path

import pytest
import yaml

from forecast.ingest.site_decoder import decode_site_forecast
from forecast.models.common import Resolution
from forecast.models.forecast import SiteForecast
from forecast.models.site import LocationRow
from forecast.nav.location_index import LocationIndex
from forecast.tests.factories import FIXTURE_DIR, load_json


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURE_DIR


@pytest.fixture
def daily_site() -> SiteForecast:
    return decode_site_forecast(load_json("datapoint_daily.json"), Resolution.DAILY)


@pytest.fixture
def hourly_site() -> SiteForecast:
    return decode_site_forecast(
        load_json("datapoint_3hourly.json"), Resolution.THREE_HOURLY
    )


@pytest.fixture
def two_city_index() -> LocationIndex:
    index = LocationIndex()
    index.load([
        LocationRow(name="Aberdeen", id="A", region="gr"),
        LocationRow(name="Bristol", id="B", region="sw"),
    ])
    return index


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "datapoint": {"api_key": "yaml-key", "timeout_seconds": 5.0},
        "ui": {"default_resolution": "3hourly"},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
