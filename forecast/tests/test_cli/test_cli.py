"""Tests for CLI commands."""

from pathlib import Path

import httpx
import pytest
import respx
import yaml

from forecast.cli import main
from forecast.tests.factories import load_json

BASE = "https://test-datapoint.example.com/public/data"
SITELIST_URL = f"{BASE}/val/wxfcs/all/json/sitelist"
SITE_URL = f"{BASE}/val/wxfcs/all/json/3"


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    path = tmp_path / "forecast.yaml"
    with open(path, "w") as f:
        yaml.dump(
            {"datapoint": {"api_key": "test-key", "base_url": BASE, "max_retries": 0}},
            f,
        )
    return path


class TestCLI:
    def test_no_command_returns_1(self, capsys):
        assert main([]) == 1

    def test_config_show(self, config_path: Path, capsys):
        result = main(["--config", str(config_path), "config", "show"])
        assert result == 0
        out = capsys.readouterr().out
        assert "daily" in out
        assert "test-key" not in out

    def test_config_show_key(self, config_path: Path, capsys):
        result = main(["--config", str(config_path), "config", "show", "datapoint.max_retries"])
        assert result == 0
        assert capsys.readouterr().out.strip() == "0"

    def test_config_show_bad_key(self, config_path: Path, capsys):
        result = main(["--config", str(config_path), "config", "show", "nope.nothing"])
        assert result == 1

    @respx.mock
    def test_search(self, config_path: Path, capsys):
        respx.get(SITELIST_URL, params={"key": "test-key"}).mock(
            return_value=httpx.Response(200, json=load_json("datapoint_sitelist.json"))
        )
        result = main(["--config", str(config_path), "search", "bri"])
        assert result == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].startswith("Bristol")
        assert {line.split()[0] for line in lines} == {"Bristol", "Brighton"}

    @respx.mock
    def test_search_no_match(self, config_path: Path, capsys):
        respx.get(SITELIST_URL, params={"key": "test-key"}).mock(
            return_value=httpx.Response(200, json=load_json("datapoint_sitelist.json"))
        )
        assert main(["--config", str(config_path), "search", "xyz"]) == 1

    @respx.mock
    def test_empty_sitelist_is_fatal(self, config_path: Path, capsys):
        respx.get(SITELIST_URL, params={"key": "test-key"}).mock(
            return_value=httpx.Response(200, json={"Locations": {"Location": []}})
        )
        assert main(["--config", str(config_path), "search", "bri"]) == 2

    @respx.mock
    def test_show(self, config_path: Path, capsys):
        respx.get(SITE_URL, params={"key": "test-key", "res": "daily"}).mock(
            return_value=httpx.Response(200, json=load_json("datapoint_daily.json"))
        )
        result = main(["--config", str(config_path), "show", "3"])
        assert result == 0
        out = capsys.readouterr().out
        assert out.startswith("BRISTOL, ENGLAND")
        assert "Mon, 15 Jan 2024 (Day): Cloudy | 6°C | 11mph" in out
        assert "Tue, 16 Jan 2024 (Night)" in out

    @respx.mock
    def test_show_fetch_failure(self, config_path: Path, capsys):
        respx.get(SITE_URL, params={"key": "test-key", "res": "3hourly"}).mock(
            return_value=httpx.Response(500)
        )
        result = main(["--config", str(config_path), "show", "3", "--resolution", "3hourly"])
        assert result == 1
        assert "HTTP 500" in capsys.readouterr().out

    def test_missing_api_key(self, tmp_path: Path, monkeypatch, capsys):
        monkeypatch.delenv("MET_OFFICE_API_KEY", raising=False)
        result = main(["--config", str(tmp_path / "absent.yaml"), "search", "bri"])
        assert result == 1
        assert "MET_OFFICE_API_KEY" in capsys.readouterr().out
