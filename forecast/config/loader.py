"""YAML config loader with environment fallback and dotted-key lookup."""

import os
from pathlib import Path
from typing import Any

import yaml

from forecast.config.defaults import DEFAULT_KEY_BINDINGS
from forecast.config.schema import AppConfig
from forecast.ingest.datapoint_client import DATAPOINT_API_KEY_ENV


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load and validate config from a YAML file.

    A missing file gives the defaults. If no key bindings are specified,
    injects DEFAULT_KEY_BINDINGS; if no API key is set, reads it from the
    MET_OFFICE_API_KEY environment variable.
    """
    raw: dict[str, Any] = {}
    if path is not None and Path(path).exists():
        with open(path) as f:
            raw = yaml.safe_load(f) or {}

    ui = raw.setdefault("ui", {}) or {}
    raw["ui"] = ui
    if not ui.get("key_bindings"):
        ui["key_bindings"] = {k: v.value for k, v in DEFAULT_KEY_BINDINGS.items()}

    datapoint = raw.setdefault("datapoint", {}) or {}
    raw["datapoint"] = datapoint
    if not datapoint.get("api_key"):
        datapoint["api_key"] = os.environ.get(DATAPOINT_API_KEY_ENV, "")

    return AppConfig(**raw)


def get_config_value(config: AppConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'datapoint.timeout_seconds'."""
    parts = dotted_key.split(".")
    obj: Any = config
    for part in parts:
        if isinstance(obj, dict):
            obj = obj[part]
        elif hasattr(obj, part):
            obj = getattr(obj, part)
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj
