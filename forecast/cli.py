"""CLI entry point for the forecast browser."""

import argparse
import asyncio
import logging

from forecast.config.loader import get_config_value, load_config
from forecast.config.schema import AppConfig
from forecast.ingest.datapoint_client import DataPointClient, FetchError
from forecast.ingest.site_fetcher import SiteFetcher
from forecast.models.common import Resolution
from forecast.nav.controller import NavigationController
from forecast.nav.location_index import EmptyIndexError, LocationIndex, build_rows
from forecast.nav.site_store import SiteDataStore
from forecast.nav.view_models import build_items
from forecast.ui.runtime import Runtime

DEFAULT_CONFIG = "forecast.yaml"
DEFAULT_LOG_FILE = "forecast.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="forecast",
        description="Browse Met Office DataPoint forecasts in the terminal",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    parser.add_argument(
        "--log-file",
        default=DEFAULT_LOG_FILE,
        help="Log file used by the interactive browser",
    )

    sub = parser.add_subparsers(dest="command")

    # browse
    browse_p = sub.add_parser("browse", help="Interactive forecast browser")
    browse_p.add_argument("--resolution", choices=[r.value for r in Resolution])

    # search
    search_p = sub.add_parser("search", help="Fuzzy search forecast sites")
    search_p.add_argument("query", help="Placename to search for")

    # show
    show_p = sub.add_parser("show", help="Print the forecast for a site")
    show_p.add_argument("location_id", help="DataPoint site id")
    show_p.add_argument(
        "--resolution",
        choices=[r.value for r in Resolution],
        default=Resolution.DAILY.value,
    )

    # config show
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    show_cfg_p = config_sub.add_parser("show", help="Display current config")
    show_cfg_p.add_argument("key", nargs="?", help="Dotted key to display")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == "browse":
        logging.basicConfig(
            level=args.log_level.upper(), format=LOG_FORMAT, filename=args.log_file
        )
    else:
        logging.basicConfig(level=args.log_level.upper(), format=LOG_FORMAT)

    config = load_config(args.config)

    if args.command == "config":
        return _cmd_config(config, args)

    try:
        fetcher = _make_fetcher(config)
        if args.command == "browse":
            return _cmd_browse(config, fetcher, args)
        elif args.command == "search":
            return _cmd_search(fetcher, args)
        elif args.command == "show":
            return _cmd_show(fetcher, args)
    except FetchError as e:
        print(f"Error: {e}")
        return 1
    except EmptyIndexError as e:
        print(f"Error: {e}")
        return 2

    parser.print_help()
    return 1


def _make_fetcher(config: AppConfig) -> SiteFetcher:
    dp = config.datapoint
    client = DataPointClient(
        api_key=dp.api_key,
        base_url=dp.base_url,
        timeout=dp.timeout_seconds,
        max_retries=dp.max_retries,
        retry_base_delay=dp.retry_base_delay,
    )
    return SiteFetcher(client)


def _load_index(fetcher: SiteFetcher) -> LocationIndex:
    index = LocationIndex()
    index.load(build_rows(fetcher.fetch_sitelist()))
    return index


def _cmd_browse(config: AppConfig, fetcher: SiteFetcher, args) -> int:
    index = _load_index(fetcher)
    resolution = Resolution(args.resolution or config.ui.default_resolution)
    controller = NavigationController(
        index, SiteDataStore(), resolution=resolution, asynchronous=True
    )
    runtime = Runtime(controller, fetcher.fetch_forecast, config.ui.key_bindings)
    try:
        asyncio.run(runtime.run())
    except KeyboardInterrupt:
        logger.info("Interrupted")
    return 0


def _cmd_search(fetcher: SiteFetcher, args) -> int:
    index = _load_index(fetcher)
    rows = index.filter(args.query)
    if not rows:
        print(f"No places match {args.query!r}")
        return 1
    for row in rows:
        print(f"{row.name:<40} {row.id:<10} {row.region}")
    return 0


def _cmd_show(fetcher: SiteFetcher, args) -> int:
    store = SiteDataStore()
    store.load(args.location_id, Resolution(args.resolution), fetcher.fetch_forecast)
    site = store.site
    assert site is not None
    print(site.header)
    for item in build_items(site, store.items):
        print(f"  {item.title}: {item.summary}")
    return 0


def _cmd_config(config: AppConfig, args) -> int:
    if args.config_command != "show":
        print("Use: config show [key]")
        return 1
    if args.key is None:
        print(config.model_dump_json(indent=2, exclude={"datapoint": {"api_key"}}))
        return 0
    try:
        value = get_config_value(config, args.key)
    except (KeyError, AttributeError) as e:
        print(f"Error: {e}")
        return 1
    print(value)
    return 0
