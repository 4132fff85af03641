"""Tests for mapping input lines to events."""

from unittest.mock import MagicMock

from forecast.config.defaults import DEFAULT_KEY_BINDINGS
from forecast.models.common import NavigationState
from forecast.nav.controller import NavigationController
from forecast.nav.events import (
    Back,
    Cancel,
    Confirm,
    MoveCursor,
    QueryChanged,
    ToggleResolution,
)
from forecast.nav.location_index import LocationIndex
from forecast.nav.site_store import SiteDataStore
from forecast.ui.input import parse_input


class TestParseInput:
    def test_blank_line_confirms(self):
        assert parse_input("", NavigationState.SEARCH, DEFAULT_KEY_BINDINGS) == Confirm()
        assert parse_input("  ", NavigationState.LOCATION_LIST, DEFAULT_KEY_BINDINGS) == Confirm()

    def test_text_is_query_on_search(self):
        event = parse_input(" bri ", NavigationState.SEARCH, DEFAULT_KEY_BINDINGS)
        assert event == QueryChanged("bri")

    def test_unbound_text_ignored_elsewhere(self):
        assert parse_input("bri", NavigationState.LOCATION_LIST, DEFAULT_KEY_BINDINGS) is None

    def test_bindings(self):
        state = NavigationState.LOCATION_LIST
        assert parse_input(":b", state, DEFAULT_KEY_BINDINGS) == Back()
        assert parse_input("esc", state, DEFAULT_KEY_BINDINGS) == Back()
        assert parse_input(":r", state, DEFAULT_KEY_BINDINGS) == ToggleResolution()
        assert parse_input(":n", state, DEFAULT_KEY_BINDINGS) == MoveCursor(1)
        assert parse_input(":p", state, DEFAULT_KEY_BINDINGS) == MoveCursor(-1)
        assert parse_input(":q", state, DEFAULT_KEY_BINDINGS) == Cancel()

    def test_bindings_win_on_search(self):
        assert parse_input(":q", NavigationState.SEARCH, DEFAULT_KEY_BINDINGS) == Cancel()

    def test_clear_query_binding(self):
        event = parse_input(":c", NavigationState.SEARCH, DEFAULT_KEY_BINDINGS)
        assert event == QueryChanged("")

    def test_clear_query_restores_all_rows(self, two_city_index: LocationIndex):
        controller = NavigationController(two_city_index, SiteDataStore(), MagicMock())
        controller.dispatch(parse_input("bri", controller.state, DEFAULT_KEY_BINDINGS))
        assert [r.id for r in controller.view().rows] == ["B"]

        controller.dispatch(parse_input(":c", controller.state, DEFAULT_KEY_BINDINGS))
        view = controller.view()
        assert view.query == ""
        assert [r.id for r in view.rows] == ["A", "B"]
