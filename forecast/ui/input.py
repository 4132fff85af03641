"""Map entered lines to controller events."""

from collections.abc import Mapping

from forecast.config.schema import Action
from forecast.models.common import NavigationState
from forecast.nav.events import (
    Back,
    Cancel,
    Confirm,
    InputEvent,
    MoveCursor,
    QueryChanged,
    ToggleResolution,
)

_ACTION_EVENTS: dict[Action, InputEvent] = {
    Action.CONFIRM: Confirm(),
    Action.BACK: Back(),
    Action.TOGGLE_RESOLUTION: ToggleResolution(),
    Action.UP: MoveCursor(-1),
    Action.DOWN: MoveCursor(1),
    Action.CANCEL: Cancel(),
    Action.CLEAR_QUERY: QueryChanged(""),
}


def parse_input(
    line: str, state: NavigationState, bindings: Mapping[str, Action]
) -> InputEvent | None:
    """Translate one line of input, or None if it means nothing here.

    On the search screen any unbound text replaces the query.
    """
    token = line.strip()
    action = bindings.get(token)
    if action is not None:
        return _ACTION_EVENTS[action]
    if state == NavigationState.SEARCH:
        return QueryChanged(token)
    return None
