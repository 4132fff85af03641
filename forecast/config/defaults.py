"""Default key bindings for the interactive browser.

Each entered line is matched against these tokens; an empty line confirms.
"""

from forecast.config.schema import Action

DEFAULT_KEY_BINDINGS: dict[str, Action] = {
    "": Action.CONFIRM,
    ":b": Action.BACK,
    "esc": Action.BACK,
    ":r": Action.TOGGLE_RESOLUTION,
    ":n": Action.DOWN,
    ":p": Action.UP,
    ":q": Action.CANCEL,
    "quit": Action.CANCEL,
    ":c": Action.CLEAR_QUERY,
}
