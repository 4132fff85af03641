"""Interactive event loop for the forecast browser.

One asyncio queue feeds the controller, so events are applied strictly one at
a time. Forecast fetches run on daemon threads and post their result back
onto the same queue; nothing waits for them on exit, so a hung request never
delays Cancel. Input lines are read on a daemon thread, and the next line is
requested as soon as the previous one has been applied, loading or not.
"""

import asyncio
import logging
import sys
import threading
from collections.abc import Callable, Mapping

from forecast.config.schema import Action
from forecast.ingest.datapoint_client import FetchError
from forecast.nav.controller import NavigationController
from forecast.nav.events import (
    CompletionEvent,
    FetchForecast,
    ForecastFailed,
    ForecastLoaded,
)
from forecast.nav.site_store import ForecastFetch
from forecast.ui.input import parse_input
from forecast.ui.render import render

logger = logging.getLogger(__name__)

PROMPT = "> "
CLEAR_SCREEN = "\033[2J\033[H"

# Queue items: a raw input line, a fetch completion, or None at end of input
_QueueItem = str | CompletionEvent | None


def _write_stdout(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


def _post(loop: asyncio.AbstractEventLoop, queue: asyncio.Queue, item: _QueueItem) -> None:
    """Hand an item to the event loop from a worker thread."""
    try:
        loop.call_soon_threadsafe(queue.put_nowait, item)
    except RuntimeError:
        # Loop already closed: the browser exited while this thread ran
        logger.debug("Event loop closed, dropping %r", item)


class Runtime:
    def __init__(
        self,
        controller: NavigationController,
        fetch: ForecastFetch,
        bindings: Mapping[str, Action],
        read_line: Callable[[], str] = input,
        write: Callable[[str], None] = _write_stdout,
        clear_screen: bool = True,
    ):
        self.controller = controller
        self.fetch = fetch
        self.bindings = bindings
        self.read_line = read_line
        self.write = write
        self.clear_screen = clear_screen
        self._ready = threading.Event()

    async def run(self) -> None:
        loop = asyncio.get_running_loop()
        queue: asyncio.Queue[_QueueItem] = asyncio.Queue()

        reader = threading.Thread(
            target=self._read_input, args=(loop, queue), daemon=True, name="input"
        )
        reader.start()
        self._redraw()
        self._ready.set()

        while not self.controller.finished:
            item = await queue.get()
            if item is None:
                logger.info("Input closed, exiting")
                break
            self._process(item, loop, queue)
            self._redraw()
            if isinstance(item, str):
                self._ready.set()

    def _process(
        self,
        item: str | CompletionEvent,
        loop: asyncio.AbstractEventLoop,
        queue: asyncio.Queue,
    ) -> None:
        if isinstance(item, str):
            event = parse_input(item, self.controller.state, self.bindings)
            if event is None:
                return
        else:
            event = item

        command = self.controller.dispatch(event)
        if command is not None:
            threading.Thread(
                target=self._run_fetch,
                args=(command, loop, queue),
                daemon=True,
                name=f"fetch-{command.request_id}",
            ).start()

    def _run_fetch(
        self,
        command: FetchForecast,
        loop: asyncio.AbstractEventLoop,
        queue: asyncio.Queue,
    ) -> None:
        result: CompletionEvent
        try:
            site = self.fetch(command.location_id, command.resolution)
        except FetchError as e:
            result = ForecastFailed(command.request_id, str(e))
        except Exception as e:
            logger.exception("Unexpected error fetching %s", command.location_id)
            result = ForecastFailed(command.request_id, str(e))
        else:
            result = ForecastLoaded(command.request_id, site)
        _post(loop, queue, result)

    def _redraw(self) -> None:
        if self.controller.finished:
            return
        screen = render(self.controller.view())
        if self.clear_screen:
            screen = CLEAR_SCREEN + screen
        self.write(screen + PROMPT)

    def _read_input(self, loop: asyncio.AbstractEventLoop, queue: asyncio.Queue) -> None:
        while True:
            self._ready.wait()
            self._ready.clear()
            try:
                line: _QueueItem = self.read_line()
            except EOFError:
                line = None
            _post(loop, queue, line)
            if line is None:
                return
