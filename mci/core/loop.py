from collections.abc import Callable, Sequence
from mci.common.logger import log
from mci.core.events import EventKind, InputEvent
from mci.core.tracker import IntervalTracker

DEFAULT_QUIT_KEY = "q"

# Main loop of the app. Draws the tracker's current intervals, then blocks on the next input event, until the quit
# key shows up. The tracker is owned by the caller and passed in, nothing here keeps state between runs. Errors from
# the source or sink are not caught, they go straight up to whoever owns the terminal. Returns how many clicks were
# processed.
def run_loop(
        tracker: IntervalTracker,
        source: Callable[[], InputEvent],
        sink: Callable[[Sequence[int]], None],
        quit_key: str = DEFAULT_QUIT_KEY
) -> int:
    clicks = 0
    while True:
        sink(tracker.snapshot())

        event = source()
        if event.kind is EventKind.MOUSE_PRESS:
            tracker.on_click()
            clicks += 1
        elif event.is_key(quit_key):
            log.info(f"Quit key '{quit_key}' pressed after {clicks} clicks")
            return clicks
