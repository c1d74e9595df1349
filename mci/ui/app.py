import logging
from mci.common.logger import log, set_level
from mci.core.config import parse_args
from mci.core.loop import run_loop
from mci.core.tracker import IntervalTracker
from mci.ui.display import IntervalDisplay
from mci.ui.terminal import TerminalInput, terminal_session


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

# Runs the app until the quit key is pressed. The tracker is created here and handed to the loop, it lives exactly as
# long as this call.
def main(argv=None):
    config = parse_args(argv)
    if config.debug:
        set_level(logging.DEBUG)
    log.info(f"Starting with a threshold of {config.threshold_ms} ms, quit key '{config.quit_key}'")

    tracker = IntervalTracker(config.threshold_ns)
    with terminal_session() as screen:
        clicks = run_loop(
            tracker,
            source=TerminalInput(screen),
            sink=IntervalDisplay(screen),
            quit_key=config.quit_key,
        )

    log.info(f"Exited normally after {clicks} clicks")
    return 0
