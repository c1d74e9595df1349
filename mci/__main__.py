import sys
from mci.common.logger import log
from mci.common.setup import PATHS
from mci.ui.app import main

# Entry point for `python -m mci` and the `mci` console script
def run() -> None:
    try:
        sys.exit(main())
    except SystemExit:
        raise
    except KeyboardInterrupt:
        log.info("Interrupted, exiting")
        sys.exit(0)
    except Exception:
        # Full stack trace, always. The terminal is already restored by the time we get here.
        log.exception("Uncaught exception in entrypoint, exiting")
        print(f"mci: fatal error, see {PATHS.logs / 'latest.log'} for details", file=sys.stderr)
        sys.exit(1)

if __name__ == "__main__":
    run()
