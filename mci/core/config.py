import argparse
import json
import math
from dataclasses import dataclass
from pathlib import Path
from mci import __version__
from mci.common.logger import log
from mci.common.setup import PATHS
from mci.core.loop import DEFAULT_QUIT_KEY
from mci.core.tracker import NS_PER_MS

NS_PER_SEC = 1_000_000_000

#region === Helpers and Defaults ===

SETTINGS_PATH = PATHS.settings

# Default values for everything the settings file and the command line can set.
_SETTINGS_DEFAULTS = {
    "sec": 1.0,
    "millisecond": 0,
    "quit_key": DEFAULT_QUIT_KEY,
}

# Resolved configuration for a single run.
@dataclass(frozen=True)
class AppConfig:
    threshold_ns: int
    quit_key: str = DEFAULT_QUIT_KEY
    debug: bool = False
    settings_path: Path | None = None

    @property
    def threshold_ms(self):
        return self.threshold_ns // NS_PER_MS

# Millisecond threshold wins whenever it's non-zero, otherwise seconds are used.
def resolve_threshold_ns(sec, millisecond):
    if millisecond:
        return int(millisecond) * NS_PER_MS
    return int(round(float(sec) * NS_PER_SEC))

# Seconds have to survive the conversion to nanoseconds, so 1e300 is as invalid as inf. Ints too big for a float
# raise OverflowError on conversion, which also just means invalid.
def _is_valid_sec(value):
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    try:
        seconds = float(value)
    except OverflowError:
        return False
    return seconds >= 0 and math.isfinite(seconds * NS_PER_SEC)
def _is_valid_millisecond(value):
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0
def _is_valid_quit_key(value):
    return isinstance(value, str) and len(value) == 1 and value.isascii() and value.isprintable()

_VALIDATORS = {
    "sec": _is_valid_sec,
    "millisecond": _is_valid_millisecond,
    "quit_key": _is_valid_quit_key,
}

#endregion === Helpers and Defaults ===

#region === Settings File ===

# Loads the optional settings file, filling in defaults for anything missing or invalid. A missing file is normal
# and just means defaults, a broken one is logged and also falls back to defaults.
def load_settings(path=None):
    path = Path(path) if path is not None else SETTINGS_PATH
    settings = dict(_SETTINGS_DEFAULTS)
    if not path.exists():
        log.info(f"No settings file found at '{path}', using defaults.")
        return settings

    try:
        with open(path, "r", encoding="utf-8") as f:
            loaded = json.load(f)
    except (json.JSONDecodeError, OSError, UnicodeDecodeError):
        log.warning(f"Ran into an error while trying to load settings from '{path}', falling back to defaults.",exc_info=True)
        return settings

    if not isinstance(loaded, dict):
        log.warning(f"Settings file '{path}' does not hold a JSON object, falling back to defaults.")
        return settings

    defaulted_values = set()
    for key in _SETTINGS_DEFAULTS:
        if key not in loaded:
            continue
        if _VALIDATORS[key](loaded[key]):
            settings[key] = loaded[key]
        else:
            defaulted_values.add(key)

    unknown = set(loaded) - set(_SETTINGS_DEFAULTS)
    if unknown:
        log.warning(f"Ignoring unknown keys in settings file '{path}': {', '.join(sorted(unknown))}")
    if defaulted_values:
        log.warning(f"Loaded settings from '{path}', but with invalid values that were defaulted: {', '.join(sorted(defaulted_values))}")
    else:
        log.info(f"Successfully loaded settings from '{path}'.")
    return settings

#endregion === Settings File ===

#region === Command Line ===

def _non_negative_float(text):
    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: '{text}'")
    if not _is_valid_sec(value):
        raise argparse.ArgumentTypeError(f"must be a number >= 0 small enough to convert to nanoseconds, got '{text}'")
    return value
def _non_negative_int(text):
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: '{text}'")
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got '{text}'")
    return value
def _single_char(text):
    if not _is_valid_quit_key(text):
        raise argparse.ArgumentTypeError(f"must be a single printable ASCII character, got '{text}'")
    return text

# Builds the full parser. Defaults come from the settings file so that flags given on the command line always win.
def build_parser(defaults=None):
    defaults = defaults or _SETTINGS_DEFAULTS
    parser = argparse.ArgumentParser(
        prog="mci",
        description="Show the time between mouse clicks, in milliseconds, in the terminal."
    )
    parser.add_argument(
        "-s", "--sec",
        type=_non_negative_float,
        default=defaults["sec"],
        help=f"detect sec time for mouse click (default: {defaults['sec']})"
    )
    parser.add_argument(
        "-m", "--millisecond",
        type=_non_negative_int,
        default=defaults["millisecond"],
        help=f"threshold in milliseconds, overrides --sec when non-zero (default: {defaults['millisecond']})"
    )
    parser.add_argument(
        "--quit-key",
        type=_single_char,
        default=defaults["quit_key"],
        help=f"key that exits the app (default: {defaults['quit_key']})"
    )
    parser.add_argument(
        "--settings",
        type=Path,
        default=None,
        help=f"JSON settings file (default: {SETTINGS_PATH})"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="write debug messages to the log files"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    return parser

# Parses argv in two passes, first just to find the settings file, then for real with its values as defaults.
def parse_args(argv=None):
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument("--settings", type=Path, default=None)
    known, _ = pre_parser.parse_known_args(argv)

    settings = load_settings(known.settings)
    args = build_parser(settings).parse_args(argv)

    return AppConfig(
        threshold_ns=resolve_threshold_ns(args.sec, args.millisecond),
        quit_key=args.quit_key,
        debug=args.debug,
        settings_path=args.settings or SETTINGS_PATH,
    )

#endregion === Command Line ===
