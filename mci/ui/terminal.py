import curses
from contextlib import contextmanager
from mci.common.logger import log
from mci.core.events import InputEvent

# Any of these bits on a mouse report counts as a button going down. CLICKED is there for terminals that only
# report whole clicks, with mouseinterval(0) ncurses otherwise sends PRESSED and RELEASED separately.
_PRESS_MASK = (
    curses.BUTTON1_PRESSED | curses.BUTTON2_PRESSED | curses.BUTTON3_PRESSED
    | curses.BUTTON1_CLICKED | curses.BUTTON2_CLICKED | curses.BUTTON3_CLICKED
)

# Turns a raw curses mouse button state into an event.
def classify_mouse(bstate):
    if bstate & _PRESS_MASK:
        return InputEvent.mouse_press()
    return InputEvent.mouse_other()

# Turns the result of getch() into an event, reading the mouse report if needed. getmouse() raises for reports
# ncurses couldn't decode, those just count as "some other mouse event".
def classify_key(code):
    if code == curses.KEY_MOUSE:
        try:
            _, _, _, _, bstate = curses.getmouse()
        except curses.error:
            return InputEvent.mouse_other()
        return classify_mouse(bstate)
    if code == curses.KEY_RESIZE:
        return InputEvent.other()
    # Only plain ASCII characters count as keys, everything above that is a keypad/function key code
    if 0x20 <= code < 0x7f:
        return InputEvent.key_press(chr(code))
    return InputEvent.other()

# Input source: blocks on the screen for the next event. getch() returning -1 means the read itself failed, which
# isn't recoverable in blocking mode.
class TerminalInput:

    def __init__(self, screen):
        self.screen = screen

    def __call__(self):
        code = self.screen.getch()
        if code == -1:
            raise curses.error("getch() failed while waiting for input")
        return classify_key(code)

# Each teardown step runs on its own so one failing doesn't skip the rest.
def _restore_step(description, func, *args):
    try:
        func(*args)
    except curses.error:
        log.warning(f"Failed to {description} while restoring the terminal", exc_info=True)

# Puts the terminal into raw, alternate-screen mode with mouse capture and yields the main window. Everything is
# undone on the way out, whether the body returned or raised.
@contextmanager
def terminal_session():
    screen = curses.initscr()
    log.debug("Entered alternate screen")
    try:
        curses.noecho()
        curses.raw()
        screen.keypad(True)
        try:
            curses.curs_set(0)
        except curses.error:
            log.debug("Terminal can't hide the cursor, leaving it visible")
        curses.mousemask(curses.ALL_MOUSE_EVENTS)
        curses.mouseinterval(0)
        log.debug("Enabled raw mode and mouse capture")
        yield screen
    finally:
        _restore_step("disable mouse capture", curses.mousemask, 0)
        _restore_step("show the cursor", curses.curs_set, 1)
        _restore_step("disable keypad mode", screen.keypad, False)
        _restore_step("leave raw mode", curses.noraw)
        _restore_step("restore echo", curses.echo)
        _restore_step("leave the alternate screen", curses.endwin)
        log.debug("Restored terminal")
