"""Curses renderer for the interval list. Layout only, no timing logic."""

from mci.core.tracker import NS_PER_MS

PLACEHOLDER = "please click the mouse!"


def format_interval(interval_ns):
    """Format an interval as whole milliseconds, truncating like ``ns // 1e6``."""
    return f"{interval_ns // NS_PER_MS} ms"


def build_lines(snapshot):
    """Text lines to show for a tracker snapshot. Empty snapshots get the placeholder."""
    if not snapshot:
        return [PLACEHOLDER]
    return [format_interval(ns) for ns in snapshot]


def top_padding(height, line_count):
    """Rows to skip inside the border so the block of lines sits in the middle."""
    return max(0, (height - (2 + line_count)) // 2)


class IntervalDisplay:
    """Display sink: draws a bordered window with the lines centered in it.

    Called with the tracker snapshot once per loop iteration. Lines that don't
    fit are clipped instead of wrapping past the border.
    """

    def __init__(self, screen):
        self.screen = screen

    # Padding is based on the number of recorded values, so the placeholder sits where an empty list would.
    def __call__(self, snapshot):
        self.draw(build_lines(snapshot), len(snapshot))

    def draw(self, lines, line_count=None):
        if line_count is None:
            line_count = len(lines)
        screen = self.screen
        height, width = screen.getmaxyx()
        screen.erase()

        # Too small for a border, draw straight onto the window
        bordered = height >= 3 and width >= 3
        if bordered:
            screen.box()
            inner_top, inner_left = 1, 1
            inner_h, inner_w = height - 2, width - 2
        else:
            inner_top, inner_left = 0, 0
            inner_h, inner_w = height, width

        row = inner_top + top_padding(height, line_count)
        last_row = inner_top + inner_h
        for text in lines:
            if row >= last_row:
                break
            text = text[:inner_w]
            col = inner_left + (inner_w - len(text)) // 2
            # The bottom-right cell can't be written without curses moving the cursor off-screen
            if not bordered and row == height - 1 and col + len(text) >= width:
                text = text[:max(0, width - 1 - col)]
            if text:
                screen.addstr(row, col, text)
            row += 1

        screen.refresh()
