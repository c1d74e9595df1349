import time
from mci.common.logger import log

NS_PER_MS = 1_000_000

# This object turns a stream of clicks into a list of intervals. Every value is measured from the first click of the
# current sequence (the anchor), not from the previous click, so dispatch/render latency between clicks never
# accumulates. Times are integer nanoseconds from a monotonic clock, which can be swapped out for a fake one.
class IntervalTracker:

    def __init__(self, threshold_ns, clock=time.monotonic_ns):
        threshold_ns = int(threshold_ns)
        if threshold_ns < 0:
            raise ValueError(f"Threshold must not be negative, got {threshold_ns} ns")
        self._threshold = threshold_ns
        self._clock = clock
        self.anchor = clock()
        self.recorded = []

        log.debug(f"Initialized new interval tracker with threshold of {threshold_ns // NS_PER_MS} ms")

    # Threshold is fixed for the lifetime of the tracker.
    @property
    def threshold(self):
        return self._threshold

    # True while no click has been recorded since the last reset.
    @property
    def is_empty(self):
        return not self.recorded

    # Clears all recorded intervals and starts measuring from now.
    def reset(self):
        self.anchor = self._clock()
        self.recorded.clear()
        log.debug(f"Reset interval tracker, new anchor at mono {self.anchor}")

    # Records one click and returns the interval that was stored for it. A click that lands past the threshold
    # starts a fresh sequence and is stored as 0, never as the overlong value.
    def on_click(self):
        if self.is_empty:
            self.anchor = self._clock()
            interval = 0
        else:
            # A clock that steps backwards counts as no time passed
            interval = max(0, self._clock() - self.anchor)
            if interval > self._threshold:
                log.debug(f"Click came {interval // NS_PER_MS} ms after anchor, past threshold of "
                          f"{self._threshold // NS_PER_MS} ms")
                self.reset()
                interval = 0

        self.recorded.append(interval)
        log.debug(f"Recorded click #{len(self.recorded)} at {interval // NS_PER_MS} ms")
        return interval

    # Read-only copy of the recorded intervals, in click order.
    def snapshot(self):
        return tuple(self.recorded)
