"""Fakes shared by the test modules."""

NS_PER_MS = 1_000_000


def ms(value):
    return value * NS_PER_MS


class FakeClock:
    """Stand-in for time.monotonic_ns, moved by hand."""

    def __init__(self, now=0):
        self.now = now

    def __call__(self):
        return self.now

    def set_ms(self, value):
        self.now = ms(value)


class ScriptedSource:
    """Input source that plays back a fixed list of events."""

    def __init__(self, events):
        self.events = list(events)
        self.reads = 0

    def __call__(self):
        self.reads += 1
        if not self.events:
            raise AssertionError("event loop read past the end of the script")
        event = self.events.pop(0)
        if isinstance(event, BaseException):
            raise event
        return event


class RecordingSink:
    """Display sink that keeps every snapshot it was given."""

    def __init__(self):
        self.frames = []

    def __call__(self, snapshot):
        self.frames.append(snapshot)
