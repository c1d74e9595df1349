"""Tests for the event loop in mci.core.loop, using scripted sources and a recording sink."""

import unittest

from tests.helpers import FakeClock, RecordingSink, ScriptedSource, ms


class TimedSource(ScriptedSource):
    """Scripted source whose entries are (time_ms, event); the clock jumps to time_ms before the event is returned."""

    def __init__(self, clock, timed_events):
        self.clock = clock
        self.times = [t for t, _ in timed_events]
        super().__init__(event for _, event in timed_events)

    def __call__(self):
        if self.times:
            self.clock.set_ms(self.times.pop(0))
        return super().__call__()


class TestRunLoop(unittest.TestCase):

    def setUp(self):
        from mci.core.tracker import IntervalTracker
        self.clock = FakeClock()
        self.tracker = IntervalTracker(ms(1000), clock=self.clock)
        self.sink = RecordingSink()

    def test_quit_immediately_shows_empty_list(self):
        """Scenario D: quitting before any click draws exactly one empty frame."""
        from mci.core.events import InputEvent
        from mci.core.loop import run_loop

        source = ScriptedSource([InputEvent.key_press("q")])
        clicks = run_loop(self.tracker, source, self.sink)

        self.assertEqual(clicks, 0)
        self.assertEqual(self.sink.frames, [()])
        self.assertEqual(self.tracker.snapshot(), ())

    def test_redraws_before_every_read(self):
        """Every event read is preceded by a redraw of the current snapshot."""
        from mci.core.events import InputEvent
        from mci.core.loop import run_loop

        source = TimedSource(self.clock, [
            (0, InputEvent.mouse_press()),
            (300, InputEvent.mouse_press()),
            (900, InputEvent.mouse_press()),
            (950, InputEvent.key_press("q")),
        ])
        clicks = run_loop(self.tracker, source, self.sink)

        self.assertEqual(clicks, 3)
        self.assertEqual(source.reads, 4)
        self.assertEqual(self.sink.frames, [
            (),
            (0,),
            (0, ms(300)),
            (0, ms(300), ms(900)),
        ])

    def test_late_click_resets_in_loop(self):
        """Scenario B through the loop: the late click leaves a single 0."""
        from mci.core.events import InputEvent
        from mci.core.loop import run_loop

        source = TimedSource(self.clock, [
            (0, InputEvent.mouse_press()),
            (300, InputEvent.mouse_press()),
            (1600, InputEvent.mouse_press()),
            (1700, InputEvent.key_press("q")),
        ])
        run_loop(self.tracker, source, self.sink)
        self.assertEqual(self.sink.frames[-1], (0,))

    def test_other_events_are_ignored(self):
        """Mouse moves/releases, other keys and resizes never touch the tracker."""
        from mci.core.events import InputEvent
        from mci.core.loop import run_loop

        source = TimedSource(self.clock, [
            (0, InputEvent.mouse_press()),
            (100, InputEvent.mouse_other()),
            (200, InputEvent.key_press("x")),
            (300, InputEvent.key_press("Q")),
            (400, InputEvent.other()),
            (500, InputEvent.key_press("q")),
        ])
        clicks = run_loop(self.tracker, source, self.sink)

        self.assertEqual(clicks, 1)
        self.assertEqual(self.tracker.snapshot(), (0,))
        # One frame per read, all identical after the first click
        self.assertEqual(self.sink.frames, [()] + [(0,)] * 5)

    def test_custom_quit_key(self):
        from mci.core.events import InputEvent
        from mci.core.loop import run_loop

        source = ScriptedSource([
            InputEvent.key_press("q"),
            InputEvent.mouse_press(),
            InputEvent.key_press("x"),
        ])
        clicks = run_loop(self.tracker, source, self.sink, quit_key="x")

        self.assertEqual(clicks, 1)
        self.assertEqual(source.events, [])

    def test_nothing_happens_after_quit(self):
        """Events queued after the quit key are never read."""
        from mci.core.events import InputEvent
        from mci.core.loop import run_loop

        source = ScriptedSource([
            InputEvent.key_press("q"),
            InputEvent.mouse_press(),
        ])
        run_loop(self.tracker, source, self.sink)

        self.assertEqual(source.reads, 1)
        self.assertEqual(len(self.sink.frames), 1)
        self.assertTrue(self.tracker.is_empty)

    def test_source_errors_propagate(self):
        """A failed read ends the loop with the same exception, no extra redraw."""
        from mci.core.events import InputEvent
        from mci.core.loop import run_loop

        source = ScriptedSource([InputEvent.mouse_press(), OSError("read failed")])
        with self.assertRaises(OSError):
            run_loop(self.tracker, source, self.sink)
        self.assertEqual(self.sink.frames, [(), (0,)])

    def test_sink_errors_propagate(self):
        from mci.core.events import InputEvent
        from mci.core.loop import run_loop

        def broken_sink(snapshot):
            raise OSError("write failed")

        source = ScriptedSource([InputEvent.key_press("q")])
        with self.assertRaises(OSError):
            run_loop(self.tracker, source, broken_sink)
        self.assertEqual(source.reads, 0)


class TestInputEvent(unittest.TestCase):

    def test_constructors(self):
        from mci.core.events import EventKind, InputEvent
        self.assertEqual(InputEvent.mouse_press().kind, EventKind.MOUSE_PRESS)
        self.assertEqual(InputEvent.mouse_other().kind, EventKind.MOUSE_OTHER)
        self.assertEqual(InputEvent.other().kind, EventKind.OTHER)
        key = InputEvent.key_press("q")
        self.assertEqual(key.kind, EventKind.KEY)
        self.assertEqual(key.key, "q")

    def test_is_key(self):
        from mci.core.events import InputEvent
        self.assertTrue(InputEvent.key_press("q").is_key("q"))
        self.assertFalse(InputEvent.key_press("w").is_key("q"))
        self.assertFalse(InputEvent.mouse_press().is_key("q"))

    def test_events_are_immutable(self):
        import dataclasses
        from mci.core.events import InputEvent
        with self.assertRaises(dataclasses.FrozenInstanceError):
            InputEvent.key_press("q").key = "x"


if __name__ == "__main__":
    unittest.main()
