"""Input events as seen by the event loop, independent of the terminal library."""

from dataclasses import dataclass
from enum import Enum


class EventKind(Enum):
    MOUSE_PRESS = "mouse_press"
    MOUSE_OTHER = "mouse_other"
    KEY = "key"
    OTHER = "other"


@dataclass(frozen=True)
class InputEvent:
    """One discrete event read from the input source.

    ``key`` is only set for ``EventKind.KEY`` and holds the pressed character.
    """
    kind: EventKind
    key: str | None = None

    @classmethod
    def mouse_press(cls):
        return cls(EventKind.MOUSE_PRESS)

    @classmethod
    def mouse_other(cls):
        return cls(EventKind.MOUSE_OTHER)

    @classmethod
    def key_press(cls, key):
        return cls(EventKind.KEY, key)

    @classmethod
    def other(cls):
        return cls(EventKind.OTHER)

    def is_key(self, key):
        return self.kind is EventKind.KEY and self.key == key
