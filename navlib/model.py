"""
Data model for menu navigation: items, per-level state and the live session
"""

import weakref
from dataclasses import dataclass, field, replace
from enum import Enum

from navlib.selection import clamp_index


class Priority(Enum):
    """Speech priority; HIGH interrupts whatever is being spoken"""
    NORMAL = "normal"
    HIGH = "high"


class Cue(Enum):
    """Short non-speech sounds played on state transitions"""
    OPEN = "open"
    CLOSE = "close"
    CLICK = "click"
    REJECT = "reject"
    TICK = "tick"


@dataclass
class Item:
    """
    One selectable entry in a level's list.

    Attributes:
        label: Text spoken as the first line of the announcement.
        detail: Optional secondary descriptive line.
        key: Opaque value handed back to the data provider (an enum member
            or a domain object). The engine never inspects it.
        action_hint: Overrides the level's call-to-action line.
        synthetic: True for entries the menu appends itself, like "Add Operation".
        index: Position in the list, assigned when the level is refreshed.
    """
    label: str
    detail: str = None
    key: object = None
    action_hint: str = None
    synthetic: bool = False
    index: int = 0


@dataclass
class LevelState:
    """Items and cursor of one visited level"""
    level: object
    items: list = field(default_factory=list)
    cursor: int = 0

    @property
    def count(self):
        return len(self.items)

    def is_empty(self):
        return not self.items

    def refresh(self, items, reset_cursor=False):
        """
        Replace the item list with a fresh snapshot

        Args:
            items: Items fetched from the data provider
            reset_cursor: Move the cursor back to the first item
        """
        self.items = [replace(item, index=i) for i, item in enumerate(items)]
        self.cursor = 0 if reset_cursor else clamp_index(self.cursor, len(self.items))

    def selected(self):
        """
        Get the item under the cursor

        Returns:
            Item: Selected item, or None if the list is empty or the cursor is stale
        """
        if 0 <= self.cursor < len(self.items):
            return self.items[self.cursor]
        return None


class NavigationSession:
    """
    The live state of one open menu.

    Holds the current level, a reference to the subject the menu operates on,
    the state of every visited level and the items picked on the way down
    (for example the recipe chosen before picking a body part).
    """

    def __init__(self):
        self.is_active = False
        self.level = None
        self.levels = {}
        self.selections = {}
        self._subject_ref = None

    @property
    def subject(self):
        if self._subject_ref is None:
            return None
        return self._subject_ref()

    def start(self, subject, level):
        """Reset everything and enter the given level for a new subject"""
        self.reset()
        try:
            self._subject_ref = weakref.ref(subject)
        except TypeError:
            # Builtins like dict and str cannot be weakly referenced
            self._subject_ref = lambda: subject
        self.is_active = True
        self.level = level

    def reset(self):
        """Drop the subject and all level-local state"""
        self.is_active = False
        self.level = None
        self.levels.clear()
        self.selections.clear()
        self._subject_ref = None

    def state(self, level=None):
        """
        Get the state of a level, creating it on first visit

        Args:
            level: Level to look up (default: current level)

        Returns:
            LevelState: State for the level
        """
        if level is None:
            level = self.level
        if level not in self.levels:
            self.levels[level] = LevelState(level)
        return self.levels[level]

    @property
    def current(self):
        return self.state(self.level)

    def selection(self, level):
        """Get the item that was picked on a level before descending from it"""
        return self.selections.get(level)
