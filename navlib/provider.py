"""
Contracts between the navigation engine and the concrete menus it drives.

A concrete menu supplies two things:

* a MenuDefinition describing its levels: the conventional noun used in
  position announcements, the call-to-action line, the parent returned to on
  Escape and an optional synthetic trailing entry;
* a DataProvider that fetches item lists, describes items, decides what
  activating an item means and performs the domain effect.

Activation decisions are returned as small outcome values (Descend, Perform,
ChooseTarget, Return, Notify) so the state machine can apply the shared
policies (empty lists, target counts, failures) in one place.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass(frozen=True)
class LevelSpec:
    """
    Static description of one level.

    Attributes:
        noun: Word used in the position line ("Setting 2 of 3").
        call_to_action: Last line of every announcement on this level.
        parent: Level returned to on Escape. None marks a root level.
        trailing_item: Synthetic entry appended after the fetched items.
        empty_notice: Spoken when entering the level finds nothing to list.
        shows_current_value: Announce "Current: X" using provider.current_value.
    """
    noun: str
    call_to_action: str
    parent: object = None
    trailing_item: object = None
    empty_notice: str = "Nothing available"
    shows_current_value: bool = False

    @property
    def is_root(self):
        return self.parent is None


@dataclass
class MenuDefinition:
    """
    The level graph of one menu family.

    Attributes:
        name: Menu name used in log messages.
        entry_level: Level entered by a plain open().
        levels: Mapping of level to LevelSpec.
        restores_focus: Notify the outer navigation context when the menu is
            left from a root level.
    """
    name: str
    entry_level: object
    levels: dict = field(default_factory=dict)
    restores_focus: bool = True

    def spec(self, level):
        return self.levels[level]

    def is_root(self, level):
        return self.levels[level].is_root

    def parent_of(self, level):
        return self.levels[level].parent


@dataclass(frozen=True)
class ApplyResult:
    """Outcome of a domain action: success, or a reason the user can hear"""
    success: bool
    reason: str = ""

    @classmethod
    def ok(cls):
        return cls(True)

    @classmethod
    def failed(cls, reason):
        return cls(False, reason)


# ---------------------------------------------------------------------------
# Activation outcomes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Descend:
    """Enter a child level; rejected if its list comes back empty"""
    level: object


@dataclass(frozen=True)
class Perform:
    """
    Carry out the domain effect of the selected item via provider.apply.

    Attributes:
        then: Level to move to on success. None stays on the current level.
        reset_cursor: Put the cursor of the destination level back on the first item.
    """
    then: object = None
    reset_cursor: bool = False


@dataclass(frozen=True)
class ChooseTarget:
    """
    Apply a catalog entry to one of its eligible targets.

    With no target the entry is rejected, with exactly one it is applied
    directly, otherwise the picker level is entered.
    """
    level: object
    then: object = None
    reset_cursor: bool = True
    unavailable_notice: str = "This is not available"


@dataclass(frozen=True)
class Return:
    """Go to another level without doing anything ("Go Back" entries)"""
    level: object


@dataclass(frozen=True)
class Notify:
    """Speak extra information about the item without changing state"""
    text: str


class DataProvider(ABC):
    """
    Supplies and mutates the domain content behind a menu.

    Providers are called on every level entry, so fetch_items must be cheap
    and side-effect free. They never keep references into engine state.
    """

    @property
    @abstractmethod
    def definition(self):
        """MenuDefinition for the menu this provider backs"""

    @abstractmethod
    def fetch_items(self, level, session):
        """
        Build the item list of a level

        Args:
            level: Level being entered
            session: NavigationSession (subject and earlier selections)

        Returns:
            list: Items, possibly empty
        """

    @abstractmethod
    def activate(self, level, item, session):
        """
        Decide what Enter does on an item

        Returns:
            Descend, Perform, ChooseTarget, Return, Notify or None
        """

    def describe(self, level, item, session):
        """Informational lines spoken after the item label"""
        return []

    def apply(self, level, item, session):
        """
        Perform the domain effect of an item

        Returns:
            ApplyResult: Success, or failure with a reason
        """
        return ApplyResult.failed("Nothing to do")

    def current_value(self, setting, subject):
        """Display string for the current value of a setting"""
        return ""
