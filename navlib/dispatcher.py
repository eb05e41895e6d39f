"""
Routes keyboard input to a navigator while its menu is open
"""

import logging
from dataclasses import dataclass
from enum import Enum

from navlib.utils import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)


class Action(Enum):
    """Logical navigation actions"""
    PREVIOUS = "previous"
    NEXT = "next"
    ACTIVATE = "activate"
    CANCEL = "cancel"


KEY_ACTIONS = {
    "up": Action.PREVIOUS,
    "down": Action.NEXT,
    "enter": Action.ACTIVATE,
    "keypad_enter": Action.ACTIVATE,
    "escape": Action.CANCEL,
}


@dataclass
class KeyEvent:
    """A key press; handled is set when the menu consumed it"""
    key: str
    handled: bool = False


class InputDispatcher:
    """
    Owns the open/close lifecycle of one navigator and feeds it key presses.

    Whatever component has input focus holds the dispatcher; keys it does not
    recognise, and every key while the menu is closed, are left for others.
    """

    def __init__(self, navigator):
        self.navigator = navigator
        self._handlers = {
            Action.PREVIOUS: navigator.select_previous,
            Action.NEXT: navigator.select_next,
            Action.ACTIVATE: navigator.activate,
            Action.CANCEL: navigator.cancel,
        }

    @property
    def is_active(self):
        return self.navigator.is_active

    def open(self, subject, level=None):
        """Open the menu for a subject; see Navigator.open"""
        return self.navigator.open(subject, level)

    def close(self):
        self.navigator.close()

    def dispatch(self, action):
        """
        Run a logical action on the navigator

        Args:
            action: Action to perform

        Returns:
            bool: True if the menu was open and the action ran
        """
        if not self.navigator.is_active:
            return False
        self._handlers[action]()
        return True

    def handle_key(self, event):
        """
        Handle a key press

        Args:
            event: KeyEvent with a key name such as "up" or "escape"

        Returns:
            bool: True if the key was consumed
        """
        if event.handled or not self.navigator.is_active:
            return False

        action = KEY_ACTIONS.get(event.key)
        if action is None:
            return False

        # Mark before running so a menu closed by this key still owns it
        event.handled = True
        logger.debug(f"Key '{event.key}' -> {action.value}")
        self.dispatch(action)
        return True
