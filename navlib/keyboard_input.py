"""
Global keyboard hook that feeds key presses to an input dispatcher
"""

import logging
import sys

from pynput import keyboard

from navlib.dispatcher import KeyEvent
from navlib.utils import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)

# Virtual key codes pynput reports for the numeric keypad Enter key.
# On Windows it arrives as Key.enter.
if sys.platform == "darwin":
    KEYPAD_ENTER_VKS = {76}
else:
    KEYPAD_ENTER_VKS = {0xFF8D}

SPECIAL_KEYS = {
    keyboard.Key.up: "up",
    keyboard.Key.down: "down",
    keyboard.Key.enter: "enter",
    keyboard.Key.esc: "escape",
}


def key_name(key):
    """
    Translate a pynput key into the name used by the dispatcher

    Args:
        key: Key or KeyCode from pynput

    Returns:
        str: Key name, or None for keys the menus never use
    """
    if key in SPECIAL_KEYS:
        return SPECIAL_KEYS[key]
    vk = getattr(key, "vk", None)
    if vk is not None and vk in KEYPAD_ENTER_VKS:
        return "keypad_enter"
    return None


class KeyboardInput:
    """Listens to the keyboard and routes presses to a dispatcher"""

    def __init__(self, dispatcher, on_unhandled=None):
        """
        Initialize the keyboard input

        Args:
            dispatcher: InputDispatcher receiving key events
            on_unhandled: Optional callback for key events the menu left alone
        """
        self.dispatcher = dispatcher
        self.on_unhandled = on_unhandled
        self.listener = None

    def _handle_key_press(self, key):
        """
        Handle keyboard key press events

        Args:
            key: Key object from pynput

        Returns:
            bool: True to continue listening
        """
        try:
            name = key_name(key)
            if name is None:
                return True

            event = KeyEvent(name)
            self.dispatcher.handle_key(event)
            if not event.handled and self.on_unhandled is not None:
                self.on_unhandled(event)
        except Exception as e:
            logger.error(f"Error during key handling: {e}")

        return True

    def run(self):
        """Listen until the listener is stopped or the process is interrupted"""
        with keyboard.Listener(on_press=self._handle_key_press) as listener:
            self.listener = listener
            listener.join()

    def stop(self):
        if self.listener is not None:
            self.listener.stop()
            self.listener = None
