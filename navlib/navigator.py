"""
Navigation state machine for accessible, keyboard-driven menus
"""

import logging

from navlib.announcer import AnnouncementBuilder
from navlib.errors import ProviderError
from navlib.model import Cue, NavigationSession, Priority
from navlib.provider import ApplyResult, ChooseTarget, Descend, Notify, Perform, Return
from navlib.selection import clamp_index, select_next, select_previous
from navlib.utils import LOGGER_NAME, strip_markup

logger = logging.getLogger(LOGGER_NAME)


class Navigator:
    """
    Drives one menu family: owns the session, moves the cursor, enters and
    leaves levels, and speaks the resulting state after every change
    """

    def __init__(self, provider, speaker, cues=None, focus_restorer=None, builder=None):
        """
        Initialize the navigator

        Args:
            provider: DataProvider backing the menu
            speaker: Speech sink with speak(text, priority)
            cues: Cue sink with play(cue), or None for no sounds
            focus_restorer: Called once when the menu is left from a root level
            builder: AnnouncementBuilder (default: one that announces positions)
        """
        self.provider = provider
        self.definition = provider.definition
        self.speaker = speaker
        self.cues = cues
        self.focus_restorer = focus_restorer
        self.builder = builder or AnnouncementBuilder()
        self.session = NavigationSession()
        self.verbose = False
        self.debug = False

    def set_verbose(self, verbose):
        """
        Enable or disable verbose logging mode

        Args:
            verbose: Boolean indicating whether to enable verbose mode
        """
        self.verbose = verbose
        if verbose:
            logger.setLevel(logging.DEBUG)
        else:
            logger.setLevel(logging.INFO)

    def set_debug(self, debug):
        """
        Enable or disable debug logging mode

        Args:
            debug: Boolean indicating whether to enable debug mode
        """
        self.debug = debug

    def log_message(self, message, level=logging.INFO):
        """
        Log a message with the specified level

        Args:
            message: Text to log
            level: Logging level (default: INFO)
        """
        if level == logging.DEBUG and not (self.verbose or self.debug):
            return
        logger.log(level, message)

    @property
    def is_active(self):
        return self.session.is_active

    @property
    def current_level(self):
        return self.session.level

    def current_item(self):
        """Get the selected item of the current level, or None"""
        if not self.session.is_active:
            return None
        return self.session.current.selected()

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def announce(self, message, priority=Priority.NORMAL):
        """
        Send text to the speech sink

        Args:
            message: Text to speak, may span several lines
            priority: Priority.HIGH interrupts current speech
        """
        if not message:
            return
        try:
            self.speaker.speak(strip_markup(message), priority)
        except Exception as e:
            self.log_message(f"Speech sink error: {e}", logging.ERROR)

    def play_cue(self, cue):
        """Play a cue if a cue sink is attached"""
        if self.cues is None:
            return
        try:
            self.cues.play(cue)
        except Exception as e:
            self.log_message(f"Cue sink error: {e}", logging.ERROR)

    def reannounce(self):
        """Speak the current state again, e.g. when focus returns to this menu"""
        if self.session.is_active:
            self._run_safely("announce", self._announce_level)

    def _announce_level(self):
        state = self.session.current
        if state.is_empty():
            self.announce(self.definition.spec(self.session.level).empty_notice)
            return
        self.announce(self.builder.build(self.definition, self.provider, self.session))

    def _reject(self, notice, priority=Priority.NORMAL):
        self.log_message(f"Rejected on {self.session.level}: {notice}")
        self.play_cue(Cue.REJECT)
        self.announce(notice, priority)

    # ------------------------------------------------------------------
    # Level transitions
    # ------------------------------------------------------------------

    def _fetch(self, level):
        """Fetch a fresh item list for a level, synthetic trailing entry included"""
        items = list(self.provider.fetch_items(level, self.session) or [])
        trailing = self.definition.spec(level).trailing_item
        if trailing is not None:
            items.append(trailing)
        self.log_message(f"Fetched {len(items)} items for {level}", logging.DEBUG)
        return items

    def _enter(self, level, items, reset_cursor=False):
        self.session.level = level
        self.session.state(level).refresh(items, reset_cursor=reset_cursor)
        self.log_message(f"Entered {level} ({len(items)} items)", logging.DEBUG)

    def _refresh(self, level, reset_cursor=False):
        self._enter(level, self._fetch(level), reset_cursor=reset_cursor)

    def _run_safely(self, description, func, *args):
        """
        Run an operation that calls into the data provider

        Provider failures are spoken to the user instead of propagating to the
        input thread.
        """
        try:
            func(*args)
        except ProviderError as e:
            self.log_message(f"{description} failed: {e.reason}", logging.WARNING)
            self._reject(e.reason, Priority.HIGH)
        except Exception as e:
            self.log_message(f"Error during {description}: {e}", logging.ERROR)
            self._reject("Action failed", Priority.HIGH)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def open(self, subject, level=None):
        """
        Open the menu for a subject

        Opening an already open menu starts it over.

        Args:
            subject: Entity the menu operates on; None declines silently
            level: Root level to start at (default: the menu's entry level)

        Returns:
            bool: True if the menu was opened
        """
        if subject is None:
            self.log_message(f"Not opening {self.definition.name}: no subject", logging.DEBUG)
            return False

        if level is None:
            level = self.definition.entry_level
        elif not self.definition.is_root(level):
            raise ValueError(f"{level} is not a root level of {self.definition.name}")

        self.session.start(subject, level)
        self.log_message(f"Opened {self.definition.name} at {level}")
        self._run_safely("open", self._open_level, level)
        return True

    def _open_level(self, level):
        self._refresh(level, reset_cursor=True)
        self.play_cue(Cue.OPEN)
        self._announce_level()

    def close(self):
        """Close the menu, dropping the subject and all level state"""
        if not self.session.is_active:
            return
        self.session.reset()
        self.log_message(f"Closed {self.definition.name}")
        self.play_cue(Cue.CLOSE)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def select_next(self):
        """Move the cursor down, wrapping at the end"""
        self._move(select_next)

    def select_previous(self):
        """Move the cursor up, wrapping at the start"""
        self._move(select_previous)

    def _move(self, step):
        if not self.session.is_active:
            return
        state = self.session.current
        if state.is_empty():
            return
        state.cursor = step(clamp_index(state.cursor, state.count), state.count)
        self.play_cue(Cue.TICK)
        self._run_safely("announce", self._announce_level)

    def cancel(self):
        """
        Go back one level, or close the menu when already at a root level

        Leaving from a root level hands focus back to the outer navigation
        context, which re-announces itself.
        """
        if not self.session.is_active:
            return

        level = self.session.level
        if self.definition.is_root(level):
            self.close()
            if self.definition.restores_focus and self.focus_restorer is not None:
                try:
                    self.focus_restorer()
                except Exception as e:
                    self.log_message(f"Focus restoration failed: {e}", logging.ERROR)
            return

        self._run_safely("back", self._go_back, self.definition.parent_of(level))

    def _go_back(self, parent):
        self._refresh(parent)
        self.play_cue(Cue.CLICK)
        self._announce_level()

    def activate(self):
        """Act on the selected item: drill down, apply it, or pick a target"""
        if not self.session.is_active:
            return

        item = self.session.current.selected()
        if item is None:
            self.log_message(f"Nothing to activate on {self.session.level}", logging.DEBUG)
            return

        self._run_safely("activate", self._activate_item, self.session.level, item)

    def _activate_item(self, level, item):
        outcome = self.provider.activate(level, item, self.session)
        self.log_message(f"Activated '{item.label}' on {level}: {outcome}", logging.DEBUG)

        if outcome is None:
            return

        if isinstance(outcome, Notify):
            self.play_cue(Cue.CLICK)
            self.announce(outcome.text)
        elif isinstance(outcome, Return):
            self._refresh(outcome.level)
            self.play_cue(Cue.CLICK)
            self._announce_level()
        elif isinstance(outcome, Descend):
            self._descend(level, item, outcome.level)
        elif isinstance(outcome, Perform):
            result = self.provider.apply(level, item, self.session)
            self._finish_apply(result, outcome.then, outcome.reset_cursor)
        elif isinstance(outcome, ChooseTarget):
            self._choose_target(level, item, outcome)
        else:
            raise TypeError(f"Unknown activation outcome: {outcome!r}")

    def _descend(self, level, item, child):
        items = self._fetch(child)
        if not items:
            self._reject(self.definition.spec(child).empty_notice)
            return
        self.session.selections[level] = item
        self._enter(child, items, reset_cursor=True)
        self.play_cue(Cue.CLICK)
        self._announce_level()

    def _choose_target(self, level, item, outcome):
        # The picker's fetch reads which catalog entry was chosen
        self.session.selections[level] = item
        targets = self._fetch(outcome.level)

        if not targets:
            self.session.selections.pop(level, None)
            self._reject(outcome.unavailable_notice, Priority.HIGH)
        elif len(targets) == 1:
            self.log_message(f"Single target for '{item.label}', applying directly", logging.DEBUG)
            result = self.provider.apply(outcome.level, targets[0], self.session)
            self._finish_apply(result, outcome.then, outcome.reset_cursor)
        else:
            self._enter(outcome.level, targets, reset_cursor=True)
            self.play_cue(Cue.CLICK)
            self._announce_level()

    def _finish_apply(self, result, then, reset_cursor):
        if result is None:
            result = ApplyResult.ok()
        if not result.success:
            self._reject(result.reason or "Action failed", Priority.HIGH)
            return

        target = then if then is not None else self.session.level
        self._refresh(target, reset_cursor=reset_cursor)
        self.play_cue(Cue.CLICK)
        self._announce_level()
