"""
Builds the spoken "where am I / what can I do" text for a menu level
"""

import logging

from navlib.utils import LOGGER_NAME, strip_markup

logger = logging.getLogger(LOGGER_NAME)


def format_position(noun, index, total):
    """
    Format a position line such as "Setting 2 of 3"

    Args:
        noun: Conventional noun for items on the level
        index: Zero-based index of the selected item
        total: Number of entries, synthetic entries included

    Returns:
        str: Position line
    """
    return f"{noun} {index + 1} of {total}"


def compose_list(prefix, parts, separator=", "):
    """
    Join a list of requirements into one line, e.g. "Requires: 2 herbal medicine, 1 bed"

    Args:
        prefix: Text placed before the list
        parts: Strings to join
        separator: Separator between parts

    Returns:
        str: Composed line, or an empty string when there is nothing to list
    """
    text = ""
    for part in parts:
        if part:
            text += f"{part}{separator}"
    if not text:
        return ""
    # Drop the separator left after the last part
    return prefix + text[:-len(separator)]


class AnnouncementBuilder:
    """Renders the current level of a session as multi-line plain text"""

    def __init__(self, announce_position=True):
        """
        Initialize the builder

        Args:
            announce_position: Include the "<noun> X of Y" line
        """
        self.announce_position = announce_position

    def build(self, definition, provider, session):
        """
        Build the announcement for the session's current level

        The caller guarantees the level has a selected item; empty levels are
        handled by the navigator before rendering.

        Args:
            definition: MenuDefinition of the menu
            provider: DataProvider backing the menu
            session: Active NavigationSession

        Returns:
            str: Announcement text, one fact per line
        """
        level = session.level
        spec = definition.spec(level)
        state = session.current
        item = state.selected()
        if item is None:
            logger.warning(f"No selected item to announce on level {level}")
            return ""

        lines = [item.label]
        if item.detail:
            lines.append(item.detail)

        # Settings-style levels report what the setting is set to right now
        if spec.shows_current_value and not item.synthetic:
            value = provider.current_value(item.key, session.subject)
            if value:
                lines.append(f"Current: {value}")

        for line in provider.describe(level, item, session):
            if line:
                lines.append(line)

        if self.announce_position:
            lines.append(format_position(spec.noun, state.cursor, state.count))

        lines.append(item.action_hint or spec.call_to_action)

        return "\n".join(strip_markup(line) for line in lines)
