"""
Navigator settings loaded from a JSON file
"""

import json
import logging
import os
from dataclasses import dataclass, fields

from navlib.errors import ConfigError
from navlib.utils import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)


@dataclass
class NavigatorConfig:
    """
    User settings for navigation and output.

    Attributes:
        announce_position: Speak "<noun> X of Y" in announcements.
        speech_enabled: Speak through the screen reader; otherwise log speech.
        interrupt_normal_speech: Interrupt current speech for every announcement.
        max_speech_length: Truncate longer announcements (0 = no limit).
        cues_enabled: Play audio cues on transitions.
        cue_volume: Cue volume between 0.0 and 1.0.
    """
    announce_position: bool = True
    speech_enabled: bool = True
    interrupt_normal_speech: bool = False
    max_speech_length: int = 0
    cues_enabled: bool = True
    cue_volume: float = 0.3

    def validate(self):
        """Raise ConfigError if a value is out of range"""
        if not 0.0 <= self.cue_volume <= 1.0:
            raise ConfigError(f"cue_volume must be between 0 and 1, got {self.cue_volume}")
        if self.max_speech_length < 0:
            raise ConfigError(f"max_speech_length must not be negative, got {self.max_speech_length}")


def load_config(filepath):
    """
    Load navigator settings from a JSON file

    A missing file is not an error: the defaults are used.

    Args:
        filepath: Path to the settings JSON file, or None

    Returns:
        NavigatorConfig: Loaded settings
    """
    config = NavigatorConfig()
    if not filepath:
        return config

    if not os.path.exists(filepath):
        logger.info(f"Settings file '{filepath}' not found, using default settings")
        return config

    try:
        with open(filepath, 'r') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Could not read settings file '{filepath}': {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Settings file '{filepath}' must contain a JSON object")

    known = {f.name: f for f in fields(NavigatorConfig)}
    for key, value in data.items():
        if key not in known:
            logger.warning(f"Ignoring unknown setting '{key}'")
            continue
        default = getattr(config, key)
        # bool is a subclass of int, so check it first
        if isinstance(default, bool):
            if not isinstance(value, bool):
                raise ConfigError(f"Setting '{key}' must be true or false")
        elif isinstance(default, (int, float)):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(f"Setting '{key}' must be a number")
            value = type(default)(value)
        setattr(config, key, value)

    config.validate()
    logger.info(f"Loaded settings from {filepath}")
    return config
