"""
Main entry point for the accessible menu navigator
"""

import argparse
import os
import sys

from navlib.announcer import AnnouncementBuilder
from navlib.config import load_config
from navlib.cues import SilentCues, TonePlayer
from navlib.dispatcher import InputDispatcher
from navlib.errors import ConfigError
from navlib.menus.health import HealthLevel, HealthMenuProvider
from navlib.menus.records import HealthRecords
from navlib.navigator import Navigator
from navlib.speech import AccessibleOutputSpeaker, LogSpeaker
from navlib.utils import setup_logging

DEFAULT_PROFILE = os.path.join(os.path.dirname(os.path.abspath(__file__)), "profiles", "health_demo.json")
DEFAULT_SETTINGS = "navigator_settings.json"


def build_parser():
    parser = argparse.ArgumentParser(description="Accessible keyboard and speech navigation of a patient's health tab")
    parser.add_argument("profile", nargs="?", default=DEFAULT_PROFILE, help="Path to health profile JSON file")
    parser.add_argument("-p", "--patient", default=None, help="Patient to open (default: first in the profile)")
    parser.add_argument("-c", "--config", default=DEFAULT_SETTINGS, help="Path to navigator settings JSON file")
    parser.add_argument("--settings", action="store_true", help="Open the medical settings instead of the operations")
    parser.add_argument("--no-speech", action="store_true", help="Log announcements instead of speaking them")
    parser.add_argument("--no-cues", action="store_true", help="Disable audio cues")
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug mode (logs to file)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    return parser


def main(argv=None):
    """Main function: load the profile, open the health tab and listen to the keyboard"""
    args = build_parser().parse_args(argv)

    # Set up logging
    logger = setup_logging(args.debug)

    try:
        config = load_config(args.config)
        records = HealthRecords.from_file(args.profile)
    except ConfigError as e:
        logger.error(str(e))
        print(f"Error: {e}")
        sys.exit(1)

    if not records.patients:
        logger.error("The profile has no patients")
        sys.exit(1)

    patient_name = args.patient or next(iter(records.patients))
    patient = records.patients.get(patient_name)
    if patient is None:
        logger.error(f"Patient '{patient_name}' not found in profile")
        sys.exit(1)

    if config.speech_enabled and not args.no_speech:
        speaker = AccessibleOutputSpeaker(config.max_speech_length, config.interrupt_normal_speech)
        speaker.start()
    else:
        speaker = LogSpeaker(config.max_speech_length)

    if config.cues_enabled and not args.no_cues:
        cues = TonePlayer(config.cue_volume)
    else:
        cues = SilentCues()

    entry_level = HealthLevel.MEDICAL_SETTINGS_LIST if args.settings else HealthLevel.OPERATIONS_LIST

    def restore_focus():
        # The patient overview is the outer context the health tab was opened from
        speaker.speak(f"{patient.name}, health tab closed. Press Enter to open it again")

    navigator = Navigator(
        HealthMenuProvider(records),
        speaker,
        cues,
        focus_restorer=restore_focus,
        builder=AnnouncementBuilder(config.announce_position),
    )
    navigator.set_verbose(args.verbose)
    navigator.set_debug(args.debug)
    dispatcher = InputDispatcher(navigator)

    def reopen(event):
        if event.key in ("enter", "keypad_enter") and not dispatcher.is_active:
            dispatcher.open(patient, entry_level)

    # pynput needs a display or input backend at import time
    from navlib.keyboard_input import KeyboardInput
    keyboard_input = KeyboardInput(dispatcher, on_unhandled=reopen)

    try:
        dispatcher.open(patient, entry_level)
        logger.info("Listening for keyboard input. Press Ctrl+C to exit")
        keyboard_input.run()
    except KeyboardInterrupt:
        # Handle Ctrl+C gracefully
        print("\nKeyboard interrupt received. Exiting...")
    finally:
        keyboard_input.stop()
        if isinstance(speaker, AccessibleOutputSpeaker):
            speaker.shutdown()
        logger.info("Exiting menu navigator")


if __name__ == "__main__":
    main()
