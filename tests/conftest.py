"""Shared fixtures: recording sinks, a static demo menu and health records."""

from __future__ import annotations

from enum import Enum

import pytest

from navlib.menus.health import HealthMenuProvider
from navlib.menus.records import HealthRecords
from navlib.model import Item, Priority
from navlib.navigator import Navigator
from navlib.provider import ApplyResult, DataProvider, LevelSpec, MenuDefinition


class RecordingSpeaker:
    def __init__(self):
        self.spoken = []

    def speak(self, text, priority=Priority.NORMAL):
        self.spoken.append((text, priority))

    @property
    def last(self):
        return self.spoken[-1] if self.spoken else None

    @property
    def texts(self):
        return [text for text, _ in self.spoken]


class RecordingCues:
    def __init__(self):
        self.played = []

    def play(self, cue):
        self.played.append(cue)

    @property
    def last(self):
        return self.played[-1] if self.played else None


class DemoLevel(Enum):
    SETTINGS = "settings"
    CHOICES = "choices"
    EXTRA = "extra"


class StaticProvider(DataProvider):
    """Provider over fixed label lists, with scripted activation outcomes"""

    def __init__(self, items=None, outcomes=None, apply_result=None, restores_focus=True):
        self.items = items or {}
        self.outcomes = outcomes or {}
        self.apply_result = apply_result
        self.applied = []
        self._definition = MenuDefinition(
            name="demo",
            entry_level=DemoLevel.SETTINGS,
            levels={
                DemoLevel.SETTINGS: LevelSpec("Setting", "Press Enter to change"),
                DemoLevel.CHOICES: LevelSpec(
                    "Option", "Press Enter to confirm",
                    parent=DemoLevel.SETTINGS, empty_notice="No options available",
                ),
                DemoLevel.EXTRA: LevelSpec("Entry", "Press Enter to open"),
            },
            restores_focus=restores_focus,
        )

    @property
    def definition(self):
        return self._definition

    def fetch_items(self, level, session):
        return [Item(label, key=label) for label in self.items.get(level, [])]

    def activate(self, level, item, session):
        outcome = self.outcomes.get(level)
        if callable(outcome):
            return outcome(item)
        return outcome

    def apply(self, level, item, session):
        self.applied.append((level, item.label))
        if isinstance(self.apply_result, Exception):
            raise self.apply_result
        return self.apply_result or ApplyResult.ok()


class Subject:
    """Weak-referenceable stand-in for a host entity"""

    def __init__(self, name="subject"):
        self.name = name


@pytest.fixture
def speaker():
    return RecordingSpeaker()


@pytest.fixture
def cues():
    return RecordingCues()


@pytest.fixture
def subject():
    return Subject()


@pytest.fixture
def make_navigator(speaker, cues):
    def _make(provider, focus_restorer=None, builder=None):
        return Navigator(provider, speaker, cues, focus_restorer=focus_restorer, builder=builder)
    return _make


HEALTH_PROFILE = {
    "food_policies": ["Lavish", "Fine", "Simple"],
    "medical_care": ["No care", "Herbal", "Best"],
    "recipes": [
        {
            "key": "install_peg_leg",
            "label": "Install peg leg",
            "description": "Install a simple wooden peg leg.",
            "ingredients": ["1 peg leg", "2 herbal medicine"],
            "parts": ["left_leg", "right_leg"],
        },
        {
            "key": "administer_go_juice",
            "label": "Administer <b>go-juice</b>",
            "description": "Give the patient a dose of go-juice.",
            "ingredients": ["1 go-juice"],
        },
        {
            "key": "install_bionic_eye",
            "label": "Install bionic eye",
            "parts": ["left_eye", "right_eye"],
            "unavailable_parts": ["right_eye"],
        },
        {
            "key": "install_bionic_arm",
            "label": "Install bionic arm",
            "parts": ["left_arm"],
        },
    ],
    "patients": [
        {
            "name": "Mira",
            "food_policy": "Fine",
            "medical_care": "Best",
            "self_tend": False,
            "body_parts": [
                {"key": "left_leg", "label": "left leg", "health": 12, "max_health": 30},
                {"key": "right_leg", "label": "right leg", "health": 30, "max_health": 30},
                {"key": "left_eye", "label": "left eye", "health": 10, "max_health": 10},
                {"key": "right_eye", "label": "right eye", "health": 4, "max_health": 10},
            ],
            "operations": [
                {"recipe": "administer_go_juice"},
                {"recipe": "install_peg_leg", "part": "left_leg"},
            ],
        }
    ],
}


@pytest.fixture
def records():
    return HealthRecords.from_dict(HEALTH_PROFILE)


@pytest.fixture
def patient(records):
    return records.patients["Mira"]


@pytest.fixture
def health_nav(records, make_navigator):
    restored = []
    nav = make_navigator(HealthMenuProvider(records), focus_restorer=lambda: restored.append(True))
    nav.restored = restored
    return nav
