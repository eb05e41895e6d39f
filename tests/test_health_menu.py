"""Tests for navlib.menus.health – the health tab driven through the navigator."""

from __future__ import annotations

from navlib.announcer import AnnouncementBuilder
from navlib.menus.health import HealthLevel, HealthMenuProvider
from navlib.model import Cue, Priority


def move_to(nav, index):
    while nav.session.current.cursor != index:
        nav.select_next()


def open_catalog(nav, patient):
    nav.open(patient)
    move_to(nav, nav.session.current.count - 1)
    nav.activate()
    assert nav.current_level == HealthLevel.ADD_RECIPE_LIST


# ---------------------------------------------------------------------------
# Operations list
# ---------------------------------------------------------------------------

class TestOperationsList:
    def test_opens_on_queued_operations(self, health_nav, patient, speaker, cues):
        health_nav.open(patient)

        assert health_nav.current_level == HealthLevel.OPERATIONS_LIST
        assert cues.played == [Cue.OPEN]
        assert speaker.last == (
            "Queued: Administer go-juice\nOperation 1 of 3\nPress Enter for actions",
            Priority.NORMAL,
        )

    def test_synthetic_add_entry_counts_in_position(self, health_nav, patient, speaker):
        health_nav.open(patient)
        health_nav.select_previous()

        assert health_nav.session.current.cursor == 2
        assert speaker.last[0] == "Add Operation\nOperation 3 of 3\nPress Enter to add"

    def test_add_with_empty_catalog_is_rejected(self, health_nav, records, patient, speaker, cues):
        records.recipes = []
        health_nav.open(patient)
        move_to(health_nav, 2)

        health_nav.activate()

        assert health_nav.current_level == HealthLevel.OPERATIONS_LIST
        assert cues.last == Cue.REJECT
        assert speaker.last == ("No operations available", Priority.NORMAL)

    def test_empty_queue_still_offers_add(self, health_nav, patient, speaker):
        patient.operations.clear()
        health_nav.open(patient)
        assert speaker.last[0] == "Add Operation\nOperation 1 of 1\nPress Enter to add"

    def test_cancel_closes_and_restores_focus(self, health_nav, patient):
        health_nav.open(patient)
        health_nav.cancel()
        assert not health_nav.is_active
        assert health_nav.restored == [True]


# ---------------------------------------------------------------------------
# Operation actions
# ---------------------------------------------------------------------------

class TestOperationActions:
    def test_enter_on_queued_operation_lists_actions(self, health_nav, patient, speaker):
        health_nav.open(patient)
        health_nav.activate()

        assert health_nav.current_level == HealthLevel.OPERATION_ACTIONS
        assert speaker.last[0] == "View Details\nAction 1 of 3\nPress Enter to execute"

    def test_view_details(self, health_nav, patient, speaker, cues):
        health_nav.open(patient)
        health_nav.activate()
        health_nav.activate()

        assert health_nav.current_level == HealthLevel.OPERATION_ACTIONS
        assert cues.last == Cue.CLICK
        assert speaker.last[0] == "Administer go-juice\n\nPress Escape to go back"

    def test_remove_operation(self, health_nav, patient, speaker):
        health_nav.open(patient)
        health_nav.activate()
        health_nav.select_next()
        health_nav.activate()

        assert len(patient.operations) == 1
        assert health_nav.current_level == HealthLevel.OPERATIONS_LIST
        assert health_nav.session.current.cursor == 0
        assert speaker.last[0] == "Queued: Install peg leg (left leg)\nOperation 1 of 2\nPress Enter for actions"

    def test_remove_operation_already_gone(self, health_nav, patient, speaker, cues):
        health_nav.open(patient)
        health_nav.activate()
        health_nav.select_next()
        patient.operations.pop(0)

        health_nav.activate()

        assert health_nav.current_level == HealthLevel.OPERATION_ACTIONS
        assert cues.last == Cue.REJECT
        assert speaker.last == ("That operation is no longer queued", Priority.HIGH)

    def test_go_back_entry_keeps_operation_cursor(self, health_nav, patient):
        health_nav.open(patient)
        health_nav.select_next()
        health_nav.activate()
        health_nav.select_previous()

        health_nav.activate()

        assert health_nav.current_level == HealthLevel.OPERATIONS_LIST
        assert health_nav.session.current.cursor == 1

    def test_escape_returns_to_operations(self, health_nav, patient):
        health_nav.open(patient)
        health_nav.activate()
        health_nav.cancel()
        assert health_nav.is_active
        assert health_nav.current_level == HealthLevel.OPERATIONS_LIST


# ---------------------------------------------------------------------------
# Adding operations
# ---------------------------------------------------------------------------

class TestAddOperation:
    def test_catalog_announcement(self, health_nav, patient, speaker):
        open_catalog(health_nav, patient)
        assert speaker.last[0] == (
            "Install peg leg\n"
            "Install a simple wooden peg leg.\n"
            "Requires: 1 peg leg, 2 herbal medicine\n"
            "Recipe 1 of 4\n"
            "Press Enter to select"
        )

    def test_recipe_without_targets_is_rejected(self, health_nav, patient, speaker, cues):
        open_catalog(health_nav, patient)
        move_to(health_nav, 3)

        health_nav.activate()

        assert health_nav.current_level == HealthLevel.ADD_RECIPE_LIST
        assert len(patient.operations) == 2
        assert cues.last == Cue.REJECT
        assert speaker.last == ("This operation is not available", Priority.HIGH)

    def test_single_target_is_applied_directly(self, health_nav, patient, speaker):
        open_catalog(health_nav, patient)
        move_to(health_nav, 1)

        health_nav.activate()

        assert HealthLevel.SELECT_BODY_PART not in health_nav.session.levels
        assert health_nav.current_level == HealthLevel.OPERATIONS_LIST
        assert health_nav.session.current.cursor == 0
        assert len(patient.operations) == 3
        assert patient.operations[-1].recipe.key == "administer_go_juice"
        assert speaker.last[0].endswith("Operation 1 of 4\nPress Enter for actions")

    def test_several_targets_open_the_part_picker(self, health_nav, patient, speaker):
        open_catalog(health_nav, patient)

        health_nav.activate()

        assert health_nav.current_level == HealthLevel.SELECT_BODY_PART
        assert health_nav.session.current.count == 2
        assert speaker.last[0] == (
            "Install peg leg\n"
            "Body part: left leg\n"
            "Health: 12 / 30\n"
            "Part 1 of 2\n"
            "Press Enter to add operation"
        )

    def test_picking_a_part_queues_the_operation(self, health_nav, patient):
        open_catalog(health_nav, patient)
        health_nav.activate()
        health_nav.select_next()

        health_nav.activate()

        assert health_nav.current_level == HealthLevel.OPERATIONS_LIST
        assert health_nav.session.current.cursor == 0
        assert patient.operations[-1].label == "Install peg leg (right leg)"

    def test_unavailable_part_is_rejected(self, health_nav, patient, speaker, cues):
        open_catalog(health_nav, patient)
        move_to(health_nav, 2)
        health_nav.activate()
        health_nav.select_next()

        health_nav.activate()

        assert health_nav.current_level == HealthLevel.SELECT_BODY_PART
        assert len(patient.operations) == 2
        assert cues.last == Cue.REJECT
        assert speaker.last == ("This operation is not available on this body part", Priority.HIGH)

    def test_unavailable_whole_body_recipe_is_rejected(self, health_nav, records, patient, speaker, cues):
        records.recipe("administer_go_juice").unavailable_parts = ["whole_body"]
        open_catalog(health_nav, patient)
        move_to(health_nav, 1)

        health_nav.activate()

        assert health_nav.current_level == HealthLevel.ADD_RECIPE_LIST
        assert len(patient.operations) == 2
        assert cues.last == Cue.REJECT
        assert speaker.last == ("This operation is not available", Priority.HIGH)

    def test_escape_walks_back_up(self, health_nav, patient):
        open_catalog(health_nav, patient)
        health_nav.activate()

        health_nav.cancel()
        assert health_nav.current_level == HealthLevel.ADD_RECIPE_LIST
        health_nav.cancel()
        assert health_nav.current_level == HealthLevel.OPERATIONS_LIST
        health_nav.cancel()
        assert not health_nav.is_active
        assert health_nav.restored == [True]


# ---------------------------------------------------------------------------
# Medical settings
# ---------------------------------------------------------------------------

class TestMedicalSettings:
    def test_opens_settings_section(self, health_nav, patient, speaker):
        health_nav.open(patient, HealthLevel.MEDICAL_SETTINGS_LIST)
        assert speaker.last[0] == "Food Restriction\nCurrent: Fine\nSetting 1 of 3\nPress Enter to change"

    def test_next_three_times_wraps(self, health_nav, patient, speaker):
        health_nav.open(patient, HealthLevel.MEDICAL_SETTINGS_LIST)

        positions = []
        for _ in range(3):
            health_nav.select_next()
            positions.append(speaker.last[0].splitlines()[-2])

        assert positions == ["Setting 2 of 3", "Setting 3 of 3", "Setting 1 of 3"]
        assert health_nav.session.current.cursor == 0

    def test_change_food_restriction(self, health_nav, patient, speaker):
        health_nav.open(patient, HealthLevel.MEDICAL_SETTINGS_LIST)
        health_nav.activate()
        assert health_nav.current_level == HealthLevel.MEDICAL_SETTING_CHANGE
        assert speaker.last[0] == "Lavish\nOption 1 of 3\nPress Enter to confirm"

        health_nav.select_previous()
        health_nav.activate()

        assert patient.food_policy == "Simple"
        assert health_nav.current_level == HealthLevel.MEDICAL_SETTINGS_LIST
        assert speaker.last[0] == "Food Restriction\nCurrent: Simple\nSetting 1 of 3\nPress Enter to change"

    def test_change_medical_care(self, health_nav, patient):
        health_nav.open(patient, HealthLevel.MEDICAL_SETTINGS_LIST)
        health_nav.select_next()
        health_nav.activate()
        health_nav.select_next()
        health_nav.activate()

        assert patient.medical_care == "Herbal"
        assert health_nav.session.current.cursor == 1

    def test_toggle_self_tend_in_place(self, health_nav, patient, speaker):
        health_nav.open(patient, HealthLevel.MEDICAL_SETTINGS_LIST)
        health_nav.select_previous()

        health_nav.activate()

        assert patient.self_tend is True
        assert health_nav.current_level == HealthLevel.MEDICAL_SETTINGS_LIST
        assert speaker.last[0] == "Self-Tend\nCurrent: Enabled\nSetting 3 of 3\nPress Enter to change"

    def test_no_choices_available(self, health_nav, records, patient, speaker, cues):
        records.medical_care = []
        health_nav.open(patient, HealthLevel.MEDICAL_SETTINGS_LIST)
        health_nav.select_next()

        health_nav.activate()

        assert health_nav.current_level == HealthLevel.MEDICAL_SETTINGS_LIST
        assert cues.last == Cue.REJECT
        assert speaker.last == ("No options available", Priority.NORMAL)

    def test_escape_from_choices_returns_to_settings(self, health_nav, patient):
        health_nav.open(patient, HealthLevel.MEDICAL_SETTINGS_LIST)
        health_nav.activate()
        health_nav.cancel()
        assert health_nav.current_level == HealthLevel.MEDICAL_SETTINGS_LIST


def test_position_line_can_be_disabled(records, patient, make_navigator, speaker):
    nav = make_navigator(HealthMenuProvider(records), builder=AnnouncementBuilder(announce_position=False))
    nav.open(patient, HealthLevel.MEDICAL_SETTINGS_LIST)
    assert speaker.last[0] == "Food Restriction\nCurrent: Fine\nPress Enter to change"
