"""
Health tab menu: medical settings and the operations queue of a patient

Levels:
    MEDICAL_SETTINGS_LIST   Food restriction, medical care, self-tend (root)
    MEDICAL_SETTING_CHANGE  Choices for the picked setting
    OPERATIONS_LIST         Queued operations plus "Add Operation" (root)
    OPERATION_ACTIONS       View details / remove / go back
    ADD_RECIPE_LIST         Catalog of operations that can be queued
    SELECT_BODY_PART        Body parts the picked operation can target
"""

import logging
from enum import Enum

from navlib.announcer import compose_list
from navlib.menus.records import WHOLE_BODY
from navlib.model import Item
from navlib.provider import (
    ApplyResult, ChooseTarget, DataProvider, Descend, LevelSpec, MenuDefinition,
    Notify, Perform, Return,
)
from navlib.utils import LOGGER_NAME, strip_markup

logger = logging.getLogger(LOGGER_NAME)


class HealthLevel(Enum):
    MEDICAL_SETTINGS_LIST = "medical_settings_list"
    MEDICAL_SETTING_CHANGE = "medical_setting_change"
    OPERATIONS_LIST = "operations_list"
    OPERATION_ACTIONS = "operation_actions"
    ADD_RECIPE_LIST = "add_recipe_list"
    SELECT_BODY_PART = "select_body_part"


class MedicalSetting(Enum):
    FOOD_RESTRICTION = "Food Restriction"
    MEDICAL_CARE = "Medical Care"
    SELF_TEND = "Self-Tend"

    @property
    def label(self):
        return self.value


class OperationAction(Enum):
    VIEW_DETAILS = "View Details"
    REMOVE = "Remove Operation"
    GO_BACK = "Go Back"

    @property
    def label(self):
        return self.value


ADD_OPERATION = Item("Add Operation", action_hint="Press Enter to add", synthetic=True)

HEALTH_MENU = MenuDefinition(
    name="health tab",
    entry_level=HealthLevel.OPERATIONS_LIST,
    levels={
        HealthLevel.MEDICAL_SETTINGS_LIST: LevelSpec(
            noun="Setting",
            call_to_action="Press Enter to change",
            shows_current_value=True,
        ),
        HealthLevel.MEDICAL_SETTING_CHANGE: LevelSpec(
            noun="Option",
            call_to_action="Press Enter to confirm",
            parent=HealthLevel.MEDICAL_SETTINGS_LIST,
            empty_notice="No options available",
        ),
        HealthLevel.OPERATIONS_LIST: LevelSpec(
            noun="Operation",
            call_to_action="Press Enter for actions",
            trailing_item=ADD_OPERATION,
        ),
        HealthLevel.OPERATION_ACTIONS: LevelSpec(
            noun="Action",
            call_to_action="Press Enter to execute",
            parent=HealthLevel.OPERATIONS_LIST,
        ),
        HealthLevel.ADD_RECIPE_LIST: LevelSpec(
            noun="Recipe",
            call_to_action="Press Enter to select",
            parent=HealthLevel.OPERATIONS_LIST,
            empty_notice="No operations available",
        ),
        HealthLevel.SELECT_BODY_PART: LevelSpec(
            noun="Part",
            call_to_action="Press Enter to add operation",
            parent=HealthLevel.ADD_RECIPE_LIST,
            empty_notice="No body parts available",
        ),
    },
)


class HealthMenuProvider(DataProvider):
    """Backs the health tab menu with a HealthRecords store; the subject is a Patient"""

    def __init__(self, records):
        self.records = records

    @property
    def definition(self):
        return HEALTH_MENU

    def fetch_items(self, level, session):
        patient = session.subject
        if patient is None:
            return []

        if level == HealthLevel.MEDICAL_SETTINGS_LIST:
            return [Item(setting.label, key=setting) for setting in MedicalSetting]

        if level == HealthLevel.MEDICAL_SETTING_CHANGE:
            setting = session.selection(HealthLevel.MEDICAL_SETTINGS_LIST).key
            if setting == MedicalSetting.FOOD_RESTRICTION:
                choices = self.records.food_policies
            elif setting == MedicalSetting.MEDICAL_CARE:
                choices = self.records.medical_care
            else:
                choices = []
            return [Item(choice, key=choice) for choice in choices]

        if level == HealthLevel.OPERATIONS_LIST:
            return [
                Item(f"Queued: {strip_markup(operation.label)}", key=operation)
                for operation in self.records.queued_operations(patient)
            ]

        if level == HealthLevel.OPERATION_ACTIONS:
            return [Item(action.label, key=action) for action in OperationAction]

        if level == HealthLevel.ADD_RECIPE_LIST:
            return [
                Item(strip_markup(recipe.label), key=recipe)
                for recipe in self.records.available_recipes(patient)
            ]

        if level == HealthLevel.SELECT_BODY_PART:
            recipe = session.selection(HealthLevel.ADD_RECIPE_LIST).key
            return [
                Item(strip_markup(recipe.label), detail=f"Body part: {part.label}", key=part)
                for part in self.records.parts_for_recipe(patient, recipe)
            ]

        return []

    def describe(self, level, item, session):
        if level == HealthLevel.ADD_RECIPE_LIST:
            recipe = item.key
            return [recipe.description, compose_list("Requires: ", recipe.ingredients)]

        if level == HealthLevel.SELECT_BODY_PART:
            part = item.key
            if part.max_health:
                return [f"Health: {part.health:.0f} / {part.max_health:.0f}"]
            return []

        return []

    def current_value(self, setting, subject):
        if setting == MedicalSetting.FOOD_RESTRICTION:
            return subject.food_policy or "None"
        if setting == MedicalSetting.MEDICAL_CARE:
            return subject.medical_care or "None"
        if setting == MedicalSetting.SELF_TEND:
            return "Enabled" if subject.self_tend else "Disabled"
        return ""

    def activate(self, level, item, session):
        if level == HealthLevel.MEDICAL_SETTINGS_LIST:
            if item.key == MedicalSetting.SELF_TEND:
                return Perform()
            return Descend(HealthLevel.MEDICAL_SETTING_CHANGE)

        if level == HealthLevel.MEDICAL_SETTING_CHANGE:
            return Perform(then=HealthLevel.MEDICAL_SETTINGS_LIST)

        if level == HealthLevel.OPERATIONS_LIST:
            if item.synthetic:
                return Descend(HealthLevel.ADD_RECIPE_LIST)
            return Descend(HealthLevel.OPERATION_ACTIONS)

        if level == HealthLevel.OPERATION_ACTIONS:
            operation = session.selection(HealthLevel.OPERATIONS_LIST).key
            if item.key == OperationAction.VIEW_DETAILS:
                return Notify(f"{operation.label}\n\nPress Escape to go back")
            if item.key == OperationAction.REMOVE:
                return Perform(then=HealthLevel.OPERATIONS_LIST, reset_cursor=True)
            return Return(HealthLevel.OPERATIONS_LIST)

        if level == HealthLevel.ADD_RECIPE_LIST:
            return ChooseTarget(
                HealthLevel.SELECT_BODY_PART,
                then=HealthLevel.OPERATIONS_LIST,
                unavailable_notice="This operation is not available",
            )

        if level == HealthLevel.SELECT_BODY_PART:
            return Perform(then=HealthLevel.OPERATIONS_LIST, reset_cursor=True)

        return None

    def apply(self, level, item, session):
        patient = session.subject

        if level == HealthLevel.MEDICAL_SETTINGS_LIST and item.key == MedicalSetting.SELF_TEND:
            self.records.toggle_self_tend(patient)
            return ApplyResult.ok()

        if level == HealthLevel.MEDICAL_SETTING_CHANGE:
            setting = session.selection(HealthLevel.MEDICAL_SETTINGS_LIST).key
            if setting == MedicalSetting.FOOD_RESTRICTION:
                self.records.set_food_policy(patient, item.key)
            else:
                self.records.set_medical_care(patient, item.key)
            return ApplyResult.ok()

        if level == HealthLevel.OPERATION_ACTIONS and item.key == OperationAction.REMOVE:
            operation = session.selection(HealthLevel.OPERATIONS_LIST).key
            self.records.remove_operation(patient, operation)
            return ApplyResult.ok()

        if level == HealthLevel.SELECT_BODY_PART:
            recipe = session.selection(HealthLevel.ADD_RECIPE_LIST).key
            if not self.records.is_available(patient, recipe, item.key):
                if item.key is WHOLE_BODY:
                    return ApplyResult.failed("This operation is not available")
                return ApplyResult.failed("This operation is not available on this body part")
            self.records.add_operation(patient, recipe, item.key)
            return ApplyResult.ok()

        logger.warning(f"Nothing to apply for '{item.label}' on {level}")
        return ApplyResult.failed("Nothing to do")
