"""
In-memory health records standing in for the host simulation.

Holds the patients, their medical settings and queued operations, and the
catalog of operations that can be queued. Records are loaded from a JSON
profile:

    {
        "food_policies": ["Lavish", "Fine", "Simple"],
        "medical_care": ["No care", "Herbal", "Normal", "Best"],
        "recipes": [
            {"key": "install_peg_leg", "label": "Install peg leg",
             "description": "...", "ingredients": ["1 peg leg"],
             "parts": ["left_leg", "right_leg"], "unavailable_parts": []}
        ],
        "patients": [
            {"name": "Mira", "food_policy": "Fine", "medical_care": "Best",
             "self_tend": false,
             "body_parts": [{"key": "left_leg", "label": "left leg",
                             "health": 20, "max_health": 30}],
             "operations": [{"recipe": "install_peg_leg", "part": "left_leg"}]}
        ]
    }

A recipe without "parts" applies to the whole body.
"""

import json
import logging
from dataclasses import dataclass, field

from navlib.errors import ConfigError, ProviderError
from navlib.utils import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)


@dataclass
class BodyPart:
    key: str
    label: str
    health: float = None
    max_health: float = None


WHOLE_BODY = BodyPart("whole_body", "Whole body")


@dataclass
class Recipe:
    key: str
    label: str
    description: str = ""
    ingredients: list = field(default_factory=list)
    parts: list = field(default_factory=list)
    unavailable_parts: list = field(default_factory=list)

    @property
    def targets_whole_body(self):
        return not self.parts


@dataclass(eq=False)
class Operation:
    """A queued operation (a bill on the patient's bill stack)"""
    recipe: Recipe
    part: BodyPart = None

    @property
    def label(self):
        if self.part is None or self.part is WHOLE_BODY:
            return self.recipe.label
        return f"{self.recipe.label} ({self.part.label})"


class Patient:
    """A patient whose health tab is being navigated"""

    def __init__(self, name, food_policy="", medical_care="", self_tend=False, body_parts=None):
        self.name = name
        self.food_policy = food_policy
        self.medical_care = medical_care
        self.self_tend = self_tend
        self.body_parts = list(body_parts or [])
        self.operations = []

    def part(self, key):
        for body_part in self.body_parts:
            if body_part.key == key:
                return body_part
        return None

    def __repr__(self):
        return f"Patient({self.name!r})"


class HealthRecords:
    """Medical policies, the operation catalog and the patients they apply to"""

    def __init__(self, food_policies=None, medical_care=None, recipes=None):
        self.food_policies = list(food_policies or [])
        self.medical_care = list(medical_care or [])
        self.recipes = list(recipes or [])
        self.patients = {}

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @classmethod
    def from_file(cls, filepath):
        """
        Load records from a JSON profile

        Args:
            filepath: Path to the profile JSON file

        Returns:
            HealthRecords: Loaded records
        """
        try:
            with open(filepath, 'r') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Could not read health profile '{filepath}': {e}") from e

        records = cls.from_dict(data)
        logger.info(f"Loaded health profile with {len(records.patients)} patients "
                    f"and {len(records.recipes)} recipes")
        return records

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict):
            raise ConfigError("Health profile must be a JSON object")

        try:
            recipes = [
                Recipe(
                    key=entry["key"],
                    label=entry.get("label", entry["key"]),
                    description=entry.get("description", ""),
                    ingredients=list(entry.get("ingredients", [])),
                    parts=list(entry.get("parts", [])),
                    unavailable_parts=list(entry.get("unavailable_parts", [])),
                )
                for entry in data.get("recipes", [])
            ]
            records = cls(data.get("food_policies", []), data.get("medical_care", []), recipes)

            for entry in data.get("patients", []):
                parts = [
                    BodyPart(p["key"], p.get("label", p["key"]), p.get("health"), p.get("max_health"))
                    for p in entry.get("body_parts", [])
                ]
                patient = Patient(
                    entry["name"],
                    food_policy=entry.get("food_policy", ""),
                    medical_care=entry.get("medical_care", ""),
                    self_tend=bool(entry.get("self_tend", False)),
                    body_parts=parts,
                )
                records.patients[patient.name] = patient
                for queued in entry.get("operations", []):
                    recipe = records.recipe(queued["recipe"])
                    part = patient.part(queued["part"]) if queued.get("part") else WHOLE_BODY
                    if recipe is None or part is None:
                        raise ConfigError(f"Unknown operation {queued} for patient {patient.name}")
                    patient.operations.append(Operation(recipe, part))
        except KeyError as e:
            raise ConfigError(f"Health profile entry is missing {e}") from e

        return records

    def recipe(self, key):
        for recipe in self.recipes:
            if recipe.key == key:
                return recipe
        return None

    # ------------------------------------------------------------------
    # Medical settings
    # ------------------------------------------------------------------

    def set_food_policy(self, patient, policy):
        if policy not in self.food_policies:
            raise ProviderError(f"{policy} is not a food restriction")
        patient.food_policy = policy

    def set_medical_care(self, patient, care):
        if care not in self.medical_care:
            raise ProviderError(f"{care} is not a medical care level")
        patient.medical_care = care

    def toggle_self_tend(self, patient):
        patient.self_tend = not patient.self_tend
        return patient.self_tend

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def queued_operations(self, patient):
        return list(patient.operations)

    def available_recipes(self, patient):
        return list(self.recipes)

    def parts_for_recipe(self, patient, recipe):
        """
        Body parts of the patient a recipe can be performed on

        Returns:
            list: Matching parts, [WHOLE_BODY] for whole-body recipes
        """
        if recipe.targets_whole_body:
            return [WHOLE_BODY]
        return [part for part in patient.body_parts if part.key in recipe.parts]

    def is_available(self, patient, recipe, part):
        return part.key not in recipe.unavailable_parts

    def add_operation(self, patient, recipe, part):
        operation = Operation(recipe, part)
        patient.operations.append(operation)
        logger.info(f"Queued {operation.label} for {patient.name}")
        return operation

    def remove_operation(self, patient, operation):
        if operation not in patient.operations:
            raise ProviderError("That operation is no longer queued")
        patient.operations.remove(operation)
        logger.info(f"Removed {operation.label} for {patient.name}")
