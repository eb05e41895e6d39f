"""
Concrete menus driven by the navigation engine
"""

from navlib.menus.health import HEALTH_MENU, HealthLevel, HealthMenuProvider, MedicalSetting, OperationAction
from navlib.menus.records import HealthRecords, Patient
