"""
Accessible Menu Navigation Library Package

This package contains the engine that lets keyboard and speech users walk
nested, dynamically populated menus.
"""

# Version information
__version__ = "1.0"

# Import key components to simplify importing from the package
from navlib.utils import setup_logging
from navlib.model import Cue, Item, NavigationSession, Priority
from navlib.provider import (
    ApplyResult, ChooseTarget, DataProvider, Descend, LevelSpec, MenuDefinition,
    Notify, Perform, Return,
)
from navlib.announcer import AnnouncementBuilder
from navlib.navigator import Navigator
from navlib.dispatcher import Action, InputDispatcher, KeyEvent
