"""Manager systems for simulator coordination.

This package contains the manager classes that own the simulator state
changes and report them through the event-driven architecture.
"""

from .encounter_manager import EncounterManager
from .log_manager import LogCategory, LogEntry, LogLevel, LogManager
from .roster_manager import RosterManager
from .turn_order_manager import TurnOrderManager
from .venue_manager import VenueManager

__all__ = [
    "EncounterManager",
    "LogCategory",
    "LogEntry",
    "LogLevel",
    "LogManager",
    "RosterManager",
    "TurnOrderManager",
    "VenueManager",
]
