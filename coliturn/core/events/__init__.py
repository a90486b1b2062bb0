"""Event system for publisher-subscriber communication.

This package contains the event-driven plumbing between managers:
- event_manager.py: Publisher-subscriber event routing and coordination
- events.py: Event definitions for inter-manager communication
"""

from .event_manager import EventManager, EventPriority, QueuedEvent
from .events import (
    CombatantAdded,
    CombatantRemoved,
    DebugMessage,
    EncounterCommitted,
    EncounterSelectionChanged,
    EventType,
    LogMessage,
    LogSaveRequested,
    ManagerInitialized,
    SimulatorEvent,
    TurnCalculationFailed,
    TurnsCalculated,
    VenueLoaded,
)

__all__ = [
    "EventManager",
    "EventPriority",
    "QueuedEvent",
    "CombatantAdded",
    "CombatantRemoved",
    "DebugMessage",
    "EncounterCommitted",
    "EncounterSelectionChanged",
    "EventType",
    "LogMessage",
    "LogSaveRequested",
    "ManagerInitialized",
    "SimulatorEvent",
    "TurnCalculationFailed",
    "TurnsCalculated",
    "VenueLoaded",
]
