"""Simulator events and their payloads.

Every state change a manager makes is announced with one of these frozen
dataclasses. Payloads carry the domain objects themselves (combatants,
selections, turn orders), not copies of their fields.
"""

from abc import ABC
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Optional

from ..data import Combatant, EncounterSelection, Monster

if TYPE_CHECKING:
    from ..engine.initiative import TurnOrder
    from ...game.managers.log_manager import LogLevel


class EventType(Enum):
    """Types of simulator events that managers can subscribe to."""
    # Venue Events
    VENUE_LOADED = auto()

    # Roster Events
    COMBATANT_ADDED = auto()
    COMBATANT_REMOVED = auto()

    # Encounter Events
    ENCOUNTER_SELECTION_CHANGED = auto()
    ENCOUNTER_COMMITTED = auto()

    # Turn Order Events
    TURNS_CALCULATED = auto()
    TURN_CALCULATION_FAILED = auto()

    # Logging Events
    LOG_MESSAGE = auto()
    DEBUG_MESSAGE = auto()

    # System Events
    MANAGER_INITIALIZED = auto()
    LOG_SAVE_REQUESTED = auto()


@dataclass(frozen=True)
class SimulatorEvent(ABC):
    """Base class for all simulator events."""
    event_type: EventType = field(init=False)


@dataclass(frozen=True)
class VenueLoaded(SimulatorEvent):
    """Event emitted when a venue's catalogs have been loaded."""
    venue_name: str
    combination_count: int
    monster_count: int

    def __post_init__(self):
        # Set event_type since dataclass frozen=True prevents normal assignment
        object.__setattr__(self, 'event_type', EventType.VENUE_LOADED)


@dataclass(frozen=True)
class CombatantAdded(SimulatorEvent):
    """Event emitted when a dragon or monster joins the roster."""
    combatant: Combatant

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.COMBATANT_ADDED)


@dataclass(frozen=True)
class CombatantRemoved(SimulatorEvent):
    """Event emitted when a dragon or monster leaves the roster."""
    combatant: Combatant

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.COMBATANT_REMOVED)


@dataclass(frozen=True)
class EncounterSelectionChanged(SimulatorEvent):
    """Event emitted when the encounter selection is replaced."""
    old_selection: EncounterSelection
    new_selection: EncounterSelection
    is_valid: bool

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.ENCOUNTER_SELECTION_CHANGED)


@dataclass(frozen=True)
class EncounterCommitted(SimulatorEvent):
    """Event emitted when a selection replaces the monster roster."""
    selection: EncounterSelection
    monsters: tuple[Monster, ...]
    skipped: tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.ENCOUNTER_COMMITTED)


@dataclass(frozen=True)
class TurnsCalculated(SimulatorEvent):
    """Event emitted after a successful turn order calculation."""
    order: "TurnOrder"
    num_rounds: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.TURNS_CALCULATED)


@dataclass(frozen=True)
class TurnCalculationFailed(SimulatorEvent):
    """Event emitted when a calculation is rejected before it runs."""
    num_rounds: int
    reason: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.TURN_CALCULATION_FAILED)


# Logging Events
@dataclass(frozen=True)
class LogMessage(SimulatorEvent):
    """Event emitted when a log message is created."""
    message: str
    category: str
    level: "LogLevel"
    source: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.LOG_MESSAGE)


@dataclass(frozen=True)
class DebugMessage(SimulatorEvent):
    """Event emitted for debug-specific messages."""
    message: str
    source: str
    context: Optional[dict] = None

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.DEBUG_MESSAGE)


# System Events
@dataclass(frozen=True)
class ManagerInitialized(SimulatorEvent):
    """Event emitted when a manager is initialized."""
    manager_name: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.MANAGER_INITIALIZED)


@dataclass(frozen=True)
class LogSaveRequested(SimulatorEvent):
    """Event emitted when the user requests to save the log to file."""
    directory: str = "logs"

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.LOG_SAVE_REQUESTED)
