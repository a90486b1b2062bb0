"""
Main simulator orchestration class.

This module wires the event bus, the shared state and the managers together
and exposes the operations a front end needs. Every operation processes the
events it caused before returning, so the log is always current.
"""

from typing import Any, Optional, Sequence, TypeVar

from ..core.config_loader import SimulatorConfig
from ..core.data import Dragon, EncounterSelection, Monster, Venue
from ..core.engine import EncounterChoices, SimulatorState, TurnOrderResult
from ..core.events import EventManager, LogMessage, LogSaveRequested
from .managers.encounter_manager import EncounterManager
from .managers.log_manager import LogLevel, LogManager
from .managers.roster_manager import RosterManager
from .managers.turn_order_manager import TurnOrderManager
from .managers.venue_manager import VenueManager
from .venues.venue_loader import VenueLoader


TManager = TypeVar("TManager")


class Simulator:
    """Coordinates roster, encounter and turn order management."""

    def __init__(self, config: Optional[SimulatorConfig] = None, venue_loader: Optional[VenueLoader] = None):
        self.config = config or SimulatorConfig()
        self.state = SimulatorState()
        self.event_manager = EventManager(enable_debug_logging=self.config.debug_logging)
        self._venue_loader = venue_loader

        # Managers - created in initialize()
        self._log_manager: Optional[LogManager] = None
        self._roster_manager: Optional[RosterManager] = None
        self._encounter_manager: Optional[EncounterManager] = None
        self._turn_order_manager: Optional[TurnOrderManager] = None
        self._venue_manager: Optional[VenueManager] = None

    def _require_manager(self, manager: Optional[TManager], name: str) -> TManager:
        """Return the manager if initialized, otherwise raise a helpful error."""
        if manager is None:
            raise RuntimeError(f"{name} not initialized. Call initialize() first.")
        return manager

    @property
    def log_manager(self) -> LogManager:
        return self._require_manager(self._log_manager, "LogManager")

    @property
    def roster_manager(self) -> RosterManager:
        return self._require_manager(self._roster_manager, "RosterManager")

    @property
    def encounter_manager(self) -> EncounterManager:
        return self._require_manager(self._encounter_manager, "EncounterManager")

    @property
    def turn_order_manager(self) -> TurnOrderManager:
        return self._require_manager(self._turn_order_manager, "TurnOrderManager")

    @property
    def venue_manager(self) -> VenueManager:
        return self._require_manager(self._venue_manager, "VenueManager")

    def initialize(self) -> "Simulator":
        """Create all managers. Returns self for chaining."""
        self._log_manager = LogManager(
            self.event_manager,
            self.state,
            max_messages=self.config.max_log_messages,
            default_level=LogLevel.DEBUG if self.config.debug_logging else LogLevel.INFO,
        )
        self.event_manager.set_debug_callback(self._log_manager.debug)

        self._roster_manager = RosterManager(self.state, self.event_manager)
        self._encounter_manager = EncounterManager(self.state, self.event_manager, self._roster_manager)
        self._turn_order_manager = TurnOrderManager(
            self.state, self.event_manager, max_rounds=self.config.max_rounds
        )
        if self._venue_loader is not None:
            self._venue_manager = VenueManager(self.state, self.event_manager, self._venue_loader)

        self.event_manager.publish(
            LogMessage(
                message="Simulator initialized",
                category="SYSTEM",
                level=LogLevel.INFO,
                source="Simulator",
            ),
            source="Simulator",
        )
        self.event_manager.process_events()
        return self

    def _flush(self) -> None:
        self.event_manager.process_events()

    # Venues

    def list_venues(self) -> list[str]:
        return self.venue_manager.list_venues()

    def load_venue(self, venue_name: str) -> Venue:
        try:
            return self.venue_manager.load_venue(venue_name)
        finally:
            self._flush()

    # Roster

    def add_dragon(self, name: Optional[str], quickness: Any, ambush: Any = 0) -> Dragon:
        dragon = self.roster_manager.add_dragon(name, quickness, ambush)
        self._flush()
        return dragon

    def remove_dragon(self, dragon: Dragon) -> bool:
        removed = self.roster_manager.remove_dragon(dragon)
        self._flush()
        return removed

    def add_custom_monster(self, name: Optional[str], quickness: Any) -> Monster:
        monster = self.roster_manager.add_custom_monster(name, quickness)
        self._flush()
        return monster

    def add_monster(self, name: str, quickness: Any) -> Monster:
        monster = self.roster_manager.add_monster(name, quickness)
        self._flush()
        return monster

    def remove_monster(self, monster: Monster) -> bool:
        removed = self.roster_manager.remove_monster(monster)
        self._flush()
        return removed

    @property
    def dragons(self) -> list[Dragon]:
        return self.state.roster.dragons

    @property
    def monsters(self) -> list[Monster]:
        return self.state.roster.monsters

    # Encounters

    def set_encounter_slot(self, index: int, name: str) -> EncounterSelection:
        selection = self.encounter_manager.set_slot(index, name)
        self._flush()
        return selection

    def set_encounter(self, names: Sequence[str]) -> EncounterSelection:
        selection = self.encounter_manager.set_selection(names)
        self._flush()
        return selection

    def encounter_choices(self) -> EncounterChoices:
        return self.encounter_manager.choices()

    def is_valid_encounter(self) -> bool:
        return self.encounter_manager.is_valid()

    def commit_encounter(self) -> Optional[list[Monster]]:
        monsters = self.encounter_manager.commit()
        self._flush()
        return monsters

    # Turns

    def calculate_turns(self, num_rounds: Any = None) -> TurnOrderResult:
        """Calculate turn order; ``None`` uses the configured default."""
        if num_rounds is None:
            num_rounds = self.config.default_rounds
        result = self.turn_order_manager.calculate(num_rounds)
        self._flush()
        return result

    @property
    def turns(self) -> list[str]:
        return self.state.turn.turns

    @property
    def turns_calculated(self) -> bool:
        return self.state.turn.turns_calculated

    # Logging

    def log_lines(self) -> list[str]:
        return list(self.state.log_data.get("messages", []))

    def save_log(self, directory: str = "logs") -> None:
        self.event_manager.publish(LogSaveRequested(directory=directory), source="Simulator")
        self._flush()

    def shutdown(self) -> None:
        self.event_manager.shutdown()
