"""Simulator state management with structured substates.

This module defines the top-level :class:`SimulatorState` along with focused
dataclasses for the roster, the venue/encounter selection and the calculated
turn order. Managers own the mutations; the state only holds data and small
helpers that keep related behaviour together.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from ..data import (
    Combatant,
    Dragon,
    EncounterCombination,
    EncounterSelection,
    Monster,
    MonsterCatalog,
    Venue,
)
from .encounter_selector import EncounterChoices, compute_choices, is_valid_selection
from .initiative import TurnOrder


@dataclass
class RosterState:
    """Dragons and monsters taking part in the next calculation."""

    dragons: list[Dragon] = field(default_factory=list)
    monsters: list[Monster] = field(default_factory=list)

    @property
    def combatants(self) -> list[Combatant]:
        """Pool order used by the scheduler: dragons, then monsters."""
        return [*self.dragons, *self.monsters]

    def clear_monsters(self) -> None:
        self.monsters = []

    def is_empty(self) -> bool:
        return not self.dragons and not self.monsters


@dataclass
class EncounterState:
    """Active venue catalogs and the in-progress encounter selection."""

    venue: Optional[Venue] = None
    combinations: list[EncounterCombination] = field(default_factory=list)
    monster_catalog: MonsterCatalog = field(default_factory=dict)
    selection: EncounterSelection = ()

    def choices(self) -> EncounterChoices:
        return compute_choices(self.combinations, self.selection)

    def is_valid(self) -> bool:
        return is_valid_selection(self.combinations, self.selection)

    def reset_selection(self) -> None:
        self.selection = ()


@dataclass
class TurnState:
    """Result of the last successful calculation."""

    turns: list[str] = field(default_factory=list)
    order: Optional[TurnOrder] = None
    turns_calculated: bool = False
    num_rounds: int = 0

    def store(self, order: TurnOrder, num_rounds: int) -> None:
        """Keep a finished order. Ambush-only orders (no monsters) are not marked calculated."""
        self.order = order
        self.turns = order.turns
        self.num_rounds = num_rounds
        self.turns_calculated = order.turn_cost is not None


@dataclass
class SimulatorState:
    """Unified state shared by the simulator managers."""

    roster: RosterState = field(default_factory=RosterState)
    encounter: EncounterState = field(default_factory=EncounterState)
    turn: TurnState = field(default_factory=TurnState)

    # Filled by the log manager for display
    log_data: dict[str, Any] = field(default_factory=dict)

    @property
    def venue_name(self) -> Optional[str]:
        return self.encounter.venue.name if self.encounter.venue else None
