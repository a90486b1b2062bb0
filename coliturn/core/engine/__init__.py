"""Core simulator engine components.

This package contains the fundamental engine systems:
- initiative.py: Initiative scheduler producing the turn order
- encounter_selector.py: Constrained choice over sanctioned encounters
- simulator_state.py: Centralized state management
"""

from .encounter_selector import (
    EncounterChoices,
    choices_at_slot,
    compute_choices,
    is_valid_selection,
    normalize_catalog,
    replace_slot,
)
from .initiative import (
    QUICKNESS_RANGE_ERROR,
    ROUND_LIMIT_ERROR,
    TURN_COST_ERROR,
    InitiativeScheduler,
    InitiativeState,
    TurnEntry,
    TurnOrder,
    TurnOrderResult,
    calculate_turns,
    is_sorted_by_quickness,
)
from .simulator_state import EncounterState, RosterState, SimulatorState, TurnState

__all__ = [
    "EncounterChoices",
    "choices_at_slot",
    "compute_choices",
    "is_valid_selection",
    "normalize_catalog",
    "replace_slot",
    "QUICKNESS_RANGE_ERROR",
    "ROUND_LIMIT_ERROR",
    "TURN_COST_ERROR",
    "InitiativeScheduler",
    "InitiativeState",
    "TurnEntry",
    "TurnOrder",
    "TurnOrderResult",
    "calculate_turns",
    "is_sorted_by_quickness",
    "EncounterState",
    "RosterState",
    "SimulatorState",
    "TurnState",
]
