"""Core data structures and definitions.

This package contains fundamental data types and simulator definitions:
- data_structures.py: Combatants, catalog records, venues and selections
- game_enums.py: Centralized enums and limits for the scheduler and selector
"""

from .data_structures import (
    Combatant,
    DataConverter,
    Dragon,
    DragonRoster,
    EncounterCombination,
    EncounterSelection,
    Monster,
    MonsterCatalog,
    MonsterRecord,
    MonsterRoster,
    Venue,
)
from .game_enums import (
    CATEGORY_NAMES,
    MAX_AMBUSH_ACTIONS,
    MAX_ENCOUNTER_SIZE,
    MAX_ROUNDS,
    CombatantCategory,
    TurnPhase,
)

__all__ = [
    "Combatant",
    "DataConverter",
    "Dragon",
    "DragonRoster",
    "EncounterCombination",
    "EncounterSelection",
    "Monster",
    "MonsterCatalog",
    "MonsterRecord",
    "MonsterRoster",
    "Venue",
    "CATEGORY_NAMES",
    "MAX_AMBUSH_ACTIONS",
    "MAX_ENCOUNTER_SIZE",
    "MAX_ROUNDS",
    "CombatantCategory",
    "TurnPhase",
]
