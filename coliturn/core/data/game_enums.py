"""Centralized simulator enums and constants.

This module contains the enums shared by the scheduler, the encounter
selector and the managers, providing a single source of truth.
"""

from enum import Enum, auto


class CombatantCategory(Enum):
    """Kinds of combatants taking part in a fight."""
    DRAGON = auto()
    MONSTER = auto()


class TurnPhase(Enum):
    """Where in a simulation a turn was produced."""
    AMBUSH = auto()   # Guaranteed dragon actions before the first round
    ROUND = auto()    # Initiative race turns


# Hard limit on simulated rounds per run
MAX_ROUNDS = 50

# Ambush actions saturate at this many per dragon
MAX_AMBUSH_ACTIONS = 2

# Longest encounter combination a venue can sanction
MAX_ENCOUNTER_SIZE = 4


CATEGORY_NAMES = {
    CombatantCategory.DRAGON: "Dragon",
    CombatantCategory.MONSTER: "Monster",
}
