"""Core data structures for combatants, catalogs and encounter selections.

Combatants are immutable: a simulation run never writes to them. The
per-run initiative lives in the scheduler (see ``engine.initiative``), so the
same roster can be simulated any number of times without leaking state
between runs.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Any, Sequence, TypeAlias

from .game_enums import CATEGORY_NAMES, MAX_AMBUSH_ACTIONS, CombatantCategory


# Ordered monster names sanctioned for a venue, e.g. ("Bogsneak", "Mirebeast")
EncounterCombination: TypeAlias = tuple[str, ...]

# The in-progress choice of monster names, replaced atomically on change
EncounterSelection: TypeAlias = tuple[str, ...]


@dataclass(frozen=True)
class Combatant:
    """A participant in the initiative race."""

    name: str
    quickness: int
    category: CombatantCategory

    def get_category_name(self) -> str:
        return CATEGORY_NAMES[self.category]

    @property
    def is_dragon(self) -> bool:
        return self.category == CombatantCategory.DRAGON


@dataclass(frozen=True)
class Dragon(Combatant):
    """A player dragon with optional guaranteed opening actions."""

    category: CombatantCategory = field(default=CombatantCategory.DRAGON, init=False)
    ambush_count: int = 0

    @property
    def ambush_actions(self) -> int:
        """Number of ambush turns this dragon actually takes (0, 1 or 2)."""
        return min(max(self.ambush_count, 0), MAX_AMBUSH_ACTIONS)


@dataclass(frozen=True)
class Monster(Combatant):
    """A venue monster."""

    category: CombatantCategory = field(default=CombatantCategory.MONSTER, init=False)


@dataclass(frozen=True)
class MonsterRecord:
    """One row of a venue's monster catalog."""

    name: str
    quickness: int

    def to_monster(self) -> Monster:
        return Monster(self.name, self.quickness)


@dataclass(frozen=True)
class Venue:
    """A named location whose monster and encounter catalogs load together."""

    name: str
    file_key: str

    @property
    def monster_file(self) -> str:
        return f"monsterdata/{self.file_key}.csv"

    @property
    def encounter_file(self) -> str:
        return f"encounters/{self.file_key}.json"


_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class DataConverter:
    """Utilities for converting loosely typed input into simulator data."""

    @staticmethod
    def parse_int(value: Any) -> int:
        """Coerce a value to an integer the way form input is read.

        Strings keep their leading integer part, so ``"12abc"`` becomes 12
        and ``"7.9"`` becomes 7. Floats are truncated toward zero.

        Raises:
            ValueError: If the value has no leading integer
        """
        if isinstance(value, bool):
            raise ValueError(f"Not a number: {value!r}")
        if isinstance(value, int):
            return value
        if isinstance(value, float):
            if math.isnan(value) or math.isinf(value):
                raise ValueError(f"Not a number: {value!r}")
            return int(value)
        if isinstance(value, str):
            match = _LEADING_INT.match(value)
            if match:
                return int(match.group(1))
        raise ValueError(f"Not a number: {value!r}")

    @staticmethod
    def to_combination(names: Sequence[Any]) -> EncounterCombination:
        """Convert a decoded JSON list into an encounter combination."""
        if isinstance(names, (str, bytes)) or not isinstance(names, Sequence):
            raise ValueError(f"Encounter must be a list of monster names, got {names!r}")
        return tuple(str(name) for name in names)

    @staticmethod
    def combatant_summary(combatant: Combatant) -> str:
        """Short one-line description for listings and logs."""
        text = f"{combatant.name} ({combatant.get_category_name()}, quickness {combatant.quickness}"
        if isinstance(combatant, Dragon):
            text += f", ambush {combatant.ambush_count}"
        return text + ")"


# Type aliases for cleaner code
DragonRoster = list[Dragon]
MonsterRoster = list[Monster]
MonsterCatalog = dict[str, MonsterRecord]
