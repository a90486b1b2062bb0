"""Roster management for dragons and monsters.

Combatants are created here from loosely typed input (the CLI or any other
front end hands over strings) and removed by identity, so two combatants with
the same name and stats can still be told apart.
"""

from typing import TYPE_CHECKING, Any, Iterable, Optional

if TYPE_CHECKING:
    from ...core.events.event_manager import EventManager
    from ...core.engine.simulator_state import SimulatorState

from ...core.data import Combatant, DataConverter, Dragon, Monster
from ...core.events import CombatantAdded, CombatantRemoved, LogMessage, ManagerInitialized
from .log_manager import LogLevel


class RosterManager:
    """Adds and removes combatants from the active roster."""

    def __init__(self, state: "SimulatorState", event_manager: "EventManager"):
        self.state = state
        self.event_manager = event_manager

        self.event_manager.publish(
            ManagerInitialized(manager_name="RosterManager"),
            source="RosterManager",
        )

    def _emit_log(self, message: str, level: LogLevel = LogLevel.INFO) -> None:
        self.event_manager.publish(
            LogMessage(message=message, category="ROSTER", level=level, source="RosterManager"),
            source="RosterManager",
        )

    @property
    def dragons(self) -> list[Dragon]:
        return self.state.roster.dragons

    @property
    def monsters(self) -> list[Monster]:
        return self.state.roster.monsters

    def add_dragon(self, name: Optional[str], quickness: Any, ambush: Any = 0) -> Dragon:
        """Add a dragon to the roster.

        Args:
            name: Display name
            quickness: Quickness, coerced like form input
            ambush: Number of ambush actions; only 0, 1 and 2+ differ

        Raises:
            ValueError: If quickness or ambush is not a number
        """
        dragon = Dragon(
            name=name or "",
            quickness=DataConverter.parse_int(quickness),
            ambush_count=DataConverter.parse_int(ambush),
        )
        self.state.roster.dragons.append(dragon)
        self._announce_added(dragon)
        return dragon

    def remove_dragon(self, dragon: Dragon) -> bool:
        """Remove exactly this dragon object. Returns False if absent."""
        return self._remove(self.state.roster.dragons, dragon)

    def add_custom_monster(self, name: Optional[str], quickness: Any) -> Monster:
        """Add a monster typed in by hand rather than taken from a catalog."""
        return self.add_monster(name or "", quickness)

    def add_monster(self, name: str, quickness: Any) -> Monster:
        """Add a monster to the end of the roster.

        The last monster listed sets the turn cost for the whole fight.
        """
        monster = Monster(name=name, quickness=DataConverter.parse_int(quickness))
        self.state.roster.monsters.append(monster)
        self._announce_added(monster)
        return monster

    def remove_monster(self, monster: Monster) -> bool:
        """Remove exactly this monster object. Returns False if absent."""
        return self._remove(self.state.roster.monsters, monster)

    def clear_monsters(self) -> None:
        """Drop every monster from the roster."""
        if self.state.roster.monsters:
            self._emit_log(f"Cleared {len(self.state.roster.monsters)} monsters")
        self.state.roster.clear_monsters()

    def replace_monsters(self, monsters: Iterable[Monster]) -> None:
        """Clear the monster roster and repopulate it in order."""
        self.clear_monsters()
        for monster in monsters:
            self.state.roster.monsters.append(monster)
            self._announce_added(monster)

    def _remove(self, roster: list, combatant: Combatant) -> bool:
        for index, existing in enumerate(roster):
            if existing is combatant:
                del roster[index]
                self.event_manager.publish(CombatantRemoved(combatant=combatant), source="RosterManager")
                self._emit_log(f"Removed {DataConverter.combatant_summary(combatant)}")
                return True
        return False

    def _announce_added(self, combatant: Combatant) -> None:
        self.event_manager.publish(CombatantAdded(combatant=combatant), source="RosterManager")
        self._emit_log(f"Added {DataConverter.combatant_summary(combatant)}")
