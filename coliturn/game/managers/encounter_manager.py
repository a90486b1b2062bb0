"""Encounter selection and commit.

The selection is a tuple that is replaced as a whole on every change, and
slot choices are recomputed from it on demand. Committing a selection
replaces the monster roster with the catalog entries of the chosen monsters.
"""

from typing import TYPE_CHECKING, Iterable, Optional, Sequence

if TYPE_CHECKING:
    from ...core.events.event_manager import EventManager
    from ...core.engine.simulator_state import SimulatorState
    from .roster_manager import RosterManager

from ...core.data import EncounterSelection, MAX_ENCOUNTER_SIZE, Monster, MonsterCatalog, MonsterRecord
from ...core.engine import EncounterChoices, normalize_catalog, replace_slot
from ...core.errors import DataConsistencyError
from ...core.events import (
    EncounterCommitted,
    EncounterSelectionChanged,
    LogMessage,
    ManagerInitialized,
)
from .log_manager import LogLevel


class EncounterManager:
    """Drives the slot-by-slot encounter picker."""

    def __init__(
        self,
        state: "SimulatorState",
        event_manager: "EventManager",
        roster_manager: "RosterManager",
    ):
        self.state = state
        self.event_manager = event_manager
        self.roster_manager = roster_manager

        self.event_manager.publish(
            ManagerInitialized(manager_name="EncounterManager"),
            source="EncounterManager",
        )

    def _emit_log(self, message: str, level: LogLevel = LogLevel.INFO) -> None:
        self.event_manager.publish(
            LogMessage(message=message, category="ENCOUNTER", level=level, source="EncounterManager"),
            source="EncounterManager",
        )

    @property
    def selection(self) -> EncounterSelection:
        return self.state.encounter.selection

    def use_catalog(
        self,
        combinations: Iterable[Sequence[str]],
        monster_catalog: Optional[MonsterCatalog] = None,
    ) -> None:
        """Install catalogs supplied by the caller instead of a venue file."""
        encounter = self.state.encounter
        encounter.combinations = normalize_catalog(combinations)
        if monster_catalog is not None:
            encounter.monster_catalog = dict(monster_catalog)
        self._replace_selection(())

    def choices(self) -> EncounterChoices:
        """Permissible names for every slot given the current selection."""
        return self.state.encounter.choices()

    def is_valid(self) -> bool:
        return self.state.encounter.is_valid()

    def set_slot(self, index: int, name: str) -> EncounterSelection:
        """Replace one slot, keeping later slots as they are.

        Raises:
            IndexError: If the slot is out of range
        """
        return self._replace_selection(replace_slot(self.selection, index, name))

    def set_selection(self, names: Sequence[str]) -> EncounterSelection:
        """Replace the whole selection at once.

        Raises:
            ValueError: If more names are given than an encounter can hold
        """
        if len(names) > MAX_ENCOUNTER_SIZE:
            raise ValueError(f"An encounter holds at most {MAX_ENCOUNTER_SIZE} monsters, got {len(names)}")
        return self._replace_selection(tuple(names))

    def clear_selection(self) -> None:
        self._replace_selection(())

    def _replace_selection(self, new_selection: EncounterSelection) -> EncounterSelection:
        old_selection = self.state.encounter.selection
        self.state.encounter.selection = new_selection
        if new_selection != old_selection:
            self.event_manager.publish(
                EncounterSelectionChanged(
                    old_selection=old_selection,
                    new_selection=new_selection,
                    is_valid=self.is_valid(),
                ),
                source="EncounterManager",
            )
        return new_selection

    def lookup_monster(self, name: str) -> MonsterRecord:
        """Find a monster in the active catalog.

        Raises:
            DataConsistencyError: If the catalog has no such monster
        """
        record = self.state.encounter.monster_catalog.get(name)
        if record is None:
            raise DataConsistencyError(name, self.state.venue_name or "")
        return record

    def commit(self) -> Optional[list[Monster]]:
        """Replace the monster roster with the selected encounter.

        Monsters missing from the catalog are logged and skipped; the rest
        of the encounter is still added. The selection is cleared afterwards.

        Returns:
            The monsters added, or None if the selection is not sanctioned
        """
        selection = self.selection
        if not self.is_valid():
            self._emit_log(
                f"Encounter {list(selection)} is not a sanctioned combination",
                LogLevel.WARNING,
            )
            return None

        monsters: list[Monster] = []
        skipped: list[str] = []
        for name in selection:
            try:
                monsters.append(self.lookup_monster(name).to_monster())
            except DataConsistencyError as e:
                skipped.append(name)
                self._emit_log(f"ERROR: {e}", LogLevel.ERROR)

        self.roster_manager.replace_monsters(monsters)
        self._replace_selection(())

        self.event_manager.publish(
            EncounterCommitted(selection=selection, monsters=tuple(monsters), skipped=tuple(skipped)),
            source="EncounterManager",
        )
        self._emit_log(f"Committed encounter: {', '.join(selection)}")
        return monsters
