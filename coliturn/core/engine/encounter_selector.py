"""Constrained encounter selection.

A venue sanctions a fixed catalog of monster combinations. While an encounter
is being picked slot by slot, each slot may only offer names that keep the
selection a prefix of at least one cataloged combination.

Choices are pure functions of (combinations, selection) and are recomputed
on demand. Selections are tuples, so replacing a slot always produces a new
selection and derived choices never see a half-updated one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from ..data import MAX_ENCOUNTER_SIZE, EncounterCombination, EncounterSelection


@dataclass(frozen=True)
class EncounterChoices:
    """Permissible monster names for each encounter slot."""

    slot0: tuple[str, ...] = ()
    slot1: tuple[str, ...] = ()
    slot2: tuple[str, ...] = ()
    slot3: tuple[str, ...] = ()

    def __getitem__(self, slot: int) -> tuple[str, ...]:
        return self.as_list()[slot]

    def as_list(self) -> list[tuple[str, ...]]:
        return [self.slot0, self.slot1, self.slot2, self.slot3]


def _matches_prefix(
    combination: Sequence[str], selection: Sequence[str], slot: int
) -> bool:
    if len(combination) <= slot:
        return False
    if len(selection) < slot:
        return False
    return tuple(combination[:slot]) == tuple(selection[:slot])


def choices_at_slot(
    combinations: Iterable[Sequence[str]],
    selection: Sequence[str],
    slot: int,
) -> tuple[str, ...]:
    """Distinct names allowed at ``slot`` given the current selection.

    Args:
        combinations: The venue's sanctioned combinations
        selection: The selection as currently populated
        slot: Zero-based slot index

    Returns:
        Sorted distinct names; empty when nothing matches
    """
    names = {
        combination[slot]
        for combination in combinations
        if _matches_prefix(combination, selection, slot) and combination[slot]
    }
    return tuple(sorted(names))


def compute_choices(
    combinations: Sequence[Sequence[str]], selection: Sequence[str]
) -> EncounterChoices:
    """Permissible names for all four slots."""
    return EncounterChoices(
        *(choices_at_slot(combinations, selection, slot) for slot in range(MAX_ENCOUNTER_SIZE))
    )


def is_valid_selection(
    combinations: Iterable[Sequence[str]], selection: Sequence[str]
) -> bool:
    """True if the selection equals a sanctioned combination exactly."""
    target = tuple(selection)
    return any(tuple(combination) == target for combination in combinations)


def replace_slot(
    selection: EncounterSelection, index: int, name: str
) -> EncounterSelection:
    """Return a new selection with one slot set.

    Later slots are kept as they are; choices for them are recomputed from
    the new prefix by the caller. ``index`` may equal the current length to
    append.

    Raises:
        IndexError: If the slot is outside the encounter or leaves a gap
    """
    if index < 0 or index >= MAX_ENCOUNTER_SIZE or index > len(selection):
        raise IndexError(f"Encounter slot {index} out of range for selection {selection!r}")
    updated = list(selection)
    if index == len(updated):
        updated.append(name)
    else:
        updated[index] = name
    return tuple(updated)


def normalize_catalog(combinations: Iterable[Sequence[str]]) -> list[EncounterCombination]:
    """Freeze a decoded catalog into tuples."""
    return [tuple(combination) for combination in combinations]
