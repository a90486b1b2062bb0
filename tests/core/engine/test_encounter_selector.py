"""
Unit tests for constrained encounter selection.
"""

import pytest

from coliturn.core.engine.encounter_selector import (
    EncounterChoices,
    choices_at_slot,
    compute_choices,
    is_valid_selection,
    normalize_catalog,
    replace_slot,
)


COMBINATIONS = [("A", "B"), ("A", "C"), ("D",)]

CATALOG = [
    ("Mudfin", "Spriggan", "Thornback"),
    ("Bogsneak",),
    ("Bogsneak", "Mudfin"),
    ("Bogsneak", "Spriggan"),
    ("Bogsneak", "Mudfin", "Spriggan", "Thornback"),
    ("Spriggan",),
]


class TestChoicesAtSlot:
    """Test per-slot filtering."""

    def test_first_slot_unconstrained(self):
        assert choices_at_slot(COMBINATIONS, (), 0) == ("A", "D")

    def test_prefix_filter(self):
        assert choices_at_slot(COMBINATIONS, ("A",), 1) == ("B", "C")

    def test_results_sorted_and_distinct(self):
        assert choices_at_slot(CATALOG, (), 0) == ("Bogsneak", "Mudfin", "Spriggan")
        assert choices_at_slot(CATALOG, ("Bogsneak",), 1) == ("Mudfin", "Spriggan")

    def test_short_combinations_excluded(self):
        """Only combinations longer than the slot contribute."""
        assert choices_at_slot(COMBINATIONS, ("D",), 1) == ()

    def test_deep_prefix(self):
        selection = ("Bogsneak", "Mudfin", "Spriggan")
        assert choices_at_slot(CATALOG, selection, 3) == ("Thornback",)

    def test_selection_shorter_than_slot(self):
        """Later slots stay empty until earlier ones are chosen."""
        assert choices_at_slot(CATALOG, ("Bogsneak",), 2) == ()
        assert choices_at_slot(CATALOG, (), 3) == ()

    def test_empty_names_dropped(self):
        assert choices_at_slot([("", "X"), ("Y",)], (), 0) == ("Y",)

    def test_empty_combination_ignored(self):
        assert choices_at_slot([(), ("Y",)], (), 0) == ("Y",)

    def test_no_combinations(self):
        assert choices_at_slot([], ("A",), 1) == ()


class TestComputeChoices:
    """Test the four-slot view."""

    def test_all_slots(self):
        choices = compute_choices(CATALOG, ("Bogsneak", "Mudfin"))

        assert choices.slot0 == ("Bogsneak", "Mudfin", "Spriggan")
        assert choices.slot1 == ("Mudfin", "Spriggan")
        assert choices.slot2 == ("Spriggan",)
        assert choices.slot3 == ()

    def test_indexing(self):
        choices = compute_choices(COMBINATIONS, ("A",))
        assert choices[1] == ("B", "C")
        assert choices.as_list()[0] == ("A", "D")

    def test_default_is_empty(self):
        assert EncounterChoices().as_list() == [(), (), (), ()]

    def test_stale_later_slot_recomputed(self):
        """Changing an earlier slot recomputes later slots from the new prefix."""
        selection = ("A", "B")
        assert compute_choices(COMBINATIONS, selection).slot1 == ("B", "C")

        selection = replace_slot(selection, 0, "D")

        assert selection == ("D", "B")
        assert compute_choices(COMBINATIONS, selection).slot1 == ()
        assert not is_valid_selection(COMBINATIONS, selection)

    def test_catalog_untouched(self):
        catalog = [list(combination) for combination in COMBINATIONS]
        compute_choices(catalog, ("A",))
        assert catalog == [["A", "B"], ["A", "C"], ["D"]]


class TestIsValidSelection:
    """Test exact matching of complete selections."""

    def test_prefix_is_not_valid(self):
        assert not is_valid_selection(COMBINATIONS, ("A",))

    def test_exact_match(self):
        assert is_valid_selection(COMBINATIONS, ("A", "B"))
        assert is_valid_selection(COMBINATIONS, ("D",))

    def test_order_matters(self):
        assert not is_valid_selection(COMBINATIONS, ("B", "A"))

    def test_list_input(self):
        assert is_valid_selection([["A", "B"]], ["A", "B"])

    def test_empty(self):
        assert not is_valid_selection(COMBINATIONS, ())
        assert not is_valid_selection([], ("A",))


class TestReplaceSlot:
    """Test atomic selection replacement."""

    def test_append(self):
        assert replace_slot((), 0, "A") == ("A",)
        assert replace_slot(("A",), 1, "B") == ("A", "B")

    def test_replace_keeps_later_slots(self):
        assert replace_slot(("A", "B", "C"), 1, "X") == ("A", "X", "C")

    def test_original_untouched(self):
        original = ("A", "B")
        replace_slot(original, 0, "Z")
        assert original == ("A", "B")

    @pytest.mark.parametrize("index", [-1, 2, 4])
    def test_out_of_range(self, index):
        with pytest.raises(IndexError):
            replace_slot(("A",), index, "X")

    def test_full_encounter(self):
        with pytest.raises(IndexError):
            replace_slot(("A", "B", "C", "D"), 4, "E")


def test_normalize_catalog():
    assert normalize_catalog([["A", "B"], ["C"]]) == [("A", "B"), ("C",)]
