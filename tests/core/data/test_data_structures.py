"""
Unit tests for core data structures.

Tests combatant dataclasses, catalog records, venues and the input
conversion helpers.
"""

import dataclasses
import math

import pytest

from coliturn.core.data import (
    CATEGORY_NAMES,
    CombatantCategory,
    DataConverter,
    Dragon,
    Monster,
    MonsterRecord,
    Venue,
)


class TestCombatants:
    """Test Dragon and Monster dataclasses."""

    def test_dragon_defaults(self):
        dragon = Dragon("Ember", 30)

        assert dragon.category == CombatantCategory.DRAGON
        assert dragon.ambush_count == 0
        assert dragon.is_dragon

    def test_monster_category(self):
        monster = Monster("Slime", 10)

        assert monster.category == CombatantCategory.MONSTER
        assert not monster.is_dragon
        assert monster.get_category_name() == "Monster"

    def test_category_not_settable(self):
        with pytest.raises(TypeError):
            Dragon("Ember", 30, category=CombatantCategory.MONSTER)  # type: ignore[call-arg]

    def test_frozen(self):
        dragon = Dragon("Ember", 30)
        with pytest.raises(dataclasses.FrozenInstanceError):
            dragon.quickness = 40  # type: ignore[misc]

    @pytest.mark.parametrize("ambush_count,expected", [(-1, 0), (0, 0), (1, 1), (2, 2), (7, 2)])
    def test_ambush_actions(self, ambush_count, expected):
        assert Dragon("Ember", 30, ambush_count=ambush_count).ambush_actions == expected

    def test_equal_values_are_distinct_objects(self):
        """Value equality does not make two roster entries the same entry."""
        first, second = Monster("Slime", 10), Monster("Slime", 10)
        assert first == second
        assert first is not second

    def test_category_names_cover_all(self):
        assert set(CATEGORY_NAMES) == set(CombatantCategory)


class TestCatalogTypes:
    """Test catalog records and venues."""

    def test_record_to_monster(self):
        monster = MonsterRecord("Bogsneak", 10).to_monster()
        assert monster == Monster("Bogsneak", 10)

    def test_venue_files(self):
        venue = Venue("Sandswept Delta", "delta")
        assert venue.monster_file == "monsterdata/delta.csv"
        assert venue.encounter_file == "encounters/delta.json"


class TestDataConverter:
    """Test loosely typed input conversion."""

    @pytest.mark.parametrize("value,expected", [
        (12, 12),
        ("12", 12),
        (" 12 ", 12),
        ("12abc", 12),
        ("7.9", 7),
        ("-3", -3),
        ("+4", 4),
        (7.9, 7),
        (-7.9, -7),
    ])
    def test_parse_int(self, value, expected):
        assert DataConverter.parse_int(value) == expected

    @pytest.mark.parametrize("value", ["", "abc", None, math.nan, math.inf, True, [], "x12"])
    def test_parse_int_rejects(self, value):
        with pytest.raises(ValueError):
            DataConverter.parse_int(value)

    def test_to_combination(self):
        assert DataConverter.to_combination(["A", "B"]) == ("A", "B")

    @pytest.mark.parametrize("value", ["AB", 5, {"a": 1}])
    def test_to_combination_rejects(self, value):
        with pytest.raises(ValueError):
            DataConverter.to_combination(value)

    def test_combatant_summary(self):
        assert DataConverter.combatant_summary(Dragon("Ember", 30, ambush_count=2)) == (
            "Ember (Dragon, quickness 30, ambush 2)"
        )
        assert DataConverter.combatant_summary(Monster("Slime", 10)) == "Slime (Monster, quickness 10)"
