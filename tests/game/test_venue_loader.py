"""
Tests for the venue table and catalog loading.
"""

import json
import os

import pytest

from coliturn.core.data import MonsterRecord, Venue
from coliturn.core.engine import is_sorted_by_quickness
from coliturn.core.errors import SimulatorError, VenueNotFoundError
from coliturn.game.venues import VenueLoader, VenueTable


@pytest.fixture
def scratch_loader(tmp_path):
    """A loader over an empty data directory with a single venue."""
    (tmp_path / "monsterdata").mkdir()
    (tmp_path / "encounters").mkdir()
    table = VenueTable([Venue("Scratch", "scratch")])
    return VenueLoader(str(tmp_path), venue_table=table)


class TestVenueTable:
    """Test venue lookup."""

    def test_from_yaml(self, fixture_data_dir):
        table = VenueTable.from_yaml(f"{fixture_data_dir}/venues.yaml")

        assert len(table) == 3
        assert table.names() == ["Training Fields", "Mire", "Kelp Beds"]
        assert "Mire" in table
        assert table.get("Mire").file_key == "mire"

    def test_unknown_venue(self, venue_loader):
        with pytest.raises(VenueNotFoundError) as exc_info:
            venue_loader.venue_table.get("Atlantis")

        assert str(exc_info.value) == "Unknown venue: Atlantis"
        assert isinstance(exc_info.value, KeyError)
        assert isinstance(exc_info.value, SimulatorError)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            VenueTable.from_yaml(str(tmp_path / "venues.yaml"))

    def test_bad_structure(self, tmp_path):
        path = tmp_path / "venues.yaml"
        path.write_text("venues:\n  - title: Nowhere\n")

        with pytest.raises(ValueError):
            VenueTable.from_yaml(str(path))

    def test_shipped_table(self):
        """The bundled venue table lists every venue with a unique file stem."""
        root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
        table = VenueTable.from_yaml(os.path.join(root, "assets", "data", "venues.yaml"))

        assert len(table) == 21
        assert table.names()[0] == "Training Fields"
        assert len({venue.file_key for venue in table}) == len(table)


class TestVenueLoader:
    """Test reading monster and encounter catalogs."""

    def test_load_monsters(self, venue_loader):
        catalog = venue_loader.load_monsters(Venue("Training Fields", "trainingfields"))

        assert catalog["Bogsneak"] == MonsterRecord("Bogsneak", 10)
        assert list(catalog) == ["Bogsneak", "Mudfin", "Spriggan", "Thornback"]

    def test_load_encounters(self, venue_loader):
        combinations = venue_loader.load_encounters(Venue("Mire", "mire"))

        assert combinations == [("Mirewing", "Bogling"), ("Mirewing", "Marshstalker")]

    def test_load_by_name(self, venue_loader):
        venue, combinations, catalog = venue_loader.load("Training Fields")

        assert venue.name == "Training Fields"
        assert len(combinations) == 6
        assert len(catalog) == 4

    def test_missing_catalogs(self, venue_loader):
        with pytest.raises(FileNotFoundError):
            venue_loader.load("Kelp Beds")
        with pytest.raises(FileNotFoundError):
            venue_loader.load_monsters(Venue("Kelp Beds", "kelpbeds"))

    @pytest.mark.parametrize("venue_name", ["Training Fields", "Mire"])
    def test_fixture_catalogs_sorted(self, venue_loader, venue_name):
        """Catalog rows are listed slowest to fastest."""
        _, _, catalog = venue_loader.load(venue_name)
        monsters = [record.to_monster() for record in catalog.values()]

        assert is_sorted_by_quickness(monsters)

    def test_duplicate_first_row_wins(self, scratch_loader, tmp_path):
        (tmp_path / "monsterdata" / "scratch.csv").write_text("name,quickness\nImp,5\nImp,9\n")

        catalog = scratch_loader.load_monsters(Venue("Scratch", "scratch"))

        assert catalog == {"Imp": MonsterRecord("Imp", 5)}

    def test_header_whitespace(self, scratch_loader, tmp_path):
        (tmp_path / "monsterdata" / "scratch.csv").write_text(" name , quickness \nImp,5\n")

        assert scratch_loader.load_monsters(Venue("Scratch", "scratch"))["Imp"].quickness == 5

    def test_bad_quickness(self, scratch_loader, tmp_path):
        (tmp_path / "monsterdata" / "scratch.csv").write_text("name,quickness\nImp,quick\n")

        with pytest.raises(ValueError, match=":2: invalid quickness for Imp"):
            scratch_loader.load_monsters(Venue("Scratch", "scratch"))

    def test_missing_columns(self, scratch_loader, tmp_path):
        (tmp_path / "monsterdata" / "scratch.csv").write_text("name,speed\nImp,5\n")

        with pytest.raises(ValueError):
            scratch_loader.load_monsters(Venue("Scratch", "scratch"))

    def test_encounters_not_a_list(self, scratch_loader, tmp_path):
        (tmp_path / "encounters" / "scratch.json").write_text(json.dumps({"Imp": 1}))

        with pytest.raises(ValueError):
            scratch_loader.load_encounters(Venue("Scratch", "scratch"))

    def test_encounters_invalid_json(self, scratch_loader, tmp_path):
        (tmp_path / "encounters" / "scratch.json").write_text("[[\"Imp\"")

        with pytest.raises(ValueError):
            scratch_loader.load_encounters(Venue("Scratch", "scratch"))
