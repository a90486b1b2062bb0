"""Venue table and per-venue catalog loading.

Each venue owns two data files below the data directory:

    data_dir/
    ├── venues.yaml                  (venue names and file stems)
    ├── monsterdata/<file>.csv       (header: name,quickness)
    └── encounters/<file>.json       (list of lists of monster names)
"""

import csv
import json
import os
from typing import Iterator, Optional

import yaml

from ...core.data import (
    DataConverter,
    EncounterCombination,
    MonsterCatalog,
    MonsterRecord,
    Venue,
)
from ...core.errors import VenueNotFoundError


class VenueTable:
    """Immutable, ordered lookup of venues by display name."""

    def __init__(self, venues: list[Venue]):
        self._venues = tuple(venues)
        self._by_name = {venue.name: venue for venue in self._venues}

    @classmethod
    def from_yaml(cls, file_path: str) -> "VenueTable":
        """Load the venue table from a YAML file."""
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            raise FileNotFoundError(f"Venue table not found: {file_path}")
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse venue table {file_path}: {e}")

        try:
            venues = [Venue(name=entry["name"], file_key=entry["file"]) for entry in data["venues"]]
        except (KeyError, TypeError) as e:
            raise ValueError(f"Invalid venue table structure in {file_path}: {e}")

        return cls(venues)

    def get(self, name: str) -> Venue:
        """Look up a venue by display name.

        Raises:
            VenueNotFoundError: If the venue is not in the table
        """
        try:
            return self._by_name[name]
        except KeyError:
            raise VenueNotFoundError(name)

    def names(self) -> list[str]:
        return [venue.name for venue in self._venues]

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[Venue]:
        return iter(self._venues)

    def __len__(self) -> int:
        return len(self._venues)


class VenueLoader:
    """Reads monster and encounter catalogs for venues."""

    def __init__(self, data_dir: str, venue_table: Optional[VenueTable] = None, venues_file: str = "venues.yaml"):
        self.data_dir = os.path.abspath(data_dir)
        self.venue_table = venue_table or VenueTable.from_yaml(os.path.join(self.data_dir, venues_file))

    def _path(self, relative: str) -> str:
        return os.path.join(self.data_dir, relative)

    def load_monsters(self, venue: Venue) -> MonsterCatalog:
        """Load a venue's monster catalog keyed by monster name.

        When a name appears twice the first row wins.

        Raises:
            FileNotFoundError: If the venue has no monster file
            ValueError: If the header or a quickness value is unusable
        """
        file_path = self._path(venue.monster_file)
        if not os.path.exists(file_path):
            raise FileNotFoundError(f"Could not find {file_path}")

        catalog: MonsterCatalog = {}
        with open(file_path, "r", encoding="utf-8", newline="") as f:
            reader = csv.DictReader(f)
            if not reader.fieldnames or not {"name", "quickness"} <= {
                name.strip() for name in reader.fieldnames
            }:
                raise ValueError(f"Monster file {file_path} needs 'name' and 'quickness' columns")
            reader.fieldnames = [name.strip() for name in reader.fieldnames]

            for line_number, row in enumerate(reader, start=2):
                name = (row.get("name") or "").strip()
                if not name:
                    continue  # Skip empty rows
                try:
                    quickness = DataConverter.parse_int(row.get("quickness"))
                except ValueError as e:
                    raise ValueError(f"{file_path}:{line_number}: invalid quickness for {name}: {e}")
                catalog.setdefault(name, MonsterRecord(name=name, quickness=quickness))

        return catalog

    def load_encounters(self, venue: Venue) -> list[EncounterCombination]:
        """Load a venue's sanctioned encounter combinations.

        Raises:
            FileNotFoundError: If the venue has no encounter file
            ValueError: If the JSON is invalid or not a list of lists
        """
        file_path = self._path(venue.encounter_file)
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            raise FileNotFoundError(f"Could not find {file_path}")
        except json.JSONDecodeError as e:
            raise ValueError(f"Failed to parse encounter file {file_path}: {e}")

        if not isinstance(data, list):
            raise ValueError(f"Encounter file {file_path} must contain a list of encounters")

        return [DataConverter.to_combination(names) for names in data]

    def load(self, venue_name: str) -> tuple[Venue, list[EncounterCombination], MonsterCatalog]:
        """Resolve a venue by name and load both of its catalogs."""
        venue = self.venue_table.get(venue_name)
        combinations = self.load_encounters(venue)
        catalog = self.load_monsters(venue)
        return venue, combinations, catalog
