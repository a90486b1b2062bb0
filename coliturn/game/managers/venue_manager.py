"""Venue management.

Loads a venue's encounter and monster catalogs into the simulator state.
Selecting a venue discards the in-progress encounter selection because its
names may not exist in the new catalogs.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...core.events.event_manager import EventManager
    from ...core.engine.simulator_state import SimulatorState
    from ..venues.venue_loader import VenueLoader

from ...core.data import Venue
from ...core.events import LogMessage, ManagerInitialized, VenueLoaded
from .log_manager import LogLevel


class VenueManager:
    """Switches the active venue."""

    def __init__(self, state: "SimulatorState", event_manager: "EventManager", loader: "VenueLoader"):
        self.state = state
        self.event_manager = event_manager
        self.loader = loader

        self.event_manager.publish(
            ManagerInitialized(manager_name="VenueManager"),
            source="VenueManager",
        )

    def _emit_log(self, message: str, level: LogLevel = LogLevel.INFO) -> None:
        self.event_manager.publish(
            LogMessage(message=message, category="VENUE", level=level, source="VenueManager"),
            source="VenueManager",
        )

    def list_venues(self) -> list[str]:
        return self.loader.venue_table.names()

    def load_venue(self, venue_name: str) -> Venue:
        """Load both catalogs for a venue and make it active.

        The state is only touched once both catalogs have loaded.

        Raises:
            VenueNotFoundError: If the venue is unknown
            FileNotFoundError: If a catalog file is missing
            ValueError: If a catalog file cannot be parsed
        """
        try:
            venue, combinations, catalog = self.loader.load(venue_name)
        except (OSError, ValueError, KeyError) as e:
            self._emit_log(f"Failed to load venue {venue_name}: {e}", LogLevel.ERROR)
            raise

        encounter = self.state.encounter
        encounter.venue = venue
        encounter.combinations = combinations
        encounter.monster_catalog = catalog
        encounter.reset_selection()

        self.event_manager.publish(
            VenueLoaded(
                venue_name=venue.name,
                combination_count=len(combinations),
                monster_count=len(catalog),
            ),
            source="VenueManager",
        )
        self._emit_log(
            f"Loaded {venue.name}: {len(combinations)} encounters, {len(catalog)} monsters"
        )
        return venue
