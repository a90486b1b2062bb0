"""
Basic test fixtures for the coliturn test suite.

Provides simple fixtures for testing the scheduler, the encounter selector
and the managers around them.
"""

import sys
import os
import pytest

# Add the project root to the Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from coliturn.core.config_loader import SimulatorConfig
from coliturn.core.data import Dragon, Monster
from coliturn.core.events.event_manager import EventManager
from coliturn.core.engine.simulator_state import SimulatorState
from coliturn.core.engine.initiative import InitiativeScheduler
from coliturn.game.simulator import Simulator
from coliturn.game.venues.venue_loader import VenueLoader


FIXTURE_DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "fixtures", "data")


@pytest.fixture
def event_manager():
    """Create an event manager for testing."""
    return EventManager(enable_debug_logging=False)


@pytest.fixture
def simulator_state():
    """Create a fresh simulator state for testing."""
    return SimulatorState()


@pytest.fixture
def scheduler():
    """Create a fresh initiative scheduler for testing."""
    return InitiativeScheduler()


@pytest.fixture
def fixture_data_dir():
    """Directory with a small venue table and catalogs."""
    return FIXTURE_DATA_DIR


@pytest.fixture
def venue_loader(fixture_data_dir):
    """Venue loader reading the fixture catalogs."""
    return VenueLoader(fixture_data_dir)


@pytest.fixture
def simulator(venue_loader):
    """An initialized simulator backed by the fixture catalogs."""
    config = SimulatorConfig(data_dir=FIXTURE_DATA_DIR)
    sim = Simulator(config, venue_loader).initialize()
    yield sim
    sim.shutdown()


@pytest.fixture
def sample_dragons():
    """Two dragons, one with a double ambush."""
    return [
        Dragon("Ember", 25, ambush_count=2),
        Dragon("Frost", 18),
    ]


@pytest.fixture
def sample_monsters():
    """Monsters listed slowest to fastest."""
    return [
        Monster("Slime", 10),
        Monster("Ogre", 15),
    ]
