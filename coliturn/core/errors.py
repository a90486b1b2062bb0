"""Exceptions raised by the simulator core."""


class SimulatorError(Exception):
    """Base exception for simulator errors."""
    pass


class ConfigurationError(SimulatorError):
    """Raised when a simulation run is configured with unusable parameters."""

    def __init__(self, message: str, parameter: str = ""):
        super().__init__(message)
        self.parameter = parameter


class DataConsistencyError(SimulatorError):
    """Raised when selected data has no counterpart in the loaded catalogs."""

    def __init__(self, monster_name: str, venue_name: str = ""):
        where = f" in venue {venue_name}" if venue_name else " in loaded venue"
        super().__init__(f"Could not find data for {monster_name}{where}")
        self.monster_name = monster_name
        self.venue_name = venue_name


class VenueNotFoundError(SimulatorError, KeyError):
    """Raised when a venue name is not in the venue table."""

    def __init__(self, venue_name: str):
        super().__init__(f"Unknown venue: {venue_name}")
        self.venue_name = venue_name

    def __str__(self) -> str:
        return self.args[0]
