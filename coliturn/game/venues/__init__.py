"""Venue data loading.

- venue_loader.py: Venue table (YAML) and monster/encounter catalogs (CSV/JSON)
"""

from .venue_loader import VenueLoader, VenueTable

__all__ = ["VenueLoader", "VenueTable"]
