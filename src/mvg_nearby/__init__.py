"""Nearby MVG departures: stations around you, their lines and live departures."""

__version__ = "0.1.0"
