"""Aircraft variants and their timing/fuel constants."""

from airportsim.aircraft.aircraft import (
    BREAKDOWN_PROBABILITY,
    GLIDER_SPAWN_PROBABILITY,
    LIGHT_SPAWN_PROBABILITY,
    MAX_FUEL,
    TIMINGS,
    Aircraft,
    AircraftKind,
    AircraftTiming,
)

__all__ = [
    "Aircraft",
    "AircraftKind",
    "AircraftTiming",
    "BREAKDOWN_PROBABILITY",
    "GLIDER_SPAWN_PROBABILITY",
    "LIGHT_SPAWN_PROBABILITY",
    "MAX_FUEL",
    "TIMINGS",
]
