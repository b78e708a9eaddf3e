"""Core services shared by the simulation engine."""

from airportsim.core.random_source import RandomSource, SeedNotSetError

__all__ = [
    "RandomSource",
    "SeedNotSetError",
]
