"""Containers the control tower moves aircraft between."""

from airportsim.entities.aircraft_queue import AircraftQueue, AircraftQueueStats
from airportsim.entities.holding_buffer import HoldingBufferStats, TimedHoldingBuffer

__all__ = [
    "AircraftQueue",
    "AircraftQueueStats",
    "HoldingBufferStats",
    "TimedHoldingBuffer",
]
