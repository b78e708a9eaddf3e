"""The runway scheduler and its statistics."""

from airportsim.tower.control_stats import ControlStats, format_probability, ticks_to_minutes
from airportsim.tower.control_tower import REPAIR_YARD_TICKS, ControlTower

__all__ = [
    "ControlStats",
    "ControlTower",
    "REPAIR_YARD_TICKS",
    "format_probability",
    "ticks_to_minutes",
]
