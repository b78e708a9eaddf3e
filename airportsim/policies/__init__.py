"""Queue orderings and runway policies.

Example:
    from airportsim.policies import FuelPriorityRunwayPolicy

    tower = ControlTower(0.007, FuelPriorityRunwayPolicy(), rng)
"""

from airportsim.policies.ordering import FuelOrder, Ordering, WaitingTimeOrder
from airportsim.policies.runway import (
    FIFORunwayPolicy,
    FuelPriorityRunwayPolicy,
    RunwayDecision,
    RunwayPolicy,
    first_come_decision,
)

__all__ = [
    "FIFORunwayPolicy",
    "FuelOrder",
    "FuelPriorityRunwayPolicy",
    "Ordering",
    "RunwayDecision",
    "RunwayPolicy",
    "WaitingTimeOrder",
    "first_come_decision",
]
