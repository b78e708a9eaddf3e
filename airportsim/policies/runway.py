"""Runway policies: who gets the runway when it frees up.

A policy only looks at the heads of the two queues and returns a
``RunwayDecision``; the control tower carries the decision out. Policies hold
no state, so one instance can serve any number of towers.
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol, runtime_checkable

from airportsim.aircraft import MAX_FUEL, Aircraft
from airportsim.policies.ordering import FuelOrder, Ordering, WaitingTimeOrder


class RunwayDecision(Enum):
    LAND = "land"
    DEPART = "depart"
    IDLE = "idle"


@runtime_checkable
class RunwayPolicy(Protocol):
    """Chooses the next runway occupant and the arrivals ordering it relies on."""

    name: str
    label: str

    def arrivals_ordering(self) -> Ordering: ...

    def choose(self, arrival: Aircraft | None, departure: Aircraft | None) -> RunwayDecision: ...


def first_come_decision(arrival: Aircraft | None, departure: Aircraft | None) -> RunwayDecision:
    """Landings always go first; departures use the runway only when no one is airborne."""
    if arrival is not None:
        return RunwayDecision.LAND
    if departure is not None:
        return RunwayDecision.DEPART
    return RunwayDecision.IDLE


class FIFORunwayPolicy:
    """Arrivals ordered by waiting time and always served before departures."""

    name = "fifo"
    label = "Waiting time (FIFO)"

    def arrivals_ordering(self) -> Ordering:
        return WaitingTimeOrder()

    def choose(self, arrival: Aircraft | None, departure: Aircraft | None) -> RunwayDecision:
        return first_come_decision(arrival, departure)


class FuelPriorityRunwayPolicy:
    """Arrivals ordered by remaining fuel; long-waiting departures may go first.

    A departure jumps ahead of the arrival at the head of the queue only if it
    has waited longer and its take-off finishes before that arrival runs out of
    fuel. Otherwise the first-come rule applies.
    """

    name = "priority"
    label = "Fuel priority"

    def arrivals_ordering(self) -> Ordering:
        return FuelOrder()

    def choose(self, arrival: Aircraft | None, departure: Aircraft | None) -> RunwayDecision:
        if departure is not None:
            arrival_wait = arrival.waiting_time if arrival is not None else 0
            arrival_fuel = arrival.fuel if arrival is not None else MAX_FUEL
            if departure.waiting_time > arrival_wait and departure.time_to_takeoff < arrival_fuel:
                return RunwayDecision.DEPART
        return first_come_decision(arrival, departure)
