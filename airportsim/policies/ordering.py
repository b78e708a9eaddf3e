"""Orderings for the arrivals and departures queues.

An ordering supplies a pure sort key (smaller is served first) and a
``prepare`` pass that the queue runs whenever an aircraft joins.
Any state change an ordering needs lives in ``prepare``, never in ``key``, so
sorting the same queue any number of times gives the same answer.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from airportsim.aircraft import Aircraft, AircraftKind

logger = logging.getLogger(__name__)


@runtime_checkable
class Ordering(Protocol):
    """Total order over aircraft used as a queue's priority."""

    name: str

    def key(self, aircraft: Aircraft) -> int:
        """Sort key; lower keys are served first."""
        ...

    def prepare(self, residents: list[Aircraft]) -> list[Aircraft]:
        """Adjust residents before ordering; return the ones to serve ahead of the rest."""
        ...


class WaitingTimeOrder:
    """Lowest ``waiting_time`` first.

    Tow pairs get a shortcut: once a Light aircraft still towing a Glider
    shares the queue with another aircraft, the Glider is released and the
    Light aircraft is rushed ahead of everyone else. Releasing the Glider is
    what makes the pass run at most once per aircraft.
    """

    name = "waiting_time"

    def key(self, aircraft: Aircraft) -> int:
        return aircraft.waiting_time

    def prepare(self, residents: list[Aircraft]) -> list[Aircraft]:
        if len(residents) < 2:
            return []
        rushed = []
        for aircraft in residents:
            if aircraft.kind is AircraftKind.LIGHT and aircraft.is_towing:
                aircraft.detach_glider()
                rushed.append(aircraft)
                logger.debug("Tow pair detached and rushed ahead: %s", aircraft)
        return rushed


class FuelOrder:
    """Lowest remaining fuel first; equal fuel keeps arrival order."""

    name = "fuel"

    def key(self, aircraft: Aircraft) -> int:
        return aircraft.fuel

    def prepare(self, residents: list[Aircraft]) -> list[Aircraft]:
        return []
