"""The control tower: one runway, two queues and a repair yard.

Each call to ``tick()`` advances the airport by one 30-second step, always in
this order:

1. crash sweep       arrivals out of fuel are removed and counted
2. arrivals          maybe spawn one arrival, then age every arrival
3. departures        maybe spawn one departure, then age every departure
4. repair yard       breakdowns move departures into the yard; repaired
                     aircraft rejoin departures with their wait reset
5. runway            count down; once free, the runway policy picks the
                     next occupant

Every aircraft is in at most one of arrivals, departures, the repair yard or
on the runway. Crashes and breakdowns are simulated outcomes, recorded in
``stats``; nothing inside a tick raises for them.
"""

from __future__ import annotations

import itertools
import logging
import math

from airportsim.aircraft import (
    BREAKDOWN_PROBABILITY,
    GLIDER_SPAWN_PROBABILITY,
    LIGHT_SPAWN_PROBABILITY,
    Aircraft,
    AircraftKind,
)
from airportsim.core.random_source import RandomSource
from airportsim.entities import AircraftQueue, HoldingBufferStats, TimedHoldingBuffer
from airportsim.policies import RunwayDecision, RunwayPolicy, WaitingTimeOrder
from airportsim.tower.control_stats import ControlStats

logger = logging.getLogger(__name__)

# Broken-down aircraft stay in the repair yard for one hour.
REPAIR_YARD_TICKS = 120


class ControlTower:
    """Runway scheduler for a single-runway airport.

    Args:
        commercial_probability: Per-tick chance (P) of a commercial spawn, in
            each of arrivals and departures.
        runway_policy: Decides who uses the runway and how arrivals are ordered.
        rng: Random source owned by this tower for the whole run.
        repair_ticks: Ticks a broken-down aircraft spends in the repair yard.

    Raises:
        ValueError: If the probability is not within [0, 1] or repair_ticks < 0.
    """

    def __init__(
        self,
        commercial_probability: float,
        runway_policy: RunwayPolicy,
        rng: RandomSource,
        repair_ticks: int = REPAIR_YARD_TICKS,
    ):
        if not math.isfinite(commercial_probability) or not 0.0 <= commercial_probability <= 1.0:
            raise ValueError(
                f"commercial_probability must be within [0, 1], got {commercial_probability}"
            )
        self._commercial_probability = commercial_probability
        self._policy = runway_policy
        self._rng = rng

        self._arrivals = AircraftQueue(runway_policy.arrivals_ordering(), name="arrivals")
        self._departures = AircraftQueue(WaitingTimeOrder(), name="departures")
        self._repair_yard: TimedHoldingBuffer[Aircraft] = TimedHoldingBuffer(repair_ticks)

        self._runway: Aircraft | None = None
        self._runway_decision: RunwayDecision = RunwayDecision.IDLE
        self._runway_busy_ticks = 0
        self._ticks_elapsed = 0
        # Aircraft ids are numbered per tower so traces of a seeded run repeat.
        self._ids = itertools.count(1)

        self._stats = ControlStats(commercial_probability, runway_policy.label)
        logger.info("%s queue enabled (P=%s)", runway_policy.label, commercial_probability)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def commercial_probability(self) -> float:
        return self._commercial_probability

    @property
    def runway_policy(self) -> RunwayPolicy:
        return self._policy

    @property
    def simulation_type(self) -> str:
        return self._policy.label

    @property
    def stats(self) -> ControlStats:
        return self._stats

    @property
    def arrivals(self) -> list[Aircraft]:
        """Arrivals in service order."""
        return self._arrivals.ordered()

    @property
    def departures(self) -> list[Aircraft]:
        """Departures in service order."""
        return self._departures.ordered()

    @property
    def arrivals_queue(self) -> AircraftQueue:
        return self._arrivals

    @property
    def departures_queue(self) -> AircraftQueue:
        return self._departures

    @property
    def repair_yard_finished(self) -> list[Aircraft]:
        return self._repair_yard.peek_finished()

    @property
    def repair_yard_waiting(self) -> list[Aircraft]:
        return self._repair_yard.peek_waiting()

    @property
    def repair_yard_all(self) -> list[Aircraft]:
        return self._repair_yard.peek_all()

    @property
    def repair_yard_stats(self) -> HoldingBufferStats:
        return self._repair_yard.stats

    @property
    def runway_aircraft(self) -> Aircraft | None:
        return self._runway

    @property
    def runway_busy_ticks(self) -> int:
        return self._runway_busy_ticks

    @property
    def ticks_elapsed(self) -> int:
        return self._ticks_elapsed

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def tick(self) -> None:
        """Advance the airport by one tick."""
        self.check_crashes()
        self.arrivals_tick()
        self.departures_tick()
        self.repair_yard_tick()
        self.runway_tick()
        self._ticks_elapsed += 1

    def check_crashes(self) -> None:
        crashed = self._arrivals.remove_where(lambda aircraft: aircraft.fuel <= 0)
        for aircraft in crashed:
            self._stats.record_crash()
            self._trace("CRASH: %s", aircraft)

    def _draw_spawn_band(self) -> AircraftKind | None:
        """Which cumulative band [0, pG), [pG, pG+pL), [pG+pL, pG+pL+P) a draw hits."""
        draw = self._rng.uniform_double()
        glider_band = GLIDER_SPAWN_PROBABILITY
        light_band = glider_band + LIGHT_SPAWN_PROBABILITY
        commercial_band = light_band + self._commercial_probability

        if draw < glider_band:
            return AircraftKind.GLIDER
        if draw < light_band:
            return AircraftKind.LIGHT
        if draw < commercial_band:
            return AircraftKind.COMMERCIAL
        return None

    def generate_arrival(self) -> Aircraft | None:
        band = self._draw_spawn_band()
        if band is AircraftKind.GLIDER:
            aircraft = Aircraft.glider(ids=self._ids)
        elif band is AircraftKind.LIGHT:
            aircraft = Aircraft.light(self._rng, ids=self._ids)
        elif band is AircraftKind.COMMERCIAL:
            aircraft = Aircraft.commercial(self._rng, ids=self._ids)
        else:
            return None
        self._arrivals.push(aircraft)
        self._trace("New arrival: %s", aircraft)
        return aircraft

    def generate_departure(self) -> Aircraft | None:
        band = self._draw_spawn_band()
        if band is AircraftKind.GLIDER:
            # Gliders only leave the ground behind a tug.
            aircraft = Aircraft.light(self._rng, towing=True, ids=self._ids)
        elif band is AircraftKind.LIGHT:
            aircraft = Aircraft.light(self._rng, ids=self._ids)
        elif band is AircraftKind.COMMERCIAL:
            aircraft = Aircraft.commercial(self._rng, ids=self._ids)
        else:
            return None
        self._departures.push(aircraft)
        self._trace("New departure: %s", aircraft)
        return aircraft

    def arrivals_tick(self) -> None:
        self.generate_arrival()
        for aircraft in self._arrivals.ordered():
            aircraft.increment_waiting_time()
            aircraft.decrement_fuel()

    def departures_tick(self) -> None:
        self.generate_departure()
        for aircraft in self._departures.ordered():
            aircraft.increment_waiting_time()

    def repair_yard_tick(self) -> None:
        for aircraft in self._departures.ordered():
            if self._rng.uniform_double() < BREAKDOWN_PROBABILITY:
                self._departures.remove(aircraft)
                self._repair_yard.add(aircraft)
                self._trace("Breakdown, sent to repair yard: %s", aircraft)

        self._repair_yard.tick()

        for aircraft in self._repair_yard.take_finished():
            aircraft.reset_waiting_time()
            self._departures.push(aircraft)
            self._trace("Repaired, back of departures: %s", aircraft)

    def runway_tick(self) -> None:
        self._runway_busy_ticks = max(self._runway_busy_ticks - 1, 0)
        if self._runway_busy_ticks > 0:
            self._trace("Runway busy for %d", self._runway_busy_ticks)
            return

        if self._runway is not None:
            self._clear_runway()

        arrival = self._arrivals.peek()
        departure = self._departures.peek()
        decision = self._policy.choose(arrival, departure)

        if decision is RunwayDecision.LAND and arrival is not None:
            shortcut = self._arrivals.is_rushed(arrival)
            self._arrivals.remove(arrival)
            self._occupy_runway(arrival, decision, arrival.time_to_land)
            self._stats.record_landing()
            self._trace("ARRIVAL%s: %s", " (tow shortcut)" if shortcut else "", arrival)
        elif decision is RunwayDecision.DEPART and departure is not None:
            shortcut = self._departures.is_rushed(departure)
            self._departures.remove(departure)
            self._occupy_runway(departure, decision, departure.time_to_takeoff)
            self._stats.record_departure()
            self._trace("DEPARTURE%s: %s", " (tow shortcut)" if shortcut else "", departure)
        else:
            self._runway = None
            self._runway_decision = RunwayDecision.IDLE

    def _occupy_runway(self, aircraft: Aircraft, decision: RunwayDecision, busy_ticks: int) -> None:
        self._runway = aircraft
        self._runway_decision = decision
        self._runway_busy_ticks = busy_ticks

    def _clear_runway(self) -> None:
        aircraft = self._runway
        self._stats.add_waiting_time(aircraft.waiting_time)
        if self._runway_decision is RunwayDecision.DEPART and aircraft.is_towing:
            # A tow pair that took off has to come back down, under either
            # runway policy.
            self._arrivals.push(aircraft)
            self._trace("Tow pair airborne, joins arrivals: %s", aircraft)
        self._runway = None
        self._runway_decision = RunwayDecision.IDLE

    # ------------------------------------------------------------------
    # Direct manipulation, mainly for tests and what-if scenarios
    # ------------------------------------------------------------------

    def add_arrival(self, aircraft: Aircraft) -> None:
        self._arrivals.push(aircraft)

    def add_departure(self, aircraft: Aircraft) -> None:
        self._departures.push(aircraft)

    def increase_waiting_time(self) -> None:
        """Age every queued aircraft by one tick without spawning anything."""
        for aircraft in self._arrivals.ordered():
            aircraft.increment_waiting_time()
        for aircraft in self._departures.ordered():
            aircraft.increment_waiting_time()

    def decrease_fuel(self) -> None:
        """Burn one tick of fuel for every arrival."""
        for aircraft in self._arrivals.ordered():
            aircraft.decrement_fuel()

    def _trace(self, message: str, *args) -> None:
        logger.debug(message, *args, extra={"tick": self._ticks_elapsed + 1})
