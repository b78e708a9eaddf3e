"""Aircraft record and the per-kind behaviour table.

There is a single ``Aircraft`` type tagged with an ``AircraftKind``. What
differs between kinds (how fuel is reported and burned, and which take-off
duration applies) is looked up in ``_BEHAVIOURS`` rather than overridden in
subclasses:

    kind        take-off  land  fuel (ticks)
    COMMERCIAL  4         6     uniform [40, 80]
    LIGHT       4 (6*)    6     uniform [20, 40]
    GLIDER      6         8     never runs out

    * a Light aircraft towing a Glider takes off with the Glider's timing.
"""

from __future__ import annotations

import sys
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from airportsim.core.random_source import RandomSource

# Reported fuel of an aircraft that cannot run out.
MAX_FUEL = sys.maxsize

GLIDER_SPAWN_PROBABILITY = 0.002
LIGHT_SPAWN_PROBABILITY = 0.005

# Per-tick chance that an aircraft waiting to depart breaks down.
BREAKDOWN_PROBABILITY = 0.0001


class AircraftKind(Enum):
    COMMERCIAL = "commercial"
    LIGHT = "light"
    GLIDER = "glider"


@dataclass(frozen=True)
class AircraftTiming:
    time_to_takeoff: int
    time_to_land: int
    fuel_range: tuple[int, int] | None


TIMINGS: dict[AircraftKind, AircraftTiming] = {
    AircraftKind.COMMERCIAL: AircraftTiming(4, 6, (40, 80)),
    AircraftKind.LIGHT: AircraftTiming(4, 6, (20, 40)),
    AircraftKind.GLIDER: AircraftTiming(6, 8, None),
}


@dataclass(eq=False)
class Aircraft:
    """An aircraft contending for the runway.

    Equality is identity: two aircraft with the same kind, fuel and waiting
    time are still different aircraft.

    Attributes:
        kind: Which variant this is.
        waiting_time: Ticks spent queued for the runway.
        towed: The Glider owned by a towing Light aircraft, else None.
        aircraft_id: Label used in traces, drawn from the ``ids`` iterator
            passed to the factories (the owning tower numbers its own
            aircraft). 0 means unnumbered.
    """

    kind: AircraftKind
    fuel_remaining: int = 0
    waiting_time: int = 0
    towed: Aircraft | None = None
    aircraft_id: int = 0

    @classmethod
    def commercial(cls, rng: RandomSource, ids: Iterator[int] | None = None) -> Aircraft:
        return cls(
            AircraftKind.COMMERCIAL,
            fuel_remaining=_draw_fuel(AircraftKind.COMMERCIAL, rng),
            aircraft_id=_next_id(ids),
        )

    @classmethod
    def light(cls, rng: RandomSource, towing: bool = False, ids: Iterator[int] | None = None) -> Aircraft:
        aircraft = cls(
            AircraftKind.LIGHT,
            fuel_remaining=_draw_fuel(AircraftKind.LIGHT, rng),
            aircraft_id=_next_id(ids),
        )
        if towing:
            aircraft.towed = cls.glider(ids)
        return aircraft

    @classmethod
    def glider(cls, ids: Iterator[int] | None = None) -> Aircraft:
        return cls(AircraftKind.GLIDER, aircraft_id=_next_id(ids))

    @property
    def timing(self) -> AircraftTiming:
        return TIMINGS[self.kind]

    @property
    def fuel(self) -> int:
        """Ticks of flight left."""
        return _BEHAVIOURS[self.kind].report_fuel(self)

    @property
    def time_to_takeoff(self) -> int:
        return _BEHAVIOURS[self.kind].takeoff_time(self)

    @property
    def time_to_land(self) -> int:
        return self.timing.time_to_land

    @property
    def is_towing(self) -> bool:
        return self.towed is not None

    def decrement_fuel(self) -> None:
        _BEHAVIOURS[self.kind].burn_fuel(self)

    def increment_waiting_time(self) -> None:
        self.waiting_time += 1

    def reset_waiting_time(self) -> None:
        self.waiting_time = 0

    def detach_glider(self) -> None:
        """Release the towed Glider; it is not reused."""
        self.towed = None

    def __str__(self) -> str:
        fuel = "inf" if self.fuel == MAX_FUEL else str(self.fuel)
        text = f"{self.kind.value.capitalize()} #{self.aircraft_id}. Fuel: {fuel}, Waiting time: {self.waiting_time}"
        if self.towed is not None:
            text += f", Attached: {self.towed}"
        return text


def _next_id(ids: Iterator[int] | None) -> int:
    return next(ids) if ids is not None else 0


def _draw_fuel(kind: AircraftKind, rng: RandomSource) -> int:
    low, high = TIMINGS[kind].fuel_range
    return rng.uniform_int(low, high)


def _finite_fuel(aircraft: Aircraft) -> int:
    return aircraft.fuel_remaining


def _infinite_fuel(aircraft: Aircraft) -> int:
    return MAX_FUEL


def _burn(aircraft: Aircraft) -> None:
    aircraft.fuel_remaining -= 1


def _no_burn(aircraft: Aircraft) -> None:
    pass


def _own_takeoff(aircraft: Aircraft) -> int:
    return aircraft.timing.time_to_takeoff


def _towed_takeoff(aircraft: Aircraft) -> int:
    if aircraft.towed is not None:
        return aircraft.towed.time_to_takeoff
    return aircraft.timing.time_to_takeoff


@dataclass(frozen=True)
class _Behaviour:
    report_fuel: Callable[[Aircraft], int]
    burn_fuel: Callable[[Aircraft], None]
    takeoff_time: Callable[[Aircraft], int]


_BEHAVIOURS: dict[AircraftKind, _Behaviour] = {
    AircraftKind.COMMERCIAL: _Behaviour(_finite_fuel, _burn, _own_takeoff),
    AircraftKind.LIGHT: _Behaviour(_finite_fuel, _burn, _towed_takeoff),
    AircraftKind.GLIDER: _Behaviour(_infinite_fuel, _no_burn, _own_takeoff),
}
