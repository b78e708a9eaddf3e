"""Tests for Aircraft and its per-kind behaviour."""

import itertools

import pytest

from airportsim.aircraft import MAX_FUEL, Aircraft, AircraftKind
from airportsim.core.random_source import RandomSource


@pytest.fixture
def rng():
    return RandomSource(1234)


class TestCommercial:

    def test_timing(self, rng):
        aircraft = Aircraft.commercial(rng)
        assert aircraft.kind is AircraftKind.COMMERCIAL
        assert aircraft.time_to_takeoff == 4
        assert aircraft.time_to_land == 6

    def test_fuel_drawn_within_range(self, rng):
        fuels = {Aircraft.commercial(rng).fuel for _ in range(300)}
        assert min(fuels) >= 40
        assert max(fuels) <= 80
        assert len(fuels) > 10

    def test_fuel_decrements(self, rng):
        aircraft = Aircraft.commercial(rng)
        before = aircraft.fuel
        aircraft.decrement_fuel()
        aircraft.decrement_fuel()
        assert aircraft.fuel == before - 2


class TestLight:

    def test_fuel_drawn_within_range(self, rng):
        fuels = {Aircraft.light(rng).fuel for _ in range(300)}
        assert min(fuels) >= 20
        assert max(fuels) <= 40

    def test_takeoff_without_glider(self, rng):
        aircraft = Aircraft.light(rng)
        assert aircraft.is_towing is False
        assert aircraft.time_to_takeoff == 4
        assert aircraft.time_to_land == 6

    def test_takeoff_while_towing_uses_glider_timing(self, rng):
        aircraft = Aircraft.light(rng, towing=True)
        assert aircraft.is_towing is True
        assert aircraft.towed.kind is AircraftKind.GLIDER
        assert aircraft.time_to_takeoff == 6

    def test_takeoff_reverts_after_detaching(self, rng):
        aircraft = Aircraft.light(rng, towing=True)
        aircraft.detach_glider()
        assert aircraft.is_towing is False
        assert aircraft.towed is None
        assert aircraft.time_to_takeoff == 4


class TestGlider:

    def test_timing(self):
        glider = Aircraft.glider()
        assert glider.time_to_takeoff == 6
        assert glider.time_to_land == 8

    def test_fuel_is_always_max(self):
        glider = Aircraft.glider()
        assert glider.fuel == MAX_FUEL
        for _ in range(100):
            glider.decrement_fuel()
        assert glider.fuel == MAX_FUEL

    def test_stored_fuel_is_ignored(self):
        glider = Aircraft(AircraftKind.GLIDER, fuel_remaining=-5)
        assert glider.fuel == MAX_FUEL


class TestWaitingTime:

    def test_starts_at_zero(self):
        assert Aircraft.glider().waiting_time == 0

    def test_increment_and_reset(self, rng):
        aircraft = Aircraft.commercial(rng)
        for _ in range(3):
            aircraft.increment_waiting_time()
        assert aircraft.waiting_time == 3
        aircraft.reset_waiting_time()
        assert aircraft.waiting_time == 0


class TestIdentity:

    def test_equal_state_is_not_equal(self):
        a = Aircraft(AircraftKind.COMMERCIAL, fuel_remaining=50)
        b = Aircraft(AircraftKind.COMMERCIAL, fuel_remaining=50)
        assert a != b

    def test_unnumbered_by_default(self, rng):
        assert Aircraft.commercial(rng).aircraft_id == 0
        assert Aircraft.glider().aircraft_id == 0

    def test_numbered_from_supplied_ids(self, rng):
        ids = itertools.count(1)
        commercial = Aircraft.commercial(rng, ids=ids)
        pair = Aircraft.light(rng, towing=True, ids=ids)
        assert commercial.aircraft_id == 1
        assert pair.aircraft_id == 2
        assert pair.towed.aircraft_id == 3

    def test_str_describes_aircraft(self, rng):
        aircraft = Aircraft.light(rng, towing=True)
        text = str(aircraft)
        assert "Light" in text
        assert "Attached: Glider" in text
        assert "Fuel: inf" in text
