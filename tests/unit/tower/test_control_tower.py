"""Tests for ControlTower, one phase at a time."""

import math

import pytest

from airportsim.aircraft import Aircraft, AircraftKind
from airportsim.core.random_source import RandomSource, SeedNotSetError
from airportsim.policies import FIFORunwayPolicy, FuelPriorityRunwayPolicy, RunwayPolicy
from airportsim.tower import ControlTower


def commercial(fuel=50, waiting=0):
    return Aircraft(AircraftKind.COMMERCIAL, fuel_remaining=fuel, waiting_time=waiting)


def towing_light(fuel=30, waiting=0):
    aircraft = Aircraft(AircraftKind.LIGHT, fuel_remaining=fuel, waiting_time=waiting)
    aircraft.towed = Aircraft.glider()
    return aircraft


class TestCreation:

    @pytest.mark.parametrize("p", [-0.1, 1.5, math.nan, math.inf])
    def test_rejects_invalid_probability(self, p, quiet_random):
        with pytest.raises(ValueError):
            ControlTower(p, FIFORunwayPolicy(), quiet_random)

    def test_rejects_negative_repair_time(self, quiet_random):
        with pytest.raises(ValueError):
            ControlTower(0.01, FIFORunwayPolicy(), quiet_random, repair_ticks=-1)

    def test_starts_idle(self, quiet_random):
        tower = ControlTower(0.007, FIFORunwayPolicy(), quiet_random)
        assert tower.arrivals == []
        assert tower.departures == []
        assert tower.repair_yard_all == []
        assert tower.runway_aircraft is None
        assert tower.runway_busy_ticks == 0
        assert tower.ticks_elapsed == 0
        assert tower.stats.total_landings == 0
        assert tower.simulation_type == "Waiting time (FIFO)"
        assert tower.stats.queue_type == "Waiting time (FIFO)"

    def test_unseeded_source_fails_on_first_tick(self):
        tower = ControlTower(0.007, FIFORunwayPolicy(), RandomSource())
        with pytest.raises(SeedNotSetError):
            tower.tick()


class TestSpawning:

    @pytest.mark.parametrize(
        "draw, kind",
        [
            (0.0, AircraftKind.GLIDER),
            (0.0019, AircraftKind.GLIDER),
            (0.002, AircraftKind.LIGHT),
            (0.0069, AircraftKind.LIGHT),
            (0.007, AircraftKind.COMMERCIAL),
            (0.0169, AircraftKind.COMMERCIAL),
        ],
    )
    def test_arrival_bands(self, scripted_random, draw, kind):
        tower = ControlTower(0.01, FIFORunwayPolicy(), scripted_random([draw]))
        aircraft = tower.generate_arrival()
        assert aircraft.kind is kind
        assert tower.arrivals == [aircraft]

    @pytest.mark.parametrize("draw", [0.017, 0.5, 0.999])
    def test_no_spawn_above_bands(self, scripted_random, draw):
        tower = ControlTower(0.01, FIFORunwayPolicy(), scripted_random([draw]))
        assert tower.generate_arrival() is None
        assert tower.arrivals == []

    def test_zero_probability_never_spawns_commercial(self, scripted_random):
        tower = ControlTower(0.0, FIFORunwayPolicy(), scripted_random([0.007]))
        assert tower.generate_arrival() is None

    def test_glider_band_departs_as_tow_pair(self, scripted_random):
        tower = ControlTower(0.01, FIFORunwayPolicy(), scripted_random([0.001]))
        aircraft = tower.generate_departure()
        assert aircraft.kind is AircraftKind.LIGHT
        assert aircraft.is_towing

    def test_light_band_departs_alone(self, scripted_random):
        tower = ControlTower(0.01, FIFORunwayPolicy(), scripted_random([0.003]))
        aircraft = tower.generate_departure()
        assert aircraft.kind is AircraftKind.LIGHT
        assert not aircraft.is_towing

    def test_commercial_band_departs(self, scripted_random):
        tower = ControlTower(0.01, FIFORunwayPolicy(), scripted_random([0.01]))
        assert tower.generate_departure().kind is AircraftKind.COMMERCIAL

    def test_spawns_numbered_per_tower(self, scripted_random):
        first = ControlTower(0.01, FIFORunwayPolicy(), scripted_random([0.01, 0.001]))
        second = ControlTower(0.01, FIFORunwayPolicy(), scripted_random([0.01]))

        assert first.generate_arrival().aircraft_id == 1
        pair = first.generate_departure()
        assert (pair.aircraft_id, pair.towed.aircraft_id) == (2, 3)
        assert second.generate_arrival().aircraft_id == 1


class TestAging:

    def test_new_arrival_aged_in_its_first_tick(self, scripted_random):
        tower = ControlTower(0.01, FIFORunwayPolicy(), scripted_random([0.01], fuel=50))
        tower.arrivals_tick()
        (aircraft,) = tower.arrivals
        assert aircraft.waiting_time == 1
        assert aircraft.fuel == 49

    def test_arrivals_burn_fuel_departures_do_not(self, quiet_random):
        tower = ControlTower(0.01, FIFORunwayPolicy(), quiet_random)
        arrival, departure = commercial(fuel=20), commercial(fuel=20)
        tower.add_arrival(arrival)
        tower.add_departure(departure)
        tower.arrivals_tick()
        tower.departures_tick()
        assert arrival.fuel == 19
        assert departure.fuel == 20
        assert arrival.waiting_time == 1
        assert departure.waiting_time == 1

    def test_departure_waits_ten_ticks(self, quiet_random):
        tower = ControlTower(0.0, FIFORunwayPolicy(), quiet_random)
        aircraft = commercial(waiting=0)
        tower.add_departure(aircraft)
        for _ in range(10):
            tower.departures_tick()
        assert tower.departures == [aircraft]
        assert aircraft.waiting_time == 10

    def test_manual_hooks(self, quiet_random):
        tower = ControlTower(0.0, FIFORunwayPolicy(), quiet_random)
        arrival, departure = commercial(fuel=10), commercial()
        tower.add_arrival(arrival)
        tower.add_departure(departure)
        tower.increase_waiting_time()
        tower.decrease_fuel()
        assert arrival.waiting_time == 1
        assert departure.waiting_time == 1
        assert arrival.fuel == 9


class TestCrashes:

    def test_sweep_removes_empty_tanks(self, quiet_random):
        tower = ControlTower(0.0, FIFORunwayPolicy(), quiet_random)
        dry, fine = commercial(fuel=0), commercial(fuel=5)
        tower.add_arrival(dry)
        tower.add_arrival(fine)
        tower.check_crashes()
        assert tower.stats.total_crashes == 1
        assert tower.arrivals == [fine]

    def test_arrival_crashes_while_runway_busy(self, quiet_random):
        tower = ControlTower(0.0, FIFORunwayPolicy(), quiet_random)
        first, second = commercial(fuel=1), commercial(fuel=1)
        tower.add_arrival(first)
        tower.add_arrival(second)

        tower.tick()
        assert tower.runway_aircraft is first
        assert tower.stats.total_landings == 1

        tower.tick()
        assert tower.stats.total_crashes == 1
        assert tower.arrivals == []

    def test_gliders_never_crash(self, quiet_random):
        tower = ControlTower(0.0, FIFORunwayPolicy(), quiet_random)
        tower.add_arrival(commercial(fuel=500))
        glider = Aircraft.glider()
        tower.add_arrival(glider)
        for _ in range(200):
            tower.arrivals_tick()
            tower.check_crashes()
        assert glider in tower.arrivals
        assert tower.stats.total_crashes == 0


class TestRepairYard:

    def test_breakdown_and_repair_cycle(self, scripted_random):
        tower = ControlTower(0.0, FIFORunwayPolicy(), scripted_random([0.0]), repair_ticks=3)
        aircraft = commercial(waiting=7)
        tower.add_departure(aircraft)

        tower.repair_yard_tick()
        assert tower.departures == []
        assert tower.repair_yard_waiting == [aircraft]
        assert tower.repair_yard_finished == []

        tower.repair_yard_tick()
        assert tower.repair_yard_all == [aircraft]

        tower.repair_yard_tick()
        assert tower.repair_yard_all == []
        assert tower.departures == [aircraft]
        assert aircraft.waiting_time == 0

        stats = tower.repair_yard_stats
        assert (stats.admitted, stats.released, stats.resident) == (1, 1, 0)

    def test_one_draw_per_departure(self, scripted_random):
        rng = scripted_random()
        tower = ControlTower(0.0, FIFORunwayPolicy(), rng)
        for _ in range(3):
            tower.add_departure(commercial())
        tower.repair_yard_tick()
        assert rng.double_draws == 3
        assert len(tower.departures) == 3

    def test_draw_at_breakdown_probability_does_not_break(self, scripted_random):
        tower = ControlTower(0.0, FIFORunwayPolicy(), scripted_random([0.0001]))
        tower.add_departure(commercial())
        tower.repair_yard_tick()
        assert len(tower.departures) == 1

    def test_repaired_aircraft_rejoin_behind_equal_waits(self, scripted_random):
        tower = ControlTower(0.0, FIFORunwayPolicy(), scripted_random([0.0]), repair_ticks=1)
        broken = commercial(waiting=4)
        tower.add_departure(broken)
        tower.repair_yard_tick()
        assert tower.departures == [broken]

        fresh = commercial(waiting=0)
        tower.add_departure(fresh)
        assert tower.departures == [broken, fresh]


class TestRunway:

    def test_landing_occupies_runway_for_land_time(self, quiet_random):
        tower = ControlTower(0.0, FIFORunwayPolicy(), quiet_random)
        aircraft = commercial(fuel=50)
        tower.add_arrival(aircraft)

        tower.tick()
        assert tower.runway_aircraft is aircraft
        assert tower.runway_busy_ticks == 6
        assert tower.stats.total_landings == 1
        assert tower.stats.total_waiting_time == 0

        for _ in range(5):
            tower.tick()
        assert tower.runway_aircraft is aircraft
        assert tower.runway_busy_ticks == 1

        tower.tick()
        assert tower.runway_aircraft is None
        assert tower.stats.total_waiting_time == 1
        assert tower.stats.average_waiting_time == 1.0

    def test_fifo_lands_before_departing(self, quiet_random):
        tower = ControlTower(0.0, FIFORunwayPolicy(), quiet_random)
        arrival, departure = commercial(), commercial(waiting=100)
        tower.add_arrival(arrival)
        tower.add_departure(departure)
        tower.tick()
        assert tower.runway_aircraft is arrival
        assert tower.departures == [departure]

    def test_departure_uses_takeoff_time(self, quiet_random):
        tower = ControlTower(0.0, FIFORunwayPolicy(), quiet_random)
        tower.add_departure(commercial())
        tower.tick()
        assert tower.runway_busy_ticks == 4
        assert tower.stats.total_departures == 1

    def test_idle_runway_stays_idle(self, quiet_random):
        tower = ControlTower(0.0, FIFORunwayPolicy(), quiet_random)
        for _ in range(5):
            tower.tick()
        assert tower.runway_aircraft is None
        assert tower.runway_busy_ticks == 0
        assert tower.ticks_elapsed == 5

    def test_fuel_priority_lets_long_waiting_departure_go(self, quiet_random):
        tower = ControlTower(0.0, FuelPriorityRunwayPolicy(), quiet_random)
        arrival, departure = commercial(fuel=30, waiting=0), commercial(waiting=5)
        tower.add_arrival(arrival)
        tower.add_departure(departure)
        tower.tick()
        assert tower.runway_aircraft is departure
        assert tower.arrivals == [arrival]

    def test_fuel_priority_protects_low_fuel_arrival(self, quiet_random):
        tower = ControlTower(0.0, FuelPriorityRunwayPolicy(), quiet_random)
        arrival, departure = commercial(fuel=4, waiting=0), commercial(waiting=5)
        tower.add_arrival(arrival)
        tower.add_departure(departure)
        tower.tick()
        assert tower.runway_aircraft is arrival


class TestTowPairs:

    def test_tow_pair_takes_off_and_comes_back_down(self, quiet_random):
        tower = ControlTower(0.0, FIFORunwayPolicy(), quiet_random)
        pair = towing_light()
        tower.add_departure(pair)

        tower.tick()
        assert tower.runway_aircraft is pair
        assert tower.runway_busy_ticks == 6
        assert tower.arrivals == []

        for _ in range(5):
            tower.tick()
        assert tower.arrivals == []

        tower.tick()
        assert tower.stats.total_departures == 1
        assert tower.stats.total_landings == 1
        assert tower.runway_aircraft is pair
        assert tower.runway_busy_ticks == pair.time_to_land

    def test_returning_tow_pair_rushed_ahead_of_arrivals(self, quiet_random):
        tower = ControlTower(0.0, FIFORunwayPolicy(), quiet_random)
        pair = towing_light()
        tower.add_departure(pair)
        tower.tick()  # pair takes off
        tower.add_arrival(commercial(fuel=80))
        tower.add_arrival(commercial(fuel=80))

        for _ in range(6):
            tower.tick()

        assert not pair.is_towing
        assert tower.runway_aircraft is pair

    def test_tow_pair_in_busy_departures_loses_glider(self, quiet_random):
        tower = ControlTower(0.0, FIFORunwayPolicy(), quiet_random)
        tower.add_departure(commercial())
        pair = towing_light()
        tower.add_departure(pair)
        assert not pair.is_towing
        assert tower.departures[0] is pair

    @pytest.mark.parametrize("policy", [FIFORunwayPolicy(), FuelPriorityRunwayPolicy()])
    def test_tow_pair_comes_back_down_under_either_policy(self, quiet_random, policy: RunwayPolicy):
        tower = ControlTower(0.0, policy, quiet_random)
        pair = towing_light()
        tower.add_departure(pair)

        for _ in range(7):
            tower.tick()

        assert tower.stats.total_departures == 1
        assert tower.stats.total_landings == 1
        assert tower.runway_aircraft is pair
