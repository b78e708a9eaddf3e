"""Discrete-time simulation of a single-runway airport.

Aircraft arrive (wanting to land) and depart (wanting to take off), queue for
the one runway, may run out of fuel or break down, and the control tower keeps
throughput and waiting-time statistics.

Quick start:
    import airportsim

    result = airportsim.simulate(commercial_probability=0.007, ticks=2880, seed=42)
    print(result.stats.summary())
"""

import logging

from airportsim.logging_config import (
    configure_from_env,
    disable_logging,
    enable_console_logging,
    set_level,
)

# Silent unless the application configures logging.
logging.getLogger("airportsim").addHandler(logging.NullHandler())

from airportsim.aircraft import (
    BREAKDOWN_PROBABILITY,
    GLIDER_SPAWN_PROBABILITY,
    LIGHT_SPAWN_PROBABILITY,
    MAX_FUEL,
    Aircraft,
    AircraftKind,
)
from airportsim.core import RandomSource, SeedNotSetError
from airportsim.entities import AircraftQueue, TimedHoldingBuffer
from airportsim.policies import (
    FIFORunwayPolicy,
    FuelOrder,
    FuelPriorityRunwayPolicy,
    RunwayDecision,
    RunwayPolicy,
    WaitingTimeOrder,
)
from airportsim.simulator import (
    MAX_COMMERCIAL_PROBABILITY,
    TICKS_PER_DAY,
    TICKS_PER_HOUR,
    TICKS_PER_WEEK,
    CallbackListener,
    QueueDepthRecorder,
    QueueType,
    SimulationConfig,
    SimulationResult,
    Simulator,
    SimulatorListener,
    simulate,
)
from airportsim.sweep import SweepResult, sweep_probability
from airportsim.tower import REPAIR_YARD_TICKS, ControlStats, ControlTower

__all__ = [
    # Aircraft
    "Aircraft",
    "AircraftKind",
    "BREAKDOWN_PROBABILITY",
    "GLIDER_SPAWN_PROBABILITY",
    "LIGHT_SPAWN_PROBABILITY",
    "MAX_FUEL",
    # Core
    "RandomSource",
    "SeedNotSetError",
    # Containers
    "AircraftQueue",
    "TimedHoldingBuffer",
    # Policies
    "FIFORunwayPolicy",
    "FuelOrder",
    "FuelPriorityRunwayPolicy",
    "RunwayDecision",
    "RunwayPolicy",
    "WaitingTimeOrder",
    # Tower
    "ControlStats",
    "ControlTower",
    "REPAIR_YARD_TICKS",
    # Running
    "CallbackListener",
    "MAX_COMMERCIAL_PROBABILITY",
    "QueueDepthRecorder",
    "QueueType",
    "SimulationConfig",
    "SimulationResult",
    "Simulator",
    "SimulatorListener",
    "SweepResult",
    "TICKS_PER_DAY",
    "TICKS_PER_HOUR",
    "TICKS_PER_WEEK",
    "simulate",
    "sweep_probability",
    # Logging
    "configure_from_env",
    "disable_logging",
    "enable_console_logging",
    "set_level",
]
