"""Run loop around a ControlTower.

The simulator builds a tower from a ``SimulationConfig``, advances it one tick
at a time and talks to the outside world only through listeners: after every
tick it reports a progress percentage and asks whether to stop. A stopped run
is not an error; the result carries whatever statistics had accumulated.

Example:
    config = SimulationConfig(commercial_probability=0.01, ticks=TICKS_PER_DAY, seed=42)
    result = Simulator(config).run()
    print(result.stats.summary())
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol, runtime_checkable

import pandas as pd

from airportsim.aircraft import GLIDER_SPAWN_PROBABILITY, LIGHT_SPAWN_PROBABILITY
from airportsim.core.random_source import RandomSource
from airportsim.policies import FIFORunwayPolicy, FuelPriorityRunwayPolicy, RunwayPolicy
from airportsim.tower import ControlStats, ControlTower

logger = logging.getLogger(__name__)

TICKS_PER_HOUR = 120
TICKS_PER_DAY = TICKS_PER_HOUR * 24
TICKS_PER_WEEK = TICKS_PER_DAY * 7

MIN_COMMERCIAL_PROBABILITY = 0.0
MAX_COMMERCIAL_PROBABILITY = 1.0 - (GLIDER_SPAWN_PROBABILITY + LIGHT_SPAWN_PROBABILITY)


class QueueType(Enum):
    FIFO = "fifo"
    PRIORITY = "priority"

    def runway_policy(self) -> RunwayPolicy:
        if self is QueueType.PRIORITY:
            return FuelPriorityRunwayPolicy()
        return FIFORunwayPolicy()


@dataclass(frozen=True)
class SimulationConfig:
    """Everything needed to reproduce one run.

    Attributes:
        commercial_probability: Per-tick commercial spawn probability (P).
        ticks: Number of ticks to simulate.
        queue_type: Which runway policy to use.
        seed: Random seed; None picks one from the clock at run time.
    """

    commercial_probability: float = 0.007
    ticks: int = TICKS_PER_DAY
    queue_type: QueueType = QueueType.FIFO
    seed: int | None = None

    def __post_init__(self):
        p = self.commercial_probability
        if not math.isfinite(p) or not MIN_COMMERCIAL_PROBABILITY <= p <= 1.0:
            raise ValueError(f"commercial_probability must be within [0, 1], got {p}")
        if self.ticks < 0:
            raise ValueError(f"ticks must be >= 0, got {self.ticks}")
        if not isinstance(self.queue_type, QueueType):
            raise ValueError(f"queue_type must be a QueueType, got {self.queue_type!r}")


@dataclass
class SimulationResult:
    """Outcome of Simulator.run()."""

    stats: ControlStats
    ticks_completed: int
    cancelled: bool
    seed: int

    @property
    def crashes(self) -> int:
        return self.stats.total_crashes


@runtime_checkable
class SimulatorListener(Protocol):
    """Observer of a running simulation."""

    def after_tick(self) -> bool:
        """Called between ticks; return True to stop the run."""
        ...

    def after_simulate(self, stats: ControlStats) -> None:
        """Called once when a run completes without being stopped."""
        ...

    def progress(self, percent: float) -> None:
        """Called after every tick with overall progress in [0, 100]."""
        ...


@dataclass
class CallbackListener:
    """SimulatorListener built from optional plain callables."""

    should_stop: Callable[[], bool] | None = None
    on_finished: Callable[[ControlStats], None] | None = None
    on_progress: Callable[[float], None] | None = None

    def after_tick(self) -> bool:
        return self.should_stop() if self.should_stop is not None else False

    def after_simulate(self, stats: ControlStats) -> None:
        if self.on_finished is not None:
            self.on_finished(stats)

    def progress(self, percent: float) -> None:
        if self.on_progress is not None:
            self.on_progress(percent)


@dataclass
class ProgressTracker:
    """Tick counter shared by the runs of a sweep so progress spans all of them."""

    ticks_to_complete: int = 0
    ticks_done: int = 0

    def advance(self, ticks: int = 1) -> float:
        self.ticks_done += ticks
        if self.ticks_to_complete <= 0:
            return 100.0
        return min(100.0, 100.0 * self.ticks_done / self.ticks_to_complete)


class Simulator:
    """Drives one ControlTower for ``config.ticks`` ticks.

    Args:
        config: Run parameters.
        listeners: Observers notified of progress and asked about cancellation.
        progress: Shared tracker; by default progress covers this run only.
    """

    def __init__(
        self,
        config: SimulationConfig,
        listeners: list[SimulatorListener] | None = None,
        progress: ProgressTracker | None = None,
    ):
        self.config = config
        self._listeners: list[SimulatorListener] = list(listeners or [])
        self._progress = progress or ProgressTracker(ticks_to_complete=config.ticks)
        self._rng = RandomSource()
        self._tower: ControlTower | None = None

    @property
    def tower(self) -> ControlTower | None:
        """The tower of the current or most recent run."""
        return self._tower

    def add_listener(self, listener: SimulatorListener) -> None:
        self._listeners.append(listener)

    def build_tower(self) -> ControlTower:
        """Seed this simulator's random source and create a fresh tower."""
        if self.config.seed is None:
            self._rng.reseed_random()
        else:
            self._rng.reseed(self.config.seed)
        self._tower = ControlTower(
            self.config.commercial_probability,
            self.config.queue_type.runway_policy(),
            self._rng,
        )
        return self._tower

    def run(self) -> SimulationResult:
        tower = self.build_tower()
        logger.info(
            "Simulating %d ticks, P=%s, %s, seed=%d",
            self.config.ticks,
            self.config.commercial_probability,
            tower.simulation_type,
            self._rng.seed,
        )

        for _ in range(self.config.ticks):
            tower.tick()
            self._raise_progress(self._progress.advance())
            if self._raise_after_tick():
                logger.info("Simulation cancelled after %d ticks", tower.ticks_elapsed)
                return SimulationResult(
                    stats=tower.stats,
                    ticks_completed=tower.ticks_elapsed,
                    cancelled=True,
                    seed=self._rng.seed,
                )

        for listener in self._listeners:
            listener.after_simulate(tower.stats)
        logger.info("Simulation finished: %s", tower.stats.to_csv())
        arrivals, departures = tower.arrivals_queue.stats, tower.departures_queue.stats
        logger.info(
            "Peak queue depths: arrivals=%d departures=%d, repair yard admissions=%d",
            arrivals.peak_depth,
            departures.peak_depth,
            tower.repair_yard_stats.admitted,
        )

        return SimulationResult(
            stats=tower.stats,
            ticks_completed=tower.ticks_elapsed,
            cancelled=False,
            seed=self._rng.seed,
        )

    def _raise_after_tick(self) -> bool:
        return any(listener.after_tick() for listener in self._listeners)

    def _raise_progress(self, percent: float) -> None:
        for listener in self._listeners:
            listener.progress(percent)


def simulate(
    commercial_probability: float = 0.007,
    ticks: int = TICKS_PER_DAY,
    queue_type: QueueType = QueueType.FIFO,
    seed: int | None = None,
) -> SimulationResult:
    """Convenience wrapper: configure, run and return the result."""
    config = SimulationConfig(
        commercial_probability=commercial_probability,
        ticks=ticks,
        queue_type=queue_type,
        seed=seed,
    )
    return Simulator(config).run()


@dataclass
class QueueDepthRecorder:
    """Listener that samples queue depths of a simulator's tower after every tick.

    Example:
        sim = Simulator(config)
        recorder = QueueDepthRecorder(sim)
        sim.add_listener(recorder)
        sim.run()
        recorder.to_dataframe().plot(x="tick")
    """

    simulator: Simulator
    rows: list[dict[str, int]] = field(default_factory=list)

    def after_tick(self) -> bool:
        tower = self.simulator.tower
        if tower is not None:
            self.rows.append(
                {
                    "tick": tower.ticks_elapsed,
                    "arrivals": len(tower.arrivals_queue),
                    "departures": len(tower.departures_queue),
                    "repair_yard": tower.repair_yard_stats.resident,
                    "crashes": tower.stats.total_crashes,
                }
            )
        return False

    def after_simulate(self, stats: ControlStats) -> None:
        pass

    def progress(self, percent: float) -> None:
        pass

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(self.rows, columns=["tick", "arrivals", "departures", "repair_yard", "crashes"])
