"""Automatic search for the highest crash-free commercial probability.

For each of ``runs`` seeds the sweep simulates P = 0, step, 2*step, ... and
stops at the first P that causes a crash; the P before it is that seed's safe
value. The reported answer is the mean safe P over all seeds.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import pandas as pd

from airportsim.core.random_source import RandomSource
from airportsim.simulator import (
    MAX_COMMERCIAL_PROBABILITY,
    MIN_COMMERCIAL_PROBABILITY,
    TICKS_PER_DAY,
    ProgressTracker,
    QueueType,
    SimulationConfig,
    Simulator,
    SimulatorListener,
)
from airportsim.tower import format_probability

logger = logging.getLogger(__name__)

DEFAULT_P_STEP = 0.001


@dataclass(frozen=True)
class SeedSweep:
    """Result of sweeping P for one seed."""

    seed: int
    safe_probability: float
    first_crash_probability: float | None
    probabilities_tried: int


@dataclass
class SweepResult:
    """Outcome of sweep_probability()."""

    queue_type: QueueType
    ticks: int
    p_step: float
    runs: list[SeedSweep] = field(default_factory=list)
    cancelled: bool = False

    @property
    def average_safe_probability(self) -> float | None:
        if not self.runs:
            return None
        return sum(run.safe_probability for run in self.runs) / len(self.runs)

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(
            [
                {
                    "seed": run.seed,
                    "safe_probability": run.safe_probability,
                    "first_crash_probability": run.first_crash_probability,
                    "probabilities_tried": run.probabilities_tried,
                }
                for run in self.runs
            ],
            columns=["seed", "safe_probability", "first_crash_probability", "probabilities_tried"],
        )

    def report(self) -> str:
        average = self.average_safe_probability
        average_text = "n/a" if average is None else format_probability(average)
        label = self.queue_type.runway_policy().label
        lines = [
            "___________________________________________",
            "AUTOMATIC SIMULATION " + ("CANCELLED" if self.cancelled else "FINISHED"),
            "",
            f"Arrivals type: {label}",
            f"Good P value (0 crashes): {average_text}",
            "",
            f"Result averaged over {len(self.runs)} seeds.",
        ]
        return "\n".join(lines)


def _probability_grid(p_step: float) -> list[float]:
    # Built from integer multiples so repeated addition cannot drift past the bound.
    steps = int((MAX_COMMERCIAL_PROBABILITY - MIN_COMMERCIAL_PROBABILITY) / p_step + 1e-9)
    return [round(MIN_COMMERCIAL_PROBABILITY + i * p_step, 10) for i in range(steps + 1)]


def sweep_probability(
    runs: int,
    ticks: int = TICKS_PER_DAY,
    queue_type: QueueType = QueueType.FIFO,
    seed: int | None = None,
    p_step: float = DEFAULT_P_STEP,
    listeners: list[SimulatorListener] | None = None,
) -> SweepResult:
    """Find the highest crash-free P for ``runs`` independent seeds.

    Args:
        runs: Number of seeds to sweep.
        ticks: Ticks per simulation.
        queue_type: Runway policy for every simulation.
        seed: Seed for the stream that picks per-run seeds; None uses the clock.
        p_step: Increment between probabilities tried.
        listeners: Passed to every simulation; any of them may stop the sweep.

    Raises:
        ValueError: If runs < 1 or p_step is not positive.
    """
    if runs < 1:
        raise ValueError(f"runs must be >= 1, got {runs}")
    if not p_step > 0:
        raise ValueError(f"p_step must be > 0, got {p_step}")

    seeds = RandomSource(seed)
    if seed is None:
        seeds.reseed_random()

    grid = _probability_grid(p_step)
    progress = ProgressTracker(ticks_to_complete=runs * len(grid) * ticks)
    result = SweepResult(queue_type=queue_type, ticks=ticks, p_step=p_step)

    for run_index in range(runs):
        run_seed = seeds.next_seed()
        safe_p = 0.0
        first_crash = None
        tried = 0

        for p in grid:
            config = SimulationConfig(
                commercial_probability=p, ticks=ticks, queue_type=queue_type, seed=run_seed
            )
            outcome = Simulator(config, listeners=listeners, progress=progress).run()
            tried += 1

            if outcome.cancelled:
                logger.info("Sweep cancelled during seed %d at P=%s", run_seed, format_probability(p))
                result.cancelled = True
                return result

            if outcome.crashes > 0:
                logger.info("P=%s onwards cause crashes. Discarding.", format_probability(p))
                first_crash = p
                break

            safe_p = p
            logger.info("P=%s had 0 crashes.", format_probability(p))

        # The remaining grid points are skipped; count them as done for progress.
        progress.advance((len(grid) - tried) * ticks)
        result.runs.append(
            SeedSweep(
                seed=run_seed,
                safe_probability=safe_p,
                first_crash_probability=first_crash,
                probabilities_tried=tried,
            )
        )
        logger.info("Seed %d/%d: safe P=%s", run_index + 1, runs, format_probability(safe_p))

    return result
