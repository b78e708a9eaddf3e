"""Command line front-end.

Usage:
    python -m airportsim -p 0.01 -t 5760 -s 42 --priority
    python -m airportsim --auto 10 --fifo --plot output/sweep.png
"""

from __future__ import annotations

import argparse
import logging

from airportsim.logging_config import configure_from_env, enable_console_logging
from airportsim.simulator import (
    MAX_COMMERCIAL_PROBABILITY,
    TICKS_PER_DAY,
    QueueDepthRecorder,
    QueueType,
    SimulationConfig,
    Simulator,
)
from airportsim.sweep import DEFAULT_P_STEP, sweep_probability

logger = logging.getLogger(__name__)


def _probability(text: str) -> float:
    value = float(text)
    if not 0.0 <= value <= MAX_COMMERCIAL_PROBABILITY:
        raise argparse.ArgumentTypeError(
            f"probability must be within [0, {MAX_COMMERCIAL_PROBABILITY:g}], got {text}"
        )
    return value


def _non_negative_int(text: str) -> int:
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {text}")
    return value


def _positive_int(text: str) -> int:
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {text}")
    return value


def _positive_float(text: str) -> float:
    value = float(text)
    if not value > 0:
        raise argparse.ArgumentTypeError(f"expected a positive number, got {text}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="airportsim",
        description="Single-runway airport simulation (one tick = 30 seconds)",
    )
    parser.add_argument(
        "-p", "--probability", type=_probability, default=0.007,
        help="Commercial aircraft spawn probability per tick",
    )
    parser.add_argument(
        "-t", "--ticks", type=_non_negative_int, default=TICKS_PER_DAY,
        help="Number of ticks to simulate (default: one day)",
    )
    parser.add_argument("-s", "--seed", type=int, default=None, help="Random seed (default: from the clock)")
    parser.add_argument("-d", "--debug", action="store_true", help="Trace every tick to stderr")

    queue = parser.add_mutually_exclusive_group()
    queue.add_argument(
        "--priority", dest="queue_type", action="store_const", const=QueueType.PRIORITY,
        help="Order arrivals by remaining fuel",
    )
    queue.add_argument(
        "--fifo", dest="queue_type", action="store_const", const=QueueType.FIFO,
        help="Order arrivals by waiting time (default)",
    )
    parser.set_defaults(queue_type=QueueType.FIFO)

    parser.add_argument(
        "--auto", type=_positive_int, metavar="RUNS", default=None,
        help="Sweep P over RUNS seeds and report the highest crash-free value",
    )
    parser.add_argument("--p-step", type=_positive_float, default=DEFAULT_P_STEP, help="P increment for --auto")
    parser.add_argument("--csv", action="store_true", help="Print statistics as one CSV line")
    parser.add_argument("--plot", metavar="PATH", default=None, help="Write a PNG chart to PATH")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.debug:
        enable_console_logging(level="DEBUG")
    else:
        configure_from_env()

    if args.auto is not None:
        result = sweep_probability(
            runs=args.auto,
            ticks=args.ticks,
            queue_type=args.queue_type,
            seed=args.seed,
            p_step=args.p_step,
        )
        if args.csv:
            print(result.to_dataframe().to_csv(index=False), end="")
        else:
            print(result.report())
        if args.plot:
            from airportsim.visual import plot_sweep

            print(f"Saved: {plot_sweep(result, args.plot)}")
        return 0

    config = SimulationConfig(
        commercial_probability=args.probability,
        ticks=args.ticks,
        queue_type=args.queue_type,
        seed=args.seed,
    )
    simulator = Simulator(config)
    recorder = None
    if args.plot:
        recorder = QueueDepthRecorder(simulator)
        simulator.add_listener(recorder)

    result = simulator.run()
    print(result.stats.to_csv() if args.csv else result.stats.summary())

    if recorder is not None:
        from airportsim.visual import plot_run_history

        print(f"Saved: {plot_run_history(recorder.to_dataframe(), args.plot)}")
    return 0
