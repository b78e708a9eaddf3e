"""Run-scoped statistics for one control tower."""

from __future__ import annotations

from typing import Any

# One tick models 30 seconds.
MINUTES_PER_TICK = 0.5


def format_probability(p: float) -> str:
    """Up to four decimal places, trailing zeros dropped."""
    text = f"{p:.4f}".rstrip("0").rstrip(".")
    return text or "0"


def ticks_to_minutes(ticks: float) -> str:
    return f"{ticks * MINUTES_PER_TICK:g} mins"


class ControlStats:
    """Counters accumulated by a ControlTower over one run.

    Only the tower mutates these; once the run is over they are read-only.

    Args:
        commercial_probability: The run's commercial spawn probability (P).
        queue_type: Label of the runway policy used.
    """

    def __init__(self, commercial_probability: float, queue_type: str):
        self.commercial_probability = commercial_probability
        self.queue_type = queue_type
        self._total_waiting_time = 0
        self._total_landings = 0
        self._total_departures = 0
        self._total_crashes = 0

    @property
    def total_waiting_time(self) -> int:
        """Ticks waited by every aircraft that has cleared the runway."""
        return self._total_waiting_time

    @property
    def total_landings(self) -> int:
        return self._total_landings

    @property
    def total_departures(self) -> int:
        return self._total_departures

    @property
    def total_crashes(self) -> int:
        return self._total_crashes

    @property
    def average_waiting_time(self) -> float | None:
        """Mean ticks waited per runway use, or None before the first one."""
        served = self._total_landings + self._total_departures
        if served == 0:
            return None
        return self._total_waiting_time / served

    def record_landing(self) -> None:
        self._total_landings += 1

    def record_departure(self) -> None:
        self._total_departures += 1

    def record_crash(self) -> None:
        self._total_crashes += 1

    def add_waiting_time(self, ticks: int) -> None:
        self._total_waiting_time += ticks

    def _average_text(self) -> str:
        average = self.average_waiting_time
        return "n/a" if average is None else ticks_to_minutes(average)

    def summary(self) -> str:
        lines = [
            f"Commercial probability: {format_probability(self.commercial_probability)}",
            f"Queue type: {self.queue_type}",
            "",
            f"Total Waiting Time: {ticks_to_minutes(self._total_waiting_time)}",
            f"Total Landings: {self._total_landings}",
            f"Total Departures: {self._total_departures}",
            f"Total Crashes: {self._total_crashes}",
            "",
            f"Average waiting time: {self._average_text()}",
            "==========",
        ]
        return "\n".join(lines)

    def to_csv(self) -> str:
        """probability,total wait,landings,departures,crashes,average wait"""
        return ",".join(
            [
                format_probability(self.commercial_probability),
                ticks_to_minutes(self._total_waiting_time),
                str(self._total_landings),
                str(self._total_departures),
                str(self._total_crashes),
                self._average_text(),
            ]
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "commercial_probability": self.commercial_probability,
            "queue_type": self.queue_type,
            "total_waiting_time": self._total_waiting_time,
            "total_landings": self._total_landings,
            "total_departures": self._total_departures,
            "total_crashes": self._total_crashes,
            "average_waiting_time": self.average_waiting_time,
        }

    def __str__(self) -> str:
        return self.summary()
