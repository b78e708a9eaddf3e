"""Priority queue of aircraft waiting for the runway.

Residents are stored in insertion order and ordered on demand by the queue's
``Ordering``. Ordering is recomputed on every access because waiting times and
fuel change every tick; the sort is stable, so aircraft with equal keys leave
in the order they joined. Membership, and the rush marks set by the
ordering, are by object identity; a mark is dropped when its aircraft leaves.

The ordering's ``prepare`` pass runs when an aircraft joins, never while
ordering, so reading a queue does not change it.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass

from airportsim.aircraft import Aircraft
from airportsim.policies.ordering import Ordering


@dataclass(frozen=True)
class AircraftQueueStats:
    """Snapshot of queue statistics."""

    accepted: int = 0
    removed: int = 0
    peak_depth: int = 0


class AircraftQueue:
    """Ordered holding queue for arrivals or departures.

    Args:
        ordering: Decides who is served first.
        name: Identifier for logging.
    """

    def __init__(self, ordering: Ordering, name: str = "queue"):
        self.name = name
        self._ordering = ordering
        self._residents: list[Aircraft] = []
        self._rushed: set[int] = set()  # id() of residents
        self._accepted = 0
        self._removed = 0
        self._peak_depth = 0

    @property
    def ordering(self) -> Ordering:
        return self._ordering

    @property
    def stats(self) -> AircraftQueueStats:
        return AircraftQueueStats(
            accepted=self._accepted,
            removed=self._removed,
            peak_depth=self._peak_depth,
        )

    def __len__(self) -> int:
        return len(self._residents)

    def __contains__(self, aircraft: object) -> bool:
        return any(a is aircraft for a in self._residents)

    def __iter__(self) -> Iterator[Aircraft]:
        return iter(self.ordered())

    def is_empty(self) -> bool:
        return not self._residents

    def is_rushed(self, aircraft: Aircraft) -> bool:
        return id(aircraft) in self._rushed

    def push(self, aircraft: Aircraft) -> None:
        if aircraft in self:
            raise ValueError(f"{aircraft} is already in {self.name}")
        self._residents.append(aircraft)
        self._accepted += 1
        self._peak_depth = max(self._peak_depth, len(self._residents))
        # Depth only grows here.
        for rushed in self._ordering.prepare(self._residents):
            self._rushed.add(id(rushed))

    def ordered(self) -> list[Aircraft]:
        """Residents in service order, head first."""
        key = self._ordering.key
        return sorted(self._residents, key=lambda a: (id(a) not in self._rushed, key(a)))

    def peek(self) -> Aircraft | None:
        ordered = self.ordered()
        return ordered[0] if ordered else None

    def pop(self) -> Aircraft | None:
        head = self.peek()
        if head is not None:
            self.remove(head)
        return head

    def remove(self, aircraft: Aircraft) -> None:
        for index, resident in enumerate(self._residents):
            if resident is aircraft:
                del self._residents[index]
                self._rushed.discard(id(aircraft))
                self._removed += 1
                return
        raise ValueError(f"{aircraft} is not in {self.name}")

    def remove_where(self, predicate: Callable[[Aircraft], bool]) -> list[Aircraft]:
        """Remove and return every resident matching ``predicate``, in service order."""
        matched = [a for a in self.ordered() if predicate(a)]
        for aircraft in matched:
            self.remove(aircraft)
        return matched
