"""Fixed-dwell holding area for arbitrary items.

TimedHoldingBuffer models a delay element driven by an external clock: items
are added with a dwell counter of zero, every ``tick()`` ages all residents by
one, and once an item's dwell reaches ``release_threshold`` it is finished and
can be taken out. The control tower uses one as its repair yard.

Example:
    yard = TimedHoldingBuffer[str](release_threshold=2)
    yard.add("G-ABCD")
    yard.tick()
    yard.tick()
    yard.take_finished()  # ["G-ABCD"]
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class _Resident(Generic[T]):
    item: T
    dwell: int = 0


@dataclass(frozen=True)
class HoldingBufferStats:
    """Snapshot of holding buffer statistics."""

    admitted: int = 0
    released: int = 0
    resident: int = 0


class TimedHoldingBuffer(Generic[T]):
    """Holds items for ``release_threshold`` ticks before releasing them.

    Residents are kept in insertion order and every query returns them in that
    order. Removal is by identity, so two residents that compare equal are
    still tracked and released independently.

    Args:
        release_threshold: Ticks an item must dwell before it is finished.

    Raises:
        ValueError: If release_threshold is negative.
    """

    def __init__(self, release_threshold: int):
        if release_threshold < 0:
            raise ValueError(f"release_threshold must be >= 0, got {release_threshold}")
        self._release_threshold = release_threshold
        self._residents: list[_Resident[T]] = []
        self._admitted = 0
        self._released = 0

    @property
    def release_threshold(self) -> int:
        return self._release_threshold

    @property
    def stats(self) -> HoldingBufferStats:
        return HoldingBufferStats(
            admitted=self._admitted,
            released=self._released,
            resident=len(self._residents),
        )

    def __len__(self) -> int:
        return len(self._residents)

    def add(self, item: T) -> None:
        self._residents.append(_Resident(item))
        self._admitted += 1

    def tick(self) -> None:
        """Age every resident by one tick."""
        for resident in self._residents:
            resident.dwell += 1

    def _is_finished(self, resident: _Resident[T]) -> bool:
        return resident.dwell >= self._release_threshold

    def peek_finished(self) -> list[T]:
        """Items that have dwelt long enough, without removing them."""
        return [r.item for r in self._residents if self._is_finished(r)]

    def peek_waiting(self) -> list[T]:
        """Items still dwelling."""
        return [r.item for r in self._residents if not self._is_finished(r)]

    def peek_all(self) -> list[T]:
        """Every resident regardless of dwell."""
        return [r.item for r in self._residents]

    def take_finished(self) -> list[T]:
        """Remove and return every finished item."""
        finished = [r for r in self._residents if self._is_finished(r)]
        if not finished:
            return []
        taken = {id(r) for r in finished}
        self._residents = [r for r in self._residents if id(r) not in taken]
        self._released += len(finished)
        return [r.item for r in finished]
