"""Seat matrix of a single screening.

Every seat is either free or occupied and only ever moves from free to
occupied. All reads and writes go through one lock per matrix, so a batch
commit is never observed half applied.
"""

import threading
from collections.abc import Iterable, Sequence
from typing import Self

from venue.domain.errors import SelectionError, SelectionFailure
from venue.domain.value_objects import SeatLayout, SeatPosition


class SeatMatrix:
    """Grid of exclusively held seats for one occupation."""

    def __init__(self, layout: SeatLayout, occupied: Iterable[SeatPosition] = ()) -> None:
        self._layout = layout
        self._occupied: dict[SeatPosition, bool] = {
            position: False for position in layout.positions()
        }
        for position in occupied:
            if position not in self._occupied:
                raise ValueError(f"Seat {position} is outside the layout")
            self._occupied[position] = True
        self._lock = threading.RLock()

    @classmethod
    def from_layout(cls, layout: SeatLayout) -> Self:
        """Fresh matrix with every seat free."""
        return cls(layout)

    @property
    def layout(self) -> SeatLayout:
        return self._layout

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    def __contains__(self, position: SeatPosition) -> bool:
        return position in self._occupied

    def is_occupied(self, position: SeatPosition) -> bool:
        with self._lock:
            return self._occupied[position]

    def occupied_positions(self) -> list[SeatPosition]:
        with self._lock:
            return [position for position, taken in self._occupied.items() if taken]

    @property
    def free_count(self) -> int:
        with self._lock:
            return sum(1 for taken in self._occupied.values() if not taken)

    def check(self, positions: Sequence[SeatPosition]) -> None:
        """Validate a selection without changing anything.

        Raises:
            SelectionError: EMPTY, NOT_FOUND, ALREADY_OCCUPIED or DUPLICATE,
                reported for the first offending seat in request order.
        """
        if not positions:
            raise SelectionError(SelectionFailure.EMPTY)
        with self._lock:
            seen: set[SeatPosition] = set()
            for position in positions:
                if position not in self._occupied:
                    raise SelectionError(SelectionFailure.NOT_FOUND, str(position))
                if self._occupied[position]:
                    raise SelectionError(SelectionFailure.ALREADY_OCCUPIED, str(position))
                if position in seen:
                    raise SelectionError(SelectionFailure.DUPLICATE, str(position))
                seen.add(position)

    def commit(self, positions: Sequence[SeatPosition]) -> None:
        """Occupy every seat in ``positions`` or none of them."""
        with self._lock:
            self.check(positions)
            for position in positions:
                self._occupied[position] = True

    def rows(self) -> list[list[tuple[SeatPosition, bool]]]:
        with self._lock:
            return [
                [
                    (SeatPosition(label, number), self._occupied[SeatPosition(label, number)])
                    for number in range(1, count + 1)
                ]
                for label, count in self._layout.rows
            ]

    def render(self) -> list[str]:
        """One line per row: ``[A1]`` for a free seat, ``[X]`` for a taken one."""
        return [
            " ".join("[X]" if taken else f"[{position}]" for position, taken in row)
            for row in self.rows()
        ]
