"""Unit tests for the seat matrix.

Run with: pytest tests/test_seating.py -v
"""

import threading

import pytest

from venue.domain import SeatLayout, SeatMatrix, SeatPosition
from venue.domain.errors import SelectionError, SelectionFailure

A1 = SeatPosition("A", 1)
A2 = SeatPosition("A", 2)
B5 = SeatPosition("B", 5)


@pytest.fixture
def matrix() -> SeatMatrix:
    return SeatMatrix.from_layout(SeatLayout.uniform("ABC", 5))


class TestSelection:
    """Tests for SeatMatrix.check."""

    def test_free_seats_pass(self, matrix):
        matrix.check([A1, B5])

    def test_seat_outside_layout_is_not_found(self, matrix):
        with pytest.raises(SelectionError) as excinfo:
            matrix.check([A1, SeatPosition("A", 6)])
        assert excinfo.value.reason is SelectionFailure.NOT_FOUND
        assert excinfo.value.token == "A6"

    def test_repeated_seat_is_duplicate(self, matrix):
        """Selecting A1 twice is rejected as a duplicate."""
        with pytest.raises(SelectionError) as excinfo:
            matrix.check([A1, A1])
        assert excinfo.value.reason is SelectionFailure.DUPLICATE

    def test_occupied_seat_is_rejected(self, matrix):
        matrix.commit([A1])
        with pytest.raises(SelectionError) as excinfo:
            matrix.check([A2, A1])
        assert excinfo.value.reason is SelectionFailure.ALREADY_OCCUPIED

    def test_empty_selection_is_rejected(self, matrix):
        with pytest.raises(SelectionError) as excinfo:
            matrix.check([])
        assert excinfo.value.reason is SelectionFailure.EMPTY


class TestCommit:
    """Tests for SeatMatrix.commit."""

    def test_commit_occupies_every_seat(self, matrix):
        matrix.commit([A1, B5])
        assert matrix.occupied_positions() == [A1, B5]
        assert matrix.free_count == 13

    def test_failed_commit_changes_nothing(self, matrix):
        """A batch with one taken seat leaves the free seats free."""
        matrix.commit([B5])
        with pytest.raises(SelectionError):
            matrix.commit([A1, A2, B5])
        assert matrix.occupied_positions() == [B5]

    def test_rejection_of_occupied_seat_is_idempotent(self, matrix):
        """Repeated attempts on an occupied seat fail the same way and change nothing."""
        matrix.commit([A1])
        before = matrix.render()
        for _ in range(3):
            with pytest.raises(SelectionError) as excinfo:
                matrix.commit([A1])
            assert excinfo.value.reason is SelectionFailure.ALREADY_OCCUPIED
        assert matrix.render() == before

    def test_concurrent_commits_on_same_seat_admit_one(self, matrix):
        """Only one of many racing purchasers gets the seat."""
        barrier = threading.Barrier(8)
        wins = []
        losses = []

        def attempt():
            barrier.wait()
            try:
                matrix.commit([A1, A2])
                wins.append(1)
            except SelectionError:
                losses.append(1)

        threads = [threading.Thread(target=attempt) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        assert len(wins) == 1
        assert len(losses) == 7

    def test_restored_matrix_keeps_occupied_seats(self):
        restored = SeatMatrix(SeatLayout.uniform("AB", 2), occupied=[A2])
        assert restored.is_occupied(A2)
        assert not restored.is_occupied(A1)

    def test_restored_matrix_rejects_unknown_seat(self):
        with pytest.raises(ValueError):
            SeatMatrix(SeatLayout.uniform("A", 2), occupied=[B5])


class TestRender:
    def test_render_marks_taken_seats(self):
        matrix = SeatMatrix.from_layout(SeatLayout(rows=(("A", 3), ("B", 2))))
        matrix.commit([SeatPosition("A", 2)])
        assert matrix.render() == ["[A1] [X] [A3]", "[B1] [B2]"]
