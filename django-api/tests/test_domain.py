"""Unit tests for domain primitives.

These test invariants that must hold at construction time.
Run with: pytest tests/test_domain.py -v
"""

from datetime import datetime
from decimal import Decimal

import pytest

from venue.domain import (
    Account,
    Capacity,
    CustomerProfile,
    HandlerProfile,
    Interval,
    Money,
    OccupationId,
    OrderKey,
    ResourceId,
    Role,
    SeatLayout,
    SeatPosition,
)


class TestMoney:
    """Tests for Money value object."""

    def test_money_accepts_positive_amount(self):
        """Money can be created with positive amount."""
        assert Money(Decimal("60.00")).amount == Decimal("60.00")

    def test_money_accepts_zero(self):
        """Money can be created with zero."""
        assert Money.of(0).amount == 0

    def test_money_rejects_negative_amount(self):
        """Money raises ValueError for negative amount."""
        with pytest.raises(ValueError):
            Money(Decimal("-0.01"))

    def test_money_str_format(self):
        """Money string representation is formatted to 2 decimal places."""
        assert str(Money.of("230")) == "230.00"

    def test_money_times_and_add(self):
        """Money multiplies by a count and adds exactly."""
        assert Money.of("60.00").times(3) == Money.of("180.00")
        assert Money.of("0.10") + Money.of("0.20") == Money.of("0.30")


class TestCapacity:
    """Tests for Capacity value object."""

    def test_capacity_accepts_zero(self):
        """Capacity can be created with zero."""
        assert Capacity(0).value == 0

    def test_capacity_rejects_negative_value(self):
        """Capacity raises ValueError for negative value."""
        with pytest.raises(ValueError):
            Capacity(-1)


class TestSeatPosition:
    """Tests for SeatPosition parsing."""

    @pytest.mark.parametrize(
        "token,row,number",
        [("A1", "A", 1), ("b4", "B", 4), (" C15 ", "C", 15)],
    )
    def test_parse_valid_tokens(self, token, row, number):
        """Row letter followed by digits parses, case-insensitively."""
        assert SeatPosition.parse(token) == SeatPosition(row, number)

    @pytest.mark.parametrize("token", ["", "1A", "AA1", "A", "A0", "A-1", "Ñ3"])
    def test_parse_rejects_malformed_tokens(self, token):
        """Anything else raises ValueError."""
        with pytest.raises(ValueError):
            SeatPosition.parse(token)

    def test_str_round_trips_token(self):
        """str() renders the compact token."""
        assert str(SeatPosition("H", 12)) == "H12"


class TestSeatLayout:
    """Tests for SeatLayout."""

    def test_uniform_layout_capacity(self):
        """Uniform layout has rows x seats positions."""
        layout = SeatLayout.uniform("ABC", 5)
        assert layout.capacity == Capacity(15)
        assert layout.positions()[0] == SeatPosition("A", 1)
        assert layout.positions()[-1] == SeatPosition("C", 5)

    def test_irregular_layout(self):
        """Rows may have different lengths."""
        layout = SeatLayout(rows=(("A", 4), ("B", 6)))
        assert layout.capacity.value == 10

    def test_duplicate_row_labels_rejected(self):
        """Row labels must be unique."""
        with pytest.raises(ValueError):
            SeatLayout(rows=(("A", 4), ("A", 6)))

    def test_empty_layout_rejected(self):
        with pytest.raises(ValueError):
            SeatLayout(rows=())


class TestIdentifiers:
    """Tests for derived identifiers."""

    def test_occupation_id_is_derived_from_initials_start_and_room(self):
        """OccupationId encodes who scheduled it, when it starts and where."""
        occupation_id = OccupationId.build("EA", datetime(2026, 10, 17, 14, 0), ResourceId("A"))
        assert occupation_id.value == "EA:20261017:1400:A"

    def test_order_key_is_derived_from_initials_and_minute(self):
        """OrderKey ignores seconds."""
        first = OrderKey.build("EA", datetime(2026, 10, 17, 15, 30, 1))
        second = OrderKey.build("EA", datetime(2026, 10, 17, 15, 30, 59))
        assert first == second
        assert first.value == "EA:20261017:1530"

    def test_resource_id_normalises_case(self):
        assert ResourceId.from_string(" vip ") == ResourceId("VIP")

    def test_resource_id_rejects_blank(self):
        with pytest.raises(ValueError):
            ResourceId.from_string("   ")


class TestInterval:
    def test_end_is_start_plus_duration(self):
        interval = Interval(datetime(2026, 10, 17, 14, 0), 120)
        assert interval.ends_at == datetime(2026, 10, 17, 16, 0)

    def test_non_positive_duration_rejected(self):
        with pytest.raises(ValueError):
            Interval(datetime(2026, 10, 17, 14, 0), 0)


class TestAccount:
    """Tests for the flat account record."""

    def test_profile_must_match_role(self):
        """A customer cannot carry a handler profile."""
        with pytest.raises(ValueError):
            Account("x", "X", "Y", "x@y", Role.CUSTOMER, HandlerProfile())

    def test_initials_and_masked_card(self):
        account = Account("eve", "eve", "arias", "e@x", Role.CUSTOMER, CustomerProfile("4111111111111234"))
        assert account.initials == "EA"
        assert account.profile.masked_card == "*1234"
