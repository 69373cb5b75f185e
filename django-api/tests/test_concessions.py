"""Tests for the concession stand: menu, pricing and checkout.

Run with: pytest tests/test_concessions.py -v
"""

import pytest

from venue.domain.errors import GateFailedError, UnknownMenuItemError
from venue.domain.value_objects import Money
from venue.services.account_service import SYSTEM_HANDLER
from venue.services.concession_service import (
    COMBOS,
    PRICES_KEY,
    ItemRequest,
    parse_price_lines,
)
from venue.services.fulfillment import OrderStage, history_key, notifications_key


class FailingGate:
    def __init__(self) -> None:
        self.charges = []

    def charge(self, amount):
        self.charges.append(amount)
        raise GateFailedError()


class TestMenu:
    """Tests for the combo table and the stored price list."""

    def test_combo_prices(self):
        assert {code: str(combo.price) for code, combo in COMBOS.items()} == {
            "A": "180.00",
            "B": "200.00",
            "C": "230.00",
            "D": "150.00",
        }

    def test_default_prices_are_seeded_once(self, services, store):
        before = store.read_lines(PRICES_KEY)
        services.concessions.seed_prices()
        assert store.read_lines(PRICES_KEY) == before
        assert services.concessions.prices()["POPCORN_JUMBO"] == Money.of("85.00")

    def test_malformed_price_lines_are_skipped(self):
        prices = parse_price_lines(["SODA_MEGA: 70", "garbage", "NACHOS_MEGA: lots", " popcorn_medium : 55.5 "])
        assert prices == {"SODA_MEGA": Money.of("70"), "POPCORN_MEDIUM": Money.of("55.50")}

    def test_item_request_description(self):
        item = ItemRequest(product="popcorn", size="jumbo", flavor="Caramel")
        assert item.price_key == "POPCORN_JUMBO"
        assert item.description == "Popcorn JUMBO Caramel"


class TestCheckout:
    """Tests for ConcessionService.checkout."""

    def test_combo_order_key_and_total(self, registered, customer):
        """Combo C at 15:30:05 for Eve Arias is EA:20261017:1530 at 230.00."""
        order = registered.concessions.checkout(customer, combo="c")
        assert order.key.value == "EA:20261017:1530"
        assert order.total == Money.of("230.00")
        assert order.description == "Good Trio Combo"
        assert order.owner == "eve"

    def test_order_key_is_stable_within_the_minute(self, registered, customer, clock):
        first = registered.concessions.checkout(customer, combo="A")
        clock.now = clock.now.replace(second=59)
        second = registered.concessions.checkout(customer, combo="B")
        assert first.key == second.key

    def test_custom_order_is_priced_from_the_list(self, registered, customer):
        order = registered.concessions.checkout(
            customer,
            items=[ItemRequest("popcorn", "large", "Butter"), ItemRequest("soda", "medium")],
        )
        assert order.total == Money.of("110.00")
        assert order.description == "Custom Order (2 items)"
        assert [item.description for item in order.items] == ["Popcorn LARGE Butter", "Soda MEDIUM"]

    def test_updated_price_list_is_used(self, registered, customer, store):
        store.overwrite(PRICES_KEY, "SODA_MEDIUM: 45.50")
        order = registered.concessions.checkout(customer, items=[ItemRequest("soda", "medium")])
        assert order.total == Money.of("45.50")

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"combo": "Z"},
            {"items": [ItemRequest("popcorn", "tiny")]},
            {"items": []},
        ],
    )
    def test_unknown_items_are_rejected(self, registered, customer, kwargs):
        with pytest.raises(UnknownMenuItemError):
            registered.concessions.checkout(customer, **kwargs)

    def test_first_registered_handler_gets_the_order(self, registered, customer, handler):
        order = registered.concessions.checkout(customer, combo="D")
        assert order.handler == handler.nickname

    def test_system_handler_when_none_registered(self, services, customer):
        services.accounts.register(customer)
        order = services.concessions.checkout(customer, combo="D")
        assert order.handler == SYSTEM_HANDLER.nickname

    def test_interrupted_payment_creates_no_order(self, registered, customer, store):
        gate = FailingGate()
        registered.concessions._gate = gate
        with pytest.raises(GateFailedError):
            registered.concessions.checkout(customer, combo="A")
        assert gate.charges == [Money.of("180.00")]
        assert not store.exists(notifications_key("eve"))


class TestFulfillmentHandOff:
    """The order reaches the customer's and the handler's streams."""

    def test_order_completes_in_background(self, registered, customer, handler):
        order = registered.concessions.checkout(customer, combo="C")
        registered.pipeline.join(timeout=5)

        assert registered.pipeline.stage_of(order.key.value) is OrderStage.READY
        notifications = registered.concessions.notifications_for("eve")
        assert len(notifications) == 1
        assert notifications[0].startswith("Hi, this is hank.")
        history = registered.concessions.handler_history("hank")
        assert len(history) == 1
        assert history[0].startswith("Order: EA:20261017:1530 | Type: Good Trio Combo |")

    def test_streams_use_nickname_keys(self, registered, customer, store):
        registered.concessions.checkout(customer, combo="A")
        registered.pipeline.join(timeout=5)
        assert store.exists(notifications_key("eve"))
        assert store.exists(history_key("hank"))
