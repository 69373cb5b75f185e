"""Concession stand: menu, pricing, checkout and hand-off to the kitchen."""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime
from decimal import InvalidOperation

from venue.conf import local_now
from venue.domain.errors import StorageError, UnknownMenuItemError
from venue.domain.models import Account, LineItem, Order
from venue.domain.value_objects import Money, OrderKey
from venue.services.account_service import AccountService
from venue.services.fulfillment import FulfillmentPipeline, history_key, notifications_key
from venue.services.payment_gate import PaymentGate
from venue.stores.interfaces import DurableStore

logger = logging.getLogger(__name__)

PRICES_KEY = "product_prices"


@dataclass(frozen=True)
class Combo:
    code: str
    name: str
    contents: str
    price: Money


COMBOS: dict[str, Combo] = {
    combo.code: combo
    for combo in (
        Combo("A", "Amix Combo", "Popcorn and two jumbo sodas", Money.of("180.00")),
        Combo("B", "Nachos Combo", "Popcorn, two sodas and jumbo nachos", Money.of("200.00")),
        Combo("C", "Good Trio Combo", "Popcorn, three sodas and mega nachos", Money.of("230.00")),
        Combo("D", "Whatcha Lookin At Combo", "Popcorn, soda and jumbo nachos", Money.of("150.00")),
    )
}

DEFAULT_PRICES: dict[str, str] = {
    "POPCORN_MEDIUM": "55.00",
    "POPCORN_LARGE": "70.00",
    "POPCORN_JUMBO": "85.00",
    "POPCORN_MEGA": "100.00",
    "SODA_MEDIUM": "40.00",
    "SODA_LARGE": "50.00",
    "SODA_JUMBO": "60.00",
    "SODA_MEGA": "70.00",
    "NACHOS_PERSONAL": "55.00",
    "NACHOS_JUMBO": "75.00",
    "NACHOS_MEGA": "90.00",
}


@dataclass(frozen=True)
class ItemRequest:
    """One custom line: a product, a size and an optional flavor."""

    product: str
    size: str
    flavor: str = ""

    @property
    def price_key(self) -> str:
        return f"{self.product.strip().upper()}_{self.size.strip().upper()}"

    @property
    def description(self) -> str:
        parts = [self.product.strip().capitalize(), self.size.strip().upper(), self.flavor.strip()]
        return " ".join(part for part in parts if part)


def parse_price_lines(lines: Sequence[str]) -> dict[str, Money]:
    """Parse ``KEY: price`` lines. Malformed lines are skipped with a warning."""
    prices: dict[str, Money] = {}
    for line in lines:
        key, sep, value = line.partition(":")
        if not sep:
            logger.warning("Ignoring malformed price line: %r", line)
            continue
        try:
            prices[key.strip().upper()] = Money.of(value.strip())
        except (InvalidOperation, ValueError):
            logger.warning("Ignoring malformed price line: %r", line)
    return prices


class ConcessionService:
    """Service for concession orders."""

    def __init__(
        self,
        store: DurableStore,
        accounts: AccountService,
        gate: PaymentGate,
        pipeline: FulfillmentPipeline,
        clock: Callable[[], datetime] = local_now,
    ) -> None:
        self._store = store
        self._accounts = accounts
        self._gate = gate
        self._pipeline = pipeline
        self._clock = clock

    def seed_prices(self) -> None:
        """Write the default price list when none has been stored yet."""
        if not self._store.exists(PRICES_KEY):
            for key, price in DEFAULT_PRICES.items():
                self._store.append_line(PRICES_KEY, f"{key}: {price}")

    def prices(self) -> dict[str, Money]:
        try:
            return parse_price_lines(self._store.read_lines(PRICES_KEY))
        except StorageError:
            logger.exception("Could not load the price list")
            return {}

    def price_items(self, requests: Sequence[ItemRequest]) -> list[LineItem]:
        """Price custom lines against the stored price list.

        Raises:
            UnknownMenuItemError: For the first product/size without a price.
        """
        prices = self.prices()
        items = []
        for request in requests:
            price = prices.get(request.price_key)
            if price is None or price.amount <= 0:
                raise UnknownMenuItemError(request.price_key)
            items.append(LineItem(description=request.description, price=price))
        return items

    def checkout(
        self,
        customer: Account,
        combo: str | None = None,
        items: Sequence[ItemRequest] = (),
    ) -> Order:
        """Charge a combo or a custom order and send it to the kitchen.

        Raises:
            UnknownMenuItemError: If the combo or an item is not on the menu.
            GateFailedError: If the payment was interrupted.
        """
        if combo is not None:
            chosen = COMBOS.get(combo.strip().upper())
            if chosen is None:
                raise UnknownMenuItemError(combo)
            line_items = [LineItem(description=chosen.name, price=chosen.price)]
            description = chosen.name
        else:
            line_items = self.price_items(items)
            if not line_items:
                raise UnknownMenuItemError("empty order")
            description = f"Custom Order ({len(line_items)} items)"

        total = sum((item.price for item in line_items), Money.of(0))
        self._gate.charge(total)

        handler = self._accounts.first_handler()
        return self.submit_order(
            customer, handler.nickname, line_items, total, description=description
        )

    def submit_order(
        self,
        owner: Account,
        handler_id: str,
        line_items: Sequence[LineItem],
        total: Money,
        description: str | None = None,
    ) -> Order:
        """Create the order and dispatch its preparation. Returns before preparation starts."""
        created_at = self._clock()
        order = Order(
            key=OrderKey.build(owner.initials, created_at),
            owner=owner.nickname,
            handler=handler_id,
            created_at=created_at,
            description=description or ", ".join(item.description for item in line_items),
            total=total,
            items=tuple(line_items),
        )
        logger.info("Order %s accepted for %s, total %s", order.key, owner.nickname, total)
        self._pipeline.dispatch(order)
        return order

    def notifications_for(self, nickname: str) -> list[str]:
        return self._store.read_lines(notifications_key(nickname))

    def handler_history(self, nickname: str) -> list[str]:
        return self._store.read_lines(history_key(nickname))
