"""Seat reservation: select, pay, commit, issue tickets."""

import logging
from collections.abc import Sequence

from venue.domain.errors import SelectionError, SelectionFailure, StorageError
from venue.domain.models import Account, Occupation, PurchaseReceipt, Ticket
from venue.domain.value_objects import Money, SeatPosition
from venue.services.payment_gate import PaymentGate
from venue.services.scheduling_service import SchedulingService
from venue.stores.interfaces import DurableStore, Repository

logger = logging.getLogger(__name__)


def tickets_key(nickname: str) -> str:
    return f"tickets_{nickname}"


def parse_selection(tokens: str | Sequence[str]) -> list[SeatPosition]:
    """Parse ``"A1 B4 C5"`` or ``["A1", "B4"]`` keeping order and repeats.

    Raises:
        SelectionError: MALFORMED for the first unparseable token, EMPTY if
            nothing was given.
    """
    if isinstance(tokens, str):
        tokens = tokens.split()
    positions = []
    for token in tokens:
        try:
            positions.append(SeatPosition.parse(token))
        except ValueError:
            raise SelectionError(SelectionFailure.MALFORMED, token) from None
    if not positions:
        raise SelectionError(SelectionFailure.EMPTY)
    return positions


class ReservationService:
    """Service for seat purchases on a scheduled screening."""

    def __init__(
        self,
        scheduling: SchedulingService,
        occupations: Repository[Occupation],
        store: DurableStore,
        gate: PaymentGate,
        ticket_price: Money,
    ) -> None:
        self._scheduling = scheduling
        self._occupations = occupations
        self._store = store
        self._gate = gate
        self._ticket_price = ticket_price

    def seat_map(self, occupation_id: str) -> list[str]:
        return self._scheduling.get_occupation(occupation_id).seats.render()

    def purchase(
        self,
        occupation_id: str,
        selection: str | Sequence[str] | Sequence[SeatPosition],
        purchaser: Account,
    ) -> PurchaseReceipt:
        """Buy every selected seat or none.

        The selection is checked before the gate runs and checked again,
        under the matrix lock, right before the batch is committed.

        Raises:
            OccupationNotFoundError: If the screening does not exist.
            SelectionError: If any seat is malformed, missing, taken or repeated.
            GateFailedError: If the payment was interrupted.
        """
        occupation = self._scheduling.get_occupation(occupation_id)
        positions = self._positions(selection)
        occupation.seats.check(positions)

        total = self._ticket_price.times(len(positions))
        self._gate.charge(total)

        try:
            occupation.seats.commit(positions)
        except SelectionError:
            logger.warning(
                "Seats for %s were taken while %s was paying", occupation.id, purchaser.nickname
            )
            raise

        tickets = tuple(
            Ticket(receipt_id=f"{occupation.id}:{position}", seat=position)
            for position in positions
        )
        for ticket in tickets:
            try:
                self._store.append_line(
                    tickets_key(purchaser.nickname),
                    f"Ticket: {ticket.receipt_id} | {occupation.title}",
                )
            except StorageError:
                logger.exception("Could not record ticket %s", ticket.receipt_id)
        self._occupations.upsert(occupation)

        logger.info(
            "%s bought %d seat(s) for %s, total %s",
            purchaser.nickname, len(tickets), occupation.id, total,
        )
        return PurchaseReceipt(
            occupation_id=occupation.id,
            title=occupation.title,
            starts_at=occupation.starts_at,
            resource_id=occupation.resource_id,
            purchaser=purchaser.full_name,
            tickets=tickets,
            total=total,
            card=getattr(purchaser.profile, "masked_card", ""),
        )

    def tickets_for(self, nickname: str) -> list[str]:
        return self._store.read_lines(tickets_key(nickname))

    def ticket_count(self, nickname: str) -> int:
        if not self._store.exists(tickets_key(nickname)):
            return 0
        return len(self.tickets_for(nickname))

    @staticmethod
    def _positions(selection) -> list[SeatPosition]:
        if selection and all(isinstance(item, SeatPosition) for item in selection):
            return list(selection)
        return parse_selection(selection)
