"""Process-wide service graph.

Locks live on the calendar and on each seat matrix, so every request must
see the same instances; views fetch them through ``get_services``.
"""

import random
import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from venue.conf import VenueSettings, local_now, venue_settings
from venue.domain.models import Account, Occupation, Resource
from venue.services.account_service import AccountService
from venue.services.concession_service import ConcessionService
from venue.services.fulfillment import FulfillmentPipeline
from venue.services.payment_gate import PaymentGate
from venue.services.reservation_service import ReservationService
from venue.services.scheduling_service import SchedulingService
from venue.stores import codec
from venue.stores.interfaces import DurableStore
from venue.stores.memory_store import InMemoryDurableStore
from venue.stores.snapshot_repository import SnapshotRepository

RESOURCES_KEY = "resources"
OCCUPATIONS_KEY = "occupations"
ACCOUNTS_KEY = "accounts"


@dataclass
class Services:
    store: DurableStore
    accounts: AccountService
    scheduling: SchedulingService
    reservations: ReservationService
    concessions: ConcessionService
    pipeline: FulfillmentPipeline
    ticket_gate: PaymentGate
    concession_gate: PaymentGate

    def shutdown(self) -> None:
        """Abandon background orders and interrupt payments in flight."""
        self.pipeline.shutdown()
        self.ticket_gate.interrupt()
        self.concession_gate.interrupt()


def make_store(backend: str) -> DurableStore:
    if backend == "memory":
        return InMemoryDurableStore()
    if backend == "django":
        from venue.stores.django_store import DjangoDurableStore

        return DjangoDurableStore()
    raise ValueError(f"Unknown store backend: {backend}")


def build_services(
    config: VenueSettings | None = None,
    store: DurableStore | None = None,
    clock: Callable[[], datetime] = local_now,
    rng: random.Random | None = None,
) -> Services:
    config = config or venue_settings()
    store = store or make_store(config.store)
    rng = rng or random.Random()

    resources: SnapshotRepository[Resource] = SnapshotRepository(
        store, RESOURCES_KEY, lambda r: r.id.value, codec.encode_resource, codec.decode_resource
    )
    if not resources.list():
        for resource in config.resources:
            resources.upsert(resource)
    occupations: SnapshotRepository[Occupation] = SnapshotRepository(
        store, OCCUPATIONS_KEY, lambda o: o.id.value, codec.encode_occupation, codec.decode_occupation
    )
    account_repo: SnapshotRepository[Account] = SnapshotRepository(
        store, ACCOUNTS_KEY, lambda a: a.nickname, codec.encode_account, codec.decode_account
    )

    accounts = AccountService(account_repo)
    accounts.ensure_default_admin()
    scheduling = SchedulingService(resources, occupations, config.buffer)
    pipeline = FulfillmentPipeline(store, config.pipeline, clock=clock, rng=rng)
    ticket_gate = PaymentGate(config.ticket_gate, rng=rng, label="Processing")
    concession_gate = PaymentGate(config.concession_gate, rng=rng, label="Validating")
    reservations = ReservationService(
        scheduling,
        occupations,
        store,
        ticket_gate,
        config.ticket_price,
    )
    concessions = ConcessionService(
        store,
        accounts,
        concession_gate,
        pipeline,
        clock=clock,
    )
    concessions.seed_prices()
    return Services(
        store=store,
        accounts=accounts,
        scheduling=scheduling,
        reservations=reservations,
        concessions=concessions,
        pipeline=pipeline,
        ticket_gate=ticket_gate,
        concession_gate=concession_gate,
    )


_services: Services | None = None
_services_lock = threading.Lock()


def get_services() -> Services:
    global _services
    with _services_lock:
        if _services is None:
            _services = build_services()
        return _services


def set_services(services: Services | None) -> None:
    """Replace the process-wide graph; ``None`` rebuilds it lazily."""
    global _services
    with _services_lock:
        if _services is not None and _services is not services:
            _services.shutdown()
        _services = services
