"""Pytest configuration and shared fixtures."""

import random
from dataclasses import replace
from datetime import datetime, timedelta

import pytest
from rest_framework.test import APIClient

from venue.conf import GateSettings, PipelineSettings, venue_settings
from venue.container import build_services, set_services
from venue.domain.models import (
    Account,
    AdministratorProfile,
    CustomerProfile,
    HandlerProfile,
    Role,
)
from venue.stores.memory_store import InMemoryDurableStore

ZERO_GATE = GateSettings(settlement_delay_range=(0.0, 0.0), liveness_poll_interval=0.0, grace_delay=0.0)
ZERO_PIPELINE = PipelineSettings(
    phase_delay_ranges={"assigned": (0.0, 0.0), "preparing": (0.0, 0.0), "finishing": (0.0, 0.0)}
)


class TickingClock:
    """Clock that returns ``start`` and then moves ``step`` forward on every read."""

    def __init__(self, start: datetime, step: timedelta = timedelta(0)) -> None:
        self.now = start
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + self.step
        return current


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def reset_services():
    set_services(None)
    yield
    set_services(None)


@pytest.fixture
def fast_settings():
    return replace(
        venue_settings(),
        ticket_gate=ZERO_GATE,
        concession_gate=ZERO_GATE,
        pipeline=ZERO_PIPELINE,
    )


@pytest.fixture
def store() -> InMemoryDurableStore:
    return InMemoryDurableStore()


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock(datetime(2026, 10, 17, 15, 30, 5))


@pytest.fixture
def services(fast_settings, store, clock):
    built = build_services(config=fast_settings, store=store, clock=clock, rng=random.Random(7))
    yield built
    built.shutdown()
    built.pipeline.join(timeout=5)


@pytest.fixture
def installed_services(services):
    set_services(services)
    return services


@pytest.fixture
def admin() -> Account:
    return Account(
        nickname="erin",
        first_name="Erin",
        last_name="Avila",
        email="erin@venue.example",
        role=Role.ADMINISTRATOR,
        profile=AdministratorProfile(),
    )


@pytest.fixture
def customer() -> Account:
    return Account(
        nickname="eve",
        first_name="Eve",
        last_name="Arias",
        email="eve@example.com",
        role=Role.CUSTOMER,
        profile=CustomerProfile(card_number="4111111111111234"),
    )


@pytest.fixture
def handler() -> Account:
    return Account(
        nickname="hank",
        first_name="Hank",
        last_name="Ruiz",
        email="hank@venue.example",
        role=Role.CONCESSION_HANDLER,
        profile=HandlerProfile(),
    )


@pytest.fixture
def registered(services, admin, customer, handler):
    for account in (admin, customer, handler):
        services.accounts.register(account)
    return services
