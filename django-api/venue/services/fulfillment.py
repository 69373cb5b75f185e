"""Background preparation of concession orders.

Each order gets its own thread and walks

    QUEUED -> ASSIGNED -> PREPARING -> FINISHING -> READY

waiting a random delay between phases. The customer's notification stream
is overwritten on QUEUED and on READY; the handler's history stream gets one
audit line on READY. A stopped pipeline writes no completion record.
"""

import logging
import random
import threading
from collections import OrderedDict
from collections.abc import Callable
from datetime import datetime
from enum import Enum

from venue.conf import PipelineSettings, local_now
from venue.domain.errors import StorageError
from venue.domain.models import Order
from venue.stores.interfaces import DurableStore

logger = logging.getLogger(__name__)

AUDIT_TIME_FORMAT = "%d/%m/%Y %H:%M:%S"
FINISHED_STAGE_LIMIT = 500


class OrderStage(Enum):
    QUEUED = "queued"
    ASSIGNED = "assigned"
    PREPARING = "preparing"
    FINISHING = "finishing"
    READY = "ready"
    INTERRUPTED = "interrupted"
    FAILED = "failed"


TERMINAL_STAGES = frozenset({OrderStage.READY, OrderStage.INTERRUPTED, OrderStage.FAILED})


def notifications_key(nickname: str) -> str:
    return f"notifications_{nickname}"


def history_key(nickname: str) -> str:
    return f"history_{nickname}"


def queued_message(order: Order) -> str:
    return (
        f"Order {order.key}: We are working hard to make your food delicious. "
        "Please wait a little longer =D"
    )


def ready_message(order: Order, finished_at: datetime) -> str:
    return (
        f"Hi, this is {order.handler}. Your concession order is ready, "
        f"you can pick it up now. {finished_at:%Y%m%d:%H%M}"
    )


def audit_line(
    order: Order,
    assigned_at: datetime,
    prep_started_at: datetime,
    finished_at: datetime,
) -> str:
    return (
        f"Order: {order.key} | Type: {order.description} | "
        f"Created: {order.created_at:{AUDIT_TIME_FORMAT}} | "
        f"Assigned: {assigned_at:{AUDIT_TIME_FORMAT}} | "
        f"Started: {prep_started_at:{AUDIT_TIME_FORMAT}} | "
        f"Finished: {finished_at:{AUDIT_TIME_FORMAT}}"
    )


class PipelineStopped(Exception):
    """Raised inside a worker when the pipeline is shut down mid-phase."""


class FulfillmentPipeline:
    """Spawns and tracks one preparation thread per order.

    Threads are forgotten once they exit. Stages of finished orders are kept
    for the most recent ``finished_limit`` orders only; the notification
    stream remains the durable record.
    """

    def __init__(
        self,
        store: DurableStore,
        settings: PipelineSettings,
        clock: Callable[[], datetime] = local_now,
        rng: random.Random | None = None,
        finished_limit: int = FINISHED_STAGE_LIMIT,
    ) -> None:
        self._store = store
        self._settings = settings
        self._clock = clock
        self._rng = rng or random.Random()
        self._stop = threading.Event()
        self._lock = threading.Lock()
        self._threads: dict[str, threading.Thread] = {}
        self._stages: dict[str, OrderStage] = {}
        self._finished: OrderedDict[str, OrderStage] = OrderedDict()
        self._finished_limit = finished_limit

    def dispatch(self, order: Order) -> threading.Thread:
        """Start preparing ``order`` in the background and return immediately."""
        thread = threading.Thread(
            target=self._work, args=(order,), name=f"order-{order.key}", daemon=True
        )
        with self._lock:
            self._threads[order.key.value] = thread
            self._finished.pop(order.key.value, None)
            self._stages[order.key.value] = OrderStage.QUEUED
        thread.start()
        return thread

    def stage_of(self, order_key: str) -> OrderStage | None:
        with self._lock:
            return self._stages.get(order_key) or self._finished.get(order_key)

    def in_flight(self) -> list[str]:
        """Keys of orders whose preparation thread is still running."""
        with self._lock:
            return sorted(self._threads)

    def join(self, timeout: float | None = None) -> None:
        """Wait for every dispatched order to finish."""
        with self._lock:
            threads = list(self._threads.values())
        for thread in threads:
            thread.join(timeout)

    def shutdown(self) -> None:
        """Abandon in-flight orders. Nothing is rolled back."""
        self._stop.set()

    def run(self, order: Order) -> None:
        """Prepare ``order`` on the calling thread.

        Raises:
            PipelineStopped: If the pipeline is shut down mid-phase.
            StorageError: If a stream write fails.
        """
        self._store.overwrite(notifications_key(order.owner), queued_message(order))
        self._advance(order, OrderStage.QUEUED)

        self._wait("assigned")
        assigned_at = self._clock()
        self._advance(order, OrderStage.ASSIGNED)

        self._wait("preparing")
        prep_started_at = self._clock()
        self._advance(order, OrderStage.PREPARING)

        self._wait("finishing")
        finished_at = self._clock()
        self._advance(order, OrderStage.FINISHING)

        self._store.overwrite(notifications_key(order.owner), ready_message(order, finished_at))
        self._store.append_line(
            history_key(order.handler),
            audit_line(order, assigned_at, prep_started_at, finished_at),
        )
        self._advance(order, OrderStage.READY)

    def _work(self, order: Order) -> None:
        try:
            self.run(order)
        except PipelineStopped:
            logger.warning("Preparation of order %s was interrupted", order.key)
            self._advance(order, OrderStage.INTERRUPTED)
        except StorageError:
            logger.exception("I/O error while recording order %s", order.key)
            self._advance(order, OrderStage.FAILED)
        finally:
            with self._lock:
                if self._threads.get(order.key.value) is threading.current_thread():
                    del self._threads[order.key.value]
            self._store.close()

    def _wait(self, phase: str) -> None:
        low, high = self._settings.phase_delay_ranges[phase]
        if self._stop.wait(self._rng.uniform(low, high)):
            raise PipelineStopped(phase)

    def _advance(self, order: Order, stage: OrderStage) -> None:
        key = order.key.value
        with self._lock:
            if stage in TERMINAL_STAGES:
                self._stages.pop(key, None)
                self._finished[key] = stage
                self._finished.move_to_end(key)
                while len(self._finished) > self._finished_limit:
                    self._finished.popitem(last=False)
            else:
                self._finished.pop(key, None)
                self._stages[key] = stage
        logger.info("Order %s is %s", order.key, stage.value)
