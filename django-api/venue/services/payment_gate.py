"""Simulated payment settlement.

A settlement thread stands in for the bank round trip (two random delays)
while a liveness thread reports progress until settlement finishes. The
caller joins both, waits a fixed grace delay, and only then treats the
charge as settled. There is no real failure path: the only outcome other
than success is an interruption.
"""

import logging
import random
import threading
from collections.abc import Callable
from enum import Enum

from venue.conf import GateSettings
from venue.domain.errors import GateFailedError
from venue.domain.value_objects import Money

logger = logging.getLogger(__name__)

SPINNER = "|/-\\"


class GateOutcome(Enum):
    SUCCESS = "success"
    INTERRUPTED = "interrupted"


def log_progress(label: str, tick: int) -> None:
    logger.debug("%s %s", label, SPINNER[tick % len(SPINNER)])


class PaymentGate:
    """Runs one simulated settlement per call to ``settle``."""

    def __init__(
        self,
        settings: GateSettings,
        rng: random.Random | None = None,
        progress: Callable[[str, int], None] = log_progress,
        label: str = "Processing",
    ) -> None:
        self._settings = settings
        self._rng = rng or random.Random()
        self._progress = progress
        self._label = label
        self._active: set[threading.Event] = set()
        self._active_lock = threading.Lock()

    @property
    def in_flight(self) -> int:
        """Number of settlements currently running."""
        with self._active_lock:
            return len(self._active)

    def interrupt(self) -> None:
        """Interrupt every settlement currently in flight."""
        with self._active_lock:
            for stop in self._active:
                stop.set()

    def settle(self, amount: Money) -> GateOutcome:
        stop = threading.Event()
        with self._active_lock:
            self._active.add(stop)
        try:
            return self._run(amount, stop)
        finally:
            with self._active_lock:
                self._active.discard(stop)

    def charge(self, amount: Money) -> None:
        """Settle ``amount`` or raise.

        Raises:
            GateFailedError: If the settlement was interrupted.
        """
        if self.settle(amount) is not GateOutcome.SUCCESS:
            raise GateFailedError()

    def _delay(self) -> float:
        low, high = self._settings.settlement_delay_range
        return self._rng.uniform(low, high)

    def _run(self, amount: Money, stop: threading.Event) -> GateOutcome:
        outcome = [GateOutcome.SUCCESS]

        def settlement() -> None:
            logger.info("Connecting to bank for %s", amount)
            if stop.wait(self._delay()):
                outcome[0] = GateOutcome.INTERRUPTED
                return
            logger.info("Charging %s", amount)
            if stop.wait(self._delay()):
                outcome[0] = GateOutcome.INTERRUPTED
                return
            logger.info("Transaction finished")

        settlement_thread = threading.Thread(target=settlement, name="gate-settlement", daemon=True)

        def liveness() -> None:
            tick = 0
            while settlement_thread.is_alive():
                self._progress(self._label, tick)
                tick += 1
                settlement_thread.join(self._settings.liveness_poll_interval or None)

        liveness_thread = threading.Thread(target=liveness, name="gate-liveness", daemon=True)

        settlement_thread.start()
        liveness_thread.start()
        settlement_thread.join()
        liveness_thread.join()

        if outcome[0] is GateOutcome.INTERRUPTED:
            logger.warning("Settlement of %s was interrupted", amount)
            return outcome[0]
        if stop.wait(self._settings.grace_delay):
            logger.warning("Settlement of %s was interrupted", amount)
            return GateOutcome.INTERRUPTED
        return GateOutcome.SUCCESS
