"""In-memory publisher for development and testing.

Keeps every delivered event in ``events`` instead of talking to a broker.
It can be told to fail on connect or on delivery, which makes broker
outages reproducible without a real Redis.
"""

import threading

from catalog.exceptions import PublisherUnavailable
from catalog.product.events import StockChanged
from catalog.publisher.port import EventPublisher


class FakePublisher(EventPublisher):
    backend = "memory"

    def __init__(self, max_workers: int = 4, connect_error: str | None = None) -> None:
        super().__init__(max_workers=max_workers)
        self.connect_error = connect_error
        self.should_succeed: bool = True
        self.failure_reason: str = "Broker unreachable"
        self.events: list[StockChanged] = []
        self._events_lock = threading.Lock()

    def configure(self, should_succeed: bool, failure_reason: str = "Broker unreachable") -> None:
        """Configure delivery behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def _connect(self) -> None:
        if self.connect_error:
            raise PublisherUnavailable(self.backend, self.connect_error)

    def _send(self, event: StockChanged) -> None:
        if not self.should_succeed:
            raise PublisherUnavailable(self.backend, self.failure_reason)
        with self._events_lock:
            self.events.append(event)
