"""Event publisher port.

Publishing is best-effort and fire-and-forget: ``publish()`` hands the event
to a small worker pool and returns at once. Delivery errors are logged and
counted, never raised to the caller, and failed events are not retried.

Adapters implement only the broker-specific hooks (``_connect``, ``_send``,
``_disconnect``); connection lifecycle, dispatch and bookkeeping live here.
"""

import threading
from abc import ABC, abstractmethod
from concurrent.futures import Future, ThreadPoolExecutor, wait

from catalog.product.events import StockChanged
from catalog.utils.logging import get_logger

logger = get_logger(__name__)


class EventPublisher(ABC):
    """Best-effort stock-change event publisher."""

    backend = "abstract"

    def __init__(self, max_workers: int = 4) -> None:
        self._max_workers = max_workers
        self._executor: ThreadPoolExecutor | None = None
        self._connected = False
        self._closed = False
        self._state_lock = threading.Lock()
        self._stats_lock = threading.Lock()
        self._pending: set[Future] = set()
        self._stats = {"published": 0, "failed": 0, "dropped": 0}

    # -------------------------------------------------------------------
    # Broker hooks
    # -------------------------------------------------------------------
    @abstractmethod
    def _connect(self) -> None:
        """Open the broker connection. Raise on failure."""
        ...

    @abstractmethod
    def _send(self, event: StockChanged) -> None:
        """Deliver one event to the broker. Raise on failure."""
        ...

    def _disconnect(self) -> None:
        """Release the broker connection."""

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    @property
    def connected(self) -> bool:
        return self._connected

    def init(self) -> bool:
        """Connect to the broker once.

        A later call after a failed attempt retries the connection; a call
        after a successful one is a no-op. Never raises.
        """
        with self._state_lock:
            if self._connected:
                return True
            if self._closed:
                logger.warning("publisher_init_after_close", backend=self.backend)
                return False
            try:
                self._connect()
            except Exception as exc:
                logger.warning("publisher_init_failed", backend=self.backend, error=str(exc))
                return False
            self._executor = ThreadPoolExecutor(
                max_workers=self._max_workers,
                thread_name_prefix=f"{self.backend}-publisher",
            )
            self._connected = True

        logger.info("publisher_initialized", backend=self.backend)
        return True

    def close(self) -> None:
        """Wait for in-flight events, stop the workers and disconnect."""
        with self._state_lock:
            if self._closed:
                return
            self._closed = True
            self._connected = False
            executor, self._executor = self._executor, None

        if executor is not None:
            executor.shutdown(wait=True)
            try:
                self._disconnect()
            except Exception as exc:
                logger.warning("publisher_disconnect_failed", backend=self.backend, error=str(exc))

        logger.info("publisher_closed", backend=self.backend, **self._snapshot_stats())

    # -------------------------------------------------------------------
    # Publishing
    # -------------------------------------------------------------------
    def publish(self, event: StockChanged) -> None:
        """Dispatch ``event`` without waiting for delivery."""
        executor = self._executor
        if not self._connected or executor is None:
            self._drop(event, reason="not connected")
            return

        try:
            future = executor.submit(self._deliver, event)
        except RuntimeError:
            # Executor shut down between the check above and the submit.
            self._drop(event, reason="publisher closed")
            return

        with self._stats_lock:
            self._pending.add(future)
        future.add_done_callback(self._forget)

    def flush(self, timeout: float | None = None) -> bool:
        """Block until in-flight events are handled. True if none remain."""
        with self._stats_lock:
            pending = set(self._pending)
        if not pending:
            return True
        _, not_done = wait(pending, timeout=timeout)
        return not not_done

    def health(self) -> dict:
        return {
            "backend": self.backend,
            "connected": self._connected,
            **self._snapshot_stats(),
        }

    # -------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------
    def _deliver(self, event: StockChanged) -> None:
        try:
            self._send(event)
        except Exception as exc:
            self._count("failed")
            logger.error(
                "stock_event_publish_failed",
                backend=self.backend,
                event_id=event.event_id,
                product_id=event.product_id,
                error=str(exc),
            )
            return

        self._count("published")
        logger.debug(
            "stock_event_published",
            backend=self.backend,
            event_id=event.event_id,
            product_id=event.product_id,
            new_quantity=event.new_quantity,
        )

    def _drop(self, event: StockChanged, reason: str) -> None:
        self._count("dropped")
        logger.warning(
            "publisher_unavailable",
            backend=self.backend,
            reason=reason,
            event_id=event.event_id,
            product_id=event.product_id,
        )

    def _forget(self, future: Future) -> None:
        with self._stats_lock:
            self._pending.discard(future)

    def _count(self, key: str) -> None:
        with self._stats_lock:
            self._stats[key] += 1

    def _snapshot_stats(self) -> dict:
        with self._stats_lock:
            return {**self._stats, "pending": len(self._pending)}
