"""Redis Streams publisher.

Each stock change becomes one stream entry ``{"type": ..., "data": <json>}``
on the configured stream, trimmed approximately to ``maxlen`` entries.
Socket and connect timeouts bound every broker call, so a slow or absent
Redis can only delay a worker thread, never a request.
"""

import redis

from catalog.exceptions import PublisherUnavailable
from catalog.product.events import StockChanged
from catalog.publisher.port import EventPublisher


class RedisStreamPublisher(EventPublisher):
    backend = "redis"

    def __init__(
        self,
        url: str,
        stream: str,
        timeout: float = 2.0,
        maxlen: int | None = 10_000,
        max_workers: int = 4,
    ) -> None:
        super().__init__(max_workers=max_workers)
        self.url = url
        self.stream = stream
        self.timeout = timeout
        self.maxlen = maxlen
        self._client: redis.Redis | None = None

    def _connect(self) -> None:
        client = redis.Redis.from_url(
            self.url,
            socket_timeout=self.timeout,
            socket_connect_timeout=self.timeout,
        )
        try:
            client.ping()
        except redis.RedisError as exc:
            client.close()
            raise PublisherUnavailable(self.backend, str(exc)) from exc
        self._client = client

    def _send(self, event: StockChanged) -> None:
        if self._client is None:
            raise PublisherUnavailable(self.backend, "no connection")
        try:
            self._client.xadd(
                self.stream,
                {"type": event.event_type, "data": event.to_json()},
                maxlen=self.maxlen,
                approximate=True,
            )
        except redis.RedisError as exc:
            raise PublisherUnavailable(self.backend, str(exc)) from exc

    def _disconnect(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def health(self) -> dict:
        return {**super().health(), "stream": self.stream}
