"""Stock-change event publisher factory.

``build_publisher()`` picks the adapter named by ``EVENT_BROKER``:
- RedisStreamPublisher for deployments (``redis``)
- FakePublisher for local development and tests (``memory``)
"""

from catalog.config import Settings
from catalog.publisher.fake_adapter import FakePublisher
from catalog.publisher.port import EventPublisher
from catalog.publisher.redis_adapter import RedisStreamPublisher


def build_publisher(settings: Settings) -> EventPublisher:
    """Return an unconnected publisher for the configured broker."""
    if settings.event_broker == "memory":
        return FakePublisher(max_workers=settings.publish_workers)
    return RedisStreamPublisher(
        url=settings.redis_url,
        stream=settings.stock_events_stream,
        timeout=settings.publish_timeout,
        maxlen=settings.stream_maxlen,
        max_workers=settings.publish_workers,
    )


__all__ = ["EventPublisher", "FakePublisher", "RedisStreamPublisher", "build_publisher"]
