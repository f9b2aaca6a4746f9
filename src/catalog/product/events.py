"""Stock-change event emitted after a successful stock update.

Events are immutable facts built only after the store has applied the new
quantity. On the wire they use camelCase keys and an ISO-8601 timestamp.
"""

from datetime import UTC, datetime
from typing import ClassVar
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class StockChanged(BaseModel):
    """The stock level of a product was set to a new value."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    event_type: ClassVar[str] = "Catalog.StockChanged.v1"

    product_id: str
    previous_quantity: int
    new_quantity: int
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    event_id: str = Field(default_factory=lambda: str(uuid4()))

    def to_message(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)
