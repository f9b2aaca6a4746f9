"""Product record held by the catalog.

Products are created when the catalog is seeded and afterwards change only
through the store's atomic stock adjustment. ``quantity`` is the stock level
and never goes negative.
"""

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator

StockQuantity = Annotated[StrictInt, Field(ge=0)]


def is_stock_quantity(value: Any) -> bool:
    """True when ``value`` is an integer usable as a stock level (bools excluded)."""
    return isinstance(value, int) and not isinstance(value, bool)


class Product(BaseModel):
    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    id: StrictStr
    name: StrictStr = ""
    description: StrictStr = ""
    price: Annotated[float, Field(ge=0, strict=True)] = 0.0
    quantity: StockQuantity = 0

    @field_validator("id")
    @classmethod
    def id_must_not_be_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Product id must be a non-empty string")
        return value
