"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance keeps its own state; nothing is shared across
users, since the server is the only source of truth for stock levels.
"""

from dataclasses import dataclass, field


@dataclass
class StockState:
    """Tracks the products a simulated stock clerk works on."""

    product_ids: list[str] = field(default_factory=list)
    last_quantity: dict[str, int] = field(default_factory=dict)
    updates: int = 0
    rejected: int = 0
