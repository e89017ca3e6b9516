"""Per-user state for Locust scenarios.

Each simulated user keeps its own ids; nothing is shared across users
except the seller catalogue published at test start.
"""

from dataclasses import dataclass, field


@dataclass
class BuyerState:
    buyer_id: str
    address_id: str | None = None
    order_ids: list[str] = field(default_factory=list)
    out_of_stock: int = 0


@dataclass
class SellerState:
    seller_id: str
    product_ids: list[str] = field(default_factory=list)
    handled_orders: set[str] = field(default_factory=set)
