"""Order value object."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Order:
    """A placed order.

    Attributes:
        member_id: Ordering member.
        item_name: Ordered item.
        item_price: List price.
        discount_price: Discount granted by the discount policy.
    """

    member_id: int
    item_name: str
    item_price: int
    discount_price: int

    def calculate_price(self) -> int:
        """Price after discount."""
        return self.item_price - self.discount_price
