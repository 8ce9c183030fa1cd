"""Order service capability and its default implementation."""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from hello_core.member import MemberRepository

from .discount import DiscountPolicy
from .order import Order

logger = logging.getLogger(__name__)


class OrderService(ABC):
    """Order placement."""

    @abstractmethod
    def create_order(self, member_id: int, item_name: str, item_price: int) -> Order:
        raise NotImplementedError


class OrderServiceImpl(OrderService):
    """OrderService pricing orders through a DiscountPolicy."""

    def __init__(
        self, member_repository: MemberRepository, discount_policy: DiscountPolicy
    ) -> None:
        self.member_repository = member_repository
        self.discount_policy = discount_policy

    def create_order(self, member_id: int, item_name: str, item_price: int) -> Order:
        """Place an order for an existing member.

        Raises:
            ValueError: ``member_id`` is not a known member.
        """
        member = self.member_repository.find_by_id(member_id)
        if member is None:
            raise ValueError(f"Unknown member: {member_id}")
        discount_price = self.discount_policy.discount(member, item_price)
        logger.debug(
            "Order %s for member %s: price=%d discount=%d",
            item_name, member_id, item_price, discount_price,
        )
        return Order(member_id, item_name, item_price, discount_price)
