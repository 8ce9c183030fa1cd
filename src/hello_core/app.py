"""Demo flows run against a built container."""
from __future__ import annotations

import logging
from typing import Optional

from config.constants import MEMBER_SERVICE, ORDER_SERVICE
from hello_core.di import DIContainer
from hello_core.member import Member, MemberService, Tier
from hello_core.order import Order, OrderService

logger = logging.getLogger(__name__)


def run_member_app(container: DIContainer) -> tuple[Member, Optional[Member]]:
    """Join member 1 and read it back.

    Returns:
        The joined member and the member found by id.
    """
    member_service = container.get_bean(MEMBER_SERVICE, MemberService)

    member = Member(1, "memberA", Tier.VIP)
    member_service.join(member)

    found = member_service.find_member(1)
    return member, found


def run_order_app(container: DIContainer, item_price: int = 10000) -> Order:
    """Join a VIP member and place an order for them."""
    member_service = container.get_bean(MEMBER_SERVICE, MemberService)
    order_service = container.get_bean(ORDER_SERVICE, OrderService)

    member_service.join(Member(1, "memberA", Tier.VIP))
    order = order_service.create_order(1, "itemA", item_price)
    logger.info("Order placed: %s", order)
    return order
