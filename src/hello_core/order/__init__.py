"""Order domain: orders, discount policies and the order service."""

from .discount import DiscountPolicy, FixDiscountPolicy, RateDiscountPolicy
from .order import Order
from .service import OrderService, OrderServiceImpl

__all__ = [
    "Order",
    "DiscountPolicy",
    "FixDiscountPolicy",
    "RateDiscountPolicy",
    "OrderService",
    "OrderServiceImpl",
]
