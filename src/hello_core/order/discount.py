"""Discount policies.

Two interchangeable implementations of ``DiscountPolicy``; the wiring picks
one from configuration.
"""
from __future__ import annotations

from abc import ABC, abstractmethod

from hello_core.member import Member, Tier

FIX_DISCOUNT_AMOUNT: int = 1000
DEFAULT_DISCOUNT_PERCENT: int = 10


class DiscountPolicy(ABC):
    """Computes the discount a member gets on a price."""

    @abstractmethod
    def discount(self, member: Member, price: int) -> int:
        """Return the discount amount for ``member`` buying at ``price``."""
        raise NotImplementedError


class FixDiscountPolicy(DiscountPolicy):
    """Flat discount for VIP members."""

    def __init__(self, amount: int = FIX_DISCOUNT_AMOUNT) -> None:
        self.amount = amount

    def discount(self, member: Member, price: int) -> int:
        if member.tier is Tier.VIP:
            return self.amount
        return 0


class RateDiscountPolicy(DiscountPolicy):
    """Percentage discount for VIP members."""

    def __init__(self, discount_percent: int = DEFAULT_DISCOUNT_PERCENT) -> None:
        if not 0 <= discount_percent <= 100:
            raise ValueError("discount_percent must be between 0 and 100")
        self.discount_percent = discount_percent

    def discount(self, member: Member, price: int) -> int:
        if member.tier is Tier.VIP:
            return price * self.discount_percent // 100
        return 0
