"""Member domain objects."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Tier(Enum):
    """Membership tier."""

    BASIC = "BASIC"
    VIP = "VIP"


@dataclass
class Member:
    """A registered member.

    Attributes:
        id: Member identifier.
        name: Display name.
        tier: Membership tier.
    """

    id: int
    name: str
    tier: Tier
