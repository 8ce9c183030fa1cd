"""Member domain: records, storage and the member service."""

from .member import Member, Tier
from .repository import MemberRepository, MemoryMemberRepository
from .service import MemberService, MemberServiceImpl

__all__ = [
    "Member",
    "Tier",
    "MemberRepository",
    "MemoryMemberRepository",
    "MemberService",
    "MemberServiceImpl",
]
