"""Member service capability and its default implementation."""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional

from .member import Member
from .repository import MemberRepository

logger = logging.getLogger(__name__)


class MemberService(ABC):
    """Member registration and lookup."""

    @abstractmethod
    def join(self, member: Member) -> None:
        raise NotImplementedError

    @abstractmethod
    def find_member(self, member_id: int) -> Optional[Member]:
        raise NotImplementedError


class MemberServiceImpl(MemberService):
    """MemberService backed by a MemberRepository."""

    def __init__(self, member_repository: MemberRepository) -> None:
        self.member_repository = member_repository

    def join(self, member: Member) -> None:
        self.member_repository.save(member)
        logger.info("Member joined: %s (%s)", member.name, member.tier.value)

    def find_member(self, member_id: int) -> Optional[Member]:
        return self.member_repository.find_by_id(member_id)
