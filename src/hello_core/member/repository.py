"""Member storage."""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional

from .member import Member

logger = logging.getLogger(__name__)


class MemberRepository(ABC):
    """Storage contract used by the member and order services."""

    @abstractmethod
    def save(self, member: Member) -> None:
        """Store ``member``, replacing any member with the same id."""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, member_id: int) -> Optional[Member]:
        """Return the member with ``member_id`` or None."""
        raise NotImplementedError


class MemoryMemberRepository(MemberRepository):
    """In-memory repository; each instance owns its own store."""

    def __init__(self) -> None:
        self._store: dict[int, Member] = {}

    def save(self, member: Member) -> None:
        self._store[member.id] = member
        logger.debug("Saved member %s", member.id)

    def find_by_id(self, member_id: int) -> Optional[Member]:
        return self._store.get(member_id)
