"""Application wiring.

Lists every bean of the application with its factory and dependencies, and
builds a container from that table. Beans are declared by their capability
type so implementations can be swapped without touching consumers.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, NamedTuple, Optional

from config.app_config import AppConfig
from config.constants import (
    DISCOUNT_POLICY,
    DISCOUNT_POLICY_RATE,
    MEMBER_REPOSITORY,
    MEMBER_SERVICE,
    ORDER_SERVICE,
)
from hello_core.di import DIContainer, Dependency
from hello_core.member import (
    MemberRepository,
    MemberService,
    MemberServiceImpl,
    MemoryMemberRepository,
)
from hello_core.observability import build_observability
from hello_core.order import (
    DiscountPolicy,
    FixDiscountPolicy,
    OrderService,
    OrderServiceImpl,
    RateDiscountPolicy,
)

logger = logging.getLogger(__name__)


class Binding(NamedTuple):
    identifier: str
    declared_type: type
    factory: Callable[..., Any]
    dependencies: tuple[Dependency, ...] = ()


def discount_policy_factory(config: AppConfig) -> Callable[[], DiscountPolicy]:
    """Pick the discount implementation named by ``config.discount_policy``."""
    if config.discount_policy == DISCOUNT_POLICY_RATE:
        percent = config.rate_discount_percent
        return lambda: RateDiscountPolicy(percent)
    return FixDiscountPolicy


def app_bindings(config: AppConfig) -> list[Binding]:
    """The application's bean table."""
    return [
        Binding(MEMBER_REPOSITORY, MemberRepository, MemoryMemberRepository),
        Binding(DISCOUNT_POLICY, DiscountPolicy, discount_policy_factory(config)),
        Binding(MEMBER_SERVICE, MemberService, MemberServiceImpl, (MEMBER_REPOSITORY,)),
        Binding(
            ORDER_SERVICE,
            OrderService,
            OrderServiceImpl,
            (MEMBER_REPOSITORY, DISCOUNT_POLICY),
        ),
    ]


def build_container(config: Optional[AppConfig] = None) -> DIContainer:
    """Build a container holding every application bean.

    Args:
        config: Application config; defaults apply when None.

    Returns:
        The container, with singletons already built if ``config.eager_init``.
    """
    config = config or AppConfig()
    container = DIContainer(observability=build_observability(config))
    for binding in app_bindings(config):
        container.register(
            binding.identifier,
            binding.declared_type,
            binding.factory,
            binding.dependencies,
        )
    logger.info(
        "Container built with %d bean(s), discount policy: %s",
        len(container.registry), config.discount_policy,
    )
    if config.eager_init:
        container.preinstantiate_singletons()
    return container
