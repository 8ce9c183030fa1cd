"""Command line entry point."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from config.app_config import AppConfig
from config.constants import CONFIG_FILE, LOG_FORMAT

from .app import run_member_app, run_order_app
from .errors import ContainerError
from .wiring import build_container


def _cmd_member(args: argparse.Namespace, config: AppConfig) -> int:
    container = build_container(config)
    member, found = run_member_app(container)
    print(f"new member = {member.name}")
    print(f"findMember = {found.name if found else None}")
    container.observability.shutdown()
    return 0


def _cmd_order(args: argparse.Namespace, config: AppConfig) -> int:
    container = build_container(config)
    order = run_order_app(container, item_price=args.price)
    print(f"order = {order}")
    print(f"order.calculatePrice = {order.calculate_price()}")
    container.observability.shutdown()
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="hello-core")
    p.add_argument("--config", default=CONFIG_FILE, help="JSON config file")
    p.add_argument("--log-level", default=None, help="Override log level")
    p.add_argument("--eager", action="store_true", help="Build all singletons at startup")

    sub = p.add_subparsers(dest="cmd")

    p_member = sub.add_parser("member", help="Join a member and look it up")
    p_member.set_defaults(func=_cmd_member)

    p_order = sub.add_parser("order", help="Place an order for a VIP member")
    p_order.add_argument("--price", type=int, default=10000)
    p_order.set_defaults(func=_cmd_order)

    return p


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = AppConfig.load(args.config).apply_overrides(
        log_level=args.log_level, eager_init=True if args.eager else None
    )

    logging.basicConfig(level=config.log_level, format=LOG_FORMAT)

    func = getattr(args, "func", _cmd_member)
    try:
        return int(func(args, config))
    except ContainerError as exc:
        # Resolution failures are already logged by the container.
        print(f"error: {exc}", file=sys.stderr)
        return 1
