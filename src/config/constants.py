"""Application constants module.

Defines project paths, bean identifiers and configuration defaults.
"""
from __future__ import annotations

import os

# ==================== Project Paths ====================

# src directory
SRC_DIR: str = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# Project root (parent of src)
ROOT_DIR: str = os.path.dirname(SRC_DIR)

# Data directory
DATA_DIR: str = os.path.join(ROOT_DIR, "data")

CONFIG_FILE: str = os.path.join(DATA_DIR, "config.json")

# ==================== Bean Identifiers ====================

MEMBER_REPOSITORY: str = "memberRepository"
MEMBER_SERVICE: str = "memberService"
DISCOUNT_POLICY: str = "discountPolicy"
ORDER_SERVICE: str = "orderService"

# ==================== Config Defaults ====================

DISCOUNT_POLICY_FIX: str = "fix"
DISCOUNT_POLICY_RATE: str = "rate"
DISCOUNT_POLICIES: tuple[str, ...] = (DISCOUNT_POLICY_FIX, DISCOUNT_POLICY_RATE)

DEFAULT_RATE_DISCOUNT_PERCENT: int = 10
DEFAULT_LOG_LEVEL: str = "INFO"
DEFAULT_SERVICE_NAME: str = "hello-core"

LOG_FORMAT: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"
