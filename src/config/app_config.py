"""Application Config Module

Define application configuration data classes and load/save logic.
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Optional

from config.constants import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_RATE_DISCOUNT_PERCENT,
    DEFAULT_SERVICE_NAME,
    DISCOUNT_POLICIES,
    DISCOUNT_POLICY_FIX,
)

logger = logging.getLogger(__name__)

MAX_CONFIG_SIZE = 1024 * 1024  # 1MB config file size limit


@dataclass
class AppConfig:
    """Application configuration data class.

    Attributes:
        eager_init: Build every singleton bean when the container is built.
        discount_policy: Discount implementation to wire ("fix" or "rate").
        rate_discount_percent: Percentage used by the rate discount policy.
        log_level: Root logging level name.
        enable_metrics: Collect Prometheus metrics for bean resolution.
        enable_tracing: Record OpenTelemetry spans for bean resolution.
        service_name: Service name reported on spans.
    """

    eager_init: bool = False
    discount_policy: str = DISCOUNT_POLICY_FIX
    rate_discount_percent: int = DEFAULT_RATE_DISCOUNT_PERCENT
    log_level: str = DEFAULT_LOG_LEVEL
    enable_metrics: bool = False
    enable_tracing: bool = False
    service_name: str = DEFAULT_SERVICE_NAME
    _mtime: float = field(default=0.0, repr=False)

    def _validate(self) -> None:
        """Validate and fix configuration values."""
        if self.discount_policy not in DISCOUNT_POLICIES:
            logger.warning(
                "Unknown discount_policy %r, using %r",
                self.discount_policy, DISCOUNT_POLICY_FIX,
            )
            self.discount_policy = DISCOUNT_POLICY_FIX

        try:
            self.rate_discount_percent = int(self.rate_discount_percent)
        except Exception:
            self.rate_discount_percent = DEFAULT_RATE_DISCOUNT_PERCENT
        if not 0 <= self.rate_discount_percent <= 100:
            self.rate_discount_percent = DEFAULT_RATE_DISCOUNT_PERCENT

        level = str(self.log_level).upper()
        if not isinstance(logging.getLevelName(level), int):
            level = DEFAULT_LOG_LEVEL
        self.log_level = level

        if not isinstance(self.service_name, str) or not self.service_name:
            self.service_name = DEFAULT_SERVICE_NAME

        for name in ("eager_init", "enable_metrics", "enable_tracing"):
            if not isinstance(getattr(self, name), bool):
                setattr(self, name, False)

    def apply_overrides(
        self, log_level: Optional[str] = None, eager_init: Optional[bool] = None
    ) -> AppConfig:
        """Apply command line overrides and re-validate.

        Args:
            log_level: Logging level name; unchanged when None.
            eager_init: Eager singleton creation; unchanged when None.

        Returns:
            This configuration.
        """
        if log_level is not None:
            self.log_level = log_level
        if eager_init is not None:
            self.eager_init = eager_init
        self._validate()
        return self

    @classmethod
    def load(cls, config_file: str) -> AppConfig:
        """Load configuration from file.

        A missing, oversized or unreadable file yields the defaults.

        Args:
            config_file: Configuration file path.

        Returns:
            Loaded configuration object.
        """
        cfg = cls()
        if os.path.exists(config_file):
            try:
                file_size = os.path.getsize(config_file)
                if file_size > MAX_CONFIG_SIZE:
                    logger.warning(
                        "Config file too large: %d bytes (max: %d), using defaults",
                        file_size, MAX_CONFIG_SIZE,
                    )
                    return cfg
            except OSError:
                pass

            try:
                with open(config_file, "r", encoding="utf-8") as f:
                    data = json.load(f)

                cfg.eager_init = data.get("eager_init", cfg.eager_init)
                cfg.discount_policy = str(
                    data.get("discount_policy", cfg.discount_policy)
                ).lower()

                try:
                    cfg.rate_discount_percent = int(
                        data.get("rate_discount_percent", cfg.rate_discount_percent)
                    )
                except (ValueError, TypeError) as e:
                    logger.warning(
                        "Invalid rate_discount_percent in config: %s, using default", e
                    )

                cfg.log_level = str(data.get("log_level", cfg.log_level))
                cfg.enable_metrics = data.get("enable_metrics", cfg.enable_metrics)
                cfg.enable_tracing = data.get("enable_tracing", cfg.enable_tracing)
                cfg.service_name = data.get("service_name", cfg.service_name)

                try:
                    cfg._mtime = os.path.getmtime(config_file)
                except OSError:
                    pass

            except Exception as e:
                logger.error("Failed to load config from %s: %s", config_file, e)

        cfg._validate()
        return cfg

    def to_dict(self) -> dict[str, Any]:
        return {
            "eager_init": self.eager_init,
            "discount_policy": self.discount_policy,
            "rate_discount_percent": int(self.rate_discount_percent),
            "log_level": self.log_level,
            "enable_metrics": self.enable_metrics,
            "enable_tracing": self.enable_tracing,
            "service_name": self.service_name,
        }

    def save(self, config_file: str) -> None:
        """Save configuration to file.

        Args:
            config_file: Configuration file path.
        """
        directory = os.path.dirname(config_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(config_file, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, ensure_ascii=False, indent=2)

        try:
            self._mtime = os.path.getmtime(config_file)
        except OSError:
            pass

    def reload_if_changed(self, config_file: str) -> AppConfig:
        """Reload configuration if file has changed.

        Args:
            config_file: Configuration file path.

        Returns:
            Current or reloaded configuration.
        """
        try:
            mtime = os.path.getmtime(config_file)
            if mtime > self._mtime:
                return self.load(config_file)
        except OSError:
            pass
        return self
