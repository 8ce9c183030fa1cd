"""Observability for bean resolution.

Provides Prometheus metrics and OpenTelemetry tracing, both off by default.
"""
from __future__ import annotations

from dataclasses import dataclass
from types import TracebackType
from typing import TYPE_CHECKING, Any

from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from prometheus_client import CollectorRegistry, Counter, Histogram

if TYPE_CHECKING:
    from config.app_config import AppConfig


@dataclass(slots=True)
class Observability:
    """Observability handles for one container.

    Attributes:
        enabled: Whether any observability feature is on.
        metrics_enabled: Whether Prometheus metrics are collected.
        tracing_enabled: Whether spans are recorded.
        registry: Prometheus registry owning this container's metrics.
        bean_creations: Counter of factory invocations, by bean.
        creation_seconds: Histogram of factory latency, by bean.
        resolution_errors: Counter of failed resolutions, by bean and error.
        cache_hits: Singleton cache hits.
        cache_misses: Singleton cache misses.
        tracer: OpenTelemetry tracer.
        tracer_provider: Provider backing ``tracer``.
    """

    enabled: bool
    metrics_enabled: bool
    tracing_enabled: bool

    registry: Any = None
    bean_creations: Any = None
    creation_seconds: Any = None
    resolution_errors: Any = None
    cache_hits: Any = None
    cache_misses: Any = None

    tracer: Any = None
    tracer_provider: Any = None

    def record_hit(self) -> None:
        if self.metrics_enabled:
            self.cache_hits.inc()

    def record_miss(self) -> None:
        if self.metrics_enabled:
            self.cache_misses.inc()

    def record_creation(self, identifier: str, seconds: float) -> None:
        if self.metrics_enabled:
            self.bean_creations.labels(bean=identifier).inc()
            self.creation_seconds.labels(bean=identifier).observe(seconds)

    def record_error(self, identifier: str, exc: BaseException) -> None:
        if self.metrics_enabled:
            self.resolution_errors.labels(
                bean=identifier, error=type(exc).__name__
            ).inc()

    def shutdown(self) -> None:
        """Flush pending spans."""
        if self.tracer_provider is not None:
            self.tracer_provider.shutdown()


def build_observability(config: AppConfig | None = None) -> Observability:
    """Build observability handles from configuration.

    Args:
        config: Application config; ``enable_metrics`` and ``enable_tracing``
            select the features. ``None`` disables both.

    Returns:
        A configured Observability instance.
    """
    metrics = bool(config is not None and config.enable_metrics)
    tracing = bool(config is not None and config.enable_tracing)

    obs = Observability(
        enabled=metrics or tracing, metrics_enabled=metrics, tracing_enabled=tracing
    )

    if metrics:
        # One registry per container, so several containers can coexist.
        obs.registry = CollectorRegistry()
        obs.bean_creations = Counter(
            "container_bean_creations_total",
            "Beans created by their factory",
            labelnames=("bean",),
            registry=obs.registry,
        )
        obs.creation_seconds = Histogram(
            "container_bean_creation_seconds",
            "Factory latency in seconds",
            labelnames=("bean",),
            registry=obs.registry,
        )
        obs.resolution_errors = Counter(
            "container_resolution_errors_total",
            "Failed bean resolutions",
            labelnames=("bean", "error"),
            registry=obs.registry,
        )
        obs.cache_hits = Counter(
            "container_cache_hits_total", "Singleton cache hits", registry=obs.registry
        )
        obs.cache_misses = Counter(
            "container_cache_misses_total",
            "Singleton cache misses",
            registry=obs.registry,
        )

    if tracing and config is not None:
        provider = TracerProvider(
            resource=Resource.create({"service.name": config.service_name})
        )
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
        obs.tracer_provider = provider
        obs.tracer = provider.get_tracer(__name__)

    return obs


class NullSpan:
    """No-op span used when tracing is off."""

    def __enter__(self) -> NullSpan:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        return False


def start_span(obs: Observability, name: str) -> Any:
    """Start a tracing span.

    Args:
        obs: Observability instance.
        name: Span name.

    Returns:
        Span context manager.
    """
    if obs.tracing_enabled and obs.tracer is not None:
        return obs.tracer.start_as_current_span(name)
    return NullSpan()
