"""Dependency injection container module.

A ``BeanRegistry`` records how each component is built; a ``DIContainer``
turns an identifier (or a type) into a live instance, resolving the
component's dependencies depth-first and caching singletons.
"""
from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Iterable, TypeVar, Union, overload

from hello_core.errors import (
    BeanCreationError,
    BeanNotFoundError,
    ContainerError,
    CyclicDependencyError,
    DuplicateRegistrationError,
    NoUniqueBeanError,
    TypeMismatchError,
)
from hello_core.observability import Observability, build_observability, start_span

logger = logging.getLogger(__name__)

T = TypeVar("T")

# A dependency is named either by identifier or by required type.
Dependency = Union[str, type]


@dataclass(frozen=True)
class BeanDescriptor:
    """Metadata and factory for one component.

    Attributes:
        identifier: Unique bean name.
        declared_type: Type every product of ``factory`` must be an instance of.
        factory: Callable invoked with the resolved dependencies, in order.
        dependencies: Identifiers or types resolved before ``factory`` runs.
        singleton: Cache the first product when True, build anew otherwise.
    """

    identifier: str
    declared_type: type
    factory: Callable[..., Any]
    dependencies: tuple[Dependency, ...] = ()
    singleton: bool = True


class BeanRegistry:
    """Identifier to descriptor mapping, filled once at startup."""

    def __init__(self) -> None:
        self._descriptors: dict[str, BeanDescriptor] = {}

    def register(
        self,
        identifier: str,
        declared_type: type,
        factory: Callable[..., Any],
        dependencies: Iterable[Dependency] = (),
        singleton: bool = True,
    ) -> BeanDescriptor:
        """Store a descriptor.

        Args:
            identifier: Bean name.
            declared_type: Type the factory's products must satisfy.
            factory: Callable building the bean.
            dependencies: Identifiers or types passed positionally to ``factory``.
            singleton: Whether the container caches the product.

        Returns:
            The stored descriptor.

        Raises:
            DuplicateRegistrationError: ``identifier`` is already registered.
            ContainerError: Malformed registration.
        """
        if not isinstance(identifier, str) or not identifier:
            raise ContainerError("Bean identifier must be a non-empty string")
        if not isinstance(declared_type, type):
            raise ContainerError(f"Declared type of '{identifier}' must be a class")
        if not callable(factory):
            raise ContainerError(f"Factory of '{identifier}' is not callable")
        if identifier in self._descriptors:
            raise DuplicateRegistrationError(identifier)

        descriptor = BeanDescriptor(
            identifier=identifier,
            declared_type=declared_type,
            factory=factory,
            dependencies=tuple(dependencies),
            singleton=singleton,
        )
        self._descriptors[identifier] = descriptor
        logger.debug(
            "Registered bean %s (%s)", identifier, declared_type.__name__
        )
        return descriptor

    def lookup(self, identifier: str) -> BeanDescriptor:
        """Return the descriptor for ``identifier``.

        Raises:
            BeanNotFoundError: Nothing is registered under ``identifier``.
        """
        try:
            return self._descriptors[identifier]
        except KeyError:
            raise BeanNotFoundError(identifier) from None

    def contains(self, identifier: str) -> bool:
        return identifier in self._descriptors

    def names(self) -> list[str]:
        """Registered identifiers, in registration order."""
        return list(self._descriptors)

    def candidates_for(self, required_type: type) -> list[BeanDescriptor]:
        """Descriptors whose declared type is ``required_type`` or a subclass."""
        return [
            d
            for d in self._descriptors.values()
            if issubclass(d.declared_type, required_type)
        ]

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)


class DIContainer:
    """Dependency injection container.

    Resolution of an identifier moves UNRESOLVED -> RESOLVING -> RESOLVED
    (cached when singleton) or fails; failures are never cached, so the next
    call starts over.
    """

    def __init__(
        self,
        registry: BeanRegistry | None = None,
        observability: Observability | None = None,
    ) -> None:
        self._registry = registry if registry is not None else BeanRegistry()
        self._obs = observability if observability is not None else build_observability()
        self._instances: dict[str, Any] = {}
        # Insertion ordered, doubles as the current resolution chain.
        self._resolving: dict[str, None] = {}
        self._lock = threading.RLock()

    @property
    def registry(self) -> BeanRegistry:
        return self._registry

    @property
    def observability(self) -> Observability:
        return self._obs

    def register(
        self,
        identifier: str,
        declared_type: type,
        factory: Callable[..., Any],
        dependencies: Iterable[Dependency] = (),
        singleton: bool = True,
    ) -> BeanDescriptor:
        """Register a factory. See ``BeanRegistry.register``."""
        return self._registry.register(
            identifier, declared_type, factory, dependencies, singleton
        )

    def register_instance(self, identifier: str, instance: Any) -> BeanDescriptor:
        """Register an already built singleton.

        Args:
            identifier: Bean name.
            instance: The bean; its class becomes the declared type.

        Returns:
            The stored descriptor.
        """
        descriptor = self._registry.register(
            identifier, type(instance), lambda: instance
        )
        self._instances[identifier] = instance
        return descriptor

    @overload
    def get_bean(self, identifier: str) -> Any: ...

    @overload
    def get_bean(self, identifier: str, expected_type: type[T]) -> T: ...

    def get_bean(self, identifier: str, expected_type: type | None = None) -> Any:
        """Resolve a bean by identifier.

        Args:
            identifier: Bean name.
            expected_type: Type the caller requires; unchecked when None.

        Returns:
            The bean instance.

        Raises:
            BeanNotFoundError: ``identifier`` (or one of its dependencies) is
                not registered.
            TypeMismatchError: The instance does not satisfy ``expected_type``
                or the descriptor's declared type.
            CyclicDependencyError: ``identifier`` is already being resolved.
            NoUniqueBeanError: A type dependency matched several beans.
            BeanCreationError: A factory raised.
        """
        with self._lock:
            try:
                instance = self._get_or_create(identifier)
                if expected_type is not None and not isinstance(instance, expected_type):
                    raise TypeMismatchError(identifier, expected_type, type(instance))
            except ContainerError as exc:
                self._report_failure(identifier, exc)
                raise
            return instance

    def get_bean_by_type(self, required_type: type[T]) -> T:
        """Resolve the single bean whose declared type satisfies ``required_type``.

        Raises:
            BeanNotFoundError: No candidate is registered.
            NoUniqueBeanError: More than one candidate is registered.
        """
        with self._lock:
            try:
                candidates = self._registry.candidates_for(required_type)
                if not candidates:
                    raise BeanNotFoundError(required_type.__name__)
                if len(candidates) > 1:
                    raise NoUniqueBeanError(
                        required_type, [d.identifier for d in candidates]
                    )
            except ContainerError as exc:
                self._report_failure(required_type.__name__, exc)
                raise
            return self.get_bean(candidates[0].identifier, required_type)

    def beans_of_type(self, required_type: type[T]) -> dict[str, T]:
        """Resolve every bean whose declared type satisfies ``required_type``."""
        return {
            d.identifier: self.get_bean(d.identifier, required_type)
            for d in self._registry.candidates_for(required_type)
        }

    def contains_bean(self, identifier: str) -> bool:
        return self._registry.contains(identifier)

    def bean_names(self) -> list[str]:
        return self._registry.names()

    def is_singleton(self, identifier: str) -> bool:
        return self._registry.lookup(identifier).singleton

    def preinstantiate_singletons(self) -> int:
        """Eagerly build every singleton not yet cached.

        Returns:
            Number of beans created.
        """
        with self._lock:
            before = len(self._instances)
            for identifier in self._registry.names():
                descriptor = self._registry.lookup(identifier)
                if descriptor.singleton and identifier not in self._instances:
                    self.get_bean(identifier)
            # Dependencies built along the way count too.
            created = len(self._instances) - before
        logger.info("Pre-instantiated %d singleton bean(s)", created)
        return created

    def _report_failure(self, identifier: str, exc: ContainerError) -> None:
        self._obs.record_error(identifier, exc)
        # Only the outermost resolution logs, nested levels re-raise.
        if not self._resolving:
            logger.warning("Failed to resolve bean '%s': %s", identifier, exc)

    def _get_or_create(self, identifier: str) -> Any:
        descriptor = self._registry.lookup(identifier)

        if identifier in self._instances:
            self._obs.record_hit()
            return self._instances[identifier]

        if identifier in self._resolving:
            raise CyclicDependencyError([*self._resolving, identifier])

        if descriptor.singleton:
            self._obs.record_miss()

        with start_span(self._obs, f"resolve:{identifier}"):
            instance = self._create(descriptor)

        if descriptor.singleton:
            self._instances[identifier] = instance
        return instance

    def _create(self, descriptor: BeanDescriptor) -> Any:
        identifier = descriptor.identifier
        self._resolving[identifier] = None
        try:
            args = [self._resolve_dependency(dep) for dep in descriptor.dependencies]
            started = time.perf_counter()
            try:
                instance = descriptor.factory(*args)
            except ContainerError:
                raise
            except Exception as exc:
                raise BeanCreationError(identifier, str(exc)) from exc
            self._obs.record_creation(identifier, time.perf_counter() - started)
        finally:
            self._resolving.pop(identifier, None)

        if not isinstance(instance, descriptor.declared_type):
            raise TypeMismatchError(identifier, descriptor.declared_type, type(instance))

        logger.debug("Created bean %s (%s)", identifier, type(instance).__name__)
        return instance

    def _resolve_dependency(self, dependency: Dependency) -> Any:
        if isinstance(dependency, str):
            return self.get_bean(dependency)
        return self.get_bean_by_type(dependency)
