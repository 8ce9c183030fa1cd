"""Container exception hierarchy.

Every failure raised by the registry or the container derives from
``ContainerError`` so callers can catch the whole family at once.
"""
from __future__ import annotations

from typing import Iterable


class ContainerError(Exception):
    """Base class for container errors."""


class BeanNotFoundError(ContainerError):
    """No descriptor is registered for the requested identifier or type."""

    def __init__(self, identifier: str) -> None:
        super().__init__(f"No bean registered under '{identifier}'")
        self.identifier = identifier


class DuplicateRegistrationError(ContainerError):
    """An identifier was registered a second time."""

    def __init__(self, identifier: str) -> None:
        super().__init__(f"Bean '{identifier}' is already registered")
        self.identifier = identifier


class TypeMismatchError(ContainerError):
    """The resolved instance does not satisfy the requested type."""

    def __init__(self, identifier: str, expected: type, actual: type) -> None:
        super().__init__(
            f"Bean '{identifier}' is of type {actual.__name__}, "
            f"expected {expected.__name__}"
        )
        self.identifier = identifier
        self.expected = expected
        self.actual = actual


class CyclicDependencyError(ContainerError):
    """Resolution re-entered an identifier that is still being resolved."""

    def __init__(self, chain: Iterable[str]) -> None:
        self.chain = list(chain)
        super().__init__("Cyclic dependency: " + " -> ".join(self.chain))


class NoUniqueBeanError(ContainerError):
    """A type lookup matched more than one registered bean."""

    def __init__(self, required_type: type, candidates: Iterable[str]) -> None:
        self.required_type = required_type
        self.candidates = list(candidates)
        super().__init__(
            f"Expected a single bean of type {required_type.__name__}, "
            f"found {len(self.candidates)}: {', '.join(self.candidates)}"
        )


class BeanCreationError(ContainerError):
    """A factory raised while building a bean."""

    def __init__(self, identifier: str, reason: str) -> None:
        super().__init__(f"Failed to create bean '{identifier}': {reason}")
        self.identifier = identifier
