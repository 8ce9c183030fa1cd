"""hello_core: a small dependency injection container and the member/order
application it wires.

- ``DIContainer`` / ``BeanRegistry``: registration and resolution of beans
- ``build_container``: the application's explicit binding table
"""

from .di import BeanDescriptor, BeanRegistry, DIContainer
from .errors import (
    BeanCreationError,
    BeanNotFoundError,
    ContainerError,
    CyclicDependencyError,
    DuplicateRegistrationError,
    NoUniqueBeanError,
    TypeMismatchError,
)
from .wiring import build_container

__all__ = [
    "BeanDescriptor",
    "BeanRegistry",
    "DIContainer",
    "build_container",
    "ContainerError",
    "BeanNotFoundError",
    "DuplicateRegistrationError",
    "TypeMismatchError",
    "CyclicDependencyError",
    "NoUniqueBeanError",
    "BeanCreationError",
]
