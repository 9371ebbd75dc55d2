"""
Service container holding the process-wide market and account singletons.

The market model, account store and dispatcher are created once at startup
and shared by every transport; tests swap them out with ``override``.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, TypeVar

T = TypeVar("T")


class ServiceContainer:
    """Simple dependency injection container keyed by service type."""

    def __init__(self) -> None:
        self._services: dict[type[Any], Any] = {}

    def register(self, service_type: type[T], instance: T, replace: bool = False) -> None:
        """Register a service instance.

        Raises:
            RuntimeError: If the service is already registered and ``replace`` is False
        """
        if service_type in self._services and not replace:
            raise RuntimeError(f"Service {service_type.__name__} is already registered")

        self._services[service_type] = instance

    def get(self, service_type: type[T]) -> T:
        """Get a registered service instance.

        Raises:
            RuntimeError: If service is not registered
        """
        if service_type not in self._services:
            raise RuntimeError(f"Service {service_type.__name__} is not registered")

        return self._services[service_type]

    def is_registered(self, service_type: type[Any]) -> bool:
        return service_type in self._services

    def clear(self) -> None:
        self._services.clear()

    @contextmanager
    def override(self, service_type: type[T], instance: T) -> Iterator[T]:
        """Temporarily replace a service, restoring the previous one on exit."""
        previous = self._services.get(service_type)
        had_previous = service_type in self._services
        self._services[service_type] = instance
        try:
            yield instance
        finally:
            if had_previous:
                self._services[service_type] = previous
            else:
                self._services.pop(service_type, None)


# Global container instance
container = ServiceContainer()
