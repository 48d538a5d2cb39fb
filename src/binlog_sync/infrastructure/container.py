"""Dependency injection container.

Ports are registered against the adapters that implement them. The service
registers its production adapters with ``setdefault_*`` so anything a test
registered beforehand wins.
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

T = TypeVar("T")


class Container:
    """Simple dependency injection container keyed by port type."""

    def __init__(self) -> None:
        self._factories: dict[type, Callable[[Container], Any]] = {}
        self._instances: dict[type, Any] = {}

    def register_singleton(self, port: type[T], instance: T) -> None:
        """Register a ready-made adapter instance."""
        self._instances[port] = instance

    def register_factory(self, port: type[T], factory: Callable[[Container], T]) -> None:
        """Register a factory building the adapter on first resolve."""
        self._instances.pop(port, None)
        self._factories[port] = factory

    def setdefault_factory(self, port: type[T], factory: Callable[[Container], T]) -> None:
        """Register ``factory`` unless ``port`` is already provided."""
        if not self.has(port):
            self._factories[port] = factory

    def resolve(self, port: type[T]) -> T:
        """Resolve the adapter for a port."""
        if port in self._instances:
            return self._instances[port]
        if port in self._factories:
            instance = self._factories[port](self)
            self._instances[port] = instance
            return instance
        raise KeyError(f"No registration found for {port.__name__}")

    def has(self, port: type) -> bool:
        """Check if a port is registered."""
        return port in self._factories or port in self._instances

    def clear(self) -> None:
        """Clear all registrations."""
        self._factories.clear()
        self._instances.clear()
