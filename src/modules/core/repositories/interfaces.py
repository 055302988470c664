"""Generic repository interface (Dependency Inversion Principle).

Provides ``IRepository[T]``, the base abstract class that all
domain-specific repository interfaces extend.  Service-layer code
depends on this abstraction, never on a concrete store.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Base generic repository contract.

    Type parameter ``T`` represents the domain entity managed by the
    repository (e.g. ``Order``).
    """

    @abstractmethod
    def get(self, id: str) -> Optional[T]:
        """Retrieve an entity by its identifier."""

    @abstractmethod
    def put(self, entity: T) -> T:
        """Store an entity under its identifier."""

    @abstractmethod
    def list_all(self) -> List[T]:
        """Return every stored entity in insertion order."""
