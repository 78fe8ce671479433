"""Abstract base class for record stores following the Repository Pattern."""

from abc import ABC, abstractmethod
from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")


class Repository(ABC, Generic[T]):
    """
    Generic repository interface for stored results.

    Stores are append-only: entities are created and read, never rewritten.
    """

    @abstractmethod
    def get(self, id: str) -> Optional[T]:
        """Retrieve the most recent entity stored under an ID."""
        pass

    @abstractmethod
    def list(self) -> List[T]:
        """List all entities in storage order."""
        pass

    @abstractmethod
    def create(self, entity: T) -> T:
        """Store a new entity."""
        pass
