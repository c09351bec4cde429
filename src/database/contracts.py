from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Optional

from src.customers.models import Customer


class InvalidArgumentError(ValueError):
    """Raised when a repository call receives None where a value is required."""


# ---------------------------------------------------------------------------
# Abstract repository interface
# ---------------------------------------------------------------------------

class CrudRepository(ABC):
    """
    Every customer store backing must implement this interface.

    Implementations expose a re-entrant `lock` guarding their mutations;
    holding it makes a sequence of calls atomic.
    """

    lock: Any

    # -- Writes --

    @abstractmethod
    def save(self, entity: Customer) -> Customer:
        """Insert or overwrite the entity stored under `entity.id`."""

    @abstractmethod
    def save_all(self, entities: Iterable[Customer]) -> List[Customer]:
        """Save every entity; no write happens if any element is None."""

    # -- Reads --

    @abstractmethod
    def exists_by_id(self, id: int) -> bool:
        """Return whether an entity is stored under `id`."""

    @abstractmethod
    def find_by_id(self, id: int) -> Optional[Customer]:
        """Return the entity stored under `id`, or None."""

    @abstractmethod
    def find_all(self) -> List[Customer]:
        """Return all entities in no particular order (possibly empty)."""

    @abstractmethod
    def find_all_by_id(self, ids: Iterable[int]) -> List[Customer]:
        """Return the entities whose id is in `ids`; misses are omitted."""

    @abstractmethod
    def count(self) -> int:
        """Return the number of stored entities."""

    @abstractmethod
    def next_free_id(self) -> int:
        """Return the smallest non-negative id not in use."""

    # -- Deletes --

    @abstractmethod
    def delete_by_id(self, id: int) -> None:
        """Remove the entity stored under `id`; no-op when absent."""

    @abstractmethod
    def delete(self, entity: Customer) -> None:
        """Remove the stored entity equal to `entity`; no-op when absent."""

    @abstractmethod
    def delete_all_by_id(self, ids: Iterable[int]) -> None:
        """Remove every entity whose id is in `ids`."""

    @abstractmethod
    def delete_all(self, entities: Any = ...) -> None:
        """Remove the given entities, or everything when called without arguments.

        Passing None is an error, not a request to clear the store.
        """
