"""
In-memory customer repository.

Holds customers in a dict keyed by id for the lifetime of the process. One
instance is created by `src/api/main.py` and handed to the request handlers
through FastAPI dependencies.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Iterable, List, Optional

from src.customers.models import Customer
from src.database.contracts import CrudRepository, InvalidArgumentError

logger = logging.getLogger(__name__)

_ALL = object()


def _require(value: Any, what: str) -> None:
    if value is None:
        logger.error("Repository called with None %s", what)
        raise InvalidArgumentError(f"{what} must not be None")


def _require_all(values: Optional[Iterable[Any]], what: str) -> List[Any]:
    _require(values, what + "s")
    items = list(values)
    for v in items:
        _require(v, what)
    return items


class CustomerRepository(CrudRepository):
    """
    Dict-backed store of `Customer` records.

    `lock` is re-entrant; callers that need a read-check-then-write sequence
    to be atomic (id assignment followed by save) hold it around the whole
    sequence.
    """

    def __init__(self) -> None:
        self._customers: Dict[int, Customer] = {}
        self.lock = threading.RLock()

    # ------------------------------------------------------------------ #
    # Writes
    # ------------------------------------------------------------------ #
    def save(self, entity: Customer) -> Customer:
        _require(entity, "entity")
        with self.lock:
            self._customers[entity.id] = entity
        return entity

    def save_all(self, entities: Iterable[Customer]) -> List[Customer]:
        items = _require_all(entities, "entity")
        with self.lock:
            for entity in items:
                self.save(entity)
        return items

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #
    def exists_by_id(self, id: int) -> bool:
        _require(id, "id")
        return id in self._customers

    def find_by_id(self, id: int) -> Optional[Customer]:
        _require(id, "id")
        return self._customers.get(id)

    def find_all(self) -> List[Customer]:
        return list(self._customers.values())

    def find_all_by_id(self, ids: Iterable[int]) -> List[Customer]:
        wanted = _require_all(ids, "id")
        return [self._customers[i] for i in wanted if i in self._customers]

    def count(self) -> int:
        return len(self._customers)

    def next_free_id(self) -> int:
        i = 0
        while i in self._customers:
            i += 1
        return i

    # ------------------------------------------------------------------ #
    # Deletes
    # ------------------------------------------------------------------ #
    def delete_by_id(self, id: int) -> None:
        _require(id, "id")
        with self.lock:
            self._customers.pop(id, None)

    def delete(self, entity: Customer) -> None:
        _require(entity, "entity")
        # Matched by value, not by key.
        with self.lock:
            for key, stored in list(self._customers.items()):
                if stored == entity:
                    del self._customers[key]
                    return

    def delete_all_by_id(self, ids: Iterable[int]) -> None:
        items = _require_all(ids, "id")
        with self.lock:
            for id in items:
                self.delete_by_id(id)

    def delete_all(self, entities: Any = _ALL) -> None:
        if entities is _ALL:
            with self.lock:
                self._customers.clear()
            return
        items = _require_all(entities, "entity")
        with self.lock:
            for entity in items:
                self.delete(entity)
