"""Turn raw client payloads into validated customers.

`accept` converts one loosely-typed key/value payload into a `Customer` or
rejects it. `ingest_batch` drives a POSTed list of payloads through `accept`,
partitions the results into accepted / conflict / malformed and decides the
outcome. Writes happen only when the whole batch is accepted.

Malformed input is a normal outcome here, never an exception.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, List, Optional, Sequence, Set

from .models import Customer

if TYPE_CHECKING:
    from src.database.contracts import CrudRepository

logger = logging.getLogger(__name__)

_CONTACT_SPLIT_RE = re.compile(r"\s*;\s*")
_ID_RE = re.compile(r"[+-]?[0-9]+", re.ASCII)
# Ids are signed 64-bit integers.
_ID_MIN, _ID_MAX = -(2**63), 2**63 - 1


class BatchOutcome(str, Enum):
    CREATED = "CREATED"
    BAD_REQUEST = "BAD_REQUEST"
    CONFLICT = "CONFLICT"

    @property
    def status_code(self) -> int:
        return {"CREATED": 201, "BAD_REQUEST": 400, "CONFLICT": 409}[self.value]


@dataclass
class BatchResult:
    outcome: BatchOutcome
    accepted: List[Customer] = field(default_factory=list)
    conflicts: List[Any] = field(default_factory=list)
    malformed: List[Any] = field(default_factory=list)

    @property
    def body(self) -> Optional[List[Any]]:
        """Response body: the offending raw payloads, `[]` on success."""
        if self.outcome == BatchOutcome.BAD_REQUEST:
            return self.malformed if self.malformed else None
        if self.outcome == BatchOutcome.CONFLICT:
            return self.conflicts
        return []


def _is_blank(v: Any) -> bool:
    return v is None or (isinstance(v, str) and v.strip() == "")


def _parse_id(raw: Any) -> Optional[int]:
    if isinstance(raw, bool):
        return None
    text = str(raw)
    if not _ID_RE.fullmatch(text):
        return None
    value = int(text)
    if not _ID_MIN <= value <= _ID_MAX:
        return None
    return value


def parse_contacts(raw: Any) -> List[str]:
    """Split a `;`-delimited contact string, keeping order and dropping empties."""
    if raw is None:
        return []
    if isinstance(raw, (list, tuple)):
        parts = [str(p) for p in raw if p is not None]
    else:
        parts = _CONTACT_SPLIT_RE.split(str(raw).strip())
    return [p.strip() for p in parts if p and p.strip()]


def accept(
    payload: Any,
    repository: CrudRepository,
    reserved_ids: Optional[Set[int]] = None,
) -> Optional[Customer]:
    """
    Convert one raw payload into a validated `Customer`.

    Args:
        payload: mapping of field name -> raw value, as decoded from JSON
        repository: store consulted for the next free id when none is given
        reserved_ids: ids already claimed earlier in the same batch

    Returns:
        The candidate customer, or None when the payload is malformed.
    """
    if not isinstance(payload, dict):
        return None

    customer = Customer()

    raw_id = payload.get("id")
    if not _is_blank(raw_id):
        parsed = _parse_id(raw_id)
        if parsed is None:
            logger.debug("Rejecting payload with non-numeric id: %r", raw_id)
            return None
        customer.id = parsed
    else:
        reserved = reserved_ids or set()
        i = repository.next_free_id()
        while i in reserved or repository.exists_by_id(i):
            i += 1
        customer.id = i

    first = payload.get("first")
    last = payload.get("name")
    if last is not None:
        customer.set_name("" if first is None else str(first), str(last))

    for contact in parse_contacts(payload.get("contacts")):
        customer.add_contact(contact)

    if not customer.is_valid():
        return None
    return customer


def ingest_batch(payloads: Optional[Sequence[Any]], repository: CrudRepository) -> BatchResult:
    """
    Validate and store a batch of raw payloads, all or nothing.

    Any malformed payload rejects the batch as a bad request; otherwise any
    payload whose id is already taken rejects it as a conflict. Only when
    neither occurs are the accepted customers saved.
    """
    if not isinstance(payloads, (list, tuple)):
        logger.info("Batch rejected: no payload list supplied")
        return BatchResult(outcome=BatchOutcome.BAD_REQUEST)

    items = list(payloads)
    accepted: List[Customer] = []
    conflicts: List[Any] = []
    malformed: List[Any] = []
    claimed: Set[int] = set()

    with repository.lock:
        for kvpairs in items:
            customer = accept(kvpairs, repository, reserved_ids=claimed)
            if customer is None:
                malformed.append(kvpairs)
            elif customer.id in claimed or repository.exists_by_id(customer.id):
                conflicts.append(kvpairs)
            else:
                claimed.add(customer.id)
                accepted.append(customer)

        if malformed:
            logger.info("Batch rejected: %d of %d payloads malformed", len(malformed), len(items))
            return BatchResult(BatchOutcome.BAD_REQUEST, accepted, conflicts, malformed)

        if conflicts:
            logger.info("Batch rejected: %d of %d payloads conflict", len(conflicts), len(items))
            return BatchResult(BatchOutcome.CONFLICT, accepted, conflicts, malformed)

        for customer in accepted:
            repository.save(customer)

    logger.info("Batch accepted: %d customers created", len(accepted))
    return BatchResult(BatchOutcome.CREATED, accepted, conflicts, malformed)
