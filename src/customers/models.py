"""
Customer entity.

Passive record with field accessors only; identifier uniqueness is the
repository's concern.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class Customer:
    id: int = -1
    last_name: str = ""
    first_name: str = ""
    contacts: List[str] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.last_name

    def set_name(self, first: str, last: str) -> None:
        self.first_name = (first or "").strip()
        self.last_name = (last or "").strip()

    def add_contact(self, contact: str) -> None:
        contact = (contact or "").strip()
        if contact:
            self.contacts.append(contact)

    def is_valid(self) -> bool:
        """A customer is valid with a non-negative id and a non-empty last name."""
        return self.id >= 0 and bool(self.last_name)

    def to_compact(self) -> Dict[str, Any]:
        """External representation used by the read endpoints."""
        return {
            "name": self.last_name,
            "first": self.first_name,
            "contacts": "; ".join(self.contacts),
        }
