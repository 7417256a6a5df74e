"""
Kargah Party Primitive — Contacts
===================================
Customers and suppliers share one record; a contact may hold both roles.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, FrozenSet, Optional


class ContactRole(Enum):
    CUSTOMER = "CUSTOMER"
    SUPPLIER = "SUPPLIER"


@dataclass(frozen=True)
class Contact:
    COLLECTION: ClassVar[str] = "contacts"

    id: int
    name: str
    roles: FrozenSet[ContactRole]
    contact_info: str = ""
    phone: Optional[str] = None
    address: Optional[str] = None
    job: Optional[str] = None
    activity_type: Optional[str] = None

    @property
    def is_customer(self) -> bool:
        return ContactRole.CUSTOMER in self.roles

    @property
    def is_supplier(self) -> bool:
        return ContactRole.SUPPLIER in self.roles

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "name": self.name,
            "roles": sorted(role.value for role in self.roles),
            "contactInfo": self.contact_info,
        }
        for key, value in (
            ("phone", self.phone),
            ("address", self.address),
            ("job", self.job),
            ("activityType", self.activity_type),
        ):
            if value:
                data[key] = value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> Contact:
        return cls(
            id=int(data["id"]),
            name=data["name"],
            roles=frozenset(ContactRole(r) for r in data.get("roles", ())),
            contact_info=data.get("contactInfo", ""),
            phone=data.get("phone") or None,
            address=data.get("address") or None,
            job=data.get("job") or None,
            activity_type=data.get("activityType") or None,
        )
