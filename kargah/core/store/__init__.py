"""
Kargah Store — Session-Owned Entity Store
===========================================
One explicit, injectable store per workshop session. Engines read
from it freely and write to it only through ``commit``.

Rules:
- Records are frozen; updates replace a record by id
- Collections are tuples, replaced wholesale on commit
- One command computes one ChangeSet and commits it once
- A ChangeSet is either applied completely or not at all
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Optional, Tuple

from kargah.core.commands.errors import not_found, raise_rejection
from kargah.core.store.snapshot import COLLECTIONS, decode_snapshot, encode_snapshot

logger = logging.getLogger("kargah.store")


# ══════════════════════════════════════════════════════════════
# CHANGE SET
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ChangeSet:
    """
    All writes produced by one command.

    upserts:    records to insert or replace (matched by COLLECTION + id)
    deletions:  (collection, id) pairs to remove
    """

    upserts: Tuple[Any, ...] = ()
    deletions: Tuple[Tuple[str, int], ...] = ()

    def __post_init__(self):
        for record in self.upserts:
            if getattr(record, "COLLECTION", None) not in COLLECTIONS:
                raise ValueError(
                    f"{type(record).__name__} does not belong to a store collection."
                )
        for collection, _ in self.deletions:
            if collection not in COLLECTIONS:
                raise ValueError(f"Unknown collection '{collection}'.")

    @property
    def is_empty(self) -> bool:
        return not self.upserts and not self.deletions


# ══════════════════════════════════════════════════════════════
# ENTITY STORE
# ══════════════════════════════════════════════════════════════

class EntityStore:
    def __init__(self, collections: Optional[Dict[str, Iterable[Any]]] = None):
        collections = collections or {}
        self._collections: Dict[str, Tuple[Any, ...]] = {
            name: tuple(collections.get(name, ())) for name in COLLECTIONS
        }

    # ── Reads ─────────────────────────────────────────────────

    def all(self, collection: str) -> Tuple[Any, ...]:
        try:
            return self._collections[collection]
        except KeyError:
            raise ValueError(f"Unknown collection '{collection}'.") from None

    def get(self, collection: str, entity_id: int) -> Optional[Any]:
        for record in self.all(collection):
            if record.id == entity_id:
                return record
        return None

    def require(self, collection: str, entity_id: int, label: str) -> Any:
        record = self.get(collection, entity_id)
        if record is None:
            raise_rejection(not_found(label, entity_id, "entity_must_exist_policy"))
        return record

    def filter(self, collection: str, predicate: Callable[[Any], bool]) -> Tuple[Any, ...]:
        return tuple(r for r in self.all(collection) if predicate(r))

    # ── Writes ────────────────────────────────────────────────

    def commit(self, changes: ChangeSet) -> None:
        """Apply every upsert and deletion of one command in a single step."""
        if changes.is_empty:
            return

        staged = dict(self._collections)
        for record in changes.upserts:
            staged[record.COLLECTION] = _upsert(staged[record.COLLECTION], record)
        for collection, entity_id in changes.deletions:
            staged[collection] = tuple(
                r for r in staged[collection] if r.id != entity_id
            )
        self._collections = staged

        logger.debug(
            "Committed %d upsert(s), %d deletion(s)",
            len(changes.upserts), len(changes.deletions),
        )

    # ── Snapshot ──────────────────────────────────────────────

    def to_snapshot(self) -> dict:
        return encode_snapshot(self._collections)

    @classmethod
    def from_snapshot(cls, data: Optional[dict]) -> EntityStore:
        return cls(decode_snapshot(data))

    def replace_all(self, other: EntityStore) -> None:
        self._collections = dict(other._collections)


def _upsert(records: Tuple[Any, ...], record: Any) -> Tuple[Any, ...]:
    replaced = False
    result = []
    for existing in records:
        if existing.id == record.id:
            result.append(record)
            replaced = True
        else:
            result.append(existing)
    if not replaced:
        result.append(record)
    return tuple(result)


__all__ = ["ChangeSet", "EntityStore"]
