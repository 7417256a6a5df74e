"""
Kargah Persistence - Repository Protocol
========================================
Persistence is best-effort and idempotent: ``save`` overwrites the
whole snapshot, ``load`` returns ``{}`` when nothing was saved.
"""

from __future__ import annotations

from typing import Protocol


class SnapshotRepository(Protocol):
    def load(self) -> dict:
        ...

    def save(self, snapshot: dict) -> None:
        ...
