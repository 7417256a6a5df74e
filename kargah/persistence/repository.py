"""
Kargah Persistence - Django Snapshot Repository
===============================================
Stores the full snapshot in WorkshopSnapshot under a key.
Requires the ``kargah.persistence`` app in INSTALLED_APPS.
"""

from __future__ import annotations

import logging

from django.db import transaction

from kargah.persistence.models import WorkshopSnapshot

logger = logging.getLogger("kargah.persistence")


class DjangoSnapshotRepository:
    def __init__(self, key: str = "default"):
        if not key:
            raise ValueError("key must be non-empty.")
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> dict:
        row = WorkshopSnapshot.objects.filter(key=self._key).first()
        if row is None:
            logger.info("No snapshot stored under '%s'; starting empty", self._key)
            return {}
        return dict(row.data or {})

    def save(self, snapshot: dict) -> None:
        with transaction.atomic():
            WorkshopSnapshot.objects.update_or_create(
                key=self._key, defaults={"data": snapshot},
            )
        logger.info("Snapshot saved under '%s'", self._key)
