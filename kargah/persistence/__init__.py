"""
Kargah Persistence
==================
Snapshot repositories for a workshop session: a JSON file, or the
Django-backed ``WorkshopSnapshot`` table (see ``repository``).
"""

from kargah.persistence.base import SnapshotRepository
from kargah.persistence.files import JsonFileSnapshotRepository

__all__ = ["SnapshotRepository", "JsonFileSnapshotRepository"]
