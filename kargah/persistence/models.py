"""
Kargah Persistence - Snapshot Model
===================================
One row per snapshot key holding the whole entity store as JSON.
Saving overwrites the row; there is no history.
"""

from __future__ import annotations

from django.db import models


class WorkshopSnapshot(models.Model):
    key = models.CharField(max_length=100, unique=True)
    data = models.JSONField(default=dict)
    saved_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "kargah_workshop_snapshots"
        ordering = ["key"]

    def __str__(self) -> str:
        return f"{self.key} (saved {self.saved_at})"
