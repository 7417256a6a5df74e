"""
Kargah Persistence - App Configuration
======================================
Full-snapshot storage for a workshop session.
"""

from django.apps import AppConfig


class KargahPersistenceConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "kargah.persistence"
    label = "kargah_persistence"
    verbose_name = "Kargah Snapshot Store"
