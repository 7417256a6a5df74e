"""
Kargah Persistence Tests
==========================
JSON file and Django-backed snapshot repositories.
"""

import json
from decimal import Decimal

import pytest


def small_snapshot():
    from kargah.core.primitives import Part
    from kargah.core.store import EntityStore
    store = EntityStore({"parts": [Part(id=1, name="Bolt", stock=Decimal("2.5"), cost=Decimal(40))]})
    return store.to_snapshot()


# ══════════════════════════════════════════════════════════════
# JSON FILE REPOSITORY
# ══════════════════════════════════════════════════════════════

class TestJsonFileRepository:

    def test_missing_file_loads_empty(self, tmp_path):
        from kargah.persistence import JsonFileSnapshotRepository
        assert JsonFileSnapshotRepository(tmp_path / "none.json").load() == {}

    def test_save_then_load(self, tmp_path):
        from kargah.persistence import JsonFileSnapshotRepository
        repo = JsonFileSnapshotRepository(tmp_path / "state" / "kargah.json")
        repo.save(small_snapshot())
        assert repo.load() == small_snapshot()

    def test_save_overwrites(self, tmp_path):
        from kargah.persistence import JsonFileSnapshotRepository
        repo = JsonFileSnapshotRepository(tmp_path / "kargah.json")
        repo.save(small_snapshot())
        repo.save({"parts": []})
        assert repo.load() == {"parts": []}

    def test_no_temp_files_left_behind(self, tmp_path):
        from kargah.persistence import JsonFileSnapshotRepository
        JsonFileSnapshotRepository(tmp_path / "kargah.json").save(small_snapshot())
        assert [p.name for p in tmp_path.iterdir()] == ["kargah.json"]

    def test_non_object_file_rejected(self, tmp_path):
        from kargah.persistence import JsonFileSnapshotRepository
        path = tmp_path / "kargah.json"
        path.write_text(json.dumps([1, 2]), encoding="utf-8")
        with pytest.raises(ValueError, match="not a JSON object"):
            JsonFileSnapshotRepository(path).load()

    def test_loaded_snapshot_rebuilds_store(self, tmp_path):
        from kargah.core.store import EntityStore
        from kargah.persistence import JsonFileSnapshotRepository
        repo = JsonFileSnapshotRepository(tmp_path / "kargah.json")
        repo.save(small_snapshot())
        part = EntityStore.from_snapshot(repo.load()).get("parts", 1)
        assert part.stock == Decimal("2.5")


# ══════════════════════════════════════════════════════════════
# DJANGO REPOSITORY
# ══════════════════════════════════════════════════════════════

@pytest.mark.django_db
class TestDjangoSnapshotRepository:

    def test_nothing_saved_loads_empty(self):
        from kargah.persistence.repository import DjangoSnapshotRepository
        assert DjangoSnapshotRepository().load() == {}

    def test_save_then_load(self):
        from kargah.persistence.repository import DjangoSnapshotRepository
        repo = DjangoSnapshotRepository("workshop-1")
        repo.save(small_snapshot())
        assert repo.load() == small_snapshot()

    def test_save_is_idempotent_per_key(self):
        from kargah.persistence.models import WorkshopSnapshot
        from kargah.persistence.repository import DjangoSnapshotRepository
        repo = DjangoSnapshotRepository("workshop-1")
        repo.save(small_snapshot())
        repo.save({"parts": []})
        assert WorkshopSnapshot.objects.count() == 1
        assert repo.load() == {"parts": []}

    def test_keys_are_isolated(self):
        from kargah.persistence.repository import DjangoSnapshotRepository
        DjangoSnapshotRepository("a").save(small_snapshot())
        assert DjangoSnapshotRepository("b").load() == {}

    def test_empty_key_rejected(self):
        from kargah.persistence.repository import DjangoSnapshotRepository
        with pytest.raises(ValueError):
            DjangoSnapshotRepository("")
