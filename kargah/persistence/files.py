"""
Kargah Persistence - JSON File Repository
=========================================
Snapshot kept in a single JSON file. Writes go to a temporary file
in the same directory which then replaces the target, so a crash
mid-write leaves the previous snapshot intact.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Union

logger = logging.getLogger("kargah.persistence")


class JsonFileSnapshotRepository:
    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> dict:
        if not self._path.exists():
            logger.info("No snapshot at %s; starting empty", self._path)
            return {}
        with self._path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
        if not isinstance(data, dict):
            raise ValueError(f"Snapshot at {self._path} is not a JSON object.")
        return data

    def save(self, snapshot: dict) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(snapshot, fh, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self._path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
        logger.info("Snapshot saved to %s", self._path)
