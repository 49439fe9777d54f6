from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

from constellation.store.base import StorageBackend
from constellation.store.snapshot import Snapshot, upgrade_snapshot

logger = logging.getLogger(__name__)


class JsonFileBackend(StorageBackend):
    """
    Single JSON document on disk. Writes go to a sibling temp file and are
    moved into place with os.replace, so a crash mid-write leaves the
    previous snapshot intact.
    """

    def __init__(self, path: str | os.PathLike):
        self.path = Path(path)

    def load(self) -> Optional[Snapshot]:
        if not self.path.exists():
            return None
        raw = json.loads(self.path.read_text(encoding="utf-8"))
        return upgrade_snapshot(raw)

    def save(self, snapshot: Snapshot) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        payload = json.dumps(snapshot.to_json(), ensure_ascii=False, indent=2)
        with open(tmp, "w", encoding="utf-8") as fh:
            fh.write(payload)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp, self.path)
        logger.debug("snapshot written", extra={"path": str(self.path)})
