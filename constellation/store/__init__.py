from __future__ import annotations

from constellation.core.config import Settings
from constellation.store.base import StorageBackend, Store  # noqa: F401
from constellation.store.memory import InMemoryStore
from constellation.store.snapshot import Snapshot  # noqa: F401


def build_backend(settings: Settings) -> StorageBackend:
    if settings.storage_backend == "sql":
        from constellation.store.sql_backend import SqlBackend

        return SqlBackend(settings.database_url)

    from constellation.store.json_backend import JsonFileBackend

    return JsonFileBackend(settings.data_file)


def build_store(settings: Settings) -> InMemoryStore:
    from constellation.seed import seed_snapshot

    return InMemoryStore.open(
        build_backend(settings),
        seed=seed_snapshot if settings.seed_on_empty else None,
    )
