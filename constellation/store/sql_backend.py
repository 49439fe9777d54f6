# constellation/store/sql_backend.py
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import delete, select

from constellation.db.base import Base
from constellation.db.session import make_engine, make_session_factory
from constellation.db.tables import (
    ActionRow,
    InteractionRow,
    ParticipationRow,
    StoreMetaRow,
    UserRow,
)
from constellation.store.base import StorageBackend
from constellation.store.snapshot import Snapshot, upgrade_snapshot

logger = logging.getLogger(__name__)

SCHEMA_VERSION_KEY = "schema_version"


class SqlBackend(StorageBackend):
    """
    Snapshot persisted into relational tables. Each save replaces every row
    inside one transaction; the unique constraints on participations and
    interactions back the in-memory invariants.
    """

    def __init__(self, database_url: str):
        self.engine = make_engine(database_url)
        Base.metadata.create_all(self.engine)
        self.SessionLocal = make_session_factory(self.engine)

    def load(self) -> Optional[Snapshot]:
        with self.SessionLocal() as db:
            meta = db.get(StoreMetaRow, SCHEMA_VERSION_KEY)
            if meta is None:
                return None

            actions = db.execute(select(ActionRow).order_by(ActionRow.position)).scalars().all()
            users = db.execute(select(UserRow)).scalars().all()
            participations = db.execute(select(ParticipationRow)).scalars().all()
            interactions = db.execute(
                select(InteractionRow).order_by(InteractionRow.created_at)
            ).scalars().all()

            raw = {
                "schemaVersion": int(meta.value),
                "users": [u.payload_json for u in users],
                "actions": [a.payload_json for a in actions],
                "participations": [p.payload_json for p in participations],
                "interactions": [
                    {
                        "id": i.id,
                        "actionId": i.action_id,
                        "userId": i.user_id,
                        "type": i.type,
                        "createdAt": i.created_at,
                    }
                    for i in interactions
                ],
            }
        return upgrade_snapshot(raw)

    def save(self, snapshot: Snapshot) -> None:
        with self.SessionLocal.begin() as db:
            for table in (InteractionRow, ParticipationRow, ActionRow, UserRow):
                db.execute(delete(table))

            db.add_all(
                UserRow(id=u.id, email=u.email.lower(), payload_json=u.to_json())
                for u in snapshot.users
            )
            db.add_all(
                ActionRow(id=a.id, owner_id=a.owner_id, position=pos, payload_json=a.to_json())
                for pos, a in enumerate(snapshot.actions)
            )
            db.add_all(
                ParticipationRow(
                    id=p.id, action_id=p.action_id, user_id=p.user_id, payload_json=p.to_json()
                )
                for p in snapshot.participations
            )
            db.add_all(
                InteractionRow(
                    id=i.id,
                    action_id=i.action_id,
                    user_id=i.user_id,
                    type=i.type.value,
                    created_at=i.created_at,
                )
                for i in snapshot.interactions
            )
            db.merge(StoreMetaRow(key=SCHEMA_VERSION_KEY, value=str(snapshot.schema_version)))
        logger.debug("snapshot written", extra={"backend": "sql"})
