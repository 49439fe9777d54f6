# constellation/db/tables.py
from __future__ import annotations

from typing import Any, Dict

from sqlalchemy import JSON, Integer, String, UniqueConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column

from constellation.db.base import Base


class StoreMetaRow(Base):
    __tablename__ = "store_meta"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[str] = mapped_column(String(256), nullable=False)


class UserRow(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    # stored lower-cased, so a plain unique constraint is case-insensitive
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    payload_json: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False)


class ActionRow(Base):
    __tablename__ = "actions"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    owner_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    # list order of the in-memory store (0 = newest)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    payload_json: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False)


class ParticipationRow(Base):
    __tablename__ = "participations"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    action_id: Mapped[str] = mapped_column(String(64), nullable=False)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    payload_json: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False)

    __table_args__ = (
        UniqueConstraint("action_id", "user_id", name="uq_participation_action_user"),
        Index("ix_participations_user", "user_id"),
    )


class InteractionRow(Base):
    __tablename__ = "interactions"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    action_id: Mapped[str] = mapped_column(String(64), nullable=False)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    type: Mapped[str] = mapped_column(String(16), nullable=False)
    created_at: Mapped[str] = mapped_column(String(40), nullable=False)

    __table_args__ = (
        UniqueConstraint("action_id", "user_id", "type", name="uq_interaction_action_user_type"),
        Index("ix_interactions_user_type", "user_id", "type"),
    )
