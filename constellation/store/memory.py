# constellation/store/memory.py
from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Callable, Iterator, List, Optional, Tuple

from constellation.core.errors import PersistenceFailed
from constellation.models import Action, Comment, Interaction, InteractionType, Participation, User
from constellation.store.base import StorageBackend, Store
from constellation.store.snapshot import Snapshot

logger = logging.getLogger(__name__)


class InMemoryStore(Store):
    """
    Canonical in-memory state, flushed wholesale to a StorageBackend after
    every mutation.

    Mutations run inside `transaction()`:
      - the store-wide lock is held for the whole check-then-act sequence
      - on a DomainError (or any exception) the pre-mutation copy is restored
      - on a failed write the pre-mutation copy is restored and
        PersistenceFailed is raised, so memory never runs ahead of disk
    """

    def __init__(self, snapshot: Snapshot, backend: Optional[StorageBackend] = None):
        self._state = snapshot
        self._backend = backend
        self.lock = threading.RLock()
        self._depth = 0

    @classmethod
    def open(
        cls,
        backend: Optional[StorageBackend],
        seed: Optional[Callable[[], Snapshot]] = None,
    ) -> "InMemoryStore":
        snapshot = backend.load() if backend is not None else None
        if snapshot is None:
            snapshot = seed() if seed is not None else Snapshot()
            logger.info(
                "store seeded",
                extra={"actions": len(snapshot.actions), "users": len(snapshot.users)},
            )
        else:
            logger.info(
                "store loaded",
                extra={
                    "actions": len(snapshot.actions),
                    "users": len(snapshot.users),
                    "participations": len(snapshot.participations),
                    "interactions": len(snapshot.interactions),
                },
            )
        return cls(snapshot, backend)

    # ------------------------------------------------------------------
    # unit of work
    # ------------------------------------------------------------------
    @contextmanager
    def transaction(self) -> Iterator["InMemoryStore"]:
        with self.lock:
            if self._depth:
                # nested: the outermost transaction persists
                yield self
                return

            backup = self._state.model_copy(deep=True)
            self._depth = 1
            try:
                yield self
            except BaseException:
                self._state = backup
                raise
            finally:
                self._depth = 0

            self._persist(backup)

    def _persist(self, backup: Snapshot) -> None:
        if self._backend is None:
            return
        try:
            self._backend.save(self._state)
        except Exception as exc:
            logger.exception("snapshot write failed; reverting in-memory state")
            self._state = backup
            raise PersistenceFailed("Could not save changes, please retry.") from exc

    def snapshot(self) -> Snapshot:
        with self.lock:
            return self._state.model_copy(deep=True)

    # ------------------------------------------------------------------
    # actions
    # ------------------------------------------------------------------
    def list_actions(self) -> List[Action]:
        return list(self._state.actions)

    def get_action(self, action_id: str) -> Optional[Action]:
        for action in self._state.actions:
            if action.id == action_id:
                return action
        return None

    def add_action(self, action: Action) -> None:
        # newest first
        self._state.actions.insert(0, action)

    def find_top_level_comment(self, comment_id: str) -> Optional[Tuple[Action, Comment]]:
        for action in self._state.actions:
            for comment in action.comments:
                if comment.id == comment_id:
                    return action, comment
        return None

    # ------------------------------------------------------------------
    # users
    # ------------------------------------------------------------------
    def get_user(self, user_id: str) -> Optional[User]:
        for user in self._state.users:
            if user.id == user_id:
                return user
        return None

    def get_user_by_email(self, email: str) -> Optional[User]:
        needle = email.strip().lower()
        for user in self._state.users:
            if user.email.lower() == needle:
                return user
        return None

    def add_user(self, user: User) -> None:
        self._state.users.append(user)

    # ------------------------------------------------------------------
    # participations
    # ------------------------------------------------------------------
    def get_participation(self, action_id: str, user_id: str) -> Optional[Participation]:
        for p in self._state.participations:
            if p.action_id == action_id and p.user_id == user_id:
                return p
        return None

    def list_participations(
        self, *, action_id: Optional[str] = None, user_id: Optional[str] = None
    ) -> List[Participation]:
        return [
            p
            for p in self._state.participations
            if (action_id is None or p.action_id == action_id)
            and (user_id is None or p.user_id == user_id)
        ]

    def add_participation(self, participation: Participation) -> None:
        self._state.participations.append(participation)

    # ------------------------------------------------------------------
    # interactions
    # ------------------------------------------------------------------
    def find_interaction(
        self, action_id: str, user_id: str, type_: InteractionType
    ) -> Optional[Interaction]:
        for i in self._state.interactions:
            if i.action_id == action_id and i.user_id == user_id and i.type == type_:
                return i
        return None

    def list_interactions(
        self,
        *,
        action_id: Optional[str] = None,
        user_id: Optional[str] = None,
        type_: Optional[InteractionType] = None,
    ) -> List[Interaction]:
        return [
            i
            for i in self._state.interactions
            if (action_id is None or i.action_id == action_id)
            and (user_id is None or i.user_id == user_id)
            and (type_ is None or i.type == type_)
        ]

    def add_interaction(self, interaction: Interaction) -> None:
        self._state.interactions.append(interaction)

    def remove_interaction(self, interaction_id: str) -> None:
        self._state.interactions = [
            i for i in self._state.interactions if i.id != interaction_id
        ]
