# constellation/store/base.py
from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import List, Optional, Tuple

from constellation.models import Action, Comment, Interaction, InteractionType, Participation, User
from constellation.store.snapshot import Snapshot


class StorageBackend(ABC):
    """Durable home of the snapshot."""

    @abstractmethod
    def load(self) -> Optional[Snapshot]:
        """Returns None when nothing has been persisted yet."""

    @abstractmethod
    def save(self, snapshot: Snapshot) -> None:
        """Writes the full snapshot; must raise if the write did not complete."""


class ActionRepository(ABC):
    @abstractmethod
    def list_actions(self) -> List[Action]: ...

    @abstractmethod
    def get_action(self, action_id: str) -> Optional[Action]: ...

    @abstractmethod
    def add_action(self, action: Action) -> None: ...

    @abstractmethod
    def find_top_level_comment(self, comment_id: str) -> Optional[Tuple[Action, Comment]]: ...


class UserRepository(ABC):
    @abstractmethod
    def get_user(self, user_id: str) -> Optional[User]: ...

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]: ...

    @abstractmethod
    def add_user(self, user: User) -> None: ...


class ParticipationRepository(ABC):
    @abstractmethod
    def get_participation(self, action_id: str, user_id: str) -> Optional[Participation]: ...

    @abstractmethod
    def list_participations(
        self, *, action_id: Optional[str] = None, user_id: Optional[str] = None
    ) -> List[Participation]: ...

    @abstractmethod
    def add_participation(self, participation: Participation) -> None: ...


class InteractionRepository(ABC):
    @abstractmethod
    def find_interaction(
        self, action_id: str, user_id: str, type_: InteractionType
    ) -> Optional[Interaction]: ...

    @abstractmethod
    def list_interactions(
        self,
        *,
        action_id: Optional[str] = None,
        user_id: Optional[str] = None,
        type_: Optional[InteractionType] = None,
    ) -> List[Interaction]: ...

    @abstractmethod
    def add_interaction(self, interaction: Interaction) -> None: ...

    @abstractmethod
    def remove_interaction(self, interaction_id: str) -> None: ...


class Store(ActionRepository, UserRepository, ParticipationRepository, InteractionRepository):
    """
    What services depend on: the four repositories plus a unit of work.

    `transaction()` serializes check-then-act sequences and persists on exit.
    `lock` guards reads that must observe a consistent state.
    """

    lock: AbstractContextManager

    @abstractmethod
    def transaction(self) -> AbstractContextManager: ...
