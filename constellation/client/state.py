# constellation/client/state.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional

from constellation.client.api import ApiClient, ApiError
from constellation.models import Action
from constellation.services.recommender import heuristic_rank

logger = logging.getLogger(__name__)

Page = Literal["home", "action", "participated", "interested"]
ActionFilter = Literal["all", "mine"]

ALL_CATEGORIES = "All"
RECOMMEND_TIMEOUT_SECONDS = 5.0
RECOMMEND_DEGRADED_STATUS = "Smart suggestions are unavailable, showing keyword matches."


@dataclass
class ClientState:
    actions: List[Dict[str, Any]] = field(default_factory=list)
    user: Optional[Dict[str, Any]] = None
    token: Optional[str] = None
    selected_id: Optional[str] = None
    page: Page = "home"
    category: str = ALL_CATEGORIES
    action_filter: ActionFilter = "all"
    interested_ids: List[str] = field(default_factory=list)
    status_text: Optional[str] = None


class ClientStateController:
    """
    Holds what the UI shows and folds server responses back into it.

    Local state only changes after the server accepts a write, with one
    exception: toggling `interested` flips the id immediately and reverts
    if the call fails.
    """

    def __init__(self, api: ApiClient, state: Optional[ClientState] = None):
        self.api = api
        self.state = state or ClientState()

    # ---------------- session ----------------
    def bootstrap(self) -> None:
        self.refresh()
        if self.state.token:
            self.api.token = self.state.token
            self.state.user = self.api.me()
            self.state.interested_ids = self.api.interested_ids()

    def register(self, name: str, email: str, password: str) -> Dict[str, Any]:
        return self._start_session(self.api.register(name, email, password))

    def login(self, email: str, password: str) -> Dict[str, Any]:
        return self._start_session(self.api.login(email, password))

    def _start_session(self, result: Dict[str, Any]) -> Dict[str, Any]:
        self.state.token = result["token"]
        self.state.user = result["user"]
        self.api.token = self.state.token
        self.state.interested_ids = self.api.interested_ids()
        return self.state.user

    def logout(self) -> None:
        self.api.token = None
        self.state.token = None
        self.state.user = None
        self.state.interested_ids = []
        self.state.page = "home"

    def refresh(self) -> None:
        self.state.actions = self.api.list_actions(pageSize=50)["data"]

    # ---------------- navigation ----------------
    def open_action(self, action_id: str) -> None:
        self.state.selected_id = action_id

    def close_action(self) -> None:
        self.state.selected_id = None

    def navigate(self, page: Page, action_filter: ActionFilter = "all") -> None:
        self.state.page = page
        if page == "action":
            self.state.action_filter = action_filter

    def set_category(self, category: str) -> None:
        self.state.category = category

    @property
    def selected(self) -> Optional[Dict[str, Any]]:
        if self.state.selected_id is None:
            return None
        return self._find(self.state.selected_id)

    # ---------------- derived views ----------------
    @property
    def categories(self) -> List[str]:
        seen: List[str] = []
        for a in self.state.actions:
            if a["category"] not in seen:
                seen.append(a["category"])
        return [ALL_CATEGORIES, *seen]

    @property
    def visible(self) -> List[Dict[str, Any]]:
        if self.state.category == ALL_CATEGORIES:
            return list(self.state.actions)
        return [a for a in self.state.actions if a["category"] == self.state.category]

    @property
    def mine(self) -> List[Dict[str, Any]]:
        uid = self._user_id()
        return [a for a in self.state.actions if uid and a["ownerId"] == uid]

    @property
    def participated(self) -> List[Dict[str, Any]]:
        uid = self._user_id()
        if not uid:
            return []
        return [a for a in self.state.actions if any(p["userId"] == uid for p in a["participants"])]

    @property
    def interested(self) -> List[Dict[str, Any]]:
        ids = set(self.state.interested_ids)
        return [a for a in self.state.actions if a["id"] in ids]

    # ---------------- writes ----------------
    def create(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        action = self.api.create_action(payload)
        self.state.actions.insert(0, action)
        return action

    def update(self, action_id: str, patch: Dict[str, Any]) -> Dict[str, Any]:
        action = self.api.update_action(action_id, patch)
        self._replace(action)
        return action

    def join(self, action_id: str, form: Dict[str, Any]) -> Dict[str, Any]:
        result = self.api.join(action_id, form)
        action = self._find(action_id)
        if action is not None:
            uid = result["participation"]["userId"]
            action["participants"].append(
                {"userId": uid, "key": f"{uid}-{action_id}", "pointIndex": result["pointIndex"]}
            )
        return result

    def toggle_interaction(self, action_id: str, type_: str) -> Dict[str, Any]:
        previous = list(self.state.interested_ids)
        if type_ == "interested":
            if action_id in previous:
                self.state.interested_ids = [i for i in previous if i != action_id]
            else:
                self.state.interested_ids = [*previous, action_id]

        try:
            result = self.api.interact(action_id, type_)
        except ApiError:
            self.state.interested_ids = previous
            raise

        self.state.interested_ids = list(result["interestedIds"])
        action = self._find(action_id)
        if action is not None:
            action["interactions"] = result["summary"]
        return result

    def comment(self, action_id: str, text: Optional[str], image_url: Optional[str] = None) -> Dict[str, Any]:
        comment = self.api.comment(action_id, text, image_url)
        action = self._find(action_id)
        if action is not None:
            action["comments"].append(comment)
        return comment

    def reply(self, comment_id: str, text: Optional[str], image_url: Optional[str] = None) -> Dict[str, Any]:
        reply = self.api.reply(comment_id, text, image_url)
        for action in self.state.actions:
            parent = next((c for c in action["comments"] if c["id"] == comment_id), None)
            if parent is not None:
                parent.setdefault("replies", []).append(reply)
                break
        return reply

    def recommend(self, query: str) -> List[str]:
        self.state.status_text = None
        try:
            result = self.api.recommend(
                query, list(self.state.interested_ids), timeout=RECOMMEND_TIMEOUT_SECONDS
            )
        except ApiError as exc:
            logger.info("recommend degraded to local ranking", extra={"status": exc.status_code})
            self.state.status_text = RECOMMEND_DEGRADED_STATUS
            actions = [Action.model_validate(a) for a in self.state.actions]
            return heuristic_rank(query, actions)

        if str(result.get("source", "")).startswith("fallback"):
            self.state.status_text = RECOMMEND_DEGRADED_STATUS
        return list(result.get("ids", []))

    # ---------------- helpers ----------------
    def _user_id(self) -> Optional[str]:
        return self.state.user["id"] if self.state.user else None

    def _find(self, action_id: str) -> Optional[Dict[str, Any]]:
        return next((a for a in self.state.actions if a["id"] == action_id), None)

    def _replace(self, action: Dict[str, Any]) -> None:
        self.state.actions = [action if a["id"] == action["id"] else a for a in self.state.actions]
