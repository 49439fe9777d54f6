# constellation/client/api.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


class ApiError(Exception):
    """
    A failed API call. `status_code` is the HTTP status, or 0 when the
    request never got a response (`network=True`).
    """

    def __init__(self, status_code: int, message: str, *, network: bool = False):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.network = network

    @property
    def is_validation(self) -> bool:
        return self.status_code == 400

    @property
    def is_conflict(self) -> bool:
        return self.status_code == 409


class ApiClient:
    """
    Thin JSON client over the v1 API.

    Any `httpx.Client` can be injected (a FastAPI TestClient included);
    otherwise one is built for `base_url`.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        *,
        prefix: str = "/api/v1",
        http: Optional[httpx.Client] = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self.http = http or httpx.Client(base_url=base_url, timeout=timeout_seconds)
        self.prefix = prefix.rstrip("/")
        self.token: Optional[str] = None

    def close(self) -> None:
        self.http.close()

    def _headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}

    def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {"headers": self._headers(), "json": json, "params": params}
        if timeout is not None:
            kwargs["timeout"] = timeout
        try:
            res = self.http.request(method, f"{self.prefix}{path}", **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("api request failed", extra={"path": path, "error": str(exc)})
            raise ApiError(0, "Network error, please try again.", network=True) from exc

        try:
            data = res.json()
        except ValueError:
            data = {}

        if res.is_error:
            message = data.get("detail") if isinstance(data, dict) else None
            raise ApiError(res.status_code, message or "Request failed")
        return data

    # ---------------- auth ----------------
    def register(self, name: str, email: str, password: str, avatar: Optional[str] = None) -> Dict[str, Any]:
        body = {"name": name, "email": email, "password": password}
        if avatar:
            body["avatar"] = avatar
        return self._request("POST", "/auth/register", json=body)

    def login(self, email: str, password: str) -> Dict[str, Any]:
        return self._request("POST", "/auth/login", json={"email": email, "password": password})

    def me(self) -> Dict[str, Any]:
        return self._request("GET", "/auth/me")["user"]

    # ---------------- actions ----------------
    def list_actions(self, **filters: Any) -> Dict[str, Any]:
        params = {k: v for k, v in filters.items() if v is not None}
        return self._request("GET", "/actions", params=params)

    def get_action(self, action_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/actions/{action_id}")

    def create_action(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/actions", json=payload)["action"]

    def update_action(self, action_id: str, patch: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/actions/{action_id}", json=patch)["action"]

    def join(self, action_id: str, form: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", f"/actions/{action_id}/join", json=form)

    def interact(self, action_id: str, type_: str) -> Dict[str, Any]:
        return self._request("POST", f"/actions/{action_id}/interact", json={"type": type_})

    def interested_ids(self) -> List[str]:
        return self._request("GET", "/users/me/interested")["actionIds"]

    def my_participations(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/users/me/participations")["data"]

    # ---------------- comments ----------------
    def comment(self, action_id: str, text: Optional[str], image_url: Optional[str] = None) -> Dict[str, Any]:
        return self._request(
            "POST", f"/actions/{action_id}/comments", json={"text": text, "imageUrl": image_url}
        )["comment"]

    def reply(self, comment_id: str, text: Optional[str], image_url: Optional[str] = None) -> Dict[str, Any]:
        return self._request(
            "POST", f"/comments/{comment_id}/reply", json={"text": text, "imageUrl": image_url}
        )["reply"]

    # ---------------- ai ----------------
    def recommend(self, query: str, interested_ids: List[str], *, timeout: Optional[float] = None) -> Dict[str, Any]:
        return self._request(
            "POST",
            "/ai/recommend",
            json={"query": query, "interestedIds": interested_ids},
            timeout=timeout,
        )
