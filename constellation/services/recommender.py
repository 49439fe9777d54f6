# constellation/services/recommender.py
from __future__ import annotations

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import httpx

from constellation.core.config import Settings
from constellation.models import Action

logger = logging.getLogger(__name__)

TOP_N = 5

SYSTEM_PROMPT = (
    "You are an assistant recommending community actions. Given the user's query, "
    "their interests and the list of actions, reply with a JSON object "
    '{"ids": [...]} holding the ids of the 5 most relevant actions, best first.'
)


@dataclass
class RecommendContext:
    actions: Sequence[Action]
    interested_ids: List[str] = field(default_factory=list)
    user_id: Optional[str] = None


@dataclass(frozen=True)
class Recommendation:
    ids: List[str]
    source: str


def _action_text(action: Action) -> str:
    tags = " ".join(
        f"{t.title or ''} {t.label} {t.description or ''}" for t in action.participation_tags
    )
    return f"{action.name} {action.summary} {action.background} {action.category} {tags}".lower()


def heuristic_rank(query: str, actions: Sequence[Action], limit: int = TOP_N) -> List[str]:
    """
    Keyword score: +2 when the query appears anywhere in the action text,
    +0.5 for each tag label containing it. Stable for equal scores.
    """
    needle = query.strip().lower()
    if not needle:
        return []

    scored = []
    for action in actions:
        score = 2.0 if needle in _action_text(action) else 0.0
        score += 0.5 * sum(1 for t in action.participation_tags if needle in t.label.lower())
        scored.append((score, action.id))

    scored.sort(key=lambda pair: pair[0], reverse=True)
    return [action_id for _, action_id in scored[:limit]]


class Recommender(ABC):
    @abstractmethod
    async def rank(self, query: str, context: RecommendContext) -> Recommendation: ...


class HeuristicRecommender(Recommender):
    async def rank(self, query: str, context: RecommendContext) -> Recommendation:
        if not query.strip():
            return Recommendation(ids=[], source="empty-query")
        return Recommendation(ids=heuristic_rank(query, context.actions), source="heuristic")


class OpenAIRecommender(Recommender):
    """
    Chat-completions backed ranking. Every failure mode degrades to the
    heuristic ranking; nothing is raised to the caller.
    """

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str,
        model: str,
        timeout_seconds: float,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    def _payload(self, query: str, context: RecommendContext) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {
                    "role": "user",
                    "content": json.dumps(
                        {
                            "query": query,
                            "userId": context.user_id,
                            "interestedIds": context.interested_ids,
                            "actions": [
                                {
                                    "id": a.id,
                                    "name": a.name,
                                    "category": a.category,
                                    "summary": a.summary,
                                    "tags": [t.to_json() for t in a.participation_tags],
                                }
                                for a in context.actions
                            ],
                        },
                        ensure_ascii=False,
                    ),
                },
            ],
            "temperature": 0.3,
            "response_format": {"type": "json_object"},
        }

    async def _call(self, query: str, context: RecommendContext) -> List[str]:
        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout_seconds),
            transport=self._transport,
        ) as client:
            response = await client.post(
                "/chat/completions",
                headers={"Authorization": f"Bearer {self.api_key}"},
                json=self._payload(query, context),
            )
            response.raise_for_status()
            data = response.json()

        text = data["choices"][0]["message"]["content"]
        parsed = json.loads(text)
        ids = parsed if isinstance(parsed, list) else parsed.get("ids")
        if not isinstance(ids, list):
            raise ValueError("unexpected response shape")

        known = {a.id for a in context.actions}
        return [str(i) for i in ids if str(i) in known][:TOP_N]

    async def rank(self, query: str, context: RecommendContext) -> Recommendation:
        if not query.strip():
            return Recommendation(ids=[], source="empty-query")

        try:
            ids = await asyncio.wait_for(self._call(query, context), timeout=self.timeout_seconds)
            return Recommendation(ids=ids, source="openai")
        except asyncio.TimeoutError:
            reason = "timeout"
        except httpx.HTTPError as exc:
            reason = "http-error"
            logger.warning("recommender request failed", extra={"error": str(exc)})
        except (KeyError, IndexError, TypeError, ValueError, AttributeError) as exc:
            reason = "bad-response"
            logger.warning("recommender response unusable", extra={"error": str(exc)})

        logger.info("recommender degraded to heuristic", extra={"reason": reason})
        return Recommendation(ids=heuristic_rank(query, context.actions), source=f"fallback:{reason}")


def build_recommender(settings: Settings) -> Recommender:
    if settings.recommender_api_key:
        return OpenAIRecommender(
            api_key=settings.recommender_api_key,
            base_url=settings.recommender_base_url,
            model=settings.recommender_model,
            timeout_seconds=settings.recommender_timeout_seconds,
        )
    return HeuristicRecommender()
