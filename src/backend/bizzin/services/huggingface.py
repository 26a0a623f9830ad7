"""Hugging Face Inference Client

Calls the hosted sentiment and emotion models in parallel and maps their
label taxonomies onto journal moods. Transient failures are retried with a
fixed budget; 429/403 responses switch the client into quota mode where
calls fail fast until the reset window passes.
"""
from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Awaitable, Callable, Optional

import httpx
from tenacity import AsyncRetrying, RetryCallState, before_sleep_log, retry_if_exception_type, stop_after_attempt

from bizzin.core.config import Settings

logger = logging.getLogger(__name__)

# sentiment type -> (mood, energy) when the emotion model is not decisive
SENTIMENT_MOODS = {
    "positive": ("optimistic", "medium"),
    "negative": ("uncertain", "medium"),
    "neutral": ("focused", "medium"),
}
# (emotion, sentiment type, tier) -> (mood, energy); tier None matches any tier
REMOTE_MOODS: dict[tuple[str, str, Optional[str]], tuple[str, str]] = {
    ("joy", "positive", "high"): ("excited", "high"),
    ("surprise", "positive", "high"): ("excited", "high"),
    ("neutral", "positive", "high"): ("confident", "high"),
    ("joy", "positive", "med"): ("optimistic", "medium"),
    ("surprise", "positive", "med"): ("optimistic", "medium"),
    ("neutral", "positive", "med"): ("focused", "medium"),
    ("anger", "negative", "high"): ("frustrated", "medium"),
    ("fear", "negative", "high"): ("uncertain", "low"),
    ("sadness", "negative", "high"): ("reflective", "low"),
    ("disgust", "negative", "high"): ("frustrated", "medium"),
    ("anger", "negative", "med"): ("stressed", "medium"),
    ("fear", "negative", "med"): ("uncertain", "low"),
    ("sadness", "negative", "med"): ("reflective", "low"),
    ("anger", "neutral", None): ("determined", "medium"),
    ("joy", "neutral", None): ("accomplished", "medium"),
    ("surprise", "neutral", None): ("focused", "medium"),
}
# secondary emotion label for each emotion model class
EMOTION_MOODS = {
    "joy": "excited",
    "surprise": "excited",
    "anger": "frustrated",
    "disgust": "frustrated",
    "fear": "uncertain",
    "sadness": "reflective",
    "neutral": "focused",
}

HIGH_TIER_SCORE = 0.8
MED_TIER_SCORE = 0.5
EMOTION_MIN_SCORE = 0.4
CONFIDENCE_FLOOR = 0.75
CONFIDENCE_CEILING = 0.95
QUOTA_STATUS_CODES = {403, 429}


class RemoteClassifierError(Exception):
    """Raised when the remote models cannot produce a classification."""

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.details = details


class RemoteClassifierUnavailable(RemoteClassifierError):
    """No API token configured or the quota flag is set."""


class RemoteResponseError(RemoteClassifierError):
    """Upstream returned a body that is not a ranked label list."""


@dataclass(slots=True)
class LabelScore:
    label: str
    score: float


@dataclass(slots=True)
class RemoteClassification:
    primary_mood: str
    confidence: float  # 0.0-1.0
    energy: str
    emotions: list[str]
    sentiment: LabelScore
    emotion: LabelScore


@dataclass(slots=True)
class UsageStats:
    requests: int = 0
    errors: int = 0
    last_request_at: Optional[float] = None
    quota_exceeded: bool = False
    quota_since: Optional[float] = field(default=None, repr=False)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data.pop("quota_since")
        return data


class HuggingFaceClient:
    """Async client for the Hugging Face inference API"""

    def __init__(
        self,
        settings: Settings,
        client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.settings = settings
        self.base_url = settings.hf_inference_url.rstrip("/")
        self.token = settings.huggingface_token
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=settings.hf_timeout_seconds, transport=transport)
        self._sleep = sleep
        self._clock = clock
        self.stats = UsageStats()

    @property
    def configured(self) -> bool:
        return bool(self.token)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def usage_stats(self) -> dict[str, Any]:
        self._maybe_reset_quota()
        return self.stats.to_dict()

    async def classify(self, text: str) -> RemoteClassification:
        """Run both models and map the top labels to a mood.

        If either call fails the other is cancelled and awaited before the
        error propagates, so no request outlives the classification.
        """
        tasks = (
            asyncio.ensure_future(self.top_label(self.settings.hf_sentiment_model, text)),
            asyncio.ensure_future(
                self.top_label(self.settings.hf_emotion_model, text[: self.settings.hf_emotion_max_chars])
            ),
        )
        try:
            sentiment, emotion = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        return map_remote_labels(sentiment, emotion)

    async def top_label(self, model: str, text: str) -> LabelScore:
        ranked = await self.query(model, text)
        return ranked[0]

    async def query(self, model: str, text: str) -> list[LabelScore]:
        """POST ``text`` to ``model`` with retries and return labels ranked by score."""
        if not self.configured:
            raise RemoteClassifierUnavailable("Hugging Face API key not configured")
        self._maybe_reset_quota()
        if self.stats.quota_exceeded:
            logger.warning("Hugging Face quota exceeded, skipping remote call")
            raise RemoteClassifierUnavailable("Hugging Face quota exceeded")

        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.settings.hf_max_retries + 1),
            wait=self._wait_for,
            retry=retry_if_exception_type((httpx.HTTPStatusError, httpx.TransportError, RemoteResponseError)),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            sleep=self._sleep,
            reraise=True,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    return await self._post(model, text)
        except RemoteClassifierError:
            raise
        except httpx.HTTPStatusError as exc:
            raise RemoteClassifierError(
                f"Hugging Face API error: {exc.response.status_code}",
                details=exc.response.text[:200] or str(exc),
            ) from exc
        except httpx.HTTPError as exc:
            raise RemoteClassifierError("Hugging Face request failed", details=str(exc)) from exc
        raise RemoteClassifierError("Hugging Face request failed")  # pragma: no cover

    async def _post(self, model: str, text: str) -> list[LabelScore]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        self.stats.requests += 1
        self.stats.last_request_at = self._clock()
        try:
            response = await self._client.post(
                f"{self.base_url}/{model}",
                headers=headers,
                json={"inputs": text, "options": {"wait_for_model": True}},
            )
        except httpx.TransportError as exc:
            self.stats.errors += 1
            logger.warning("Hugging Face request error for %s: %s", model, exc)
            raise

        if response.status_code in QUOTA_STATUS_CODES:
            self.stats.errors += 1
            self.stats.quota_exceeded = True
            self.stats.quota_since = self._clock()
            logger.error("Hugging Face quota or rate limit hit (%s)", response.status_code)
            raise RemoteClassifierUnavailable(
                "Hugging Face quota exceeded",
                details=f"HTTP {response.status_code}",
            )
        if response.is_error:
            self.stats.errors += 1
            logger.warning("Hugging Face HTTP error for %s: %s", model, response.status_code)
            response.raise_for_status()

        try:
            body = response.json()
        except ValueError as exc:
            self.stats.errors += 1
            raise RemoteResponseError("Hugging Face returned invalid JSON", details=str(exc)) from exc
        try:
            return parse_ranked_labels(body)
        except RemoteResponseError:
            self.stats.errors += 1
            raise

    def _wait_for(self, retry_state: RetryCallState) -> float:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        unavailable = isinstance(exc, httpx.HTTPStatusError) and exc.response.status_code == 503
        base = self.settings.hf_unavailable_backoff_seconds if unavailable else self.settings.hf_retry_backoff_seconds
        return base * retry_state.attempt_number

    def _maybe_reset_quota(self) -> None:
        if not self.stats.quota_exceeded or self.stats.quota_since is None:
            return
        if self._clock() - self.stats.quota_since >= self.settings.hf_quota_reset_seconds:
            logger.info("Hugging Face quota window elapsed, re-enabling remote calls")
            self.stats.quota_exceeded = False
            self.stats.quota_since = None


def parse_ranked_labels(body: Any) -> list[LabelScore]:
    """Parse ``[{label, score}, ...]`` (optionally nested one level) into a ranked list."""
    if isinstance(body, dict) and "error" in body:
        raise RemoteResponseError("Hugging Face API error", details=str(body["error"]))
    if isinstance(body, list) and body and isinstance(body[0], list):
        body = body[0]
    if not isinstance(body, list) or not body:
        raise RemoteResponseError("Unexpected Hugging Face response shape", details=repr(body)[:200])

    ranked: list[LabelScore] = []
    for item in body:
        if not isinstance(item, dict) or not isinstance(item.get("label"), str):
            raise RemoteResponseError("Unexpected Hugging Face label entry", details=repr(item)[:200])
        try:
            score = float(item.get("score", 0.0))
        except (TypeError, ValueError) as exc:
            raise RemoteResponseError("Non-numeric Hugging Face score", details=repr(item)[:200]) from exc
        ranked.append(LabelScore(label=item["label"], score=score))
    ranked.sort(key=lambda entry: entry.score, reverse=True)
    return ranked


def normalize_sentiment_label(label: str) -> str:
    lowered = label.lower()
    if lowered in SENTIMENT_MOODS:
        return lowered
    if label == "LABEL_2":
        return "positive"
    if label == "LABEL_0":
        return "negative"
    if label == "LABEL_1":
        return "neutral"
    if "pos" in lowered:
        return "positive"
    if "neg" in lowered:
        return "negative"
    if "neutral" not in lowered:
        logger.warning("Unknown sentiment label format: %s, defaulting to neutral", label)
    return "neutral"


def confidence_tier(score: float) -> str:
    if score > HIGH_TIER_SCORE:
        return "high"
    if score > MED_TIER_SCORE:
        return "med"
    return "low"


def map_remote_labels(sentiment: LabelScore, emotion: LabelScore) -> RemoteClassification:
    """Combine the top sentiment and emotion labels into a mood, energy and confidence.

    The emotion only counts once it scores above 0.4; the mood is then keyed
    on emotion, sentiment type and the sentiment's confidence tier. Confidence
    is the stronger of the two scores held to the 0.75-0.95 band.
    """
    sentiment_type = normalize_sentiment_label(sentiment.label)
    emotion_label = emotion.label.lower()

    mapped = None
    if emotion.score > EMOTION_MIN_SCORE:
        tier = confidence_tier(sentiment.score)
        mapped = REMOTE_MOODS.get((emotion_label, sentiment_type, tier)) or REMOTE_MOODS.get(
            (emotion_label, sentiment_type, None)
        )
    primary, energy = mapped or SENTIMENT_MOODS[sentiment_type]

    emotions = [primary]
    for mood in (SENTIMENT_MOODS[sentiment_type][0], EMOTION_MOODS.get(emotion_label)):
        if mood and mood not in emotions:
            emotions.append(mood)

    score = max(sentiment.score, emotion.score)
    return RemoteClassification(
        primary_mood=primary,
        confidence=min(max(score, CONFIDENCE_FLOOR), CONFIDENCE_CEILING),
        energy=energy,
        emotions=emotions[:3],
        sentiment=sentiment,
        emotion=emotion,
    )
