"""Sentiment Analyzer

Sequences one journal analysis:

    cache lookup -> remote attempt -> local fallback -> insight -> title -> cache write

The remote models supply mood, energy and confidence when reachable; the
local lexicon always decides the business category. Analysis is fail-open:
callers always receive a well-formed result.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from bizzin.core.config import Settings

from .cache import SentimentCache
from .huggingface import HuggingFaceClient, RemoteClassification, RemoteClassifierError
from .insights import InsightSynthesizer
from .local_classifier import LocalClassifier
from .results import (
    SOURCE_LOCAL,
    SOURCE_REMOTE,
    ClassificationInput,
    ClassificationResult,
    clamp_confidence,
    default_result,
)
from .titles import BusinessTitleGenerator

logger = logging.getLogger(__name__)


class SentimentAnalyzer:
    def __init__(
        self,
        settings: Settings,
        cache: SentimentCache,
        remote: Optional[HuggingFaceClient] = None,
        local: Optional[LocalClassifier] = None,
        synthesizer: Optional[InsightSynthesizer] = None,
        titles: Optional[BusinessTitleGenerator] = None,
    ) -> None:
        self.settings = settings
        self.cache = cache
        self.remote = remote
        self.local = local or LocalClassifier()
        self.synthesizer = synthesizer or InsightSynthesizer.unseeded()
        self.titles = titles or BusinessTitleGenerator()

    @classmethod
    def from_settings(cls, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> "SentimentAnalyzer":
        """Build the production wiring: shared cache, HF client and seeded or system randomness."""
        cache = SentimentCache(
            ttl_seconds=settings.sentiment_cache_ttl_seconds,
            max_size=settings.sentiment_cache_max_size,
            key_length=settings.sentiment_cache_key_length,
        )
        remote = HuggingFaceClient(settings, transport=transport) if settings.remote_enabled else None
        if settings.insight_seed is not None:
            synthesizer = InsightSynthesizer.seeded(settings.insight_seed)
        else:
            synthesizer = InsightSynthesizer.unseeded()
        return cls(settings, cache, remote=remote, synthesizer=synthesizer)

    async def aclose(self) -> None:
        if self.remote is not None:
            await self.remote.aclose()

    def should_call_remote(self, entry: ClassificationInput) -> bool:
        if self.remote is None or not self.settings.remote_enabled:
            return False
        return len(entry.combined_text.strip()) >= self.settings.remote_min_chars

    async def analyze(
        self,
        content: str,
        title: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> ClassificationResult:
        entry = ClassificationInput(content=content or "", title=title, user_id=user_id)
        key = self.cache.make_key(entry.content, entry.title)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Sentiment cache hit for %r", key[:30])
            return cached

        try:
            result = await self._classify(entry)
        except Exception:
            logger.exception("Journal analysis failed, returning default result")
            return default_result()

        self.cache.set(key, result)
        return result

    async def analyze_remote(self, text: str) -> ClassificationResult:
        """Remote-only analysis for the proxy endpoint; raises ``RemoteClassifierError``."""
        if self.remote is None:
            raise RemoteClassifierError("Remote analysis is disabled")
        try:
            remote = await self.remote.classify(text)
        except httpx.HTTPError as exc:
            raise RemoteClassifierError("Hugging Face request failed", details=str(exc)) from exc
        return self._from_remote(ClassificationInput(content=text), remote, suggest_title=False)

    def status(self) -> dict[str, Any]:
        return {
            "remote_enabled": self.remote is not None and self.settings.remote_enabled,
            "remote_configured": bool(self.remote and self.remote.configured),
            "usage_stats": self.remote.usage_stats() if self.remote else None,
            "cache_size": len(self.cache),
        }

    async def _classify(self, entry: ClassificationInput) -> ClassificationResult:
        if self.should_call_remote(entry):
            try:
                remote = await self.remote.classify(entry.combined_text)  # type: ignore[union-attr]
            except (RemoteClassifierError, httpx.HTTPError) as exc:
                logger.warning("Remote analysis unavailable, using local classifier: %s", exc)
            else:
                return self._from_remote(entry, remote, suggest_title=True)
        return self._from_local(entry)

    def _from_remote(
        self,
        entry: ClassificationInput,
        remote: RemoteClassification,
        suggest_title: bool,
    ) -> ClassificationResult:
        text = entry.combined_text
        category = self.local.classify_category(text)
        confidence = clamp_confidence(remote.confidence)
        insights = self.synthesizer.synthesize(remote.primary_mood, category, text, confidence)
        return ClassificationResult(
            primary_mood=remote.primary_mood,
            confidence=confidence,
            energy=remote.energy,
            emotions=tuple(remote.emotions[:3]),
            business_category=category,
            insights=tuple(insights),
            suggested_title=self._title(entry, category, remote.primary_mood, remote.energy) if suggest_title else None,
            analysis_source=SOURCE_REMOTE,
        )

    def _from_local(self, entry: ClassificationInput) -> ClassificationResult:
        text = entry.combined_text
        local = self.local.classify(text)
        confidence = clamp_confidence(local.confidence)
        insights = self.synthesizer.synthesize(local.primary_mood, local.business_category, text, confidence)
        return ClassificationResult(
            primary_mood=local.primary_mood,
            confidence=confidence,
            energy=local.energy,
            emotions=tuple(local.emotions),
            business_category=local.business_category,
            insights=tuple(insights),
            suggested_title=self._title(entry, local.business_category, local.primary_mood, local.energy),
            analysis_source=SOURCE_LOCAL,
        )

    def _title(self, entry: ClassificationInput, category: str, mood: str, energy: str) -> Optional[str]:
        if entry.title and entry.title.strip():
            return None
        return self.titles.generate_title(entry.content, category, mood, energy)
