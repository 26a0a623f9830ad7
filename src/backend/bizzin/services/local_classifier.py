"""Local Classifier Service

Keyword-weighted mood, energy and business category detection that runs
without any network access. Used as the fallback when the remote models are
unavailable and as the category pass for every analysis.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from .lexicon import (
    CATEGORY_LEXICON,
    CATEGORY_RULES,
    EMOTION_LEXICON,
    EMOTION_RULES,
    ENERGY_VALUES,
    CategoryRecord,
    EmotionRecord,
    ScoreRule,
    count_matches,
    normalize_text,
    rule_matches,
)
from .results import DEFAULT_CATEGORY, DEFAULT_ENERGY, DEFAULT_MOOD

logger = logging.getLogger(__name__)

MAX_EMOTIONS = 3
FULL_CONFIDENCE_SCORE = 3.0
MIN_MATCHED_CONFIDENCE = 0.6
UNMATCHED_CONFIDENCE = 0.7


@dataclass(slots=True)
class LocalClassification:
    primary_mood: str
    confidence: float  # 0.0-1.0
    energy: str
    emotions: list[str]
    business_category: str
    raw_score: float
    emotion_scores: dict[str, float] = field(default_factory=dict)
    category_scores: dict[str, float] = field(default_factory=dict)


class LocalClassifier:
    """Scores journal text against the keyword lexicon."""

    def __init__(
        self,
        emotions: Sequence[EmotionRecord] = EMOTION_LEXICON,
        categories: Sequence[CategoryRecord] = CATEGORY_LEXICON,
        emotion_rules: Sequence[ScoreRule] = EMOTION_RULES,
        category_rules: Sequence[ScoreRule] = CATEGORY_RULES,
    ) -> None:
        self.emotions = tuple(emotions)
        self.categories = tuple(categories)
        self.emotion_rules = tuple(emotion_rules)
        self.category_rules = tuple(category_rules)
        self._energy_by_label = {record.label: record.energy for record in self.emotions}

    def classify(self, text: str) -> LocalClassification:
        normalized = normalize_text(text or "")
        emotion_scores = self.score_emotions(normalized)
        category_scores = self.score_categories(normalized)

        ranked = _rank(emotion_scores)
        if ranked:
            primary_mood, raw_score = ranked[0]
            confidence = max(min(raw_score / FULL_CONFIDENCE_SCORE, 1.0), MIN_MATCHED_CONFIDENCE)
        else:
            primary_mood, raw_score = DEFAULT_MOOD, 0.0
            confidence = UNMATCHED_CONFIDENCE

        category_ranked = _rank(category_scores)
        business_category = category_ranked[0][0] if category_ranked else DEFAULT_CATEGORY

        return LocalClassification(
            primary_mood=primary_mood,
            confidence=confidence,
            energy=self._energy(emotion_scores),
            emotions=[label for label, _ in ranked[:MAX_EMOTIONS]],
            business_category=business_category,
            raw_score=raw_score,
            emotion_scores=emotion_scores,
            category_scores=category_scores,
        )

    def classify_category(self, text: str) -> str:
        ranked = _rank(self.score_categories(normalize_text(text or "")))
        return ranked[0][0] if ranked else DEFAULT_CATEGORY

    def score_emotions(self, normalized: str) -> dict[str, float]:
        scores = {
            record.label: sum(count_matches(normalized, keyword) for keyword in record.keywords) * record.weight
            for record in self.emotions
        }
        _apply_rules(scores, self.emotion_rules, normalized)
        return scores

    def score_categories(self, normalized: str) -> dict[str, float]:
        scores = {
            record.label: float(sum(count_matches(normalized, keyword) for keyword in record.keywords))
            for record in self.categories
        }
        _apply_rules(scores, self.category_rules, normalized)
        return scores

    def explain(self, text: str) -> list[str]:
        """Names of the emotion and category rules that fire for ``text``."""
        normalized = normalize_text(text or "")
        return [
            rule.name
            for rule in (*self.emotion_rules, *self.category_rules)
            if rule_matches(rule, normalized)
        ]

    def _energy(self, emotion_scores: dict[str, float]) -> str:
        total = 0.0
        weighted = 0.0
        for label, score in emotion_scores.items():
            if score <= 0:
                continue
            total += score
            weighted += score * ENERGY_VALUES[self._energy_by_label.get(label, DEFAULT_ENERGY)]
        if total <= 0:
            return DEFAULT_ENERGY
        average = weighted / total
        if average >= 2.5:
            return "high"
        if average >= 1.5:
            return "medium"
        return "low"


def _apply_rules(scores: dict[str, float], rules: Iterable[ScoreRule], normalized: str) -> None:
    for rule in rules:
        if rule.target not in scores:
            logger.warning("Score rule %s targets unknown label %s", rule.name, rule.target)
            continue
        if rule_matches(rule, normalized):
            scores[rule.target] += rule.delta


def _rank(scores: dict[str, float]) -> list[tuple[str, float]]:
    # sorted() is stable, so equal scores keep table order.
    return sorted(
        ((label, score) for label, score in scores.items() if score > 0),
        key=lambda item: item[1],
        reverse=True,
    )
