"""Result types shared by the journal analysis pipeline."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

ENERGY_LEVELS = ("high", "medium", "low")
BUSINESS_CATEGORIES = ("growth", "challenge", "achievement", "planning", "learning", "research")

SOURCE_REMOTE = "remote-service"
SOURCE_LOCAL = "local-heuristic"

DEFAULT_MOOD = "reflective"
DEFAULT_CATEGORY = "learning"
DEFAULT_ENERGY = "medium"
DEFAULT_CONFIDENCE = 70


def clamp_confidence(value: float) -> int:
    """Round a 0..1 ratio to an integer percentage inside [0, 100]."""
    return int(round(min(max(value, 0.0), 1.0) * 100))


@dataclass(frozen=True, slots=True)
class ClassificationInput:
    content: str
    title: Optional[str] = None
    user_id: Optional[str] = None

    @property
    def combined_text(self) -> str:
        return f"{self.title or ''} {self.content}"


@dataclass(frozen=True, slots=True)
class ClassificationResult:
    """Unified analysis payload returned to callers and stored in the cache."""

    primary_mood: str
    confidence: int  # 0-100
    energy: str  # high, medium, low
    emotions: tuple[str, ...]
    business_category: str
    insights: tuple[str, ...] = field(default_factory=tuple)
    suggested_title: Optional[str] = None
    analysis_source: str = SOURCE_LOCAL

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary"""
        return {
            "primary_mood": self.primary_mood,
            "confidence": self.confidence,
            "energy": self.energy,
            "emotions": list(self.emotions),
            "business_category": self.business_category,
            "insights": list(self.insights),
            "suggested_title": self.suggested_title,
            "analysis_source": self.analysis_source,
        }


def default_result() -> ClassificationResult:
    """Well-formed result used when analysis fails unexpectedly."""
    return ClassificationResult(
        primary_mood=DEFAULT_MOOD,
        confidence=DEFAULT_CONFIDENCE,
        energy=DEFAULT_ENERGY,
        emotions=(),
        business_category=DEFAULT_CATEGORY,
        insights=(),
        suggested_title=None,
        analysis_source=SOURCE_LOCAL,
    )
