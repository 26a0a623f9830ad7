"""Keyword lexicon for business journal analysis.

Weight tables and score rules are plain data so the classifier stays a
uniform evaluator:

- ``EMOTION_LEXICON``: emotion label -> trigger phrases, weight and energy tier
- ``CATEGORY_LEXICON``: business category -> trigger phrases
- ``EMOTION_RULES`` / ``CATEGORY_RULES``: co-occurrence patterns that add a
  fixed score delta when every pattern matches and no guard pattern does

Bump ``LEXICON_VERSION`` whenever a table changes so cached or stored
analyses can be told apart.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Mapping

LEXICON_VERSION = "2024.3"

ENERGY_VALUES: Mapping[str, int] = {"high": 3, "medium": 2, "low": 1}


@dataclass(frozen=True, slots=True)
class EmotionRecord:
    label: str
    keywords: tuple[str, ...]
    weight: float  # 0.0-1.0
    energy: str  # high, medium, low


@dataclass(frozen=True, slots=True)
class CategoryRecord:
    label: str
    keywords: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class ScoreRule:
    name: str
    target: str
    delta: float
    patterns: tuple[str, ...]
    unless: tuple[str, ...] = ()


EMOTION_LEXICON: tuple[EmotionRecord, ...] = (
    EmotionRecord(
        "confident",
        ("confident", "sure", "certain", "ready", "prepared", "strong", "capable", "determined", "convinced", "assured"),
        0.9,
        "high",
    ),
    EmotionRecord(
        "excited",
        (
            "excited", "thrilled", "energized", "motivated", "enthusiastic", "passionate", "pumped", "inspired",
            "eager", "full of", "new", "ready", "cant wait", "looking forward", "anticipating", "next big",
            "big project",
        ),
        0.9,
        "high",
    ),
    EmotionRecord(
        "focused",
        ("focused", "clear", "organized", "systematic", "structured", "planned", "strategic", "methodical", "disciplined"),
        0.8,
        "medium",
    ),
    EmotionRecord(
        "optimistic",
        (
            "optimistic", "hopeful", "positive", "bright", "promising", "potential", "opportunity", "growth",
            "bullish", "good", "great", "excellent", "amazing", "wonderful", "fantastic", "awesome", "opportunities",
        ),
        0.9,
        "high",
    ),
    EmotionRecord(
        "stressed",
        (
            "stressed", "overwhelmed", "pressure", "deadline", "rushed", "tight", "demanding", "intense", "burnout",
            "anxious", "worried", "tense", "strain", "burden",
        ),
        0.8,
        "low",
    ),
    EmotionRecord(
        "uncertain",
        ("uncertain", "unsure", "confused", "unclear", "doubt", "questioning", "hesitant", "wondering", "ambiguous"),
        0.6,
        "low",
    ),
    EmotionRecord(
        "frustrated",
        ("frustrated", "stuck", "blocked", "difficult", "challenging", "obstacle", "setback", "problem", "annoyed"),
        0.8,
        "low",
    ),
    EmotionRecord(
        "sad",
        ("sad", "depressed", "down", "blue", "unhappy", "melancholy", "gloomy", "dejected", "despondent"),
        0.9,
        "low",
    ),
    EmotionRecord(
        "tired",
        (
            "tired", "exhausted", "drained", "unmotivated", "reluctant", "sluggish", "weary", "dont feel like",
            "no energy", "dont have the energy",
        ),
        0.8,
        "low",
    ),
    EmotionRecord(
        "accomplished",
        ("accomplished", "achieved", "completed", "finished", "success", "breakthrough", "milestone", "progress", "victory"),
        0.9,
        "high",
    ),
    EmotionRecord(
        "reflective",
        (
            "thinking", "considering", "reflecting", "analyzing", "reviewing", "learning", "understanding",
            "realizing", "contemplating",
        ),
        0.5,
        "medium",
    ),
    EmotionRecord(
        "determined",
        ("determined", "committed", "dedicated", "persistent", "resilient", "persevere", "push", "drive", "tenacious"),
        0.8,
        "high",
    ),
    EmotionRecord(
        "conflicted",
        ("conflicted", "torn", "mixed feelings", "bittersweet", "on the fence", "second guessing", "dilemma"),
        0.7,
        "medium",
    ),
)

CATEGORY_LEXICON: tuple[CategoryRecord, ...] = (
    CategoryRecord(
        "growth",
        (
            "scaling", "expansion", "growing", "increase", "revenue", "customers", "market", "opportunity", "profit",
            "sales", "opportunities", "new", "potential", "promising", "next big", "big project", "cant wait",
            "looking forward", "anticipating", "future", "hired", "hiring", "signups",
        ),
    ),
    CategoryRecord(
        "challenge",
        (
            "problem", "issue", "difficulty", "obstacle", "setback", "failure", "mistake", "error", "crisis",
            "struggle", "tired", "exhausted", "dont feel like", "unmotivated", "burnout", "stressed", "sad",
            "depressed", "down", "delayed", "lawsuit", "churn",
        ),
    ),
    CategoryRecord(
        "achievement",
        (
            "success", "win", "won", "accomplished", "milestone", "breakthrough", "completed", "achieved", "goal",
            "victory", "triumph", "good day", "approved", "awarded", "launched", "published",
        ),
    ),
    CategoryRecord(
        "planning",
        (
            "strategy", "plan", "roadmap", "timeline", "schedule", "prepare", "organize", "structure", "blueprint",
            "framework", "next", "project", "upcoming", "future", "budget", "quarter", "priorities",
        ),
    ),
    CategoryRecord(
        "learning",
        (
            "learned", "learning", "lesson", "realize", "realized", "understand", "insight", "insights", "feedback",
            "review", "reflect", "think", "contemplate", "evaluate", "course", "mentor", "coaching", "conference",
            "workshop",
        ),
    ),
    CategoryRecord(
        "research",
        (
            "research", "interviews", "survey", "surveys", "competitor", "competitors", "competitive analysis",
            "data", "analyzing", "analysis", "tam", "sam", "a/b test", "a/b tests", "experiment", "experiments",
            "investigating", "benchmark",
        ),
    ),
)

EMOTION_RULES: tuple[ScoreRule, ...] = (
    ScoreRule("eager_anticipation", "excited", 1.0, (r"\bexcited\b", r"\bcant wait\b|\blooking forward\b")),
    ScoreRule(
        "letting_people_go",
        "conflicted",
        2.0,
        (r"\bfired\b.{0,80}\b(?:employee|him|her|them|someone)\b|\blet\b.{0,80}\bgo\b|\bhad to fire\b|\blaid off\b",),
    ),
    ScoreRule("safety_incident", "reflective", 1.5, (r"\b(?:accident|injured|injury)\b",)),
    ScoreRule(
        "crisis_response",
        "determined",
        1.5,
        (r"\bcrisis\b.{0,80}\bmanagement\b|\bemergency\b.{0,80}\bresponse\b|\bcritical\b.{0,80}\bsituation\b",),
    ),
    ScoreRule("acquisition_offer", "focused", 1.0, (r"\bacquisition\b.{0,80}\boffer\b|\bmillion\b.{0,80}\boffer\b",)),
)

CATEGORY_RULES: tuple[ScoreRule, ...] = (
    ScoreRule(
        "dollar_growth",
        "growth",
        6.0,
        (
            r"\$\s?\d[\d,.]*\s*(?:k|m|b|million|billion|thousand)?\b",
            r"\b(?:revenue|sales|mrr|arr|profit|grew|growth|increased?|up)\b",
        ),
        unless=(r"\b(?:lost|losing|loss|losses|declined?|dropp?ed|decreased?|shortfall|down)\b",),
    ),
    ScoreRule(
        "workplace_safety",
        "challenge",
        8.0,
        (r"\b(?:accident|injured|injury|hospitali[sz]ed|osha|unsafe)\b",),
    ),
    ScoreRule(
        "patent_approval",
        "achievement",
        6.0,
        (r"\bpatent\b", r"\b(?:approved|granted|awarded|issued)\b"),
        unless=(r"\b(?:pending|waiting|seeking|hoping|applying|apply for|not yet)\b",),
    ),
    ScoreRule(
        "milestone_confirmed",
        "achievement",
        4.0,
        (
            r"\b(?:deal closed|contract signed|funding secured|investment closed|product launched|"
            r"milestone reached|goal achieved|target met|successfully launched|published our)\b",
        ),
    ),
    ScoreRule(
        "funding_round",
        "growth",
        4.0,
        (r"\b(?:series [a-d]|seed round|raised|funding round|term sheet)\b",),
        unless=(r"\b(?:failed to raise|couldnt raise|no funding)\b",),
    ),
    ScoreRule(
        "team_departure",
        "challenge",
        4.0,
        (r"\b(?:resigned|quit|fired|laid off|let go|churned|cancell?ed their contracts?)\b",),
    ),
    ScoreRule(
        "cash_pressure",
        "challenge",
        4.0,
        (r"\b(?:cash flow|credit limit|runway|overdue|delay some payments|late payments?)\b",),
    ),
    ScoreRule(
        "low_energy",
        "challenge",
        2.0,
        (r"\b(?:no energy|dont have the energy|exhausted|burned out|burnt out|burnout)\b",),
    ),
    ScoreRule(
        "customer_discovery",
        "research",
        4.0,
        (
            r"\b(?:customer interviews?|user interviews?|surveys?|a/b tests?|competitors?|competitive analysis|"
            r"market research|tam|sam|deep div(?:e|ing))\b",
        ),
    ),
    ScoreRule(
        "strategic_roadmap",
        "planning",
        3.0,
        (r"\b(?:roadmap|strategic plan|budget allocations?|next quarter|next year|initiatives)\b",),
    ),
    ScoreRule(
        "skill_building",
        "learning",
        3.0,
        (r"\b(?:course|workshop|conference|mentor|coaching|reading)\b",),
    ),
)

_APOSTROPHES = re.compile(r"[‘’'`]")
_WHITESPACE = re.compile(r"\s+")


def normalize_text(value: str) -> str:
    """Lowercase, drop apostrophes (so "can't" reads "cant") and collapse whitespace."""
    value = _APOSTROPHES.sub("", value.lower())
    return _WHITESPACE.sub(" ", value).strip()


@lru_cache(maxsize=None)
def keyword_pattern(phrase: str) -> re.Pattern[str]:
    return re.compile(rf"\b{re.escape(phrase)}\b")


@lru_cache(maxsize=None)
def _rule_pattern(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern)


def count_matches(text: str, phrase: str) -> int:
    return len(keyword_pattern(phrase).findall(text))


def rule_matches(rule: ScoreRule, text: str) -> bool:
    if not all(_rule_pattern(pattern).search(text) for pattern in rule.patterns):
        return False
    return not any(_rule_pattern(pattern).search(text) for pattern in rule.unless)


def emotion_labels() -> tuple[str, ...]:
    return tuple(record.label for record in EMOTION_LEXICON)


def category_labels() -> tuple[str, ...]:
    return tuple(record.label for record in CATEGORY_LEXICON)
