"""Business Title Generator

Builds a short, title-cased heading for a journal entry from its content,
business category, mood and energy. Candidates come from per-category
template pools; placeholders are filled from business elements found in
the content and the best-scoring candidate wins.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

MAX_TITLE_LENGTH = 60
EMPTY_CONTENT_TITLE = "Journal Entry"
SUGGESTION_COUNT = 5
# Element extraction only looks at the head of long entries.
MAX_SCAN_CHARS = 2000

_PLACEHOLDER = re.compile(r"\{(\w+)\}")
_METRIC = re.compile(
    r"(?<!\d)\d{1,12}[%$]?[\w\s]{0,40}(?:increase|decrease|growth|revenue|profit|clients?|users?|months?)",
    re.IGNORECASE,
)
_WHITESPACE = re.compile(r"\s+")
_WORD_START = re.compile(r"\b\w")


@dataclass(slots=True)
class BusinessElements:
    financial: Optional[str] = None
    people: Optional[str] = None
    product: Optional[str] = None
    strategy: Optional[str] = None
    challenge: Optional[str] = None
    success: Optional[str] = None
    metrics: Optional[str] = None
    word_count: int = 0


class BusinessTitleGenerator:
    """Generates compelling titles for business journal entries"""

    FINANCIAL_TERMS = ("revenue", "profit", "loss", "cash flow", "funding", "investment", "cost", "budget", "sales")
    PEOPLE_TERMS = ("team", "employee", "hire", "fired", "client", "customer", "partner", "investor")
    PRODUCT_TERMS = ("product", "feature", "launch", "release", "development", "design", "platform", "service")
    STRATEGY_TERMS = ("strategy", "plan", "goal", "milestone", "target", "growth", "expansion", "market")
    CHALLENGE_TERMS = ("problem", "issue", "challenge", "difficulty", "struggle", "crisis", "failure", "setback")
    SUCCESS_TERMS = ("success", "achievement", "accomplished", "breakthrough", "milestone", "victory", "win")

    TEMPLATES: dict[str, tuple[str, ...]] = {
        "growth": (
            "Scaling New Heights: {business_focus}",
            "Growth Momentum: {key_achievement}",
            "Expanding Horizons: {strategic_move}",
            "Building Forward: {growth_insight}",
            "Next Level: {business_milestone}",
            "Rising Trajectory: {success_metric}",
            "Growth Insights: {strategic_learning}",
            "Momentum Building: {business_progress}",
        ),
        "challenge": (
            "Navigating Challenges: {obstacle_faced}",
            "Overcoming Obstacles: {challenge_type}",
            "Tough Decisions: {difficult_situation}",
            "Crisis Management: {business_challenge}",
            "Learning Through Adversity: {struggle_insight}",
            "Pushing Through: {challenge_response}",
            "Finding Solutions: {problem_solving}",
            "Resilience Test: {challenge_outcome}",
        ),
        "achievement": (
            "Milestone Reached: {achievement_type}",
            "Victory Celebration: {success_story}",
            "Breaking Through: {breakthrough_moment}",
            "Achievement Unlocked: {accomplishment}",
            "Success Story: {positive_outcome}",
            "Winning Moment: {victory_details}",
            "Breakthrough Success: {major_win}",
            "Achievement Reflection: {success_impact}",
        ),
        "planning": (
            "Strategic Planning: {planning_focus}",
            "Charting the Course: {strategic_direction}",
            "Future Vision: {planning_insights}",
            "Strategic Thinking: {business_strategy}",
            "Planning Session: {strategic_decisions}",
            "Road Map Development: {planning_outcome}",
            "Strategic Focus: {planning_priorities}",
            "Vision Alignment: {strategic_planning}",
        ),
        "learning": (
            "Key Insights: {learning_focus}",
            "Lessons Learned: {insight_gained}",
            "Learning Curve: {educational_experience}",
            "Reflection Time: {learning_outcome}",
            "Understanding Deeper: {insight_type}",
            "Growth Through Learning: {educational_insight}",
            "Wisdom Gained: {learning_reflection}",
            "Learning Journey: {insight_development}",
        ),
        "research": (
            "Market Intelligence: {research_topic}",
            "Deep Dive Analysis: {research_focus}",
            "Research Findings: {investigation_results}",
            "Competitive Insights: {research_outcome}",
            "Data Discovery: {research_insights}",
            "Market Research: {analytical_findings}",
            "Investigation Results: {research_conclusions}",
            "Analysis Complete: {research_summary}",
        ),
    }

    # placeholder -> (element fields tried in order, generic fallback)
    REPLACEMENTS: dict[str, tuple[tuple[str, ...], str]] = {
        "business_focus": (("product", "strategy"), "Business Development"),
        "key_achievement": (("success", "metrics"), "Strategic Progress"),
        "strategic_move": (("strategy", "product"), "Strategic Initiative"),
        "growth_insight": (("financial", "people"), "Growth Strategy"),
        "business_milestone": (("metrics", "success"), "Key Milestone"),
        "success_metric": (("metrics",), "Performance Gains"),
        "strategic_learning": (("strategy",), "Strategic Insights"),
        "business_progress": (("financial", "product"), "Business Progress"),
        "obstacle_faced": (("challenge",), "Business Challenges"),
        "challenge_type": (("financial", "people"), "Operational Challenge"),
        "difficult_situation": (("challenge",), "Complex Situation"),
        "business_challenge": (("financial", "product"), "Business Crisis"),
        "struggle_insight": (("challenge",), "Challenge Response"),
        "challenge_response": ((), "Problem Solving"),
        "problem_solving": (("challenge",), "Solution Finding"),
        "challenge_outcome": ((), "Challenge Navigation"),
        "achievement_type": (("success", "metrics"), "Major Achievement"),
        "success_story": (("financial", "product"), "Success Journey"),
        "breakthrough_moment": (("success",), "Breakthrough Win"),
        "accomplishment": (("metrics", "success"), "Key Accomplishment"),
        "positive_outcome": (("financial",), "Positive Results"),
        "victory_details": (("success",), "Victory Story"),
        "major_win": (("metrics",), "Significant Win"),
        "success_impact": (("success",), "Achievement Impact"),
        "planning_focus": (("strategy",), "Strategic Planning"),
        "strategic_direction": (("strategy",), "Future Direction"),
        "planning_insights": (("strategy",), "Planning Insights"),
        "business_strategy": (("strategy",), "Strategic Approach"),
        "strategic_decisions": (("strategy",), "Key Decisions"),
        "planning_outcome": (("strategy",), "Planning Results"),
        "planning_priorities": (("strategy",), "Strategic Priorities"),
        "strategic_planning": (("strategy",), "Strategic Vision"),
        "learning_focus": (("challenge", "success"), "Key Learning"),
        "insight_gained": ((), "Important Insights"),
        "educational_experience": ((), "Learning Experience"),
        "learning_outcome": ((), "Growth Insights"),
        "insight_type": ((), "Business Insights"),
        "educational_insight": ((), "Learning Outcomes"),
        "learning_reflection": ((), "Reflective Learning"),
        "insight_development": ((), "Insight Development"),
        "research_topic": (("strategy", "product"), "Market Analysis"),
        "research_focus": (("strategy",), "Research Focus"),
        "investigation_results": ((), "Research Results"),
        "research_outcome": ((), "Analysis Outcome"),
        "research_insights": ((), "Research Insights"),
        "analytical_findings": ((), "Key Findings"),
        "research_conclusions": ((), "Research Conclusions"),
        "research_summary": ((), "Analysis Summary"),
    }

    HIGH_ENERGY_MARKERS = ("Momentum", "Breaking", "Victory")
    LOW_ENERGY_MARKERS = ("Navigating", "Learning", "Reflection")

    def generate_title(self, content: str, category: str, mood: str, energy: str) -> str:
        if not content or not content.strip():
            return EMPTY_CONTENT_TITLE
        elements = self.extract_business_elements(content)
        options = [self.populate_template(template, elements) for template in self.get_templates(category, mood, energy)]
        return self.select_best_title(options, elements)

    def generate_title_suggestions(self, content: str, category: str, mood: str, energy: str) -> list[str]:
        if not content or not content.strip():
            return [EMPTY_CONTENT_TITLE]
        elements = self.extract_business_elements(content)
        templates = self.get_templates(category, mood, energy)[:SUGGESTION_COUNT]
        return [self.populate_template(template, elements) for template in templates]

    def extract_business_elements(self, content: str) -> BusinessElements:
        head = content[:MAX_SCAN_CHARS]
        lower = head.lower()
        metric_match = _METRIC.search(head)
        return BusinessElements(
            financial=_first_present(self.FINANCIAL_TERMS, lower),
            people=_first_present(self.PEOPLE_TERMS, lower),
            product=_first_present(self.PRODUCT_TERMS, lower),
            strategy=_first_present(self.STRATEGY_TERMS, lower),
            challenge=_first_present(self.CHALLENGE_TERMS, lower),
            success=_first_present(self.SUCCESS_TERMS, lower),
            metrics=metric_match.group(0) if metric_match else None,
            word_count=len(content.split(" ")),
        )

    def get_templates(self, category: str, mood: str, energy: str) -> list[str]:
        templates = list(self.TEMPLATES.get((category or "").lower(), self.TEMPLATES["growth"]))
        mood = (mood or "").lower()
        energy = (energy or "").lower()

        if energy == "high" and mood in {"excited", "confident"}:
            favored = [t for t in templates if any(marker in t for marker in self.HIGH_ENERGY_MARKERS)]
            return favored + templates[:3]
        if energy == "low" and mood in {"stressed", "frustrated"}:
            favored = [t for t in templates if any(marker in t for marker in self.LOW_ENERGY_MARKERS)]
            return favored + templates[:3]
        return templates

    def populate_template(self, template: str, elements: BusinessElements) -> str:
        def replace(match: re.Match[str]) -> str:
            fields, fallback = self.REPLACEMENTS.get(match.group(1), ((), "Business Update"))
            for name in fields:
                value = getattr(elements, name)
                if value:
                    return value
            return fallback

        return clean_title(_PLACEHOLDER.sub(replace, template))

    def select_best_title(self, options: list[str], elements: BusinessElements) -> str:
        # max() returns the first of equally scored options.
        return max(options, key=lambda title: self.score_title(title, elements))

    def score_title(self, title: str, elements: BusinessElements) -> int:
        score = 0
        if elements.metrics and "Metric" in title:
            score += 3
        if elements.financial and ("Growth" in title or "Revenue" in title):
            score += 3
        if elements.success and ("Achievement" in title or "Success" in title):
            score += 3
        if elements.challenge and ("Challenge" in title or "Navigation" in title):
            score += 3
        if elements.strategy and "Strategic" in title:
            score += 2
        if elements.product and ("Development" in title or "Launch" in title):
            score += 2
        if elements.people and ("Team" in title or "Leadership" in title):
            score += 2

        word_count = len(title.split(" "))
        if word_count <= 4:
            score += 2
        elif word_count <= 6:
            score += 1
        return score


def clean_title(title: str) -> str:
    """Collapse whitespace, title-case every word and cap the length."""
    collapsed = _WHITESPACE.sub(" ", title).strip()
    return _WORD_START.sub(lambda match: match.group(0).upper(), collapsed)[:MAX_TITLE_LENGTH]


def _first_present(terms: tuple[str, ...], text: str) -> Optional[str]:
    return next((term for term in terms if term in text), None)


_default_generator = BusinessTitleGenerator()


def generate_business_title(
    content: str,
    category: str = "growth",
    mood: str = "focused",
    energy: str = "medium",
) -> str:
    """Quick title generation for simple cases."""
    return _default_generator.generate_title(content, category, mood, energy)
