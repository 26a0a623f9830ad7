"""Insight Synthesizer

Turns (mood, category, text) into at most one recommendation sentence.

Each business category has a short list of specific checks (safety
incidents, patent approvals, funding, customer interviews, ...). When none
hits, a template is drawn from the category's curated pool using the
injected ``random.Random``; the achievement branch returns nothing instead
so a remote source can supply the insight.
"""
from __future__ import annotations

import logging
import random
import re
from typing import Callable, Optional, Sequence

from .lexicon import normalize_text

logger = logging.getLogger(__name__)

HIGH_CONFIDENCE = 80

SAFETY_INCIDENT = (
    "Workplace safety incidents call for immediate, transparent leadership. Put the injured person's "
    "wellbeing first, document everything for compliance and insurance, and turn this setback into a "
    "safety protocol review that shows your team their welfare is a core business value."
)
CASH_PRESSURE = (
    "Cash flow pressure is a timing problem before it is a business-model problem. Map the next 13 weeks "
    "of inflows and outflows, talk to suppliers before payments slip, and chase receivables as hard as "
    "you chase new sales."
)
TEAM_DEPARTURE = (
    "Personnel transitions are a chance to redesign the role, document the knowledge that walked out "
    "the door and reduce single-person dependencies across your critical functions."
)
CUSTOMER_LOSS = (
    "Losing customers is expensive market feedback. Talk to the accounts that left, find the pattern "
    "in their reasons and fix the one gap that shows up most often before chasing replacements."
)
STRESS_UNDER_CHALLENGE = (
    "Stress during a hard stretch is a signal to narrow focus. Pick the one problem whose resolution "
    "makes the others easier and protect your energy for it."
)

FUNDING = (
    "Funding buys runway for experiments, not certainty. Share the milestones this round must reach "
    "with your team and track burn against them monthly so the next raise starts from proven traction."
)
REVENUE_GROWTH = (
    "Revenue growth is the moment to study what is working. Document the acquisition and retention "
    "steps that drove these numbers while they are fresh so you can repeat them deliberately."
)
HIRING = (
    "Hiring shapes culture faster than any mission statement. Write down what great looks like in "
    "this role and build an onboarding plan that gets new people to their first win quickly."
)
LAUNCH = (
    "A launch is the start of learning, not the finish line. Set up feedback loops with your first "
    "users now and decide which signals will tell you to double down or adjust."
)

PATENT_APPROVAL = (
    "Patent approval turns your innovation into a defensible business asset. Use it in investor and "
    "partner conversations, and consider whether licensing could open a new revenue stream."
)
DEAL_CLOSED = (
    "Closing this deal validates your offer in the market. Capture what convinced this customer and "
    "turn it into a repeatable sales narrative."
)
REVENUE_MILESTONE = (
    "Hitting a revenue milestone builds credibility with investors and your team. Document the wins "
    "behind it for future fundraising and reinvest part of the upside in what drove it."
)
PRODUCT_SHIPPED = (
    "Shipping is an achievement most ideas never reach. Celebrate it with the team, then measure "
    "whether users adopt the product the way you expected."
)

PIVOT = (
    "Pivots work when they keep what you have learned and drop what the market rejected. Write down "
    "the assumptions behind the new direction and test the riskiest one first."
)
ROADMAP = (
    "A roadmap is a set of bets, not promises. Rank initiatives by impact and confidence, and revisit "
    "the order every quarter as evidence comes in."
)
BUDGET = (
    "Budget allocation is strategy made concrete. Fund the few initiatives that move your core metric "
    "and give every line item an owner and a review date."
)

COURSE_OR_MENTOR = (
    "Structured learning pays off when it becomes practice. Pick one idea from this course or mentor "
    "session and apply it to your business this week."
)
MISTAKE_LESSON = (
    "Mistakes are tuition already paid. Write down what you would do differently and turn it into a "
    "checklist so the lesson outlasts the memory."
)
FEEDBACK_LESSON = (
    "Feedback is a map of how others experience your business. Look for the comment that repeats "
    "across sources and treat it as the top item on your improvement list."
)

CUSTOMER_INTERVIEWS = (
    "Customer interviews are the fastest way to replace assumptions with evidence. Look for the "
    "problems people describe unprompted and the workarounds they already pay for."
)
COMPETITOR_ANALYSIS = (
    "Competitor analysis is most useful for spotting what customers still lack. Look for the gaps "
    "every player ignores rather than copying their feature lists."
)
AB_TESTING = (
    "A/B tests only pay off with a clear hypothesis and enough traffic to trust the result. Decide "
    "the success metric before you look at the numbers."
)
MARKET_SIZING = (
    "Market sizing is a story about who buys and why. Build it bottom up from customers you can "
    "actually reach so the number guides decisions, not just pitch decks."
)

TEMPLATES: dict[str, tuple[str, ...]] = {
    "challenge": (
        "Business challenges often contain the seeds of your next competitive advantage. Break this one into parts and test the assumption that matters most.",
        "Every obstacle is market feedback. Ask what this setback reveals about your customers, your process or your positioning.",
        "Hard weeks build the resilience that good weeks never will. Focus on what you can control and let the rest wait.",
        "Write down the worst realistic outcome and your response to it. Problems shrink once they have a plan attached.",
    ),
    "growth": (
        "Growth phases reward systems over heroics. Decide which process will break first at twice your current volume and strengthen it now.",
        "Momentum compounds when you focus it. Pick the two or three growth levers with the best return and put disproportionate effort there.",
        "Exciting opportunities are easier to judge on paper. Write down what success looks like in 90 days before committing resources.",
    ),
    "growth_confident": (
        "This level of confidence in a growth opportunity signals readiness to scale. Check that cash, team and systems can keep up before you accelerate.",
        "Strong conviction about growth is an asset when paired with measurement. Define the metric that will prove you right and track it weekly.",
    ),
    "planning": (
        "Strategic planning turns intent into execution. Break your goals into quarterly milestones with a single owner each.",
        "The best plans name what you will not do. List the opportunities you are consciously deferring so focus stays intact.",
        "Planning pays off when it includes a review rhythm. Schedule the check-in where you will compare results against this plan.",
    ),
    "learning": (
        "Reflection compounds into better judgment. Capture the lesson from this entry in one sentence you can revisit next month.",
        "Self-aware founders make better decisions. Notice which patterns keep repeating in your journal and what they are telling you.",
        "Learning is most valuable when shared. Consider how this insight could change the way your team works.",
    ),
    "research": (
        "Good research ends in a decision. Write down which finding would change your plans and what you will do if you see it.",
        "Data is only as useful as the question behind it. Sharpen the question before collecting more.",
        "Research that stays in documents rarely changes a business. Summarize the three findings that matter and share them with your team.",
    ),
}

_Check = tuple[re.Pattern[str], str]


def _checks(*pairs: tuple[str, str]) -> tuple[_Check, ...]:
    return tuple((re.compile(pattern), insight) for pattern, insight in pairs)


CHALLENGE_CHECKS = _checks(
    (r"\b(?:accident|injured|injury|hospitali[sz]ed|osha)\b", SAFETY_INCIDENT),
    (r"\b(?:cash flow|credit limit|runway|overdue|late payments?)\b", CASH_PRESSURE),
    (r"\b(?:resigned|quit|fired|laid off|let go)\b", TEAM_DEPARTURE),
    (r"\b(?:churn|churned|lost (?:a |our |two |three )?(?:customers?|clients?|accounts?))\b", CUSTOMER_LOSS),
)
GROWTH_CHECKS = _checks(
    (r"\b(?:funding|investors?|series [a-d]|seed round|raised)\b", FUNDING),
    (r"\b(?:revenue|mrr|arr|sales)\b", REVENUE_GROWTH),
    (r"\b(?:hired|hiring|new hires?)\b", HIRING),
    (r"\b(?:launch|launched|launching)\b", LAUNCH),
)
ACHIEVEMENT_CHECKS = _checks(
    (r"\bpatent\b", PATENT_APPROVAL),
    (r"\b(?:deal|contract)\b.{0,80}\b(?:closed|signed)\b|\b(?:closed|signed)\b.{0,80}\b(?:deal|contract)\b", DEAL_CLOSED),
    (r"\b(?:revenue|million|mrr|arr)\b", REVENUE_MILESTONE),
    (r"\b(?:launched|shipped|released)\b", PRODUCT_SHIPPED),
)
PLANNING_CHECKS = _checks(
    (r"\bpivot(?:ing|ed)?\b", PIVOT),
    (r"\b(?:roadmap|initiatives?|next quarter)\b", ROADMAP),
    (r"\bbudget\b", BUDGET),
)
LEARNING_CHECKS = _checks(
    (r"\b(?:course|mentor|coaching|workshop|conference)\b", COURSE_OR_MENTOR),
    (r"\b(?:mistake|mistakes|failed|failure)\b", MISTAKE_LESSON),
    (r"\bfeedback\b", FEEDBACK_LESSON),
)
RESEARCH_CHECKS = _checks(
    (r"\b(?:customer interviews?|user interviews?|interviewed|surveys?)\b", CUSTOMER_INTERVIEWS),
    (r"\b(?:competitors?|competitive analysis)\b", COMPETITOR_ANALYSIS),
    (r"\ba/b tests?\b|\bexperiments?\b", AB_TESTING),
    (r"\b(?:tam|sam|market size|market sizing)\b", MARKET_SIZING),
)


class InsightSynthesizer:
    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()
        self._branches: dict[str, Callable[[str, str, int], list[str]]] = {
            "challenge": self._challenge,
            "growth": self._growth,
            "achievement": self._achievement,
            "planning": self._planning,
            "learning": self._learning,
            "research": self._research,
        }

    @classmethod
    def seeded(cls, seed: int) -> "InsightSynthesizer":
        return cls(random.Random(seed))

    @classmethod
    def unseeded(cls) -> "InsightSynthesizer":
        return cls(random.Random())

    def synthesize(self, mood: str, category: str, text: str, confidence: int = 0) -> list[str]:
        """Return zero or one insight for an analyzed entry.

        ``confidence`` is the 0-100 display confidence. An empty list means no
        specific insight applies and a higher-authority source should decide.
        """
        branch = self._branches.get((category or "").lower())
        if branch is None:
            logger.debug("No insight branch for category %s", category)
            return []
        return branch((mood or "").lower(), normalize_text(text or ""), confidence)

    def _challenge(self, mood: str, text: str, confidence: int) -> list[str]:
        specific = _first_hit(CHALLENGE_CHECKS, text)
        if specific:
            return [specific]
        if mood == "stressed":
            return [STRESS_UNDER_CHALLENGE]
        return [self._pick("challenge")]

    def _growth(self, mood: str, text: str, confidence: int) -> list[str]:
        specific = _first_hit(GROWTH_CHECKS, text)
        if specific:
            return [specific]
        if confidence >= HIGH_CONFIDENCE and mood in {"confident", "excited", "optimistic"}:
            return [self._pick("growth_confident")]
        return [self._pick("growth")]

    def _achievement(self, mood: str, text: str, confidence: int) -> list[str]:
        specific = _first_hit(ACHIEVEMENT_CHECKS, text)
        return [specific] if specific else []

    def _planning(self, mood: str, text: str, confidence: int) -> list[str]:
        specific = _first_hit(PLANNING_CHECKS, text)
        return [specific or self._pick("planning")]

    def _learning(self, mood: str, text: str, confidence: int) -> list[str]:
        specific = _first_hit(LEARNING_CHECKS, text)
        return [specific or self._pick("learning")]

    def _research(self, mood: str, text: str, confidence: int) -> list[str]:
        specific = _first_hit(RESEARCH_CHECKS, text)
        return [specific or self._pick("research")]

    def _pick(self, pool: str) -> str:
        return self.rng.choice(TEMPLATES[pool])


def _first_hit(checks: Sequence[_Check], text: str) -> Optional[str]:
    for pattern, insight in checks:
        if pattern.search(text):
            return insight
    return None
