"""Recommendation Scoring - Pure functions that pick today's suggestion.

All functions are pure: same input always produces same output, no side effects.
"""

from typing import Optional, Sequence

from .models import DayEntry, DayFacts, RecommendationCandidate
from .facts import derive_facts
from .rules import RULES, Rule


FALLBACK_RECOMMENDATION = "Drink water and keep logging your day."


def generate_candidates(
    facts: DayFacts, rules: Sequence[Rule] = RULES
) -> list[RecommendationCandidate]:
    """Evaluate every rule independently, in table order.

    Args:
        facts: Facts for this evaluation cycle
        rules: Ordered rule table

    Returns:
        One candidate per matching rule, in rule order (may be empty)
    """
    return [
        RecommendationCandidate(
            category=rule.category,
            text=rule.text,
            score=rule.score(facts),
        )
        for rule in rules
        if rule.applies(facts)
    ]


def select_recommendation(candidates: Sequence[RecommendationCandidate]) -> str:
    """Pick the highest-scoring candidate's text.

    sorted() is stable, so equal scores keep rule order and the earlier
    rule wins.

    Args:
        candidates: Candidates in rule order

    Returns:
        Winning text, or FALLBACK_RECOMMENDATION if there are no candidates
    """
    if not candidates:
        return FALLBACK_RECOMMENDATION

    ranked = sorted(candidates, key=lambda c: c.score, reverse=True)
    return ranked[0].text


def evaluate(
    entries: Sequence[DayEntry],
    hour: int,
    last_known_steps: Optional[int] = None,
) -> str:
    """Compute the recommendation for one evaluation cycle.

    Args:
        entries: Today's entries, in the order returned by the store
        hour: Current local hour (0-23)
        last_known_steps: Freshest reading from the step source, if any

    Returns:
        The recommendation text (never empty)
    """
    facts = derive_facts(entries, hour, last_known_steps)
    return select_recommendation(generate_candidates(facts))
