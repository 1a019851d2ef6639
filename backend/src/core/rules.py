"""Recommendation Rules - The ordered rule table.

Each rule is a declarative struct: a predicate over DayFacts, the text shown
if it wins, a category tag and a score function. Rules are evaluated in table
order and ties go to the earlier rule, so new rules go at the end.
"""

from dataclasses import dataclass
from typing import Callable

from .models import Category, DayFacts


SLEEP_TARGET_HOURS = 8.0
POOR_SLEEP_HOURS = 6.0
LOW_STEPS = 3000
HIGH_STEPS = 8000
ACTIVE_STEPS = 5000
CAFFEINE_CUTOFF_HOUR = 16
STRETCH_FROM_HOUR = 10
BREAKFAST_HOUR = 8
LUNCH_HOUR = 12
BEDTIME_HOUR = 20


@dataclass(frozen=True)
class Rule:
    """A single candidate-producing rule.

    Attributes:
        name: Identifier used in logs
        text: Recommendation shown if this rule wins
        category: Action or Food tag
        applies: Predicate deciding whether the rule fires
        score: Priority of the candidate; higher wins
    """

    name: str
    text: str
    category: Category
    applies: Callable[[DayFacts], bool]
    score: Callable[[DayFacts], float]


def _sleep_deficit(facts: DayFacts) -> float:
    return SLEEP_TARGET_HOURS - (facts.sleep_hours or 0.0)


def _poor_sleep(facts: DayFacts) -> bool:
    return facts.sleep_hours is not None and facts.sleep_hours < POOR_SLEEP_HOURS


def _constant(value: float) -> Callable[[DayFacts], float]:
    return lambda facts: value


RULES: tuple[Rule, ...] = (
    Rule(
        name="caffeine",
        text="Increase caffeine intake.",
        category=Category.FOOD,
        applies=lambda f: _poor_sleep(f) and f.hour < CAFFEINE_CUTOFF_HOUR,
        score=lambda f: _sleep_deficit(f) * 2.0,
    ),
    Rule(
        name="poor_sleep_bedtime",
        text="Sleep earlier tonight.",
        category=Category.ACTION,
        applies=_poor_sleep,
        score=lambda f: _sleep_deficit(f) * 1.8,
    ),
    Rule(
        name="evening_walk",
        text="Take a 10 minute walk.",
        category=Category.ACTION,
        applies=lambda f: f.is_evening and f.effective_steps < LOW_STEPS,
        score=lambda f: (LOW_STEPS - f.effective_steps) / LOW_STEPS * 10.0,
    ),
    Rule(
        name="stretch",
        text="Stand up and stretch.",
        category=Category.ACTION,
        applies=lambda f: (
            f.effective_steps < LOW_STEPS
            and not f.is_evening
            and f.hour >= STRETCH_FROM_HOUR
        ),
        score=_constant(5.0),
    ),
    Rule(
        name="protein",
        text="Eat a protein rich meal.",
        category=Category.FOOD,
        applies=lambda f: f.effective_steps >= HIGH_STEPS,
        score=_constant(8.0),
    ),
    Rule(
        name="snack",
        text="Eat a balanced snack.",
        category=Category.FOOD,
        applies=lambda f: not f.has_food_logged and f.hour >= BREAKFAST_HOUR,
        score=_constant(9.0),
    ),
    Rule(
        name="light_dinner",
        text="Avoid heavy food before sleep.",
        category=Category.FOOD,
        applies=lambda f: f.is_late_night and (
            f.has_workout_logged or f.effective_steps > ACTIVE_STEPS
        ),
        score=_constant(7.0),
    ),
    Rule(
        name="nutrient_dense",
        text="Add nutrient dense foods.",
        category=Category.FOOD,
        applies=lambda f: not f.has_food_logged and f.hour >= LUNCH_HOUR,
        score=_constant(6.0),
    ),
    Rule(
        name="unknown_sleep_bedtime",
        text="Sleep earlier tonight.",
        category=Category.ACTION,
        applies=lambda f: f.sleep_hours is None and f.hour >= BEDTIME_HOUR,
        score=_constant(4.0),
    ),
)
