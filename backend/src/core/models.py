"""Core Data Models - Pydantic models for type safety.

Models are value objects with no behavior beyond validation and simple
derived flags.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
import uuid


class Coordinate(BaseModel):
    """A geographic point in decimal degrees."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class DayEntry(BaseModel):
    """One logged record of food, sleep, workout and steps for a moment in time.

    Empty text fields mean "not logged".
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = Field(default_factory=datetime.now)
    food_text: str = Field(default="", description="What was eaten")
    sleep_text: str = Field(default="", description="Hours slept last night, as typed")
    workout_text: str = Field(default="", description="Workouts completed")
    step_count: int = Field(default=0, ge=0, description="Step snapshot at entry time")
    location: Optional[Coordinate] = None


class Category(str, Enum):
    """Tag for a recommendation candidate."""

    ACTION = "Action"
    FOOD = "Food"


class RecommendationCandidate(BaseModel):
    """A single scored suggestion considered during one evaluation cycle."""

    model_config = ConfigDict(frozen=True)

    category: Category
    text: str = Field(min_length=1)
    score: float = Field(ge=0)


class DayFacts(BaseModel):
    """Facts derived from today's entries and the current hour."""

    model_config = ConfigDict(frozen=True)

    hour: int = Field(ge=0, le=23)
    sleep_hours: Optional[float] = Field(default=None, description="None if no valid sleep logged")
    effective_steps: int = 0
    has_food_logged: bool = False
    has_workout_logged: bool = False

    @property
    def is_evening(self) -> bool:
        return self.hour >= 17

    @property
    def is_late_night(self) -> bool:
        return self.hour >= 21 or self.hour <= 1
