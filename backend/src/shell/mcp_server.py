"""MCP Server - Tool definitions for the health log.

Defines all MCP tools an assistant can invoke to log the day, read the current
recommendation and check distance from home. Single local user, no auth.
"""

import logging
import os

from mcp.server.fastmcp import FastMCP
from pydantic import ValidationError

from ..core.models import Coordinate, DayEntry
from ..core.location import describe_distance_from_home, distance_meters
from .engine import RecommendationEngine, DEFAULT_INTERVAL_SECONDS
from .log_store import DailyLogStore, LogStoreConfig


logger = logging.getLogger(__name__)

mcp = FastMCP(
    "healthlog",
    instructions="""HealthLog - Personal daily wellness log.

Use these tools to log food, sleep and workouts, and to show the user a short
recommendation based on today's data.

After logging, always refresh and show the recommendation.
Pass the latest step count to refresh_recommendation when you have one.""",
    stateless_http=True,
)

# Lazy-initialized collaborators
_log_store: DailyLogStore | None = None
_engine: RecommendationEngine | None = None


def get_log_store() -> DailyLogStore:
    """Get or create the log store."""
    global _log_store
    if _log_store is None:
        _log_store = DailyLogStore(LogStoreConfig.from_env())
    return _log_store


def get_engine() -> RecommendationEngine:
    """Get or create the recommendation engine."""
    global _engine
    if _engine is None or _engine.closed:
        interval = float(os.environ.get("RECOMMENDATION_INTERVAL", DEFAULT_INTERVAL_SECONDS))
        _engine = RecommendationEngine(get_log_store(), interval=interval)
    return _engine


def shutdown_engine() -> None:
    """Stop the engine's scheduler if one is running."""
    global _engine
    if _engine is not None:
        _engine.close()
        _engine = None


def _entry_dict(entry: DayEntry) -> dict:
    return {
        "id": entry.id,
        "time": entry.timestamp.strftime("%H:%M:%S"),
        "food": entry.food_text,
        "sleep": entry.sleep_text,
        "workout": entry.workout_text,
        "step_count": entry.step_count,
        "location": entry.location.model_dump() if entry.location else None,
    }


# ==================== Logging Tools ====================


@mcp.tool()
def log_entry(
    food: str = "",
    sleep: str = "",
    workout: str = "",
    step_count: int = 0,
    latitude: float | None = None,
    longitude: float | None = None,
) -> dict:
    """Add an entry to today's log.

    Args:
        food: Food eaten (e.g., "Doner Kebab, Shawarma")
        sleep: Hours of sleep last night (e.g., "7.5")
        workout: Workouts completed (e.g., "60 min hooping")
        step_count: Steps so far today
        latitude: Current latitude, if known
        longitude: Current longitude, if known

    Returns:
        The created entry and the refreshed recommendation
    """
    db = get_log_store()

    try:
        entry = db.save_entry(
            food=food,
            sleep=sleep,
            workout=workout,
            step_count=step_count,
            latitude=latitude,
            longitude=longitude,
        )
    except ValidationError as e:
        logger.warning("Rejected entry: %s", str(e))
        return {"error": "Invalid entry. Steps must be non-negative and coordinates valid."}

    if entry is None:
        return {"error": "Failed to save entry. Please try again."}

    recommendation = get_engine().refresh(step_count if step_count > 0 else None)

    return {
        "entry": _entry_dict(entry),
        "recommendation": recommendation,
    }


@mcp.tool()
def delete_entry(entry_id: str) -> dict:
    """Delete an entry from the log.

    Args:
        entry_id: The ID of the entry to delete

    Returns:
        Confirmation and the refreshed recommendation
    """
    db = get_log_store()

    if not db.delete_entry(entry_id):
        return {"error": "Entry not found or delete failed."}

    return {
        "success": True,
        "entries_remaining": len(db.get_today_entries()),
        "recommendation": get_engine().refresh(),
    }


# ==================== Query Tools ====================


@mcp.tool()
def get_today() -> dict:
    """Get today's entries with the current recommendation.

    Returns:
        Dictionary with entries (newest first) and the recommendation
    """
    entries = get_log_store().get_today_entries()

    return {
        "entries": [_entry_dict(e) for e in entries],
        "food_entries": [e.food_text for e in entries if e.food_text.strip()],
        "recommendation": get_engine().current_recommendation,
    }


@mcp.tool()
def get_recommendation() -> str:
    """Get the current recommendation without recomputing it."""
    return get_engine().current_recommendation


@mcp.tool()
def refresh_recommendation(step_count: int | None = None) -> str:
    """Recompute the recommendation now.

    Args:
        step_count: Latest step count from the health service, if available

    Returns:
        The new recommendation
    """
    if step_count is not None and step_count < 0:
        return "Step count must be non-negative."
    return get_engine().refresh(step_count)


# ==================== Location Tools ====================


@mcp.tool()
def set_home_location(latitude: float, longitude: float) -> str:
    """Save the user's current position as home.

    Args:
        latitude: Current latitude
        longitude: Current longitude

    Returns:
        Confirmation message
    """
    try:
        home = Coordinate(latitude=latitude, longitude=longitude)
    except ValidationError:
        return "Invalid coordinates."

    if get_log_store().set_home_location(home):
        return f"Home location set to {latitude:.4f}, {longitude:.4f}"
    return "Failed to save home location. Please try again."


@mcp.tool()
def get_location_status(latitude: float | None = None, longitude: float | None = None) -> dict:
    """Describe how far the user is from home.

    Args:
        latitude: Current latitude, if known
        longitude: Current longitude, if known

    Returns:
        Status text and distance in meters (None if unknown)
    """
    home = get_log_store().get_home_location()

    current = None
    if latitude is not None and longitude is not None:
        try:
            current = Coordinate(latitude=latitude, longitude=longitude)
        except ValidationError:
            return {"error": "Invalid coordinates."}

    distance = None
    if current is not None and home is not None:
        distance = round(distance_meters(current, home), 1)

    return {
        "status": describe_distance_from_home(current, home),
        "distance_meters": distance,
    }
