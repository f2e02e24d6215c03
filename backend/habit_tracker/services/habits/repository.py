"""
Habits Repository - In-memory habit storage for the development API
State is process-local and lost on restart.
"""
from itertools import count
from threading import Lock
from typing import Any, Dict, List, Union
import logging

from habit_tracker.core.exceptions import HabitNotFoundError
from habit_tracker.models.habit import Frequency
from habit_tracker.utils.timezone import get_now

logger = logging.getLogger(__name__)

# Format: {habit_id: {"id", "name", "frequency", "created_at", "completion_count", "last_completed_at"}}
habits: Dict[int, Dict[str, Any]] = {}

_lock = Lock()
_ids = count(1)


def list_habits() -> List[Dict[str, Any]]:
    """
    Get all habits in creation order

    Returns:
        List of habit dictionaries
    """
    with _lock:
        return [dict(h) for h in habits.values()]


def create_habit(name: str, frequency: Frequency) -> Dict[str, Any]:
    """
    Create a new habit

    Args:
        name: Habit name (already validated)
        frequency: Frequency label

    Returns:
        Created habit data
    """
    with _lock:
        habit_id = next(_ids)
        habit = {
            "id": habit_id,
            "name": name,
            "frequency": Frequency(frequency).value,
            "created_at": get_now().isoformat(),
            "completion_count": 0,
            "last_completed_at": None
        }
        habits[habit_id] = habit

    logger.info(f"Created habit {habit_id}: {name}")
    return dict(habit)


def _coerce_id(habit_id: Union[int, str]) -> int:
    """Accept ids sent as strings by clients"""
    try:
        return int(habit_id)
    except (TypeError, ValueError):
        raise HabitNotFoundError(f"Habit {habit_id!r} not found")


def log_completion(habit_id: Union[int, str]) -> Dict[str, Any]:
    """
    Record one completion of a habit

    Args:
        habit_id: The habit ID

    Returns:
        Updated habit data

    Raises:
        HabitNotFoundError: If no habit has this ID
    """
    key = _coerce_id(habit_id)
    with _lock:
        habit = habits.get(key)
        if habit is None:
            raise HabitNotFoundError(f"Habit {habit_id!r} not found")
        habit["completion_count"] += 1
        habit["last_completed_at"] = get_now().isoformat()
        updated = dict(habit)

    logger.info(f"Logged completion #{updated['completion_count']} for habit {key}")
    return updated


def clear() -> int:
    """
    Remove every habit

    Returns:
        Number of habits removed
    """
    with _lock:
        removed = len(habits)
        habits.clear()
    return removed
