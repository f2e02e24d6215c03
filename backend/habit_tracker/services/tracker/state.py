"""
Tracker State - view state container and the reducer that updates it
"""
from typing import Any, List, Optional
from pydantic import BaseModel, Field

from habit_tracker.models.events import (
    Operation,
    HabitsLoaded,
    HabitCreated,
    StreamChunk,
    StreamFinished,
    StreamDiscarded,
    OperationFailed
)
from habit_tracker.models.habit import Habit
from habit_tracker.models.suggestion import Suggestion


class TrackerState(BaseModel):
    """Everything the habit tracker screen shows"""
    habits: List[Habit] = Field(default_factory=list)
    suggestions: List[Suggestion] = Field(default_factory=list)
    streaming_message: str = ""
    error: Optional[str] = None
    loading: bool = True


def reduce(state: TrackerState, event: Any) -> TrackerState:
    """
    Apply one event and return the new state; the input state is not modified.

    Failures keep whatever was loaded before; only the latest error is kept.
    """
    if isinstance(event, HabitsLoaded):
        return state.model_copy(update={"habits": list(event.habits), "loading": False})

    if isinstance(event, HabitCreated):
        return state.model_copy(update={"habits": [*state.habits, event.habit]})

    if isinstance(event, StreamChunk):
        return state.model_copy(update={"streaming_message": event.text})

    if isinstance(event, StreamFinished):
        suggestions = state.suggestions
        if event.text:
            suggestion = Suggestion(suggestion=event.text, created_at=event.finished_at)
            suggestions = [*suggestions, suggestion]
        return state.model_copy(update={"suggestions": suggestions, "streaming_message": ""})

    if isinstance(event, StreamDiscarded):
        return state.model_copy(update={"streaming_message": ""})

    if isinstance(event, OperationFailed):
        update = {"error": event.message}
        if event.operation == Operation.LOAD_HABITS:
            update["loading"] = False
        if event.operation == Operation.SUGGESTIONS:
            update["streaming_message"] = ""
        return state.model_copy(update=update)

    raise TypeError(f"Unknown tracker event: {type(event).__name__}")
