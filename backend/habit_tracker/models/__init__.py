"""
Pydantic models for the application
"""
from habit_tracker.models.habit import (
    Frequency,
    Habit,
    CreateHabitRequest,
    LogHabitRequest
)
from habit_tracker.models.suggestion import (
    Suggestion,
    ChatMessage,
    SuggestionRequest
)
from habit_tracker.models.events import (
    Operation,
    HabitsLoaded,
    HabitCreated,
    StreamChunk,
    StreamFinished,
    StreamDiscarded,
    OperationFailed
)

__all__ = [
    "Frequency",
    "Habit",
    "CreateHabitRequest",
    "LogHabitRequest",
    "Suggestion",
    "ChatMessage",
    "SuggestionRequest",
    "Operation",
    "HabitsLoaded",
    "HabitCreated",
    "StreamChunk",
    "StreamFinished",
    "StreamDiscarded",
    "OperationFailed"
]
