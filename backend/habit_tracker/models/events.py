"""
Tracker events - discrete changes applied to the tracker view state
"""
from datetime import datetime
from enum import Enum
from typing import List
from pydantic import BaseModel, Field

from habit_tracker.models.habit import Habit
from habit_tracker.utils.timezone import get_now


class Operation(str, Enum):
    """Operation categories, each with its own user-visible error"""
    LOAD_HABITS = "load_habits"
    CREATE_HABIT = "create_habit"
    LOG_HABIT = "log_habit"
    SUGGESTIONS = "suggestions"


class HabitsLoaded(BaseModel):
    """The full habit list was fetched from the server"""
    habits: List[Habit]


class HabitCreated(BaseModel):
    """A new habit was created and should be appended to the list"""
    habit: Habit


class StreamChunk(BaseModel):
    """Cumulative suggestion text received so far (replaces the partial text)"""
    text: str


class StreamFinished(BaseModel):
    """The suggestion stream completed with its final text"""
    text: str
    finished_at: datetime = Field(default_factory=get_now)


class StreamDiscarded(BaseModel):
    """The suggestion stream ended without completing (cancelled)"""
    pass


class OperationFailed(BaseModel):
    """An operation failed; message is the generic banner to show"""
    operation: Operation
    message: str
