"""
Pydantic models for habits
"""
from enum import Enum
from typing import Union
from pydantic import BaseModel, ConfigDict, Field, field_validator


class Frequency(str, Enum):
    """How often a habit is meant to be done (a label only, not enforced)"""
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class Habit(BaseModel):
    """A habit as returned by the habit API"""
    model_config = ConfigDict(extra="ignore")

    id: Union[int, str] = Field(..., description="Opaque server-assigned identifier")
    name: str = Field(..., min_length=1, description="Habit name")
    frequency: Frequency = Field(..., description="Frequency label")


class CreateHabitRequest(BaseModel):
    """Request model for creating a habit"""
    name: str = Field(..., min_length=1, max_length=200, description="Habit name")
    frequency: Frequency = Field(default=Frequency.DAILY, description="Frequency label")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Reject names that are blank once whitespace is stripped"""
        if not v.strip():
            raise ValueError("Habit name must not be blank")
        return v.strip()


class LogHabitRequest(BaseModel):
    """Request model for logging a habit completion"""
    model_config = ConfigDict(populate_by_name=True)

    habit_id: Union[int, str] = Field(..., alias="habitId", description="ID of the completed habit")
