"""
Habit Routes - Endpoints for listing, creating and logging habits
"""
import logging
from fastapi import APIRouter, HTTPException
from habit_tracker.models.habit import CreateHabitRequest, LogHabitRequest
from habit_tracker.services.habits import repository
from habit_tracker.core.exceptions import HabitNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["habits"])


@router.post("/list-habits")
async def list_habits():
    """Get all habits"""
    return {"habits": repository.list_habits()}


@router.post("/create-habit")
async def create_habit(request: CreateHabitRequest):
    """Create a new habit"""
    try:
        return {"habit": repository.create_habit(request.name, request.frequency)}
    except Exception as e:
        logger.error(f"[HABITS] Create failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Unexpected error: {str(e)}")


@router.post("/log-habit")
async def log_habit(request: LogHabitRequest):
    """Record a completion of a habit"""
    try:
        habit = repository.log_completion(request.habit_id)
    except HabitNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {
        "status": "success",
        "habit_id": habit["id"],
        "completion_count": habit["completion_count"],
        "last_completed_at": habit["last_completed_at"]
    }
