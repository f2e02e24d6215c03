"""
Health Routes - Liveness and configuration status
"""
from fastapi import APIRouter
from habit_tracker.core.config import settings
from habit_tracker.services.habits import repository

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    """Report liveness, habit count and whether suggestions can be served"""
    return {
        "status": "ok",
        "habits": len(repository.habits),
        "suggestions_enabled": bool(settings.OPENAI_API_KEY)
    }
