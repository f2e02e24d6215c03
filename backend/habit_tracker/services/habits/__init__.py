"""
Habits module - habit API client and in-memory server storage
"""
from . import repository
from .client import HabitStoreClient

__all__ = [
    'repository',
    'HabitStoreClient'
]
