"""
Tracker module - view state, reducer and screen actions
"""
from .state import TrackerState, reduce
from .controller import HabitTracker

__all__ = [
    'TrackerState',
    'reduce',
    'HabitTracker'
]
