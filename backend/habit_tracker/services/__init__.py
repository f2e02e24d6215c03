"""
Business logic services
"""
from . import habits
from . import streaming
from . import suggestions
from . import tracker

__all__ = [
    'habits',
    'streaming',
    'suggestions',
    'tracker'
]
