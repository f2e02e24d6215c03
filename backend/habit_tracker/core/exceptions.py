"""
Custom Exceptions - Application-specific error types
"""
from typing import Optional


class HabitTrackerException(Exception):
    """Base exception for all habit tracker errors"""
    pass


class RequestError(HabitTrackerException):
    """Raised when a habit API call fails (network error or non-success status)"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class StreamUnavailable(HabitTrackerException):
    """Raised when a suggestion response has no readable body stream"""
    pass


class StreamReadError(HabitTrackerException):
    """Raised when reading the suggestion stream fails before completion"""
    pass


class StreamCancelledError(HabitTrackerException):
    """Raised when a suggestion stream is cancelled by the caller"""
    pass


class StreamAlreadyActiveError(HabitTrackerException):
    """Raised when a second suggestion stream is started while one is in flight"""
    pass


class HabitNotFoundError(HabitTrackerException):
    """Raised when a habit cannot be found"""
    pass


class ExternalServiceError(HabitTrackerException):
    """Raised when external services (OpenAI) fail"""
    pass
