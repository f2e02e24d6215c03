"""
Habit Tracker - screen-level actions wired to the habit API and suggestion stream
"""
from typing import Any, Callable, Optional, Union
import logging
import threading

from habit_tracker.core.constants import (
    ERROR_LOAD_HABITS,
    ERROR_CREATE_HABIT,
    ERROR_LOG_HABIT,
    ERROR_SUGGESTIONS
)
from habit_tracker.core.exceptions import (
    HabitTrackerException,
    StreamAlreadyActiveError,
    StreamCancelledError
)
from habit_tracker.models.events import (
    Operation,
    HabitsLoaded,
    HabitCreated,
    StreamDiscarded,
    OperationFailed
)
from habit_tracker.models.habit import Frequency
from habit_tracker.services.habits import HabitStoreClient
from habit_tracker.services.suggestions import SuggestionService
from .state import TrackerState, reduce

logger = logging.getLogger(__name__)

Listener = Callable[[TrackerState, Any], None]


class HabitTracker:
    """
    Runs user actions and folds their outcomes into a TrackerState.

    Errors never escape an action: they are logged and shown as a single
    generic message. Actions are not guarded against double submission.
    """

    def __init__(
        self,
        habit_client: HabitStoreClient,
        suggestion_service: SuggestionService,
        listener: Optional[Listener] = None
    ):
        self.habit_client = habit_client
        self.suggestion_service = suggestion_service
        self.listener = listener
        self.state = TrackerState()

    def dispatch(self, event: Any) -> TrackerState:
        """Apply an event to the state and notify the listener"""
        self.state = reduce(self.state, event)
        if self.listener is not None:
            self.listener(self.state, event)
        return self.state

    def _fail(self, operation: Operation, message: str, error: Exception) -> None:
        logger.error(f"[TRACKER] {operation.value} failed: {error}")
        self.dispatch(OperationFailed(operation=operation, message=message))

    def load_habits(self) -> TrackerState:
        """Fetch the habit list"""
        try:
            habits = self.habit_client.list_habits()
        except HabitTrackerException as e:
            self._fail(Operation.LOAD_HABITS, ERROR_LOAD_HABITS, e)
        else:
            self.dispatch(HabitsLoaded(habits=habits))
        return self.state

    def add_habit(self, name: str, frequency: Union[Frequency, str] = Frequency.DAILY) -> TrackerState:
        """Create a habit; blank names do nothing"""
        try:
            habit = self.habit_client.create_habit(name, frequency)
        except HabitTrackerException as e:
            self._fail(Operation.CREATE_HABIT, ERROR_CREATE_HABIT, e)
        else:
            if habit is not None:
                self.dispatch(HabitCreated(habit=habit))
        return self.state

    def log_habit(self, habit_id: Union[int, str]) -> TrackerState:
        """Log a completion and refresh the list from the server"""
        try:
            habits = self.habit_client.log_habit(habit_id)
        except HabitTrackerException as e:
            self._fail(Operation.LOG_HABIT, ERROR_LOG_HABIT, e)
        else:
            self.dispatch(HabitsLoaded(habits=habits))
        return self.state

    def get_ai_suggestions(self, cancel_event: Optional[threading.Event] = None) -> TrackerState:
        """
        Stream a suggestion based on the current habit names

        Partial text is shown while streaming and dropped if the stream
        fails or is cancelled; a suggestion is only added once it completes.
        """
        habit_names = [h.name for h in self.state.habits]
        try:
            handle = self.suggestion_service.start(habit_names, cancel_event=cancel_event)
            for event in handle.events():
                self.dispatch(event)
        except StreamAlreadyActiveError:
            logger.warning("[TRACKER] Ignoring suggestion request while a stream is in flight")
        except StreamCancelledError:
            logger.info("[TRACKER] Suggestion stream cancelled")
            self.dispatch(StreamDiscarded())
        except HabitTrackerException as e:
            self._fail(Operation.SUGGESTIONS, ERROR_SUGGESTIONS, e)
        return self.state
