"""
Habit Store Client - request/response calls against the habit API
"""
from typing import Any, Dict, List, Optional, Union
import logging

import requests
from pydantic import ValidationError

from habit_tracker.core.constants import (
    LIST_HABITS_PATH,
    CREATE_HABIT_PATH,
    LOG_HABIT_PATH
)
from habit_tracker.core.dependencies import get_http_session
from habit_tracker.core.exceptions import RequestError
from habit_tracker.models.habit import Frequency, Habit

logger = logging.getLogger(__name__)


class HabitStoreClient:
    """
    Thin client for the list/create/log habit endpoints.

    Every non-success status, network failure and malformed body surfaces as
    RequestError. There is no retry and no timeout unless one is given.
    """

    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or get_http_session()
        self.timeout = timeout

    def _post(self, path: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """POST to the API and return the decoded JSON body"""
        url = f"{self.base_url}{path}"
        try:
            response = self.session.post(url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"[HABITS] Request to {path} failed: {e}")
            raise RequestError(f"Request to {path} failed: {e}")

        if not response.ok:
            logger.error(f"[HABITS] {path} returned HTTP {response.status_code}")
            raise RequestError(f"{path} returned HTTP {response.status_code}", response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise RequestError(f"{path} returned a non-JSON body: {e}", response.status_code)
        return data if isinstance(data, dict) else {}

    def list_habits(self) -> List[Habit]:
        """
        Fetch the full habit list

        Returns:
            Habits in server order

        Raises:
            RequestError: If the call fails or the body has no habits list
        """
        data = self._post(LIST_HABITS_PATH)
        habits = data.get("habits")
        if not isinstance(habits, list):
            raise RequestError("list-habits response is missing 'habits'")
        try:
            return [Habit.model_validate(h) for h in habits]
        except ValidationError as e:
            raise RequestError(f"list-habits returned an invalid habit: {e}")

    def create_habit(self, name: str, frequency: Union[Frequency, str] = Frequency.DAILY) -> Optional[Habit]:
        """
        Create a habit

        Args:
            name: Habit name; blank names are ignored without calling the API
            frequency: daily, weekly or monthly

        Returns:
            The created habit, or None if the name was blank

        Raises:
            RequestError: If the call fails or the body has no habit, or the frequency is unknown
        """
        if not name or not name.strip():
            logger.debug("[HABITS] Ignoring create with blank name")
            return None

        try:
            frequency = Frequency(frequency)
        except ValueError:
            logger.error(f"[HABITS] Unknown frequency {frequency!r}")
            raise RequestError(f"Unknown habit frequency {frequency!r}")
        data = self._post(CREATE_HABIT_PATH, {"name": name, "frequency": frequency.value})
        try:
            habit = Habit.model_validate(data.get("habit"))
        except ValidationError as e:
            raise RequestError(f"create-habit returned an invalid habit: {e}")

        logger.info(f"[HABITS] Created habit {habit.id} '{habit.name}' ({habit.frequency.value})")
        return habit

    def log_habit(self, habit_id: Union[int, str]) -> List[Habit]:
        """
        Log a completion, then re-fetch the full list

        The log call's body is not inspected. If the log succeeds but the
        refresh fails, the refresh error is raised.

        Returns:
            The refreshed habit list

        Raises:
            RequestError: If either call fails
        """
        self._post(LOG_HABIT_PATH, {"habitId": habit_id})
        logger.info(f"[HABITS] Logged completion for habit {habit_id}")
        return self.list_habits()
