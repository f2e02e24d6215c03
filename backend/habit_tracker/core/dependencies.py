"""
Dependency injection for shared clients and resources
"""
from functools import lru_cache

import requests
from openai import OpenAI

from habit_tracker.core.config import settings


@lru_cache(maxsize=1)
def get_openai_client() -> OpenAI:
    """Get OpenAI client instance"""
    return OpenAI(api_key=settings.OPENAI_API_KEY)


def get_http_session() -> requests.Session:
    """Get a fresh HTTP session for talking to the habit API"""
    session = requests.Session()
    session.headers.update({"Accept": "application/json"})
    return session
