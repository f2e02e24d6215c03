"""
Application-wide constants
"""

LLM_MODEL_DEFAULT = "gpt-4o-mini"

# HTTP contract paths
LIST_HABITS_PATH = "/api/list-habits"
CREATE_HABIT_PATH = "/api/create-habit"
LOG_HABIT_PATH = "/api/log-habit"
SUGGESTIONS_PATH_DEFAULT = "/integrations/chat-gpt/conversationgpt4"

# Chat-completion stream wire format
SSE_DATA_PREFIX = "data:"
SSE_DONE_PAYLOAD = "[DONE]"

# User-visible error banners, one per operation category
ERROR_LOAD_HABITS = "Could not load your habits"
ERROR_CREATE_HABIT = "Could not create the habit"
ERROR_LOG_HABIT = "Could not log the habit"
ERROR_SUGGESTIONS = "Could not get AI suggestions"
