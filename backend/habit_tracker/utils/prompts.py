"""
Prompts for AI habit suggestions
"""
from typing import List

SUGGESTION_SYSTEM_PROMPT = (
    "You are a helpful AI assistant that provides personalized habit suggestions. "
    "Keep suggestions short, practical, and motivating."
)


def format_suggestion_prompt(habit_names: List[str]) -> str:
    """
    Format the user prompt asking for a new habit suggestion.

    Args:
        habit_names: Names of the habits the user already tracks

    Returns:
        Formatted prompt string
    """
    return (
        f"Based on my current habits: {', '.join(habit_names)}, suggest a new healthy habit "
        "I could add to improve my routine. Keep it brief and specific."
    )
