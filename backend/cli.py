#!/usr/bin/env python3
"""
AI Habit Tracker CLI - track habits and stream AI suggestions from the terminal
"""
import logging
import sys
from typing import Any, List, Optional, Tuple

from habit_tracker.core.config import settings
from habit_tracker.models.events import (
    Operation,
    OperationFailed,
    StreamChunk,
    StreamDiscarded,
    StreamFinished
)
from habit_tracker.models.habit import Frequency
from habit_tracker.services.habits import HabitStoreClient
from habit_tracker.services.suggestions import SuggestionService
from habit_tracker.services.tracker import HabitTracker, TrackerState
from habit_tracker.utils.timezone import format_local_date

HELP = """Commands:
  add <name> [daily|weekly|monthly]   Add a habit (daily by default)
  done <n>                            Mark habit number n complete
  suggest                             Ask the AI for a new habit
  list                                Show habits and suggestions
  help                                Show this help
  quit                                Leave"""

FREQUENCIES = [f.value for f in Frequency]


def parse_add(args: List[str]) -> Tuple[str, Frequency]:
    """Split `add` arguments into a name and an optional trailing frequency"""
    if args and args[-1].lower() in FREQUENCIES:
        return " ".join(args[:-1]), Frequency(args[-1].lower())
    return " ".join(args), Frequency.DAILY


def render(state: TrackerState) -> str:
    """Render the whole screen as text"""
    lines = ["🌱 Your Habits"]
    if state.error:
        lines.insert(0, f"⚠️  {state.error}")

    if not state.habits:
        lines.append("  No habits yet. Add one with: add <name>")
    for index, habit in enumerate(state.habits, start=1):
        lines.append(f"  {index}. {habit.name} ({habit.frequency.value})")

    if state.suggestions:
        lines.append("")
        lines.append("💡 AI Suggestions")
        for suggestion in state.suggestions:
            lines.append(f"  - {suggestion.suggestion} [{format_local_date(suggestion.created_at)}]")
    return "\n".join(lines)


class StreamPrinter:
    """Tracker listener that prints suggestion text as it streams in"""

    def __init__(self, out=sys.stdout):
        self.out = out
        self.shown = 0

    def __call__(self, state: TrackerState, event: Any) -> None:
        if isinstance(event, StreamChunk):
            if self.shown == 0:
                self.out.write("💡 ")
            # Each chunk carries the full text so far; print only what is new
            self.out.write(event.text[self.shown:])
            self.out.flush()
            self.shown = len(event.text)
        elif isinstance(event, (StreamFinished, StreamDiscarded)):
            if self.shown:
                self.out.write("\n")
            self.shown = 0
        elif isinstance(event, OperationFailed) and event.operation == Operation.SUGGESTIONS:
            if self.shown:
                self.out.write("\n")
            self.shown = 0
            self.out.write(f"⚠️  {event.message}\n")


def select_habit_id(state: TrackerState, arg: str) -> Optional[Any]:
    """Map a 1-based list position to a habit id"""
    try:
        index = int(arg) - 1
    except ValueError:
        return None
    if 0 <= index < len(state.habits):
        return state.habits[index].id
    return None


def handle_command(tracker: HabitTracker, line: str) -> bool:
    """
    Run one command line

    Returns:
        False when the user asked to quit
    """
    command, *args = line.split()
    command = command.lower()

    if command in ("quit", "exit", "q"):
        return False

    if command == "help":
        print(HELP)
    elif command == "list":
        print(render(tracker.state))
    elif command == "add":
        name, frequency = parse_add(args)
        tracker.add_habit(name, frequency)
        print(render(tracker.state))
    elif command == "done":
        habit_id = select_habit_id(tracker.state, args[0]) if args else None
        if habit_id is None:
            print("Usage: done <habit number>")
        else:
            tracker.log_habit(habit_id)
            print(render(tracker.state))
    elif command == "suggest":
        try:
            tracker.get_ai_suggestions()
        except KeyboardInterrupt:
            tracker.dispatch(StreamDiscarded())
            print("(suggestion cancelled)")
    else:
        print(f"Unknown command '{command}'. Type 'help'.")
    return True


def main():
    """Main CLI loop"""
    logging.basicConfig(
        level=logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    printer = StreamPrinter()
    tracker = HabitTracker(
        HabitStoreClient(settings.API_BASE_URL, timeout=settings.REQUEST_TIMEOUT_SECONDS),
        SuggestionService(
            settings.API_BASE_URL,
            path=settings.SUGGESTIONS_PATH,
            timeout=settings.REQUEST_TIMEOUT_SECONDS
        ),
        listener=printer
    )

    print("🌱 AI Habit Tracker")
    print(f"Connected to: {settings.API_BASE_URL}")
    print("Loading your habits...")
    tracker.load_habits()
    print(render(tracker.state))
    print("\nType 'help' for commands\n")

    while True:
        try:
            line = input("> ").strip()
            if not line:
                continue
            if not handle_command(tracker, line):
                print("👋 Bye!")
                break
            print()
        except (KeyboardInterrupt, EOFError):
            print("\n👋 Bye!")
            break


if __name__ == "__main__":
    main()
