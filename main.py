#!/usr/bin/env python3
"""
Workout Tracker - terminal chat with the training assistant.
Main entry point for the command-line interface.
"""

import argparse
import sys

from workout_tracker.app_config import (
    configure_logging,
    get_api_key,
    get_storage_key,
    get_storage_path,
    load_config,
)
from workout_tracker.assistant_client import AssistantClient
from workout_tracker.chat_session import ChatSession
from workout_tracker.storage import PersistenceWriter, open_storage
from workout_tracker.workout_state import sorted_history
from workout_tracker.workout_store import WorkoutStore


HELP_TEXT = """Commands:
  /list                 Show your workout groups
  /history <exercise>   Show the weight history of an exercise
  /help                 Show this help
  /quit                 Exit
Anything else is sent to the assistant."""


def print_banner():
    """Print welcome banner."""
    banner = """
╔══════════════════════════════════════════════════════════════╗
║                                                              ║
║        WORKOUT TRACKER                                       ║
║        AI personal trainer powered by Claude                 ║
║                                                              ║
╚══════════════════════════════════════════════════════════════╝
    """
    print(banner)


def format_collection(collection):
    """Plain-text listing of groups and their exercises."""
    if not collection:
        return "No workout groups yet. Ask the assistant to create one!"

    lines = []
    for group in collection:
        lines.append(f"■ {group['name']}")
        if not group["exercises"]:
            lines.append("    (no exercises)")
        for exercise in group["exercises"]:
            lines.append(
                f"    - {exercise['name']}: {exercise['sets']} x {exercise['reps']}"
                f" @ {exercise['currentTargetWeight'] or '0'} kg"
            )
    return "\n".join(lines)


def format_exercise_history(collection, exercise_name):
    """History of every exercise whose name matches, newest first."""
    query = exercise_name.strip().lower()
    if not query:
        return "Usage: /history <exercise name>"

    lines = []
    for group in collection:
        for exercise in group["exercises"]:
            if query not in exercise["name"].lower():
                continue
            lines.append(f"{exercise['name']} ({group['name']})")
            history = sorted_history(exercise["history"])
            if not history:
                lines.append("    No history recorded.")
            for entry in history:
                lines.append(f"    {entry['date']}  {entry['weight']} kg")

    return "\n".join(lines) if lines else f"No exercise matching '{exercise_name.strip()}'."


def handle_command(line, store):
    """
    Run a slash command.

    Returns:
        False when the user asked to quit, True otherwise
    """
    command, _, argument = line.partition(" ")
    command = command.lower()

    if command in ("/quit", "/exit"):
        return False
    if command == "/list":
        print(format_collection(store.collection))
    elif command == "/history":
        print(format_exercise_history(store.collection, argument))
    else:
        print(HELP_TEXT)
    return True


def main(argv=None):
    """Main application flow."""
    parser = argparse.ArgumentParser(description="Chat with your AI personal trainer")
    parser.add_argument("--config", default="config.yaml", help="Path to config.yaml")
    args = parser.parse_args(argv)

    print_banner()

    config = load_config(args.config)
    configure_logging(config)

    api_key_env = config['assistant']['api_key_env']
    api_key = get_api_key(config)

    if not api_key:
        print(f"\n❌ Error: {api_key_env} not found in environment variables!")
        print("\nPlease:")
        print("1. Copy .env.example to .env")
        print("2. Add your Anthropic API key to .env")
        print("3. Get your API key from: https://console.anthropic.com/")
        sys.exit(1)

    storage = open_storage(get_storage_path(config), key=get_storage_key(config))
    writer = PersistenceWriter(storage)
    store = WorkoutStore.open(storage, writer=writer)
    session = ChatSession(AssistantClient(api_key=api_key, config=config), store)

    print(session.messages[0]["text"])
    print("\n" + HELP_TEXT + "\n")

    try:
        while True:
            line = input("you> ").strip()
            if not line:
                continue
            if line.startswith("/"):
                if not handle_command(line, store):
                    break
                continue

            print("...")
            result = session.send(line)
            if result is None:
                continue
            print(f"\nastra> {result.reply['text']}\n")
            if result.switch_to_workouts:
                print(format_collection(store.collection) + "\n")
    finally:
        writer.flush()
        writer.close()

    print("\nGood luck with your training! 💪\n")


if __name__ == "__main__":
    try:
        main()
    except (KeyboardInterrupt, EOFError):
        print("\n\nExiting...")
        sys.exit(0)
