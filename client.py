"""
Interactive console for the task tracker.

Tasks are kept locally (and mirrored to disk) first; changes are pushed to
the REST service in the background.
"""

import logging
import re

from task_tracker.client import LocalStorage, TaskApiClient, TaskSync
from task_tracker.config import client_settings
from task_tracker.models import CATEGORIES

logger = logging.getLogger(__name__)

HELP = """Commands:
  add <text>          add a task to the active category
  done <n> / undo <n> mark task n completed / not completed
  rm <n>              delete task n
  clear               delete completed tasks in the active category
  tab <category>      switch to Personal or Professional
  list                show the active category
  sync                push pending changes to the server now
  exit | quit         leave"""


def render(sync: TaskSync, category: str) -> str:
    counts = sync.counts()
    tabs = "  ".join(
        f"[{name} {counts[name]}]" if name == category else f" {name} {counts[name]} "
        for name in CATEGORIES
    )
    lines = [tabs]

    tasks = sync.tasks_for(category)
    if not tasks:
        lines.append("No tasks yet. Add one to get started!")
    for i, task in enumerate(tasks, start=1):
        mark = "x" if task.completed else " "
        lines.append(f"{i:>3}. [{mark}] {task.description}")

    completed = sync.completed_count(category)
    if completed:
        lines.append(f"     (clear) Clear Completed ({completed})")
    if sync.error:
        lines.append(f"! {sync.error}")
    pending = len(sync.outbox)
    if pending:
        lines.append(f"  {pending} change(s) waiting for the server")
    return "\n".join(lines)


def _task_at(sync: TaskSync, category: str, number: str):
    tasks = sync.tasks_for(category)
    index = int(number) - 1
    if 0 <= index < len(tasks):
        return tasks[index]
    return None


def handle_command(sync: TaskSync, category: str, user_input: str):
    """
    Apply one command line. Returns (active category, text to print).
    """
    text = user_input.strip()
    command, _, rest = text.partition(" ")
    command = command.lower()

    if command == "add":
        sync.add_task(rest, category)
        return category, render(sync, category)

    match = re.match(r"(done|undo|rm)\s+(\d+)$", text, re.IGNORECASE)
    if match:
        task = _task_at(sync, category, match.group(2))
        if task is None:
            return category, f"No task number {match.group(2)} in {category}."
        action = match.group(1).lower()
        if action == "rm":
            sync.delete_task(task.id)
        else:
            sync.update_task(task.id, completed=(action == "done"))
        return category, render(sync, category)

    if command == "clear":
        removed = sync.clear_completed(category)
        return category, f"Removed {len(removed)} completed task(s).\n" + render(sync, category)

    if command == "tab":
        wanted = rest.strip().capitalize()
        if wanted not in CATEGORIES:
            return category, f"Unknown category '{rest.strip()}'. Use one of: {', '.join(CATEGORIES)}"
        return wanted, render(sync, wanted)

    if command == "list":
        return category, render(sync, category)

    if command == "sync":
        done = sync.flush()
        return category, "All changes sent." if done else "Server unreachable; changes kept for later."

    return category, HELP


def task_loop(sync: TaskSync):
    category = CATEGORIES[0]
    print("Task tracker. Type 'help' for commands, 'exit' to quit.")
    print(render(sync, category))

    while True:
        user_input = input("\n> ").strip()
        if user_input.lower() in ("exit", "quit"):
            print("Bye.")
            break
        if not user_input:
            continue
        category, output = handle_command(sync, category, user_input)
        print(output)


def main():
    settings = client_settings()
    logging.basicConfig(level=settings.log_level)

    api = TaskApiClient(settings.api_url, timeout=settings.timeout)
    sync = TaskSync(api, LocalStorage(settings.storage_path))
    print(f"Loading tasks from {settings.api_url} ...")
    sync.mount()
    try:
        task_loop(sync)
    except (KeyboardInterrupt, EOFError):
        print("\nInterrupted.")
    finally:
        sync.close()


if __name__ == "__main__":
    main()
