"""
Update the implementation tracking document after a task changes state.

Usage:
    python -m cigno.scripts.update_todo_list TASK_ID STATUS [--file PATH]

Examples:
    python -m cigno.scripts.update_todo_list 2.1 completed
    python -m cigno.scripts.update_todo_list 3.1 in-progress

Dependencies: argparse, re (stdlib)
System role: Developer tooling for the markdown TODO list
"""

import argparse
import re
import sys
from datetime import date
from pathlib import Path

DEFAULT_TODO_FILE = "TODO_IMPLEMENTATION_LIST.md"

STATUS_MAPPING = {
    "completed": ("✅", "Completed"),
    "in-progress": ("🚧", "In Progress"),
    "not-started": ("❌", "Not Started"),
    "blocked": ("🚫", "Blocked"),
}

RECENT_HEADING = "### **Recent Implementations**"
NEW_RECENT_SECTION = "## 📝 **Recent Implementations**"
UPDATE_PROCESS_HEADING = "## 🔄 **Update Process**"
LAST_UPDATED_PATTERN = re.compile(r"(\*Last Updated: )([^*]+)(\*)")


class TodoUpdateError(Exception):
    """Raised when the tracking document cannot be updated."""


def format_date(day: date) -> str:
    """Format like 'March 5, 2025'."""
    return f"{day.strftime('%B')} {day.day}, {day.year}"


def mark_task(content: str, task_id: str, status: str) -> str:
    """Tick every '[ ] **TASK_ID**' line when status is completed."""
    if status != "completed":
        return content
    pattern = re.compile(rf"\[ \] (\*\*{re.escape(task_id)}\*\*[^\n]*)")
    return pattern.sub(r"[x] \1", content)


def touch_last_updated(content: str, today: str) -> str:
    return LAST_UPDATED_PATTERN.sub(lambda match: f"{match.group(1)}{today}{match.group(3)}", content, count=1)


def record_implementation(content: str, note: str) -> str:
    """
    Add note under the recent implementations heading.

    The heading is created before the update process heading (or at the
    end of the document) when it is missing.
    """
    heading_at = content.find(RECENT_HEADING)
    if heading_at != -1:
        line_end = content.find("\n", heading_at)
        if line_end == -1:
            return f"{content}\n{note}\n"
        return f"{content[:line_end + 1]}{note}\n{content[line_end + 1:]}"

    section = f"{NEW_RECENT_SECTION}\n\n{note}\n\n"
    insert_at = content.find(UPDATE_PROCESS_HEADING)
    if insert_at == -1:
        separator = "" if content.endswith("\n") or not content else "\n"
        return f"{content}{separator}\n{section}"
    return f"{content[:insert_at]}{section}{content[insert_at:]}"


def update_todo_list(path: Path, task_id: str, status: str, today: date | None = None) -> str:
    """
    Apply a status change to the tracking document in place.

    Args:
        path: Markdown document to edit
        task_id: Task identifier such as "2.1"
        status: One of STATUS_MAPPING
        today: Date written into the document, defaults to today

    Returns:
        str: Human-readable status label

    Raises:
        TodoUpdateError: If the file is missing or the status is unknown
    """
    if status not in STATUS_MAPPING:
        raise TodoUpdateError(
            f"Unknown status: {status}. Available statuses: {', '.join(STATUS_MAPPING)}"
        )
    if not path.is_file():
        raise TodoUpdateError(f"{path} not found")

    _, label = STATUS_MAPPING[status]
    stamp = format_date(today or date.today())

    content = path.read_text(encoding="utf-8")
    content = mark_task(content, task_id, status)
    content = touch_last_updated(content, stamp)
    content = record_implementation(content, f"- **{stamp}**: Task {task_id} - {label}")
    path.write_text(content, encoding="utf-8")
    return label


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits with status 1 on usage errors."""

    def error(self, message: str):
        self.print_usage(sys.stderr)
        statuses = ", ".join(STATUS_MAPPING)
        self.exit(1, f"{self.prog}: error: {message}\nStatuses: {statuses}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="update_todo_list",
        description="Update task status in the implementation TODO list",
    )
    parser.add_argument("task_id", help='Task identifier, e.g. "2.1"')
    parser.add_argument("status", help=f"One of: {', '.join(STATUS_MAPPING)}")
    parser.add_argument("--file", default=DEFAULT_TODO_FILE, help="Markdown file to update")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        label = update_todo_list(Path(args.file), args.task_id, args.status)
    except TodoUpdateError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1
    emoji, _ = STATUS_MAPPING[args.status]
    print(f"{emoji} Updated Task {args.task_id}: {label}")
    print(f"📝 Updated {args.file}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
