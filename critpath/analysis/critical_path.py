"""
Critical Path Analysis.

Formats the critical chain for display, computes per-task slack with a
backward pass, and prints a summary report.
"""

from typing import Hashable, Iterable, Optional

from ..cpm.models import Task, CriticalPathResult, HOURS_PER_DAY
from ..cpm.network import TaskNetwork

PATH_MARKER = '↓'


def _fmt_number(value: float) -> str:
    """Render whole numbers without a trailing .0."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def format_duration(hours: float) -> str:
    """
    Format a duration in hours for display.

    Under one day: "H hours". Otherwise "D days", or "D days and H hours"
    when there is a remainder.
    """
    if hours < HOURS_PER_DAY:
        return f"{_fmt_number(hours)} hours"

    days, remainder = divmod(hours, HOURS_PER_DAY)
    if remainder > 0:
        return f"{_fmt_number(days)} days and {_fmt_number(remainder)} hours"
    return f"{_fmt_number(days)} days"


def format_task_duration(task: Task) -> str:
    """Format a task's duration in its own unit."""
    return f"{_fmt_number(task.duration)} {task.unit}"


def format_critical_path(result: CriticalPathResult) -> str:
    """
    Render the critical chain as text.

    Lists the tasks in order joined by arrow markers, followed by the total
    duration.
    """
    if result.is_empty():
        return "No tasks. Add tasks to calculate the critical path."

    lines = [f"Total duration: {format_duration(result.total_duration_hours)}", ""]
    for i, task in enumerate(result.path):
        lines.append(f"{task.name} ({format_task_duration(task)})")
        if i < len(result.path) - 1:
            lines.append(PATH_MARKER)
    return "\n".join(lines)


def calculate_slack(tasks: Iterable[Task], result: CriticalPathResult) -> dict[Hashable, float]:
    """
    Calculate total slack (hours) for every task.

    Backward pass: terminal tasks may finish as late as the project finish;
    any other task must finish before its earliest-needed dependent starts.
    Slack is latest start minus earliest start.

    Args:
        tasks: The same task collection the result was computed from
        result: Output of compute_critical_path for that collection

    Returns:
        Dict mapping task ID to slack in hours (0 on the critical path)
    """
    network = TaskNetwork.from_tasks(tasks)
    if not network.tasks:
        return {}

    project_finish = result.total_duration_hours
    latest_start = {}

    for task_id in reversed(network.topological_sort()):
        task = network.tasks[task_id]
        dependents = network.get_dependents(task_id)
        if dependents:
            latest_finish = min(latest_start[d] for d in dependents)
        else:
            latest_finish = project_finish
        latest_start[task_id] = latest_finish - task.duration_hours

    return {
        tid: latest_start[tid] - result.earliest_start[tid]
        for tid in network.tasks
    }


def print_critical_path_report(
    result: CriticalPathResult,
    slack: Optional[dict[Hashable, float]] = None,
    tasks: Optional[list[Task]] = None,
) -> None:
    """Print a formatted critical path report."""
    print("=" * 80)
    print("CRITICAL PATH ANALYSIS REPORT")
    print("=" * 80)

    if tasks is not None:
        print(f"\nTotal Tasks: {len(tasks)}")
    print(f"Critical Tasks: {len(result.path)}")
    print(f"Total Duration: {format_duration(result.total_duration_hours)} "
          f"({_fmt_number(result.total_duration_hours)} hours)")

    print("\n--- Critical Path ---")
    if result.is_empty():
        print("  (no tasks)")
    for i, task in enumerate(result.path):
        start = result.earliest_start.get(task.id, 0)
        print(f"  {i+1:3d}. {str(task.id):15s} | {task.name[:40]:40s} | "
              f"start {_fmt_number(start):>6s}h | {format_task_duration(task)}")

    if slack and tasks:
        print("\n--- Slack (non-critical tasks) ---")
        critical_ids = set(result.task_ids())
        others = [t for t in tasks if t.id not in critical_ids]
        others.sort(key=lambda t: slack.get(t.id, 0))
        if not others:
            print("  (every task is on the critical path)")
        for task in others:
            print(f"  {str(task.id):15s} | {task.name[:40]:40s} | "
                  f"slack {format_duration(slack.get(task.id, 0))}")

    print("\n" + "=" * 80)
