"""
CPM (Critical Path Method) Engine.

Implements the forward pass over a task dependency graph and traces the
single longest chain of dependent tasks back from the latest-finishing
terminal task.
"""

import logging
from typing import Hashable, Iterable

from .exceptions import CPMError
from .models import Task, CriticalPathResult
from .network import TaskNetwork

logger = logging.getLogger(__name__)


def _lowest_id(task_ids: list) -> Hashable:
    """Deterministic tie-break: the smallest ID wins."""
    try:
        return min(task_ids)
    except TypeError:
        # Mixed ID types in one collection; order by repr instead
        return min(task_ids, key=repr)


class CPMEngine:
    """
    CPM calculation engine.

    Performs the forward pass (earliest starts), terminal task selection
    and critical path reconstruction. All intermediate state is local to
    a single run() call, so one engine may be run repeatedly.
    """

    def __init__(self, tasks: Iterable[Task]):
        """
        Initialize CPM engine.

        Args:
            tasks: Task collection to calculate. Not modified.

        Raises:
            DanglingDependencyError: a dependency ID is not in the collection
            CPMError: two tasks share an ID
        """
        self.network = TaskNetwork.from_tasks(tasks)

    def forward_pass(self) -> dict:
        """
        Calculate the earliest start (hours) of every task.

        Processes tasks in topological order, so each task is evaluated
        exactly once regardless of how many dependents share it.

        Raises:
            CycleDetectedError: the dependency graph is cyclic
        """
        earliest_start = {}

        for task_id in self.network.topological_sort():
            task = self.network.tasks[task_id]
            start = 0
            for dep in self.network.get_dependencies(task_id):
                finish = earliest_start[dep.id] + dep.duration_hours
                if finish > start:
                    start = finish
            earliest_start[task_id] = start

        return earliest_start

    def select_terminal_task(self, earliest_start: dict) -> Task:
        """
        Pick the terminal task with the latest completion.

        Ties go to the smallest task ID.
        """
        terminal_ids = self.network.get_terminal_tasks()
        if not terminal_ids:
            raise CPMError("No terminal task found; the dependency graph has no end")

        completion = {
            tid: earliest_start[tid] + self.network.tasks[tid].duration_hours
            for tid in terminal_ids
        }
        max_completion = max(completion.values())
        candidates = [tid for tid, value in completion.items() if value == max_completion]

        return self.network.tasks[_lowest_id(candidates)]

    def trace_critical_path(self, end_task: Task, earliest_start: dict) -> list[Task]:
        """
        Walk back from end_task along dependencies that drive each start.

        A dependency drives a task when its finish equals the task's
        earliest start exactly. Ties go to the smallest task ID.
        """
        path = [end_task]
        current = end_task

        while current.dependencies:
            start = earliest_start[current.id]
            driving = [
                dep.id for dep in self.network.get_dependencies(current.id)
                if earliest_start[dep.id] + dep.duration_hours == start
            ]
            if not driving:
                # Unreachable: the max over dependencies is always attained
                raise CPMError(f"No driving dependency found for task {current.id!r}")
            current = self.network.tasks[_lowest_id(driving)]
            path.append(current)

        path.reverse()
        return path

    def run(self) -> CriticalPathResult:
        """
        Execute the full critical path calculation.

        Returns:
            CriticalPathResult with the path in execution order and its
            total duration in hours
        """
        if not self.network.tasks:
            return CriticalPathResult(path=[], total_duration_hours=0)

        earliest_start = self.forward_pass()
        end_task = self.select_terminal_task(earliest_start)
        path = self.trace_critical_path(end_task, earliest_start)
        total_duration = earliest_start[end_task.id] + end_task.duration_hours

        logger.debug(
            f"Critical path over {len(self.network)} tasks ends at {end_task.id!r}: "
            f"{len(path)} tasks, {total_duration} hours"
        )

        return CriticalPathResult(
            path=path,
            total_duration_hours=total_duration,
            earliest_start=earliest_start,
        )


def compute_critical_path(tasks: Iterable[Task]) -> CriticalPathResult:
    """
    Compute the critical path of a task collection.

    Args:
        tasks: Tasks with unique IDs and acyclic, resolvable dependencies

    Returns:
        CriticalPathResult; empty path and zero duration for no tasks

    Raises:
        DanglingDependencyError: a dependency ID is not in the collection
        CycleDetectedError: the dependency graph is cyclic
    """
    return CPMEngine(tasks).run()
