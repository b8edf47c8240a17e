"""
Task Network for CPM calculations.

Manages tasks and their dependency links with support for topological
sorting and network traversal.
"""

from collections import deque
from typing import Hashable, Iterable, Optional

from .exceptions import CPMError, CycleDetectedError, DanglingDependencyError
from .models import Task


class TaskNetwork:
    """
    Task dependency network for CPM calculations.

    Maps IDs to tasks and keeps dependency (predecessor) and dependent
    (successor) adjacency, built once from an input collection.
    The network never modifies the Task objects it is given.
    """

    def __init__(self):
        self.tasks: dict[Hashable, Task] = {}
        self._dependents: dict[Hashable, list[Hashable]] = {}

    @classmethod
    def from_tasks(cls, tasks: Iterable[Task]) -> 'TaskNetwork':
        """
        Build a network from a task collection.

        Raises:
            CPMError: if two tasks share an ID
            DanglingDependencyError: if a dependency ID is not in the collection
        """
        network = cls()
        for task in tasks:
            network.add_task(task)
        network._link()
        return network

    def add_task(self, task: Task) -> None:
        """Add a task to the network."""
        if task.id in self.tasks:
            raise CPMError(f"Duplicate task ID {task.id!r}")
        self.tasks[task.id] = task
        self._dependents[task.id] = []

    def _link(self) -> None:
        """Resolve dependency IDs into reverse edges."""
        for task in self.tasks.values():
            for dep_id in task.dependencies:
                if dep_id not in self.tasks:
                    raise DanglingDependencyError(task.id, dep_id)
                self._dependents[dep_id].append(task.id)

    def get_task(self, task_id: Hashable) -> Optional[Task]:
        """Get a task by ID."""
        return self.tasks.get(task_id)

    def get_dependencies(self, task_id: Hashable) -> list[Task]:
        """Get the Task objects that must finish before task_id starts."""
        return [self.tasks[dep_id] for dep_id in self.tasks[task_id].dependencies]

    def get_dependents(self, task_id: Hashable) -> list[Hashable]:
        """Get IDs of tasks that list task_id as a dependency."""
        return self._dependents.get(task_id, [])

    def get_start_tasks(self) -> list[Hashable]:
        """Get task IDs with no dependencies."""
        return [tid for tid, task in self.tasks.items() if not task.dependencies]

    def get_terminal_tasks(self) -> list[Hashable]:
        """Get task IDs that no other task depends on."""
        return [tid for tid in self.tasks if not self._dependents[tid]]

    def topological_sort(self) -> list[Hashable]:
        """
        Return task IDs in topological order (dependencies before dependents).

        Uses Kahn's algorithm. Raises CycleDetectedError if the dependency
        graph is cyclic.
        """
        in_degree = {tid: len(task.dependencies) for tid, task in self.tasks.items()}

        queue = deque(tid for tid, deg in in_degree.items() if deg == 0)
        result = []

        while queue:
            task_id = queue.popleft()
            result.append(task_id)

            for dependent_id in self._dependents[task_id]:
                in_degree[dependent_id] -= 1
                if in_degree[dependent_id] == 0:
                    queue.append(dependent_id)

        if len(result) != len(self.tasks):
            # Anything left is on a cycle or downstream of one
            remaining = set(self.tasks) - set(result)
            raise CycleDetectedError(remaining)

        return result

    def get_statistics(self) -> dict:
        """Get network statistics."""
        return {
            'total_tasks': len(self.tasks),
            'total_dependencies': sum(len(t.dependencies) for t in self.tasks.values()),
            'start_tasks': len(self.get_start_tasks()),
            'terminal_tasks': len(self.get_terminal_tasks()),
        }

    def __len__(self) -> int:
        return len(self.tasks)

    def __contains__(self, task_id: Hashable) -> bool:
        return task_id in self.tasks

    def __repr__(self) -> str:
        deps = sum(len(t.dependencies) for t in self.tasks.values())
        return f"TaskNetwork({len(self.tasks)} tasks, {deps} dependencies)"
