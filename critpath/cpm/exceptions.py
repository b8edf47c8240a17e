"""Exceptions raised for malformed task graphs."""


class CPMError(ValueError):
    """Base class for task graph errors."""


class DanglingDependencyError(CPMError):
    """A task depends on an ID that is not in the collection."""

    def __init__(self, task_id, dependency_id):
        self.task_id = task_id
        self.dependency_id = dependency_id
        super().__init__(
            f"Task {task_id!r} depends on {dependency_id!r}, which is not in the task list"
        )


class CycleDetectedError(CPMError):
    """The dependency graph contains a cycle."""

    def __init__(self, task_ids):
        try:
            self.task_ids = sorted(task_ids)
        except TypeError:
            self.task_ids = sorted(task_ids, key=repr)
        preview = ', '.join(repr(t) for t in self.task_ids[:5])
        more = '...' if len(self.task_ids) > 5 else ''
        super().__init__(
            f"Circular dependency detected involving {len(self.task_ids)} tasks: "
            f"{preview}{more}"
        )
