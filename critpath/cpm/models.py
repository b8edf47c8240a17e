"""
Data models for CPM calculations.

Defines dataclasses for tasks and critical path results.
"""

import math
from dataclasses import dataclass, field
from typing import Hashable

UNIT_HOURS = 'hours'
UNIT_DAYS = 'days'
VALID_UNITS = (UNIT_HOURS, UNIT_DAYS)

HOURS_PER_DAY = 24


@dataclass
class Task:
    """Represents a schedulable task."""

    id: Hashable
    name: str
    duration: float
    unit: str = UNIT_HOURS         # 'hours' or 'days'
    dependencies: tuple = field(default_factory=tuple)

    def __post_init__(self):
        if self.unit not in VALID_UNITS:
            raise ValueError(f"Task {self.id}: unknown unit {self.unit!r} "
                             f"(expected one of {', '.join(VALID_UNITS)})")
        if not math.isfinite(self.duration) or self.duration < 0:
            raise ValueError(f"Task {self.id}: duration must be finite and >= 0, got {self.duration}")

        # Dependencies behave as a set; keep first occurrence for stable display
        self.dependencies = tuple(dict.fromkeys(self.dependencies))

    @property
    def duration_hours(self) -> float:
        """Duration normalized to hours."""
        if self.unit == UNIT_DAYS:
            return self.duration * HOURS_PER_DAY
        return self.duration

    def is_milestone(self) -> bool:
        """Check if task is a milestone (zero duration)."""
        return self.duration == 0

    def has_dependencies(self) -> bool:
        return bool(self.dependencies)


@dataclass
class CriticalPathResult:
    """Results from a critical path calculation."""

    path: list[Task]                      # tasks in execution order
    total_duration_hours: float
    earliest_start: dict = field(default_factory=dict)   # task id -> hours

    def task_ids(self) -> list:
        """Get IDs of the tasks on the critical path."""
        return [task.id for task in self.path]

    def is_empty(self) -> bool:
        return not self.path

    def get_total_duration_days(self) -> float:
        """Get project duration in calendar days."""
        return self.total_duration_hours / HOURS_PER_DAY

    def to_dict(self) -> dict:
        """Serialize to plain JSON-compatible types."""
        return {
            'path': [
                {
                    'id': task.id,
                    'name': task.name,
                    'duration': task.duration,
                    'unit': task.unit,
                    'duration_hours': task.duration_hours,
                    'earliest_start_hours': self.earliest_start.get(task.id),
                }
                for task in self.path
            ],
            'total_duration_hours': self.total_duration_hours,
        }
