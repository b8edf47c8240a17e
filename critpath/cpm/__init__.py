"""
CPM (Critical Path Method) calculator for task dependency graphs.

This module provides:
- Task and result data models with hour/day duration normalization
- Task network construction with dependency validation
- Forward pass earliest-start calculation
- Critical path selection and reconstruction
"""

from .models import Task, CriticalPathResult, HOURS_PER_DAY, UNIT_HOURS, UNIT_DAYS
from .exceptions import CPMError, DanglingDependencyError, CycleDetectedError
from .network import TaskNetwork
from .engine import CPMEngine, compute_critical_path

__all__ = [
    'Task',
    'CriticalPathResult',
    'HOURS_PER_DAY',
    'UNIT_HOURS',
    'UNIT_DAYS',
    'CPMError',
    'DanglingDependencyError',
    'CycleDetectedError',
    'TaskNetwork',
    'CPMEngine',
    'compute_critical_path',
]
