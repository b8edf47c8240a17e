"""
Critical path analysis for task dependency graphs.

Provides the CPM engine, task file loading, text/diagram rendering and an
optional AI review of rendered diagrams.
"""

from .cpm import (
    Task,
    CriticalPathResult,
    CPMError,
    DanglingDependencyError,
    CycleDetectedError,
    TaskNetwork,
    CPMEngine,
    compute_critical_path,
)

__version__ = "0.1.0"

__all__ = [
    'Task',
    'CriticalPathResult',
    'CPMError',
    'DanglingDependencyError',
    'CycleDetectedError',
    'TaskNetwork',
    'CPMEngine',
    'compute_critical_path',
]
