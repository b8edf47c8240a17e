"""
Loaders for task input files.
"""

from .task_loader import load_tasks, records_to_tasks, TaskFileError

__all__ = ['load_tasks', 'records_to_tasks', 'TaskFileError']
