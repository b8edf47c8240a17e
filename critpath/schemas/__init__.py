"""
Input data schemas for validation.

Usage:
    from critpath.schemas import TaskRecord

    record = TaskRecord.model_validate({'id': 1, 'name': 'Design', 'duration': 2})
"""

from .tasks import TaskRecord, TaskId, coerce_task_id

__all__ = ['TaskRecord', 'TaskId', 'coerce_task_id']
