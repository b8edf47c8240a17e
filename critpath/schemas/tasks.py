"""
Task input schemas.

Input files: tasks.csv / tasks.json
"""

import re
from typing import Literal, Union

from pydantic import BaseModel, Field, field_validator

TaskId = Union[int, str]

_INT_PATTERN = re.compile(r'0|-?[1-9]\d*')


def coerce_task_id(value) -> TaskId:
    """
    Normalize an ID read from a file.

    Canonical integer strings become ints; anything else, including
    zero-padded numbers such as "007", stays a string.
    """
    if isinstance(value, bool):
        raise ValueError("task ID must be an integer or string")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"task ID must be integral, got {value}")
        return int(value)
    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise ValueError("task ID must not be empty")
        if _INT_PATTERN.fullmatch(value):
            return int(value)
    return value


class TaskRecord(BaseModel):
    """
    One task row as supplied by an input file.

    CSV columns: id, name, duration, unit, dependencies
    (dependencies as a ';'-separated list of IDs)
    """
    id: TaskId = Field(description="Unique task identifier")
    name: str = Field(min_length=1, description="Display label")
    duration: float = Field(ge=0, allow_inf_nan=False, description="Duration in the given unit")
    unit: Literal['hours', 'days'] = Field(default='hours', description="Duration unit")
    dependencies: list[TaskId] = Field(default_factory=list, description="IDs that must finish first")

    @field_validator('id', mode='before')
    @classmethod
    def _normalize_id(cls, value):
        return coerce_task_id(value)

    @field_validator('unit', mode='before')
    @classmethod
    def _normalize_unit(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            return 'hours'
        return str(value).strip().lower()

    @field_validator('dependencies', mode='before')
    @classmethod
    def _split_dependencies(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            value = [part for part in re.split(r'[;,]', value) if part.strip()]
        elif isinstance(value, (int, float)):
            value = [value]
        return [coerce_task_id(v) for v in value]
