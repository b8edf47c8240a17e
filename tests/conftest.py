"""Pytest configuration and fixtures."""
import pytest
from typing import List

from critpath.cpm.models import Task


@pytest.fixture
def linear_tasks() -> List[Task]:
    """A(2h) -> B(3h) -> C(1h)."""
    return [
        Task(id=1, name='A', duration=2),
        Task(id=2, name='B', duration=3, dependencies=(1,)),
        Task(id=3, name='C', duration=1, dependencies=(2,)),
    ]


@pytest.fixture
def diamond_tasks() -> List[Task]:
    """A(1h) fans out to B(2h) and C(5h), which join into D(1h)."""
    return [
        Task(id='A', name='Start', duration=1),
        Task(id='B', name='Short branch', duration=2, dependencies=('A',)),
        Task(id='C', name='Long branch', duration=5, dependencies=('A',)),
        Task(id='D', name='Finish', duration=1, dependencies=('B', 'C')),
    ]


@pytest.fixture
def mixed_unit_tasks() -> List[Task]:
    """A(1 day) -> B(5 hours)."""
    return [
        Task(id=1, name='A', duration=1, unit='days'),
        Task(id=2, name='B', duration=5, unit='hours', dependencies=(1,)),
    ]


@pytest.fixture
def tasks_csv(tmp_path):
    """Write a small CSV task file and return its path."""
    path = tmp_path / 'tasks.csv'
    path.write_text(
        "id,name,duration,unit,dependencies\n"
        "1,Requirements,2,days,\n"
        "2,Design,3,days,1\n"
        "3,Backend,5,days,2\n"
        "4,Frontend,4,days,2\n"
        "5,Integration,6,hours,3;4\n",
        encoding='utf-8',
    )
    return path
