"""
Task Loader.

Loads task definitions from CSV or JSON files and converts them into
Task objects for CPM analysis.
"""

import json
import logging
from pathlib import Path
from typing import Any, Union

import pandas as pd
from pydantic import ValidationError

from critpath.cpm.models import Task
from critpath.schemas.tasks import TaskRecord

logger = logging.getLogger(__name__)

CSV_COLUMNS = ['id', 'name', 'duration', 'unit', 'dependencies']
REQUIRED_COLUMNS = {'id', 'name', 'duration'}


class TaskFileError(ValueError):
    """Raised when a task file cannot be read or fails validation."""


def records_to_tasks(records: list[dict[str, Any]]) -> list[Task]:
    """
    Validate raw records and convert them to Task objects.

    Args:
        records: List of dicts with id, name, duration, unit, dependencies

    Returns:
        Tasks in input order

    Raises:
        TaskFileError: on schema violations or duplicate IDs
    """
    tasks = []
    seen_ids = set()

    for idx, record in enumerate(records):
        try:
            parsed = TaskRecord.model_validate(record)
        except ValidationError as e:
            errors = '; '.join(
                f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
                for err in e.errors()
            )
            raise TaskFileError(f"Record {idx}: {errors}") from e

        if parsed.id in seen_ids:
            raise TaskFileError(f"Record {idx}: duplicate task ID {parsed.id!r}")
        seen_ids.add(parsed.id)

        tasks.append(Task(
            id=parsed.id,
            name=parsed.name,
            duration=parsed.duration,
            unit=parsed.unit,
            dependencies=tuple(parsed.dependencies),
        ))

    return tasks


def _read_csv_records(path: Path) -> list[dict[str, Any]]:
    """Read CSV rows as string-valued dicts."""
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    df.columns = [str(col).strip().lower() for col in df.columns]

    missing = REQUIRED_COLUMNS - set(df.columns)
    if missing:
        raise TaskFileError(f"{path.name}: missing required columns {sorted(missing)}")

    columns = [col for col in CSV_COLUMNS if col in df.columns]
    return df[columns].to_dict('records')


def _read_json_records(path: Path) -> list[dict[str, Any]]:
    """Read a JSON list of task objects, or an object with a 'tasks' list."""
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = data.get('tasks')
    if not isinstance(data, list):
        raise TaskFileError(f"{path.name}: expected a list of tasks or an object with a 'tasks' list")
    return data


def load_tasks(path: Union[str, Path]) -> list[Task]:
    """
    Load tasks from a CSV or JSON file.

    Args:
        path: Path to a .csv or .json file

    Returns:
        List of Task objects in file order

    Raises:
        TaskFileError: file missing, unsupported, malformed, or invalid
    """
    path = Path(path)
    if not path.exists():
        raise TaskFileError(f"Task file not found: {path}")

    readers = {
        '.csv': _read_csv_records,
        '.json': _read_json_records,
    }
    reader = readers.get(path.suffix.lower())
    if reader is None:
        raise TaskFileError(f"Unsupported task file format: {path.suffix or '(none)'}")

    try:
        records = reader(path)
    except (json.JSONDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError,
            UnicodeDecodeError) as e:
        raise TaskFileError(f"Failed to parse {path.name}: {e}") from e
    except OSError as e:
        raise TaskFileError(f"Failed to read {path.name}: {e}") from e

    tasks = records_to_tasks(records)
    logger.info(f"Loaded {len(tasks)} tasks from {path}")
    return tasks
