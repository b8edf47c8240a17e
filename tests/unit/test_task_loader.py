"""Unit tests for task file loading and schema validation."""
import json

import pytest
from pydantic import BaseModel, ValidationError

from critpath.loaders.task_loader import load_tasks, records_to_tasks, TaskFileError
from critpath.schemas.tasks import TaskRecord, coerce_task_id


class TestTaskRecord:
    """Test the pydantic input schema."""

    def test_schema_is_pydantic_model(self):
        """TaskRecord is a Pydantic BaseModel."""
        assert issubclass(TaskRecord, BaseModel)

    def test_defaults(self):
        """Unit defaults to hours and dependencies to empty."""
        record = TaskRecord.model_validate({'id': 1, 'name': 'A', 'duration': 2})
        assert record.unit == 'hours'
        assert record.dependencies == []

    def test_csv_style_strings(self):
        """String values from CSV are coerced."""
        record = TaskRecord.model_validate({
            'id': '1700000000001',
            'name': 'Build',
            'duration': '2.5',
            'unit': ' Days ',
            'dependencies': '1700000000000; 1700000000002',
        })
        assert record.id == 1700000000001
        assert record.duration == 2.5
        assert record.unit == 'days'
        assert record.dependencies == [1700000000000, 1700000000002]

    def test_string_ids_kept(self):
        """Non-numeric IDs stay strings."""
        record = TaskRecord.model_validate({'id': 'design', 'name': 'D', 'duration': 1,
                                            'dependencies': ['plan']})
        assert record.id == 'design'
        assert record.dependencies == ['plan']

    def test_empty_unit_means_hours(self):
        """A blank unit cell falls back to hours."""
        record = TaskRecord.model_validate({'id': 1, 'name': 'A', 'duration': 1, 'unit': ''})
        assert record.unit == 'hours'

    @pytest.mark.parametrize("record", [
        {'id': 1, 'name': 'A', 'duration': -1},
        {'id': 1, 'name': '', 'duration': 1},
        {'id': 1, 'name': 'A', 'duration': 1, 'unit': 'weeks'},
        {'id': '', 'name': 'A', 'duration': 1},
        {'name': 'A', 'duration': 1},
    ])
    def test_invalid_records(self, record):
        """Invalid records fail validation."""
        with pytest.raises(ValidationError):
            TaskRecord.model_validate(record)

    def test_coerce_task_id(self):
        """Integral floats and digit strings become ints."""
        assert coerce_task_id(3.0) == 3
        assert coerce_task_id(' 42 ') == 42
        assert coerce_task_id('T-1') == 'T-1'

    def test_zero_padded_ids_stay_strings(self):
        """Only canonical integers are converted, so '007' and '7' stay distinct."""
        assert coerce_task_id('007') == '007'
        assert coerce_task_id('0') == 0
        assert coerce_task_id('-12') == -12

        tasks = records_to_tasks([
            {'id': '7', 'name': 'A', 'duration': 1},
            {'id': '007', 'name': 'B', 'duration': 1, 'dependencies': '7'},
        ])
        assert [t.id for t in tasks] == [7, '007']
        assert tasks[1].dependencies == (7,)


class TestRecordsToTasks:
    """Test conversion of validated records to tasks."""

    def test_converts_in_order(self):
        """Tasks keep input order and fields."""
        tasks = records_to_tasks([
            {'id': 2, 'name': 'B', 'duration': 1, 'unit': 'days', 'dependencies': [1]},
            {'id': 1, 'name': 'A', 'duration': 3},
        ])
        assert [t.id for t in tasks] == [2, 1]
        assert tasks[0].duration_hours == 24
        assert tasks[0].dependencies == (1,)

    def test_duplicate_ids(self):
        """Duplicate IDs are reported with the record index."""
        with pytest.raises(TaskFileError, match="Record 1: duplicate task ID 1"):
            records_to_tasks([
                {'id': 1, 'name': 'A', 'duration': 1},
                {'id': 1, 'name': 'B', 'duration': 1},
            ])

    def test_validation_error_context(self):
        """Schema errors name the record and field."""
        with pytest.raises(TaskFileError, match="Record 0: duration"):
            records_to_tasks([{'id': 1, 'name': 'A', 'duration': 'long'}])


class TestLoadTasks:
    """Test reading task files."""

    def test_load_csv(self, tasks_csv):
        """CSV rows become tasks with parsed dependencies."""
        tasks = load_tasks(tasks_csv)
        assert [t.id for t in tasks] == [1, 2, 3, 4, 5]
        assert tasks[0].dependencies == ()
        assert tasks[4].dependencies == (3, 4)
        assert tasks[4].unit == 'hours'
        assert tasks[1].duration_hours == 72

    def test_load_json_list(self, tmp_path):
        """A JSON list of task objects is accepted."""
        path = tmp_path / 'tasks.json'
        path.write_text(json.dumps([
            {'id': 1, 'name': 'A', 'duration': 1, 'unit': 'days', 'dependencies': []},
            {'id': 2, 'name': 'B', 'duration': 5, 'unit': 'hours', 'dependencies': [1]},
        ]), encoding='utf-8')

        tasks = load_tasks(path)
        assert [t.name for t in tasks] == ['A', 'B']

    def test_load_json_object(self, tmp_path):
        """A JSON object with a 'tasks' list is accepted."""
        path = tmp_path / 'tasks.json'
        path.write_text(json.dumps({'tasks': [{'id': 'x', 'name': 'X', 'duration': 1}]}),
                        encoding='utf-8')
        assert load_tasks(path)[0].id == 'x'

    def test_missing_file(self, tmp_path):
        """Missing files raise TaskFileError."""
        with pytest.raises(TaskFileError, match="not found"):
            load_tasks(tmp_path / 'nope.csv')

    def test_unsupported_format(self, tmp_path):
        """Only CSV and JSON are supported."""
        path = tmp_path / 'tasks.xlsx'
        path.write_bytes(b'')
        with pytest.raises(TaskFileError, match="Unsupported"):
            load_tasks(path)

    def test_missing_columns(self, tmp_path):
        """CSV files need id, name and duration columns."""
        path = tmp_path / 'tasks.csv'
        path.write_text("id,name\n1,A\n", encoding='utf-8')
        with pytest.raises(TaskFileError, match="missing required columns"):
            load_tasks(path)

    def test_malformed_json(self, tmp_path):
        """Invalid JSON raises TaskFileError."""
        path = tmp_path / 'tasks.json'
        path.write_text("{not json", encoding='utf-8')
        with pytest.raises(TaskFileError, match="Failed to parse"):
            load_tasks(path)

    def test_json_wrong_shape(self, tmp_path):
        """JSON must hold a list of tasks."""
        path = tmp_path / 'tasks.json'
        path.write_text('{"items": []}', encoding='utf-8')
        with pytest.raises(TaskFileError, match="expected a list"):
            load_tasks(path)

    @pytest.mark.parametrize("name", ['tasks.csv', 'tasks.json'])
    def test_non_utf8_file(self, tmp_path, name):
        """Files that are not UTF-8 raise TaskFileError."""
        path = tmp_path / name
        path.write_bytes(b"id,name,duration\n\xff\xfe,A,1\n")
        with pytest.raises(TaskFileError, match="Failed to parse"):
            load_tasks(path)

    def test_unreadable_path(self, tmp_path):
        """A directory in place of a file raises TaskFileError."""
        path = tmp_path / 'tasks.csv'
        path.mkdir()
        with pytest.raises(TaskFileError, match="Failed to read"):
            load_tasks(path)
