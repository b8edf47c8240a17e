"""Unit tests for the command line interface."""
import json
import logging
from unittest.mock import patch

import pytest

from critpath.cli import main
from critpath.clients.gemini_client import GeminiResponse


class TestCli:
    """Test CLI runs against task files."""

    def test_report(self, tasks_csv, capsys):
        """Default output is the critical path report."""
        assert main([str(tasks_csv)]) == 0

        out = capsys.readouterr().out
        assert "CRITICAL PATH ANALYSIS REPORT" in out
        assert "Total Duration: 10 days and 6 hours (246 hours)" in out
        assert "Backend" in out

    def test_json_output(self, tasks_csv, capsys):
        """--json prints the path and slack as JSON."""
        assert main([str(tasks_csv), '--json', '--slack']) == 0

        payload = json.loads(capsys.readouterr().out)
        assert [step['id'] for step in payload['path']] == [1, 2, 3, 5]
        assert payload['total_duration_hours'] == 246
        assert payload['slack_hours']['4'] == 24

    def test_exports(self, tasks_csv, tmp_path):
        """Diagram and Mermaid files are written."""
        diagram = tmp_path / 'out' / 'plan.svg'
        mermaid = tmp_path / 'out' / 'plan.mmd'

        assert main([str(tasks_csv), '--diagram', str(diagram), '--mermaid', str(mermaid)]) == 0
        assert diagram.exists()
        assert mermaid.read_text(encoding='utf-8').startswith("graph TD;")

    def test_cycle_exit_code(self, tmp_path, caplog):
        """Graph errors exit with status 1 and a logged message."""
        path = tmp_path / 'cycle.csv'
        path.write_text(
            "id,name,duration,dependencies\n"
            "1,A,1,2\n"
            "2,B,1,1\n",
            encoding='utf-8',
        )
        with caplog.at_level(logging.ERROR):
            assert main([str(path)]) == 1
        assert "Circular dependency" in caplog.text

    def test_dangling_exit_code(self, tmp_path, caplog):
        """Unknown dependency IDs exit with status 1."""
        path = tmp_path / 'dangling.csv'
        path.write_text("id,name,duration,dependencies\n1,A,1,7\n", encoding='utf-8')
        with caplog.at_level(logging.ERROR):
            assert main([str(path)]) == 1
        assert "7" in caplog.text

    def test_non_utf8_file_exit_code(self, tmp_path, caplog):
        """Undecodable task files exit with status 1 and a logged message."""
        path = tmp_path / 'tasks.csv'
        path.write_bytes(b"id,name,duration\n\xff\xfe,A,1\n")
        with caplog.at_level(logging.ERROR):
            assert main([str(path)]) == 1
        assert "Failed to parse" in caplog.text

    def test_missing_file(self, tmp_path):
        """Missing task files exit with status 1."""
        assert main([str(tmp_path / 'missing.csv')]) == 1

    def test_bad_diagram_suffix(self, tasks_csv):
        """Unsupported diagram formats are usage errors."""
        with pytest.raises(SystemExit) as exc_info:
            main([str(tasks_csv), '--diagram', 'plan.gif'])
        assert exc_info.value.code == 2

    def test_review_success(self, tasks_csv, capsys):
        """Review commentary is printed after the report."""
        fake = GeminiResponse(success=True, result="Looks tight.", error=None, model='m')
        with patch('critpath.clients.gemini_client.review_diagram', return_value=fake) as review:
            assert main([str(tasks_csv), '--review']) == 0

        assert "Looks tight." in capsys.readouterr().out
        image, summary = review.call_args.args
        assert image.startswith(b'\x89PNG')
        assert "Total duration: 10 days and 6 hours" in summary

    def test_review_failure_keeps_result(self, tasks_csv, capsys):
        """A failed review does not change the exit code or the report."""
        fake = GeminiResponse(success=False, result=None, error="No API key", model='m')
        with patch('critpath.clients.gemini_client.review_diagram', return_value=fake):
            assert main([str(tasks_csv), '--review']) == 0

        assert "CRITICAL PATH ANALYSIS REPORT" in capsys.readouterr().out
