"""Unit tests for CSV export (levelup/services/data_export.py)"""
import csv
import io
from datetime import date

from levelup.models import CompletionStatus
from levelup.services.data_export import EXPORT_HEADERS, export_completions_csv


def test_export_rows(sample_goals, completion_factory):
    completions = [
        completion_factory("run", on_date=date(2024, 1, 1), exp_awarded=50, note="windy, cold"),
        completion_factory("read", on_date=date(2024, 1, 2), status=CompletionStatus.SKIPPED, exp_awarded=0),
    ]

    rows = list(csv.reader(io.StringIO(export_completions_csv(sample_goals, completions))))

    assert rows[0] == EXPORT_HEADERS
    assert rows[1] == ["2024-01-01", "10km Run", "completed", "windy, cold", "50"]
    assert rows[2] == ["2024-01-02", "Read", "skipped", "", "0"]


def test_export_unknown_goal_title(sample_goals, completion_factory):
    completions = [completion_factory("deleted", on_date=date(2024, 1, 1))]

    rows = list(csv.reader(io.StringIO(export_completions_csv(sample_goals, completions))))

    assert rows[1][1] == "N/A"


def test_export_empty_history():
    assert export_completions_csv([], []) == "date,goal_title,status,note,exp_awarded\n"
