"""CSV export of the completion history"""
import csv
import io
import logging
from typing import Iterable

from levelup.models import Completion, Goal

logger = logging.getLogger(__name__)

EXPORT_HEADERS = ["date", "goal_title", "status", "note", "exp_awarded"]
MISSING_GOAL_TITLE = "N/A"


def export_completions_csv(goals: Iterable[Goal], completions: Iterable[Completion]) -> str:
    """
    Render completions as CSV

    Columns: date, goal_title, status, note, exp_awarded. Completions whose
    goal no longer exists are exported with the title "N/A".
    """
    titles = {g.id: g.title for g in goals}

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(EXPORT_HEADERS)

    rows = 0
    for completion in completions:
        writer.writerow([
            completion.date.isoformat(),
            titles.get(completion.goal_id, MISSING_GOAL_TITLE),
            completion.status.value,
            completion.note or "",
            completion.exp_awarded,
        ])
        rows += 1

    logger.debug(f"Exported {rows} completions to CSV")
    return buffer.getvalue()
